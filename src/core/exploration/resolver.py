"""Exploration Resolver: 가중치 대역 기반 탐색 판정

1. 스태미나 부족 → Nothing (판정 없음, 자원 손실 없음)
2. 스태미나 소모 후 r ∈ [0,1) 1회 추첨
3. 대역: encounter(위험도×0.1) → item → resource → special → nothing
   (위험도 3 이상은 encounter 이후 구간을 35:25:15:15 비율로 압축)
4. encounter 인데 적 목록이 비어 있으면 item 으로 대체
"""

from __future__ import annotations

import logging
import random
from dataclasses import dataclass
from enum import Enum
from typing import Optional, Sequence, Union

from src.core.combat.models import Enemy
from src.core.ledger.ledger import ResourceLedger
from src.core.ledger.models import ResourceType
from .tables import (
    DEFAULT_STAMINA_COST,
    ENCOUNTER_WIDTH_PER_DANGER,
    FOUND_ITEMS,
    FOUND_RESOURCES,
    INSUFFICIENT_STAMINA_MESSAGE,
    ITEM_WIDTH,
    MAX_DANGER_LEVEL,
    MIN_DANGER_LEVEL,
    NOTHING_MESSAGES,
    NOTHING_WIDTH,
    RESOURCE_WIDTH,
    SPECIAL_PLACE_WIDTH,
    SPECIAL_PLACES,
)

logger = logging.getLogger(__name__)


class OutcomeType(str, Enum):
    ENEMY = "enemy"
    ITEM = "item"
    RESOURCE = "resource"
    PLACE = "place"
    NOTHING = "nothing"


class Band(str, Enum):
    ENCOUNTER = "encounter"
    ITEM = "item"
    RESOURCE = "resource"
    SPECIAL = "special"
    NOTHING = "nothing"


@dataclass(frozen=True)
class ExplorationOutcome:
    """탐색 결과 (tagged variant). type 에 따라 enemy 또는 value 가 채워진다."""

    type: OutcomeType
    message: str
    enemy: Optional[Enemy] = None
    value: Optional[str] = None  # 아이템/자원/장소 이름
    reason: Optional[str] = None  # NOTHING 사유 ("insufficient stamina" 등)
    roll: Optional[float] = None
    stamina_spent: int = 0

    @property
    def is_encounter(self) -> bool:
        return self.type == OutcomeType.ENEMY


def clamp_danger_level(danger_level: int) -> int:
    return max(MIN_DANGER_LEVEL, min(MAX_DANGER_LEVEL, danger_level))


def band_widths(danger_level: int) -> list[tuple[Band, float]]:
    """대역별 폭. 합계는 항상 1.

    encounter 폭은 위험도에 비례한다. item/resource/special 은 표의 폭 그대로
    쓰고 남는 구간이 nothing 이다. encounter 와 표의 폭 합이 1 을 넘으면
    (위험도 3 이상) encounter 이후 구간을 item:resource:special:nothing
    = 35:25:15:15 비율로 압축한다.
    """
    encounter = clamp_danger_level(danger_level) * ENCOUNTER_WIDTH_PER_DANGER
    remainder = 1.0 - encounter
    fixed = ITEM_WIDTH + RESOURCE_WIDTH + SPECIAL_PLACE_WIDTH
    if fixed <= remainder:
        return [
            (Band.ENCOUNTER, encounter),
            (Band.ITEM, ITEM_WIDTH),
            (Band.RESOURCE, RESOURCE_WIDTH),
            (Band.SPECIAL, SPECIAL_PLACE_WIDTH),
            (Band.NOTHING, remainder - fixed),
        ]

    total = fixed + NOTHING_WIDTH
    return [
        (Band.ENCOUNTER, encounter),
        (Band.ITEM, remainder * ITEM_WIDTH / total),
        (Band.RESOURCE, remainder * RESOURCE_WIDTH / total),
        (Band.SPECIAL, remainder * SPECIAL_PLACE_WIDTH / total),
        (Band.NOTHING, remainder * NOTHING_WIDTH / total),
    ]


def resolve_band(roll: float, danger_level: int) -> Band:
    """누적 임계치 비교로 roll 이 속한 대역 결정"""
    threshold = 0.0
    for band, width in band_widths(danger_level)[:-1]:
        threshold += width
        if roll < threshold:
            return band
    return Band.NOTHING


def can_explore(ledger: ResourceLedger, stamina_cost: int = DEFAULT_STAMINA_COST) -> bool:
    return ledger.can_spend(ResourceType.STAMINA, stamina_cost)


def _item_outcome(rng: random.Random, roll: float, cost: int) -> ExplorationOutcome:
    item = rng.choice(FOUND_ITEMS)
    return ExplorationOutcome(
        type=OutcomeType.ITEM,
        message=f"You found an item: {item}",
        value=item,
        roll=roll,
        stamina_spent=cost,
    )


def explore(
    ledger: ResourceLedger,
    danger_level: int,
    enemy_catalogue: Sequence[Enemy] = (),
    stamina_cost: int = DEFAULT_STAMINA_COST,
    rng: Union[random.Random, None] = None,
) -> ExplorationOutcome:
    """위치 1회 탐색. 스태미나 소모 외의 원장/저널 변경은 없다."""
    rng = rng or random.Random()

    if not ledger.spend(ResourceType.STAMINA, stamina_cost):
        logger.info("Exploration rejected: insufficient stamina")
        return ExplorationOutcome(
            type=OutcomeType.NOTHING,
            message=INSUFFICIENT_STAMINA_MESSAGE,
            reason="insufficient stamina",
        )

    roll = rng.random()
    band = resolve_band(roll, danger_level)
    logger.debug("Exploration roll=%.4f danger=%d band=%s", roll, danger_level, band.value)

    if band == Band.ENCOUNTER:
        if enemy_catalogue:
            enemy = rng.choice(list(enemy_catalogue))
            return ExplorationOutcome(
                type=OutcomeType.ENEMY,
                message=f"You encountered {enemy.name}!",
                enemy=enemy,
                roll=roll,
                stamina_spent=stamina_cost,
            )
        # 적이 없는 위치 → 아이템으로 대체
        return _item_outcome(rng, roll, stamina_cost)

    if band == Band.ITEM:
        return _item_outcome(rng, roll, stamina_cost)

    if band == Band.RESOURCE:
        resource = rng.choice(FOUND_RESOURCES)
        return ExplorationOutcome(
            type=OutcomeType.RESOURCE,
            message=f"You discovered a resource: {resource}",
            value=resource,
            roll=roll,
            stamina_spent=stamina_cost,
        )

    if band == Band.SPECIAL:
        place = rng.choice(SPECIAL_PLACES)
        return ExplorationOutcome(
            type=OutcomeType.PLACE,
            message=f"You discovered {place}",
            value=place,
            roll=roll,
            stamina_spent=stamina_cost,
        )

    return ExplorationOutcome(
        type=OutcomeType.NOTHING,
        message=rng.choice(NOTHING_MESSAGES),
        reason="nothing found",
        roll=roll,
        stamina_spent=stamina_cost,
    )
