"""플레이어 전투 행동 테이블"""

from __future__ import annotations

import math
from dataclasses import dataclass
from enum import Enum
from typing import Optional

from src.core.ledger.models import ResourceType, VitalsSnapshot


class ActionKind(str, Enum):
    ATTACK = "attack"
    SPELL = "spell"
    HEAL = "heal"
    FLEE = "flee"


class CombatAction(str, Enum):
    BASIC_ATTACK = "basic-attack"
    HEAVY_ATTACK = "heavy-attack"
    FIREBALL = "fireball"
    HEAL = "healing"
    FLEE = "flee"


@dataclass(frozen=True)
class ActionSpec:
    action: CombatAction
    name: str
    kind: ActionKind
    resource: ResourceType
    cost: int
    attribute: Optional[str]  # 위력 기준 속성
    multiplier: float
    description: str


# === 도주 확률 ===
FLEE_BASE_CHANCE = 0.3
FLEE_AGILITY_BONUS = 0.02

ACTION_TABLE: dict[CombatAction, ActionSpec] = {
    CombatAction.BASIC_ATTACK: ActionSpec(
        action=CombatAction.BASIC_ATTACK,
        name="Basic Attack",
        kind=ActionKind.ATTACK,
        resource=ResourceType.STAMINA,
        cost=5,
        attribute="strength",
        multiplier=0.8,
        description="Weapon strike dealing physical damage",
    ),
    CombatAction.HEAVY_ATTACK: ActionSpec(
        action=CombatAction.HEAVY_ATTACK,
        name="Heavy Attack",
        kind=ActionKind.ATTACK,
        resource=ResourceType.STAMINA,
        cost=15,
        attribute="strength",
        multiplier=1.5,
        description="A powerful blow that costs more stamina",
    ),
    CombatAction.FIREBALL: ActionSpec(
        action=CombatAction.FIREBALL,
        name="Fireball",
        kind=ActionKind.SPELL,
        resource=ResourceType.MANA,
        cost=20,
        attribute="intelligence",
        multiplier=1.2,
        description="Fire magic scaled by intelligence",
    ),
    CombatAction.HEAL: ActionSpec(
        action=CombatAction.HEAL,
        name="Heal",
        kind=ActionKind.HEAL,
        resource=ResourceType.MANA,
        cost=25,
        attribute="intelligence",
        multiplier=0.8,
        description="Restores health based on intelligence",
    ),
    CombatAction.FLEE: ActionSpec(
        action=CombatAction.FLEE,
        name="Flee",
        kind=ActionKind.FLEE,
        resource=ResourceType.STAMINA,
        cost=10,
        attribute=None,
        multiplier=0.0,
        description="Try to escape; chance depends on agility",
    ),
}


def get_spec(action: CombatAction | str) -> ActionSpec:
    return ACTION_TABLE[CombatAction(action)]


def action_power(spec: ActionSpec, stats: VitalsSnapshot) -> int:
    """피해량 또는 회복량. floor(속성 × 배율)."""
    if spec.attribute is None:
        return 0
    return math.floor(getattr(stats, spec.attribute) * spec.multiplier)


def flee_chance(agility: int) -> float:
    return FLEE_BASE_CHANCE + agility * FLEE_AGILITY_BONUS


def resource_value(stats: VitalsSnapshot, resource: ResourceType) -> int:
    return getattr(stats, resource.value)


def is_affordable(spec: ActionSpec, stats: VitalsSnapshot) -> bool:
    return resource_value(stats, spec.resource) >= spec.cost
