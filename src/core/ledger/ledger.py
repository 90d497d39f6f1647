"""Resource Ledger: 캐릭터 자원의 유일한 변경 경로

모든 변경은 clamp 된다: current ∈ [0, max].
- spend: 부족하면 상태 불변, 실패 결과 반환
- restore / damage: 상한/하한 clamp
- apply_combat_rewards: 보상 1회당 레벨업 최대 1회 (초과 경험치 소멸)
"""

from __future__ import annotations

import logging
import math
from typing import Iterable, Union

from src.core.errors import InsufficientResourceError
from .models import (
    Character,
    CombatRewards,
    Requirement,
    RequirementType,
    ResourceType,
    SpendResult,
    VitalsSnapshot,
)

logger = logging.getLogger(__name__)

# === 레벨업 성장치 ===
LEVEL_UP_EXP_MULTIPLIER = 1.5
LEVEL_UP_HEALTH_GAIN = 10
LEVEL_UP_MANA_GAIN = 5
LEVEL_UP_STAMINA_GAIN = 5

# === 패배 회복 비율 (최대 체력 대비) ===
DEFEAT_RECOVERY_RATIO = 0.1

ResourceLike = Union[ResourceType, str]


def _as_resource(resource: ResourceLike) -> ResourceType:
    if isinstance(resource, ResourceType):
        return resource
    return ResourceType(resource)


class ResourceLedger:
    """캐릭터 1명에 대한 원장. 엔진들은 이 객체를 명시적으로 전달받는다."""

    def __init__(self, character: Character):
        self._character = character
        for resource in ResourceType:
            self._clamp(resource)

    @property
    def character(self) -> Character:
        return self._character

    # === 조회 ===

    def current(self, resource: ResourceLike) -> int:
        return getattr(self._character, _as_resource(resource).value)

    def maximum(self, resource: ResourceLike) -> int:
        return getattr(self._character, f"max_{_as_resource(resource).value}")

    def can_spend(self, resource: ResourceLike, amount: int) -> bool:
        return self.current(resource) >= amount

    # === 변경 ===

    def spend(self, resource: ResourceLike, amount: int) -> SpendResult:
        """current >= amount 일 때만 차감. 실패 시 상태 불변."""
        res = _as_resource(resource)
        available = self.current(res)
        if amount < 0 or available < amount:
            logger.debug(
                "Insufficient %s: required=%d, available=%d",
                res.value,
                amount,
                available,
            )
            return SpendResult(ok=False, resource=res, amount=amount, remaining=available)

        self._set(res, available - amount)
        return SpendResult(
            ok=True, resource=res, amount=amount, remaining=self.current(res)
        )

    def require(self, resource: ResourceLike, amount: int) -> SpendResult:
        """spend()의 예외 버전."""
        result = self.spend(resource, amount)
        if not result.ok:
            raise InsufficientResourceError(
                result.resource.value, amount, result.remaining
            )
        return result

    def restore(self, resource: ResourceLike, amount: int) -> int:
        """증가 (max clamp). amount <= 0 은 no-op. 실제 회복량 반환."""
        if amount <= 0:
            return 0
        res = _as_resource(resource)
        before = self.current(res)
        self._set(res, before + amount)
        return self.current(res) - before

    def damage(self, resource: ResourceLike, amount: int) -> int:
        """감소 (0 clamp). spend와 달리 부족해도 거절하지 않는다. 실제 감소량 반환."""
        if amount <= 0:
            return 0
        res = _as_resource(resource)
        before = self.current(res)
        self._set(res, before - amount)
        return before - self.current(res)

    def restore_all(self) -> None:
        for resource in ResourceType:
            self._set(resource, self.maximum(resource))

    # === 성장 ===

    def apply_combat_rewards(self, rewards: CombatRewards) -> bool:
        """전투 보상 적용. 레벨업 발생 여부 반환.

        임계치 비교는 1회만: 2레벨분 경험치를 받아도 1레벨만 오르고
        초과분은 버려진다.
        """
        c = self._character
        c.gold += max(0, rewards.gold)
        c.experience += max(0, rewards.experience)

        logger.info(
            "Rewards applied to %s: exp=%d, gold=%d, items=%d",
            c.character_id,
            rewards.experience,
            rewards.gold,
            len(rewards.items),
        )

        if c.experience >= c.experience_to_next_level:
            self.level_up()
            return True
        return False

    def level_up(self) -> None:
        c = self._character
        c.level += 1
        c.experience = 0
        c.experience_to_next_level = math.floor(
            c.experience_to_next_level * LEVEL_UP_EXP_MULTIPLIER
        )

        c.max_health += LEVEL_UP_HEALTH_GAIN
        c.max_mana += LEVEL_UP_MANA_GAIN
        c.max_stamina += LEVEL_UP_STAMINA_GAIN
        self.restore_all()

        logger.info(
            "Level up: %s → %d (next=%d)",
            c.character_id,
            c.level,
            c.experience_to_next_level,
        )

    def apply_defeat_recovery(self, ratio: float = DEFEAT_RECOVERY_RATIO) -> int:
        """패배 후 최소 체력 회복. 체력이 0일 때만 ceil(max × ratio) 회복."""
        if self._character.health > 0:
            return 0
        amount = math.ceil(self._character.max_health * ratio)
        return self.restore(ResourceType.HEALTH, amount)

    # === 조건 판정 ===

    def meets_requirement(self, requirement: Requirement) -> bool:
        """순수 판정. level / attribute / gold 만 지원, 나머지는 False."""
        c = self._character
        if requirement.type == RequirementType.LEVEL:
            return c.level >= requirement.value
        if requirement.type == RequirementType.ATTRIBUTE:
            if not requirement.parameter:
                return False
            return c.get_attribute(requirement.parameter) >= requirement.value
        if requirement.type == RequirementType.GOLD:
            return c.gold >= requirement.value

        logger.debug("Unsupported requirement type: %s", requirement.type)
        return False

    def meets_all(self, requirements: Iterable[Requirement]) -> bool:
        return all(self.meets_requirement(r) for r in requirements)

    def unmet_requirements(self, requirements: Iterable[Requirement]) -> list[Requirement]:
        return [r for r in requirements if not self.meets_requirement(r)]

    # === 스냅샷 ===

    def snapshot(self) -> VitalsSnapshot:
        c = self._character
        return VitalsSnapshot(
            health=c.health,
            max_health=c.max_health,
            mana=c.mana,
            max_mana=c.max_mana,
            stamina=c.stamina,
            max_stamina=c.max_stamina,
            strength=c.get_attribute("strength"),
            agility=c.get_attribute("agility"),
            intelligence=c.get_attribute("intelligence"),
        )

    def sync_vitals(self, health: int, mana: int, stamina: int) -> None:
        """전투 종료 후 세션 자원값을 원장에 반영 (clamp 적용)."""
        self._set(ResourceType.HEALTH, health)
        self._set(ResourceType.MANA, mana)
        self._set(ResourceType.STAMINA, stamina)

    # === 내부 ===

    def _set(self, resource: ResourceType, value: int) -> None:
        upper = self.maximum(resource)
        setattr(self._character, resource.value, max(0, min(upper, value)))

    def _clamp(self, resource: ResourceType) -> None:
        self._set(resource, self.current(resource))
