"""리소스 원장 도메인 모델 (DB 무관)"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional


class ResourceType(str, Enum):
    HEALTH = "health"
    MANA = "mana"
    STAMINA = "stamina"


class RequirementType(str, Enum):
    LEVEL = "level"
    QUEST = "quest"
    SKILL = "skill"
    GOLD = "gold"
    ITEM = "item"
    REPUTATION = "reputation"
    ATTRIBUTE = "attribute"


# 캐릭터 속성 이름 (백엔드 컬럼명과 동일)
ATTRIBUTE_NAMES: tuple[str, ...] = (
    "strength",
    "agility",
    "intelligence",
    "vitality",
    "luck",
    "charisma",
    "wisdom",
    "dexterity",
    "constitution",
)


@dataclass
class Character:
    """캐릭터 상태. 외부(백엔드)에서 로드되어 Ledger를 통해서만 변경된다."""

    character_id: str
    name: str = ""
    character_class: str = "default"

    # 성장
    level: int = 1
    experience: int = 0
    experience_to_next_level: int = 100

    # 소모 자원 (current ∈ [0, max])
    health: int = 100
    max_health: int = 100
    mana: int = 100
    max_mana: int = 100
    stamina: int = 100
    max_stamina: int = 100

    # 속성
    attributes: dict[str, int] = field(
        default_factory=lambda: {name: 5 for name in ATTRIBUTE_NAMES}
    )
    speed: int = 10
    gold: int = 0

    def get_attribute(self, name: str) -> int:
        """속성 조회. speed/level/gold 도 속성처럼 조회 가능."""
        if name in self.attributes:
            return self.attributes[name]
        if name in ("speed", "level", "gold"):
            return getattr(self, name)
        return 0


@dataclass(frozen=True)
class VitalsSnapshot:
    """전투 시작 시점의 자원 스냅샷"""

    health: int
    max_health: int
    mana: int
    max_mana: int
    stamina: int
    max_stamina: int
    strength: int
    agility: int
    intelligence: int


@dataclass(frozen=True)
class Requirement:
    """위치 접근 조건"""

    type: str  # RequirementType 값 또는 알 수 없는 문자열
    value: int
    parameter: Optional[str] = None  # attribute 이름, quest id 등
    description: str = ""

    def describe(self) -> str:
        if self.description:
            return self.description
        if self.type == RequirementType.LEVEL:
            return f"Requires level {self.value}"
        if self.type == RequirementType.ATTRIBUTE:
            return f"Requires {self.parameter} {self.value}"
        if self.type == RequirementType.GOLD:
            return f"Requires {self.value} gold"
        return "Unknown requirement"


@dataclass(frozen=True)
class CombatRewards:
    """전투 보상 묶음"""

    experience: int = 0
    gold: int = 0
    items: tuple[str, ...] = ()


@dataclass(frozen=True)
class SpendResult:
    """spend() 결과. ok=False 이면 InsufficientResource 신호."""

    ok: bool
    resource: ResourceType
    amount: int
    remaining: int

    def __bool__(self) -> bool:
        return self.ok

    @property
    def insufficient(self) -> bool:
        return not self.ok
