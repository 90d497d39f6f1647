"""위치 오브젝트 상호작용

몬스터 오브젝트는 기본 적 원형으로 전투를 넘긴다.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional

from src.core.combat.models import Enemy

# 오브젝트 ID 로 원형을 찾지 못했을 때 쓰는 기본 몬스터 능력치
DEFAULT_MONSTER_STATS: dict[str, int] = {
    "level": 1,
    "health": 100,
    "max_health": 100,
    "damage": 10,
    "defense": 5,
    "experience_reward": 50,
    "gold_reward": 25,
}


@dataclass(frozen=True)
class LocationObject:
    object_id: str
    name: str
    type: str  # "building"|"npc"|"monster"|"resource"|...
    image_url: Optional[str] = None


@dataclass(frozen=True)
class InteractionResult:
    success: bool
    message: str
    kind: str  # "building"|"npc"|"combat"|"resource"|"unknown"
    data: dict = field(default_factory=dict)
    enemy: Optional[Enemy] = None


def interact_with_object(obj: LocationObject) -> InteractionResult:
    if obj.type == "building":
        return InteractionResult(True, f"You enter {obj.name}", "building", {"name": obj.name})

    if obj.type == "npc":
        return InteractionResult(
            True,
            f"You start a conversation with {obj.name}",
            "npc",
            {"name": obj.name, "id": obj.object_id},
        )

    if obj.type == "monster":
        enemy = Enemy(
            enemy_id=obj.object_id,
            name=obj.name,
            image=obj.image_url,
            **DEFAULT_MONSTER_STATS,
        )
        return InteractionResult(
            True, f"You attack {obj.name}!", "combat", {"enemy_id": obj.object_id}, enemy=enemy
        )

    if obj.type == "resource":
        return InteractionResult(True, f"You gather {obj.name}", "resource", {"name": obj.name})

    return InteractionResult(True, f"You interact with {obj.name}", "unknown", {"name": obj.name})
