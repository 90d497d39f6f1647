"""백엔드 스냅샷 스키마: JSON payload 검증 후 Core dataclass 로 변환

필드명은 백엔드 응답 형식을 따른다 (exp_to_next_level, travel_time, chance 등).
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator

from src.core.combat.models import DropEntry, Enemy
from src.core.ledger.models import ATTRIBUTE_NAMES, Character, Requirement
from src.core.location.graph import LocationEdge, LocationGraph, LocationNode

logger = logging.getLogger(__name__)


def _to_str_id(value: Any) -> str:
    return str(value)


# === Character ===


class CharacterSnapshot(BaseModel):
    """캐릭터 스냅샷"""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    id: str
    name: str = ""
    character_class: str = Field("default", alias="class")
    level: int = Field(1, ge=1)
    experience: int = Field(0, ge=0)
    exp_to_next_level: int = Field(100, ge=1)

    health: int = Field(..., ge=0)
    max_health: int = Field(..., ge=0)
    mana: int = Field(..., ge=0)
    max_mana: int = Field(..., ge=0)
    stamina: int = Field(..., ge=0)
    max_stamina: int = Field(..., ge=0)

    strength: int = 5
    agility: int = 5
    intelligence: int = 5
    vitality: int = 5
    luck: int = 5
    charisma: int = 5
    wisdom: int = 5
    dexterity: int = 5
    constitution: int = 5
    speed: int = 10
    gold: int = Field(0, ge=0)

    @field_validator("id", mode="before")
    @classmethod
    def coerce_id(cls, value: Any) -> str:
        return _to_str_id(value)

    def to_character(self) -> Character:
        return Character(
            character_id=self.id,
            name=self.name,
            character_class=self.character_class,
            level=self.level,
            experience=self.experience,
            experience_to_next_level=self.exp_to_next_level,
            health=self.health,
            max_health=self.max_health,
            mana=self.mana,
            max_mana=self.max_mana,
            stamina=self.stamina,
            max_stamina=self.max_stamina,
            attributes={name: getattr(self, name) for name in ATTRIBUTE_NAMES},
            speed=self.speed,
            gold=self.gold,
        )


# === Location graph ===


class RequirementSnapshot(BaseModel):
    model_config = ConfigDict(extra="ignore")

    type: str
    value: int = 0
    parameter: Optional[str] = None
    description: Optional[str] = None

    def to_requirement(self) -> Requirement:
        return Requirement(
            type=self.type,
            value=self.value,
            parameter=self.parameter,
            description=self.description or "",
        )


class LocationSnapshot(BaseModel):
    model_config = ConfigDict(extra="ignore")

    id: str
    name: str = ""
    danger_level: int = Field(1, ge=1, le=5)
    region_id: Optional[str] = None
    is_accessible: bool = True
    requirements: list[RequirementSnapshot] = []

    @field_validator("id", mode="before")
    @classmethod
    def coerce_id(cls, value: Any) -> str:
        return _to_str_id(value)

    @field_validator("region_id", mode="before")
    @classmethod
    def coerce_region(cls, value: Any) -> Optional[str]:
        return None if value is None else str(value)

    def to_node(self) -> LocationNode:
        return LocationNode(
            location_id=self.id,
            name=self.name,
            danger_level=self.danger_level,
            region_id=self.region_id,
            requirements=tuple(r.to_requirement() for r in self.requirements),
            is_accessible=self.is_accessible,
        )


class ConnectionSnapshot(BaseModel):
    model_config = ConfigDict(extra="ignore")

    from_location_id: str
    to_location_id: str
    travel_time: int = Field(..., ge=0)
    is_bidirectional: bool = False

    @field_validator("from_location_id", "to_location_id", mode="before")
    @classmethod
    def coerce_ids(cls, value: Any) -> str:
        return _to_str_id(value)

    def to_edge(self) -> LocationEdge:
        return LocationEdge(
            from_id=self.from_location_id,
            to_id=self.to_location_id,
            travel_time=self.travel_time,
            bidirectional=self.is_bidirectional,
        )


class WorldSnapshot(BaseModel):
    """위치 + 연결 + 위치별 적 목록"""

    model_config = ConfigDict(extra="ignore")

    locations: list[LocationSnapshot] = []
    location_connections: list[ConnectionSnapshot] = []
    location_enemies: dict[str, list["EnemySnapshot"]] = {}

    def to_graph(self) -> LocationGraph:
        return LocationGraph.build(
            (loc.to_node() for loc in self.locations),
            (conn.to_edge() for conn in self.location_connections),
        )

    def enemy_catalogue(self) -> dict[str, list[Enemy]]:
        return {
            str(location_id): [e.to_enemy() for e in enemies]
            for location_id, enemies in self.location_enemies.items()
        }


# === Enemy ===


class DropSnapshot(BaseModel):
    model_config = ConfigDict(extra="ignore")

    id: str
    name: str
    chance: float = Field(..., ge=0.0, le=1.0)

    @field_validator("id", mode="before")
    @classmethod
    def coerce_id(cls, value: Any) -> str:
        return _to_str_id(value)


class EnemySnapshot(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    id: str
    name: str
    image: Optional[str] = None
    level: int = 1
    health: int = Field(..., ge=0)
    max_health: int = Field(..., ge=0, alias="maxHealth")
    damage: int = Field(..., ge=0)
    defense: int = 0
    experience: int = Field(0, ge=0)
    gold: int = Field(0, ge=0)
    drops: list[DropSnapshot] = []

    @field_validator("id", mode="before")
    @classmethod
    def coerce_id(cls, value: Any) -> str:
        return _to_str_id(value)

    def to_enemy(self) -> Enemy:
        return Enemy(
            enemy_id=self.id,
            name=self.name,
            level=self.level,
            health=self.health,
            max_health=self.max_health,
            damage=self.damage,
            defense=self.defense,
            experience_reward=self.experience,
            gold_reward=self.gold,
            drop_table=tuple(
                DropEntry(item_id=d.id, name=d.name, drop_chance=d.chance)
                for d in self.drops
            ),
            image=self.image,
        )


WorldSnapshot.model_rebuild()


def load_world(source: Union[str, Path, dict]) -> WorldSnapshot:
    """dict 또는 JSON 파일 경로에서 월드 스냅샷 로드"""
    if isinstance(source, dict):
        data = source
    else:
        with open(source, "r", encoding="utf-8") as f:
            data = json.load(f)
    world = WorldSnapshot.model_validate(data)
    logger.info(
        "World snapshot loaded: %d locations, %d connections",
        len(world.locations),
        len(world.location_connections),
    )
    return world


def load_character(data: dict) -> Character:
    return CharacterSnapshot.model_validate(data).to_character()
