"""직업별 초기 능력치

백엔드 캐릭터 생성 시 부여되는 기본값과 동일.
"""

from __future__ import annotations

import logging

from .models import ATTRIBUTE_NAMES, Character

logger = logging.getLogger(__name__)

# (strength, agility, intelligence, speed, vitality, luck, charisma,
#  wisdom, dexterity, constitution, health, mana, stamina)
_CLASS_TABLE: dict[str, tuple[int, ...]] = {
    "paladin": (7, 4, 6, 8, 8, 5, 7, 7, 4, 7, 120, 100, 90),
    "berserker": (9, 6, 2, 10, 8, 3, 3, 2, 6, 9, 140, 40, 120),
    "crossbowman": (5, 8, 5, 12, 5, 6, 4, 5, 9, 5, 100, 70, 110),
    "elementalist": (3, 5, 9, 9, 4, 5, 6, 8, 6, 4, 90, 140, 80),
    "necromancer": (2, 4, 10, 7, 3, 5, 4, 9, 4, 3, 80, 150, 70),
    "priest": (3, 3, 8, 8, 5, 6, 8, 10, 3, 4, 95, 130, 80),
    "warrior": (8, 5, 3, 9, 9, 4, 3, 2, 5, 8, 120, 50, 100),
    "mage": (2, 4, 10, 8, 3, 5, 6, 9, 4, 3, 80, 150, 70),
    "rogue": (4, 10, 6, 14, 4, 8, 5, 4, 9, 4, 90, 80, 110),
    "default": (5, 5, 5, 10, 5, 5, 5, 5, 5, 5, 100, 100, 100),
}

STARTING_EXP_TO_NEXT_LEVEL = 100

CHARACTER_CLASSES: tuple[str, ...] = tuple(k for k in _CLASS_TABLE if k != "default")


def base_stats_for_class(character_class: str) -> dict[str, int]:
    """직업 기본 능력치. 알 수 없는 직업은 default."""
    row = _CLASS_TABLE.get(character_class)
    if row is None:
        logger.debug("Unknown class %r, using default stats", character_class)
        row = _CLASS_TABLE["default"]

    (strength, agility, intelligence, speed, vitality, luck, charisma,
     wisdom, dexterity, constitution, health, mana, stamina) = row
    return {
        "strength": strength,
        "agility": agility,
        "intelligence": intelligence,
        "speed": speed,
        "vitality": vitality,
        "luck": luck,
        "charisma": charisma,
        "wisdom": wisdom,
        "dexterity": dexterity,
        "constitution": constitution,
        "health": health,
        "max_health": health,
        "mana": mana,
        "max_mana": mana,
        "stamina": stamina,
        "max_stamina": stamina,
        "exp_to_next_level": STARTING_EXP_TO_NEXT_LEVEL,
    }


def create_character(character_id: str, name: str, character_class: str) -> Character:
    """레벨 1 캐릭터 생성"""
    stats = base_stats_for_class(character_class)
    return Character(
        character_id=character_id,
        name=name,
        character_class=character_class if character_class in _CLASS_TABLE else "default",
        level=1,
        experience=0,
        experience_to_next_level=stats["exp_to_next_level"],
        health=stats["health"],
        max_health=stats["max_health"],
        mana=stats["mana"],
        max_mana=stats["max_mana"],
        stamina=stats["stamina"],
        max_stamina=stats["max_stamina"],
        attributes={attr: stats[attr] for attr in ATTRIBUTE_NAMES},
        speed=stats["speed"],
    )
