"""리소스 원장 Core: 순수 Python, DB 무관"""

from .models import (
    ATTRIBUTE_NAMES,
    Character,
    CombatRewards,
    Requirement,
    RequirementType,
    ResourceType,
    SpendResult,
    VitalsSnapshot,
)
from .ledger import ResourceLedger
from .presets import CHARACTER_CLASSES, base_stats_for_class, create_character

__all__ = [
    "ATTRIBUTE_NAMES",
    "Character",
    "CombatRewards",
    "Requirement",
    "RequirementType",
    "ResourceType",
    "SpendResult",
    "VitalsSnapshot",
    "ResourceLedger",
    "CHARACTER_CLASSES",
    "base_stats_for_class",
    "create_character",
]
