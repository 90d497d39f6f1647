"""탐색 시스템 Core"""

from .resolver import (
    Band,
    band_widths,
    ExplorationOutcome,
    OutcomeType,
    can_explore,
    clamp_danger_level,
    explore,
    resolve_band,
)
from .objects import InteractionResult, LocationObject, interact_with_object

__all__ = [
    "Band",
    "band_widths",
    "ExplorationOutcome",
    "OutcomeType",
    "can_explore",
    "clamp_danger_level",
    "explore",
    "resolve_band",
    "InteractionResult",
    "LocationObject",
    "interact_with_object",
]
