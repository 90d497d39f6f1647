"""전투 시스템 Core: 순수 Python, DB 무관"""

from .actions import (
    ACTION_TABLE,
    ActionKind,
    ActionSpec,
    CombatAction,
    action_power,
    flee_chance,
)
from .models import (
    CombatLogEntry,
    CombatResult,
    CombatState,
    CombatStatus,
    DropEntry,
    Enemy,
    LogKind,
    StepResult,
    Turn,
)
from .engine import (
    CombatSession,
    available_actions,
    build_result,
    enemy_turn,
    player_action,
    resolve_loot,
    start_combat,
    step,
)

__all__ = [
    "ACTION_TABLE",
    "ActionKind",
    "ActionSpec",
    "CombatAction",
    "action_power",
    "flee_chance",
    "CombatLogEntry",
    "CombatResult",
    "CombatState",
    "CombatStatus",
    "DropEntry",
    "Enemy",
    "LogKind",
    "StepResult",
    "Turn",
    "CombatSession",
    "available_actions",
    "build_result",
    "enemy_turn",
    "player_action",
    "resolve_loot",
    "start_combat",
    "step",
]
