"""이벤트 유형 상수"""


class EventTypes:
    """이벤트 유형 문자열 상수"""

    # exploration
    EXPLORATION_STARTED = "exploration_started"
    EXPLORATION_RESOLVED = "exploration_resolved"
    OBJECT_INTERACTED = "object_interacted"

    # combat
    COMBAT_STARTED = "combat_started"
    COMBAT_ACTION_REJECTED = "combat_action_rejected"
    COMBAT_ACTION_RESOLVED = "combat_action_resolved"
    COMBAT_ENEMY_ACTED = "combat_enemy_acted"
    COMBAT_ENDED = "combat_ended"

    # travel
    TRAVEL_STARTED = "travel_started"
    TRAVEL_REJECTED = "travel_rejected"
    TRAVEL_COMPLETED = "travel_completed"
    TRAVEL_CANCELLED = "travel_cancelled"

    # ledger
    REWARDS_APPLIED = "rewards_applied"
    LEVEL_UP = "level_up"
    DEFEAT_RECOVERED = "defeat_recovered"
