"""JournalRecorder: EventBus 이벤트를 저널 서술로 기록

엔진은 저널을 직접 건드리지 않는다. 서술은 이 구독자가 전담한다.
"""

import logging

from src.core.event_bus import EventBus, GameEvent
from src.core.event_types import EventTypes
from src.core.journal.journal import Journal, JournalCategory

logger = logging.getLogger(__name__)

# 탐색 결과 유형 → 저널 분류
_OUTCOME_CATEGORY: dict[str, JournalCategory] = {
    "enemy": JournalCategory.COMBAT,
    "item": JournalCategory.ITEM,
    "resource": JournalCategory.ITEM,
    "place": JournalCategory.LOCATION,
    "nothing": JournalCategory.SYSTEM,
}


class JournalRecorder:
    """저널 기록 구독자"""

    def __init__(self, journal: Journal, event_bus: EventBus):
        self._journal = journal
        self._bus = event_bus
        self._register_event_handlers()

    @property
    def journal(self) -> Journal:
        return self._journal

    def _register_event_handlers(self) -> None:
        self._bus.subscribe(EventTypes.EXPLORATION_STARTED, self._on_exploration_started)
        self._bus.subscribe(EventTypes.EXPLORATION_RESOLVED, self._on_exploration_resolved)
        self._bus.subscribe(EventTypes.OBJECT_INTERACTED, self._on_object_interacted)
        self._bus.subscribe(EventTypes.COMBAT_ENDED, self._on_combat_ended)
        self._bus.subscribe(EventTypes.LEVEL_UP, self._on_level_up)
        self._bus.subscribe(EventTypes.DEFEAT_RECOVERED, self._on_defeat_recovered)
        self._bus.subscribe(EventTypes.TRAVEL_STARTED, self._on_travel_started)
        self._bus.subscribe(EventTypes.TRAVEL_COMPLETED, self._on_travel_completed)
        self._bus.subscribe(EventTypes.TRAVEL_CANCELLED, self._on_travel_cancelled)
        self._bus.subscribe(EventTypes.TRAVEL_REJECTED, self._on_travel_rejected)

    # === 탐색 ===

    def _on_exploration_started(self, event: GameEvent) -> None:
        name = event.data.get("location_name") or event.data.get("location_id")
        self._journal.append(f"You explore {name}", JournalCategory.LOCATION)

    def _on_exploration_resolved(self, event: GameEvent) -> None:
        outcome_type = event.data.get("type", "nothing")
        if event.data.get("reason") == "insufficient stamina":
            self._journal.append(
                "You are too tired to explore. Rest for a while.",
                JournalCategory.SYSTEM,
            )
            return
        category = _OUTCOME_CATEGORY.get(outcome_type, JournalCategory.SYSTEM)
        self._journal.append(event.data.get("message", ""), category)

    def _on_object_interacted(self, event: GameEvent) -> None:
        if event.data.get("kind") == "npc":
            self._journal.append(
                f"You met {event.data.get('name')}", JournalCategory.LOCATION
            )

    # === 전투 ===

    def _on_combat_ended(self, event: GameEvent) -> None:
        status = event.data.get("status")
        enemy = event.data.get("enemy_name", "the enemy")

        if status == "victory":
            self._journal.append(
                f"You won the battle and gained {event.data.get('experience', 0)} "
                f"experience and {event.data.get('gold', 0)} gold!",
                JournalCategory.COMBAT,
            )
            items = event.data.get("items") or []
            if items:
                self._journal.append(
                    f"Items obtained: {', '.join(items)}", JournalCategory.ITEM
                )
        elif status == "defeat":
            self._journal.append(
                "You lost the battle and fell unconscious...", JournalCategory.COMBAT
            )
        elif status == "fled":
            self._journal.append(f"You fled from {enemy}", JournalCategory.COMBAT)

    def _on_level_up(self, event: GameEvent) -> None:
        self._journal.append(
            f"Level up! You reached level {event.data.get('level')}",
            JournalCategory.SYSTEM,
        )

    def _on_defeat_recovered(self, event: GameEvent) -> None:
        self._journal.append(
            "You came to and can continue your adventure, but be more careful...",
            JournalCategory.SYSTEM,
        )

    # === 이동 ===

    def _on_travel_started(self, event: GameEvent) -> None:
        self._journal.append(
            f"You set off for {event.data.get('to_name') or event.data.get('to_id')} "
            f"({event.data.get('travel_time')}s)",
            JournalCategory.LOCATION,
        )

    def _on_travel_completed(self, event: GameEvent) -> None:
        self._journal.append(
            f"You arrived at {event.data.get('to_name') or event.data.get('to_id')}",
            JournalCategory.LOCATION,
        )

    def _on_travel_cancelled(self, event: GameEvent) -> None:
        self._journal.append(
            f"Travel to {event.data.get('to_name') or event.data.get('to_id')} was cancelled",
            JournalCategory.SYSTEM,
        )

    def _on_travel_rejected(self, event: GameEvent) -> None:
        self._journal.append(
            f"Could not travel to the location: {event.data.get('reason')}",
            JournalCategory.ERROR,
        )
