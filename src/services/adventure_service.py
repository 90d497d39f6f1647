"""모험 Service: 캐릭터 1명에 대한 탐색/전투/이동 오케스트레이션

Service → Core 허용. 엔진은 서로를 모르며, 엔진 간 연결(탐색→전투 인계,
전투 보상→원장, 이동 완료→현재 위치 갱신)과 저널 서술 발행은 여기서만 한다.

같은 캐릭터에 대해 전투와 이동은 동시에 진행할 수 없다 (EngineBusyError).
"""

from __future__ import annotations

import logging
import random
from typing import Callable, Optional

from src.config import Settings, settings as default_settings
from src.core.combat.actions import CombatAction
from src.core.combat.engine import CombatSession
from src.core.combat.models import CombatResult, CombatStatus, Enemy, StepResult
from src.core.errors import EngineBusyError, InvalidActionError, LocationLockedError, NoPathError
from src.core.event_bus import EventBus, GameEvent
from src.core.event_types import EventTypes
from src.core.exploration.objects import InteractionResult, LocationObject, interact_with_object
from src.core.exploration.resolver import ExplorationOutcome, OutcomeType, explore
from src.core.journal.journal import Journal
from src.core.ledger.ledger import ResourceLedger
from src.core.ledger.models import Character
from src.core.location.access import reachable_destinations
from src.core.location.graph import LocationGraph, LocationNode
from src.core.travel.clock import Clock
from src.core.travel.planner import TravelPlan, plan_travel_for
from src.core.travel.progress import TickCallback, TravelSession, start_progress
from src.services.journal_recorder import JournalRecorder

logger = logging.getLogger(__name__)

SOURCE = "adventure_service"


class AdventureService:
    """탐색 / 전투 / 이동 세션 관리"""

    def __init__(
        self,
        character: Character,
        graph: LocationGraph,
        current_location_id: str,
        clock: Clock,
        enemy_catalogue: Optional[dict[str, list[Enemy]]] = None,
        journal: Optional[Journal] = None,
        event_bus: Optional[EventBus] = None,
        rng: Optional[random.Random] = None,
        config: Optional[Settings] = None,
    ):
        self._config = config or default_settings
        self._ledger = ResourceLedger(character)
        self._graph = graph
        self._clock = clock
        self._enemies = enemy_catalogue or {}
        self._bus = event_bus or EventBus()
        self._journal = journal or Journal(max_entries=self._config.JOURNAL_MAX_ENTRIES)
        self._recorder = JournalRecorder(self._journal, self._bus)
        self._rng = rng or random.Random(self._config.RNG_SEED)

        self.current_location_id = current_location_id
        self._combat: Optional[CombatSession] = None
        self._travel: Optional[TravelSession] = None

    # === 조회 ===

    @property
    def ledger(self) -> ResourceLedger:
        return self._ledger

    @property
    def journal(self) -> Journal:
        return self._journal

    @property
    def event_bus(self) -> EventBus:
        return self._bus

    @property
    def combat(self) -> Optional[CombatSession]:
        return self._combat

    @property
    def travel(self) -> Optional[TravelSession]:
        return self._travel

    @property
    def in_combat(self) -> bool:
        return self._combat is not None and not self._combat.is_over

    @property
    def is_travelling(self) -> bool:
        return self._travel is not None and self._travel.is_running

    def current_location(self) -> Optional[LocationNode]:
        return self._graph.get_node(self.current_location_id)

    def destinations(self) -> list[LocationNode]:
        return reachable_destinations(self._graph, self.current_location_id, self._ledger)

    # === 내부 ===

    def _emit(self, event_type: str, data: dict) -> None:
        self._bus.emit(GameEvent(event_type=event_type, data=data, source=SOURCE))

    def _ensure_idle(self, activity: str) -> None:
        if self.in_combat:
            raise EngineBusyError(f"Cannot {activity} during combat")
        if self.is_travelling:
            raise EngineBusyError(f"Cannot {activity} while travelling")

    def _location_name(self, location_id: str) -> str:
        node = self._graph.get_node(location_id)
        return node.name if node is not None and node.name else location_id

    # === 탐색 ===

    def explore(self, auto_engage: bool = True) -> ExplorationOutcome:
        """현재 위치 탐색. 적 조우 시 auto_engage 이면 전투를 바로 시작한다."""
        self._ensure_idle("explore")
        node = self.current_location()
        danger = node.danger_level if node is not None else 1
        catalogue = self._enemies.get(self.current_location_id, [])

        try:
            self._emit(
                EventTypes.EXPLORATION_STARTED,
                {
                    "location_id": self.current_location_id,
                    "location_name": self._location_name(self.current_location_id),
                },
            )
            outcome = explore(
                self._ledger,
                danger,
                catalogue,
                stamina_cost=self._config.EXPLORATION_STAMINA_COST,
                rng=self._rng,
            )
            self._emit(
                EventTypes.EXPLORATION_RESOLVED,
                {
                    "location_id": self.current_location_id,
                    "type": outcome.type.value,
                    "message": outcome.message,
                    "value": outcome.value,
                    "reason": outcome.reason,
                    "enemy_id": outcome.enemy.enemy_id if outcome.enemy else None,
                },
            )
        finally:
            self._bus.reset_chain()

        if outcome.type == OutcomeType.ENEMY and auto_engage and outcome.enemy is not None:
            self.start_combat(outcome.enemy)
        return outcome

    def interact(self, obj: LocationObject) -> InteractionResult:
        """위치 오브젝트 상호작용. 몬스터는 카탈로그 원형 우선, 없으면 기본 원형."""
        self._ensure_idle("interact")
        result = interact_with_object(obj)
        try:
            self._emit(
                EventTypes.OBJECT_INTERACTED,
                {"object_id": obj.object_id, "name": obj.name, "kind": result.kind},
            )
        finally:
            self._bus.reset_chain()

        if result.kind == "combat" and result.enemy is not None:
            known = {
                e.enemy_id: e for e in self._enemies.get(self.current_location_id, [])
            }
            self.start_combat(known.get(obj.object_id, result.enemy))
        return result

    # === 전투 ===

    def start_combat(self, enemy: Enemy) -> CombatSession:
        self._ensure_idle("start combat")
        self._combat = CombatSession(self._ledger.snapshot(), enemy, rng=self._rng)
        try:
            self._emit(
                EventTypes.COMBAT_STARTED,
                {"enemy_id": enemy.enemy_id, "enemy_name": enemy.name},
            )
        finally:
            self._bus.reset_chain()
        return self._combat

    def combat_action(self, action: CombatAction | str) -> StepResult:
        """플레이어 행동 1회 (+ 적 턴). 전투가 끝나면 결과를 원장에 반영한다."""
        if self._combat is None or self._combat.is_over:
            raise InvalidActionError("No active combat")

        before_round = self._combat.state.round
        try:
            result = self._combat.act(action)
            if not result.accepted:
                self._emit(
                    EventTypes.COMBAT_ACTION_REJECTED,
                    {"action": CombatAction(action).value, "resource": result.insufficient},
                )
                return result

            self._emit(
                EventTypes.COMBAT_ACTION_RESOLVED,
                {
                    "action": CombatAction(action).value,
                    "damage": result.damage_dealt,
                    "healed": result.healed,
                    "fled": result.fled,
                    "enemy_health": result.state.enemy.health,
                },
            )
            if (
                result.state.round > before_round
                or result.state.status == CombatStatus.DEFEAT
            ):
                self._emit(
                    EventTypes.COMBAT_ENEMY_ACTED,
                    {
                        "enemy_id": result.state.enemy.enemy_id,
                        "damage": result.state.enemy.damage,
                        "player_health": result.state.player.health,
                    },
                )
            if self._combat.is_over:
                self._finish_combat(self._combat.result())
        finally:
            self._bus.reset_chain()
        return result

    def _finish_combat(self, result: CombatResult) -> None:
        ledger = self._ledger
        logger.info(
            "Combat finished: enemy=%s, status=%s, rounds=%d",
            result.enemy_id,
            result.status.value,
            result.rounds,
        )
        ledger.sync_vitals(result.final_health, result.final_mana, result.final_stamina)

        rewards = result.rewards
        self._emit(
            EventTypes.COMBAT_ENDED,
            {
                "status": result.status.value,
                "enemy_id": result.enemy_id,
                "enemy_name": result.enemy_name,
                "rounds": result.rounds,
                "experience": rewards.experience if rewards else 0,
                "gold": rewards.gold if rewards else 0,
                "items": list(rewards.items) if rewards else [],
            },
        )

        if result.status == CombatStatus.VICTORY and rewards is not None:
            leveled = ledger.apply_combat_rewards(rewards)
            self._emit(
                EventTypes.REWARDS_APPLIED,
                {
                    "experience": ledger.character.experience,
                    "gold": ledger.character.gold,
                    "level": ledger.character.level,
                },
            )
            if leveled:
                self._emit(
                    EventTypes.LEVEL_UP,
                    {
                        "level": ledger.character.level,
                        "next": ledger.character.experience_to_next_level,
                    },
                )
        elif result.status == CombatStatus.DEFEAT:
            recovered = ledger.apply_defeat_recovery(self._config.DEFEAT_RECOVERY_RATIO)
            self._emit(EventTypes.DEFEAT_RECOVERED, {"health": recovered})

    # === 이동 ===

    def plan(self, to_id: str, allow_missing_edge: bool = False) -> TravelPlan:
        """allow_missing_edge 이면 연결이 없을 때 DEFAULT_TRAVEL_TIME 으로 대체"""
        return plan_travel_for(
            self._ledger,
            self.current_location_id,
            to_id,
            self._graph,
            default_travel_time=(
                self._config.DEFAULT_TRAVEL_TIME if allow_missing_edge else None
            ),
            min_time=self._config.TRAVEL_MIN_TIME,
        )

    def start_travel(
        self,
        to_id: str,
        on_tick: Optional[TickCallback] = None,
        on_arrive: Optional[Callable[[str], None]] = None,
        allow_missing_edge: bool = False,
    ) -> TravelSession:
        """이동 시작. 경로/조건 실패 시 타이머를 만들기 전에 예외.

        on_arrive(to_id) 는 완료 시 1회 호출: 외부(백엔드) 이동 확정 지점.
        """
        self._ensure_idle("travel")
        try:
            plan = self.plan(to_id, allow_missing_edge)
        except (NoPathError, LocationLockedError) as e:
            try:
                self._emit(EventTypes.TRAVEL_REJECTED, {"to_id": to_id, "reason": str(e)})
            finally:
                self._bus.reset_chain()
            raise

        def _tick(progress: float, remaining: float) -> None:
            if on_tick is not None:
                on_tick(progress, remaining)

        def _complete() -> None:
            self.current_location_id = plan.to_id
            try:
                self._emit(
                    EventTypes.TRAVEL_COMPLETED,
                    {"to_id": plan.to_id, "to_name": self._location_name(plan.to_id)},
                )
            finally:
                self._bus.reset_chain()
            if on_arrive is not None:
                on_arrive(plan.to_id)

        def _cancelled() -> None:
            self._emit(
                EventTypes.TRAVEL_CANCELLED,
                {"to_id": plan.to_id, "to_name": self._location_name(plan.to_id)},
            )

        self._travel = start_progress(
            plan.effective_travel_time,
            _tick,
            _complete,
            self._clock,
            on_cancel=_cancelled,
            from_id=plan.from_id,
            to_id=plan.to_id,
            base_travel_time=plan.base_travel_time,
            tick_interval_ms=self._config.TRAVEL_TICK_INTERVAL_MS,
            complete_delay_ms=self._config.TRAVEL_COMPLETE_DELAY_MS,
        )
        try:
            self._emit(
                EventTypes.TRAVEL_STARTED,
                {
                    "from_id": plan.from_id,
                    "to_id": plan.to_id,
                    "to_name": self._location_name(plan.to_id),
                    "travel_time": plan.effective_travel_time,
                    "saved_time": plan.saved_time,
                },
            )
        finally:
            self._bus.reset_chain()
        return self._travel

    def cancel_travel(self) -> bool:
        if self._travel is None:
            return False
        try:
            return self._travel.cancel()
        finally:
            self._bus.reset_chain()


# === 테스트 코드 ===

if __name__ == "__main__":
    from pathlib import Path

    from src.core.ledger.presets import create_character
    from src.core.logging import setup_logging
    from src.core.travel.clock import ManualClock
    from src.services.snapshot import load_world

    setup_logging(default_settings.LOG_LEVEL)

    world = load_world(Path(__file__).resolve().parent.parent / "data" / "sample_world.json")
    clock = ManualClock()
    service = AdventureService(
        create_character("demo", "Wanderer", "warrior"),
        world.to_graph(),
        "town",
        clock,
        enemy_catalogue=world.enemy_catalogue(),
        rng=random.Random(7),
    )

    logger.info("=== Travel to forest ===")
    service.start_travel(
        "forest", on_tick=lambda p, r: logger.info("  %.1f%% (%.1fs left)", p, r)
    )
    clock.run_until_idle()

    logger.info("=== Explore ===")
    for _ in range(5):
        outcome = service.explore()
        logger.info("  %s: %s", outcome.type.value, outcome.message)
        while service.in_combat:
            step_result = service.combat_action(CombatAction.BASIC_ATTACK)
            logger.info("  %s", step_result.message)
            if not step_result.accepted:
                break

    logger.info("=== Journal ===")
    for entry in reversed(service.journal.entries):
        logger.info("  [%s] %s", entry.category.value, entry.text)
