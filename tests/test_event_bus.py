"""EventBus 테스트"""

from src.core.event_bus import MAX_DEPTH, EventBus, GameEvent
from src.core.event_types import EventTypes

SOURCE = "adventure_service"


def _event(event_type: str, source: str = SOURCE, **data) -> GameEvent:
    return GameEvent(event_type=event_type, data=data, source=source)


class TestSubscribeEmit:
    def test_handler_receives_data(self):
        bus = EventBus()
        received = []
        bus.subscribe(EventTypes.COMBAT_ENDED, received.append)
        bus.emit(_event(EventTypes.COMBAT_ENDED, status="victory", enemy_id="wolf"))
        assert len(received) == 1
        assert received[0].data == {"status": "victory", "enemy_id": "wolf"}

    def test_handlers_called_in_subscription_order(self):
        bus = EventBus()
        order = []
        bus.subscribe(EventTypes.TRAVEL_COMPLETED, lambda e: order.append("journal"))
        bus.subscribe(EventTypes.TRAVEL_COMPLETED, lambda e: order.append("ui"))
        bus.emit(_event(EventTypes.TRAVEL_COMPLETED))
        assert order == ["journal", "ui"]

    def test_only_matching_type(self):
        bus = EventBus()
        received = []
        bus.subscribe(EventTypes.LEVEL_UP, received.append)
        bus.emit(_event(EventTypes.TRAVEL_STARTED))
        assert received == []

    def test_no_subscribers_is_fine(self):
        bus = EventBus()
        assert bus.emit(_event(EventTypes.EXPLORATION_STARTED)) is True

    def test_unsubscribe(self):
        bus = EventBus()
        received = []
        bus.subscribe(EventTypes.LEVEL_UP, received.append)
        bus.unsubscribe(EventTypes.LEVEL_UP, received.append)
        bus.emit(_event(EventTypes.LEVEL_UP, level=2))
        assert received == []

    def test_unsubscribe_unknown_handler_only_warns(self):
        bus = EventBus()
        bus.unsubscribe(EventTypes.LEVEL_UP, lambda e: None)
        assert bus.handler_count == 0


class TestDepthLimit:
    def test_relay_chain_stops_at_max_depth(self):
        bus = EventBus()
        hops = 0

        def relay(event: GameEvent):
            nonlocal hops
            hops += 1
            # source 를 바꿔 중복 차단을 피한다
            bus.emit(_event("relay", source=f"relay_{hops}"))

        bus.subscribe("relay", relay)
        bus.emit(_event("relay", source="origin"))
        assert hops == MAX_DEPTH


class TestChainDuplicates:
    def test_same_source_and_type_blocked(self):
        bus = EventBus()
        received = []
        bus.subscribe(EventTypes.TRAVEL_CANCELLED, received.append)
        assert bus.emit(_event(EventTypes.TRAVEL_CANCELLED)) is True
        assert bus.emit(_event(EventTypes.TRAVEL_CANCELLED)) is False
        assert len(received) == 1

    def test_reentrant_duplicate_blocked(self):
        bus = EventBus()
        count = 0

        def handler(event: GameEvent):
            nonlocal count
            count += 1
            bus.emit(_event(EventTypes.COMBAT_ENDED))

        bus.subscribe(EventTypes.COMBAT_ENDED, handler)
        bus.emit(_event(EventTypes.COMBAT_ENDED))
        assert count == 1

    def test_other_source_allowed(self):
        bus = EventBus()
        sources = []
        bus.subscribe(EventTypes.LEVEL_UP, lambda e: sources.append(e.source))
        bus.emit(_event(EventTypes.LEVEL_UP, source="adventure_service"))
        bus.emit(_event(EventTypes.LEVEL_UP, source="admin_console"))
        assert sources == ["adventure_service", "admin_console"]

    def test_reset_chain_allows_next_action(self):
        bus = EventBus()
        received = []
        bus.subscribe(EventTypes.EXPLORATION_RESOLVED, received.append)
        bus.emit(_event(EventTypes.EXPLORATION_RESOLVED, type="item"))
        bus.reset_chain()
        bus.emit(_event(EventTypes.EXPLORATION_RESOLVED, type="nothing"))
        assert [e.data["type"] for e in received] == ["item", "nothing"]


class TestHandlerError:
    def test_failing_handler_does_not_stop_others(self):
        bus = EventBus()
        written = []

        def broken(event: GameEvent):
            raise KeyError("to_name")

        bus.subscribe(EventTypes.TRAVEL_STARTED, broken)
        bus.subscribe(EventTypes.TRAVEL_STARTED, lambda e: written.append(e.data["to_id"]))
        assert bus.emit(_event(EventTypes.TRAVEL_STARTED, to_id="forest")) is True
        assert written == ["forest"]


class TestWildcard:
    def test_wildcard_receives_every_event(self):
        bus = EventBus()
        seen = []
        bus.subscribe_all(lambda e: seen.append(e.event_type))
        bus.emit(_event(EventTypes.TRAVEL_STARTED))
        bus.emit(_event(EventTypes.COMBAT_ENDED))
        assert seen == ["travel_started", "combat_ended"]

    def test_specific_handlers_run_before_wildcard(self):
        bus = EventBus()
        order = []
        bus.subscribe_all(lambda e: order.append("all"))
        bus.subscribe(EventTypes.LEVEL_UP, lambda e: order.append("specific"))
        bus.emit(_event(EventTypes.LEVEL_UP))
        assert order == ["specific", "all"]

    def test_wildcard_sees_depth(self):
        bus = EventBus()
        depths = []

        def on_combat_ended(event: GameEvent):
            bus.emit(_event(EventTypes.LEVEL_UP, source="ledger_watcher"))

        bus.subscribe(EventTypes.COMBAT_ENDED, on_combat_ended)
        bus.subscribe_all(lambda e: depths.append((e.event_type, e._depth)))
        bus.emit(_event(EventTypes.COMBAT_ENDED))
        assert depths == [("level_up", 1), ("combat_ended", 0)]


class TestClear:
    def test_clear_removes_handlers_and_chain(self):
        bus = EventBus()
        bus.subscribe(EventTypes.LEVEL_UP, lambda e: None)
        bus.subscribe_all(lambda e: None)
        bus.emit(_event(EventTypes.LEVEL_UP))
        assert bus.handler_count == 2

        bus.clear()
        assert bus.handler_count == 0
        assert bus.emit(_event(EventTypes.LEVEL_UP)) is True
