"""Travel Planner 테스트"""

import pytest

from src.core.errors import LocationLockedError, NoPathError
from src.core.location import LocationEdge, LocationGraph, LocationNode
from src.core.travel import compute_travel_time, plan_travel, plan_travel_for, round_half_up


class TestComputeTravelTime:
    def test_speed_example(self):
        # base 10, speed 40 → 10 - 4 = 6, saved 4
        assert compute_travel_time(10, 40) == (6, 4)

    def test_floor_of_three(self):
        assert compute_travel_time(5, 90) == (3, 2)

    def test_zero_speed(self):
        assert compute_travel_time(20, 0) == (20, 0)

    def test_round_half_up(self):
        # 15 - 15×0.1 = 13.5 → 14
        assert compute_travel_time(15, 10) == (14, 1)
        assert round_half_up(2.5) == 3
        assert round_half_up(2.4) == 2

    @pytest.mark.parametrize("base", [0, 1, 3, 10, 57, 600])
    @pytest.mark.parametrize("speed", [0, 10, 40, 99, 100, 250])
    def test_never_below_minimum(self, base, speed):
        effective, saved = compute_travel_time(base, speed)
        assert effective >= 3
        assert saved == base - effective

    def test_custom_min_time(self):
        assert compute_travel_time(5, 90, min_time=1) == (1, 4)


class TestPlanTravel:
    def test_plan_forward(self, graph):
        plan = plan_travel("town", "cave", 10, graph)
        assert plan.base_travel_time == 20
        assert plan.effective_travel_time == 18
        assert plan.saved_time == 2
        assert not plan.degraded

    def test_plan_bidirectional_reverse(self, graph):
        plan = plan_travel("forest", "town", 10, graph)
        assert plan.base_travel_time == 40
        assert plan.effective_travel_time == 36

    def test_no_path(self, graph):
        with pytest.raises(NoPathError) as exc:
            plan_travel("cave", "town", 10, graph)
        assert exc.value.from_id == "cave"
        assert exc.value.to_id == "town"

    def test_unknown_location_no_path(self, graph):
        with pytest.raises(NoPathError):
            plan_travel("town", "atlantis", 10, graph)

    def test_edge_to_unknown_node_is_a_path(self):
        graph = LocationGraph.build([LocationNode("a")], [LocationEdge("a", "b", 10)])
        assert graph.neighbors("a") == ["b"]
        plan = plan_travel("a", "b", 0, graph)
        assert plan.base_travel_time == 10
        assert not plan.degraded

    def test_degraded_mode(self, graph):
        plan = plan_travel("cave", "town", 10, graph, default_travel_time=10)
        assert plan.degraded
        assert plan.base_travel_time == 10
        assert plan.effective_travel_time == 9


class TestPlanTravelFor:
    def test_uses_character_speed(self, graph, ledger, character):
        character.speed = 40
        plan = plan_travel_for(ledger, "town", "forest", graph)
        assert plan.character_speed == 40
        assert plan.effective_travel_time == 24

    def test_locked_destination(self, graph, ledger):
        with pytest.raises(LocationLockedError) as exc:
            plan_travel_for(ledger, "forest", "castle", graph)
        assert exc.value.location_id == "castle"
        assert len(exc.value.unmet) == 1

    def test_unlocked_destination(self, graph, ledger, character):
        character.level = 5
        plan = plan_travel_for(ledger, "forest", "castle", graph)
        assert plan.base_travel_time == 30
