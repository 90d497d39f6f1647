"""위치 그래프 / 접근 판정 테스트"""

import pytest

from src.core.ledger import Requirement, RequirementType
from src.core.location import (
    LocationEdge,
    LocationGraph,
    LocationNode,
    check_access,
    reachable_destinations,
)


class TestEdges:
    def test_forward_edge(self, graph):
        assert graph.find_edge("town", "cave").travel_time == 20

    def test_one_way_edge_not_reversible(self, graph):
        assert graph.find_edge("cave", "town") is None

    def test_bidirectional_edge_reversible(self, graph):
        edge = graph.find_edge("forest", "town")
        assert edge is not None
        assert edge.travel_time == 40

    def test_first_match_wins(self):
        graph = LocationGraph.build(
            [LocationNode("a"), LocationNode("b")],
            [LocationEdge("a", "b", 10), LocationEdge("a", "b", 99)],
        )
        assert graph.find_edge("a", "b").travel_time == 10

    def test_neighbors(self, graph):
        assert graph.neighbors("town") == ["forest", "cave"]
        assert graph.neighbors("forest") == ["town", "castle"]
        assert graph.neighbors("cave") == []

    def test_unknown_endpoint_kept(self):
        graph = LocationGraph.build([LocationNode("a")], [LocationEdge("a", "ghost", 5)])
        assert len(graph.edges) == 1
        assert not graph.has_node("ghost")

    def test_nodes_read_only(self, graph):
        with pytest.raises(TypeError):
            graph.nodes["ghost"] = LocationNode("ghost")
        assert not graph.has_node("ghost")


class TestAccess:
    def test_locked_by_level(self, graph, ledger):
        check = check_access(graph.get_node("castle"), ledger)
        assert not check.accessible
        assert check.reason == "Requires level 5"
        assert len(check.unmet) == 1

    def test_unlocked_after_level(self, graph, ledger, character):
        character.level = 5
        assert check_access(graph.get_node("castle"), ledger).accessible

    def test_closed_node(self, ledger):
        node = LocationNode("ruins", is_accessible=False)
        check = check_access(node, ledger)
        assert not check.accessible
        assert check.reason == "closed"

    def test_custom_description(self, ledger):
        node = LocationNode(
            "vault",
            requirements=(Requirement(RequirementType.GOLD, 100, description="Bring 100 gold"),),
        )
        assert check_access(node, ledger).reason == "Bring 100 gold"

    def test_reachable_destinations_filters_locked(self, graph, ledger):
        assert [n.location_id for n in reachable_destinations(graph, "forest", ledger)] == [
            "town"
        ]
