"""Location Graph: 불변 위치 노드 + 방향/양방향 연결

게임 세션 동안 정적. 외부(백엔드 스냅샷)에서 로드한다.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Iterable, Mapping, Optional

from src.core.ledger.models import Requirement

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class LocationNode:
    location_id: str
    name: str = ""
    danger_level: int = 1  # 1~5
    region_id: Optional[str] = None
    requirements: tuple[Requirement, ...] = ()
    is_accessible: bool = True  # 관리자 플래그 (False = 폐쇄)


@dataclass(frozen=True)
class LocationEdge:
    from_id: str
    to_id: str
    travel_time: int  # 초
    bidirectional: bool = False

    def connects(self, from_id: str, to_id: str) -> bool:
        if self.from_id == from_id and self.to_id == to_id:
            return True
        return self.bidirectional and self.from_id == to_id and self.to_id == from_id


@dataclass(frozen=True)
class LocationGraph:
    nodes: Mapping[str, LocationNode] = field(default_factory=lambda: MappingProxyType({}))
    edges: tuple[LocationEdge, ...] = ()

    @classmethod
    def build(
        cls, nodes: Iterable[LocationNode], edges: Iterable[LocationEdge]
    ) -> "LocationGraph":
        node_map = {n.location_id: n for n in nodes}
        edge_list = tuple(edges)
        for edge in edge_list:
            if edge.from_id not in node_map or edge.to_id not in node_map:
                logger.warning(
                    "Edge references unknown location: %s → %s",
                    edge.from_id,
                    edge.to_id,
                )
        return cls(nodes=MappingProxyType(node_map), edges=edge_list)

    def has_node(self, location_id: str) -> bool:
        return location_id in self.nodes

    def get_node(self, location_id: str) -> Optional[LocationNode]:
        return self.nodes.get(location_id)

    def find_edge(self, from_id: str, to_id: str) -> Optional[LocationEdge]:
        """정방향 일치 또는 양방향 edge의 역방향 일치. 첫 번째 일치 반환."""
        for edge in self.edges:
            if edge.connects(from_id, to_id):
                return edge
        return None

    def neighbors(self, location_id: str) -> list[str]:
        """location_id 에서 이동 가능한 위치 목록 (중복 제거, 순서 유지)"""
        result: list[str] = []
        for edge in self.edges:
            if edge.from_id == location_id:
                target = edge.to_id
            elif edge.bidirectional and edge.to_id == location_id:
                target = edge.from_id
            else:
                continue
            if target not in result:
                result.append(target)
        return result
