"""위치 접근 판정"""

from __future__ import annotations

from dataclasses import dataclass

from src.core.ledger.ledger import ResourceLedger
from src.core.ledger.models import Requirement

from .graph import LocationGraph, LocationNode


@dataclass(frozen=True)
class AccessCheck:
    location_id: str
    accessible: bool
    unmet: tuple[Requirement, ...] = ()
    reason: str = ""


def check_access(node: LocationNode, ledger: ResourceLedger) -> AccessCheck:
    if not node.is_accessible:
        return AccessCheck(node.location_id, False, reason="closed")

    unmet = tuple(ledger.unmet_requirements(node.requirements))
    if unmet:
        return AccessCheck(
            node.location_id,
            False,
            unmet=unmet,
            reason="; ".join(r.describe() for r in unmet),
        )
    return AccessCheck(node.location_id, True)


def reachable_destinations(
    graph: LocationGraph, current_id: str, ledger: ResourceLedger
) -> list[LocationNode]:
    """현재 위치에서 연결되어 있고 조건을 만족하는 목적지"""
    result = []
    for target_id in graph.neighbors(current_id):
        node = graph.get_node(target_id)
        if node is not None and check_access(node, ledger).accessible:
            result.append(node)
    return result
