"""위치 그래프 Core"""

from .graph import LocationEdge, LocationGraph, LocationNode
from .access import AccessCheck, check_access, reachable_destinations

__all__ = [
    "LocationEdge",
    "LocationGraph",
    "LocationNode",
    "AccessCheck",
    "check_access",
    "reachable_destinations",
]
