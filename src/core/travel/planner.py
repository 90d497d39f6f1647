"""Travel Planner: 경로 조회 + 속도 보정 이동 시간 계산

effective = max(3, round(base - base × speed/100))
saved     = base - effective
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import Optional

from src.core.errors import LocationLockedError, NoPathError
from src.core.ledger.ledger import ResourceLedger
from src.core.location.access import check_access
from src.core.location.graph import LocationGraph

logger = logging.getLogger(__name__)

MIN_TRAVEL_TIME = 3  # 속도와 무관한 하한 (초)


@dataclass(frozen=True)
class TravelPlan:
    from_id: str
    to_id: str
    base_travel_time: int
    effective_travel_time: int
    saved_time: int
    character_speed: int
    degraded: bool = False  # 연결 정보 없이 기본 시간으로 계산됨


def round_half_up(value: float) -> int:
    return math.floor(value + 0.5)


def compute_travel_time(
    base_travel_time: int,
    character_speed: int,
    min_time: int = MIN_TRAVEL_TIME,
) -> tuple[int, int]:
    """(effective, saved) 반환"""
    speed_modifier = character_speed / 100
    calculated = round_half_up(base_travel_time - base_travel_time * speed_modifier)
    effective = max(min_time, calculated)
    return effective, base_travel_time - effective


def plan_travel(
    from_id: str,
    to_id: str,
    character_speed: int,
    graph: LocationGraph,
    default_travel_time: Optional[int] = None,
    min_time: int = MIN_TRAVEL_TIME,
) -> TravelPlan:
    """경로 계획. 연결이 없으면 NoPathError.

    default_travel_time 은 연결 데이터가 없는 degraded 모드에서 호출자가
    명시적으로 넘긴 경우에만 사용한다.
    """
    edge = graph.find_edge(from_id, to_id)

    if edge is not None:
        base = edge.travel_time
        degraded = False
    elif default_travel_time is not None:
        base = default_travel_time
        degraded = True
        logger.warning(
            "No connection %s → %s, using default travel time %d",
            from_id,
            to_id,
            default_travel_time,
        )
    else:
        logger.info("Travel rejected, no path: %s → %s", from_id, to_id)
        raise NoPathError(from_id, to_id)

    effective, saved = compute_travel_time(base, character_speed, min_time)
    return TravelPlan(
        from_id=from_id,
        to_id=to_id,
        base_travel_time=base,
        effective_travel_time=effective,
        saved_time=saved,
        character_speed=character_speed,
        degraded=degraded,
    )


def plan_travel_for(
    ledger: ResourceLedger,
    from_id: str,
    to_id: str,
    graph: LocationGraph,
    default_travel_time: Optional[int] = None,
    min_time: int = MIN_TRAVEL_TIME,
) -> TravelPlan:
    """원장의 speed 를 쓰고 목적지 접근 조건까지 검사하는 버전"""
    node = graph.get_node(to_id)
    if node is not None:
        access = check_access(node, ledger)
        if not access.accessible:
            logger.info("Travel rejected, location locked: %s (%s)", to_id, access.reason)
            raise LocationLockedError(to_id, list(access.unmet))

    return plan_travel(
        from_id,
        to_id,
        ledger.character.speed,
        graph,
        default_travel_time=default_travel_time,
        min_time=min_time,
    )
