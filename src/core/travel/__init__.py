"""이동 시스템 Core"""

from .clock import AsyncioClock, Clock, ManualClock
from .planner import (
    MIN_TRAVEL_TIME,
    TravelPlan,
    compute_travel_time,
    plan_travel,
    plan_travel_for,
    round_half_up,
)
from .progress import (
    COMPLETE_DELAY_MS,
    MILESTONES,
    TICK_INTERVAL_MS,
    TravelSession,
    TravelState,
    interpolate_progress,
    start_progress,
)

__all__ = [
    "AsyncioClock",
    "Clock",
    "ManualClock",
    "MIN_TRAVEL_TIME",
    "TravelPlan",
    "compute_travel_time",
    "plan_travel",
    "plan_travel_for",
    "round_half_up",
    "COMPLETE_DELAY_MS",
    "MILESTONES",
    "TICK_INTERVAL_MS",
    "TravelSession",
    "TravelState",
    "interpolate_progress",
    "start_progress",
]
