"""이동 진행 시뮬레이션: 마일스톤 보간 + 취소 가능한 세션

- 고정 마일스톤 [5,15,30,50,70,85,95,100] (%)
- 마일스톤 m 의 목표 경과 시간 = m/100 × effective_travel_time
- 마일스톤 사이는 직전 마일스톤 기준 선형 보간
- 마일스톤 도달 시 정확한 값으로 snap 후 on_tick
- 100% 도달 → 주기 tick 중단, 300ms 후 on_complete (정확히 1회)
- cancel(): 이후 on_tick / on_complete 는 절대 호출되지 않는다

완료와 취소는 상호 배타적이며 각각 최대 1회만 발생한다.
"""

from __future__ import annotations

import logging
from enum import Enum
from typing import Any, Callable, Optional

from .clock import Clock

logger = logging.getLogger(__name__)

MILESTONES: tuple[int, ...] = (5, 15, 30, 50, 70, 85, 95, 100)
TICK_INTERVAL_MS = 100
COMPLETE_DELAY_MS = 300

TickCallback = Callable[[float, float], None]  # (progress_percent, remaining_seconds)


class TravelState(str, Enum):
    RUNNING = "running"
    COMPLETED = "completed"
    CANCELLED = "cancelled"


def milestone_time_ms(milestone: int, travel_time: float) -> float:
    return milestone * travel_time * 1000 / 100


def interpolate_progress(
    elapsed_ms: float, milestone_index: int, travel_time: float
) -> float:
    """다음 마일스톤(milestone_index) 직전 구간의 보간 진행률"""
    current = MILESTONES[milestone_index]
    current_time = milestone_time_ms(current, travel_time)
    prev = MILESTONES[milestone_index - 1] if milestone_index > 0 else 0
    prev_time = milestone_time_ms(prev, travel_time) if milestone_index > 0 else 0.0

    span = current_time - prev_time
    if span <= 0:
        return float(current)
    segment = (elapsed_ms - prev_time) / span
    segment = max(0.0, min(1.0, segment))
    return prev + segment * (current - prev)


class TravelSession:
    """취소 가능한 이동 세션. start_progress() 로 생성한다."""

    def __init__(
        self,
        effective_travel_time: float,
        on_tick: TickCallback,
        on_complete: Callable[[], None],
        clock: Clock,
        on_cancel: Optional[Callable[[], None]] = None,
        from_id: Optional[str] = None,
        to_id: Optional[str] = None,
        base_travel_time: Optional[float] = None,
        tick_interval_ms: float = TICK_INTERVAL_MS,
        complete_delay_ms: float = COMPLETE_DELAY_MS,
    ):
        self.from_id = from_id
        self.to_id = to_id
        self.effective_travel_time = effective_travel_time
        self.base_travel_time = (
            base_travel_time if base_travel_time is not None else effective_travel_time
        )

        self._on_tick = on_tick
        self._on_complete = on_complete
        self._on_cancel = on_cancel
        self._clock = clock
        self._tick_interval_ms = tick_interval_ms
        self._complete_delay_ms = complete_delay_ms

        self._state = TravelState.RUNNING
        self._progress = 0.0
        self._milestone_index = 0
        self._start_ms = clock.now()
        self._tick_handle: Any = None
        self._complete_handle: Any = None

    # === 조회 ===

    @property
    def state(self) -> TravelState:
        return self._state

    @property
    def progress_percent(self) -> float:
        return self._progress

    @property
    def start_clock_time(self) -> float:
        return self._start_ms

    @property
    def is_running(self) -> bool:
        return self._state == TravelState.RUNNING

    def elapsed_ms(self) -> float:
        return max(0.0, self._clock.now() - self._start_ms)

    def remaining_time(self) -> float:
        """남은 시간 (초)"""
        return max(0.0, self.effective_travel_time - self.elapsed_ms() / 1000)

    # === 생명주기 ===

    def _start(self) -> None:
        self._tick_handle = self._clock.schedule(self._tick_interval_ms, self._tick)

    def _tick(self) -> None:
        self._tick_handle = None
        if self._state != TravelState.RUNNING:
            # 취소/완료 이후 도착한 tick: 무시
            logger.debug("Tick ignored, session %s", self._state.value)
            return

        elapsed = self.elapsed_ms()

        # 지난 마일스톤은 모두 snap (각각 on_tick 1회)
        while self._milestone_index < len(MILESTONES):
            milestone = MILESTONES[self._milestone_index]
            if elapsed < milestone_time_ms(milestone, self.effective_travel_time):
                break
            self._milestone_index += 1
            self._progress = max(self._progress, float(milestone))
            self._on_tick(float(milestone), self.remaining_time())
            if self._state != TravelState.RUNNING:
                return

        if self._milestone_index >= len(MILESTONES):
            self._complete_handle = self._clock.schedule(
                self._complete_delay_ms, self._complete
            )
            return

        interpolated = interpolate_progress(
            elapsed, self._milestone_index, self.effective_travel_time
        )
        if interpolated > self._progress:
            self._progress = interpolated
            self._on_tick(self._progress, self.remaining_time())
            if self._state != TravelState.RUNNING:
                return

        self._tick_handle = self._clock.schedule(self._tick_interval_ms, self._tick)

    def _complete(self) -> None:
        self._complete_handle = None
        if self._state != TravelState.RUNNING:
            logger.debug("Completion ignored, session %s", self._state.value)
            return
        self._state = TravelState.COMPLETED
        self._progress = 100.0
        logger.info("Travel completed: %s → %s", self.from_id, self.to_id)
        self._on_complete()

    def cancel(self) -> bool:
        """진행 중이면 취소하고 True. 이미 종료된 세션은 no-op (False)."""
        if self._state != TravelState.RUNNING:
            logger.debug("Cancel ignored, session %s", self._state.value)
            return False

        self._state = TravelState.CANCELLED
        self._clock.cancel(self._tick_handle)
        self._clock.cancel(self._complete_handle)
        self._tick_handle = None
        self._complete_handle = None
        logger.info(
            "Travel cancelled at %.1f%%: %s → %s",
            self._progress,
            self.from_id,
            self.to_id,
        )
        if self._on_cancel is not None:
            self._on_cancel()
        return True


def start_progress(
    effective_travel_time: float,
    on_tick: TickCallback,
    on_complete: Callable[[], None],
    clock: Clock,
    on_cancel: Optional[Callable[[], None]] = None,
    **kwargs: Any,
) -> TravelSession:
    """이동 진행 시작. 반환된 세션의 cancel() 이 취소 핸들이다."""
    session = TravelSession(
        effective_travel_time,
        on_tick,
        on_complete,
        clock,
        on_cancel=on_cancel,
        **kwargs,
    )
    session._start()
    logger.info(
        "Travel started: %s → %s (%ss)",
        session.from_id,
        session.to_id,
        effective_travel_time,
    )
    return session
