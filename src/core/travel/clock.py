"""시계/스케줄러 추상화

이동 진행 시뮬레이션은 실제 타이머에 직접 묶이지 않는다.
- ManualClock: 테스트/리플레이용 결정적 시계 (advance 로 시간 진행)
- AsyncioClock: 운영용 어댑터 (이벤트 루프 call_later)

시간 단위는 모두 ms.
"""

from __future__ import annotations

import asyncio
import heapq
import itertools
import logging
from dataclasses import dataclass, field
from typing import Any, Callable, Optional, Protocol

logger = logging.getLogger(__name__)

Callback = Callable[[], None]


class Clock(Protocol):
    def now(self) -> float:
        """현재 시각 (ms)"""
        ...

    def schedule(self, delay_ms: float, fn: Callback) -> Any:
        """delay_ms 후 fn 1회 호출. 취소용 핸들 반환."""
        ...

    def cancel(self, handle: Any) -> None:
        """예약 취소. 이미 실행됐거나 모르는 핸들은 무시."""
        ...


@dataclass(order=True)
class _Scheduled:
    due: float
    seq: int
    fn: Callback = field(compare=False)
    cancelled: bool = field(default=False, compare=False)


class ManualClock:
    """수동 진행 시계. advance() 호출 시 만기된 콜백을 시간 순서대로 실행한다."""

    def __init__(self, start_ms: float = 0.0):
        self._now = start_ms
        self._queue: list[_Scheduled] = []
        self._seq = itertools.count()

    def now(self) -> float:
        return self._now

    def schedule(self, delay_ms: float, fn: Callback) -> _Scheduled:
        item = _Scheduled(due=self._now + max(0.0, delay_ms), seq=next(self._seq), fn=fn)
        heapq.heappush(self._queue, item)
        return item

    def cancel(self, handle: Optional[_Scheduled]) -> None:
        if handle is not None:
            handle.cancelled = True

    @property
    def pending(self) -> int:
        return sum(1 for item in self._queue if not item.cancelled)

    def advance(self, delta_ms: float) -> int:
        """delta_ms 만큼 진행. 실행한 콜백 수 반환.

        콜백 안에서 새로 예약된 작업도 목표 시각 이전이면 같은 호출에서 실행된다.
        """
        target = self._now + delta_ms
        executed = 0
        while self._queue and self._queue[0].due <= target:
            item = heapq.heappop(self._queue)
            if item.cancelled:
                continue
            self._now = item.due
            item.fn()
            executed += 1
        self._now = target
        return executed

    def run_until_idle(self, limit_ms: float = 3_600_000) -> int:
        """예약이 없어질 때까지 진행 (무한 루프 방지용 상한 포함)"""
        executed = 0
        deadline = self._now + limit_ms
        while self.pending and self._now < deadline:
            next_due = min(item.due for item in self._queue if not item.cancelled)
            executed += self.advance(max(0.0, next_due - self._now))
        return executed


class AsyncioClock:
    """asyncio 이벤트 루프 어댑터"""

    def __init__(self, loop: Optional[asyncio.AbstractEventLoop] = None):
        self._loop = loop

    @property
    def loop(self) -> asyncio.AbstractEventLoop:
        if self._loop is None:
            self._loop = asyncio.get_running_loop()
        return self._loop

    def now(self) -> float:
        return self.loop.time() * 1000.0

    def schedule(self, delay_ms: float, fn: Callback) -> asyncio.TimerHandle:
        return self.loop.call_later(max(0.0, delay_ms) / 1000.0, fn)

    def cancel(self, handle: Optional[asyncio.TimerHandle]) -> None:
        if handle is not None:
            handle.cancel()
