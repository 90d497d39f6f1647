"""EventBus - 엔진 결과를 저널/관찰자에게 전달하는 동기식 pub-sub

규칙:
- 엔진(core/combat, core/travel, core/exploration)은 버스를 모른다. 발행은 서비스 계층만 한다
- 이벤트 data 는 평탄한 dict (ID, 수치, 이름)
- 전파 깊이 최대 MAX_DEPTH 단계
- 한 행동(chain) 안에서 동일 source:event_type 중복 발행 금지. 행동 종료 시 reset_chain()
- "*" 구독자는 모든 이벤트를 받는다
"""

from collections import defaultdict
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Set

from src.core.logging import get_logger

logger = get_logger(__name__)

MAX_DEPTH = 5  # 한 행동 내 이벤트 전파 최대 깊이
WILDCARD = "*"


@dataclass
class GameEvent:
    """이벤트 데이터 컨테이너

    Args:
        event_type: 이벤트 유형 (EventTypes 상수)
        data: 이벤트 데이터
        source: 발행한 서비스 이름
    """

    event_type: str
    data: Dict[str, Any]
    source: str

    _depth: int = field(default=0, repr=False)


EventHandler = Callable[[GameEvent], None]


class EventBus:
    """동기식 이벤트 버스

    사용 패턴:
        bus = EventBus()
        bus.subscribe(EventTypes.COMBAT_ENDED, recorder.on_combat_ended)
        bus.emit(GameEvent(EventTypes.COMBAT_ENDED, {"status": "victory"}, "adventure_service"))
    """

    def __init__(self) -> None:
        self._handlers: Dict[str, List[EventHandler]] = defaultdict(list)
        self._current_depth: int = 0
        self._emitted_in_chain: Set[str] = set()

    def subscribe(self, event_type: str, handler: EventHandler) -> None:
        self._handlers[event_type].append(handler)
        logger.debug(f"EventBus 구독: {event_type} → {handler.__qualname__}")

    def subscribe_all(self, handler: EventHandler) -> None:
        """와일드카드 구독 (모든 이벤트)"""
        self.subscribe(WILDCARD, handler)

    def unsubscribe(self, event_type: str, handler: EventHandler) -> None:
        handlers = self._handlers.get(event_type)
        if not handlers or handler not in handlers:
            logger.warning(f"핸들러 미등록: {event_type} → {handler.__qualname__}")
            return
        handlers.remove(handler)

    def emit(self, event: GameEvent) -> bool:
        """이벤트 발행. 실제로 전파되었으면 True.

        핸들러 예외는 로그만 남기고 다음 핸들러로 진행한다.
        """
        if self._current_depth >= MAX_DEPTH:
            logger.warning(
                f"EventBus 전파 깊이 초과 ({MAX_DEPTH}): "
                f"{event.source}:{event.event_type} 무시됨"
            )
            return False

        chain_key = f"{event.source}:{event.event_type}"
        if chain_key in self._emitted_in_chain:
            logger.warning(f"EventBus 중복 이벤트 차단: {chain_key}")
            return False
        self._emitted_in_chain.add(chain_key)
        event._depth = self._current_depth

        handlers = list(self._handlers.get(event.event_type, []))
        handlers += self._handlers.get(WILDCARD, [])
        if not handlers:
            logger.debug(f"EventBus: {event.event_type} 구독자 없음")
            return True

        self._current_depth += 1
        try:
            for handler in handlers:
                try:
                    handler(event)
                except Exception:
                    logger.exception(
                        f"EventBus 핸들러 에러: {handler.__qualname__} "
                        f"(event={event.event_type})"
                    )
        finally:
            self._current_depth -= 1
        return True

    def reset_chain(self) -> None:
        """행동 1회 처리 종료 시 호출"""
        self._emitted_in_chain.clear()
        self._current_depth = 0

    def clear(self) -> None:
        self._handlers.clear()
        self.reset_chain()

    @property
    def handler_count(self) -> int:
        return sum(len(h) for h in self._handlers.values())
