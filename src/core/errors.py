"""시뮬레이션 코어 예외 계층

대부분의 실패는 결과 값으로 반환된다 (자원 부족, 무시되는 세션 조작).
예외는 호출자가 반드시 처리해야 하는 경우에만 사용한다.
"""


class GameCoreError(Exception):
    """코어 예외 공통 베이스"""


class NoPathError(GameCoreError, ValueError):
    """두 위치 사이에 연결(edge)이 없음. 타이머 시작 전에 발생."""

    def __init__(self, from_id: str, to_id: str):
        self.from_id = from_id
        self.to_id = to_id
        super().__init__(f"No path: {from_id} → {to_id}")


class LocationLockedError(GameCoreError, ValueError):
    """목적지 접근 조건 미충족"""

    def __init__(self, location_id: str, unmet: list):
        self.location_id = location_id
        self.unmet = unmet
        super().__init__(f"Location locked: {location_id} ({len(unmet)} unmet)")


class InsufficientResourceError(GameCoreError, ValueError):
    """자원 부족. Ledger.require() 전용: spend()는 결과 값을 반환한다."""

    def __init__(self, resource: str, required: int, available: int):
        self.resource = resource
        self.required = required
        self.available = available
        super().__init__(
            f"Insufficient {resource}: required={required}, available={available}"
        )


class InvalidActionError(GameCoreError, RuntimeError):
    """현재 상태에서 허용되지 않는 행동 (종료된 전투, 상대 턴 등)"""


class EngineBusyError(GameCoreError, RuntimeError):
    """같은 캐릭터에 대해 다른 엔진이 이미 진행 중"""
