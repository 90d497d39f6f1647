"""전투 도메인 모델 (DB 무관)

CombatState 는 불변 스냅샷이다. 전이 함수가 매번 새 상태를 만든다.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional

from src.core.ledger.models import CombatRewards, VitalsSnapshot


class CombatStatus(str, Enum):
    ACTIVE = "active"
    VICTORY = "victory"
    DEFEAT = "defeat"
    FLED = "fled"


class Turn(str, Enum):
    PLAYER = "player"
    ENEMY = "enemy"


class LogKind(str, Enum):
    PLAYER = "player"
    ENEMY = "enemy"
    SYSTEM = "system"
    REWARD = "reward"


TERMINAL_STATUSES = frozenset(
    {CombatStatus.VICTORY, CombatStatus.DEFEAT, CombatStatus.FLED}
)


@dataclass(frozen=True)
class DropEntry:
    item_id: str
    name: str
    drop_chance: float  # 0.0~1.0


@dataclass(frozen=True)
class Enemy:
    """적 원형. 조우마다 호출자가 제공. 전투 중에는 health 만 바뀐 사본을 쓴다."""

    enemy_id: str
    name: str
    level: int = 1
    health: int = 100
    max_health: int = 100
    damage: int = 10
    defense: int = 5  # 기본 공식에서는 미사용
    experience_reward: int = 50
    gold_reward: int = 25
    drop_table: tuple[DropEntry, ...] = ()
    image: Optional[str] = None


@dataclass(frozen=True)
class CombatLogEntry:
    kind: LogKind
    message: str


@dataclass(frozen=True)
class CombatState:
    player_start: VitalsSnapshot  # 세션 시작 시점
    player: VitalsSnapshot  # 현재 값
    enemy: Enemy  # live copy
    turn: Turn = Turn.PLAYER
    status: CombatStatus = CombatStatus.ACTIVE
    round: int = 1
    log: tuple[CombatLogEntry, ...] = ()
    rewards: Optional[CombatRewards] = None

    @property
    def is_over(self) -> bool:
        return self.status in TERMINAL_STATUSES


@dataclass(frozen=True)
class StepResult:
    """플레이어 행동 1회의 결과"""

    state: CombatState
    accepted: bool
    message: str = ""
    damage_dealt: int = 0
    healed: int = 0
    fled: Optional[bool] = None  # 도주 시도 시에만 설정
    insufficient: Optional[str] = None  # 부족한 자원 이름


@dataclass(frozen=True)
class CombatResult:
    """종료된 전투의 최종 결과"""

    status: CombatStatus
    enemy_id: str
    enemy_name: str
    rounds: int
    final_health: int
    final_mana: int
    final_stamina: int
    rewards: Optional[CombatRewards] = None
    log: tuple[CombatLogEntry, ...] = field(default_factory=tuple)
