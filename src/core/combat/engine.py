"""Combat Engine: 턴제 상태 기계

상태 전이:
    PlayerTurn → (플레이어 행동) → Victory | EnemyTurn
    EnemyTurn  → (적 행동)       → Defeat  | PlayerTurn
종료 상태: Victory, Defeat, Fled

규칙:
- 자원 부족 행동은 거절. 자원 소모/피해/턴 진행 모두 없음
- 적 체력 0 → 즉시 Victory (반격 없음)
- 회복은 전투를 끝내지 않고 항상 턴을 넘긴다
- 도주 실패 시에도 스태미나는 소모되고 턴이 넘어간다
- 적 턴: 고정 damage (방어 미적용). 생존 시 마나 +5, 스태미나 +7 재생
- Victory 시 드롭 테이블을 항목별 독립 판정

모든 함수는 순수 함수다. 난수는 호출자가 주입한 random.Random 만 사용한다.
"""

from __future__ import annotations

import logging
import random
from dataclasses import replace
from typing import Optional, Sequence

from src.core.errors import InvalidActionError
from src.core.ledger.models import CombatRewards, VitalsSnapshot
from .actions import (
    ActionKind,
    ActionSpec,
    CombatAction,
    ACTION_TABLE,
    action_power,
    flee_chance,
    get_spec,
    is_affordable,
    resource_value,
)
from .models import (
    CombatLogEntry,
    CombatResult,
    CombatState,
    CombatStatus,
    DropEntry,
    Enemy,
    LogKind,
    StepResult,
    Turn,
)

logger = logging.getLogger(__name__)

# === 적 턴 종료 후 재생량 ===
ENEMY_TURN_MANA_REGEN = 5
ENEMY_TURN_STAMINA_REGEN = 7

YOUR_TURN_MESSAGE = "Your turn. Choose an action."


def _log(state: CombatState, kind: LogKind, message: str) -> tuple[CombatLogEntry, ...]:
    return state.log + (CombatLogEntry(kind=kind, message=message),)


def start_combat(player: VitalsSnapshot, enemy: Enemy) -> CombatState:
    """전투 시작. 적 원형의 사본을 live copy 로 사용한다."""
    live_enemy = replace(enemy)
    state = CombatState(
        player_start=player,
        player=player,
        enemy=live_enemy,
        log=(
            CombatLogEntry(LogKind.SYSTEM, f"Combat with {enemy.name} has begun!"),
            CombatLogEntry(LogKind.SYSTEM, YOUR_TURN_MESSAGE),
        ),
    )
    logger.info(
        "Combat started: enemy=%s (hp=%d, dmg=%d)",
        enemy.enemy_id,
        enemy.health,
        enemy.damage,
    )
    return state


def available_actions(state: CombatState) -> list[CombatAction]:
    """현재 선택 가능한(자원이 충분한) 행동 목록"""
    if state.is_over or state.turn != Turn.PLAYER:
        return []
    return [a for a, spec in ACTION_TABLE.items() if is_affordable(spec, state.player)]


def _spend(player: VitalsSnapshot, spec: ActionSpec) -> VitalsSnapshot:
    remaining = resource_value(player, spec.resource) - spec.cost
    return replace(player, **{spec.resource.value: max(0, remaining)})


def resolve_loot(drop_table: Sequence[DropEntry], rng: random.Random) -> list[str]:
    """항목별 독립 베르누이 판정. draw < drop_chance 이면 드롭."""
    dropped = []
    for entry in drop_table:
        if rng.random() < entry.drop_chance:
            dropped.append(entry.name)
    return dropped


def _victory(state: CombatState, rng: random.Random) -> CombatState:
    enemy = state.enemy
    items = resolve_loot(enemy.drop_table, rng)
    rewards = CombatRewards(
        experience=enemy.experience_reward,
        gold=enemy.gold_reward,
        items=tuple(items),
    )

    log = _log(state, LogKind.SYSTEM, f"You defeated {enemy.name}!")
    log += (
        CombatLogEntry(LogKind.REWARD, f"Experience gained: {rewards.experience}"),
        CombatLogEntry(LogKind.REWARD, f"Gold gained: {rewards.gold}"),
    )
    log += tuple(CombatLogEntry(LogKind.REWARD, f"Item obtained: {item}") for item in items)

    logger.info(
        "Combat victory: enemy=%s, rounds=%d, drops=%s",
        enemy.enemy_id,
        state.round,
        items,
    )
    return replace(state, status=CombatStatus.VICTORY, log=log, rewards=rewards)


def player_action(
    state: CombatState,
    action: CombatAction | str,
    rng: random.Random,
) -> StepResult:
    """플레이어 행동 해결. 턴이 넘어가면 state.turn == ENEMY 로 반환된다.

    적 턴은 enemy_turn() 으로 별도 진행한다 (호출자가 연출 지연을 넣을 수 있도록).
    """
    if state.is_over:
        raise InvalidActionError(f"Combat already finished: {state.status.value}")
    if state.turn != Turn.PLAYER:
        raise InvalidActionError("Not the player's turn")

    spec = get_spec(action)

    if not is_affordable(spec, state.player):
        message = f"Not enough {spec.resource.value} for {spec.name}!"
        logger.debug("Action rejected: %s", message)
        return StepResult(
            state=state,
            accepted=False,
            message=message,
            insufficient=spec.resource.value,
        )

    player = _spend(state.player, spec)

    if spec.kind == ActionKind.FLEE:
        chance = flee_chance(state.player.agility)
        success = rng.random() < chance
        logger.debug("Flee roll: chance=%.2f, success=%s", chance, success)
        if success:
            message = "You escaped from combat!"
            new_state = replace(
                state,
                player=player,
                status=CombatStatus.FLED,
                log=_log(state, LogKind.SYSTEM, message),
            )
            logger.info("Combat fled: enemy=%s", state.enemy.enemy_id)
        else:
            message = "Escape failed!"
            new_state = replace(
                state,
                player=player,
                turn=Turn.ENEMY,
                log=_log(state, LogKind.SYSTEM, message),
            )
        return StepResult(state=new_state, accepted=True, message=message, fled=success)

    power = action_power(spec, state.player)

    if spec.kind == ActionKind.HEAL:
        health = min(player.max_health, player.health + power)
        healed = health - player.health
        message = f"You used {spec.name} and restored {healed} health!"
        new_state = replace(
            state,
            player=replace(player, health=health),
            turn=Turn.ENEMY,
            log=_log(state, LogKind.PLAYER, message),
        )
        return StepResult(state=new_state, accepted=True, message=message, healed=healed)

    # 공격 / 공격 마법
    enemy_health = max(0, state.enemy.health - power)
    dealt = state.enemy.health - enemy_health
    message = f"You used {spec.name} and dealt {power} damage!"
    new_state = replace(
        state,
        player=player,
        enemy=replace(state.enemy, health=enemy_health),
        log=_log(state, LogKind.PLAYER, message),
    )

    if enemy_health <= 0:
        new_state = _victory(new_state, rng)
    else:
        new_state = replace(new_state, turn=Turn.ENEMY)

    return StepResult(state=new_state, accepted=True, message=message, damage_dealt=dealt)


def enemy_turn(state: CombatState) -> CombatState:
    """적 행동 해결. 고정 피해, 방어 미적용."""
    if state.is_over:
        raise InvalidActionError(f"Combat already finished: {state.status.value}")
    if state.turn != Turn.ENEMY:
        raise InvalidActionError("Not the enemy's turn")

    enemy = state.enemy
    health = max(0, state.player.health - enemy.damage)
    log = _log(state, LogKind.ENEMY, f"{enemy.name} attacks and deals {enemy.damage} damage!")
    player = replace(state.player, health=health)

    if health <= 0:
        log += (CombatLogEntry(LogKind.SYSTEM, "You have been defeated..."),)
        logger.info("Combat defeat: enemy=%s, rounds=%d", enemy.enemy_id, state.round)
        return replace(state, player=player, status=CombatStatus.DEFEAT, log=log)

    player = replace(
        player,
        mana=min(player.max_mana, player.mana + ENEMY_TURN_MANA_REGEN),
        stamina=min(player.max_stamina, player.stamina + ENEMY_TURN_STAMINA_REGEN),
    )
    log += (CombatLogEntry(LogKind.SYSTEM, YOUR_TURN_MESSAGE),)
    return replace(state, player=player, turn=Turn.PLAYER, round=state.round + 1, log=log)


def step(
    state: CombatState,
    action: CombatAction | str,
    rng: random.Random,
) -> StepResult:
    """플레이어 행동 + (턴이 넘어갔다면) 적 행동까지 한 번에 진행."""
    result = player_action(state, action, rng)
    if result.accepted and result.state.turn == Turn.ENEMY and not result.state.is_over:
        result = replace(result, state=enemy_turn(result.state))
    return result


def build_result(state: CombatState) -> CombatResult:
    if not state.is_over:
        raise InvalidActionError("Combat is still active")
    return CombatResult(
        status=state.status,
        enemy_id=state.enemy.enemy_id,
        enemy_name=state.enemy.name,
        rounds=state.round,
        final_health=state.player.health,
        final_mana=state.player.mana,
        final_stamina=state.player.stamina,
        rewards=state.rewards if state.status == CombatStatus.VICTORY else None,
        log=state.log,
    )


class CombatSession:
    """전이 함수를 감싸는 얇은 가변 홀더. 상태는 항상 불변 CombatState."""

    def __init__(
        self,
        player: VitalsSnapshot,
        enemy: Enemy,
        rng: Optional[random.Random] = None,
    ):
        self._rng = rng or random.Random()
        self._state = start_combat(player, enemy)

    @property
    def state(self) -> CombatState:
        return self._state

    @property
    def status(self) -> CombatStatus:
        return self._state.status

    @property
    def is_over(self) -> bool:
        return self._state.is_over

    def available_actions(self) -> list[CombatAction]:
        return available_actions(self._state)

    def act(self, action: CombatAction | str) -> StepResult:
        """플레이어 행동 → 필요 시 적 턴까지 진행"""
        result = step(self._state, action, self._rng)
        self._state = result.state
        return result

    def act_player_only(self, action: CombatAction | str) -> StepResult:
        result = player_action(self._state, action, self._rng)
        self._state = result.state
        return result

    def resolve_enemy_turn(self) -> CombatState:
        self._state = enemy_turn(self._state)
        return self._state

    def result(self) -> CombatResult:
        return build_result(self._state)
