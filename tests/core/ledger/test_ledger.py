"""ResourceLedger 테스트: clamp, spend, 보상/레벨업, 접근 조건"""

import random

import pytest

from src.core.errors import InsufficientResourceError
from src.core.ledger import (
    Character,
    CombatRewards,
    Requirement,
    RequirementType,
    ResourceLedger,
    ResourceType,
)


# ── Clamp ─────────────────────────────────────────────────────


class TestClamp:
    def test_init_clamps_over_max(self):
        c = Character(character_id="c", health=150, max_health=100)
        ResourceLedger(c)
        assert c.health == 100

    def test_init_clamps_negative(self):
        c = Character(character_id="c", mana=-5)
        ResourceLedger(c)
        assert c.mana == 0

    def test_restore_capped_at_max(self, ledger, character):
        character.health = 95
        gained = ledger.restore(ResourceType.HEALTH, 20)
        assert gained == 5
        assert character.health == 100

    def test_restore_non_positive_is_noop(self, ledger, character):
        character.stamina = 50
        assert ledger.restore("stamina", 0) == 0
        assert ledger.restore("stamina", -10) == 0
        assert character.stamina == 50

    def test_damage_floored_at_zero(self, ledger, character):
        lost = ledger.damage(ResourceType.HEALTH, 250)
        assert lost == 100
        assert character.health == 0

    def test_random_sequence_stays_in_bounds(self, ledger):
        rng = random.Random(99)
        ops = (ledger.spend, ledger.restore, ledger.damage)
        for _ in range(500):
            op = rng.choice(ops)
            op(rng.choice(list(ResourceType)), rng.randint(-20, 60))
            for resource in ResourceType:
                assert 0 <= ledger.current(resource) <= ledger.maximum(resource)


# ── Spend ─────────────────────────────────────────────────────


class TestSpend:
    def test_spend_success(self, ledger, character):
        result = ledger.spend(ResourceType.STAMINA, 5)
        assert result.ok
        assert result.remaining == 95
        assert character.stamina == 95

    def test_spend_exact_amount(self, ledger, character):
        assert ledger.spend("mana", 100)
        assert character.mana == 0

    def test_spend_insufficient_leaves_state(self, ledger, character):
        character.stamina = 3
        result = ledger.spend(ResourceType.STAMINA, 5)
        assert not result
        assert result.insufficient
        assert result.remaining == 3
        assert character.stamina == 3

    def test_spend_negative_rejected(self, ledger, character):
        assert not ledger.spend("health", -1)
        assert character.health == 100

    def test_require_raises(self, ledger, character):
        character.mana = 10
        with pytest.raises(InsufficientResourceError) as exc:
            ledger.require(ResourceType.MANA, 20)
        assert exc.value.required == 20
        assert exc.value.available == 10
        assert character.mana == 10

    def test_can_spend(self, ledger):
        assert ledger.can_spend("stamina", 100)
        assert not ledger.can_spend("stamina", 101)

    def test_unknown_resource_name(self, ledger):
        with pytest.raises(ValueError):
            ledger.current("gold")


# ── Rewards / Level up ────────────────────────────────────────


class TestRewards:
    def test_gain_without_level_up(self, ledger, character):
        leveled = ledger.apply_combat_rewards(CombatRewards(experience=50, gold=25))
        assert leveled is False
        assert character.experience == 50
        assert character.gold == 25
        assert character.level == 1

    def test_level_up_example(self, ledger, character):
        # exp 90/100 + 20 → Lv2, exp 0, next 150, 최대치 +10/+5/+5, 전부 회복
        character.experience = 90
        character.health = 40
        character.mana = 10

        leveled = ledger.apply_combat_rewards(CombatRewards(experience=20))

        assert leveled is True
        assert character.level == 2
        assert character.experience == 0
        assert character.experience_to_next_level == 150
        assert character.max_health == 110
        assert character.max_mana == 105
        assert character.max_stamina == 105
        assert character.health == 110
        assert character.mana == 105
        assert character.stamina == 105

    def test_overshoot_discarded(self, ledger, character):
        # 0/100 + 120 → Lv2, exp 0 (20 이 아님), next 150
        assert ledger.apply_combat_rewards(CombatRewards(experience=120))
        assert character.level == 2
        assert character.experience == 0
        assert character.experience_to_next_level == 150
        assert character.health == character.max_health

    def test_single_level_up_per_reward(self, ledger, character):
        # 두 레벨 분량이어도 1레벨만, 초과분 소멸
        ledger.apply_combat_rewards(CombatRewards(experience=1000))
        assert character.level == 2
        assert character.experience == 0

    def test_next_threshold_floored(self, ledger, character):
        character.experience_to_next_level = 101
        ledger.level_up()
        assert character.experience_to_next_level == 151


class TestDefeatRecovery:
    def test_recovers_ten_percent_when_knocked_out(self, ledger, character):
        character.max_health = 95
        character.health = 0
        assert ledger.apply_defeat_recovery() == 10  # ceil(9.5)
        assert character.health == 10

    def test_noop_when_alive(self, ledger, character):
        character.health = 1
        assert ledger.apply_defeat_recovery() == 0
        assert character.health == 1


# ── Requirements ──────────────────────────────────────────────


class TestRequirements:
    def test_level_requirement(self, ledger, character):
        req = Requirement(RequirementType.LEVEL, 3)
        assert not ledger.meets_requirement(req)
        character.level = 3
        assert ledger.meets_requirement(req)

    def test_attribute_requirement(self, ledger):
        assert ledger.meets_requirement(Requirement(RequirementType.ATTRIBUTE, 5, "strength"))
        assert not ledger.meets_requirement(
            Requirement(RequirementType.ATTRIBUTE, 6, "strength")
        )

    def test_attribute_without_parameter_fails(self, ledger):
        assert not ledger.meets_requirement(Requirement(RequirementType.ATTRIBUTE, 1))

    def test_speed_as_attribute(self, ledger):
        assert ledger.meets_requirement(Requirement(RequirementType.ATTRIBUTE, 10, "speed"))

    def test_gold_requirement(self, ledger, character):
        character.gold = 50
        assert ledger.meets_requirement(Requirement(RequirementType.GOLD, 50))
        assert not ledger.meets_requirement(Requirement(RequirementType.GOLD, 51))

    @pytest.mark.parametrize("req_type", ["quest", "skill", "item", "reputation", "mystery"])
    def test_unsupported_types_fail(self, ledger, req_type):
        assert not ledger.meets_requirement(Requirement(req_type, 0))

    def test_meets_all_and_unmet(self, ledger):
        reqs = [
            Requirement(RequirementType.LEVEL, 1),
            Requirement(RequirementType.GOLD, 10),
        ]
        assert not ledger.meets_all(reqs)
        assert ledger.unmet_requirements(reqs) == [reqs[1]]
        assert ledger.meets_all([])


class TestSnapshot:
    def test_snapshot_and_sync(self, ledger, character):
        snap = ledger.snapshot()
        assert snap.health == 100
        assert snap.strength == 5

        ledger.sync_vitals(health=150, mana=-3, stamina=42)
        assert character.health == 100
        assert character.mana == 0
        assert character.stamina == 42
