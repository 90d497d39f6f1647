"""Shared test fixtures."""

import random

import pytest

from src.core.combat.models import DropEntry, Enemy
from src.core.ledger.ledger import ResourceLedger
from src.core.ledger.models import Character, Requirement, RequirementType
from src.core.location.graph import LocationEdge, LocationGraph, LocationNode
from src.core.travel.clock import ManualClock


class ScriptedRandom(random.Random):
    """random() 이 미리 정한 값을 순서대로 반환하는 RNG. choice 는 첫 요소."""

    def __init__(self, *rolls: float):
        super().__init__(0)
        self._rolls = list(rolls)

    def random(self) -> float:
        if not self._rolls:
            raise AssertionError("ScriptedRandom ran out of rolls")
        return self._rolls.pop(0)

    def choice(self, seq):
        return seq[0]


@pytest.fixture()
def character() -> Character:
    """기본 능력치(5) 캐릭터, 자원 100/100"""
    return Character(character_id="c1", name="Aria", character_class="warrior")


@pytest.fixture()
def ledger(character: Character) -> ResourceLedger:
    return ResourceLedger(character)


@pytest.fixture()
def goblin() -> Enemy:
    return Enemy(
        enemy_id="goblin",
        name="Goblin",
        health=30,
        max_health=30,
        damage=10,
        experience_reward=50,
        gold_reward=25,
        drop_table=(DropEntry("dagger", "Rusty Dagger", 1.0),),
    )


@pytest.fixture()
def graph() -> LocationGraph:
    """town ↔ forest (40s, 양방향), town → cave (20s, 단방향), forest → castle (잠김)"""
    nodes = [
        LocationNode("town", name="Town", danger_level=1),
        LocationNode("forest", name="Dark Forest", danger_level=3),
        LocationNode("cave", name="Cave", danger_level=5),
        LocationNode(
            "castle",
            name="Castle",
            danger_level=4,
            requirements=(Requirement(RequirementType.LEVEL, 5),),
        ),
    ]
    edges = [
        LocationEdge("town", "forest", 40, bidirectional=True),
        LocationEdge("town", "cave", 20),
        LocationEdge("forest", "castle", 30, bidirectional=True),
    ]
    return LocationGraph.build(nodes, edges)


@pytest.fixture()
def clock() -> ManualClock:
    return ManualClock()


@pytest.fixture()
def rng() -> random.Random:
    return random.Random(1234)


@pytest.fixture()
def scripted():
    """ScriptedRandom 팩토리: scripted(0.05, 0.9) → 고정 roll RNG"""
    return ScriptedRandom
