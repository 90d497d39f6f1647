"""백엔드 스냅샷 스키마 테스트"""

import json

import pytest
from pydantic import ValidationError

from src.services.snapshot import (
    CharacterSnapshot,
    EnemySnapshot,
    WorldSnapshot,
    load_character,
    load_world,
)

WORLD = {
    "locations": [
        {"id": 1, "name": "Town", "danger_level": 1, "region_id": 10},
        {
            "id": 2,
            "name": "Crypt",
            "danger_level": 4,
            "requirements": [{"type": "level", "value": 3}],
        },
    ],
    "location_connections": [
        {"from_location_id": 1, "to_location_id": 2, "travel_time": 25, "is_bidirectional": True}
    ],
    "location_enemies": {
        "2": [
            {
                "id": 7,
                "name": "Skeleton",
                "health": 60,
                "maxHealth": 60,
                "damage": 12,
                "experience": 40,
                "gold": 15,
                "drops": [{"id": 3, "name": "Bone", "chance": 0.5}],
            }
        ]
    },
}

CHARACTER = {
    "id": 42,
    "name": "Aria",
    "class": "rogue",
    "level": 2,
    "experience": 30,
    "exp_to_next_level": 150,
    "health": 80,
    "max_health": 90,
    "mana": 70,
    "max_mana": 80,
    "stamina": 100,
    "max_stamina": 110,
    "strength": 4,
    "agility": 10,
    "speed": 14,
    "gold": 12,
    "created_at": "2024-01-01",
}


class TestCharacterSnapshot:
    def test_to_character(self):
        c = load_character(CHARACTER)
        assert c.character_id == "42"
        assert c.character_class == "rogue"
        assert c.experience_to_next_level == 150
        assert c.get_attribute("agility") == 10
        assert c.get_attribute("wisdom") == 5
        assert c.speed == 14
        assert c.gold == 12

    def test_populate_by_field_name(self):
        data = dict(CHARACTER)
        data.pop("class")
        data["character_class"] = "mage"
        assert CharacterSnapshot.model_validate(data).character_class == "mage"

    def test_negative_health_rejected(self):
        with pytest.raises(ValidationError):
            CharacterSnapshot.model_validate({**CHARACTER, "health": -1})


class TestWorldSnapshot:
    def test_graph(self):
        graph = load_world(WORLD).to_graph()
        assert graph.get_node("1").region_id == "10"
        assert graph.find_edge("2", "1").travel_time == 25
        crypt = graph.get_node("2")
        assert crypt.danger_level == 4
        assert crypt.requirements[0].type == "level"

    def test_enemy_catalogue(self):
        catalogue = load_world(WORLD).enemy_catalogue()
        skeleton = catalogue["2"][0]
        assert skeleton.enemy_id == "7"
        assert skeleton.max_health == 60
        assert skeleton.experience_reward == 40
        assert skeleton.drop_table[0].drop_chance == 0.5

    def test_danger_out_of_range(self):
        bad = {"locations": [{"id": "x", "danger_level": 6}]}
        with pytest.raises(ValidationError):
            WorldSnapshot.model_validate(bad)

    def test_drop_chance_out_of_range(self):
        enemy = dict(WORLD["location_enemies"]["2"][0])
        enemy["drops"] = [{"id": 1, "name": "X", "chance": 1.5}]
        with pytest.raises(ValidationError):
            EnemySnapshot.model_validate(enemy)

    def test_load_from_file(self, tmp_path):
        path = tmp_path / "world.json"
        path.write_text(json.dumps(WORLD), encoding="utf-8")
        world = load_world(path)
        assert len(world.locations) == 2
        assert len(world.location_connections) == 1

    def test_empty_world(self):
        world = load_world({})
        assert world.to_graph().nodes == {}
        assert world.enemy_catalogue() == {}
