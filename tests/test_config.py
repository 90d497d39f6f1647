"""설정 / 로깅 / 샘플 데이터 테스트"""

import logging
from pathlib import Path

from src.config import Settings
from src.core.logging import _resolve_level, get_logger, setup_logging
from src.services.snapshot import load_world

SAMPLE_WORLD = Path(__file__).resolve().parent.parent / "src" / "data" / "sample_world.json"


class TestSettings:
    def test_defaults(self):
        s = Settings(_env_file=None)
        assert s.JOURNAL_MAX_ENTRIES == 100
        assert s.EXPLORATION_STAMINA_COST == 5
        assert s.TRAVEL_MIN_TIME == 3
        assert s.TRAVEL_COMPLETE_DELAY_MS == 300
        assert s.DEFEAT_RECOVERY_RATIO == 0.1
        assert s.RNG_SEED is None

    def test_env_prefix(self, monkeypatch):
        monkeypatch.setenv("WAYFARER_JOURNAL_MAX_ENTRIES", "25")
        monkeypatch.setenv("WAYFARER_RNG_SEED", "99")
        s = Settings(_env_file=None)
        assert s.JOURNAL_MAX_ENTRIES == 25
        assert s.RNG_SEED == 99


class TestLogging:
    def test_level_names_resolved(self):
        assert _resolve_level("debug") == logging.DEBUG
        assert _resolve_level("WARNING") == logging.WARNING
        assert _resolve_level("verbose") == logging.INFO
        assert _resolve_level(logging.ERROR) == logging.ERROR

    def test_setup_uses_settings_by_default(self):
        setup_logging()
        setup_logging("debug")
        assert isinstance(get_logger("src.core.travel"), logging.Logger)


class TestSampleWorld:
    def test_sample_world_loads(self):
        world = load_world(SAMPLE_WORLD)
        graph = world.to_graph()
        assert graph.find_edge("forest", "town").travel_time == 10
        assert graph.get_node("keep").requirements[0].value == 3
        assert [e.name for e in world.enemy_catalogue()["cave"]] == ["Bat Swarm", "Cave Troll"]
