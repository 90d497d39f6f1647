"""Simulation core configuration loaded from environment variables and .env file."""

from typing import Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Core settings.

    Values are loaded from environment variables first (prefix ``WAYFARER_``),
    then from a .env file in the project root as fallback.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="WAYFARER_",
        extra="ignore",
    )

    LOG_LEVEL: str = "INFO"

    # Journal
    JOURNAL_MAX_ENTRIES: int = 100

    # Exploration
    EXPLORATION_STAMINA_COST: int = 5

    # Travel (시간 단위: 초, 타이머 단위: ms)
    TRAVEL_MIN_TIME: int = 3
    DEFAULT_TRAVEL_TIME: int = 10
    TRAVEL_TICK_INTERVAL_MS: int = 100
    TRAVEL_COMPLETE_DELAY_MS: int = 300

    # Combat
    DEFEAT_RECOVERY_RATIO: float = 0.1

    # 재현 가능한 세션용 RNG 시드 (None = 비결정적)
    RNG_SEED: Optional[int] = None


settings = Settings()
