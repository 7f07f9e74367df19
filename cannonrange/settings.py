"""Process settings for the command-line runner."""

from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Runner settings, overridable via environment variables."""

    LOG_LEVEL: str = "INFO"
    SEED: int | None = None
    # Safety cap on ticks per shot for the headless loop.
    MAX_TICKS_PER_SHOT: int = 10_000
    REPLAY_DIR: Path = Path("runs/replays")

    model_config = SettingsConfigDict(env_prefix="CANNONRANGE_", env_file=".env", extra="ignore")


settings = Settings()
