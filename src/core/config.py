"""Application configuration, loaded from environment variables (prefix BOARDGAMES_) with sensible defaults."""

from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Attributes:
        database_url: SQLAlchemy URL of the match store.
        database_echo: Log all SQL statements.
        hearts_target_score: A Hearts match ends once any cumulative score reaches this value.
        hearts_moon_shot_penalty: Points every other player receives when someone shoots the moon.
    """

    model_config = SettingsConfigDict(
        env_prefix="BOARDGAMES_",
        extra="ignore",
    )

    database_url: str = "sqlite:///./boardgames.db"
    database_echo: bool = False
    hearts_target_score: int = 100
    hearts_moon_shot_penalty: int = 26


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Cached settings instance. Call get_settings.cache_clear() to reload."""
    return Settings()
