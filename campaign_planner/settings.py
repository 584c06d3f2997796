from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict

# Look for .env at the repository root (one level up from this file)
_env_file = Path(__file__).parent.parent / ".env"


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=str(_env_file), env_file_encoding="utf-8", extra="ignore"
    )

    DATABASE_URL: str = "sqlite+pysqlite:///./campaign_planner.db"
    LOG_LEVEL: str = "INFO"

    # Default CPMs, read once when the catalogue is built
    DEFAULT_CPM_VIDEO: float = 12.0
    DEFAULT_CPM_DISPLAY: float = 6.0
    DEFAULT_CPM_SOCIAL: float = 4.0

    # Request limits
    MAX_CUSTOM_STRATEGIES: int = 10
    CUSTOM_STRATEGY_NAME_MAX_LENGTH: int = 60

    # Saved custom strategies
    SAVED_STRATEGY_LIST_LIMIT: int = 20


settings = Settings()
