"""
Application Settings
Load from environment variables
"""

from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_CONFIG_DIR = Path(__file__).resolve().parents[2] / "config"


class Settings(BaseSettings):
    """Application settings from environment"""

    # ======================
    # Application
    # ======================
    APP_ENV: str = "development"
    DEBUG: bool = False

    # ======================
    # Logging
    # ======================
    LOG_LEVEL: str = "INFO"
    LOG_FORMAT: str = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"

    # ======================
    # Timezone
    # ======================
    # Used to decide "today" for age calculation and reporting windows
    TIMEZONE: str = "America/New_York"

    # ======================
    # Domain config (YAML)
    # ======================
    CONFIG_DIR: Path = DEFAULT_CONFIG_DIR

    # ======================
    # Dashboard
    # ======================
    DEFAULT_PERIOD: str = "12m"

    # ======================
    # Pydantic v2 config
    # ======================
    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=True,
        extra="forbid",
    )


settings = Settings()
