"""Application configuration."""

from functools import lru_cache
from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict

from core.models.config import (
    DEFAULT_LENGTH,
    DEFAULT_OFFSET,
    DEFAULT_SOURCE,
    DEFAULT_STD_DEV_MULTIPLIER,
    BollingerParams,
)

BACKEND_DIR = Path(__file__).parent.parent
DEFAULT_DATA_FILE = BACKEND_DIR / "data" / "ohlcv.json"
DEFAULT_INDICATOR_CONFIG = BACKEND_DIR / "indicators.yaml"


class Settings(BaseSettings):
    """Application settings loaded from environment variables (``BB_`` prefix)."""

    model_config = SettingsConfigDict(
        env_prefix="BB_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Default indicator inputs (the engine itself has no defaults to persist)
    length: int = DEFAULT_LENGTH
    source: str = DEFAULT_SOURCE
    std_dev_multiplier: float = DEFAULT_STD_DEV_MULTIPLIER
    offset: int = DEFAULT_OFFSET

    # Data
    data_file: Path = DEFAULT_DATA_FILE
    indicator_config: Path = DEFAULT_INDICATOR_CONFIG

    # Logging
    log_level: str = "INFO"

    def default_params(self) -> BollingerParams:
        """Build validated indicator inputs from these settings.

        Raises:
            pydantic.ValidationError: If the configured values are invalid
        """
        return BollingerParams(
            length=self.length,
            source=self.source,
            std_dev_multiplier=self.std_dev_multiplier,
            offset=self.offset,
        )


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
