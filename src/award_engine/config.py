"""Configuration management for the award engine process."""

from __future__ import annotations

import os
from dataclasses import dataclass
from decimal import Decimal
from functools import lru_cache

from dotenv import load_dotenv

from award_engine import __version__


@dataclass(frozen=True)
class Settings:
    """Application settings loaded from environment."""

    award_config_path: str
    engine_version: str
    host: str
    port: int
    debug: bool
    log_level: str
    daily_overtime_threshold: Decimal | None

    @classmethod
    def from_env(cls) -> Settings:
        """Load settings from environment variables."""
        load_dotenv()

        # Unset means the award table's own daily threshold applies.
        threshold = os.getenv("DAILY_OVERTIME_THRESHOLD")

        return cls(
            award_config_path=os.getenv("AWARD_CONFIG_PATH", "./config/ma000018"),
            engine_version=os.getenv("ENGINE_VERSION", __version__),
            host=os.getenv("HOST", "0.0.0.0"),
            port=int(os.getenv("PORT", "8000")),
            debug=os.getenv("DEBUG", "false").lower() == "true",
            log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
            daily_overtime_threshold=Decimal(threshold) if threshold else None,
        )


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings.from_env()
