"""Runtime settings for the money tracker.

Values come from environment variables, with a local ``.env`` file loaded
first so development setups don't need to export anything.
"""

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

# Load environment variables
load_dotenv()

TRUTHY = {"1", "true", "yes", "on"}


def _env_flag(name: str, default: bool = False) -> bool:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    return raw.strip().lower() in TRUTHY


@dataclass
class Settings:
    """Application configuration."""

    database_url: str
    log_level: str
    log_dir: Optional[Path]
    currency_symbol: str
    strict_types: bool
    api_host: str
    api_port: int

    @classmethod
    def from_env(cls) -> "Settings":
        """Build settings from the current environment.

        Default to local SQLite, but allow override for a hosted Postgres.
        """
        log_dir = os.getenv("LOG_DIR")
        return cls(
            database_url=os.getenv("DATABASE_URL", "sqlite:///money_tracker.db"),
            log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
            log_dir=Path(log_dir) if log_dir else None,
            currency_symbol=os.getenv("CURRENCY_SYMBOL", "¥"),
            strict_types=_env_flag("STRICT_TRANSACTION_TYPES"),
            api_host=os.getenv("API_HOST", "0.0.0.0"),
            api_port=int(os.getenv("API_PORT", "8001")),
        )


def get_settings() -> Settings:
    return Settings.from_env()
