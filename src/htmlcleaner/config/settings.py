"""Application settings and configuration management."""

import os
from functools import lru_cache
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

_TRUTHY = ("1", "true", "yes", "on")


def _env_flag(name: str) -> bool:
    return os.getenv(name, "").strip().lower() in _TRUTHY


class Settings:
    """Command-line defaults loaded from environment variables."""

    def __init__(self) -> None:
        """Load environment variables from .env file."""
        load_dotenv()

    @property
    def log_level(self) -> str:
        """Logging level name for the command-line tool."""
        return os.getenv("HTMLCLEANER_LOG_LEVEL", "WARNING").strip().upper()

    @property
    def allowlist_path(self) -> Optional[Path]:
        """JSON allow-list used when none is given on the command line."""
        value = os.getenv("HTMLCLEANER_ALLOWLIST")
        return Path(value) if value else None

    @property
    def allow_javascript_prefix(self) -> bool:
        """Keep ``javascript:`` attribute values by default."""
        return _env_flag("HTMLCLEANER_ALLOW_JAVASCRIPT_PREFIX")

    @property
    def allow_querystring(self) -> bool:
        """Keep query strings in attribute values by default."""
        return _env_flag("HTMLCLEANER_ALLOW_QUERYSTRING")


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Get cached settings instance (singleton pattern)."""
    return Settings()
