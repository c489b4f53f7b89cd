"""Centralized settings management for epvotes.

Environment variables are read after loading a .env file from the current
working directory, so values in .env take priority over the system
environment.

Usage:
    from epvotes.settings import get_env, settings

    api_url = get_env("OPEN_DATA_API_URL")
    timeout = settings.HTTP_TIMEOUT
"""

import os
from pathlib import Path

from dotenv import load_dotenv

_dotenv_path = Path.cwd() / ".env"
if _dotenv_path.exists():
    load_dotenv(_dotenv_path)


def get_env(key: str, default: str | None = None) -> str | None:
    """Get environment variable value, loading from .env first.

    Args:
        key: Environment variable name
        default: Default value if key is not found

    Returns:
        Environment variable value or default
    """
    return os.getenv(key, default)


def get_env_bool(key: str, default: bool = False) -> bool:
    """Get environment variable as boolean.

    "true", "yes", "1" and "on" (case-insensitive) are True, anything else
    is False.

    Examples:
        >>> cache_enabled = get_env_bool("CACHE_ENABLED", False)
    """
    value = get_env(key)
    if value is None:
        return default
    return value.lower() in ("true", "yes", "1", "on")


def get_env_int(key: str, default: int | None = None) -> int | None:
    """Get environment variable as integer, or default if unset or invalid."""
    value = get_env(key)
    if value is None:
        return default

    try:
        return int(value)
    except ValueError:
        return default


def get_env_float(key: str, default: float | None = None) -> float | None:
    """Get environment variable as float, or default if unset or invalid."""
    value = get_env(key)
    if value is None:
        return default

    try:
        return float(value)
    except ValueError:
        return default


class Settings:
    """Commonly-used environment variables with defaults.

    Usage:
        settings = Settings()
        api_url = settings.OPEN_DATA_API_URL
    """

    def __init__(self) -> None:
        # Remote endpoints
        self.OPEN_DATA_API_URL: str = get_env(
            "OPEN_DATA_API_URL", "https://data.europarl.europa.eu/api/v1"
        )
        self.DOCUMENT_SITE_URL: str = get_env(
            "DOCUMENT_SITE_URL", "https://www.europarl.europa.eu/doceo/document"
        )

        # HTTP Configuration
        self.HTTP_TIMEOUT: float = get_env_float("HTTP_TIMEOUT", 60.0) or 60.0
        self.HTTP_RETRIES: int = get_env_int("HTTP_RETRIES", 3) or 3

        # Roster loaded for tallying
        self.ROSTER_LIMIT: int = get_env_int("ROSTER_LIMIT", 1000) or 1000

        # Cache Configuration
        self.CACHE_DIR: str = get_env("CACHE_DIR", "./cache")
        self.CACHE_ENABLED: bool = get_env_bool("CACHE_ENABLED", False)

        # Logging Configuration
        self.LOKI_URL: str | None = get_env("LOKI_URL")

        # Sentry Configuration
        self.SENTRY_DSN: str | None = get_env("SENTRY_DSN")
        self.SENTRY_ENVIRONMENT: str = get_env("SENTRY_ENVIRONMENT", "production")
        self.SENTRY_TRACES_SAMPLE_RATE: float = (
            get_env_float("SENTRY_TRACES_SAMPLE_RATE", 0.0) or 0.0
        )

    def __repr__(self) -> str:
        # Mask sensitive values
        safe_attrs = {}
        for key, value in self.__dict__.items():
            if any(
                sensitive in key.upper()
                for sensitive in ["DSN", "PASSWORD", "SECRET", "TOKEN", "KEY"]
            ):
                safe_attrs[key] = "***" if value else None
            else:
                safe_attrs[key] = value

        return f"Settings({safe_attrs})"


settings = Settings()
