"""Application configuration helpers."""

import logging
import os
from dataclasses import dataclass
from functools import lru_cache

from dotenv import load_dotenv

logger = logging.getLogger(__name__)

_TRUTHY = {"1", "true", "yes"}


class ConfigError(RuntimeError):
    """Raised when a configuration value cannot be parsed."""


@dataclass(frozen=True)
class Settings:
    google_api_key: str
    port: int = 8080
    request_timeout: float = 10.0
    fetch_details: bool = True

    @property
    def demo_mode(self) -> bool:
        return not self.google_api_key


def _parse_env(name: str, default: str, cast):
    raw = os.getenv(name, default)
    try:
        return cast(raw)
    except (TypeError, ValueError) as exc:
        raise ConfigError(f"{name} has an invalid value: {raw!r}") from exc


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Load settings from environment variables with sensible defaults."""
    load_dotenv()

    google_api_key = os.getenv("GOOGLE_PLACES_API_KEY", "").strip()
    port = _parse_env("PORT", "8080", int)
    request_timeout = _parse_env("PLACES_REQUEST_TIMEOUT", "10", float)
    fetch_details = os.getenv("PLACES_FETCH_DETAILS", "true").lower() in _TRUTHY

    if not google_api_key:
        logger.warning("GOOGLE_PLACES_API_KEY is not configured; serving demo data only.")

    return Settings(
        google_api_key=google_api_key,
        port=port,
        request_timeout=request_timeout,
        fetch_details=fetch_details,
    )
