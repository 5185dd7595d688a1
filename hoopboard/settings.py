from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from hoopboard.ingestion.providers import get_provider

logger = logging.getLogger(__name__)
_SETTINGS: Settings | None = None

DEFAULT_RELAY_URL = "http://127.0.0.1:8000/relay/"
DEFAULT_PROVIDER = "espn"
DEFAULT_TIMEZONE = "America/New_York"


@dataclass(frozen=True)
class Settings:
    relay_url: str
    live_provider: str
    history_provider: str
    timezone: str
    refresh_seconds: int
    notice_seconds: int
    fetch_timeout_seconds: float | None

    @property
    def tz(self) -> ZoneInfo:
        return ZoneInfo(self.timezone)


def _env_int(name: str, default: int, minimum: int = 1) -> int:
    raw = (os.getenv(name) or "").strip()
    if not raw:
        return default
    try:
        value = int(raw)
    except ValueError:
        logger.error("%s must be an integer, got %r. Using %s.", name, raw, default)
        return default
    if value < minimum:
        logger.error("%s must be >= %s, got %s. Using %s.", name, minimum, value, default)
        return default
    return value


def _env_timeout(name: str, default: float) -> float | None:
    raw = (os.getenv(name) or "").strip()
    if not raw:
        return default
    try:
        value = float(raw)
    except ValueError:
        logger.error("%s must be a number, got %r. Using %s.", name, raw, default)
        return default
    # 0 disables the timeout entirely.
    return value if value > 0 else None


def _env_provider(name: str, *, history: bool) -> str:
    raw = (os.getenv(name) or DEFAULT_PROVIDER).strip().lower()
    provider = get_provider(raw)
    if provider is None:
        logger.error("%s=%s is not a supported provider. Using %s.", name, raw, DEFAULT_PROVIDER)
        return DEFAULT_PROVIDER
    if history and not provider.supports_history:
        logger.error("%s=%s cannot serve past dates. Using %s.", name, raw, DEFAULT_PROVIDER)
        return DEFAULT_PROVIDER
    return provider.key


def _env_timezone(name: str) -> str:
    raw = (os.getenv(name) or DEFAULT_TIMEZONE).strip()
    try:
        ZoneInfo(raw)
    except (ZoneInfoNotFoundError, ValueError):
        logger.error("%s=%s is not a known timezone. Using %s.", name, raw, DEFAULT_TIMEZONE)
        return DEFAULT_TIMEZONE
    return raw


def load_settings() -> Settings:
    return Settings(
        relay_url=(os.getenv("HOOPBOARD_RELAY_URL") or DEFAULT_RELAY_URL).strip(),
        live_provider=_env_provider("HOOPBOARD_LIVE_PROVIDER", history=False),
        history_provider=_env_provider("HOOPBOARD_HISTORY_PROVIDER", history=True),
        timezone=_env_timezone("HOOPBOARD_TIMEZONE"),
        refresh_seconds=_env_int("HOOPBOARD_REFRESH_SECONDS", 30),
        notice_seconds=_env_int("HOOPBOARD_NOTICE_SECONDS", 5),
        fetch_timeout_seconds=_env_timeout("HOOPBOARD_FETCH_TIMEOUT_SECONDS", 12.0),
    )


def get_settings() -> Settings:
    global _SETTINGS
    if _SETTINGS is not None:
        return _SETTINGS
    _SETTINGS = load_settings()
    return _SETTINGS
