"""Source readers: one outbound request per scoreboard load."""

from __future__ import annotations

import logging
from datetime import date, datetime
from typing import Any

from hoopboard.ingestion.http import fetch_json, wrap_relay
from hoopboard.ingestion.providers import Provider, get_provider
from hoopboard.settings import Settings

logger = logging.getLogger(__name__)


def _require_provider(provider_key: str) -> Provider:
    provider = get_provider(provider_key)
    if provider is None:
        raise ValueError(f"Unsupported provider: {provider_key}")
    return provider


def build_request_url(provider: Provider, game_date: date, settings: Settings) -> str:
    target_url = provider.build_url(game_date)
    if provider.via_relay:
        return wrap_relay(target_url, settings.relay_url)
    return target_url


def read_scoreboard(provider: Provider, game_date: date, settings: Settings) -> dict[str, Any]:
    url = build_request_url(provider, game_date, settings)
    logger.info(
        "Fetching scoreboard provider=%s date=%s relay=%s",
        provider.key,
        game_date.isoformat(),
        provider.via_relay,
    )
    return fetch_json(url, timeout=settings.fetch_timeout_seconds)


def fetch_live(settings: Settings, now: datetime | None = None) -> dict[str, Any]:
    """Fetch today's scoreboard; "today" is the calendar date in the configured timezone."""
    provider = _require_provider(settings.live_provider)
    current = now.astimezone(settings.tz) if now else datetime.now(settings.tz)
    return read_scoreboard(provider, current.date(), settings)


def fetch_historical(settings: Settings, game_date: date) -> dict[str, Any]:
    provider = _require_provider(settings.history_provider)
    if not provider.supports_history:
        raise ValueError(f"Provider {provider.key} only serves today's scoreboard")
    return read_scoreboard(provider, game_date, settings)
