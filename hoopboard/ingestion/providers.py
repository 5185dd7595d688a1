"""Supported scoreboard providers: URL builder + normalizer per upstream feed."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Callable

from hoopboard.ingestion.espn_client import build_scoreboard_url
from hoopboard.ingestion.espn_parser import parse_scoreboard
from hoopboard.ingestion.nba_client import build_live_url, build_stats_url
from hoopboard.ingestion.nba_live_parser import parse_live_scoreboard
from hoopboard.ingestion.nba_stats_parser import parse_stats_scoreboard
from hoopboard.ingestion.schema import Game


@dataclass(frozen=True)
class Provider:
    key: str
    build_url: Callable[[date], str]
    normalize: Callable[[dict], list[Game]]
    via_relay: bool
    supports_history: bool


PROVIDERS: dict[str, Provider] = {
    "nba_live": Provider(
        key="nba_live",
        build_url=build_live_url,
        normalize=parse_live_scoreboard,
        via_relay=False,
        supports_history=False,
    ),
    "nba_stats": Provider(
        key="nba_stats",
        build_url=build_stats_url,
        normalize=parse_stats_scoreboard,
        via_relay=True,
        supports_history=True,
    ),
    "espn": Provider(
        key="espn",
        build_url=build_scoreboard_url,
        normalize=parse_scoreboard,
        via_relay=True,
        supports_history=True,
    ),
}


def get_provider(provider_key: str) -> Provider | None:
    """Return the provider registered under a key (e.g., espn).

    Returns None when the provider is not supported.
    """

    return PROVIDERS.get(provider_key.strip().lower())
