"""Quick probe: fetch and normalize one scoreboard, print one line per game."""

from __future__ import annotations

import argparse
import logging
from dataclasses import replace
from datetime import date, datetime

from hoopboard.ingestion.errors import IngestionError
from hoopboard.ingestion.providers import PROVIDERS, get_provider
from hoopboard.ingestion.readers import read_scoreboard
from hoopboard.settings import get_settings


def _parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Probe a scoreboard provider for a date and print normalized games.",
    )
    parser.add_argument(
        "--provider",
        type=str,
        default="espn",
        help=f"Provider key ({', '.join(sorted(PROVIDERS))}).",
    )
    parser.add_argument(
        "--date",
        type=str,
        default="today",
        help="Date in YYYY-MM-DD format (default: today).",
    )
    parser.add_argument(
        "--relay-url",
        type=str,
        default=None,
        help="Relay service URL (default: HOOPBOARD_RELAY_URL).",
    )
    return parser.parse_args(argv)


def _resolve_date(raw: str, today: date) -> date:
    cleaned = raw.strip().lower()
    if cleaned == "today":
        return today
    try:
        return datetime.strptime(cleaned, "%Y-%m-%d").date()
    except ValueError:
        raise SystemExit(f"Invalid date: {raw}. Use YYYY-MM-DD.")


def main(argv: list[str] | None = None) -> None:
    logging.basicConfig(level=logging.INFO, format="%(message)s")
    args = _parse_args(argv)
    provider = get_provider(args.provider)
    if provider is None:
        supported = ", ".join(sorted(PROVIDERS))
        raise SystemExit(f"Unsupported provider: {args.provider}. Supported providers: {supported}")

    settings = get_settings()
    if args.relay_url:
        settings = replace(settings, relay_url=args.relay_url)
    today = datetime.now(settings.tz).date()
    target_date = _resolve_date(args.date, today)
    if target_date != today and not provider.supports_history:
        raise SystemExit(f"Provider {provider.key} only serves today's scoreboard.")

    try:
        payload = read_scoreboard(provider, target_date, settings)
    except IngestionError as exc:
        logging.error("Scoreboard error: %s", exc)
        raise SystemExit(1)

    games = provider.normalize(payload)
    logging.info(
        "Normalized %s games for provider=%s date=%s",
        len(games),
        provider.key,
        target_date.isoformat(),
    )
    for game in games:
        logging.info(
            "%s  %s %s @ %s %s  [%s]",
            game.id,
            game.away.tricode,
            game.away.score,
            game.home.tricode,
            game.home.score,
            game.clock,
        )


if __name__ == "__main__":
    main()
