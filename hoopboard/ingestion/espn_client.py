"""ESPN scoreboard URLs."""

from __future__ import annotations

import os
import re
from datetime import date
from urllib.parse import urlencode

ESPN_BASE_URL = os.getenv("ESPN_BASE_URL", "https://site.api.espn.com").rstrip("/")
SCOREBOARD_PATH = "/apis/site/v2/sports/basketball/nba/scoreboard"


def normalize_dates(value: str | date | None) -> str | None:
    if value is None:
        return None
    if isinstance(value, date):
        return value.strftime("%Y%m%d")
    cleaned = value.strip()
    if not cleaned:
        return None
    if re.fullmatch(r"\d{8}", cleaned):
        return cleaned
    if re.fullmatch(r"\d{4}-\d{2}-\d{2}", cleaned):
        return cleaned.replace("-", "")
    raise ValueError("dates must be YYYYMMDD or YYYY-MM-DD")


def build_scoreboard_url(game_date: str | date | None = None) -> str:
    normalized_dates = normalize_dates(game_date)
    base_url = f"{ESPN_BASE_URL}{SCOREBOARD_PATH}"
    if normalized_dates:
        return f"{base_url}?{urlencode({'dates': normalized_dates})}"
    return base_url
