"""NBA.com scoreboard URLs (live CDN feed and the stats API)."""

from __future__ import annotations

from datetime import date
from urllib.parse import quote

NBA_LIVE_SCOREBOARD_URL = (
    "https://cdn.nba.com/static/json/liveData/scoreboard/todaysScoreboard_00.json"
)
NBA_STATS_SCOREBOARD_URL = "https://stats.nba.com/stats/scoreboardv2"


def build_live_url(game_date: date | None = None) -> str:
    # The CDN feed only ever serves the current day.
    return NBA_LIVE_SCOREBOARD_URL


def format_stats_date(game_date: date) -> str:
    return quote(game_date.strftime("%m/%d/%Y"), safe="")


def build_stats_url(game_date: date) -> str:
    return (
        f"{NBA_STATS_SCOREBOARD_URL}?DayOffset=0&LeagueID=00"
        f"&gameDate={format_stats_date(game_date)}"
    )
