"""NBA team id to tricode mapping and logo URL conventions."""

from __future__ import annotations

from typing import Any

from hoopboard.ingestion.schema import PLACEHOLDER_TRICODE, TeamResult

# NBA CDN logo by NBA.com team id
_NBA_LOGO_URL = "https://cdn.nba.com/logos/nba/{team_id}/global/L/logo.svg"

# ESPN CDN base URL for team logos
_ESPN_LOGO_BASE = "https://a.espncdn.com/i/teamlogos"

# Mapping: NBA.com team id -> tricode
_NBA_TEAM_TRICODES: dict[int, str] = {
    1610612737: "ATL",
    1610612738: "BOS",
    1610612739: "CLE",
    1610612740: "NOP",
    1610612741: "CHI",
    1610612742: "DAL",
    1610612743: "DEN",
    1610612744: "GSW",
    1610612745: "HOU",
    1610612746: "LAC",
    1610612747: "LAL",
    1610612748: "MIA",
    1610612749: "MIL",
    1610612750: "MIN",
    1610612751: "BKN",
    1610612752: "NYK",
    1610612753: "ORL",
    1610612754: "IND",
    1610612755: "PHI",
    1610612756: "PHX",
    1610612757: "POR",
    1610612758: "SAC",
    1610612759: "SAS",
    1610612760: "OKC",
    1610612761: "TOR",
    1610612762: "UTA",
    1610612763: "MEM",
    1610612764: "WAS",
    1610612765: "DET",
    1610612766: "CHA",
}


def tricode_for_team_id(team_id: Any) -> str:
    """Return the tricode for an NBA.com team id (int or numeric string).

    Falls back to a generic placeholder when the id isn't recognized.
    """
    try:
        return _NBA_TEAM_TRICODES.get(int(team_id), PLACEHOLDER_TRICODE)
    except (TypeError, ValueError, OverflowError):
        return PLACEHOLDER_TRICODE


def espn_logo_url(abbreviation: str | None, size: int = 500) -> str | None:
    """Return ESPN CDN logo URL for an ESPN team abbreviation."""
    if not abbreviation:
        return None
    return f"{_ESPN_LOGO_BASE}/nba/{size}/{abbreviation.lower()}.png"


def team_logo_url(team: TeamResult) -> str:
    """Explicit logo when the provider sent one, else the NBA CDN id convention.

    Only NBA.com team ids have a CDN logo; other providers' ids get no URL.
    """
    if team.logo:
        return team.logo
    try:
        team_id = int(team.id)
    except (TypeError, ValueError, OverflowError):
        return ""
    if team_id in _NBA_TEAM_TRICODES:
        return _NBA_LOGO_URL.format(team_id=team_id)
    return ""
