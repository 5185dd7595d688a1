"""Per-team leader extraction.

Leader payloads come in several shapes: a single player object, a list of
players, or (ESPN) a list of stat categories each holding its own leaders.
Extraction never raises; failures come back as ``Err(LeaderParseError)``.
"""

from __future__ import annotations

import logging
import math
from typing import Any

from hoopboard.ingestion.errors import LeaderParseError
from hoopboard.ingestion.fields import Err, Ok, Result, as_text, first_present, path
from hoopboard.ingestion.schema import Leader, LeaderPair

logger = logging.getLogger(__name__)

_SCORING_CATEGORIES = {"points", "pts", "pointspergame", "ppg"}

_NAME_FIELDS = (
    path("name"),
    lambda leader: _joined_name(leader),
    path("playerName"),
    path("personFullName"),
    path("athlete", "displayName"),
    path("athlete", "fullName"),
    lambda leader: leader.get("player") if isinstance(leader.get("player"), str) else None,
    path("personId"),
    path("playerId"),
    path("athlete", "id"),
)
_POINTS_FIELDS = (path("points"), path("pts"), path("PTS"), path("pointsScored"))
_REBOUNDS_FIELDS = (path("rebounds"), path("reb"), path("REB"))
_ASSISTS_FIELDS = (path("assists"), path("ast"), path("AST"))


def _joined_name(leader: dict) -> str | None:
    first = as_text(leader.get("firstName"))
    last = as_text(leader.get("lastName"))
    joined = f"{first} {last}".strip()
    return joined or None


def _is_category(entry: Any) -> bool:
    return isinstance(entry, dict) and isinstance(entry.get("leaders"), list)


def _category_key(category: dict) -> str:
    for key in ("name", "abbreviation", "shortDisplayName"):
        value = category.get(key)
        if isinstance(value, str):
            return value.lower()
    return ""


def _pick_entry(raw: Any) -> tuple[dict | None, bool]:
    """Return the leader entry and whether it came from a scoring category."""
    entry = raw
    if isinstance(entry, list):
        if not entry:
            return None, False
        categories = [item for item in entry if _is_category(item)]
        if categories:
            scoring = next(
                (item for item in categories if _category_key(item) in _SCORING_CATEGORIES),
                categories[0],
            )
            entry = scoring
        else:
            entry = entry[0]
    scoring_category = False
    if _is_category(entry):
        scoring_category = _category_key(entry) in _SCORING_CATEGORIES
        players = entry["leaders"]
        entry = players[0] if players else None
    if entry is None:
        return None, False
    if not isinstance(entry, dict):
        raise LeaderParseError(f"unexpected leader entry type {type(entry).__name__}")
    return entry, scoring_category


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool) and math.isfinite(value)


def _number_text(value: Any) -> str:
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def _stat_text(entry: dict, scoring_category: bool = False) -> str:
    points = first_present(entry, _POINTS_FIELDS)
    if points is None and scoring_category and _is_number(entry.get("value")):
        # A scoring category carries the point total as its generic value.
        points = entry["value"]
    if points is not None:
        parts = [f"{_number_text(points)} PTS"]
        rebounds = first_present(entry, _REBOUNDS_FIELDS)
        assists = first_present(entry, _ASSISTS_FIELDS)
        if rebounds is not None:
            parts.append(f"{_number_text(rebounds)} REB")
        if assists is not None:
            parts.append(f"{_number_text(assists)} AST")
        return ", ".join(parts)
    stat = entry.get("stat")
    if isinstance(stat, str):
        return stat
    if isinstance(stat, list):
        return ", ".join(str(item) for item in stat)
    return as_text(entry.get("displayValue"))


def _format_leader(entry: dict, scoring_category: bool) -> Leader:
    return Leader(
        name=as_text(first_present(entry, _NAME_FIELDS)),
        stat=_stat_text(entry, scoring_category),
    )


def extract_leader(raw: Any) -> Result[Leader | None]:
    if raw is None:
        return Ok(None)
    try:
        entry, scoring_category = _pick_entry(raw)
        return Ok(_format_leader(entry, scoring_category) if entry is not None else None)
    except Exception as exc:
        if isinstance(exc, LeaderParseError):
            return Err(exc)
        return Err(LeaderParseError(f"{type(exc).__name__}: {exc}"))


def leader_or_none(result: Result[Leader | None], game_id: str, side: str) -> Leader | None:
    if isinstance(result, Ok):
        return result.value
    logger.debug("Leader dropped game_id=%s side=%s error=%s", game_id, side, result.error)
    return None


def leader_pair(home_raw: Any, away_raw: Any, game_id: str) -> LeaderPair:
    return LeaderPair(
        home=leader_or_none(extract_leader(home_raw), game_id, "home"),
        away=leader_or_none(extract_leader(away_raw), game_id, "away"),
    )
