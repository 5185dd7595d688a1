"""Parser for stats.nba.com ``scoreboardv2`` tabular payloads.

The feed returns ``resultSets``: each set carries ``headers`` and a ``rowSet``
of positional rows. Columns are looked up by header name; older responses
without headers fall back to the fixed positions below.
"""

from __future__ import annotations

from typing import Any

from hoopboard.ingestion.fields import (
    ColumnLookup,
    as_text,
    opaque_id,
    parse_record,
    safe_score,
)
from hoopboard.ingestion.leaders import leader_pair
from hoopboard.ingestion.schema import Game, LeaderPair, StatusCode, TeamResult
from hoopboard.ingestion.status import derive_status_code, live_clock
from hoopboard.team_logos import tricode_for_team_id

# scoreboardv2 positions, 2019-2024 response shape.
GAME_HEADER_LEGACY_COLUMNS: dict[str, int] = {
    "GAME_ID": 2,
    "GAME_STATUS_ID": 3,
    "GAME_STATUS_TEXT": 4,
    "HOME_TEAM_ID": 6,
    "VISITOR_TEAM_ID": 7,
    "HOME_TEAM_WINS_LOSSES": 8,
    "VISITOR_TEAM_WINS_LOSSES": 9,
    "LIVE_PERIOD": 9,
    "LIVE_PC_TIME": 10,
}

LINE_SCORE_LEGACY_COLUMNS: dict[str, int] = {
    "GAME_ID": 2,
    "TEAM_ID": 3,
    "TEAM_ABBREVIATION": 4,
    "TEAM_NAME": 6,
    "TEAM_WINS_LOSSES": 7,
    "PTS": 22,
}

_GAME_HEADER = ("GameHeader", 0)
_LINE_SCORE = ("LineScore", 1)
_TEAM_LEADERS = ("TeamLeaders", None)


def _result_set(result_sets: list, name: str, fallback_index: int | None) -> dict | None:
    for result_set in result_sets:
        if not isinstance(result_set, dict):
            continue
        set_name = result_set.get("name")
        if isinstance(set_name, str) and name.lower() in set_name.lower():
            return result_set
    if fallback_index is not None and fallback_index < len(result_sets):
        candidate = result_sets[fallback_index]
        if isinstance(candidate, dict):
            return candidate
    return None


def _rows(result_set: dict | None) -> list[list]:
    if result_set is None:
        return []
    rows = result_set.get("rowSet")
    if not isinstance(rows, list):
        return []
    return [row for row in rows if isinstance(row, list)]


def _find_team_row(rows: list[list], lookup: ColumnLookup, game_id: Any, team_id: Any) -> list | None:
    if game_id is None or team_id is None:
        return None
    for row in rows:
        if str(lookup.get(row, "GAME_ID")) == str(game_id) and str(
            lookup.get(row, "TEAM_ID")
        ) == str(team_id):
            return row
    return None


class _Tables:
    def __init__(self, result_sets: list) -> None:
        header_set = _result_set(result_sets, *_GAME_HEADER)
        line_set = _result_set(result_sets, *_LINE_SCORE)
        leaders_set = _result_set(result_sets, *_TEAM_LEADERS)

        self.has_header_rows = header_set is not None and isinstance(header_set.get("rowSet"), list)
        self.header_rows = _rows(header_set)
        self.header = ColumnLookup.from_headers(
            header_set.get("headers") if header_set else None, GAME_HEADER_LEGACY_COLUMNS
        )
        self.line_rows = _rows(line_set)
        self.line = ColumnLookup.from_headers(
            line_set.get("headers") if line_set else None, LINE_SCORE_LEGACY_COLUMNS
        )
        self.leader_rows = _rows(leaders_set) if leaders_set is not None else None
        self.leaders = ColumnLookup.from_headers(
            leaders_set.get("headers") if leaders_set else None, {}
        )


def _parse_team(tables: _Tables, row: list, game_id: Any, side: str) -> TeamResult:
    prefix = "HOME" if side == "home" else "VISITOR"
    team_id = opaque_id(tables.header.get(row, f"{prefix}_TEAM_ID"))
    line = _find_team_row(tables.line_rows, tables.line, game_id, team_id)

    wins, losses = parse_record(tables.header.get(row, f"{prefix}_TEAM_WINS_LOSSES"))
    if wins is None and line is not None:
        wins, losses = parse_record(tables.line.get(line, "TEAM_WINS_LOSSES"))

    tricode = as_text(tables.line.get(line, "TEAM_ABBREVIATION")) if line else ""
    name = ""
    if line is not None:
        name = as_text(tables.line.get(line, "TEAM_NAME") or tables.line.get(line, "TEAM_NICKNAME"))

    return TeamResult(
        id=team_id,
        tricode=tricode or tricode_for_team_id(team_id),
        name=name,
        score=safe_score(tables.line.get(line, "PTS") if line else None),
        wins=wins,
        losses=losses,
    )


def _leader_source(tables: _Tables, game_id: Any, team_id: Any) -> dict | None:
    row = _find_team_row(tables.leader_rows or [], tables.leaders, game_id, team_id)
    if row is None:
        return None
    source = {
        "name": tables.leaders.get(row, "PTS_PLAYER_NAME"),
        "personId": tables.leaders.get(row, "PTS_PLAYER_ID"),
        "points": tables.leaders.get(row, "PTS"),
    }
    if all(value is None for value in source.values()):
        return None
    return source


def _parse_leaders(tables: _Tables, row: list, game_id: str) -> LeaderPair | None:
    if tables.leader_rows is None:
        return None
    raw_game_id = tables.header.get(row, "GAME_ID")
    return leader_pair(
        _leader_source(tables, raw_game_id, tables.header.get(row, "HOME_TEAM_ID")),
        _leader_source(tables, raw_game_id, tables.header.get(row, "VISITOR_TEAM_ID")),
        game_id,
    )


def _parse_game(tables: _Tables, row: list) -> Game:
    raw_game_id = tables.header.get(row, "GAME_ID")
    game_id = as_text(raw_game_id)
    status_text = as_text(tables.header.get(row, "GAME_STATUS_TEXT"))
    status_code = derive_status_code(
        code=tables.header.get(row, "GAME_STATUS_ID"),
        text=status_text,
    )
    clock = status_text
    if status_code == StatusCode.LIVE:
        clock = live_clock(
            tables.header.get(row, "LIVE_PERIOD"),
            tables.header.get(row, "LIVE_PC_TIME"),
            status_text,
        )

    return Game(
        id=game_id,
        status=status_text,
        status_code=status_code,
        clock=clock,
        home=_parse_team(tables, row, raw_game_id, "home"),
        away=_parse_team(tables, row, raw_game_id, "away"),
        leaders=_parse_leaders(tables, row, game_id),
    )


def parse_stats_scoreboard(scoreboard_json: dict) -> list[Game]:
    """Parse a scoreboardv2 payload into Games, one per GameHeader row."""

    if not isinstance(scoreboard_json, dict):
        return []
    result_sets = scoreboard_json.get("resultSets")
    if not isinstance(result_sets, list):
        return []
    tables = _Tables(result_sets)
    if not tables.has_header_rows:
        return []
    return [_parse_game(tables, row) for row in tables.header_rows]
