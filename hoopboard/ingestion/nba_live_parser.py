"""Parser for the NBA.com live (CDN) scoreboard feed."""

from __future__ import annotations

from typing import Any

from hoopboard.ingestion.fields import (
    FieldTable,
    as_text,
    first_dict,
    opaque_id,
    path,
    record_pair,
    resolve,
    safe_score,
)
from hoopboard.ingestion.leaders import leader_pair
from hoopboard.ingestion.schema import Game, StatusCode, TeamResult
from hoopboard.ingestion.status import derive_status_code, live_clock
from hoopboard.team_logos import tricode_for_team_id

GAME_FIELDS: FieldTable = {
    "id": (path("gameId"), path("game_id"), path("gameCode")),
    "status_text": (path("gameStatusText"), path("statusText")),
    "status_code": (path("gameStatus"), path("status")),
    "period": (path("period", "current"), path("period")),
    "clock": (path("gameClock"), path("clock")),
    "home": (path("homeTeam"), path("hTeam"), path("home")),
    "away": (path("awayTeam"), path("vTeam"), path("away")),
    "leaders": (path("gameLeaders"), path("leaders")),
}

TEAM_FIELDS: FieldTable = {
    "id": (path("teamId"), path("team_id")),
    "tricode": (path("teamTricode"), path("tricode"), path("triCode")),
    "name": (path("teamName"), path("nickname"), path("fullName")),
    "score": (path("score"), path("points")),
    "wins": (path("wins"), path("win")),
    "losses": (path("losses"), path("loss")),
    "record": (path("record"), path("teamRecord")),
}

LEADER_FIELDS: FieldTable = {
    "home": (path("homeLeaders"), path("home"), path("homeLeader")),
    "away": (path("awayLeaders"), path("away"), path("awayLeader")),
}


def _extract_games(scoreboard_json: dict[str, Any]) -> list | None:
    scoreboard = scoreboard_json.get("scoreboard")
    if isinstance(scoreboard, dict) and isinstance(scoreboard.get("games"), list):
        return scoreboard["games"]
    games = scoreboard_json.get("games")
    if isinstance(games, list):
        return games
    return None


def _parse_team(raw_team: dict[str, Any]) -> TeamResult:
    team_id = opaque_id(resolve(raw_team, TEAM_FIELDS, "id"))
    wins, losses = record_pair(
        resolve(raw_team, TEAM_FIELDS, "wins"),
        resolve(raw_team, TEAM_FIELDS, "losses"),
        resolve(raw_team, TEAM_FIELDS, "record"),
    )
    return TeamResult(
        id=team_id,
        tricode=as_text(resolve(raw_team, TEAM_FIELDS, "tricode")) or tricode_for_team_id(team_id),
        name=as_text(resolve(raw_team, TEAM_FIELDS, "name")),
        score=safe_score(resolve(raw_team, TEAM_FIELDS, "score")),
        wins=wins,
        losses=losses,
    )


def _parse_game(game: dict[str, Any]) -> Game:
    game_id = as_text(resolve(game, GAME_FIELDS, "id"))
    raw_code = resolve(game, GAME_FIELDS, "status_code")
    status_text = as_text(resolve(game, GAME_FIELDS, "status_text"))
    if not status_text and isinstance(raw_code, str):
        status_text = raw_code.strip()

    status_code = derive_status_code(code=raw_code, text=status_text)
    clock = status_text
    if status_code == StatusCode.LIVE:
        clock = live_clock(
            resolve(game, GAME_FIELDS, "period"),
            resolve(game, GAME_FIELDS, "clock"),
            status_text,
        )

    raw_leaders = resolve(game, GAME_FIELDS, "leaders")
    leaders = None
    if raw_leaders is not None:
        leaders = leader_pair(
            resolve(raw_leaders, LEADER_FIELDS, "home"),
            resolve(raw_leaders, LEADER_FIELDS, "away"),
            game_id,
        )

    return Game(
        id=game_id,
        status=status_text,
        status_code=status_code,
        clock=clock,
        home=_parse_team(first_dict(resolve(game, GAME_FIELDS, "home"))),
        away=_parse_team(first_dict(resolve(game, GAME_FIELDS, "away"))),
        leaders=leaders,
    )


def parse_live_scoreboard(scoreboard_json: dict) -> list[Game]:
    """Parse the NBA.com CDN scoreboard into Games, in feed order."""

    if not isinstance(scoreboard_json, dict):
        return []
    games = _extract_games(scoreboard_json)
    if games is None:
        return []
    return [_parse_game(game) for game in games if isinstance(game, dict)]
