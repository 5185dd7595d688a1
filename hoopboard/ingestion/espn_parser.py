"""Parser for ESPN scoreboard payloads."""

from __future__ import annotations

from typing import Any, Iterable

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
from hoopboard.ingestion.schema import PLACEHOLDER_TRICODE, Game, StatusCode, TeamResult
from hoopboard.ingestion.status import derive_status_code, live_clock, status_from_state
from hoopboard.team_logos import espn_logo_url

STATUS_FIELDS: FieldTable = {
    "tags": (path("type", "name"), path("type", "state")),
    "text": (
        path("type", "shortDetail"),
        path("type", "detail"),
        path("type", "description"),
    ),
    "period": (path("period"),),
    "clock": (path("displayClock"), path("clock")),
}

TEAM_FIELDS: FieldTable = {
    "id": (path("team", "id"), path("id")),
    "tricode": (path("team", "abbreviation"),),
    "name": (
        path("team", "displayName"),
        path("team", "shortDisplayName"),
        path("team", "name"),
    ),
    "logo": (path("team", "logo"), path("team", "logos", 0, "href")),
    "score": (path("score", "value"), path("score")),
    "record": (
        lambda competitor: _overall_record(competitor.get("records")),
        path("record"),
        path("team", "record", "items", 0, "summary"),
    ),
    "leaders": (path("leaders"),),
}

# Transitional states where a running game clock is meaningless.
_PAUSED_STATES = {"status_halftime", "status_end_period"}


def _overall_record(records: Any) -> str | None:
    if not isinstance(records, list):
        return None
    entries = [record for record in records if isinstance(record, dict)]
    for record in entries:
        if record.get("type") == "total" or record.get("name") == "overall":
            return record.get("summary")
    return entries[0].get("summary") if entries else None


def _extract_game_ids(*sources: dict[str, Any]) -> Iterable[str]:
    for source in sources:
        game_id = source.get("id")
        if game_id is not None and as_text(game_id):
            yield as_text(game_id)


def _split_competitors(competition: dict[str, Any]) -> tuple[dict, dict]:
    competitors = competition.get("competitors")
    if not isinstance(competitors, list):
        competitors = []

    home = None
    away = None
    for competitor in competitors:
        if not isinstance(competitor, dict):
            continue
        home_away = competitor.get("homeAway")
        if home_away == "home":
            home = competitor
        elif home_away == "away":
            away = competitor
    return first_dict(home), first_dict(away)


def _parse_team(competitor: dict[str, Any]) -> TeamResult:
    tricode = as_text(resolve(competitor, TEAM_FIELDS, "tricode"))
    wins, losses = record_pair(None, None, resolve(competitor, TEAM_FIELDS, "record"))
    logo = resolve(competitor, TEAM_FIELDS, "logo")
    return TeamResult(
        id=opaque_id(resolve(competitor, TEAM_FIELDS, "id")),
        tricode=tricode or PLACEHOLDER_TRICODE,
        name=as_text(resolve(competitor, TEAM_FIELDS, "name")),
        logo=logo if isinstance(logo, str) and logo else espn_logo_url(tricode),
        score=safe_score(resolve(competitor, TEAM_FIELDS, "score")),
        wins=wins,
        losses=losses,
    )


def _state_tag(status: dict[str, Any]) -> str | None:
    for accessor in STATUS_FIELDS["tags"]:
        value = accessor(status)
        if status_from_state(value) is not None:
            return value
    return None


def _parse_competition(event: dict[str, Any], competition: dict[str, Any]) -> Game:
    game_id = next(_extract_game_ids(competition, event), "")
    status = first_dict(competition.get("status"), event.get("status"))
    state = _state_tag(status)
    status_text = as_text(resolve(status, STATUS_FIELDS, "text"))
    status_code = derive_status_code(state=state, text=status_text)

    clock = status_text
    if status_code == StatusCode.LIVE and str(state).lower() not in _PAUSED_STATES:
        clock = live_clock(
            resolve(status, STATUS_FIELDS, "period"),
            resolve(status, STATUS_FIELDS, "clock"),
            status_text,
        )

    home, away = _split_competitors(competition)
    leaders = None
    home_leaders = resolve(home, TEAM_FIELDS, "leaders")
    away_leaders = resolve(away, TEAM_FIELDS, "leaders")
    if home_leaders is not None or away_leaders is not None:
        leaders = leader_pair(home_leaders, away_leaders, game_id)

    return Game(
        id=game_id,
        status=status_text,
        status_code=status_code,
        clock=clock,
        home=_parse_team(home),
        away=_parse_team(away),
        leaders=leaders,
    )


def parse_scoreboard(scoreboard_json: dict) -> list[Game]:
    """Parse ESPN scoreboard JSON into Games, in event order."""

    if not isinstance(scoreboard_json, dict):
        return []
    events = scoreboard_json.get("events")
    if not isinstance(events, list):
        return []

    parsed_games: list[Game] = []
    for event in events:
        if not isinstance(event, dict):
            continue

        competitions = event.get("competitions")
        if not isinstance(competitions, list) or not competitions:
            competitions = [event]

        for competition in competitions:
            if not isinstance(competition, dict):
                continue
            parsed_games.append(_parse_competition(event, competition))

    return parsed_games
