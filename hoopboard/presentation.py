"""View helpers turning normalized Games into card data for the HTML page."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Literal, Optional

from hoopboard.ingestion.schema import Game, Leader, StatusCode, TeamResult
from hoopboard.team_logos import team_logo_url

Side = Literal["home", "away"]


@dataclass(frozen=True)
class TeamCard:
    logo: str
    logo_alt: str
    name: str
    record: str
    score: str


@dataclass(frozen=True)
class LeaderCard:
    name: str
    stat: str


@dataclass(frozen=True)
class GameCard:
    game_id: str
    badge: str
    is_live: bool
    clock: str
    home: TeamCard
    away: TeamCard
    winner: Optional[Side]
    home_leader: Optional[LeaderCard]
    away_leader: Optional[LeaderCard]
    show_leaders: bool


def shorten_name(name: str) -> str:
    """``LeBron James`` -> ``L. James``; single names pass through."""
    if not name:
        return ""
    parts = name.split(" ")
    if len(parts) > 1:
        return f"{parts[0][:1]}. {' '.join(parts[1:])}"
    return name


def record_text(team: TeamResult) -> str:
    if team.wins is None or team.losses is None:
        return ""
    return f"{team.wins}-{team.losses}"


def winner_side(game: Game) -> Side | None:
    if game.status_code != StatusCode.FINAL:
        return None
    return "home" if game.home.score > game.away.score else "away"


def _team_card(team: TeamResult) -> TeamCard:
    return TeamCard(
        logo=team_logo_url(team),
        logo_alt=team.name or team.tricode or "Team Logo",
        name=team.name or team.tricode or "Team",
        record=record_text(team),
        score=str(team.score),
    )


def _leader_card(leader: Leader | None) -> LeaderCard | None:
    if leader is None:
        return None
    return LeaderCard(name=shorten_name(leader.name), stat=leader.stat)


def build_card(game: Game) -> GameCard:
    leaders = game.leaders
    return GameCard(
        game_id=game.id,
        badge="LIVE" if game.is_live else game.status,
        is_live=game.is_live,
        clock=game.clock,
        home=_team_card(game.home),
        away=_team_card(game.away),
        winner=winner_side(game),
        home_leader=_leader_card(leaders.home) if leaders else None,
        away_leader=_leader_card(leaders.away) if leaders else None,
        show_leaders=leaders is not None,
    )


def build_cards(games: list[Game] | tuple[Game, ...]) -> list[GameCard]:
    return [build_card(game) for game in games]


def display_date(day: date, today: bool) -> str:
    label = f"{day:%a}, {day:%b} {day.day}"
    return f"Today, {label}" if today else label
