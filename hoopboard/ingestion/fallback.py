"""Placeholder games shown when a scoreboard load fails."""

from __future__ import annotations

from hoopboard.ingestion.schema import Game, Leader, LeaderPair, StatusCode, TeamResult

FALLBACK_NOTICE = "Network blocked. Showing mock data."


def fallback_games() -> list[Game]:
    return [
        Game(
            id="1",
            status="Final",
            status_code=StatusCode.FINAL,
            clock="Final",
            home=TeamResult(id=1610612747, tricode="LAL", name="Lakers", score=112, wins=20, losses=21),
            away=TeamResult(id=1610612738, tricode="BOS", name="Celtics", score=109, wins=32, losses=10),
            leaders=LeaderPair(
                home=Leader(name="L. James", stat="28 PTS, 9 REB, 6 AST"),
                away=Leader(name="J. Tatum", stat="34 PTS, 9 REB, 6 AST"),
            ),
        ),
        Game(
            id="2",
            status="Q4 2:30",
            status_code=StatusCode.LIVE,
            clock="Q4 2:30",
            home=TeamResult(id=1610612744, tricode="GSW", name="Warriors", score=98, wins=18, losses=20),
            away=TeamResult(id=1610612756, tricode="PHX", name="Suns", score=101, wins=22, losses=15),
            leaders=LeaderPair(
                home=Leader(name="S. Curry", stat="30 PTS, 9 REB, 6 AST"),
                away=Leader(name="K. Durant", stat="25 PTS, 9 REB, 6 AST"),
            ),
        ),
    ]
