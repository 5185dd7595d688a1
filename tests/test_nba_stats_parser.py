from __future__ import annotations

import unittest

from hoopboard.ingestion.nba_stats_parser import parse_stats_scoreboard
from hoopboard.ingestion.schema import StatusCode

GAME_HEADER_HEADERS = [
    "GAME_DATE_EST",
    "GAME_SEQUENCE",
    "GAME_ID",
    "GAME_STATUS_ID",
    "GAME_STATUS_TEXT",
    "GAMECODE",
    "HOME_TEAM_ID",
    "VISITOR_TEAM_ID",
    "SEASON",
    "LIVE_PERIOD",
    "LIVE_PC_TIME",
]

LINE_SCORE_HEADERS = [
    "GAME_DATE_EST",
    "GAME_SEQUENCE",
    "GAME_ID",
    "TEAM_ID",
    "TEAM_ABBREVIATION",
    "TEAM_CITY_NAME",
    "TEAM_NAME",
    "TEAM_WINS_LOSSES",
    "PTS",
]

TEAM_LEADERS_HEADERS = [
    "GAME_ID",
    "TEAM_ID",
    "PTS_PLAYER_ID",
    "PTS_PLAYER_NAME",
    "PTS",
]


def _header_row(game_id, status_id, status_text, home_id, away_id, period=0, clock=""):
    return [
        "2024-01-15T00:00:00",
        1,
        game_id,
        status_id,
        status_text,
        "20240115/BOSLAL",
        home_id,
        away_id,
        "2023",
        period,
        clock,
    ]


def _line_row(game_id, team_id, abbrev, name, record, pts):
    return ["2024-01-15T00:00:00", 1, game_id, team_id, abbrev, "City", name, record, pts]


def _payload(with_leaders: bool = False) -> dict:
    result_sets = [
        {
            "name": "GameHeader",
            "headers": GAME_HEADER_HEADERS,
            "rowSet": [
                _header_row("0022300555", 3, "Final", 1610612747, 1610612738),
                _header_row("0022300556", 2, "4th Qtr", 1610612744, 1610612756, 4, "2:30"),
            ],
        },
        {
            "name": "LineScore",
            "headers": LINE_SCORE_HEADERS,
            "rowSet": [
                _line_row("0022300555", 1610612747, "LAL", "Lakers", "20-21", 112),
                _line_row("0022300555", 1610612738, "BOS", "Celtics", "32-10", 109),
                _line_row("0022300556", 1610612744, "GSW", "Warriors", "18-20", 98),
            ],
        },
    ]
    if with_leaders:
        result_sets.append(
            {
                "name": "TeamLeaders",
                "headers": TEAM_LEADERS_HEADERS,
                "rowSet": [
                    ["0022300555", 1610612747, 2544, "LeBron James", 28],
                    ["0022300555", 1610612738, 1628369, "Jayson Tatum", 34],
                ],
            }
        )
    return {"resultSets": result_sets}


class NbaStatsParserTests(unittest.TestCase):
    def test_parses_header_and_line_score_rows(self) -> None:
        games = parse_stats_scoreboard(_payload())

        self.assertEqual(["0022300555", "0022300556"], [game.id for game in games])
        final = games[0]
        self.assertEqual(StatusCode.FINAL, final.status_code)
        self.assertEqual("Final", final.clock)
        self.assertEqual(112, final.home.score)
        self.assertEqual(109, final.away.score)
        self.assertEqual("LAL", final.home.tricode)
        self.assertEqual("Celtics", final.away.name)
        self.assertEqual((32, 10), (final.away.wins, final.away.losses))
        self.assertIsNone(final.leaders)

    def test_live_game_uses_live_period_and_clock(self) -> None:
        live = parse_stats_scoreboard(_payload())[1]

        self.assertEqual(StatusCode.LIVE, live.status_code)
        self.assertTrue(live.is_live)
        self.assertEqual("Q4 2:30", live.clock)

    def test_unmatched_line_score_yields_zero_score(self) -> None:
        live = parse_stats_scoreboard(_payload())[1]

        self.assertEqual(0, live.away.score)
        self.assertEqual("PHX", live.away.tricode)
        self.assertIsNone(live.away.wins)

    def test_team_leaders_result_set(self) -> None:
        final = parse_stats_scoreboard(_payload(with_leaders=True))[0]

        self.assertEqual("LeBron James", final.leaders.home.name)
        self.assertEqual("34 PTS", final.leaders.away.stat)

    def test_headerless_rows_use_legacy_positions(self) -> None:
        header_row = [None] * 11
        header_row[2] = "0022300777"
        header_row[4] = "Final"
        header_row[6] = 1610612747
        header_row[7] = 1610612738
        line_row = [None] * 23
        line_row[2] = "0022300777"
        line_row[3] = 1610612747
        line_row[22] = 120
        payload = {"resultSets": [{"rowSet": [header_row]}, {"rowSet": [line_row]}]}

        games = parse_stats_scoreboard(payload)

        self.assertEqual(1, len(games))
        self.assertEqual("0022300777", games[0].id)
        self.assertEqual(StatusCode.FINAL, games[0].status_code)
        self.assertEqual(120, games[0].home.score)
        self.assertEqual(0, games[0].away.score)

    def test_game_and_team_ids_match_across_types(self) -> None:
        payload = _payload()
        line_rows = payload["resultSets"][1]["rowSet"]
        line_rows[0][3] = "1610612747"

        final = parse_stats_scoreboard(payload)[0]

        self.assertEqual(112, final.home.score)

    def test_text_status_used_when_status_id_missing(self) -> None:
        payload = _payload()
        payload["resultSets"][0]["rowSet"][0][3] = None

        final = parse_stats_scoreboard(payload)[0]

        self.assertEqual(StatusCode.FINAL, final.status_code)

    def test_missing_container_yields_no_games(self) -> None:
        self.assertEqual([], parse_stats_scoreboard({}))
        self.assertEqual([], parse_stats_scoreboard({"resultSets": {}}))
        self.assertEqual([], parse_stats_scoreboard({"resultSets": []}))
        self.assertEqual([], parse_stats_scoreboard({"resultSets": [{"name": "GameHeader"}]}))


if __name__ == "__main__":
    unittest.main()
