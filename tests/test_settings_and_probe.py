from __future__ import annotations

import os
import unittest
from unittest.mock import patch

from hoopboard.ingestion import probe
from hoopboard.ingestion.errors import FetchError
from hoopboard.settings import load_settings


class SettingsTests(unittest.TestCase):
    def test_defaults(self) -> None:
        with patch.dict(os.environ, {}, clear=True):
            settings = load_settings()

        self.assertEqual("http://127.0.0.1:8000/relay/", settings.relay_url)
        self.assertEqual("espn", settings.live_provider)
        self.assertEqual("espn", settings.history_provider)
        self.assertEqual("America/New_York", settings.timezone)
        self.assertEqual(30, settings.refresh_seconds)
        self.assertEqual(5, settings.notice_seconds)
        self.assertEqual(12.0, settings.fetch_timeout_seconds)

    def test_overrides(self) -> None:
        env = {
            "HOOPBOARD_RELAY_URL": "https://relay.example/",
            "HOOPBOARD_LIVE_PROVIDER": "nba_live",
            "HOOPBOARD_HISTORY_PROVIDER": "NBA_STATS",
            "HOOPBOARD_TIMEZONE": "UTC",
            "HOOPBOARD_REFRESH_SECONDS": "60",
            "HOOPBOARD_FETCH_TIMEOUT_SECONDS": "0",
        }
        with patch.dict(os.environ, env, clear=True):
            settings = load_settings()

        self.assertEqual("https://relay.example/", settings.relay_url)
        self.assertEqual("nba_live", settings.live_provider)
        self.assertEqual("nba_stats", settings.history_provider)
        self.assertEqual("UTC", settings.timezone)
        self.assertEqual(60, settings.refresh_seconds)
        self.assertIsNone(settings.fetch_timeout_seconds)

    def test_invalid_values_fall_back_to_defaults(self) -> None:
        env = {
            "HOOPBOARD_HISTORY_PROVIDER": "nba_live",
            "HOOPBOARD_LIVE_PROVIDER": "bogus",
            "HOOPBOARD_TIMEZONE": "Mars/Olympus_Mons",
            "HOOPBOARD_REFRESH_SECONDS": "soon",
            "HOOPBOARD_NOTICE_SECONDS": "0",
        }
        with patch.dict(os.environ, env, clear=True), self.assertLogs(
            "hoopboard.settings", level="ERROR"
        ):
            settings = load_settings()

        self.assertEqual("espn", settings.history_provider)
        self.assertEqual("espn", settings.live_provider)
        self.assertEqual("America/New_York", settings.timezone)
        self.assertEqual(30, settings.refresh_seconds)
        self.assertEqual(5, settings.notice_seconds)


class ProbeTests(unittest.TestCase):
    def test_unknown_provider_exits(self) -> None:
        with self.assertRaises(SystemExit):
            probe.main(["--provider", "wnba"])

    def test_fetch_error_exits_with_status_one(self) -> None:
        with patch(
            "hoopboard.ingestion.probe.read_scoreboard",
            side_effect=FetchError("Upstream returned status 500"),
        ):
            with self.assertRaises(SystemExit) as ctx:
                probe.main(["--provider", "espn", "--date", "2024-01-15"])

        self.assertEqual(1, ctx.exception.code)

    def test_prints_normalized_games(self) -> None:
        payload = {"events": [{"id": "401", "competitions": [{"id": "401"}]}]}
        with patch("hoopboard.ingestion.probe.read_scoreboard", return_value=payload) as mock_read:
            with self.assertLogs(level="INFO") as logs:
                probe.main(["--date", "2024-01-15", "--relay-url", "https://relay.example/"])

        self.assertEqual("https://relay.example/", mock_read.call_args.args[2].relay_url)
        self.assertTrue(any("401" in line for line in logs.output))


if __name__ == "__main__":
    unittest.main()
