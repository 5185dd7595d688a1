from __future__ import annotations

import asyncio
import threading
import unittest
from datetime import date, datetime, timedelta, timezone
from unittest.mock import patch

from hoopboard.ingestion.errors import FetchError
from hoopboard.ingestion.fallback import FALLBACK_NOTICE
from hoopboard.ingestion.schema import Game, StatusCode, TeamResult
from hoopboard.schedule import state as schedule_state
from hoopboard.schedule.controller import ScheduleController
from hoopboard.settings import Settings

# Noon in New York on 2026-10-19.
NOW = datetime(2026, 10, 19, 16, 0, tzinfo=timezone.utc)


class _Clock:
    def __init__(self, now: datetime) -> None:
        self.now = now

    def __call__(self) -> datetime:
        return self.now


def _settings() -> Settings:
    return Settings(
        relay_url="https://relay.test/",
        live_provider="espn",
        history_provider="espn",
        timezone="America/New_York",
        refresh_seconds=30,
        notice_seconds=5,
        fetch_timeout_seconds=12.0,
    )


def _game(game_id: str) -> Game:
    return Game(
        id=game_id,
        status="Final",
        status_code=StatusCode.FINAL,
        clock="Final",
        home=TeamResult(tricode="LAL", score=100),
        away=TeamResult(tricode="BOS", score=90),
    )


def _espn_payload(*event_ids: str) -> dict:
    return {
        "events": [
            {"id": event_id, "competitions": [{"id": event_id, "status": {"type": {"state": "post"}}}]}
            for event_id in event_ids
        ]
    }


class ScheduleControllerTests(unittest.IsolatedAsyncioTestCase):
    def setUp(self) -> None:
        self.clock = _Clock(NOW)
        self.controller = ScheduleController(_settings(), clock=self.clock)

    async def test_starts_on_today(self) -> None:
        self.assertEqual(date(2026, 10, 19), self.controller.state.current_date)
        self.assertTrue(self.controller.is_today())

    async def test_today_uses_live_reader(self) -> None:
        with patch(
            "hoopboard.schedule.controller.fetch_live",
            return_value=_espn_payload("a", "b"),
        ) as mock_live, patch("hoopboard.schedule.controller.fetch_historical") as mock_hist:
            state = await self.controller.load()

        mock_live.assert_called_once()
        mock_hist.assert_not_called()
        self.assertEqual("live", state.source)
        self.assertEqual(["a", "b"], [game.id for game in state.games])
        self.assertFalse(state.loading)

    async def test_past_date_uses_historical_reader(self) -> None:
        self.controller.navigate(-1)
        with patch(
            "hoopboard.schedule.controller.fetch_historical",
            return_value=_espn_payload("x"),
        ) as mock_hist:
            state = await self.controller.load()

        self.assertEqual(date(2026, 10, 18), mock_hist.call_args.args[1])
        self.assertEqual("historical", state.source)
        self.assertFalse(self.controller.is_today())

    async def test_failure_shows_fallback_with_notice(self) -> None:
        with patch(
            "hoopboard.schedule.controller.fetch_live",
            side_effect=FetchError("Upstream returned status 500", url="u", status=500),
        ), self.assertLogs("hoopboard.schedule.controller", level="ERROR"):
            state = await self.controller.load()

        self.assertEqual("fallback", state.source)
        self.assertEqual(2, len(state.games))
        notice = schedule_state.active_notice(state, self.clock.now)
        self.assertEqual(FALLBACK_NOTICE, notice.message)

        self.clock.now = NOW + timedelta(seconds=6)
        self.assertIsNone(schedule_state.active_notice(state, self.clock.now))

    async def test_zero_games_is_not_a_failure(self) -> None:
        with patch("hoopboard.schedule.controller.fetch_live", return_value={"events": []}):
            state = await self.controller.load()

        self.assertEqual((), state.games)
        self.assertEqual("live", state.source)
        self.assertIsNone(state.notice)

    async def test_tick_is_noop_for_past_dates(self) -> None:
        self.controller.set_date(date(2024, 1, 15))
        with patch("hoopboard.schedule.controller.fetch_historical") as mock_hist:
            ticked = await self.controller.tick()

        self.assertFalse(ticked)
        mock_hist.assert_not_called()

    async def test_tick_silently_reloads_today(self) -> None:
        with patch(
            "hoopboard.schedule.controller.fetch_live",
            return_value=_espn_payload("a"),
        ) as mock_live:
            ticked = await self.controller.tick()

        self.assertTrue(ticked)
        mock_live.assert_called_once()
        self.assertEqual(["a"], [game.id for game in self.controller.state.games])

    async def test_stale_load_is_discarded(self) -> None:
        release = threading.Event()
        calls: list[date] = []

        def fake_fetch(day: date, today: bool):
            calls.append(day)
            if len(calls) == 1:
                release.wait(timeout=5)
                return [_game("stale")], "live"
            return [_game("fresh")], "historical"

        with patch.object(self.controller, "_fetch_games", side_effect=fake_fetch):
            first = asyncio.create_task(self.controller.load())
            while not calls:
                await asyncio.sleep(0.01)
            self.controller.navigate(-1)
            await self.controller.load()
            release.set()
            await first

        self.assertEqual(["fresh"], [game.id for game in self.controller.state.games])
        self.assertEqual("historical", self.controller.state.source)
        self.assertEqual(date(2026, 10, 18), self.controller.state.current_date)

    async def test_refresh_loop_stops_when_signalled(self) -> None:
        stop = asyncio.Event()
        stop.set()

        await asyncio.wait_for(self.controller.run_refresh_loop(stop), timeout=1)


if __name__ == "__main__":
    unittest.main()
