"""Schedule controller: picks the reader for the viewed date and owns the state."""

from __future__ import annotations

import asyncio
import logging
from datetime import date, datetime, timezone
from typing import Callable

from hoopboard.ingestion.fallback import FALLBACK_NOTICE, fallback_games
from hoopboard.ingestion.providers import get_provider
from hoopboard.ingestion.readers import fetch_historical, fetch_live
from hoopboard.ingestion.schema import Game
from hoopboard.schedule import state as schedule_state
from hoopboard.schedule.state import LoadSource, ScheduleState
from hoopboard.settings import Settings

logger = logging.getLogger(__name__)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class ScheduleController:
    def __init__(self, settings: Settings, clock: Callable[[], datetime] = _utcnow) -> None:
        self.settings = settings
        self._clock = clock
        self.state: ScheduleState = schedule_state.initial_state(settings.tz, clock())

    def now(self) -> datetime:
        return self._clock()

    def is_today(self) -> bool:
        return schedule_state.is_today(self.state.current_date, self.settings.tz, self.now())

    def navigate(self, days: int) -> None:
        self.state = schedule_state.navigate(self.state, days, self.settings.tz)

    def set_date(self, day: date) -> None:
        self.state = schedule_state.set_date(self.state, day)

    def _fetch_games(self, day: date, today: bool) -> tuple[list[Game], LoadSource]:
        if today:
            provider_key = self.settings.live_provider
            payload = fetch_live(self.settings, self.now())
        else:
            provider_key = self.settings.history_provider
            payload = fetch_historical(self.settings, day)
        provider = get_provider(provider_key)
        if provider is None:
            raise ValueError(f"Unsupported provider: {provider_key}")
        return provider.normalize(payload), "live" if today else "historical"

    async def load(self, silent: bool = False) -> ScheduleState:
        day = self.state.current_date
        today = self.is_today()
        self.state, seq = schedule_state.begin_load(self.state, silent=silent)
        try:
            games, source = await asyncio.to_thread(self._fetch_games, day, today)
        except Exception:
            logger.exception("Schedule load failed date=%s seq=%s", day, seq)
            self.state = schedule_state.load_failed(
                self.state,
                seq,
                fallback_games(),
                FALLBACK_NOTICE,
                self.now(),
                self.settings.notice_seconds,
            )
            return self.state

        if seq != self.state.issued_seq:
            logger.info("Discarding stale schedule load date=%s seq=%s", day, seq)
        else:
            logger.info("Loaded %s games date=%s source=%s", len(games), day, source)
        self.state = schedule_state.load_completed(self.state, seq, games, source)
        return self.state

    async def tick(self) -> bool:
        """Silent reload when viewing today; a no-op for past dates."""
        if not self.is_today():
            logger.debug("Refresh tick skipped; viewing %s", self.state.current_date)
            return False
        await self.load(silent=True)
        return True

    async def run_refresh_loop(self, stop: asyncio.Event) -> None:
        interval = self.settings.refresh_seconds
        logger.info("Schedule auto-refresh enabled: interval=%s seconds", interval)
        while not stop.is_set():
            try:
                await asyncio.wait_for(stop.wait(), timeout=interval)
            except asyncio.TimeoutError:
                try:
                    await self.tick()
                except Exception:
                    logger.exception("Schedule refresh tick failed.")
