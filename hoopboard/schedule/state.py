"""Schedule view state and its pure update functions.

Every update returns a new ``ScheduleState``; nothing is mutated in place.
Loads are tagged with increasing sequence numbers so a slow, stale response
can never overwrite the result of a newer load.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from datetime import date, datetime, time, timedelta, tzinfo
from typing import Literal, Optional

from hoopboard.ingestion.schema import Game

LoadSource = Literal["none", "live", "historical", "fallback"]

_MIDDAY = time(12, 0)


@dataclass(frozen=True)
class Notice:
    message: str
    expires_at: datetime


@dataclass(frozen=True)
class ScheduleState:
    current_date: date
    games: tuple[Game, ...] = ()
    issued_seq: int = 0
    applied_seq: int = 0
    loading: bool = False
    source: LoadSource = "none"
    notice: Optional[Notice] = None


def local_today(tz: tzinfo, now: datetime | None = None) -> date:
    current = now.astimezone(tz) if now else datetime.now(tz)
    return current.date()


def is_today(day: date, tz: tzinfo, now: datetime | None = None) -> bool:
    return day == local_today(tz, now)


def shift_date(day: date, days: int, tz: tzinfo) -> date:
    # Anchored at midday so a DST change can never roll the calendar day.
    anchor = datetime.combine(day, _MIDDAY, tzinfo=tz)
    return (anchor + timedelta(days=days)).date()


def initial_state(tz: tzinfo, now: datetime | None = None) -> ScheduleState:
    return ScheduleState(current_date=local_today(tz, now))


def navigate(state: ScheduleState, days: int, tz: tzinfo) -> ScheduleState:
    return replace(state, current_date=shift_date(state.current_date, days, tz))


def set_date(state: ScheduleState, day: date) -> ScheduleState:
    return replace(state, current_date=day)


def begin_load(state: ScheduleState, silent: bool = False) -> tuple[ScheduleState, int]:
    seq = state.issued_seq + 1
    return replace(state, issued_seq=seq, loading=state.loading or not silent), seq


def _is_current(state: ScheduleState, seq: int) -> bool:
    return seq == state.issued_seq and seq > state.applied_seq


def load_completed(
    state: ScheduleState,
    seq: int,
    games: list[Game],
    source: LoadSource,
) -> ScheduleState:
    if not _is_current(state, seq):
        return state
    return replace(
        state,
        games=tuple(games),
        applied_seq=seq,
        loading=False,
        source=source,
    )


def load_failed(
    state: ScheduleState,
    seq: int,
    fallback: list[Game],
    message: str,
    now: datetime,
    notice_seconds: int,
) -> ScheduleState:
    if not _is_current(state, seq):
        return state
    return replace(
        state,
        games=tuple(fallback),
        applied_seq=seq,
        loading=False,
        source="fallback",
        notice=Notice(message=message, expires_at=now + timedelta(seconds=notice_seconds)),
    )


def active_notice(state: ScheduleState, now: datetime) -> Notice | None:
    if state.notice is None or now >= state.notice.expires_at:
        return None
    return state.notice
