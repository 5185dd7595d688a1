"""Game status and clock normalization."""

from __future__ import annotations

import re
from typing import Any

from hoopboard.ingestion.schema import StatusCode

_STATE_TAGS: dict[str, StatusCode] = {
    "pre": StatusCode.NOT_STARTED,
    "postponed": StatusCode.NOT_STARTED,
    "canceled": StatusCode.NOT_STARTED,
    "cancelled": StatusCode.NOT_STARTED,
    "scheduled": StatusCode.NOT_STARTED,
    "in": StatusCode.LIVE,
    "in_progress": StatusCode.LIVE,
    "in progress": StatusCode.LIVE,
    "live": StatusCode.LIVE,
    "halftime": StatusCode.LIVE,
    "end_period": StatusCode.LIVE,
    "post": StatusCode.FINAL,
    "final": StatusCode.FINAL,
    "final_ot": StatusCode.FINAL,
    "finals": StatusCode.FINAL,
}

_LIVE_TEXT = re.compile(r"\b(q[1-4]|qtr|half|halftime|end of|[0-9]*ot)\b", re.IGNORECASE)
_ISO_CLOCK = re.compile(r"^PT(?:(\d+)M)?(?:(\d+(?:\.\d+)?)S)?$", re.IGNORECASE)


def status_from_code(value: Any) -> StatusCode | None:
    if isinstance(value, bool):
        return None
    try:
        return StatusCode(int(value))
    except (TypeError, ValueError, OverflowError):
        return None


def status_from_state(value: Any) -> StatusCode | None:
    if not isinstance(value, str):
        return None
    tag = value.strip().lower()
    if tag.startswith("status_"):
        tag = tag[len("status_"):]
    return _STATE_TAGS.get(tag)


def status_from_text(value: Any) -> StatusCode | None:
    if not isinstance(value, str):
        return None
    lowered = value.lower()
    if "final" in lowered:
        return StatusCode.FINAL
    if _LIVE_TEXT.search(lowered):
        return StatusCode.LIVE
    return None


def derive_status_code(*, code: Any = None, state: Any = None, text: Any = None) -> StatusCode:
    """Map provider status signals to a StatusCode.

    Enumerated codes win over state tags, which win over free-text matching.
    Anything unrecognised is NOT_STARTED.
    """
    for candidate in (
        status_from_code(code),
        status_from_state(state),
        status_from_text(text),
    ):
        if candidate is not None:
            return candidate
    return StatusCode.NOT_STARTED


def format_game_clock(value: Any) -> str:
    """Turn ``PT02M30.00S`` style clocks into ``2:30``; other strings pass through."""
    if not isinstance(value, str):
        return ""
    cleaned = value.strip()
    match = _ISO_CLOCK.match(cleaned)
    if not match:
        return cleaned
    if not any(match.groups()):
        return ""
    minutes = int(match.group(1) or 0)
    seconds = float(match.group(2) or 0)
    if minutes == 0 and seconds < 60 and not seconds.is_integer():
        return f"{seconds:.1f}"
    return f"{minutes}:{int(seconds):02d}"


def period_label(period: Any) -> str:
    try:
        number = int(period)
    except (TypeError, ValueError, OverflowError):
        return ""
    if number <= 0:
        return ""
    if number <= 4:
        return f"Q{number}"
    overtime = number - 4
    return "OT" if overtime == 1 else f"{overtime}OT"


def live_clock(period: Any, clock: Any, fallback: str) -> str:
    label = period_label(period)
    formatted = format_game_clock(clock)
    if label and formatted:
        return f"{label} {formatted}"
    return fallback or label or formatted
