"""Recent log records kept in memory and served by ``/api/logs``."""

from __future__ import annotations

import logging
from collections import deque
from dataclasses import asdict, dataclass
from datetime import datetime, timezone

ROOT_LOGGER = "hoopboard"
DEFAULT_CAPACITY = 200


@dataclass(frozen=True)
class LogEntry:
    timestamp: str
    level: str
    source: str
    message: str


def _short_source(name: str) -> str:
    # hoopboard.schedule.controller -> schedule.controller
    prefix = f"{ROOT_LOGGER}."
    return name[len(prefix):] if name.startswith(prefix) else name


class BufferHandler(logging.Handler):
    """Ring buffer of formatted records; the oldest entry is dropped when full."""

    def __init__(self, capacity: int = DEFAULT_CAPACITY) -> None:
        super().__init__(level=logging.DEBUG)
        self._records: deque[tuple[int, LogEntry]] = deque(maxlen=capacity)

    def emit(self, record: logging.LogRecord) -> None:
        try:
            created = datetime.fromtimestamp(record.created, tz=timezone.utc)
            entry = LogEntry(
                timestamp=created.strftime("%Y-%m-%d %H:%M:%S UTC"),
                level=record.levelname,
                source=_short_source(record.name),
                message=self.format(record),
            )
        except Exception:
            self.handleError(record)
            return
        self._records.append((record.levelno, entry))

    def entries(self, limit: int = 100, min_level: str | None = None) -> list[dict]:
        """Newest first, at most ``limit`` entries at or above ``min_level``."""
        if limit <= 0:
            return []
        threshold = logging.getLevelName(min_level.upper()) if min_level else logging.NOTSET
        if not isinstance(threshold, int):
            raise ValueError(f"Unknown log level: {min_level}")
        selected = [entry for levelno, entry in reversed(self._records) if levelno >= threshold]
        return [asdict(entry) for entry in selected[:limit]]


_handler: BufferHandler | None = None


def get_buffer_handler() -> BufferHandler:
    global _handler
    if _handler is None:
        _handler = BufferHandler()
        _handler.setFormatter(logging.Formatter("%(message)s"))
    return _handler


def install_buffer_handler() -> BufferHandler:
    """Attach the buffer to the package logger; every hoopboard.* logger propagates to it."""
    handler = get_buffer_handler()
    package_logger = logging.getLogger(ROOT_LOGGER)
    if handler not in package_logger.handlers:
        package_logger.addHandler(handler)
    package_logger.setLevel(logging.DEBUG)
    return handler
