"""Field lookup helpers shared by the scoreboard normalizers.

Providers rename fields between API generations (``teamId`` vs ``team_id`` vs
``team.id``). Each normalizer declares, per logical field, an ordered tuple of
accessors; the first accessor yielding a non-None value wins.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Generic, Mapping, Sequence, TypeVar, Union

T = TypeVar("T")

Accessor = Callable[[Any], Any]
FieldTable = Mapping[str, Sequence[Accessor]]


def path(*keys: str | int) -> Accessor:
    """Accessor walking nested dicts (str keys) and lists (int keys)."""

    def _get(record: Any) -> Any:
        current = record
        for key in keys:
            if isinstance(key, int):
                if not isinstance(current, list) or not -len(current) <= key < len(current):
                    return None
                current = current[key]
            else:
                if not isinstance(current, dict):
                    return None
                current = current.get(key)
            if current is None:
                return None
        return current

    _get.__qualname__ = f"path({', '.join(map(repr, keys))})"
    return _get


def first_present(record: Any, accessors: Sequence[Accessor], default: Any = None) -> Any:
    for accessor in accessors:
        value = accessor(record)
        if value is not None:
            return value
    return default


def resolve(record: Any, table: FieldTable, field: str, default: Any = None) -> Any:
    return first_present(record, table.get(field, ()), default)


def first_dict(*candidates: Any) -> dict:
    for candidate in candidates:
        if isinstance(candidate, dict):
            return candidate
    return {}


def _safe_int(value: Any) -> int | None:
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, float):
        return int(value) if value.is_integer() else None
    try:
        return int(str(value).strip())
    except (TypeError, ValueError):
        pass
    try:
        parsed = float(str(value).strip())
    except (TypeError, ValueError):
        return None
    return int(parsed) if parsed.is_integer() else None


def safe_score(value: Any) -> int:
    parsed = _safe_int(value)
    return parsed if parsed is not None else 0


def parse_record(value: Any) -> tuple[int | None, int | None]:
    """Split a ``"20-10"`` record. Any malformed half voids the whole pair."""
    if not isinstance(value, str) or "-" not in value:
        return None, None
    parts = value.strip().split("-")
    if len(parts) != 2:
        return None, None
    wins, losses = (_safe_int(part) for part in parts)
    if wins is None or losses is None:
        return None, None
    return wins, losses


def record_pair(wins: Any, losses: Any, record: Any = None) -> tuple[int | None, int | None]:
    parsed_wins = _safe_int(wins)
    parsed_losses = _safe_int(losses)
    if parsed_wins is not None and parsed_losses is not None:
        return parsed_wins, parsed_losses
    return parse_record(record)


def as_text(value: Any, default: str = "") -> str:
    if value is None:
        return default
    return str(value).strip()


def opaque_id(value: Any) -> int | str | None:
    if isinstance(value, bool) or isinstance(value, (dict, list)):
        return None
    if isinstance(value, (int, str)):
        return value
    if isinstance(value, float) and value.is_integer():
        return int(value)
    return None if value is None else str(value)


# Tabular (header + rowSet) lookups -------------------------------------------------


@dataclass(frozen=True)
class ColumnLookup:
    """Resolve logical column names to row positions.

    ``legacy`` maps column names to the fixed positions used by response shapes
    that omit the header list. A name absent from both yields None.
    """

    headers: tuple[str, ...]
    legacy: Mapping[str, int]

    @classmethod
    def from_headers(cls, headers: Any, legacy: Mapping[str, int]) -> "ColumnLookup":
        if not isinstance(headers, list):
            headers = []
        return cls(tuple(str(header).lower() for header in headers), legacy)

    def index(self, name: str) -> int | None:
        try:
            return self.headers.index(name.lower())
        except ValueError:
            return self.legacy.get(name)

    def get(self, row: Any, name: str) -> Any:
        position = self.index(name)
        if position is None or not isinstance(row, list) or position >= len(row):
            return None
        return row[position]


# Typed results ---------------------------------------------------------------------


@dataclass(frozen=True)
class Ok(Generic[T]):
    value: T


@dataclass(frozen=True)
class Err:
    error: Exception


Result = Union[Ok[T], Err]
