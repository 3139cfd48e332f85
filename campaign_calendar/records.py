"""Record and filter types consumed by the calendar engine."""

from __future__ import annotations

import datetime as dt
from dataclasses import dataclass, field
from typing import Any, Iterable, Mapping, Optional, Tuple, Union
from zoneinfo import ZoneInfo

DateKey = Tuple[int, int, int]

DEFAULT_EFFECTIVE_DATE_FIELDS = ("scheduledDate", "createdAt")


@dataclass(frozen=True)
class CalendarRecord:
    """A single time-stamped item placed on the calendar.

    ``effective_date`` and ``entity_id`` are resolved by the caller before the
    record reaches the engine; ``payload`` is carried through untouched.
    """

    id: str
    effective_date: object
    payload: Any = field(default=None, compare=False)
    entity_id: Optional[str] = None


@dataclass(frozen=True)
class MatchAll:
    """Filter criteria that accepts every record."""


@dataclass(frozen=True)
class MatchEntity:
    """Filter criteria that accepts records belonging to one entity."""

    entity_id: str


FilterCriteria = Union[MatchAll, MatchEntity]

MATCH_ALL = MatchAll()


def matches(criteria: FilterCriteria, record: CalendarRecord) -> bool:
    if isinstance(criteria, MatchAll):
        return True
    if isinstance(criteria, MatchEntity):
        return record.entity_id == criteria.entity_id
    raise TypeError(f"Unsupported filter criteria: {criteria!r}")


def criteria_for(entity_id: Optional[str]) -> FilterCriteria:
    """Build criteria from a selector value, where ``None`` or ``"all"`` means no filter."""

    if entity_id is None or entity_id == "all":
        return MATCH_ALL
    return MatchEntity(entity_id)


def _parse_iso(value: str) -> dt.datetime | dt.date | None:
    text = value.strip()
    if not text:
        return None
    if text.endswith(("Z", "z")):
        text = text[:-1] + "+00:00"
    try:
        return dt.datetime.fromisoformat(text)
    except ValueError:
        pass
    try:
        return dt.date.fromisoformat(text)
    except ValueError:
        return None


def to_date_key(value: object, tz: dt.tzinfo) -> DateKey | None:
    """Truncate ``value`` to a calendar day in ``tz``.

    Returns ``None`` when the value cannot be interpreted as a point in time.
    """

    if isinstance(value, str):
        value = _parse_iso(value)

    if isinstance(value, dt.datetime):
        if value.tzinfo is not None:
            try:
                value = value.astimezone(tz)
            except (OverflowError, ValueError):
                return None
        return (value.year, value.month, value.day)
    if isinstance(value, dt.date):
        return (value.year, value.month, value.day)
    return None


def resolve_effective_date(
    raw: Mapping[str, Any],
    fields: Iterable[str] = DEFAULT_EFFECTIVE_DATE_FIELDS,
) -> object | None:
    """Return the first non-empty candidate date field of a raw record."""

    for name in fields:
        value = raw.get(name)
        if value not in (None, ""):
            return value
    return None


def get_timezone(name: str) -> dt.tzinfo:
    if name.upper() == "UTC":
        return dt.timezone.utc
    return ZoneInfo(name)
