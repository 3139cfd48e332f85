"""Inline previews and full listings for a single day cell."""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Tuple

from .grid import DayCell
from .records import CalendarRecord

DEFAULT_INLINE_LIMIT = 3


@dataclass(frozen=True)
class DaySummary:
    shown: Tuple[CalendarRecord, ...]
    overflow_count: int

    @property
    def has_overflow(self) -> bool:
        return self.overflow_count > 0

    @property
    def overflow_label(self) -> str:
        if not self.has_overflow:
            return ""
        return f"+{self.overflow_count} more"


def summarize(cell: DayCell, inline_limit: int = DEFAULT_INLINE_LIMIT) -> DaySummary:
    """Return the first ``inline_limit`` records of ``cell`` and how many were left out."""

    if inline_limit < 0:
        raise ValueError(f"Inline limit cannot be negative, got {inline_limit!r}.")

    records = tuple(cell.records)
    return DaySummary(
        shown=records[:inline_limit],
        overflow_count=max(0, len(records) - inline_limit),
    )


def select(cell: DayCell) -> List[CalendarRecord]:
    return list(cell.records)
