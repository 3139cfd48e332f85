"""Month grid construction for the calendar view."""

from __future__ import annotations

import calendar
import datetime as dt
from dataclasses import dataclass, field
from typing import Dict, List, Mapping, Sequence, Tuple

from .records import CalendarRecord, DateKey

DEFAULT_WEEK_START = calendar.SUNDAY


class InvalidMonth(ValueError):
    """Raised when a (year, month) pair does not name a displayable month."""


@dataclass(frozen=True)
class DayCell:
    """One position of the month grid."""

    date: DateKey
    in_displayed_month: bool
    is_today: bool = False
    records: Tuple[CalendarRecord, ...] = field(default=(), compare=False)

    @property
    def day(self) -> int:
        return self.date[2]


@dataclass(frozen=True)
class MonthGrid:
    year: int
    month: int
    week_start: int
    weeks: Tuple[Tuple[DayCell, ...], ...]

    @property
    def cells(self) -> List[DayCell]:
        return [cell for week in self.weeks for cell in week]

    @property
    def total_cells(self) -> int:
        return 7 * len(self.weeks)

    @property
    def body_cells(self) -> List[DayCell]:
        return [cell for cell in self.cells if cell.in_displayed_month]

    @property
    def leading_padding(self) -> int:
        count = 0
        for cell in self.cells:
            if cell.in_displayed_month:
                break
            count += 1
        return count

    @property
    def title(self) -> str:
        return f"{calendar.month_name[self.month]} {self.year}"

    def cell_for(self, date_key: DateKey) -> DayCell | None:
        """Return the body cell for ``date_key``, or ``None`` outside the month."""

        for cell in self.cells:
            if cell.in_displayed_month and cell.date == tuple(date_key):
                return cell
        return None


def validate_month(year: int, month: int) -> None:
    if not isinstance(month, int) or isinstance(month, bool) or not 1 <= month <= 12:
        raise InvalidMonth(f"Month must be between 1 and 12, got {month!r}.")
    if not isinstance(year, int) or not dt.MINYEAR <= year <= dt.MAXYEAR:
        raise InvalidMonth(f"Year {year!r} is outside the supported date range.")


def days_in_month(year: int, month: int) -> int:
    validate_month(year, month)
    return calendar.monthrange(year, month)[1]


def leading_padding(year: int, month: int, week_start: int = DEFAULT_WEEK_START) -> int:
    """Weekday index of the first of the month, counted from ``week_start``."""

    validate_month(year, month)
    return (dt.date(year, month, 1).weekday() - week_start) % 7


def weekday_headers(week_start: int = DEFAULT_WEEK_START) -> List[str]:
    return [calendar.day_name[(week_start + offset) % 7] for offset in range(7)]


def build_month_grid(
    buckets: Mapping[DateKey, Sequence[CalendarRecord]],
    year: int,
    month: int,
    today: dt.date,
    week_start: int = DEFAULT_WEEK_START,
) -> MonthGrid:
    """Lay out ``year``/``month`` as complete weeks of day cells.

    Padding cells carry the real dates of the adjacent months but never any
    records, and are never marked as today.
    """

    validate_month(year, month)
    if not 0 <= week_start <= 6:
        raise ValueError(f"Week start must be a weekday between 0 and 6, got {week_start!r}.")

    try:
        month_structure = calendar.Calendar(week_start).monthdatescalendar(year, month)
    except (OverflowError, ValueError) as exc:
        raise InvalidMonth(
            f"{year:04d}-{month:02d} cannot be laid out within the supported date range."
        ) from exc

    today_key = (today.year, today.month, today.day)
    lookup: Dict[DateKey, Sequence[CalendarRecord]] = {
        tuple(key): value for key, value in buckets.items()
    }

    weeks: List[Tuple[DayCell, ...]] = []
    for week in month_structure:
        row: List[DayCell] = []
        for day_date in week:
            date_key = (day_date.year, day_date.month, day_date.day)
            if day_date.month != month:
                row.append(DayCell(date=date_key, in_displayed_month=False))
                continue
            row.append(
                DayCell(
                    date=date_key,
                    in_displayed_month=True,
                    is_today=date_key == today_key,
                    records=tuple(lookup.get(date_key, ())),
                )
            )
        weeks.append(tuple(row))

    return MonthGrid(year=year, month=month, week_start=week_start, weeks=tuple(weeks))
