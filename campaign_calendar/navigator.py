"""Displayed-month state and its transitions."""

from __future__ import annotations

import calendar
import datetime as dt
import logging
from dataclasses import dataclass
from typing import Callable, Optional

from .grid import validate_month

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class NavigatorState:
    year: int
    month: int

    @property
    def label(self) -> str:
        return f"{calendar.month_name[self.month]} {self.year}"


class Navigator:
    """Owns which month is displayed and moves it backwards and forwards."""

    def __init__(
        self,
        year: Optional[int] = None,
        month: Optional[int] = None,
        *,
        today_provider: Callable[[], dt.date] = dt.date.today,
    ) -> None:
        self._today_provider = today_provider
        if year is None or month is None:
            today = today_provider()
            year = today.year if year is None else year
            month = today.month if month is None else month
        validate_month(year, month)
        self._state = NavigatorState(year, month)

    @property
    def state(self) -> NavigatorState:
        return self._state

    @property
    def label(self) -> str:
        return self._state.label

    def _shift(self, delta_months: int) -> NavigatorState:
        year = self._state.year
        month = self._state.month + delta_months

        while month < 1:
            month += 12
            year -= 1
        while month > 12:
            month -= 12
            year += 1

        self._state = NavigatorState(year, month)
        logger.debug("Navigated to %04d-%02d", year, month)
        return self._state

    def previous(self) -> NavigatorState:
        return self._shift(-1)

    def next(self) -> NavigatorState:
        return self._shift(1)

    def today(self) -> NavigatorState:
        today = self._today_provider()
        self._state = NavigatorState(today.year, today.month)
        return self._state

    def go_to(self, year: int, month: int) -> NavigatorState:
        validate_month(year, month)
        self._state = NavigatorState(year, month)
        return self._state
