"""Caller-supplied settings for the calendar view."""

from __future__ import annotations

import calendar
import datetime as dt
import os
from dataclasses import dataclass
from typing import Mapping, Optional
from zoneinfo import ZoneInfoNotFoundError

from .drilldown import DEFAULT_INLINE_LIMIT
from .grid import DEFAULT_WEEK_START
from .records import get_timezone

DEFAULT_API_URL = "http://localhost:8004/api"

ENV_API_URL = "CAMPAIGN_CALENDAR_API_URL"
ENV_TOKEN = "CAMPAIGN_CALENDAR_TOKEN"
ENV_TIMEZONE = "CAMPAIGN_CALENDAR_TZ"
ENV_INLINE_LIMIT = "CAMPAIGN_CALENDAR_INLINE_LIMIT"
ENV_WEEK_START = "CAMPAIGN_CALENDAR_WEEK_START"


def parse_week_start(value: str | int) -> int:
    """Accept a weekday number (0=Monday) or an English weekday name."""

    if isinstance(value, int):
        weekday = value
    else:
        text = value.strip()
        if text.isdigit():
            weekday = int(text)
        else:
            names = [name.lower() for name in calendar.day_name]
            abbreviations = [name.lower() for name in calendar.day_abbr]
            lowered = text.lower()
            if lowered in names:
                weekday = names.index(lowered)
            elif lowered in abbreviations:
                weekday = abbreviations.index(lowered)
            else:
                raise ValueError(f"Unknown week start {value!r}.")
    if not 0 <= weekday <= 6:
        raise ValueError(f"Week start must be between 0 and 6, got {weekday!r}.")
    return weekday


@dataclass(frozen=True)
class CalendarConfig:
    inline_limit: int = DEFAULT_INLINE_LIMIT
    week_start: int = DEFAULT_WEEK_START
    timezone: str = "UTC"
    api_url: str = DEFAULT_API_URL
    token: Optional[str] = None

    def __post_init__(self) -> None:
        if self.inline_limit < 0:
            raise ValueError(f"Inline limit cannot be negative, got {self.inline_limit!r}.")
        parse_week_start(self.week_start)
        try:
            get_timezone(self.timezone)
        except (ZoneInfoNotFoundError, ValueError) as exc:
            raise ValueError(f"Unknown time zone {self.timezone!r}.") from exc

    @property
    def tzinfo(self) -> dt.tzinfo:
        return get_timezone(self.timezone)

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> "CalendarConfig":
        env = os.environ if environ is None else environ
        values: dict[str, object] = {}

        if env.get(ENV_API_URL):
            values["api_url"] = env[ENV_API_URL]
        if env.get(ENV_TOKEN):
            values["token"] = env[ENV_TOKEN]
        if env.get(ENV_TIMEZONE):
            values["timezone"] = env[ENV_TIMEZONE]
        if env.get(ENV_INLINE_LIMIT):
            try:
                values["inline_limit"] = int(env[ENV_INLINE_LIMIT])
            except ValueError as exc:
                raise ValueError(
                    f"{ENV_INLINE_LIMIT} must be an integer, got {env[ENV_INLINE_LIMIT]!r}."
                ) from exc
        if env.get(ENV_WEEK_START):
            values["week_start"] = parse_week_start(env[ENV_WEEK_START])

        return cls(**values)  # type: ignore[arg-type]
