from __future__ import annotations

import calendar

import pytest

from campaign_calendar.config import CalendarConfig, parse_week_start


def test_defaults():
    config = CalendarConfig()

    assert config.inline_limit == 3
    assert config.week_start == calendar.SUNDAY
    assert config.timezone == "UTC"
    assert config.token is None


def test_from_env_reads_overrides():
    config = CalendarConfig.from_env(
        {
            "CAMPAIGN_CALENDAR_API_URL": "https://console.example.com/api",
            "CAMPAIGN_CALENDAR_TOKEN": "secret",
            "CAMPAIGN_CALENDAR_INLINE_LIMIT": "5",
            "CAMPAIGN_CALENDAR_WEEK_START": "monday",
        }
    )

    assert config.api_url == "https://console.example.com/api"
    assert config.token == "secret"
    assert config.inline_limit == 5
    assert config.week_start == calendar.MONDAY


def test_from_env_uses_process_environment(monkeypatch):
    monkeypatch.setenv("CAMPAIGN_CALENDAR_INLINE_LIMIT", "7")
    monkeypatch.delenv("CAMPAIGN_CALENDAR_WEEK_START", raising=False)

    config = CalendarConfig.from_env()

    assert config.inline_limit == 7
    assert config.week_start == calendar.SUNDAY


def test_from_env_rejects_non_integer_limit():
    with pytest.raises(ValueError):
        CalendarConfig.from_env({"CAMPAIGN_CALENDAR_INLINE_LIMIT": "many"})


@pytest.mark.parametrize(
    "value, expected",
    [("sunday", 6), ("Sun", 6), ("0", 0), (3, 3), (" Tuesday ", 1)],
)
def test_parse_week_start(value, expected):
    assert parse_week_start(value) == expected


@pytest.mark.parametrize("value", ["someday", "9", -1])
def test_parse_week_start_rejects_unknown_values(value):
    with pytest.raises(ValueError):
        parse_week_start(value)


def test_invalid_settings_are_rejected():
    with pytest.raises(ValueError):
        CalendarConfig(inline_limit=-1)
    with pytest.raises(ValueError):
        CalendarConfig(timezone="Not/AZone")
