import datetime as dt

import pytest

from campaign_calendar.records import CalendarRecord


@pytest.fixture()
def make_record():
    def _make(record_id, effective_date, entity_id=None, name=None):
        payload = {"_id": record_id, "name": name or f"Campaign {record_id}"}
        return CalendarRecord(
            id=record_id,
            effective_date=effective_date,
            payload=payload,
            entity_id=entity_id,
        )

    return _make


@pytest.fixture()
def fixed_today():
    return dt.date(2024, 2, 15)
