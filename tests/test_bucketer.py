from __future__ import annotations

import datetime as dt
import logging

from campaign_calendar.bucketer import bucket_records
from campaign_calendar.records import MATCH_ALL, MatchEntity


def _ids(records):
    return [record.id for record in records]


def test_records_on_same_day_keep_input_order(make_record):
    records = [
        make_record("a", dt.date(2024, 3, 1)),
        make_record("b", dt.date(2024, 3, 1)),
        make_record("c", dt.date(2024, 3, 2)),
    ]

    buckets = bucket_records(records, MATCH_ALL)

    assert set(buckets) == {(2024, 3, 1), (2024, 3, 2)}
    assert _ids(buckets[(2024, 3, 1)]) == ["a", "b"]
    assert _ids(buckets[(2024, 3, 2)]) == ["c"]


def test_bucketing_does_not_sort_by_time(make_record):
    records = [
        make_record("late", dt.datetime(2024, 3, 1, 18, 0, tzinfo=dt.timezone.utc)),
        make_record("early", dt.datetime(2024, 3, 1, 6, 0, tzinfo=dt.timezone.utc)),
    ]

    buckets = bucket_records(records)

    assert _ids(buckets[(2024, 3, 1)]) == ["late", "early"]


def test_entity_filter_excludes_other_entities(make_record):
    records = [
        make_record("a", dt.date(2024, 3, 1), entity_id="acme"),
        make_record("b", dt.date(2024, 3, 1), entity_id="globex"),
        make_record("c", dt.date(2024, 3, 5), entity_id="globex"),
        make_record("d", dt.date(2024, 3, 6)),
    ]

    buckets = bucket_records(records, MatchEntity("globex"))

    assert {key: _ids(value) for key, value in buckets.items()} == {
        (2024, 3, 1): ["b"],
        (2024, 3, 5): ["c"],
    }


def test_filter_matching_nothing_yields_empty_buckets(make_record):
    records = [make_record("a", dt.date(2024, 3, 1), entity_id="acme")]

    assert bucket_records(records, MatchEntity("nobody")) == {}


def test_timestamps_from_different_zones_collide_in_canonical_zone(make_record):
    records = [
        make_record("ny", "2024-03-01T23:30:00-05:00"),
        make_record("tokyo", "2024-03-02T10:00:00+09:00"),
        make_record("zulu", "2024-03-02T00:15:00Z"),
    ]

    buckets = bucket_records(records, MATCH_ALL, dt.timezone.utc)

    assert list(buckets) == [(2024, 3, 2)]
    assert _ids(buckets[(2024, 3, 2)]) == ["ny", "tokyo", "zulu"]


def test_canonical_zone_is_applied_to_every_record(make_record):
    eastern = dt.timezone(dt.timedelta(hours=-5))
    records = [
        make_record("ny", "2024-03-01T23:30:00-05:00"),
        make_record("tokyo", "2024-03-02T10:00:00+09:00"),
    ]

    buckets = bucket_records(records, MATCH_ALL, eastern)

    assert list(buckets) == [(2024, 3, 1)]


def test_naive_datetimes_are_taken_as_canonical(make_record):
    records = [make_record("a", dt.datetime(2024, 3, 1, 23, 59))]

    buckets = bucket_records(records, MATCH_ALL, dt.timezone(dt.timedelta(hours=9)))

    assert list(buckets) == [(2024, 3, 1)]


def test_unresolvable_dates_are_skipped(make_record, caplog):
    records = [
        make_record("bad", "not a date"),
        make_record("none", None),
        make_record("number", 12345),
        make_record("ok", "2024-03-01"),
    ]

    with caplog.at_level(logging.DEBUG, logger="campaign_calendar.bucketer"):
        buckets = bucket_records(records)

    assert {key: _ids(value) for key, value in buckets.items()} == {(2024, 3, 1): ["ok"]}
    assert any("bad" in message for message in caplog.messages)


def test_every_record_lands_in_exactly_one_bucket(make_record):
    start = dt.datetime(2024, 1, 30, 5, 0, tzinfo=dt.timezone.utc)
    records = [
        make_record(f"r{index}", start + dt.timedelta(hours=7 * index)) for index in range(40)
    ]

    buckets = bucket_records(records)

    placed = [record for bucket in buckets.values() for record in bucket]
    assert sorted(_ids(placed)) == sorted(_ids(records))
    for key, bucket in buckets.items():
        for record in bucket:
            when = record.effective_date
            assert (when.year, when.month, when.day) == key


def test_empty_input_gives_empty_buckets():
    assert bucket_records([]) == {}
