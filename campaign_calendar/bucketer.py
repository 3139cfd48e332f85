"""Group calendar records into per-day buckets."""

from __future__ import annotations

import datetime as dt
import logging
from typing import Dict, Iterable, List

from .records import MATCH_ALL, CalendarRecord, DateKey, FilterCriteria, matches, to_date_key

logger = logging.getLogger(__name__)

DayBucket = Dict[DateKey, List[CalendarRecord]]


def bucket_records(
    records: Iterable[CalendarRecord],
    criteria: FilterCriteria = MATCH_ALL,
    tz: dt.tzinfo = dt.timezone.utc,
) -> DayBucket:
    """Bucket ``records`` by the calendar day of their effective date.

    Records rejected by ``criteria`` or whose effective date cannot be
    resolved are left out of every bucket. Within a bucket records keep
    their input order; callers wanting chronological order must sort first.
    """

    buckets: DayBucket = {}
    for record in records:
        if not matches(criteria, record):
            continue

        date_key = to_date_key(record.effective_date, tz)
        if date_key is None:
            logger.debug(
                "Skipping record %r with unresolvable effective date %r",
                record.id,
                record.effective_date,
            )
            continue

        buckets.setdefault(date_key, []).append(record)
    return buckets
