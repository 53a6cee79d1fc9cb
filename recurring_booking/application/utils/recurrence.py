from __future__ import annotations

import re
from collections.abc import Iterable
from datetime import date, datetime, time, timedelta

from recurring_booking.domain.wall_time import align_to

MAX_OCCURRENCES = 52
DAYS_PER_WEEK = 7

_TIME_OF_DAY = re.compile(r"(\d{2}):(\d{2})")


def parse_time_of_day(value: str | time) -> time:
    """Parse an "HH:MM" wall-clock string. Returns a time with seconds zeroed."""
    if isinstance(value, time):
        return value.replace(second=0, microsecond=0)

    match = _TIME_OF_DAY.fullmatch((value or "").strip())
    if not match:
        raise ValueError(f"time_of_day must be in HH:MM format, got {value!r}")

    hour, minute = int(match.group(1)), int(match.group(2))
    if hour > 23 or minute > 59:
        raise ValueError(f"time_of_day out of range: {value!r}")
    return time(hour, minute)


def normalize_days_of_week(days_of_week: Iterable[int]) -> tuple[int, ...]:
    """De-duplicate and sort weekday numbers (Sunday=0 .. Saturday=6)."""
    days = tuple(sorted(set(days_of_week)))
    if not days:
        raise ValueError("days_of_week must not be empty")
    if days[0] < 0 or days[-1] > 6:
        raise ValueError(f"days_of_week must be between 0 and 6, got {list(days)}")
    return days


def week_start(day: date) -> date:
    """Sunday of the calendar week containing `day`."""
    # date.weekday() is Monday=0, so Sunday maps to 6.
    return day - timedelta(days=(day.weekday() + 1) % DAYS_PER_WEEK)


def generate_occurrences(
    start_date: datetime | date,
    time_of_day: str | time,
    days_of_week: Iterable[int],
    interval_weeks: int,
    count: int | None = None,
    end_date: datetime | None = None,
) -> list[datetime]:
    """
    Expand a weekly recurrence rule into concrete, strictly ascending instants.

    Week blocks are anchored on the Sunday of the week containing `start_date` and
    advance by `interval_weeks`. Within a block, weekdays are visited in ascending
    order. Candidates earlier than `start_date` are skipped. The first candidate past
    `end_date` ends generation. At most min(count, 52) instants are returned; a
    missing `count` means 52.

    Candidates carry `start_date.tzinfo`; no time zone conversion is done.
    """
    if count is not None and count < 1:
        raise ValueError(f"count must be >= 1 when given, got {count}")
    if interval_weeks < 1:
        raise ValueError(f"interval_weeks must be >= 1, got {interval_weeks}")

    if not isinstance(start_date, datetime):
        start_date = datetime.combine(start_date, time.min)

    if end_date is not None:
        end_date = align_to(end_date, start_date)

    days = normalize_days_of_week(days_of_week)
    at = parse_time_of_day(time_of_day)
    limit = MAX_OCCURRENCES if count is None else min(count, MAX_OCCURRENCES)

    anchor = week_start(start_date.date())
    step = timedelta(weeks=interval_weeks)
    occurrences: list[datetime] = []

    while len(occurrences) < limit:
        for day in days:
            candidate = datetime.combine(anchor + timedelta(days=day), at, tzinfo=start_date.tzinfo)
            if candidate < start_date:
                continue
            if end_date is not None and candidate > end_date:
                return occurrences
            occurrences.append(candidate)
            if len(occurrences) >= limit:
                return occurrences
        anchor += step

    return occurrences
