"""
Tests for recurrence expansion into concrete occurrences.
"""

from __future__ import annotations

from datetime import date, datetime, time, timedelta
from itertools import product
from zoneinfo import ZoneInfo

import pytest

from recurring_booking.application.utils.recurrence import (
    MAX_OCCURRENCES,
    generate_occurrences,
    parse_time_of_day,
    week_start,
)

# Python weekday() numbering: Monday=0 .. Sunday=6
MONDAY, TUESDAY, WEDNESDAY, FRIDAY = 0, 1, 2, 4


def test_weekly_single_day():
    """Every Tuesday at 14:00, four times, seven days apart."""
    start = datetime(2026, 3, 3, 0, 0)  # Tuesday
    dates = generate_occurrences(start, "14:00", [2], 1, 4)

    assert len(dates) == 4
    for d in dates:
        assert d.weekday() == TUESDAY
        assert (d.hour, d.minute) == (14, 0)
    assert dates[0] == datetime(2026, 3, 3, 14, 0)
    for prev, nxt in zip(dates, dates[1:]):
        assert nxt - prev == timedelta(days=7)


def test_biweekly_spacing():
    start = datetime(2026, 3, 3, 0, 0)
    dates = generate_occurrences(start, "10:00", [2], 2, 4)

    assert len(dates) == 4
    for prev, nxt in zip(dates, dates[1:]):
        assert nxt - prev == timedelta(days=14)


def test_multiple_days_interleave_within_week():
    """Mon/Wed/Fri pattern visits weekdays in ascending order before advancing."""
    start = datetime(2026, 3, 2, 0, 0)  # Monday
    dates = generate_occurrences(start, "09:00", [1, 3, 5], 1, 6)

    assert [d.weekday() for d in dates] == [MONDAY, WEDNESDAY, FRIDAY] * 2
    assert dates[3] == datetime(2026, 3, 9, 9, 0)


def test_count_is_capped_at_52():
    start = datetime(2026, 3, 3, 0, 0)
    assert len(generate_occurrences(start, "14:00", [2], 1, 200)) == MAX_OCCURRENCES


def test_missing_count_defaults_to_cap():
    start = datetime(2026, 3, 3, 0, 0)
    assert len(generate_occurrences(start, "14:00", [0, 6], 1)) == MAX_OCCURRENCES


def test_end_date_is_inclusive_hard_stop():
    start = datetime(2026, 3, 3, 0, 0)
    end = datetime(2026, 3, 17, 14, 0)
    dates = generate_occurrences(start, "14:00", [2], 1, 52, end)

    # 03-17 at 14:00 equals the bound and is kept.
    assert dates == [
        datetime(2026, 3, 3, 14, 0),
        datetime(2026, 3, 10, 14, 0),
        datetime(2026, 3, 17, 14, 0),
    ]


def test_end_date_stops_mid_week_block():
    """Once a candidate is past the bound nothing later in the block is emitted."""
    start = datetime(2026, 3, 2, 0, 0)  # Monday
    end = datetime(2026, 3, 4, 12, 0)  # Wednesday noon
    dates = generate_occurrences(start, "09:00", [1, 3, 5], 1, 10, end)

    assert dates == [datetime(2026, 3, 2, 9, 0), datetime(2026, 3, 4, 9, 0)]


def test_days_before_start_in_first_week_are_skipped():
    start = datetime(2026, 3, 4, 0, 0)  # Wednesday
    dates = generate_occurrences(start, "09:00", [1, 3, 5], 1, 4)

    assert dates[0] == datetime(2026, 3, 4, 9, 0)
    assert dates[1] == datetime(2026, 3, 6, 9, 0)
    assert dates[2] == datetime(2026, 3, 9, 9, 0)


def test_time_earlier_than_start_on_same_day_is_skipped():
    start = datetime(2026, 3, 3, 15, 0)  # Tuesday afternoon
    dates = generate_occurrences(start, "14:00", [2], 1, 2)

    assert dates[0] == datetime(2026, 3, 10, 14, 0)


def test_end_before_first_occurrence_yields_nothing():
    start = datetime(2026, 3, 3, 0, 0)
    assert generate_occurrences(start, "14:00", [2], 1, 5, datetime(2026, 3, 3, 13, 59)) == []


def test_duplicate_and_unordered_days_are_normalized():
    start = datetime(2026, 3, 1, 0, 0)  # Sunday
    dates = generate_occurrences(start, "08:30", [5, 1, 5, 1], 1, 4)

    assert [d.weekday() for d in dates] == [MONDAY, FRIDAY, MONDAY, FRIDAY]


def test_sunday_anchor():
    assert week_start(date(2026, 3, 1)) == date(2026, 3, 1)  # Sunday stays
    assert week_start(date(2026, 3, 7)) == date(2026, 3, 1)  # Saturday
    assert week_start(date(2026, 3, 3)) == date(2026, 3, 1)


def test_timezone_is_carried_not_converted():
    tz = ZoneInfo("America/Los_Angeles")
    start = datetime(2026, 3, 3, 0, 0, tzinfo=tz)
    dates = generate_occurrences(start, "14:00", [2], 1, 3)

    for d in dates:
        assert d.tzinfo is tz
        assert (d.hour, d.minute) == (14, 0)


def test_naive_end_bound_is_read_in_start_zone():
    tz = ZoneInfo("Europe/Berlin")
    start = datetime(2026, 3, 3, 0, 0, tzinfo=tz)
    dates = generate_occurrences(start, "14:00", [2], 1, 10, datetime(2026, 3, 17, 14, 0))

    assert [d.day for d in dates] == [3, 10, 17]
    assert all(d.tzinfo is tz for d in dates)


def test_plain_date_start_is_accepted():
    dates = generate_occurrences(date(2026, 3, 3), time(14, 0), [2], 1, 1)
    assert dates == [datetime(2026, 3, 3, 14, 0)]


@pytest.mark.parametrize("count", [0, -3])
def test_non_positive_count_is_rejected(count):
    with pytest.raises(ValueError):
        generate_occurrences(datetime(2026, 3, 3), "14:00", [2], 1, count)


@pytest.mark.parametrize(
    "days, interval",
    [([], 1), ([7], 1), ([-1], 1), ([2], 0)],
)
def test_invalid_rule_is_rejected(days, interval):
    with pytest.raises(ValueError):
        generate_occurrences(datetime(2026, 3, 3), "14:00", days, interval, 4)


@pytest.mark.parametrize("value", ["2pm", "9:00", "24:00", "12:60", "", "12:00:00"])
def test_parse_time_of_day_rejects_malformed(value):
    with pytest.raises(ValueError):
        parse_time_of_day(value)


def test_parse_time_of_day():
    assert parse_time_of_day("09:05") == time(9, 5)
    assert parse_time_of_day(time(7, 30, 15)) == time(7, 30)


def test_invariants_hold_across_rules():
    """Bounded, ascending, unique and within [start, end] for a spread of rules."""
    starts = [datetime(2026, 1, 1, 0, 0), datetime(2026, 3, 4, 10, 15), datetime(2026, 12, 27, 23, 0)]
    day_sets = [[0], [6], [1, 3, 5], [0, 1, 2, 3, 4, 5, 6], [4, 2]]
    intervals = [1, 2, 4]
    counts = [None, 1, 7, 52, 100]
    end_offsets = [None, timedelta(days=3), timedelta(days=40), timedelta(days=400)]

    for start, days, interval, count, end_offset in product(starts, day_sets, intervals, counts, end_offsets):
        end = start + end_offset if end_offset is not None else None
        dates = generate_occurrences(start, "11:45", days, interval, count, end)

        cap = MAX_OCCURRENCES if count is None else min(count, MAX_OCCURRENCES)
        assert len(dates) <= cap
        assert all(d >= start for d in dates)
        if end is not None:
            assert all(d <= end for d in dates)
        assert all(a < b for a, b in zip(dates, dates[1:]))
        assert all((d.weekday() + 1) % 7 in days for d in dates)
        if end is None:
            assert len(dates) == cap
