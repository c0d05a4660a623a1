"""
Tests for core.time — Clock protocol and calendar helpers.
"""

import pytest
from datetime import date, datetime, timedelta, timezone
from decimal import Decimal

from core.time.clock import FixedClock, SystemClock
from core.time.temporal import (
    DAYS_PER_YEAR,
    add_months,
    fractional_days,
    fractional_years,
    is_aware,
    last_instant_date,
    month_start,
    months_between,
    to_utc,
    utc_midnight,
)


# ── Clock Tests ──────────────────────────────────────────────

class TestSystemClock:
    def test_returns_utc_datetime(self):
        clock = SystemClock()
        dt = clock.now_utc()
        assert dt.tzinfo is not None
        assert dt.tzinfo == timezone.utc

    def test_time_advances(self):
        clock = SystemClock()
        t1 = clock.now_utc()
        t2 = clock.now_utc()
        assert t2 >= t1


class TestFixedClock:
    def test_returns_fixed_time(self):
        fixed = datetime(2025, 6, 15, 12, 0, 0, tzinfo=timezone.utc)
        clock = FixedClock(fixed)
        assert clock.now_utc() == fixed
        assert clock.now_utc() == fixed  # Same every time

    def test_rejects_naive_datetime(self):
        with pytest.raises(ValueError, match="timezone-aware"):
            FixedClock(datetime(2025, 1, 1))

    def test_normalises_to_utc(self):
        plus_three = timezone(timedelta(hours=3))
        clock = FixedClock(datetime(2025, 1, 1, 3, 0, tzinfo=plus_three))
        assert clock.now_utc() == datetime(2025, 1, 1, tzinfo=timezone.utc)
        assert clock.now_utc().tzinfo == timezone.utc

    def test_advance(self):
        fixed = datetime(2025, 6, 15, 12, 0, 0, tzinfo=timezone.utc)
        clock = FixedClock(fixed)
        clock.advance(days=30)
        assert clock.now_utc() == fixed + timedelta(days=30)


# ── Timezone Helpers ─────────────────────────────────────────

class TestTimezoneHelpers:
    def test_is_aware(self):
        assert is_aware(datetime(2025, 1, 1, tzinfo=timezone.utc))
        assert not is_aware(datetime(2025, 1, 1))

    def test_to_utc_rejects_naive(self):
        with pytest.raises(ValueError, match="timezone-aware"):
            to_utc(datetime(2025, 1, 1))

    def test_to_utc_rejects_non_datetime(self):
        with pytest.raises(ValueError):
            to_utc(date(2025, 1, 1))

    def test_to_utc_converts_offset(self):
        minus_five = timezone(timedelta(hours=-5))
        dt = datetime(2024, 12, 31, 20, 0, tzinfo=minus_five)
        assert to_utc(dt) == datetime(2025, 1, 1, 1, 0, tzinfo=timezone.utc)

    def test_utc_midnight(self):
        assert utc_midnight(date(2024, 2, 29)) == datetime(
            2024, 2, 29, tzinfo=timezone.utc
        )


# ── Fractional Durations ─────────────────────────────────────

class TestFractionalDurations:
    def test_whole_days(self):
        assert fractional_days(timedelta(days=31)) == Decimal(31)

    def test_half_day(self):
        assert fractional_days(timedelta(hours=12)) == Decimal("0.5")

    def test_negative_delta(self):
        assert fractional_days(timedelta(days=-2)) == Decimal(-2)

    def test_years_use_365_25_days(self):
        delta = timedelta(days=5 * 365.25)
        assert fractional_years(delta) == Decimal(5)
        assert DAYS_PER_YEAR == Decimal("365.25")


# ── Calendar Arithmetic ──────────────────────────────────────

class TestCalendarArithmetic:
    def test_last_instant_date_midnight_end(self):
        end = datetime(2024, 2, 1, tzinfo=timezone.utc)
        assert last_instant_date(end) == date(2024, 1, 31)

    def test_last_instant_date_mid_day_end(self):
        end = datetime(2024, 2, 1, 9, 30, tzinfo=timezone.utc)
        assert last_instant_date(end) == date(2024, 2, 1)

    def test_month_start(self):
        assert month_start(date(2024, 3, 17)) == date(2024, 3, 1)

    @pytest.mark.parametrize(
        "day,months,expected",
        [
            (date(2024, 1, 31), 1, date(2024, 2, 1)),
            (date(2024, 11, 15), 2, date(2025, 1, 1)),
            (date(2024, 1, 1), -1, date(2023, 12, 1)),
            (date(2024, 3, 1), -14, date(2023, 1, 1)),
            (date(2024, 6, 1), 0, date(2024, 6, 1)),
        ],
    )
    def test_add_months(self, day, months, expected):
        assert add_months(day, months) == expected

    def test_months_between_is_inclusive(self):
        assert months_between(date(2024, 1, 1), date(2024, 1, 31)) == 1
        assert months_between(date(2023, 11, 5), date(2024, 2, 1)) == 4
