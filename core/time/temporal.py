"""
OwnerLens Core Time — Calendar Helpers
========================================
Pure functions for calendar arithmetic on timezone-aware datetimes.
All functions take explicit arguments; no hidden clock access.

Calendar units (days, months, years) are always evaluated on the UTC
calendar so that bucketing does not depend on the server's locale.
"""

from __future__ import annotations

from datetime import date, datetime, time, timedelta, timezone
from decimal import Decimal

SECONDS_PER_DAY = Decimal(86400)
DAYS_PER_YEAR = Decimal("365.25")


def is_aware(dt: datetime) -> bool:
    return dt.tzinfo is not None and dt.tzinfo.utcoffset(dt) is not None


def to_utc(dt: datetime) -> datetime:
    """Normalise an aware datetime to UTC. Naive input is rejected."""
    if not isinstance(dt, datetime) or not is_aware(dt):
        raise ValueError(f"Expected timezone-aware datetime, got {dt!r}.")
    return dt.astimezone(timezone.utc)


def utc_midnight(day: date) -> datetime:
    return datetime.combine(day, time.min, tzinfo=timezone.utc)


def fractional_days(delta: timedelta) -> Decimal:
    """Exact length of a timedelta in days, as a Decimal."""
    micros = (delta.days * 86400 + delta.seconds) * 1_000_000 + delta.microseconds
    return Decimal(micros) / Decimal(1_000_000) / SECONDS_PER_DAY


def fractional_years(delta: timedelta, days_per_year: Decimal = DAYS_PER_YEAR) -> Decimal:
    return fractional_days(delta) / days_per_year


def last_instant_date(end_exclusive: datetime) -> date:
    """UTC calendar date holding the last instant before `end_exclusive`."""
    return (to_utc(end_exclusive) - timedelta(microseconds=1)).date()


# ══════════════════════════════════════════════════════════════
# MONTH / YEAR ARITHMETIC
# ══════════════════════════════════════════════════════════════

def month_start(day: date) -> date:
    return day.replace(day=1)


def add_months(day: date, months: int) -> date:
    """First day of the month `months` away from the month of `day`."""
    index = day.year * 12 + (day.month - 1) + months
    return date(index // 12, index % 12 + 1, 1)


def months_between(first: date, last: date) -> int:
    """Number of calendar months from `first` to `last`, inclusive."""
    return (last.year - first.year) * 12 + (last.month - first.month) + 1
