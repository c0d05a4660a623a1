"""
OwnerLens Core Time — Public API
==================================
Explicit clock protocol and calendar helpers.
Doctrine: NO datetime.now() in engine logic.
"""

from core.time.clock import Clock, FixedClock, SystemClock
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

__all__ = [
    "Clock",
    "FixedClock",
    "SystemClock",
    "DAYS_PER_YEAR",
    "add_months",
    "fractional_days",
    "fractional_years",
    "is_aware",
    "last_instant_date",
    "month_start",
    "months_between",
    "to_utc",
    "utc_midnight",
]
