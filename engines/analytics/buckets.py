"""
OwnerLens Analytics Engine — Time-Bucket Aggregator
=====================================================
Sums monetary fields into calendar buckets (UTC calendar).

RULES (NON-NEGOTIABLE):
- Every unit in the requested range gets a bucket, even with no records
- An empty bucket holds exactly Decimal(0), never omitted
- Buckets are ordered oldest → newest
- A record lands in at most one bucket; records outside the range are ignored

Labels: ISO date (daily), short English month name (monthly),
four-digit year (yearly).
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime, timedelta, timezone
from decimal import Decimal
from enum import Enum
from typing import Dict, Iterable, Sequence, Tuple

from core.time.temporal import add_months, last_instant_date, month_start, months_between
from engines.analytics.records import ExpenseRecord, SaleRecord
from engines.analytics.window import DateWindow


MONTH_LABELS = (
    "Jan", "Feb", "Mar", "Apr", "May", "Jun",
    "Jul", "Aug", "Sep", "Oct", "Nov", "Dec",
)


class Granularity(Enum):
    DAY = "day"
    MONTH = "month"
    YEAR = "year"


# ══════════════════════════════════════════════════════════════
# BUCKET VALUES
# ══════════════════════════════════════════════════════════════

@dataclass(frozen=True)
class RevenueBucket:
    label: str
    start: date
    amount: Decimal


@dataclass(frozen=True)
class CashFlowBucket:
    label: str
    start: date
    inflow: Decimal
    outflow: Decimal
    net: Decimal


# ══════════════════════════════════════════════════════════════
# UNIT HELPERS
# ══════════════════════════════════════════════════════════════

def unit_start(granularity: Granularity, dt: datetime) -> date:
    """Calendar unit (as its first day) containing `dt` on the UTC calendar."""
    day = dt.astimezone(timezone.utc).date()
    if granularity is Granularity.DAY:
        return day
    if granularity is Granularity.MONTH:
        return month_start(day)
    return date(day.year, 1, 1)


def unit_label(granularity: Granularity, start: date) -> str:
    if granularity is Granularity.DAY:
        return start.isoformat()
    if granularity is Granularity.MONTH:
        return MONTH_LABELS[start.month - 1]
    return f"{start.year:04d}"


def bucket_range(
    granularity: Granularity,
    window: DateWindow,
    minimum_units: int = 1,
) -> Tuple[date, ...]:
    """
    Unit starts covered by a report over `window`.

    The range ends with the unit holding the window's last instant and
    reaches back `minimum_units` units, further if the window starts
    earlier. Every record inside the window therefore has a bucket.
    """
    if minimum_units < 1:
        raise ValueError(f"minimum_units must be >= 1, got {minimum_units}.")
    last_day = last_instant_date(window.end)
    first_day = window.start.date()

    if granularity is Granularity.DAY:
        count = max(minimum_units, (last_day - first_day).days + 1)
        return tuple(last_day - timedelta(days=offset) for offset in range(count - 1, -1, -1))

    if granularity is Granularity.MONTH:
        last = month_start(last_day)
        count = max(minimum_units, months_between(month_start(first_day), last))
        return tuple(add_months(last, -offset) for offset in range(count - 1, -1, -1))

    count = max(minimum_units, last_day.year - first_day.year + 1)
    return tuple(date(last_day.year - offset, 1, 1) for offset in range(count - 1, -1, -1))


def _sum_into(
    granularity: Granularity,
    units: Sequence[date],
    items: Iterable[Tuple[datetime, Decimal]],
) -> Dict[date, Decimal]:
    totals: Dict[date, Decimal] = {unit: Decimal(0) for unit in units}
    for dt, amount in items:
        key = unit_start(granularity, dt)
        if key in totals:
            totals[key] += amount
    return totals


# ══════════════════════════════════════════════════════════════
# AGGREGATORS
# ══════════════════════════════════════════════════════════════

def bucket_revenue(
    sales: Iterable[SaleRecord],
    granularity: Granularity,
    units: Sequence[date],
) -> Tuple[RevenueBucket, ...]:
    """Zero-filled revenue per unit, in `units` order."""
    totals = _sum_into(granularity, units, ((s.date, s.total) for s in sales))
    return tuple(
        RevenueBucket(label=unit_label(granularity, unit), start=unit, amount=totals[unit])
        for unit in units
    )


def cash_flow_by_month(
    sales: Iterable[SaleRecord],
    expenses: Iterable[ExpenseRecord],
    months: Sequence[date],
) -> Tuple[CashFlowBucket, ...]:
    """
    Monthly inflow (sales) vs outflow (expenses), both zero-filled,
    with net = inflow - outflow per month.
    """
    inflow = _sum_into(Granularity.MONTH, months, ((s.date, s.total) for s in sales))
    outflow = _sum_into(Granularity.MONTH, months, ((e.date, e.amount) for e in expenses))
    return tuple(
        CashFlowBucket(
            label=unit_label(Granularity.MONTH, month),
            start=month,
            inflow=inflow[month],
            outflow=outflow[month],
            net=inflow[month] - outflow[month],
        )
        for month in months
    )
