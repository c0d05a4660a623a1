"""
OwnerLens Analytics Engine — Metric Calculator
================================================
Scalar KPIs derived from window-selected records.

All arithmetic is Decimal. Division-by-zero situations are defined
results (0), not errors: a business with no history is a normal state.
"""

from __future__ import annotations

from collections import defaultdict
from dataclasses import dataclass
from decimal import Decimal
from typing import Dict, Iterable, Tuple

from engines.analytics.records import ExpenseRecord, ProductStock, SaleRecord
from engines.analytics.window import DateWindow

HUNDRED = Decimal(100)
DAYS_PER_YEAR = Decimal(365)


@dataclass(frozen=True)
class ExpenseShare:
    category: str
    amount: Decimal
    percentage: Decimal


def total_revenue(sales: Iterable[SaleRecord]) -> Decimal:
    return sum((s.total for s in sales), Decimal(0))


def total_expenses(expenses: Iterable[ExpenseRecord]) -> Decimal:
    return sum((e.amount for e in expenses), Decimal(0))


def growth_rate_percent(current: Decimal, previous: Decimal) -> Decimal:
    """Percent change against the previous period; 0 without prior revenue."""
    if previous == 0:
        return Decimal(0)
    return (current - previous) / previous * HUNDRED


def net_profit(revenue: Decimal, expenses: Decimal) -> Decimal:
    return revenue - expenses


def profit_margin_percent(net: Decimal, revenue: Decimal) -> Decimal:
    if revenue <= 0:
        return Decimal(0)
    return net / revenue * HUNDRED


def profit_after_tax(net: Decimal, tax_rate: Decimal) -> Decimal:
    """Flat tax on net profit; a loss is scaled the same way."""
    return net * (Decimal(1) - tax_rate)


def annualized_revenue(revenue: Decimal, window: DateWindow) -> Decimal:
    """Revenue scaled to 365 days; window length floored at one day."""
    return revenue * DAYS_PER_YEAR / window.length_in_days()


def business_valuation(annual_revenue: Decimal, multiplier: Decimal) -> Decimal:
    return annual_revenue * multiplier


def inventory_value(products: Iterable[ProductStock]) -> Decimal:
    return sum((p.price * p.stock for p in products), Decimal(0))


def expense_breakdown(
    expenses: Iterable[ExpenseRecord],
    total: Decimal,
) -> Tuple[ExpenseShare, ...]:
    """
    Amount and share of `total` per category, largest first.
    Ties fall back to category name so the order is reproducible.
    """
    by_category: Dict[str, Decimal] = defaultdict(Decimal)
    for expense in expenses:
        by_category[expense.category] += expense.amount

    shares = [
        ExpenseShare(
            category=category,
            amount=amount,
            percentage=(amount / total * HUNDRED) if total > 0 else Decimal(0),
        )
        for category, amount in by_category.items()
    ]
    shares.sort(key=lambda s: (-s.amount, s.category))
    return tuple(shares)
