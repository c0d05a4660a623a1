"""
OwnerLens Analytics Engine — Ranking Engine
=============================================
Deterministic top-N leaderboards for staff, clients and vendors.

RULES (NON-NEGOTIABLE):
- Zero-contribution entities are dropped
- Order: contribution descending, then party_id ascending (then name)
- Result never exceeds top_n entries
- Same input multiset → identical output, including tie order

Only the contribution function and the entity set differ between the
three leaderboards; the ranking itself is shared.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from typing import Callable, Dict, Iterable, Optional, Sequence, Tuple, TypeVar

from engines.analytics.records import Customer, Party, SaleRecord, StaffMember, Vendor

P = TypeVar("P", bound=Party)

HUNDRED = Decimal(100)


# ══════════════════════════════════════════════════════════════
# GENERIC RANKING
# ══════════════════════════════════════════════════════════════

def rank(
    entities: Iterable[P],
    contribution_fn: Callable[[P], Decimal],
    top_n: int = 5,
) -> Tuple[Tuple[P, Decimal], ...]:
    """Top `top_n` (entity, contribution) pairs with positive contribution."""
    if top_n <= 0:
        return ()
    scored = []
    for entity in entities:
        contribution = contribution_fn(entity)
        if contribution > 0:
            scored.append((entity, contribution))
    scored.sort(key=lambda pair: (-pair[1], pair[0].party_id, pair[0].name))
    return tuple(scored[:top_n])


# ══════════════════════════════════════════════════════════════
# LINKED SALE TOTALS
# ══════════════════════════════════════════════════════════════

@dataclass(frozen=True)
class LinkedTotals:
    revenue: Decimal = Decimal(0)
    order_count: int = 0
    last_order_at: Optional[datetime] = None


EMPTY_TOTALS = LinkedTotals()


def link_sales(sales: Iterable[SaleRecord], key: str) -> Dict[str, LinkedTotals]:
    """Aggregate sales by a link attribute (customer_id / staff_id / vendor_id)."""
    linked: Dict[str, LinkedTotals] = {}
    for sale in sales:
        party_id = getattr(sale, key)
        if party_id is None:
            continue
        prev = linked.get(party_id, EMPTY_TOTALS)
        last = prev.last_order_at
        linked[party_id] = LinkedTotals(
            revenue=prev.revenue + sale.total,
            order_count=prev.order_count + 1,
            last_order_at=sale.date if last is None or sale.date > last else last,
        )
    return linked


def staff_performance_score(
    staff_revenue: Decimal,
    total_revenue: Decimal,
    staff_count: int,
) -> Decimal:
    """
    Share of revenue scaled by headcount, clamped to [0, 100].
    Anyone selling at least an even 1/N share of revenue scores 100.
    """
    if total_revenue <= 0 or staff_count <= 0:
        return Decimal(0)
    score = staff_revenue / total_revenue * HUNDRED * staff_count
    return min(HUNDRED, max(Decimal(0), score))


# ══════════════════════════════════════════════════════════════
# LEADERBOARD ENTRIES
# ══════════════════════════════════════════════════════════════

@dataclass(frozen=True)
class RankedEntry:
    """
    One leaderboard row. `contribution` is the ranking key: linked revenue
    for clients and vendors, performance score (0-100) for staff.
    """

    rank: int
    party_id: str
    name: str
    contribution: Decimal
    revenue: Decimal
    order_count: int
    last_order_at: Optional[datetime] = None


def _entries(
    ranked: Sequence[Tuple[Party, Decimal]],
    linked: Dict[str, LinkedTotals],
) -> Tuple[RankedEntry, ...]:
    rows = []
    for position, (party, contribution) in enumerate(ranked, start=1):
        totals = linked.get(party.party_id, EMPTY_TOTALS)
        rows.append(
            RankedEntry(
                rank=position,
                party_id=party.party_id,
                name=party.name,
                contribution=contribution,
                revenue=totals.revenue,
                order_count=totals.order_count,
                last_order_at=totals.last_order_at,
            )
        )
    return tuple(rows)


def rank_clients(
    customers: Sequence[Customer],
    sales: Iterable[SaleRecord],
    top_n: int = 5,
) -> Tuple[RankedEntry, ...]:
    linked = link_sales(sales, "customer_id")
    ranked = rank(
        customers,
        lambda c: linked.get(c.party_id, EMPTY_TOTALS).revenue,
        top_n,
    )
    return _entries(ranked, linked)


def rank_vendors(
    vendors: Sequence[Vendor],
    sales: Iterable[SaleRecord],
    top_n: int = 5,
) -> Tuple[RankedEntry, ...]:
    linked = link_sales(sales, "vendor_id")
    ranked = rank(
        vendors,
        lambda v: linked.get(v.party_id, EMPTY_TOTALS).revenue,
        top_n,
    )
    return _entries(ranked, linked)


def rank_staff(
    staff: Sequence[StaffMember],
    sales: Iterable[SaleRecord],
    total_revenue: Decimal,
    top_n: int = 5,
) -> Tuple[RankedEntry, ...]:
    linked = link_sales(sales, "staff_id")
    staff_count = len(staff)
    ranked = rank(
        staff,
        lambda m: staff_performance_score(
            linked.get(m.party_id, EMPTY_TOTALS).revenue, total_revenue, staff_count
        ),
        top_n,
    )
    return _entries(ranked, linked)
