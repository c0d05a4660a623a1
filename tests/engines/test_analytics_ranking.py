"""
OwnerLens Analytics — Ranking Engine Tests
===========================================
Tests cover:
- Generic rank(): filtering, ordering, tie-breaks, truncation
- Sale linking (revenue, order count, last order)
- Staff performance score
- Client, vendor and staff leaderboards
"""

import uuid
from datetime import datetime, timezone
from decimal import Decimal

import pytest

from engines.analytics.ranking import (
    link_sales,
    rank,
    rank_clients,
    rank_staff,
    rank_vendors,
    staff_performance_score,
)
from engines.analytics.records import Customer, SaleRecord, StaffMember, Vendor

BIZ = uuid.uuid4()


def at(day):
    return datetime(2024, 1, day, tzinfo=timezone.utc)


def sale(sale_id, day, total, **links):
    return SaleRecord(sale_id=sale_id, business_id=BIZ, date=at(day), total=total, **links)


def customer(party_id, name=None):
    return Customer(party_id=party_id, business_id=BIZ, name=name or party_id.upper())


def vendor(party_id, name=None):
    return Vendor(party_id=party_id, business_id=BIZ, name=name or party_id.upper())


def staff(party_id, name=None):
    return StaffMember(party_id=party_id, business_id=BIZ, name=name or party_id.upper())


# ══════════════════════════════════════════════════════════════
# GENERIC RANK
# ══════════════════════════════════════════════════════════════

class TestRank:
    def test_orders_by_contribution_descending(self):
        scores = {"a": Decimal(1), "b": Decimal(3), "c": Decimal(2)}
        ranked = rank([customer(k) for k in scores], lambda c: scores[c.party_id])
        assert [e.party_id for e, _ in ranked] == ["b", "c", "a"]

    def test_ties_broken_by_party_id(self):
        parties = [customer("zed"), customer("amy"), customer("max")]
        ranked = rank(parties, lambda c: Decimal(5))
        assert [e.party_id for e, _ in ranked] == ["amy", "max", "zed"]

    def test_zero_contribution_dropped(self):
        scores = {"a": Decimal(0), "b": Decimal(1)}
        ranked = rank([customer(k) for k in scores], lambda c: scores[c.party_id])
        assert [e.party_id for e, _ in ranked] == ["b"]

    def test_truncates_to_top_n(self):
        parties = [customer(f"c{i}") for i in range(10)]
        assert len(rank(parties, lambda c: Decimal(1), top_n=3)) == 3

    @pytest.mark.parametrize("top_n", [0, -1])
    def test_non_positive_top_n_is_empty(self, top_n):
        assert rank([customer("a")], lambda c: Decimal(1), top_n=top_n) == ()

    def test_input_order_does_not_matter(self):
        scores = {"a": Decimal(2), "b": Decimal(2), "c": Decimal(9)}
        forward = rank([customer(k) for k in "abc"], lambda c: scores[c.party_id])
        backward = rank([customer(k) for k in "cba"], lambda c: scores[c.party_id])
        assert forward == backward


# ══════════════════════════════════════════════════════════════
# SALE LINKING
# ══════════════════════════════════════════════════════════════

class TestLinkSales:
    def test_aggregates_by_link(self):
        sales = [
            sale("s1", 3, "100", customer_id="c1"),
            sale("s2", 9, "50", customer_id="c1"),
            sale("s3", 5, "70", customer_id="c2"),
            sale("s4", 6, "999"),
        ]
        linked = link_sales(sales, "customer_id")
        assert set(linked) == {"c1", "c2"}
        assert linked["c1"].revenue == Decimal("150")
        assert linked["c1"].order_count == 2
        assert linked["c1"].last_order_at == at(9)

    def test_last_order_independent_of_order(self):
        sales = [sale("s2", 9, "50", staff_id="st"), sale("s1", 3, "100", staff_id="st")]
        assert link_sales(sales, "staff_id")["st"].last_order_at == at(9)


# ══════════════════════════════════════════════════════════════
# STAFF SCORE
# ══════════════════════════════════════════════════════════════

class TestStaffPerformanceScore:
    def test_even_share_scores_hundred(self):
        assert staff_performance_score(Decimal(50), Decimal(100), 2) == Decimal(100)

    def test_partial_share(self):
        assert staff_performance_score(Decimal(10), Decimal(100), 4) == Decimal(40)

    def test_clamped_to_hundred(self):
        assert staff_performance_score(Decimal(90), Decimal(100), 3) == Decimal(100)

    def test_zero_revenue_scores_zero(self):
        assert staff_performance_score(Decimal(0), Decimal(0), 3) == Decimal(0)


# ══════════════════════════════════════════════════════════════
# LEADERBOARDS
# ══════════════════════════════════════════════════════════════

class TestLeaderboards:
    def test_client_leaderboard(self):
        customers = [customer("c1", "Metro"), customer("c2", "Corner"), customer("c3", "Idle")]
        sales = [
            sale("s1", 2, "300", customer_id="c2"),
            sale("s2", 4, "500", customer_id="c1"),
            sale("s3", 6, "100", customer_id="c2"),
        ]
        board = rank_clients(customers, sales, top_n=5)
        assert [(e.rank, e.name) for e in board] == [(1, "Metro"), (2, "Corner")]
        assert board[0].contribution == board[0].revenue == Decimal("500")
        assert board[1].order_count == 2
        assert board[1].last_order_at == at(6)

    def test_vendor_leaderboard(self):
        vendors = [vendor("v1"), vendor("v2")]
        sales = [sale("p1", 2, "6000", vendor_id="v2"), sale("p2", 3, "10", vendor_id="v1")]
        board = rank_vendors(vendors, sales)
        assert [e.party_id for e in board] == ["v2", "v1"]

    def test_vendor_leaderboard_without_purchases_is_empty(self):
        sales = [sale("s1", 2, "100", customer_id="c1")]
        assert rank_vendors([vendor("v1")], sales) == ()

    def test_staff_leaderboard_uses_score(self):
        members = [staff("st1"), staff("st2"), staff("st3")]
        sales = [
            sale("s1", 2, "600", staff_id="st1"),
            sale("s2", 3, "300", staff_id="st2"),
            sale("s3", 4, "100", staff_id="st3"),
        ]
        board = rank_staff(members, sales, Decimal("1000"), top_n=5)
        assert [e.party_id for e in board] == ["st1", "st2", "st3"]
        assert board[0].contribution == Decimal(100)
        assert board[1].contribution == Decimal(90)
        assert board[2].contribution == Decimal(30)
        assert board[0].revenue == Decimal("600")

    def test_staff_without_sales_dropped(self):
        board = rank_staff([staff("st1"), staff("st2")],
                           [sale("s1", 2, "10", staff_id="st1")], Decimal("10"))
        assert [e.party_id for e in board] == ["st1"]

    def test_unknown_links_ignored(self):
        board = rank_clients([customer("c1")], [sale("s1", 2, "10", customer_id="ghost")])
        assert board == ()
