"""
OwnerLens Analytics Engine — Report Export
============================================
Flattens an AnalyticsReport for export collaborators:

- report_rows(): ordered (key, value) string pairs, the owner's
  "Business Analytics Report" sheet
- write_csv(): those rows as a two-column CSV
- report_to_dict(): JSON-safe nested dict (Decimal → str, datetime → ISO)

Rounding happens here and only here; the report itself keeps full
Decimal precision.
"""

from __future__ import annotations

import csv
from datetime import date, datetime
from decimal import ROUND_HALF_UP, Decimal
from typing import Any, Dict, Iterable, List, TextIO, Tuple

from engines.analytics.buckets import CashFlowBucket, RevenueBucket
from engines.analytics.depreciation import AssetValuation
from engines.analytics.ranking import RankedEntry
from engines.analytics.report import AnalyticsReport

CENT = Decimal("0.01")
TENTH = Decimal("0.1")


def format_money(amount: Decimal) -> str:
    return str(amount.quantize(CENT, rounding=ROUND_HALF_UP))


def format_percent(value: Decimal) -> str:
    return f"{value.quantize(TENTH, rounding=ROUND_HALF_UP)}%"


def _joined(entries: Iterable[str]) -> str:
    return ", ".join(entries)


# ══════════════════════════════════════════════════════════════
# FLAT ROWS
# ══════════════════════════════════════════════════════════════

def report_rows(report: AnalyticsReport) -> Tuple[Tuple[str, str], ...]:
    window = report.window
    rows: List[Tuple[str, str]] = [
        ("Business Analytics Report", str(report.business_id)),
        ("Generated At", report.generated_at.isoformat()),
        ("Period Start", window.start.isoformat()),
        ("Period End", window.end.isoformat()),
        ("Business Type", report.business_type),
        ("Total Sales", format_money(report.total_revenue)),
        ("Previous Period Sales", format_money(report.previous_revenue)),
        ("Growth Rate", format_percent(report.growth_rate_percent)),
        ("Total Expenses", format_money(report.total_expenses)),
        ("Net Profit", format_money(report.net_profit)),
        ("Profit Margin", format_percent(report.profit_margin_percent)),
        ("Profit After Tax", format_money(report.profit_after_tax)),
        ("Business Valuation", format_money(report.business_valuation)),
        ("Inventory Value", format_money(report.inventory_value)),
        (
            "Top Clients",
            _joined(f"{e.name}: {format_money(e.revenue)}" for e in report.top_clients),
        ),
        (
            "Top Staff",
            _joined(f"{e.name}: {format_percent(e.contribution)}" for e in report.top_staff),
        ),
        (
            "Top Vendors",
            _joined(f"{e.name}: {format_money(e.revenue)}" for e in report.top_vendors),
        ),
        (
            "Assets",
            _joined(
                f"{a.asset.name}: {format_money(a.current_value)}"
                for a in report.assets_with_current_value
            ),
        ),
    ]
    if report.branch_id is not None:
        rows.insert(4, ("Branch", report.branch_id))
    return tuple(rows)


def write_csv(report: AnalyticsReport, stream: TextIO) -> int:
    """Write report_rows() as CSV; returns the number of rows written."""
    writer = csv.writer(stream, quoting=csv.QUOTE_ALL)
    rows = report_rows(report)
    writer.writerows(rows)
    return len(rows)


# ══════════════════════════════════════════════════════════════
# JSON-SAFE DICT
# ══════════════════════════════════════════════════════════════

def _plain(value: Any) -> Any:
    if isinstance(value, Decimal):
        return str(value)
    if isinstance(value, (datetime, date)):
        return value.isoformat()
    return value


def _bucket(bucket: RevenueBucket) -> Dict[str, Any]:
    return {"label": bucket.label, "start": _plain(bucket.start), "amount": _plain(bucket.amount)}


def _cash(bucket: CashFlowBucket) -> Dict[str, Any]:
    return {
        "label": bucket.label,
        "start": _plain(bucket.start),
        "inflow": _plain(bucket.inflow),
        "outflow": _plain(bucket.outflow),
        "net": _plain(bucket.net),
    }


def _entry(entry: RankedEntry) -> Dict[str, Any]:
    return {
        "rank": entry.rank,
        "party_id": entry.party_id,
        "name": entry.name,
        "contribution": _plain(entry.contribution),
        "revenue": _plain(entry.revenue),
        "order_count": entry.order_count,
        "last_order_at": _plain(entry.last_order_at),
    }


def _asset(valuation: AssetValuation) -> Dict[str, Any]:
    asset = valuation.asset
    return {
        "asset_id": asset.asset_id,
        "name": asset.name,
        "asset_type": asset.asset_type,
        "value": _plain(asset.value),
        "purchase_date": _plain(asset.purchase_date),
        "depreciation_rate": _plain(valuation.depreciation_rate),
        "accumulated_depreciation": _plain(valuation.accumulated_depreciation),
        "current_value": _plain(valuation.current_value),
    }


def report_to_dict(report: AnalyticsReport) -> Dict[str, Any]:
    return {
        "business_id": str(report.business_id),
        "business_type": report.business_type,
        "branch_id": report.branch_id,
        "window": {
            "start": _plain(report.window.start),
            "end": _plain(report.window.end),
        },
        "comparison_window": {
            "start": _plain(report.comparison_window.start),
            "end": _plain(report.comparison_window.end),
        },
        "generated_at": _plain(report.generated_at),
        "revenue": {
            "daily": [_bucket(b) for b in report.revenue_daily],
            "monthly": [_bucket(b) for b in report.revenue_monthly],
            "yearly": [_bucket(b) for b in report.revenue_yearly],
        },
        "total_revenue": _plain(report.total_revenue),
        "previous_revenue": _plain(report.previous_revenue),
        "growth_rate_percent": _plain(report.growth_rate_percent),
        "total_expenses": _plain(report.total_expenses),
        "net_profit": _plain(report.net_profit),
        "profit_margin_percent": _plain(report.profit_margin_percent),
        "profit_after_tax": _plain(report.profit_after_tax),
        "annualized_revenue": _plain(report.annualized_revenue),
        "valuation_multiplier": _plain(report.valuation_multiplier),
        "business_valuation": _plain(report.business_valuation),
        "inventory_value": _plain(report.inventory_value),
        "top_staff": [_entry(e) for e in report.top_staff],
        "top_clients": [_entry(e) for e in report.top_clients],
        "top_vendors": [_entry(e) for e in report.top_vendors],
        "assets": [_asset(a) for a in report.assets_with_current_value],
        "expense_breakdown": [
            {
                "category": share.category,
                "amount": _plain(share.amount),
                "percentage": _plain(share.percentage),
            }
            for share in report.expense_breakdown
        ],
        "cash_flow": [_cash(b) for b in report.cash_flow_by_month],
    }
