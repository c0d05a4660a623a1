"""
OwnerLens Analytics Engine — Analytics Report
===============================================
The single immutable value returned by a report computation. It holds
structured data only; serialization belongs to export routines.

Invariants (hold for every report the service assembles):
- total_revenue == sum of every revenue bucket series
- net_profit == total_revenue - total_expenses
- profit_margin_percent == net_profit / total_revenue * 100, or 0
"""

from __future__ import annotations

import uuid
from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from typing import Optional, Tuple

from engines.analytics.buckets import CashFlowBucket, RevenueBucket
from engines.analytics.depreciation import AssetValuation
from engines.analytics.metrics import ExpenseShare
from engines.analytics.ranking import RankedEntry
from engines.analytics.window import DateWindow


@dataclass(frozen=True)
class AnalyticsReport:
    business_id: uuid.UUID
    business_type: str
    window: DateWindow
    comparison_window: DateWindow
    generated_at: datetime

    revenue_daily: Tuple[RevenueBucket, ...]
    revenue_monthly: Tuple[RevenueBucket, ...]
    revenue_yearly: Tuple[RevenueBucket, ...]

    total_revenue: Decimal
    previous_revenue: Decimal
    growth_rate_percent: Decimal
    total_expenses: Decimal
    net_profit: Decimal
    profit_margin_percent: Decimal
    profit_after_tax: Decimal
    annualized_revenue: Decimal
    valuation_multiplier: Decimal
    business_valuation: Decimal
    inventory_value: Decimal

    top_staff: Tuple[RankedEntry, ...]
    top_clients: Tuple[RankedEntry, ...]
    top_vendors: Tuple[RankedEntry, ...]
    assets_with_current_value: Tuple[AssetValuation, ...]
    expense_breakdown: Tuple[ExpenseShare, ...]
    cash_flow_by_month: Tuple[CashFlowBucket, ...]

    branch_id: Optional[str] = None

    @property
    def total_asset_value(self) -> Decimal:
        return sum(
            (a.current_value for a in self.assets_with_current_value), Decimal(0)
        )
