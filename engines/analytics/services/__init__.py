"""
OwnerLens Analytics Engine — Application Service
==================================================
Business Performance Analytics: one entry point that turns a business's
raw records into an immutable AnalyticsReport.

    RecordStore ─► Record Selector ─┬─► Time-Bucket Aggregator
                                    ├─► Metric Calculator
                                    ├─► Ranking Engine
                                    └─► Asset Depreciation Calculator
                                              │
                                              ▼
                                       AnalyticsReport

This engine is READ-ONLY and STATELESS:
- Each store collection is read exactly once per report (snapshot)
- Inputs are never mutated; no state survives between calls
- "Now" comes from the injected Clock, never from the wall clock
- Multi-tenant: business_id is explicit on every call, so concurrent
  calls for different businesses or windows need no locking
"""

from __future__ import annotations

import logging
import uuid
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from typing import Iterable, Optional, Tuple

from core.config.analytics import AnalyticsConfig, get_analytics_config
from core.time.clock import Clock, SystemClock
from engines.analytics import metrics
from engines.analytics.buckets import (
    Granularity,
    bucket_range,
    bucket_revenue,
    cash_flow_by_month,
)
from engines.analytics.depreciation import value_assets
from engines.analytics.errors import AnalyticsError
from engines.analytics.policies import (
    valuation_multiplier_policy,
    vendor_ranking_policy,
)
from engines.analytics.ranking import rank_clients, rank_staff, rank_vendors
from engines.analytics.report import AnalyticsReport
from engines.analytics.selector import (
    previous_window,
    scope_to_business,
    select,
    select_branch,
)
from engines.analytics.store import RecordStore
from engines.analytics.window import DateWindow, trailing_window

logger = logging.getLogger("ownerlens.analytics")


# ══════════════════════════════════════════════════════════════
# BATCH CONTRACTS
# ══════════════════════════════════════════════════════════════

@dataclass(frozen=True)
class ReportRequest:
    business_id: uuid.UUID
    window: DateWindow
    business_type: str
    branch_id: Optional[str] = None

    def __post_init__(self):
        if not isinstance(self.business_id, uuid.UUID):
            raise ValueError("business_id must be UUID.")
        if not isinstance(self.window, DateWindow):
            raise ValueError("window must be DateWindow.")


@dataclass(frozen=True)
class BatchOutcome:
    """Result of one business in a batch: a report or the error it raised."""

    business_id: uuid.UUID
    report: Optional[AnalyticsReport] = None
    error: Optional[Exception] = None

    @property
    def ok(self) -> bool:
        return self.error is None


# ══════════════════════════════════════════════════════════════
# APPLICATION SERVICE
# ══════════════════════════════════════════════════════════════

class AnalyticsService:
    """
    Business Performance Analytics Engine.

    Collaborators are injected: a RecordStore for data, a Clock for "now",
    and an optional AnalyticsConfig (defaults to the process-wide config).
    """

    def __init__(
        self,
        record_store: RecordStore,
        *,
        clock: Clock | None = None,
        config: AnalyticsConfig | None = None,
    ):
        self._store = record_store
        self._clock = clock or SystemClock()
        self._config = config

    @property
    def config(self) -> AnalyticsConfig:
        return self._config or get_analytics_config()

    # ── Single report ─────────────────────────────────────────

    def compute_report(
        self,
        business_id: uuid.UUID,
        window: DateWindow,
        business_type: str,
        *,
        branch_id: Optional[str] = None,
    ) -> AnalyticsReport:
        if not isinstance(business_id, uuid.UUID):
            raise ValueError("business_id must be UUID.")
        if not isinstance(window, DateWindow):
            raise ValueError("window must be DateWindow.")

        config = self.config
        now = self._clock.now_utc()

        # ── Snapshot: one read per collection ─────────────────
        sales = scope_to_business(self._store.get_sales(business_id), business_id)
        expenses = scope_to_business(self._store.get_expenses(business_id), business_id)
        assets = scope_to_business(self._store.get_assets(business_id), business_id)
        staff = scope_to_business(self._store.get_staff(business_id), business_id)
        customers = scope_to_business(self._store.get_customers(business_id), business_id)
        vendors = scope_to_business(self._store.get_vendors(business_id), business_id)
        products = scope_to_business(
            self._store.get_active_products(business_id), business_id
        )

        sales = select_branch(sales, branch_id)
        expenses = select_branch(expenses, branch_id)

        # ── Record Selector ───────────────────────────────────
        comparison = previous_window(window)
        window_sales = select(sales, window)
        previous_sales = select(sales, comparison)
        window_expenses = select(expenses, window)
        logger.debug(
            "Selected %d sales (%d previous), %d expenses for business %s",
            len(window_sales),
            len(previous_sales),
            len(window_expenses),
            business_id,
        )

        # ── Metric Calculator ─────────────────────────────────
        revenue = metrics.total_revenue(window_sales)
        previous_revenue = metrics.total_revenue(previous_sales)
        expense_total = metrics.total_expenses(window_expenses)
        net = metrics.net_profit(revenue, expense_total)
        annual = metrics.annualized_revenue(revenue, window)
        multiplier = valuation_multiplier_policy(business_type, config)

        # ── Time-Bucket Aggregator ────────────────────────────
        days = bucket_range(Granularity.DAY, window, config.daily_buckets)
        months = bucket_range(Granularity.MONTH, window, config.monthly_buckets)
        years = bucket_range(Granularity.YEAR, window, config.yearly_buckets)

        # ── Ranking Engine ────────────────────────────────────
        if vendor_ranking_policy(business_type, config):
            top_vendors = rank_vendors(vendors, window_sales, config.top_n)
        else:
            top_vendors = ()

        report = AnalyticsReport(
            business_id=business_id,
            business_type=multiplier.business_type,
            window=window,
            comparison_window=comparison,
            generated_at=now,
            revenue_daily=bucket_revenue(window_sales, Granularity.DAY, days),
            revenue_monthly=bucket_revenue(window_sales, Granularity.MONTH, months),
            revenue_yearly=bucket_revenue(window_sales, Granularity.YEAR, years),
            total_revenue=revenue,
            previous_revenue=previous_revenue,
            growth_rate_percent=metrics.growth_rate_percent(revenue, previous_revenue),
            total_expenses=expense_total,
            net_profit=net,
            profit_margin_percent=metrics.profit_margin_percent(net, revenue),
            profit_after_tax=metrics.profit_after_tax(net, config.tax_rate),
            annualized_revenue=annual,
            valuation_multiplier=multiplier.multiplier,
            business_valuation=metrics.business_valuation(annual, multiplier.multiplier),
            inventory_value=metrics.inventory_value(products),
            top_staff=rank_staff(staff, window_sales, revenue, config.top_n),
            top_clients=rank_clients(customers, window_sales, config.top_n),
            top_vendors=top_vendors,
            # ── Asset Depreciation Calculator ─────────────────
            assets_with_current_value=value_assets(
                assets,
                now,
                default_rate=config.default_depreciation_rate,
                max_fraction=config.max_depreciation_fraction,
                residual_fraction=config.residual_value_fraction,
            ),
            expense_breakdown=metrics.expense_breakdown(window_expenses, expense_total),
            cash_flow_by_month=cash_flow_by_month(window_sales, window_expenses, months),
            branch_id=branch_id,
        )

        logger.info(
            "Analytics report computed for business %s [%s, %s): revenue=%s expenses=%s",
            business_id,
            window.start.isoformat(),
            window.end.isoformat(),
            revenue,
            expense_total,
        )
        return report

    def compute_trailing_report(
        self,
        business_id: uuid.UUID,
        preset: str,
        business_type: str,
        *,
        branch_id: Optional[str] = None,
    ) -> AnalyticsReport:
        """Report over a dashboard range preset ending at the clock's now."""
        window = trailing_window(preset, self._clock.now_utc())
        return self.compute_report(
            business_id, window, business_type, branch_id=branch_id
        )

    # ── Batch ─────────────────────────────────────────────────

    def compute_batch(
        self,
        requests: Iterable[ReportRequest],
        *,
        max_workers: Optional[int] = None,
    ) -> Tuple[BatchOutcome, ...]:
        """
        Compute independent reports in parallel. A failure is captured in
        that business's outcome and never affects the others. Outcomes are
        returned in request order.
        """
        pending = tuple(requests)
        if not pending:
            return ()
        with ThreadPoolExecutor(max_workers=max_workers) as pool:
            return tuple(pool.map(self._outcome_for, pending))

    def _outcome_for(self, request: ReportRequest) -> BatchOutcome:
        try:
            report = self.compute_report(
                request.business_id,
                request.window,
                request.business_type,
                branch_id=request.branch_id,
            )
        except AnalyticsError as exc:
            logger.error(
                "Analytics report failed for business %s: %s",
                request.business_id,
                exc,
            )
            return BatchOutcome(business_id=request.business_id, error=exc)
        except Exception as exc:
            logger.exception(
                "Unexpected failure computing analytics for business %s",
                request.business_id,
            )
            return BatchOutcome(business_id=request.business_id, error=exc)
        return BatchOutcome(business_id=request.business_id, report=report)
