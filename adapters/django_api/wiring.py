"""
OwnerLens Django Adapter Wiring
===============================
Constructs HttpApiDependencies for local/staging live runs.

This module is adapter-only glue:
- no engine contract changes
- analytics settings come from the Django OWNERLENS_ANALYTICS setting
- in-memory record store seeded with a demo business for smoke usage
"""

from __future__ import annotations

import threading
import uuid
from datetime import datetime, timedelta
from decimal import Decimal

from django.conf import settings

from core.config.analytics import AnalyticsConfig, set_analytics_config
from core.http_api.dependencies import HttpApiDependencies
from core.time.clock import SystemClock
from engines.analytics.records import (
    AssetRecord,
    Customer,
    ExpenseRecord,
    ProductStock,
    SaleRecord,
    StaffMember,
    Vendor,
)
from engines.analytics.services import AnalyticsService
from engines.analytics.store import InMemoryRecordStore


DEV_BUSINESS_ID = uuid.UUID("11111111-1111-1111-1111-111111111111")
DEV_BRANCH_ID = "main"
DEV_BUSINESS_TYPE = "retailer"

_DEPENDENCIES_LOCK = threading.Lock()
_DEPENDENCIES: HttpApiDependencies | None = None


def _seed_demo_records(store: InMemoryRecordStore, now: datetime) -> None:
    biz = DEV_BUSINESS_ID
    store.add(
        StaffMember(party_id="staff-1", business_id=biz, name="Asha"),
        StaffMember(party_id="staff-2", business_id=biz, name="Ravi"),
        Customer(party_id="cust-1", business_id=biz, name="Metro Mart"),
        Customer(party_id="cust-2", business_id=biz, name="Corner Store"),
        Vendor(party_id="vend-1", business_id=biz, name="Wholesale Hub"),
        ProductStock(product_id="prod-1", business_id=biz, price="250", stock=40),
        ProductStock(product_id="prod-2", business_id=biz, price="99.50", stock=120),
        AssetRecord(
            asset_id="asset-1",
            business_id=biz,
            name="Delivery Van",
            asset_type="vehicle",
            value="800000",
            depreciation_rate="15",
            purchase_date=now - timedelta(days=730),
        ),
    )
    for day, total, customer, staff in (
        (2, "12500", "cust-1", "staff-1"),
        (5, "4300", "cust-2", "staff-2"),
        (11, "9800", "cust-1", "staff-1"),
        (24, "3100", "cust-2", "staff-2"),
        (45, "7600", "cust-1", "staff-1"),
    ):
        store.add(
            SaleRecord(
                sale_id=f"sale-{day}",
                business_id=biz,
                date=now - timedelta(days=day),
                total=Decimal(total),
                customer_id=customer,
                staff_id=staff,
                branch_id=DEV_BRANCH_ID,
            )
        )
    store.add(
        SaleRecord(
            sale_id="purchase-1",
            business_id=biz,
            date=now - timedelta(days=8),
            total=Decimal("6000"),
            vendor_id="vend-1",
            branch_id=DEV_BRANCH_ID,
        ),
        ExpenseRecord(
            expense_id="exp-rent",
            business_id=biz,
            date=now - timedelta(days=3),
            amount="8000",
            category="Rent",
            branch_id=DEV_BRANCH_ID,
        ),
        ExpenseRecord(
            expense_id="exp-power",
            business_id=biz,
            date=now - timedelta(days=9),
            amount="1750",
            category="Utilities",
            branch_id=DEV_BRANCH_ID,
        ),
    )


def load_analytics_config() -> AnalyticsConfig:
    """Analytics config from settings.OWNERLENS_ANALYTICS (optional)."""
    return AnalyticsConfig.from_mapping(getattr(settings, "OWNERLENS_ANALYTICS", None))


def _create_dependencies() -> HttpApiDependencies:
    config = load_analytics_config()
    set_analytics_config(config)

    clock = SystemClock()
    store = InMemoryRecordStore()
    _seed_demo_records(store, clock.now_utc())

    return HttpApiDependencies(
        analytics_service=AnalyticsService(store, clock=clock, config=config),
    )


def build_dependencies() -> HttpApiDependencies:
    """
    Lazy singleton wiring for adapter runtime.
    """
    global _DEPENDENCIES
    with _DEPENDENCIES_LOCK:
        if _DEPENDENCIES is None:
            _DEPENDENCIES = _create_dependencies()
        return _DEPENDENCIES
