"""
OwnerLens Analytics Engine — Record Store Protocol
====================================================
The engine's only upstream collaborator. Implementations may back this
with a database, a sync service, or memory; consistency (snapshot vs
read-committed) is the store's responsibility. The engine reads each
collection exactly once per report and never re-reads mid-computation.
"""

from __future__ import annotations

import uuid
from collections import defaultdict
from typing import Dict, Iterable, List, Protocol, Sequence

from engines.analytics.records import (
    AssetRecord,
    Customer,
    ExpenseRecord,
    ProductStock,
    SaleRecord,
    StaffMember,
    Vendor,
)


# ══════════════════════════════════════════════════════════════
# STORE PROTOCOL
# ══════════════════════════════════════════════════════════════

class RecordStore(Protocol):
    """Read-only access to one business's records."""

    def get_sales(self, business_id: uuid.UUID) -> Sequence[SaleRecord]:
        ...  # pragma: no cover

    def get_expenses(self, business_id: uuid.UUID) -> Sequence[ExpenseRecord]:
        ...  # pragma: no cover

    def get_assets(self, business_id: uuid.UUID) -> Sequence[AssetRecord]:
        ...  # pragma: no cover

    def get_staff(self, business_id: uuid.UUID) -> Sequence[StaffMember]:
        ...  # pragma: no cover

    def get_customers(self, business_id: uuid.UUID) -> Sequence[Customer]:
        ...  # pragma: no cover

    def get_vendors(self, business_id: uuid.UUID) -> Sequence[Vendor]:
        ...  # pragma: no cover

    def get_active_products(self, business_id: uuid.UUID) -> Sequence[ProductStock]:
        ...  # pragma: no cover


# ══════════════════════════════════════════════════════════════
# IN-MEMORY STORE (for testing / development adapter)
# ══════════════════════════════════════════════════════════════

class InMemoryRecordStore:
    """
    Simple in-memory store keyed by business_id.

    Records are routed by their own business_id. Getters return tuples,
    so callers receive a point-in-time snapshot.
    """

    def __init__(self) -> None:
        self._sales: Dict[uuid.UUID, List[SaleRecord]] = defaultdict(list)
        self._expenses: Dict[uuid.UUID, List[ExpenseRecord]] = defaultdict(list)
        self._assets: Dict[uuid.UUID, List[AssetRecord]] = defaultdict(list)
        self._staff: Dict[uuid.UUID, List[StaffMember]] = defaultdict(list)
        self._customers: Dict[uuid.UUID, List[Customer]] = defaultdict(list)
        self._vendors: Dict[uuid.UUID, List[Vendor]] = defaultdict(list)
        self._products: Dict[uuid.UUID, List[ProductStock]] = defaultdict(list)

    def add(self, *records) -> None:
        """Add records of any supported type."""
        for record in records:
            self._bucket_for(record)[record.business_id].append(record)

    def extend(self, records: Iterable) -> None:
        self.add(*records)

    def _bucket_for(self, record) -> Dict[uuid.UUID, list]:
        if isinstance(record, SaleRecord):
            return self._sales
        if isinstance(record, ExpenseRecord):
            return self._expenses
        if isinstance(record, AssetRecord):
            return self._assets
        if isinstance(record, StaffMember):
            return self._staff
        if isinstance(record, Customer):
            return self._customers
        if isinstance(record, Vendor):
            return self._vendors
        if isinstance(record, ProductStock):
            return self._products
        raise TypeError(f"Unsupported record type: {type(record).__name__}.")

    # ── RecordStore interface ──────────────────────────────────

    def get_sales(self, business_id: uuid.UUID) -> Sequence[SaleRecord]:
        return tuple(self._sales.get(business_id, ()))

    def get_expenses(self, business_id: uuid.UUID) -> Sequence[ExpenseRecord]:
        return tuple(self._expenses.get(business_id, ()))

    def get_assets(self, business_id: uuid.UUID) -> Sequence[AssetRecord]:
        return tuple(self._assets.get(business_id, ()))

    def get_staff(self, business_id: uuid.UUID) -> Sequence[StaffMember]:
        return tuple(self._staff.get(business_id, ()))

    def get_customers(self, business_id: uuid.UUID) -> Sequence[Customer]:
        return tuple(self._customers.get(business_id, ()))

    def get_vendors(self, business_id: uuid.UUID) -> Sequence[Vendor]:
        return tuple(self._vendors.get(business_id, ()))

    def get_active_products(self, business_id: uuid.UUID) -> Sequence[ProductStock]:
        return tuple(self._products.get(business_id, ()))
