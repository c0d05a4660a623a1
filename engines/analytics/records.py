"""
OwnerLens Analytics Engine — Input Records
============================================
Immutable snapshots of the transactional records the engine consumes.
They are produced by external subsystems (POS/orders, expense screens,
asset management, CRM); the engine never mutates them.

RULES (NON-NEGOTIABLE):
- Monetary fields are Decimal, NO binary floats in arithmetic
- Monetary fields are present and non-negative
- Timestamps are timezone-aware (normalised to UTC)
- Every record is scoped to a business_id

Construction validates and normalises; a bad field raises InvalidRecord
naming the offending record id.
"""

from __future__ import annotations

import uuid
from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal, InvalidOperation
from typing import Any, Optional

from core.time.temporal import is_aware, to_utc
from engines.analytics.errors import InvalidRecord


# ══════════════════════════════════════════════════════════════
# FIELD NORMALISATION
# ══════════════════════════════════════════════════════════════

def to_amount(record_id: Any, field: str, value: Any) -> Decimal:
    """
    Normalise a monetary input to Decimal.

    int / str / Decimal are accepted; floats go through str() so 0.1 stays
    0.1. None, booleans, NaN, infinities and negatives are rejected.
    """
    if value is None:
        raise InvalidRecord(record_id, field, "value is missing.")
    if isinstance(value, bool):
        raise InvalidRecord(record_id, field, f"expected a number, got {value!r}.")
    try:
        amount = value if isinstance(value, Decimal) else Decimal(str(value))
    except (InvalidOperation, ValueError):
        raise InvalidRecord(record_id, field, f"expected a number, got {value!r}.")
    if not amount.is_finite():
        raise InvalidRecord(record_id, field, f"expected a finite number, got {value!r}.")
    if amount < 0:
        raise InvalidRecord(record_id, field, f"must not be negative, got {amount}.")
    return amount


def to_timestamp(record_id: Any, field: str, value: Any) -> datetime:
    if value is None:
        raise InvalidRecord(record_id, field, "value is missing.")
    if not isinstance(value, datetime) or not is_aware(value):
        raise InvalidRecord(
            record_id, field, f"expected a timezone-aware datetime, got {value!r}."
        )
    return to_utc(value)


def _require_id(record_id: Any, field: str) -> None:
    if not record_id or not isinstance(record_id, str):
        raise InvalidRecord(record_id, field, "must be a non-empty string.")


def _require_business(record_id: Any, business_id: Any) -> None:
    if not isinstance(business_id, uuid.UUID):
        raise InvalidRecord(record_id, "business_id", "must be UUID.")


# ══════════════════════════════════════════════════════════════
# TRANSACTIONS
# ══════════════════════════════════════════════════════════════

@dataclass(frozen=True)
class SaleRecord:
    """
    A completed sale. When `vendor_id` is set the record represents a
    purchase from that vendor (used for vendor spend rankings).
    """

    sale_id: str
    business_id: uuid.UUID
    date: datetime
    total: Decimal
    customer_id: Optional[str] = None
    staff_id: Optional[str] = None
    vendor_id: Optional[str] = None
    branch_id: Optional[str] = None

    def __post_init__(self) -> None:
        _require_id(self.sale_id, "sale_id")
        _require_business(self.sale_id, self.business_id)
        object.__setattr__(self, "date", to_timestamp(self.sale_id, "date", self.date))
        object.__setattr__(self, "total", to_amount(self.sale_id, "total", self.total))

    @property
    def record_id(self) -> str:
        return self.sale_id


@dataclass(frozen=True)
class ExpenseRecord:
    expense_id: str
    business_id: uuid.UUID
    date: datetime
    amount: Decimal
    category: str = "Uncategorized"
    branch_id: Optional[str] = None

    def __post_init__(self) -> None:
        _require_id(self.expense_id, "expense_id")
        _require_business(self.expense_id, self.business_id)
        object.__setattr__(self, "date", to_timestamp(self.expense_id, "date", self.date))
        object.__setattr__(
            self, "amount", to_amount(self.expense_id, "amount", self.amount)
        )
        if not isinstance(self.category, str) or not self.category.strip():
            object.__setattr__(self, "category", "Uncategorized")

    @property
    def record_id(self) -> str:
        return self.expense_id


# ══════════════════════════════════════════════════════════════
# FIXED ASSETS
# ══════════════════════════════════════════════════════════════

@dataclass(frozen=True)
class AssetRecord:
    """
    A fixed asset at its original purchase price.

    depreciation_rate is percent per year; None means "not recorded",
    and the engine applies the configured default rate.
    """

    asset_id: str
    business_id: uuid.UUID
    name: str
    asset_type: str
    value: Decimal
    purchase_date: datetime
    depreciation_rate: Optional[Decimal] = None

    def __post_init__(self) -> None:
        _require_id(self.asset_id, "asset_id")
        _require_business(self.asset_id, self.business_id)
        object.__setattr__(self, "value", to_amount(self.asset_id, "value", self.value))
        object.__setattr__(
            self,
            "purchase_date",
            to_timestamp(self.asset_id, "purchase_date", self.purchase_date),
        )
        if self.depreciation_rate is not None:
            object.__setattr__(
                self,
                "depreciation_rate",
                to_amount(self.asset_id, "depreciation_rate", self.depreciation_rate),
            )

    @property
    def record_id(self) -> str:
        return self.asset_id


# ══════════════════════════════════════════════════════════════
# PARTIES (opaque join keys for rankings)
# ══════════════════════════════════════════════════════════════

@dataclass(frozen=True)
class Party:
    """Identity + display name. party_id is the ranking tie-break key."""

    party_id: str
    business_id: uuid.UUID
    name: str

    def __post_init__(self) -> None:
        _require_id(self.party_id, "party_id")
        _require_business(self.party_id, self.business_id)

    @property
    def record_id(self) -> str:
        return self.party_id


class StaffMember(Party):
    pass


class Customer(Party):
    pass


class Vendor(Party):
    pass


# ══════════════════════════════════════════════════════════════
# PRODUCT CATALOG (read-only stock view)
# ══════════════════════════════════════════════════════════════

@dataclass(frozen=True)
class ProductStock:
    """Price and on-hand stock of one active product."""

    product_id: str
    business_id: uuid.UUID
    price: Decimal
    stock: Decimal = Decimal(0)

    def __post_init__(self) -> None:
        _require_id(self.product_id, "product_id")
        _require_business(self.product_id, self.business_id)
        object.__setattr__(
            self, "price", to_amount(self.product_id, "price", self.price)
        )
        object.__setattr__(
            self, "stock", to_amount(self.product_id, "stock", self.stock)
        )

    @property
    def record_id(self) -> str:
        return self.product_id
