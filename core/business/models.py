"""
OwnerLens Core Business — Business Classification
===================================================
Canonical business types. Every tenant is one of these; the type drives
industry valuation multipliers and whether vendor analytics apply.
"""

from __future__ import annotations

from enum import Enum
from typing import Optional


# ══════════════════════════════════════════════════════════════
# BUSINESS TYPE
# ══════════════════════════════════════════════════════════════

class BusinessType(Enum):
    """Business classification chosen at signup."""
    MANUFACTURER = "manufacturer"
    WHOLESALER = "wholesaler"
    RETAILER = "retailer"
    DISTRIBUTOR = "distributor"
    ECOMMERCE = "ecommerce"
    SERVICE = "service"
    TRADER = "trader"

    @classmethod
    def parse(cls, value) -> Optional["BusinessType"]:
        """
        Resolve a business type from an enum member or free-form string.

        Returns None for unrecognized values; callers decide the fallback.
        """
        if isinstance(value, cls):
            return value
        if not isinstance(value, str):
            return None
        normalized = value.strip().lower().replace("-", "").replace("_", "")
        for member in cls:
            if member.value == normalized:
                return member
        return None


# Types that buy stock from vendors (purchase transactions exist).
VENDOR_SOURCING_TYPES = frozenset({
    BusinessType.MANUFACTURER,
    BusinessType.WHOLESALER,
    BusinessType.DISTRIBUTOR,
    BusinessType.RETAILER,
    BusinessType.TRADER,
})
