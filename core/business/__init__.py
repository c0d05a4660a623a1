"""
OwnerLens Core Business — Public API
======================================
Business classification shared by engines and adapters.
"""

from core.business.models import VENDOR_SOURCING_TYPES, BusinessType

__all__ = [
    "BusinessType",
    "VENDOR_SOURCING_TYPES",
]
