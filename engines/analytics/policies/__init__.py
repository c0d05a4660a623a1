"""
OwnerLens Analytics Engine — Policies
=======================================
Business-policy decisions keyed on the business type. These are
defaults, not data errors: an unrecognized type never fails a report.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from decimal import Decimal

from core.business.models import BusinessType
from core.config.analytics import AnalyticsConfig

logger = logging.getLogger("ownerlens.analytics")


@dataclass(frozen=True)
class MultiplierDecision:
    multiplier: Decimal
    business_type: str


def normalize_business_type(business_type) -> str:
    """Canonical string for a business type; unknown values pass through lowercased."""
    parsed = BusinessType.parse(business_type)
    if parsed is not None:
        return parsed.value
    if isinstance(business_type, str):
        return business_type.strip().lower()
    return ""


def valuation_multiplier_policy(
    business_type,
    config: AnalyticsConfig,
) -> MultiplierDecision:
    """
    Industry multiplier for annualized revenue. Falls back to the
    configured default (3.5) for unrecognized types and logs the fallback.
    """
    name = normalize_business_type(business_type)
    multiplier = config.multiplier_for(name)
    if multiplier is not None:
        return MultiplierDecision(multiplier=multiplier, business_type=name)

    logger.warning(
        "Unrecognized business type %r; using default valuation multiplier %s",
        business_type,
        config.default_multiplier,
    )
    return MultiplierDecision(
        multiplier=config.default_multiplier,
        business_type=name,
    )


def vendor_ranking_policy(business_type, config: AnalyticsConfig) -> bool:
    """Vendor leaderboards only apply to types that purchase from vendors."""
    return config.sources_from_vendors(normalize_business_type(business_type))
