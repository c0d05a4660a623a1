"""
OwnerLens Core Config — Analytics Settings
============================================
Doctrine: No hardcoded business policy in engine logic.

Tax rate, industry valuation multipliers and leaderboard sizes are
deployment configuration. They are process-wide (not per call): the
engine reads them from the AnalyticsConfig it was constructed with,
which defaults to the process-wide config set at startup.

The multiplier table carries no cited methodology. Treat it as a
business-policy default supplied by the deployment.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from decimal import Decimal, InvalidOperation
from types import MappingProxyType
from typing import Any, Dict, FrozenSet, Mapping, Optional

from core.business.models import VENDOR_SOURCING_TYPES, BusinessType


DEFAULT_INDUSTRY_MULTIPLIERS: Dict[str, Decimal] = {
    BusinessType.MANUFACTURER.value: Decimal("4.0"),
    BusinessType.WHOLESALER.value: Decimal("3.5"),
    BusinessType.RETAILER.value: Decimal("3.0"),
    BusinessType.DISTRIBUTOR.value: Decimal("3.5"),
    BusinessType.ECOMMERCE.value: Decimal("4.5"),
    BusinessType.SERVICE.value: Decimal("3.8"),
    BusinessType.TRADER.value: Decimal("3.2"),
}


def _decimal(value: Any, name: str) -> Decimal:
    if isinstance(value, bool):
        raise ValueError(f"{name} must be numeric, got {value!r}.")
    try:
        return value if isinstance(value, Decimal) else Decimal(str(value))
    except (InvalidOperation, ValueError) as exc:
        raise ValueError(f"{name} must be numeric, got {value!r}.") from exc


def _positive_int(value: Any, name: str) -> int:
    if isinstance(value, bool) or not isinstance(value, int) or value < 1:
        raise ValueError(f"{name} must be a positive integer, got {value!r}.")
    return value


# ══════════════════════════════════════════════════════════════
# ANALYTICS CONFIG
# ══════════════════════════════════════════════════════════════

@dataclass(frozen=True)
class AnalyticsConfig:
    """
    Deployment-wide analytics settings.

    Invariants (enforced at construction):
    - 0 <= tax_rate <= 1
    - multipliers are non-negative
    - residual_value_fraction + max_depreciation_fraction == 1
    - the multiplier table is a read-only mapping
    """

    tax_rate: Decimal = Decimal("0.15")
    industry_multipliers: Mapping[str, Decimal] = field(
        default_factory=lambda: dict(DEFAULT_INDUSTRY_MULTIPLIERS),
        hash=False,
    )
    default_multiplier: Decimal = Decimal("3.5")
    vendor_business_types: FrozenSet[str] = field(
        default_factory=lambda: frozenset(t.value for t in VENDOR_SOURCING_TYPES)
    )
    top_n: int = 5
    max_depreciation_fraction: Decimal = Decimal("0.9")
    residual_value_fraction: Decimal = Decimal("0.1")
    default_depreciation_rate: Decimal = Decimal("10")
    daily_buckets: int = 30
    monthly_buckets: int = 12
    yearly_buckets: int = 3

    def __post_init__(self) -> None:
        # Frozen: normalise through object.__setattr__.
        tax_rate = _decimal(self.tax_rate, "tax_rate")
        if not Decimal(0) <= tax_rate <= Decimal(1):
            raise ValueError(f"tax_rate must be between 0 and 1, got {tax_rate}.")
        object.__setattr__(self, "tax_rate", tax_rate)

        multipliers = {}
        for key, raw in dict(self.industry_multipliers).items():
            parsed = BusinessType.parse(key)
            name = parsed.value if parsed is not None else str(key).strip().lower()
            value = _decimal(raw, f"industry_multipliers[{key}]")
            if value < 0:
                raise ValueError(f"industry_multipliers[{key}] must be >= 0.")
            multipliers[name] = value
        object.__setattr__(self, "industry_multipliers", MappingProxyType(multipliers))

        default_multiplier = _decimal(self.default_multiplier, "default_multiplier")
        if default_multiplier < 0:
            raise ValueError("default_multiplier must be >= 0.")
        object.__setattr__(self, "default_multiplier", default_multiplier)

        object.__setattr__(
            self,
            "vendor_business_types",
            frozenset(str(t).strip().lower() for t in self.vendor_business_types),
        )

        max_dep = _decimal(self.max_depreciation_fraction, "max_depreciation_fraction")
        residual = _decimal(self.residual_value_fraction, "residual_value_fraction")
        if not Decimal(0) <= residual <= Decimal(1) or max_dep + residual != Decimal(1):
            raise ValueError(
                "residual_value_fraction and max_depreciation_fraction "
                f"must sum to 1, got {residual} + {max_dep}."
            )
        object.__setattr__(self, "max_depreciation_fraction", max_dep)
        object.__setattr__(self, "residual_value_fraction", residual)

        rate = _decimal(self.default_depreciation_rate, "default_depreciation_rate")
        if rate < 0:
            raise ValueError("default_depreciation_rate must be >= 0.")
        object.__setattr__(self, "default_depreciation_rate", rate)

        if isinstance(self.top_n, bool) or not isinstance(self.top_n, int) or self.top_n < 0:
            raise ValueError(f"top_n must be a non-negative integer, got {self.top_n!r}.")
        _positive_int(self.daily_buckets, "daily_buckets")
        _positive_int(self.monthly_buckets, "monthly_buckets")
        _positive_int(self.yearly_buckets, "yearly_buckets")

    def multiplier_for(self, business_type: str) -> Optional[Decimal]:
        """Configured multiplier, or None when the type has no entry."""
        return self.industry_multipliers.get(business_type)

    def sources_from_vendors(self, business_type: str) -> bool:
        return business_type in self.vendor_business_types

    @classmethod
    def from_mapping(cls, mapping: Optional[Mapping[str, Any]]) -> "AnalyticsConfig":
        """
        Build a config from a settings mapping (e.g. the Django
        OWNERLENS_ANALYTICS setting). Keys are case-insensitive;
        unknown keys are rejected.
        """
        if not mapping:
            return cls()
        known = set(cls.__dataclass_fields__)
        kwargs: Dict[str, Any] = {}
        for key, value in mapping.items():
            name = str(key).lower()
            if name not in known:
                raise ValueError(f"Unknown analytics setting: {key}.")
            kwargs[name] = value
        return cls(**kwargs)


# ══════════════════════════════════════════════════════════════
# PROCESS-WIDE DEFAULT
# ══════════════════════════════════════════════════════════════

_default_config = AnalyticsConfig()


def set_analytics_config(config: AnalyticsConfig) -> None:
    """Install the process-wide config (startup / tests only)."""
    global _default_config
    if not isinstance(config, AnalyticsConfig):
        raise TypeError("config must be AnalyticsConfig.")
    _default_config = config


def get_analytics_config() -> AnalyticsConfig:
    return _default_config
