"""
OwnerLens Analytics Engine — Asset Depreciation Calculator
============================================================
Straight-line depreciation with a residual floor.

    years_owned        = (as_of - purchase_date) / 365.25 days, >= 0
    total_depreciation = min(value * 0.9, value * rate / 100 * years_owned)
    current_value      = max(value * 0.1, value - total_depreciation)

Invariant: value * 0.1 <= current_value <= value. Assets never show as
worthless and never appreciate. `as_of` is always explicit.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from typing import Iterable, Optional, Tuple

from core.time.temporal import DAYS_PER_YEAR, fractional_years, to_utc
from engines.analytics.records import AssetRecord

DEFAULT_RATE = Decimal(10)
MAX_DEPRECIATION = Decimal("0.9")
RESIDUAL_FLOOR = Decimal("0.1")
HUNDRED = Decimal(100)


@dataclass(frozen=True)
class AssetValuation:
    asset: AssetRecord
    depreciation_rate: Decimal
    accumulated_depreciation: Decimal
    current_value: Decimal


def years_owned(purchase_date: datetime, as_of: datetime) -> Decimal:
    """Fractional years owned; 0 for an asset bought after `as_of`."""
    held = to_utc(as_of) - to_utc(purchase_date)
    return max(Decimal(0), fractional_years(held, DAYS_PER_YEAR))


def _rate(asset: AssetRecord, default_rate: Decimal) -> Decimal:
    return asset.depreciation_rate if asset.depreciation_rate is not None else default_rate


def accumulated_depreciation(
    asset: AssetRecord,
    as_of: datetime,
    *,
    default_rate: Decimal = DEFAULT_RATE,
    max_fraction: Decimal = MAX_DEPRECIATION,
) -> Decimal:
    linear = asset.value * (_rate(asset, default_rate) / HUNDRED) * years_owned(
        asset.purchase_date, as_of
    )
    return min(asset.value * max_fraction, linear)


def current_value(
    asset: AssetRecord,
    as_of: datetime,
    *,
    default_rate: Decimal = DEFAULT_RATE,
    max_fraction: Decimal = MAX_DEPRECIATION,
    residual_fraction: Decimal = RESIDUAL_FLOOR,
) -> Decimal:
    total = accumulated_depreciation(
        asset, as_of, default_rate=default_rate, max_fraction=max_fraction
    )
    return max(asset.value * residual_fraction, asset.value - total)


def value_assets(
    assets: Iterable[AssetRecord],
    as_of: datetime,
    *,
    default_rate: Optional[Decimal] = None,
    max_fraction: Decimal = MAX_DEPRECIATION,
    residual_fraction: Decimal = RESIDUAL_FLOOR,
) -> Tuple[AssetValuation, ...]:
    """Book value of every asset as of `as_of`, in input order."""
    rate_default = DEFAULT_RATE if default_rate is None else default_rate
    valuations = []
    for asset in assets:
        value_now = current_value(
            asset,
            as_of,
            default_rate=rate_default,
            max_fraction=max_fraction,
            residual_fraction=residual_fraction,
        )
        valuations.append(
            AssetValuation(
                asset=asset,
                depreciation_rate=_rate(asset, rate_default),
                accumulated_depreciation=asset.value - value_now,
                current_value=value_now,
            )
        )
    return tuple(valuations)
