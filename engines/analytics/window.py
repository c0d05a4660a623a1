"""
OwnerLens Analytics Engine — Date Windows
===========================================
A DateWindow is a half-open interval [start, end) of timezone-aware
instants. It scopes which records participate in a computation.

The comparison window used for growth is purely duration based: same
length, ending exactly at `start`. For calendar-month windows this can
compare unequal day counts (e.g. February against a 28-day slice of
January). That is a known approximation.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timedelta
from decimal import Decimal

from core.time.temporal import fractional_days, is_aware, to_utc
from engines.analytics.errors import InvalidWindow


# ── Dashboard range presets ──────────────────────────────────
TRAILING_PRESETS = {
    "last_7_days": timedelta(days=7),
    "last_30_days": timedelta(days=30),
    "last_3_months": timedelta(days=90),
    "last_year": timedelta(days=365),
}

DEFAULT_PRESET = "last_30_days"


# ══════════════════════════════════════════════════════════════
# DATE WINDOW
# ══════════════════════════════════════════════════════════════

@dataclass(frozen=True)
class DateWindow:
    """
    Half-open window [start, end).

    Invariant: start < end, both timezone-aware (enforced at construction).
    A malformed window is never swapped or clamped.
    """

    start: datetime
    end: datetime

    def __post_init__(self) -> None:
        for name in ("start", "end"):
            value = getattr(self, name)
            if not isinstance(value, datetime) or not is_aware(value):
                raise InvalidWindow(
                    f"{name} must be a timezone-aware datetime, got {value!r}.",
                    start=self.start,
                    end=self.end,
                )
        if self.end <= self.start:
            raise InvalidWindow(
                f"end ({self.end.isoformat()}) must be after "
                f"start ({self.start.isoformat()}).",
                start=self.start,
                end=self.end,
            )
        object.__setattr__(self, "start", to_utc(self.start))
        object.__setattr__(self, "end", to_utc(self.end))

    def contains(self, dt: datetime) -> bool:
        """start <= dt < end."""
        return self.start <= dt < self.end

    def duration(self) -> timedelta:
        return self.end - self.start

    def length_in_days(self) -> Decimal:
        """Fractional day count, never below 1 (annualization divisor)."""
        return max(Decimal(1), fractional_days(self.duration()))


def previous_window(window: DateWindow) -> DateWindow:
    """Window of identical length ending exactly at `window.start`."""
    try:
        start = window.start - window.duration()
    except OverflowError:
        raise InvalidWindow(
            "comparison window precedes the representable calendar.",
            start=window.start,
            end=window.end,
        ) from None
    return DateWindow(start=start, end=window.start)


def trailing_window(preset: str, now: datetime) -> DateWindow:
    """
    Window ending at `now` covering one of the dashboard range presets
    (last_7_days, last_30_days, last_3_months, last_year).
    """
    length = TRAILING_PRESETS.get(preset)
    if length is None:
        raise InvalidWindow(
            f"unknown range preset {preset!r}; "
            f"expected one of {sorted(TRAILING_PRESETS)}."
        )
    if not isinstance(now, datetime) or not is_aware(now):
        raise InvalidWindow(f"anchor must be a timezone-aware datetime, got {now!r}.")
    return DateWindow(start=now - length, end=now)
