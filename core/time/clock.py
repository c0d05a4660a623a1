"""
OwnerLens Core Time — Explicit Clock Protocol
===============================================
Doctrine: NO datetime.now() inside engine logic.

The analytics engine never reads the wall clock itself. "Now" (report
generation time, depreciation as-of date, trailing window anchors) is
obtained from an injected Clock so every computation can be replayed
with a FixedClock in tests.
"""

from __future__ import annotations

from datetime import datetime, timedelta, timezone
from typing import Protocol


# ══════════════════════════════════════════════════════════════
# CLOCK PROTOCOL
# ══════════════════════════════════════════════════════════════

class Clock(Protocol):
    """Injectable time source."""

    def now_utc(self) -> datetime:
        """Return current UTC time."""
        ...  # pragma: no cover


# ══════════════════════════════════════════════════════════════
# IMPLEMENTATIONS
# ══════════════════════════════════════════════════════════════

class SystemClock:
    """Production clock: real system time."""

    def now_utc(self) -> datetime:
        return datetime.now(timezone.utc)


class FixedClock:
    """
    Test clock. Returns a fixed timestamp.

    Usage:
        clock = FixedClock(datetime(2024, 2, 1, tzinfo=timezone.utc))
        service = AnalyticsService(store, clock=clock)
    """

    def __init__(self, fixed_dt: datetime) -> None:
        if fixed_dt.tzinfo is None:
            raise ValueError("FixedClock requires timezone-aware datetime.")
        self._fixed_dt = fixed_dt.astimezone(timezone.utc)

    def now_utc(self) -> datetime:
        return self._fixed_dt

    def advance(self, **delta: float) -> None:
        """Move the clock forward, e.g. advance(days=30)."""
        self._fixed_dt = self._fixed_dt + timedelta(**delta)
