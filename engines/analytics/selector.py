"""
OwnerLens Analytics Engine — Record Selector
==============================================
Pure filters that scope raw collections before any aggregation.
No side effects; inputs are never mutated.
"""

from __future__ import annotations

import uuid
from typing import Iterable, Optional, Tuple, TypeVar

from engines.analytics.errors import InvalidRecord
from engines.analytics.window import DateWindow, previous_window

R = TypeVar("R")

__all__ = ["select", "select_branch", "scope_to_business", "previous_window"]


def select(records: Iterable[R], window: DateWindow) -> Tuple[R, ...]:
    """Records with window.start <= record.date < window.end, input order kept."""
    return tuple(r for r in records if window.contains(r.date))


def select_branch(records: Iterable[R], branch_id: Optional[str]) -> Tuple[R, ...]:
    """Records of one branch; None selects every branch."""
    if branch_id is None:
        return tuple(records)
    return tuple(r for r in records if r.branch_id == branch_id)


def scope_to_business(records: Iterable[R], business_id: uuid.UUID) -> Tuple[R, ...]:
    """
    Tenant guard: every record handed over by the store must belong to
    the requested business. A foreign record is corrupt input.
    """
    scoped = tuple(records)
    for record in scoped:
        if record.business_id != business_id:
            raise InvalidRecord(
                record.record_id,
                "business_id",
                f"belongs to business {record.business_id}, not {business_id}.",
            )
    return scoped
