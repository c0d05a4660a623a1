"""
OwnerLens HTTP API - Contracts
==============================
Framework-agnostic request/response DTOs for analytics endpoints.
"""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Optional


@dataclass(frozen=True)
class AnalyticsReportHttpRequest:
    """
    Report query. Either an explicit [start, end) pair or a range preset
    (last_7_days, last_30_days, last_3_months, last_year).
    """

    business_id: uuid.UUID
    business_type: str
    start: Optional[datetime] = None
    end: Optional[datetime] = None
    range_preset: Optional[str] = None
    branch_id: Optional[str] = None

    def __post_init__(self):
        if not isinstance(self.business_id, uuid.UUID):
            raise ValueError("business_id must be UUID.")
        if not self.business_type or not isinstance(self.business_type, str):
            raise ValueError("business_type must be a non-empty string.")
        if (self.start is None) != (self.end is None):
            raise ValueError("start and end must be provided together.")
        if self.start is not None and self.range_preset is not None:
            raise ValueError("Provide either start/end or range, not both.")
        if self.start is not None and not isinstance(self.start, datetime):
            raise ValueError("start must be datetime.")
        if self.end is not None and not isinstance(self.end, datetime):
            raise ValueError("end must be datetime.")
        if self.branch_id is not None and (
            not self.branch_id or not isinstance(self.branch_id, str)
        ):
            raise ValueError("branch_id must be a non-empty string or None.")

    @property
    def has_explicit_window(self) -> bool:
        return self.start is not None


@dataclass(frozen=True)
class HttpApiErrorBody:
    code: str
    message: str
    details: dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        return {
            "code": self.code,
            "message": self.message,
            "details": dict(self.details),
        }


@dataclass(frozen=True)
class HttpApiResponse:
    ok: bool
    data: Any = None
    error: Optional[HttpApiErrorBody] = None
    meta: Optional[dict[str, Any]] = None

    def to_dict(self) -> dict[str, Any]:
        if self.ok:
            payload = {"ok": True, "data": self.data}
            if self.meta:
                payload["meta"] = dict(self.meta)
            return payload
        if self.error is None:
            raise ValueError("error must be set when ok is False.")
        return {"ok": False, "error": self.error.to_dict()}
