"""
OwnerLens HTTP API - Error Mapping
==================================
Stable transport error mapping for analytics failures.
"""

from __future__ import annotations

from datetime import datetime
from typing import Any, Optional

from core.http_api.contracts import HttpApiErrorBody, HttpApiResponse
from engines.analytics.errors import AnalyticsError, InvalidRecord, InvalidWindow

HTTP_STATUS_BY_CODE = {
    "INVALID_REQUEST": 400,
    "INVALID_WINDOW": 400,
    "INVALID_RECORD": 422,
    "METHOD_NOT_ALLOWED": 405,
    "READ_MODEL_ERROR": 503,
}


def error_response(
    *,
    code: str,
    message: str,
    details: Optional[dict[str, Any]] = None,
) -> dict[str, Any]:
    return HttpApiResponse(
        ok=False,
        error=HttpApiErrorBody(
            code=code,
            message=message,
            details=details or {},
        ),
    ).to_dict()


def success_response(
    data: Any,
    *,
    meta: Optional[dict[str, Any]] = None,
) -> dict[str, Any]:
    return HttpApiResponse(ok=True, data=data, meta=meta).to_dict()


def _iso(value) -> Optional[str]:
    if value is None:
        return None
    if isinstance(value, datetime):
        return value.isoformat()
    return str(value)


def map_analytics_error(exc: AnalyticsError) -> HttpApiErrorBody:
    details: dict[str, Any] = {}
    if isinstance(exc, InvalidRecord):
        details = {"record_id": exc.record_id, "field": exc.field}
    elif isinstance(exc, InvalidWindow):
        details = {"start": _iso(exc.start), "end": _iso(exc.end)}
    return HttpApiErrorBody(code=exc.code, message=str(exc), details=details)


def analytics_error_response(exc: AnalyticsError) -> dict[str, Any]:
    mapped = map_analytics_error(exc)
    return error_response(
        code=mapped.code,
        message=mapped.message,
        details=mapped.details,
    )


def http_status_for(payload: dict[str, Any]) -> int:
    if payload.get("ok"):
        return 200
    code = payload.get("error", {}).get("code", "")
    return HTTP_STATUS_BY_CODE.get(code, 500)
