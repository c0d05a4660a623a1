"""
OwnerLens HTTP API - Handlers
=============================
Framework-agnostic read handlers for the analytics engine.
Handlers never raise for caller errors; they return the error envelope.
"""

from __future__ import annotations

import io
import logging
from typing import Any

from core.http_api.contracts import AnalyticsReportHttpRequest
from core.http_api.errors import (
    analytics_error_response,
    error_response,
    success_response,
)
from engines.analytics.errors import AnalyticsError
from engines.analytics.export import report_to_dict, write_csv
from engines.analytics.report import AnalyticsReport
from engines.analytics.window import DEFAULT_PRESET, DateWindow

logger = logging.getLogger("ownerlens.http")


def _compute(
    request: AnalyticsReportHttpRequest,
    dependencies,
) -> AnalyticsReport:
    service = dependencies.analytics_service
    if request.has_explicit_window:
        return service.compute_report(
            request.business_id,
            DateWindow(start=request.start, end=request.end),
            request.business_type,
            branch_id=request.branch_id,
        )
    return service.compute_trailing_report(
        request.business_id,
        request.range_preset or DEFAULT_PRESET,
        request.business_type,
        branch_id=request.branch_id,
    )


def _store_failure(request: AnalyticsReportHttpRequest, exc: Exception) -> dict[str, Any]:
    logger.exception("Record store read failed for business %s", request.business_id)
    return error_response(
        code="READ_MODEL_ERROR",
        message="Failed to read business records.",
        details={"error_type": type(exc).__name__},
    )


def get_analytics_report(
    request: AnalyticsReportHttpRequest,
    dependencies,
) -> dict[str, Any]:
    try:
        report = _compute(request, dependencies)
    except AnalyticsError as exc:
        return analytics_error_response(exc)
    except (LookupError, OSError) as exc:
        return _store_failure(request, exc)

    return success_response(
        report_to_dict(report),
        meta={"generated_at": report.generated_at.isoformat()},
    )


def get_analytics_report_csv(
    request: AnalyticsReportHttpRequest,
    dependencies,
) -> dict[str, Any]:
    """CSV export; data carries the filename and the CSV text."""
    try:
        report = _compute(request, dependencies)
    except AnalyticsError as exc:
        return analytics_error_response(exc)
    except (LookupError, OSError) as exc:
        return _store_failure(request, exc)

    buffer = io.StringIO()
    row_count = write_csv(report, buffer)
    return success_response(
        {
            "filename": f"business-analytics-{report.generated_at.date().isoformat()}.csv",
            "content": buffer.getvalue(),
            "row_count": row_count,
        }
    )
