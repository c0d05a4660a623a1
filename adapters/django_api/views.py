"""
OwnerLens Django Adapter Views
==============================
Pass-through HTTP views over core/http_api handlers.
"""

from __future__ import annotations

import uuid
from datetime import date, datetime
from typing import Any

from django.http import HttpRequest, HttpResponse, JsonResponse
from django.views.decorators.csrf import csrf_exempt

from adapters.django_api.wiring import build_dependencies
from core.http_api.contracts import AnalyticsReportHttpRequest
from core.http_api.errors import error_response, http_status_for
from core.http_api.handlers import get_analytics_report, get_analytics_report_csv
from core.time.temporal import utc_midnight


def _json_error(code: str, message: str, status: int = 400) -> JsonResponse:
    return JsonResponse(
        error_response(code=code, message=message, details={}),
        status=status,
    )


def _parse_uuid(value: Any, field_name: str) -> uuid.UUID:
    try:
        return uuid.UUID(str(value))
    except ValueError as exc:
        raise ValueError(f"{field_name} must be a valid UUID.") from exc


def _parse_timestamp(value: str | None, field_name: str) -> datetime | None:
    """
    ISO-8601 timestamp. A bare date means UTC midnight; a naive
    date-time is passed through so the window rejects it.
    """
    if value is None or value == "":
        return None
    text = value.strip()
    if text.endswith("Z"):
        text = text[:-1] + "+00:00"
    try:
        if len(text) == 10:
            return utc_midnight(date.fromisoformat(text))
        return datetime.fromisoformat(text)
    except ValueError as exc:
        raise ValueError(f"{field_name} must be an ISO-8601 date or datetime.") from exc


def _parse_report_request(request: HttpRequest) -> AnalyticsReportHttpRequest:
    params = request.GET
    business_id_raw = params.get("business_id")
    if business_id_raw is None:
        raise ValueError("business_id is required.")
    business_type = params.get("business_type")
    if not business_type:
        raise ValueError("business_type is required.")
    return AnalyticsReportHttpRequest(
        business_id=_parse_uuid(business_id_raw, "business_id"),
        business_type=business_type,
        start=_parse_timestamp(params.get("start"), "start"),
        end=_parse_timestamp(params.get("end"), "end"),
        range_preset=params.get("range") or None,
        branch_id=params.get("branch_id") or None,
    )


def _method_not_allowed() -> JsonResponse:
    return _json_error(
        "METHOD_NOT_ALLOWED",
        "Method not allowed for this endpoint.",
        status=405,
    )


@csrf_exempt
def analytics_report_view(request: HttpRequest) -> JsonResponse:
    if request.method != "GET":
        return _method_not_allowed()
    try:
        contract = _parse_report_request(request)
    except ValueError as exc:
        return _json_error("INVALID_REQUEST", str(exc), status=400)

    payload = get_analytics_report(contract, build_dependencies())
    return JsonResponse(payload, status=http_status_for(payload))


@csrf_exempt
def analytics_report_csv_view(request: HttpRequest) -> HttpResponse:
    if request.method != "GET":
        return _method_not_allowed()
    try:
        contract = _parse_report_request(request)
    except ValueError as exc:
        return _json_error("INVALID_REQUEST", str(exc), status=400)

    payload = get_analytics_report_csv(contract, build_dependencies())
    if not payload["ok"]:
        return JsonResponse(payload, status=http_status_for(payload))

    export = payload["data"]
    response = HttpResponse(export["content"], content_type="text/csv")
    response["Content-Disposition"] = f'attachment; filename="{export["filename"]}"'
    return response
