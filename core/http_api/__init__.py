"""
OwnerLens HTTP API - Public API
===============================
"""

from core.http_api.contracts import (
    AnalyticsReportHttpRequest,
    HttpApiErrorBody,
    HttpApiResponse,
)
from core.http_api.dependencies import HttpApiDependencies
from core.http_api.errors import (
    analytics_error_response,
    error_response,
    http_status_for,
    map_analytics_error,
    success_response,
)
from core.http_api.handlers import get_analytics_report, get_analytics_report_csv

__all__ = [
    "AnalyticsReportHttpRequest",
    "HttpApiDependencies",
    "HttpApiErrorBody",
    "HttpApiResponse",
    "analytics_error_response",
    "error_response",
    "get_analytics_report",
    "get_analytics_report_csv",
    "http_status_for",
    "map_analytics_error",
    "success_response",
]
