"""
OwnerLens Django HTTP adapter.
Thin framework glue over core/http_api handlers.
"""

from adapters.django_api.wiring import (
    DEV_BRANCH_ID,
    DEV_BUSINESS_ID,
    DEV_BUSINESS_TYPE,
    build_dependencies,
    load_analytics_config,
)

__all__ = [
    "DEV_BUSINESS_ID",
    "DEV_BRANCH_ID",
    "DEV_BUSINESS_TYPE",
    "build_dependencies",
    "load_analytics_config",
]
