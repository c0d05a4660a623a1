"""
OwnerLens Core Config — Public API
====================================
Deployment-configurable analytics policy (tax rate, multipliers).
Doctrine: No hardcoded business policy in engine logic.
"""

from core.config.analytics import (
    DEFAULT_INDUSTRY_MULTIPLIERS,
    AnalyticsConfig,
    get_analytics_config,
    set_analytics_config,
)

__all__ = [
    "AnalyticsConfig",
    "DEFAULT_INDUSTRY_MULTIPLIERS",
    "get_analytics_config",
    "set_analytics_config",
]
