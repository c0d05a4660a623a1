"""
OwnerLens HTTP API - Dependencies
================================
Injected collaborators for handler wiring.
"""

from __future__ import annotations

from dataclasses import dataclass

from engines.analytics.services import AnalyticsService


@dataclass(frozen=True)
class HttpApiDependencies:
    analytics_service: AnalyticsService
