"""
Route dependencies.

Settings are read once (cached) and handed explicitly to every component,
so tests can swap any of them through ``app.dependency_overrides``.
"""

from typing import Optional

from fastapi import Depends

from bff.core.config import Settings, get_settings
from bff.services.analysis import AnalyzeService
from bff.services.upstream import IndicatorsGateway, UpstreamGatewayInterface


def get_gateway(settings: Settings = Depends(get_settings)) -> Optional[UpstreamGatewayInterface]:
    if not settings.indicators_base_url:
        return None
    return IndicatorsGateway(
        settings.indicators_base_url,
        timeout_seconds=settings.upstream_timeout_seconds,
    )


def get_analyze_service(
    settings: Settings = Depends(get_settings),
    gateway: Optional[UpstreamGatewayInterface] = Depends(get_gateway),
) -> AnalyzeService:
    return AnalyzeService(settings, gateway)
