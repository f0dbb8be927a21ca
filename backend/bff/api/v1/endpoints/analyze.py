"""
Analyze API Endpoints

Single entry point for the frontend: ensure + series + notes.
"""

from typing import Optional

from fastapi import APIRouter, Depends, Header, Request
from fastapi.responses import JSONResponse

from bff.core.config import Settings, get_settings
from bff.schemas.analyze import AnalyzeFailure, AnalyzeSuccess
from bff.services.analysis import AnalyzeService
from bff.api.v1.deps import get_analyze_service

router = APIRouter()


@router.post(
    "",
    response_model=AnalyzeSuccess,
    responses={
        400: {"model": AnalyzeFailure},
        401: {"model": AnalyzeFailure},
        500: {"model": AnalyzeFailure},
        502: {"model": AnalyzeFailure},
    },
)
async def analyze(
    request: Request,
    x_bff_token: Optional[str] = Header(default=None),
    service: AnalyzeService = Depends(get_analyze_service),
):
    """
    Run the analyze pipeline.

    Body:
        - instrument: currency pair, e.g. USD_JPY
        - tf: timeframe codes (M15, H1, H4; D1 is read as H4)
        - count: bars of history (default 240)
        - indicators: indicator overrides (optional)
        - preset: default / light / trend / mean_revert (optional)

    The body is read raw so malformed JSON is reported as step "parse"
    instead of FastAPI's own validation error.
    """
    body = await request.body()
    status_code, envelope = await service.run(body, token=x_bff_token)
    return JSONResponse(status_code=status_code, content=envelope)


@router.api_route("", methods=["GET", "OPTIONS"])
async def analyze_liveness(settings: Settings = Depends(get_settings)):
    """Liveness and preflight companion for the analyze route."""
    return {
        "ok": True,
        "service": settings.app_name,
        "version": settings.app_version,
    }
