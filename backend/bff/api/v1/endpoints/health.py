"""
Upstream health passthrough.
"""

from typing import Optional

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from bff.services.base import PipelineStage
from bff.services.upstream import UpstreamGatewayInterface
from bff.api.v1.deps import get_gateway

router = APIRouter()


@router.get("")
async def upstream_health(
    gateway: Optional[UpstreamGatewayInterface] = Depends(get_gateway),
):
    """Check the indicators service (/health, falling back to /docs)."""
    if gateway is None:
        return JSONResponse(
            status_code=500,
            content={
                "ok": False,
                "step": PipelineStage.ENV.value,
                "error": "INDICATORS_BASE_URL is not set",
            },
        )

    result = await gateway.upstream_health()
    return JSONResponse(status_code=200 if result["ok"] else 502, content=result)
