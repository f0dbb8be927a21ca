"""
API v1 Router

All API endpoints for the frontend.
"""

from fastapi import APIRouter

from bff.api.v1.endpoints import analyze, health

router = APIRouter()

# Include all endpoint routers
router.include_router(analyze.router, prefix="/analyze", tags=["Analyze"])
router.include_router(health.router, prefix="/health", tags=["Health"])
