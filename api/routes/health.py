"""Health check endpoints.

Public endpoint for service health monitoring.
"""

from datetime import datetime

from fastapi import APIRouter, Request

from api.models import HealthResponse


router = APIRouter(tags=["Health"])


@router.get("/health", response_model=HealthResponse)
async def health_check(request: Request):
    """Report liveness and the range endpoint in use. Does not call it."""
    return HealthResponse(
        status="healthy",
        timestamp=datetime.now(),
        range_url=request.app.state.range_url,
    )
