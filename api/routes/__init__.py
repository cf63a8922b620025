"""API route modules."""

from api.routes.check import router as check_router
from api.routes.health import router as health_router

__all__ = ["check_router", "health_router"]
