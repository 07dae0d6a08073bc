"""Versioned API route modules."""

from fastapi import APIRouter

from colony_priority.api.routes.config import router as config_router
from colony_priority.api.routes.priority import router as priority_router
from colony_priority.api.routes.strategies import router as strategies_router

api_router = APIRouter(prefix="/api/v1")
api_router.include_router(priority_router, tags=["Priority"])
api_router.include_router(strategies_router, tags=["Strategies"])
api_router.include_router(config_router, tags=["Config"])

__all__ = ["api_router"]
