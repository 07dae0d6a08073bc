"""FastAPI application factory with lifespan management."""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from colony_priority import __version__
from colony_priority.api.dependencies import set_priority_service
from colony_priority.api.routes import api_router
from colony_priority.api.service import PriorityService
from colony_priority.config import PriorityConfig
from colony_priority.utils.logging import setup_logging

logger = logging.getLogger(__name__)


def create_app(config: PriorityConfig | None = None) -> FastAPI:
    """Build and return the fully-configured FastAPI application."""
    if config is None:
        config = PriorityConfig()

    _config = config

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        setup_logging(_config.log_level)
        service = PriorityService(_config)
        set_priority_service(service)
        logger.info("API server started — %d categories registered.", len(service.registry.categories))
        yield
        service.clear_cache()
        logger.info("API server shutting down.")

    app = FastAPI(
        title="Colony Priority Engine",
        description=(
            "Situational work-priority scoring — diagnostic API.\n\n"
            "## API Groups\n\n"
            "- **Priority** — Score a posted colony snapshot for one or all categories\n"
            "- **Strategies** — Registered pipelines and their ordered steps\n"
            "- **Config** — Read-only engine configuration and cache counters\n"
        ),
        version=__version__,
        lifespan=lifespan,
        openapi_tags=[
            {"name": "Priority", "description": "Evaluate an actor against a snapshot; returns value, flags, tier and the justification trail."},
            {"name": "Strategies", "description": "Every registered strategy followed by the default, with consideration names in execution order."},
            {"name": "Config", "description": "Read-only engine configuration parameters."},
        ],
    )

    # CORS: allow any origin in dev
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(api_router)

    return app
