"""GET /api/v1/config — expose engine configuration."""

from __future__ import annotations

from fastapi import APIRouter, Depends

from colony_priority.api.dependencies import get_priority_service
from colony_priority.api.schemas import PriorityConfigResponse
from colony_priority.api.service import PriorityService

router = APIRouter()


@router.get("/config", response_model=PriorityConfigResponse)
def get_config(
    service: PriorityService = Depends(get_priority_service),
) -> PriorityConfigResponse:
    cfg = service.config
    hits, misses, entries = service.cache_stats
    return PriorityConfigResponse(
        strict=cfg.strict,
        cache_size=cfg.cache_size,
        log_level=cfg.log_level,
        categories=[c.key for c in service.registry.categories],
        cache_hits=hits,
        cache_misses=misses,
        cache_entries=entries,
    )
