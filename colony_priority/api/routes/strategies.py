"""GET /api/v1/strategies — list registered pipelines and their steps."""

from __future__ import annotations

from fastapi import APIRouter, Depends

from colony_priority.api.dependencies import get_priority_service
from colony_priority.api.schemas import StrategyListResponse, StrategySchema
from colony_priority.api.service import PriorityService

router = APIRouter()


@router.get("/strategies", response_model=StrategyListResponse)
def list_strategies(
    service: PriorityService = Depends(get_priority_service),
) -> StrategyListResponse:
    items = [
        StrategySchema(
            category=s.category_key,
            is_default=s is service.registry.default,
            description=s.description,
            steps=list(s.step_names),
        )
        for s in service.registry.enumerate()
    ]
    return StrategyListResponse(count=len(items), strategies=items)
