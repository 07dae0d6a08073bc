"""POST /api/v1/priority/* — score posted scenarios."""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException

from colony_priority.api.dependencies import get_priority_service
from colony_priority.api.schemas import (
    EvaluateAllRequest,
    EvaluateAllResponse,
    EvaluateRequest,
    StateResponse,
)
from colony_priority.api.service import PriorityService
from colony_priority.core.errors import PriorityError

router = APIRouter(prefix="/priority")


@router.post("/evaluate", response_model=StateResponse)
def evaluate(
    request: EvaluateRequest,
    service: PriorityService = Depends(get_priority_service),
) -> StateResponse:
    try:
        state = service.evaluate(request.actor, request.category, request.snapshot)
        return StateResponse.from_state(state)
    except PriorityError as exc:
        raise HTTPException(status_code=422, detail=str(exc)) from exc


@router.post("/evaluate-all", response_model=EvaluateAllResponse)
def evaluate_all(
    request: EvaluateAllRequest,
    service: PriorityService = Depends(get_priority_service),
) -> EvaluateAllResponse:
    actor_id = request.actor.id if request.actor is not None else None
    try:
        if not request.justifications:
            tiers = service.tiers(request.actor, request.snapshot)
            return EvaluateAllResponse(
                actor_id=actor_id,
                tiers={key: int(t) for key, t in tiers.items()},
            )
        states = service.evaluate_all(request.actor, request.snapshot)
        results = [StateResponse.from_state(s) for s in states.values()]
    except PriorityError as exc:
        raise HTTPException(status_code=422, detail=str(exc)) from exc
    return EvaluateAllResponse(
        actor_id=actor_id,
        results=results,
        tiers={r.category: r.tier for r in results if r.category is not None},
    )
