"""Pydantic request/response models for the REST API.

Snapshot and actor payloads reuse the pydantic dataclasses from
``colony_priority.core`` directly; only the thin wrappers live here.
"""

from __future__ import annotations

from pydantic import BaseModel, Field

from colony_priority.core.models import Actor
from colony_priority.core.snapshot import ColonySnapshot
from colony_priority.priority.state import ConsiderationState


# --- Requests ---

class EvaluateRequest(BaseModel):
    actor: Actor | None = None
    category: str | None = None
    snapshot: ColonySnapshot = Field(default_factory=ColonySnapshot)


class EvaluateAllRequest(BaseModel):
    actor: Actor | None = None
    snapshot: ColonySnapshot = Field(default_factory=ColonySnapshot)
    # False returns cached tiers without the justification trail
    justifications: bool = True


# --- Responses ---

class StateResponse(BaseModel):
    category: str | None = None
    value: float
    enabled: bool
    disabled: bool
    tier: int
    justifications: list[str] = Field(default_factory=list)

    @classmethod
    def from_state(cls, state: ConsiderationState) -> StateResponse:
        return cls(
            category=state.category_key,
            value=state.value,
            enabled=state.enabled,
            disabled=state.disabled,
            tier=int(state.to_tier()),
            justifications=list(state.justifications),
        )


class EvaluateAllResponse(BaseModel):
    actor_id: int | None = None
    results: list[StateResponse] = Field(default_factory=list)
    tiers: dict[str, int] = Field(default_factory=dict)


class StrategySchema(BaseModel):
    category: str | None = None
    is_default: bool = False
    description: str = ""
    steps: list[str] = Field(default_factory=list)


class StrategyListResponse(BaseModel):
    count: int
    strategies: list[StrategySchema]


class PriorityConfigResponse(BaseModel):
    strict: bool
    cache_size: int
    log_level: str
    categories: list[str]
    cache_hits: int = 0
    cache_misses: int = 0
    cache_entries: int = 0
