"""Per-consideration weights chosen by the player.

Every float weight is a multiplier in [0, 10]; a weight of exactly 0.0
switches the matching consideration off entirely.
"""

from __future__ import annotations

from pathlib import Path
from typing import Annotated

from pydantic import Field, TypeAdapter
from pydantic.dataclasses import dataclass as pydantic_dataclass


@pydantic_dataclass(frozen=True)
class ConsiderationSettings:
    """Immutable weights consumed by the consideration library."""

    movement_speed: float = Field(default=1.0, ge=0.0, le=10.0)
    passions: float = Field(default=1.0, ge=0.0, le=10.0)
    beauty: float = Field(default=1.0, ge=0.0, le=10.0)
    best_at_doing: float = Field(default=0.0, ge=0.0, le=10.0)
    food_poisoning: float = Field(default=1.0, ge=0.0, le=10.0)
    low_food: float = Field(default=1.0, ge=0.0, le=10.0)
    weapon_range: float = Field(default=1.0, ge=0.0, le=10.0)
    own_room: float = Field(default=1.0, ge=0.0, le=10.0)
    plants_blighted: float = Field(default=1.0, ge=0.0, le=10.0)
    tree_pruning: float = Field(default=1.0, ge=0.0, le=10.0)

    has_hunting_weapon: bool = True
    brawlers_not_hunting: bool = True

    # Colony policy: flat offset per category key, -1.0 to 1.0
    global_work_adjustments: dict[str, Annotated[float, Field(ge=-1.0, le=1.0)]] = Field(
        default_factory=dict,
    )

    def work_adjustment(self, category_key: str) -> float:
        return self.global_work_adjustments.get(category_key, 0.0)


_SETTINGS_ADAPTER = TypeAdapter(ConsiderationSettings)


def load_settings(path: str | Path) -> ConsiderationSettings:
    """Read and validate settings from a JSON file."""
    return _SETTINGS_ADAPTER.validate_json(Path(path).read_text(encoding="utf-8"))
