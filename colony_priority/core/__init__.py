"""Core data models and the game-state provider contract."""

from colony_priority.core.enums import (
    BeautyCategory, Expectation, Passion, Tier, WorkCategory,
)
from colony_priority.core.errors import ConfigurationError, InvalidStateError, PriorityError
from colony_priority.core.models import (
    Actor, Inspiration, RoomInfo, SkillRecord, Thought, WorkCategoryDef,
)
from colony_priority.core.provider import GameStateProvider, SnapshotProvider
from colony_priority.core.settings import ConsiderationSettings
from colony_priority.core.snapshot import Alerts, ColonyMetrics, ColonySnapshot

__all__ = [
    "Actor",
    "Alerts",
    "BeautyCategory",
    "ColonyMetrics",
    "ColonySnapshot",
    "ConfigurationError",
    "ConsiderationSettings",
    "Expectation",
    "GameStateProvider",
    "Inspiration",
    "InvalidStateError",
    "Passion",
    "PriorityError",
    "RoomInfo",
    "SkillRecord",
    "SnapshotProvider",
    "Thought",
    "Tier",
    "WorkCategory",
    "WorkCategoryDef",
]
