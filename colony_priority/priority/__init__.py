"""Scoring engine: state, considerations, strategies, registry."""

from colony_priority.priority.considerations import CONSIDERATIONS
from colony_priority.priority.engine import PriorityEngine
from colony_priority.priority.registry import LazyStrategyRegistry, StrategyRegistry
from colony_priority.priority.state import ConsiderationState
from colony_priority.priority.strategies import (
    DEFAULT_CATEGORIES,
    DEFAULT_STRATEGY,
    HAULING_URGENT_CATEGORY,
    STRATEGIES,
    Step,
    WorkTypeStrategy,
)

__all__ = [
    "CONSIDERATIONS",
    "ConsiderationState",
    "DEFAULT_CATEGORIES",
    "DEFAULT_STRATEGY",
    "HAULING_URGENT_CATEGORY",
    "LazyStrategyRegistry",
    "PriorityEngine",
    "STRATEGIES",
    "Step",
    "StrategyRegistry",
    "WorkTypeStrategy",
]
