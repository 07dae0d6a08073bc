"""PriorityEngine — evaluates one actor against one or all task categories.

Every evaluation starts from the colony-wide default of 0.2, honours the
player's map-wide category switches, then hands the state to the strategy
resolved from the registry.  A failure inside a pipeline never propagates to
the host scheduler unless the engine runs in strict mode; instead the actor
gets a conservative "always do, low-medium" fallback so work keeps flowing.
"""

from __future__ import annotations

import logging

from colony_priority.config import PriorityConfig
from colony_priority.core.errors import PriorityError
from colony_priority.core.models import Actor, WorkCategoryDef
from colony_priority.core.provider import GameStateProvider
from colony_priority.priority.registry import LazyStrategyRegistry, StrategyRegistry
from colony_priority.priority.state import ConsiderationState

logger = logging.getLogger(__name__)

GLOBAL_DEFAULT = 0.2
ERROR_FALLBACK = 0.4


class PriorityEngine:
    """Synchronous scorer; safe to share between threads."""

    def __init__(
        self,
        registry: StrategyRegistry | LazyStrategyRegistry | None = None,
        config: PriorityConfig | None = None,
    ) -> None:
        self._registry = registry if registry is not None else StrategyRegistry.build()
        self._config = config if config is not None else PriorityConfig()

    @property
    def registry(self) -> StrategyRegistry | LazyStrategyRegistry:
        return self._registry

    @property
    def config(self) -> PriorityConfig:
        return self._config

    def evaluate(
        self,
        actor: Actor | None,
        category: WorkCategoryDef | None,
        provider: GameStateProvider,
    ) -> ConsiderationState:
        """Score ``category`` for ``actor``."""
        state = ConsiderationState(actor=actor, category=category).set(GLOBAL_DEFAULT, "Global default")
        key = state.category_key

        if key is not None and provider.is_category_disabled(key):
            return state.never_do("Permanently disabled")

        strategy = self._registry.resolve(category)
        try:
            result = strategy.evaluate(state, provider)
        except Exception as exc:
            if self._config.strict:
                raise PriorityError(f"strategy for {key!r} failed: {exc}") from exc
            logger.exception(
                "Error computing priority of %r for %s",
                key, actor.name if actor is not None else "<no actor>",
            )
            return (
                ConsiderationState(actor=actor, category=category)
                .always_do("Error computing priority")
                .set(ERROR_FALLBACK, "Error computing priority")
            )

        logger.debug(
            "%s / %s -> %.2f%s",
            actor.name if actor is not None else "<no actor>", key, result.value,
            " (disabled)" if result.disabled else "",
        )
        return result

    def evaluate_all(
        self,
        actor: Actor | None,
        provider: GameStateProvider,
    ) -> dict[str, ConsiderationState]:
        """Score every category the registry knows, in registration order."""
        return {
            category.key: self.evaluate(actor, category, provider)
            for category in self._registry.categories
        }
