"""Strategy registry — maps category keys to their pipelines.

``StrategyRegistry.build()`` constructs an immutable registry from the host's
category definitions and a collection of strategies.  ``LazyStrategyRegistry``
defers that build until the host has finished loading its definitions; until
then every lookup falls back to the default strategy.
"""

from __future__ import annotations

import logging
import threading
from types import MappingProxyType
from typing import Callable, Iterable, Mapping

from colony_priority.core.errors import ConfigurationError
from colony_priority.core.models import WorkCategoryDef
from colony_priority.priority.strategies import (
    DEFAULT_CATEGORIES,
    DEFAULT_STRATEGY,
    STRATEGIES,
    WorkTypeStrategy,
)

logger = logging.getLogger(__name__)

CategoryRef = WorkCategoryDef | str | None


def _key_of(category: CategoryRef) -> str | None:
    if category is None or isinstance(category, str):
        return category
    return category.key


class StrategyRegistry:
    """Read-only mapping of category key -> strategy, plus one default."""

    __slots__ = ("_strategies", "_categories", "_default")

    def __init__(
        self,
        strategies: Mapping[str, WorkTypeStrategy],
        categories: Mapping[str, WorkCategoryDef],
        default: WorkTypeStrategy,
    ) -> None:
        self._strategies = MappingProxyType(dict(strategies))
        self._categories = MappingProxyType(dict(categories))
        self._default = default

    @classmethod
    def build(
        cls,
        categories: Iterable[WorkCategoryDef] = DEFAULT_CATEGORIES,
        strategies: Iterable[WorkTypeStrategy] | None = None,
        default: WorkTypeStrategy | None = DEFAULT_STRATEGY,
    ) -> StrategyRegistry:
        """Pair every strategy with a known category definition.

        Strategies without a key, or whose key the host does not define, are
        logged and skipped.  A duplicate key keeps the first strategy.
        """
        if default is None:
            raise ConfigurationError("strategy registry needs a default strategy")
        if strategies is None:
            strategies = STRATEGIES.values()

        known: dict[str, WorkCategoryDef] = {}
        for category in categories:
            if category.key in known:
                logger.warning("Duplicate category definition %r ignored", category.key)
                continue
            known[category.key] = category

        table: dict[str, WorkTypeStrategy] = {}
        for strategy in strategies:
            key = strategy.category_key
            if not key:
                logger.warning("Skipping strategy without a category key")
                continue
            if key not in known:
                logger.warning("Skipping strategy %r: category not defined", key)
                continue
            if key in table:
                logger.warning("Skipping duplicate strategy for %r", key)
                continue
            table[key] = strategy

        logger.info(
            "Strategy registry built: %d strategies for %d categories",
            len(table), len(known),
        )
        return cls(table, known, default)

    # -- lookups --

    @property
    def ready(self) -> bool:
        return True

    @property
    def default(self) -> WorkTypeStrategy:
        return self._default

    @property
    def categories(self) -> tuple[WorkCategoryDef, ...]:
        """Every known category definition, in registration order."""
        return tuple(self._categories.values())

    def category(self, key: str) -> WorkCategoryDef | None:
        return self._categories.get(key)

    def resolve(self, category: CategoryRef) -> WorkTypeStrategy:
        """Strategy for ``category``; unknown or absent categories get the default."""
        key = _key_of(category)
        if key is None:
            return self._default
        return self._strategies.get(key, self._default)

    def enumerate(self) -> tuple[WorkTypeStrategy, ...]:
        """Registered strategies followed by the default."""
        return tuple(self._strategies.values()) + (self._default,)

    def __contains__(self, key: object) -> bool:
        return key in self._strategies

    def __len__(self) -> int:
        return len(self._strategies)


class LazyStrategyRegistry:
    """StrategyRegistry built on first use once the host's definitions exist.

    ``source`` returns the category definitions, or None while they are still
    loading.  The build runs at most once, guarded by a lock.
    """

    def __init__(
        self,
        source: Callable[[], Iterable[WorkCategoryDef] | None],
        strategies: Iterable[WorkTypeStrategy] | None = None,
        default: WorkTypeStrategy | None = DEFAULT_STRATEGY,
    ) -> None:
        if default is None:
            raise ConfigurationError("strategy registry needs a default strategy")
        self._source = source
        self._strategies = tuple(strategies) if strategies is not None else None
        self._default = default
        self._registry: StrategyRegistry | None = None
        self._lock = threading.Lock()

    def _ensure(self) -> StrategyRegistry | None:
        registry = self._registry
        if registry is not None:
            return registry
        with self._lock:
            if self._registry is None:
                categories = self._source()
                if categories is None:
                    logger.debug("Category definitions not loaded yet; using default strategy")
                    return None
                self._registry = StrategyRegistry.build(categories, self._strategies, self._default)
            return self._registry

    @property
    def ready(self) -> bool:
        return self._ensure() is not None

    @property
    def default(self) -> WorkTypeStrategy:
        return self._default

    @property
    def categories(self) -> tuple[WorkCategoryDef, ...]:
        registry = self._ensure()
        return registry.categories if registry is not None else ()

    def category(self, key: str) -> WorkCategoryDef | None:
        registry = self._ensure()
        return registry.category(key) if registry is not None else None

    def resolve(self, category: CategoryRef) -> WorkTypeStrategy:
        registry = self._ensure()
        if registry is None:
            return self._default
        return registry.resolve(category)

    def enumerate(self) -> tuple[WorkTypeStrategy, ...]:
        registry = self._ensure()
        if registry is None:
            return (self._default,)
        return registry.enumerate()

    def __contains__(self, key: object) -> bool:
        registry = self._ensure()
        return registry is not None and key in registry

    def __len__(self) -> int:
        registry = self._ensure()
        return len(registry) if registry is not None else 0
