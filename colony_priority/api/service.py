"""PriorityService — owns the registry, the engine and the exported-tier cache.

The service is the single long-lived object behind the REST API, the same
way a manager object owns a running engine.  Snapshots are never stored:
each request hands one in, the engine reads it, and only the resulting
integer tiers are remembered, keyed by a fingerprint of the inputs.
"""

from __future__ import annotations

import logging
import threading
from collections import OrderedDict

from colony_priority.config import PriorityConfig
from colony_priority.core.enums import Tier
from colony_priority.core.models import Actor, WorkCategoryDef
from colony_priority.core.provider import SnapshotProvider
from colony_priority.core.snapshot import ColonySnapshot
from colony_priority.priority.engine import PriorityEngine
from colony_priority.priority.registry import StrategyRegistry
from colony_priority.priority.state import ConsiderationState
from colony_priority.priority.strategies import DEFAULT_CATEGORIES, HAULING_URGENT_CATEGORY
from colony_priority.utils.fingerprint import fingerprint

logger = logging.getLogger(__name__)


class PriorityService:
    """Thread-safe facade used by the API routes and the CLI."""

    def __init__(
        self,
        config: PriorityConfig | None = None,
        registry: StrategyRegistry | None = None,
    ) -> None:
        self._config = config if config is not None else PriorityConfig()
        if registry is None:
            categories = DEFAULT_CATEGORIES
            if self._config.include_hauling_urgent:
                categories = categories + (HAULING_URGENT_CATEGORY,)
            registry = StrategyRegistry.build(categories)
        self._registry = registry
        self._engine = PriorityEngine(registry, self._config)
        self._tiers: OrderedDict[int, Tier] = OrderedDict()
        self._cache_lock = threading.Lock()
        self._hits = 0
        self._misses = 0

    # -- accessors --

    @property
    def config(self) -> PriorityConfig:
        return self._config

    @property
    def registry(self) -> StrategyRegistry:
        return self._registry

    @property
    def engine(self) -> PriorityEngine:
        return self._engine

    @property
    def cache_stats(self) -> tuple[int, int, int]:
        """(hits, misses, entries)."""
        with self._cache_lock:
            return self._hits, self._misses, len(self._tiers)

    def category_def(self, key: str | None) -> WorkCategoryDef | None:
        """Known definition for ``key``; unknown keys get a bare definition."""
        if key is None:
            return None
        return self._registry.category(key) or WorkCategoryDef(key=key)

    # -- evaluation --

    def evaluate(
        self,
        actor: Actor | None,
        category_key: str | None,
        snapshot: ColonySnapshot,
    ) -> ConsiderationState:
        return self._engine.evaluate(actor, self.category_def(category_key), SnapshotProvider(snapshot))

    def evaluate_all(
        self,
        actor: Actor | None,
        snapshot: ColonySnapshot,
    ) -> dict[str, ConsiderationState]:
        return self._engine.evaluate_all(actor, SnapshotProvider(snapshot))

    def tier(
        self,
        actor: Actor | None,
        category_key: str | None,
        snapshot: ColonySnapshot,
    ) -> Tier:
        """Exported tier only, served from the cache when the inputs repeat."""
        if self._config.cache_size <= 0:
            return self.evaluate(actor, category_key, snapshot).to_tier()

        digest = fingerprint(actor, category_key, snapshot)
        with self._cache_lock:
            cached = self._tiers.get(digest)
            if cached is not None:
                self._tiers.move_to_end(digest)
                self._hits += 1
                return cached
            self._misses += 1

        tier = self.evaluate(actor, category_key, snapshot).to_tier()
        with self._cache_lock:
            self._tiers[digest] = tier
            while len(self._tiers) > self._config.cache_size:
                self._tiers.popitem(last=False)
        return tier

    def tiers(self, actor: Actor | None, snapshot: ColonySnapshot) -> dict[str, Tier]:
        return {
            category.key: self.tier(actor, category.key, snapshot)
            for category in self._registry.categories
        }

    def clear_cache(self) -> None:
        with self._cache_lock:
            self._tiers.clear()
            self._hits = 0
            self._misses = 0
        logger.info("Tier cache cleared")
