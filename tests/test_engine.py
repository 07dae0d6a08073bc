"""Tests for PriorityEngine evaluation, fallbacks and strict mode."""

import logging
import sys
import os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

import pytest

from colony_priority.config import PriorityConfig
from colony_priority.core.enums import Tier
from colony_priority.core.errors import PriorityError
from colony_priority.priority.engine import ERROR_FALLBACK, PriorityEngine
from colony_priority.priority.registry import StrategyRegistry
from colony_priority.priority.strategies import DEFAULT_CATEGORIES, Step, WorkTypeStrategy

from tests.helpers.builders import ColonyBuilder, category


def _explode(state, provider):
    raise ValueError("boom")


def _exploding_registry() -> StrategyRegistry:
    return StrategyRegistry.build(
        DEFAULT_CATEGORIES,
        (WorkTypeStrategy("Mining", (Step(_explode),)),),
    )


# ---------------------------------------------------------------------------
# Basic evaluation
# ---------------------------------------------------------------------------

class TestEvaluate:

    def test_seeds_global_default(self):
        engine = PriorityEngine(StrategyRegistry.build(DEFAULT_CATEGORIES, ()))
        colony = ColonyBuilder()
        state = engine.evaluate(None, category("Stonecutting"), colony.provider())
        assert state.justifications[0] == "Global default: 20%"

    def test_permanently_disabled_category(self):
        colony = ColonyBuilder().disable("Mining")
        actor = colony.add_colonist(1, skills={"Mining": 20})
        state = PriorityEngine().evaluate(actor, category("Mining"), colony.provider())
        assert state.disabled
        assert state.to_tier() == Tier.NEVER
        assert state.justifications[-1] == "Permanently disabled: disabled"

    def test_absent_actor_degrades_safely(self):
        colony = ColonyBuilder().alerts(home_fire=True, low_food=True)
        for cat in DEFAULT_CATEGORIES:
            state = PriorityEngine().evaluate(None, cat, colony.provider())
            assert 0.0 <= state.value <= 1.0

    def test_skilled_cook_preferred_over_unskilled(self):
        colony = ColonyBuilder()
        chef = colony.add_colonist(1, skills={"Cooking": 19})
        novice = colony.add_colonist(2, skills={"Cooking": 1})
        provider = colony.provider()
        engine = PriorityEngine()
        assert engine.evaluate(chef, category("Cooking"), provider).value > \
            engine.evaluate(novice, category("Cooking"), provider).value

    def test_downed_colonist_only_rests(self):
        colony = ColonyBuilder()
        actor = colony.add_colonist(1, downed=True, health=0.3)
        results = PriorityEngine().evaluate_all(actor, colony.provider())
        assert results["Patient"].to_tier() == Tier.HIGHEST
        assert results["Mining"].to_tier() == Tier.NEVER
        assert results["Firefighter"].disabled

    def test_evaluate_all_follows_registry_order(self):
        colony = ColonyBuilder()
        actor = colony.add_colonist(1)
        results = PriorityEngine().evaluate_all(actor, colony.provider())
        assert list(results) == [c.key for c in DEFAULT_CATEGORIES]


# ---------------------------------------------------------------------------
# Failure handling
# ---------------------------------------------------------------------------

class TestFailureHandling:

    def test_pipeline_error_falls_back(self, caplog):
        colony = ColonyBuilder()
        actor = colony.add_colonist(1)
        engine = PriorityEngine(_exploding_registry())
        with caplog.at_level(logging.ERROR):
            state = engine.evaluate(actor, category("Mining"), colony.provider())
        assert state.enabled
        assert state.value == ERROR_FALLBACK
        assert "Error computing priority" in state.justifications[-1]
        assert "boom" in caplog.text

    def test_error_is_local_to_one_evaluation(self):
        colony = ColonyBuilder()
        actor = colony.add_colonist(1)
        engine = PriorityEngine(_exploding_registry())
        engine.evaluate(actor, category("Mining"), colony.provider())
        other = engine.evaluate(actor, category("Cooking"), colony.provider())
        assert "Error computing priority" not in " ".join(other.justifications)

    def test_strict_mode_raises(self):
        colony = ColonyBuilder()
        actor = colony.add_colonist(1)
        engine = PriorityEngine(_exploding_registry(), PriorityConfig(strict=True))
        with pytest.raises(PriorityError) as info:
            engine.evaluate(actor, category("Mining"), colony.provider())
        assert isinstance(info.value.__cause__, ValueError)
