"""Per-category strategy pipelines.

A strategy is data: an ordered tuple of ``Step`` (consideration + bound
parameters) folded over the state.  Order matters (set wipes earlier
arithmetic, later flags override earlier ones), so every pipeline below is
spelled out in full rather than assembled from shared fragments, except for
the universal triage tail which is identical everywhere it appears.

Key objects:
  Step               — one consideration invocation with bound parameters
  WorkTypeStrategy   — category key + ordered steps
  STRATEGIES         — built-in pipelines keyed by category key
  DEFAULT_STRATEGY   — used for any category without a pipeline
  DEFAULT_CATEGORIES — the stock category definitions
"""

from __future__ import annotations

from dataclasses import dataclass

from colony_priority.core.enums import WorkCategory
from colony_priority.core.models import WorkCategoryDef
from colony_priority.core.provider import GameStateProvider
from colony_priority.priority import considerations as c
from colony_priority.priority.considerations import Consideration
from colony_priority.priority.state import ConsiderationState


# ---------------------------------------------------------------------------
# Step / strategy
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class Step:
    """A consideration with its strategy-chosen parameters."""

    consideration: Consideration
    args: tuple = ()

    @property
    def name(self) -> str:
        return self.consideration.__name__

    def apply(self, state: ConsiderationState, provider: GameStateProvider) -> ConsiderationState:
        return self.consideration(state, provider, *self.args)


def _s(consideration: Consideration, *args) -> Step:
    return Step(consideration, args)


@dataclass(frozen=True, slots=True)
class WorkTypeStrategy:
    """Ordered pipeline of considerations for one category key.

    ``category_key`` is None only for the default strategy.
    """

    category_key: str | None
    steps: tuple[Step, ...]
    description: str = ""

    def evaluate(self, state: ConsiderationState, provider: GameStateProvider) -> ConsiderationState:
        for step in self.steps:
            state = step.apply(state, provider)
        return state

    @property
    def step_names(self) -> tuple[str, ...]:
        return tuple(step.name for step in self.steps)


# Shared tail: fire -> immunity -> current task -> triage -> policy.
UNIVERSAL_TAIL: tuple[Step, ...] = (
    _s(c.consider_fire),
    _s(c.consider_building_immunity),
    _s(c.consider_completing_task),
    _s(c.consider_colonists_needing_treatment),
    _s(c.consider_downed_colonists),
    _s(c.consider_colony_policy),
)


# ---------------------------------------------------------------------------
# Built-in strategies
# ---------------------------------------------------------------------------

STRATEGIES: dict[str, WorkTypeStrategy] = {}


def _reg(s: WorkTypeStrategy) -> None:
    STRATEGIES[s.category_key] = s


# -- Emergency & medical --
_reg(WorkTypeStrategy(
    WorkCategory.FIREFIGHTER.value,
    (
        _s(c.set_base, 0.0, "Firefighting"),
        _s(c.always_do, "Firefighting"),
        _s(c.never_do_if_downed),
        *UNIVERSAL_TAIL,
    ),
    "Always on; jumps to full when the home area burns.",
))
_reg(WorkTypeStrategy(
    WorkCategory.PATIENT.value,
    (
        _s(c.set_base, 0.0, "Patient"),
        _s(c.always_do, "Patient"),
        _s(c.consider_health),
        _s(c.consider_building_immunity),
        _s(c.consider_completing_task),
        _s(c.consider_colonists_needing_treatment),
        _s(c.consider_downed_colonists),
        _s(c.consider_operation),
        _s(c.consider_colony_policy),
    ),
    "Always on; grows as health drops.",
))
_reg(WorkTypeStrategy(
    WorkCategory.PATIENT_BED_REST.value,
    (
        _s(c.set_base, 0.0, "Bed rest"),
        _s(c.always_do, "Bed rest"),
        _s(c.consider_health),
        _s(c.consider_building_immunity),
        _s(c.consider_low_food, -0.2),
        _s(c.consider_completing_task),
        _s(c.consider_bored),
        _s(c.consider_having_food_poisoning),
        _s(c.consider_colonists_needing_treatment),
        _s(c.consider_downed_colonists),
        _s(c.consider_operation),
        _s(c.consider_colony_policy),
    ),
))
_reg(WorkTypeStrategy(
    WorkCategory.DOCTOR.value,
    (
        _s(c.consider_relevant_skills),
        _s(c.consider_carrying_capacity),
        _s(c.consider_is_anyone_else_doing),
        _s(c.consider_best_at_doing),
        _s(c.consider_passion),
        _s(c.consider_thoughts),
        _s(c.consider_inspiration),
        _s(c.consider_injured_pets),
        _s(c.consider_injured_prisoners),
        _s(c.consider_colonist_left_unburied),
        _s(c.consider_health),
        _s(c.consider_ate_raw_food),
        _s(c.consider_bored),
        *UNIVERSAL_TAIL,
    ),
))

# -- Social & general --
_reg(WorkTypeStrategy(
    WorkCategory.CHILDCARE.value,
    (
        _s(c.set_base, 0.5, "Childcare"),
        _s(c.consider_relevant_skills, True),
        _s(c.consider_passion),
        _s(c.consider_thoughts),
        _s(c.consider_inspiration),
        _s(c.consider_health),
        _s(c.consider_ate_raw_food),
        _s(c.consider_bored),
        *UNIVERSAL_TAIL,
    ),
))
_reg(WorkTypeStrategy(
    WorkCategory.BASIC_WORKER.value,
    (
        _s(c.set_base, 0.5, "Basic work"),
        _s(c.consider_thoughts),
        _s(c.consider_health),
        _s(c.consider_low_food, -0.3),
        _s(c.consider_bored),
        _s(c.never_do_if_downed),
        _s(c.consider_building_immunity),
        _s(c.consider_completing_task),
        _s(c.consider_colonists_needing_treatment),
        _s(c.consider_downed_colonists),
        _s(c.consider_colony_policy),
    ),
))
_reg(WorkTypeStrategy(
    WorkCategory.WARDEN.value,
    (
        _s(c.consider_relevant_skills),
        _s(c.consider_carrying_capacity),
        _s(c.consider_is_anyone_else_doing),
        _s(c.consider_best_at_doing),
        _s(c.consider_passion),
        _s(c.consider_thoughts),
        _s(c.consider_inspiration),
        _s(c.consider_low_food, -0.3),
        _s(c.consider_suppression_need),
        _s(c.consider_colonist_left_unburied),
        _s(c.consider_health),
        _s(c.consider_ate_raw_food),
        _s(c.consider_bored),
        *UNIVERSAL_TAIL,
    ),
))
_reg(WorkTypeStrategy(
    WorkCategory.HANDLING.value,
    (
        _s(c.consider_relevant_skills),
        _s(c.consider_carrying_capacity),
        _s(c.consider_is_anyone_else_doing),
        _s(c.consider_best_at_doing),
        _s(c.consider_passion),
        _s(c.consider_thoughts),
        _s(c.consider_inspiration),
        _s(c.consider_animals_roaming),
        _s(c.consider_colonist_left_unburied),
        _s(c.consider_movement_speed),
        _s(c.consider_health),
        _s(c.consider_ate_raw_food),
        _s(c.consider_bored),
        *UNIVERSAL_TAIL,
    ),
))

# -- Food --
_reg(WorkTypeStrategy(
    WorkCategory.COOKING.value,
    (
        _s(c.consider_relevant_skills),
        _s(c.consider_carrying_capacity),
        _s(c.consider_is_anyone_else_doing),
        _s(c.consider_best_at_doing),
        _s(c.consider_passion),
        _s(c.consider_thoughts),
        _s(c.consider_inspiration),
        _s(c.consider_low_food, 0.2),
        _s(c.consider_colonist_left_unburied),
        _s(c.consider_food_poisoning_risk),
        _s(c.consider_health),
        _s(c.consider_ate_raw_food),
        _s(c.consider_bored),
        *UNIVERSAL_TAIL,
    ),
))
_reg(WorkTypeStrategy(
    WorkCategory.HUNTING.value,
    (
        _s(c.consider_relevant_skills),
        _s(c.consider_carrying_capacity),
        _s(c.consider_is_anyone_else_doing),
        _s(c.consider_best_at_doing),
        _s(c.consider_passion),
        _s(c.consider_thoughts),
        _s(c.consider_inspiration),
        _s(c.consider_low_food, 0.3),
        _s(c.consider_weapon_range),
        _s(c.consider_colonist_left_unburied),
        _s(c.consider_movement_speed),
        _s(c.consider_health),
        _s(c.consider_ate_raw_food),
        _s(c.consider_bored),
        _s(c.consider_has_hunting_weapon),
        _s(c.consider_brawlers_not_hunting),
        *UNIVERSAL_TAIL,
    ),
    "Disabled without a ranged weapon or for brawlers.",
))
_reg(WorkTypeStrategy(
    WorkCategory.GROWING.value,
    (
        _s(c.consider_relevant_skills),
        _s(c.consider_carrying_capacity),
        _s(c.consider_is_anyone_else_doing),
        _s(c.consider_best_at_doing),
        _s(c.consider_passion),
        _s(c.consider_thoughts),
        _s(c.consider_inspiration),
        _s(c.consider_low_food, 0.3),
        _s(c.consider_colonist_left_unburied),
        _s(c.consider_health),
        _s(c.consider_ate_raw_food),
        _s(c.consider_bored),
        *UNIVERSAL_TAIL,
    ),
))
_reg(WorkTypeStrategy(
    WorkCategory.PLANT_CUTTING.value,
    (
        _s(c.consider_relevant_skills),
        _s(c.consider_is_anyone_else_doing),
        _s(c.consider_best_at_doing),
        _s(c.consider_passion),
        _s(c.consider_thoughts),
        _s(c.consider_inspiration),
        _s(c.consider_tree_pruning),
        _s(c.consider_low_food, 0.3),
        _s(c.consider_health),
        _s(c.consider_plants_blighted),
        _s(c.consider_bored),
        *UNIVERSAL_TAIL,
    ),
))

# -- Building & extraction --
_reg(WorkTypeStrategy(
    WorkCategory.CONSTRUCTION.value,
    (
        _s(c.consider_relevant_skills),
        _s(c.consider_carrying_capacity),
        _s(c.consider_is_anyone_else_doing),
        _s(c.consider_best_at_doing),
        _s(c.consider_passion),
        _s(c.consider_thoughts),
        _s(c.consider_inspiration),
        _s(c.consider_animal_pen),
        _s(c.consider_low_food, -0.3),
        _s(c.consider_colonist_left_unburied),
        _s(c.consider_health),
        _s(c.consider_ate_raw_food),
        _s(c.consider_bored),
        *UNIVERSAL_TAIL,
    ),
))
_reg(WorkTypeStrategy(
    WorkCategory.MINING.value,
    (
        _s(c.consider_relevant_skills),
        _s(c.consider_carrying_capacity),
        _s(c.consider_is_anyone_else_doing),
        _s(c.consider_best_at_doing),
        _s(c.consider_passion),
        _s(c.consider_thoughts),
        _s(c.consider_inspiration),
        _s(c.consider_low_food, -0.3),
        _s(c.consider_colonist_left_unburied),
        _s(c.consider_health),
        _s(c.consider_ate_raw_food),
        _s(c.consider_bored),
        *UNIVERSAL_TAIL,
    ),
))

# -- Production --
_reg(WorkTypeStrategy(
    WorkCategory.SMITHING.value,
    (
        _s(c.consider_relevant_skills),
        _s(c.consider_carrying_capacity),
        _s(c.consider_finished_mech_gestators),
        _s(c.consider_repairing_mech),
        _s(c.consider_is_anyone_else_doing),
        _s(c.consider_best_at_doing),
        _s(c.consider_beauty_expectations),
        _s(c.consider_passion),
        _s(c.consider_thoughts),
        _s(c.consider_inspiration),
        _s(c.consider_low_food, -0.3),
        _s(c.consider_colonist_left_unburied),
        _s(c.consider_health),
        _s(c.consider_ate_raw_food),
        _s(c.consider_bored),
        *UNIVERSAL_TAIL,
    ),
))
_reg(WorkTypeStrategy(
    WorkCategory.TAILORING.value,
    (
        _s(c.consider_relevant_skills),
        _s(c.consider_carrying_capacity),
        _s(c.consider_is_anyone_else_doing),
        _s(c.consider_best_at_doing),
        _s(c.consider_beauty_expectations),
        _s(c.consider_passion),
        _s(c.consider_thoughts),
        _s(c.consider_inspiration),
        _s(c.consider_low_food, -0.3),
        _s(c.consider_needing_warm_clothes),
        _s(c.consider_colonist_left_unburied),
        _s(c.consider_health),
        _s(c.consider_ate_raw_food),
        _s(c.consider_bored),
        *UNIVERSAL_TAIL,
    ),
))
_reg(WorkTypeStrategy(
    WorkCategory.ART.value,
    (
        _s(c.consider_relevant_skills),
        _s(c.consider_carrying_capacity),
        _s(c.consider_is_anyone_else_doing),
        _s(c.consider_best_at_doing),
        _s(c.consider_beauty_expectations),
        _s(c.consider_passion),
        _s(c.consider_thoughts),
        _s(c.consider_inspiration),
        _s(c.consider_low_food, -0.3),
        _s(c.consider_colonist_left_unburied),
        _s(c.consider_health),
        _s(c.consider_ate_raw_food),
        _s(c.consider_bored),
        *UNIVERSAL_TAIL,
    ),
))
_reg(WorkTypeStrategy(
    WorkCategory.CRAFTING.value,
    (
        _s(c.consider_relevant_skills),
        _s(c.consider_carrying_capacity),
        _s(c.consider_is_anyone_else_doing),
        _s(c.consider_best_at_doing),
        _s(c.consider_beauty_expectations),
        _s(c.consider_passion),
        _s(c.consider_thoughts),
        _s(c.consider_inspiration),
        _s(c.consider_low_food, -0.3),
        _s(c.consider_colonist_left_unburied),
        _s(c.consider_health),
        _s(c.consider_ate_raw_food),
        _s(c.consider_bored),
        *UNIVERSAL_TAIL,
    ),
))

# -- Logistics & upkeep --
_reg(WorkTypeStrategy(
    WorkCategory.HAULING.value,
    (
        _s(c.set_base, 0.3, "Hauling"),
        _s(c.consider_beauty_expectations),
        _s(c.consider_carrying_capacity),
        _s(c.consider_is_anyone_else_doing),
        _s(c.consider_passion),
        _s(c.consider_thoughts),
        _s(c.consider_inspiration),
        _s(c.consider_refueling),
        _s(c.consider_low_food, 0.2),
        _s(c.consider_colonist_left_unburied),
        _s(c.consider_movement_speed),
        _s(c.consider_health),
        _s(c.consider_ate_raw_food),
        _s(c.consider_things_deteriorating),
        _s(c.consider_mech_haulers),
        _s(c.consider_bored),
        *UNIVERSAL_TAIL,
    ),
))
_reg(WorkTypeStrategy(
    WorkCategory.HAULING_URGENT.value,
    (
        _s(c.set_base, 0.5, "Urgent hauling"),
        _s(c.consider_beauty_expectations),
        _s(c.consider_carrying_capacity),
        _s(c.consider_is_anyone_else_doing),
        _s(c.consider_passion),
        _s(c.consider_thoughts),
        _s(c.consider_inspiration),
        _s(c.consider_refueling),
        _s(c.consider_low_food, 0.3),
        _s(c.consider_colonist_left_unburied),
        _s(c.consider_movement_speed),
        _s(c.consider_health),
        _s(c.consider_ate_raw_food),
        _s(c.consider_things_deteriorating),
        _s(c.consider_bored),
        *UNIVERSAL_TAIL,
    ),
    "Only registered when the host defines the category.",
))
_reg(WorkTypeStrategy(
    WorkCategory.CLEANING.value,
    (
        _s(c.set_base, 0.5, "Cleaning"),
        _s(c.consider_beauty_expectations),
        _s(c.consider_is_anyone_else_doing),
        _s(c.consider_thoughts),
        _s(c.consider_own_room),
        _s(c.consider_low_food, -0.2),
        _s(c.consider_food_poisoning_risk),
        _s(c.consider_health),
        _s(c.consider_bored),
        _s(c.never_do_if_not_in_home_area),
        _s(c.consider_building_immunity),
        _s(c.consider_completing_task),
        _s(c.consider_colonists_needing_treatment),
        _s(c.consider_downed_colonists),
        _s(c.consider_colony_policy),
    ),
))
_reg(WorkTypeStrategy(
    WorkCategory.RESEARCH.value,
    (
        _s(c.consider_relevant_skills),
        _s(c.consider_is_anyone_else_doing),
        _s(c.consider_best_at_doing),
        _s(c.consider_beauty_expectations),
        _s(c.consider_passion),
        _s(c.consider_thoughts),
        _s(c.consider_inspiration),
        _s(c.consider_low_food, -0.4),
        _s(c.consider_colonist_left_unburied),
        _s(c.consider_health),
        _s(c.consider_ate_raw_food),
        _s(c.consider_bored),
        # no current-task bonus: research jobs are interrupted freely
        _s(c.consider_fire),
        _s(c.consider_building_immunity),
        _s(c.consider_colonists_needing_treatment),
        _s(c.consider_downed_colonists),
        _s(c.consider_colony_policy),
    ),
))


DEFAULT_STRATEGY = WorkTypeStrategy(
    None,
    (
        _s(c.consider_relevant_skills),
        _s(c.consider_carrying_capacity),
        _s(c.consider_beauty_expectations),
        _s(c.consider_is_anyone_else_doing),
        _s(c.consider_best_at_doing),
        _s(c.consider_passion),
        _s(c.consider_thoughts),
        _s(c.consider_inspiration),
        _s(c.consider_low_food, -0.3),
        _s(c.consider_colonist_left_unburied),
        _s(c.consider_movement_speed),
        _s(c.consider_health),
        _s(c.consider_ate_raw_food),
        _s(c.consider_bored),
        *UNIVERSAL_TAIL,
    ),
    "Fallback for categories without a dedicated pipeline.",
)


# ---------------------------------------------------------------------------
# Stock category definitions
# ---------------------------------------------------------------------------

def _cat(key: WorkCategory, label: str, *skills: str) -> WorkCategoryDef:
    return WorkCategoryDef(key=key.value, label=label, relevant_skills=skills)


DEFAULT_CATEGORIES: tuple[WorkCategoryDef, ...] = (
    _cat(WorkCategory.FIREFIGHTER, "firefight"),
    _cat(WorkCategory.PATIENT, "patient"),
    _cat(WorkCategory.DOCTOR, "doctor", "Medicine"),
    _cat(WorkCategory.PATIENT_BED_REST, "bed rest"),
    _cat(WorkCategory.CHILDCARE, "childcare", "Social"),
    _cat(WorkCategory.BASIC_WORKER, "basic"),
    _cat(WorkCategory.WARDEN, "warden", "Social"),
    _cat(WorkCategory.HANDLING, "handle", "Animals"),
    _cat(WorkCategory.COOKING, "cook", "Cooking"),
    _cat(WorkCategory.HUNTING, "hunt", "Shooting"),
    _cat(WorkCategory.CONSTRUCTION, "construct", "Construction"),
    _cat(WorkCategory.GROWING, "grow", "Plants"),
    _cat(WorkCategory.MINING, "mine", "Mining"),
    _cat(WorkCategory.PLANT_CUTTING, "cut plants", "Plants"),
    _cat(WorkCategory.SMITHING, "smith", "Crafting"),
    _cat(WorkCategory.TAILORING, "tailor", "Crafting"),
    _cat(WorkCategory.ART, "art", "Artistic"),
    _cat(WorkCategory.CRAFTING, "craft", "Crafting"),
    _cat(WorkCategory.HAULING, "haul"),
    _cat(WorkCategory.CLEANING, "clean"),
    _cat(WorkCategory.RESEARCH, "research", "Intellectual"),
)

HAULING_URGENT_CATEGORY = _cat(WorkCategory.HAULING_URGENT, "haul urgently")
