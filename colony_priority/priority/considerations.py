"""Built-in consideration library.

Each consideration is a plain function ``(state, provider, *params) -> state``
registered in ``CONSIDERATIONS`` under its function name.  Considerations:

  - never call one another;
  - only read the provider, never mutate it;
  - return the state unchanged when the actor (or category) they need is
    absent, or when their settings weight is exactly zero;
  - rely on the state primitives for disabled handling.

To add a consideration, write a function here and decorate it with
``@consideration``; strategies can then reference it in their steps.
"""

from __future__ import annotations

from typing import Callable

from colony_priority.core.enums import BeautyCategory, Expectation, Passion, WorkCategory
from colony_priority.core.provider import GameStateProvider
from colony_priority.priority.state import ConsiderationState, Reason, clamp01

Consideration = Callable[..., ConsiderationState]

CONSIDERATIONS: dict[str, Consideration] = {}


def consideration(fn: Consideration) -> Consideration:
    """Register a consideration function under its name."""
    CONSIDERATIONS[fn.__name__] = fn
    return fn


# ---------------------------------------------------------------------------
# Category groups
# ---------------------------------------------------------------------------

HAULING_KEYS = (WorkCategory.HAULING, WorkCategory.HAULING_URGENT)
PATIENT_KEYS = (WorkCategory.PATIENT, WorkCategory.PATIENT_BED_REST)
CRAFTING_KEYS = (
    WorkCategory.SMITHING,
    WorkCategory.TAILORING,
    WorkCategory.ART,
    WorkCategory.CRAFTING,
)

BASE_CARRYING_CAPACITY = 75.0
BOLT_ACTION_RIFLE_RANGE = 37.0
BOREDOM_MEMORY_TICKS = 2500      # one in-game hour

# Beauty expectation grid: expectation level -> weight per beauty category
# (HIDEOUS .. BEAUTIFUL).  Higher = the actor is more bothered by the mess.
EXPECTATION_GRID: dict[Expectation, tuple[float, ...]] = {
    Expectation.EXTREMELY_LOW: (0.3, 0.2, 0.1, 0.0, 0.0, 0.0, 0.0),
    Expectation.VERY_LOW:      (0.5, 0.3, 0.2, 0.1, 0.0, 0.0, 0.0),
    Expectation.LOW:           (0.7, 0.5, 0.3, 0.2, 0.1, 0.0, 0.0),
    Expectation.MODERATE:      (0.8, 0.7, 0.5, 0.3, 0.2, 0.1, 0.0),
    Expectation.HIGH:          (0.9, 0.8, 0.7, 0.5, 0.3, 0.2, 0.1),
    Expectation.SKY_HIGH:      (1.0, 0.9, 0.8, 0.7, 0.5, 0.3, 0.2),
    Expectation.NOBLE:         (1.0, 1.0, 0.9, 0.8, 0.7, 0.5, 0.3),
    Expectation.ROYAL:         (1.0, 1.0, 1.0, 0.9, 0.8, 0.7, 0.5),
}


def _is(state: ConsiderationState, *keys: str) -> bool:
    return state.category_key is not None and state.category_key in keys


# ---------------------------------------------------------------------------
# Base values and flags used directly by strategies
# ---------------------------------------------------------------------------

@consideration
def set_base(
    state: ConsiderationState,
    provider: GameStateProvider,
    value: float,
    reason: Reason,
) -> ConsiderationState:
    return state.set(value, reason)


@consideration
def always_do(
    state: ConsiderationState, provider: GameStateProvider, reason: Reason,
) -> ConsiderationState:
    return state.always_do(reason)


@consideration
def never_do_if_downed(state: ConsiderationState, provider: GameStateProvider) -> ConsiderationState:
    if state.actor is None:
        return state
    return state.never_do_if(state.actor.downed, "Colonist is downed")


@consideration
def never_do_if_not_in_home_area(
    state: ConsiderationState, provider: GameStateProvider,
) -> ConsiderationState:
    if state.actor is None:
        return state
    return state.never_do_if(not state.actor.in_home_area, "Not in home area")


# ---------------------------------------------------------------------------
# Aptitude: skills, speed, capacity, passion, competition
# ---------------------------------------------------------------------------

@consideration
def consider_relevant_skills(
    state: ConsiderationState,
    provider: GameStateProvider,
    should_add: bool = False,
) -> ConsiderationState:
    """Map the actor's average relevant skill onto five bands.

    Band cutoffs halve the remaining distance to 20 each step, starting from
    a "bad" cutoff of min(3, colony size).
    """
    actor, category = state.actor, state.category
    if actor is None or category is None:
        return state

    bad = min(3.0, float(provider.metrics.num_pawns))
    good = bad + (20.0 - bad) / 2.0
    great = good + (20.0 - good) / 2.0
    excellent = great + (20.0 - great) / 2.0

    average = actor.average_skill(category)
    if average >= excellent:
        amount = 0.9
    elif average >= great:
        amount = 0.7
    elif average >= good:
        amount = 0.5
    elif average >= bad:
        amount = 0.3
    else:
        amount = 0.1

    def describe() -> str:
        return f"Skill level {average:.0f}"

    if should_add:
        return state.add(amount, describe)
    return state.set(amount, describe)


@consideration
def consider_movement_speed(state: ConsiderationState, provider: GameStateProvider) -> ConsiderationState:
    weight = provider.settings.movement_speed
    if weight == 0.0 or state.actor is None:
        return state
    return state.multiply(weight * 0.25 * state.actor.move_speed, "Movement speed")


@consideration
def consider_carrying_capacity(state: ConsiderationState, provider: GameStateProvider) -> ConsiderationState:
    if state.actor is None or not _is(state, *HAULING_KEYS):
        return state
    capacity = state.actor.carrying_capacity
    if capacity >= BASE_CARRYING_CAPACITY:
        return state
    return state.multiply(capacity / BASE_CARRYING_CAPACITY, "Carrying capacity")


@consideration
def consider_passion(state: ConsiderationState, provider: GameStateProvider) -> ConsiderationState:
    weight = provider.settings.passions
    actor, category = state.actor, state.category
    if weight == 0.0 or actor is None or category is None:
        return state
    skills = category.relevant_skills
    for name in skills:
        passion = actor.skill(name).passion
        if passion == Passion.MAJOR:
            reason = f"Major passion for {name}"
            amount = weight * actor.mood * 0.5 / len(skills)
        elif passion == Passion.MINOR:
            reason = f"Minor passion for {name}"
            amount = weight * actor.mood * 0.25 / len(skills)
        else:
            continue
        state = state.always_do(reason).add(amount, reason)
    return state


@consideration
def consider_is_anyone_else_doing(
    state: ConsiderationState, provider: GameStateProvider,
) -> ConsiderationState:
    actor, key = state.actor, state.category_key
    if actor is None or key is None:
        return state
    for other in provider.colonists():
        if other.id == actor.id or not other.player_controlled or not other.available:
            continue
        if other.works_on(key):
            return state
    return state.always_do("No one else is doing this")


@consideration
def consider_best_at_doing(state: ConsiderationState, provider: GameStateProvider) -> ConsiderationState:
    """Step back for better-skilled colleagues, step up when best."""
    weight = provider.settings.best_at_doing
    actor, category = state.actor, state.category
    if weight == 0.0 or actor is None or category is None:
        return state
    colonists = provider.colonists()
    # The actor may be scored without being listed among the colonists.
    headcount = len({actor.id} | {other.id for other in colonists})
    if headcount <= 1:
        return state

    own_skill = actor.average_skill(category)
    impact = weight / headcount
    is_best = True
    for other in colonists:
        if other.id == actor.id or not other.player_controlled or not other.available:
            continue
        if other.is_mech and not other.is_colonist and category.key not in other.mech_categories:
            continue
        diff = other.effective_skill(category) - own_skill
        if diff <= 0.0:
            continue
        is_best = False
        if diff >= 15.0:
            scale, label = 1.0, "far better"
        elif diff >= 10.0:
            scale, label = 0.8, "much better"
        elif diff >= 5.0:
            scale, label = 0.6, "better"
        else:
            scale, label = 0.4, "slightly better"
        if other.current_job == category.key:
            state = state.add(-1.5 * impact * scale, f"{other.name} is {label} and doing it")
        else:
            state = state.add(-impact * scale, f"{other.name} is {label} at it")

    if is_best:
        return state.multiply(1.5 * weight, "Best at doing this")
    return state


# ---------------------------------------------------------------------------
# Mood and personal state
# ---------------------------------------------------------------------------

@consideration
def consider_thoughts(state: ConsiderationState, provider: GameStateProvider) -> ConsiderationState:
    for thought in provider.thoughts():
        if thought.def_name != "NeedFood":
            continue
        if _is(state, WorkCategory.COOKING):
            factor = -0.01
        elif _is(state, WorkCategory.HUNTING, WorkCategory.PLANT_CUTTING):
            factor = -0.005
        else:
            factor = 0.005
        return state.add(factor * thought.mood_effect, "Hunger level")
    return state


@consideration
def consider_inspiration(state: ConsiderationState, provider: GameStateProvider) -> ConsiderationState:
    actor, key = state.actor, state.category_key
    if actor is None or key is None or actor.inspiration is None:
        return state
    inspiration = actor.inspiration
    if key == WorkCategory.HUNTING and inspiration.name == "Frenzy_Shoot":
        return state.add(0.4, "Inspired")
    if inspiration.favours(key):
        return state.add(0.4, "Inspired")
    return state


@consideration
def consider_bored(state: ConsiderationState, provider: GameStateProvider) -> ConsiderationState:
    # The host records idle ticks; this only reads them.
    actor = state.actor
    if actor is None:
        return state
    if actor.idle:
        return state.always_do("Bored")
    last = provider.last_bored_tick(actor.id)
    was_bored = bool(last) and provider.tick - last < BOREDOM_MEMORY_TICKS
    return state.always_do_if(was_bored, "Was recently bored")


@consideration
def consider_completing_task(state: ConsiderationState, provider: GameStateProvider) -> ConsiderationState:
    actor, key = state.actor, state.category_key
    if actor is None or key is None or actor.current_job != key:
        return state
    return state.always_do("Currently doing this").multiply(1.8, "Currently doing this")


@consideration
def consider_health(state: ConsiderationState, provider: GameStateProvider) -> ConsiderationState:
    actor = state.actor
    if actor is None:
        return state
    if _is(state, *PATIENT_KEYS):
        return state.add(1.0 - actor.health ** 7.0, "Health")
    return state.multiply(actor.health, "Health")


@consideration
def consider_having_food_poisoning(
    state: ConsiderationState, provider: GameStateProvider,
) -> ConsiderationState:
    if state.actor is None or not state.actor.food_poisoned:
        return state
    return state.add(0.4, "Food poisoning")


@consideration
def consider_building_immunity(state: ConsiderationState, provider: GameStateProvider) -> ConsiderationState:
    actor = state.actor
    if actor is None or not actor.building_immunity:
        return state
    if _is(state, WorkCategory.PATIENT_BED_REST):
        return state.add(0.4, "Building immunity")
    if not _is(state, WorkCategory.PATIENT):
        return state.add(-0.2, "Building immunity")
    return state


@consideration
def consider_operation(state: ConsiderationState, provider: GameStateProvider) -> ConsiderationState:
    if state.actor is None or not state.actor.needs_surgery:
        return state
    return state.set(1.0, "Needs an operation")


# ---------------------------------------------------------------------------
# Equipment
# ---------------------------------------------------------------------------

@consideration
def consider_has_hunting_weapon(state: ConsiderationState, provider: GameStateProvider) -> ConsiderationState:
    if not provider.settings.has_hunting_weapon or state.actor is None:
        return state
    return state.never_do_if(not state.actor.has_hunting_weapon, "No hunting weapon")


@consideration
def consider_brawlers_not_hunting(state: ConsiderationState, provider: GameStateProvider) -> ConsiderationState:
    if not provider.settings.brawlers_not_hunting or state.actor is None:
        return state
    if not _is(state, WorkCategory.HUNTING):
        return state
    return state.never_do_if("Brawler" in state.actor.traits, "Brawlers do not hunt")


@consideration
def consider_weapon_range(state: ConsiderationState, provider: GameStateProvider) -> ConsiderationState:
    weight = provider.settings.weapon_range
    actor = state.actor
    if weight == 0.0 or actor is None or not actor.has_hunting_weapon:
        return state
    relative_range = actor.weapon_range / BOLT_ACTION_RIFLE_RANGE
    return state.multiply(relative_range * weight, "Weapon range")


# ---------------------------------------------------------------------------
# Colony situation
# ---------------------------------------------------------------------------

@consideration
def consider_low_food(
    state: ConsiderationState,
    provider: GameStateProvider,
    adjustment: float,
) -> ConsiderationState:
    """Shift by a strategy-chosen signed amount while food is scarce.

    Hauling only reacts when something is actually spoiling in the field.
    """
    weight = provider.settings.low_food
    if weight == 0.0 or not provider.alerts.low_food:
        return state
    if _is(state, *HAULING_KEYS) and provider.metrics.things_deteriorating is None:
        return state
    return state.add(adjustment * weight, "Low food")


@consideration
def consider_needing_warm_clothes(state: ConsiderationState, provider: GameStateProvider) -> ConsiderationState:
    if not provider.alerts.need_warm_clothes:
        return state
    return state.add(0.2, "Colonists need warm clothes")


@consideration
def consider_animals_roaming(state: ConsiderationState, provider: GameStateProvider) -> ConsiderationState:
    if not provider.alerts.animals_roaming:
        return state
    return state.add(0.4, "Animals roaming")


@consideration
def consider_animal_pen(state: ConsiderationState, provider: GameStateProvider) -> ConsiderationState:
    alerts = provider.alerts
    if alerts.animal_pen_not_enclosed:
        return state.add(0.4, "Animal pen not enclosed")
    if alerts.animal_pen_needed:
        return state.add(0.2, "Animal pen needed")
    return state


@consideration
def consider_suppression_need(state: ConsiderationState, provider: GameStateProvider) -> ConsiderationState:
    need = provider.metrics.suppression_need
    if need == 0.0:
        return state
    return state.add(need, "Slaves need suppression")


@consideration
def consider_colonist_left_unburied(
    state: ConsiderationState, provider: GameStateProvider,
) -> ConsiderationState:
    if not provider.alerts.colonist_left_unburied or not _is(state, *HAULING_KEYS):
        return state
    return state.add(0.4, "Colonist left unburied")


@consideration
def consider_refueling(state: ConsiderationState, provider: GameStateProvider) -> ConsiderationState:
    alerts = provider.alerts
    if alerts.refuel_needed_now:
        return state.add(0.35, "Refueling needed now")
    if alerts.refuel_needed:
        return state.add(0.20, "Refueling needed")
    return state


@consideration
def consider_fire(state: ConsiderationState, provider: GameStateProvider) -> ConsiderationState:
    alerts, metrics = provider.alerts, provider.metrics
    if not _is(state, WorkCategory.FIREFIGHTER):
        if alerts.home_fire:
            return state.add(-0.2, "Fire in home area")
        return state
    if alerts.home_fire:
        return state.set(1.0, "Fire in home area")
    if metrics.map_fires > 0:
        return state.add(clamp01(metrics.map_fires * 0.01), "Fire on map")
    return state


@consideration
def consider_finished_mech_gestators(
    state: ConsiderationState, provider: GameStateProvider,
) -> ConsiderationState:
    if state.actor is None or not state.actor.mech_gestator_formed:
        return state
    return state.add(0.4, "Mech gestator finished")


@consideration
def consider_repairing_mech(state: ConsiderationState, provider: GameStateProvider) -> ConsiderationState:
    if state.actor is None or not provider.alerts.mech_damaged or not state.actor.is_mechanitor:
        return state
    return state.add(0.6, "Mechanoid damaged")


@consideration
def consider_mech_haulers(state: ConsiderationState, provider: GameStateProvider) -> ConsiderationState:
    return state.add(-provider.metrics.percent_pawns_mech_haulers, "Mech haulers available")


@consideration
def consider_things_deteriorating(
    state: ConsiderationState, provider: GameStateProvider,
) -> ConsiderationState:
    name = provider.metrics.things_deteriorating
    if name is None or not _is(state, *HAULING_KEYS):
        return state
    return state.multiply(2.0, lambda: f"Things deteriorating: {name}")


@consideration
def consider_plants_blighted(state: ConsiderationState, provider: GameStateProvider) -> ConsiderationState:
    weight = provider.settings.plants_blighted
    if weight == 0.0 or not provider.alerts.plants_blighted:
        return state
    return state.add(0.4 * weight, "Plants blighted")


@consideration
def consider_tree_pruning(state: ConsiderationState, provider: GameStateProvider) -> ConsiderationState:
    weight = provider.settings.tree_pruning
    actor = state.actor
    if weight == 0.0 or actor is None or not _is(state, WorkCategory.PLANT_CUTTING):
        return state
    if not actor.tree_needs_pruning:
        return state
    return state.multiply(2.0 * weight, "Connected tree needs pruning")


@consideration
def consider_ate_raw_food(state: ConsiderationState, provider: GameStateProvider) -> ConsiderationState:
    if not _is(state, WorkCategory.COOKING):
        return state
    for thought in provider.thoughts():
        if thought.def_name == "AteRawFood" and state.value < 0.6:
            return state.set(0.6, "Colonists ate raw food")
    return state


@consideration
def consider_food_poisoning_risk(
    state: ConsiderationState, provider: GameStateProvider,
) -> ConsiderationState:
    """Clean more, cook less, in a filthy room that holds a meal source."""
    weight = provider.settings.food_poisoning
    actor = state.actor
    if weight == 0.0 or actor is None or actor.room is None:
        return state
    if not _is(state, WorkCategory.CLEANING, WorkCategory.COOKING):
        return state
    room = actor.room
    if room.touches_map_edge or room.is_huge or not room.has_meal_source:
        return state
    adjustment = weight * 20.0 * room.food_poison_chance
    if _is(state, WorkCategory.CLEANING):
        return state.add(adjustment, "Filthy cooking area")
    return state.add(-adjustment, "Filthy cooking area")


@consideration
def consider_own_room(state: ConsiderationState, provider: GameStateProvider) -> ConsiderationState:
    weight = provider.settings.own_room
    actor = state.actor
    if weight == 0.0 or actor is None or actor.room is None or not _is(state, WorkCategory.CLEANING):
        return state
    if actor.id not in actor.room.owner_ids:
        return state
    return state.multiply(weight * 2.0, "Own room")


def _expectation_label(expectations: float) -> str:
    if expectations < 0.2:
        return "Beauty expectations exceeded"
    if expectations < 0.4:
        return "Beauty expectations met"
    if expectations < 0.6:
        return "Beauty expectations unmet"
    if expectations < 0.8:
        return "Beauty expectations let down"
    return "Beauty expectations ignored"


@consideration
def consider_beauty_expectations(
    state: ConsiderationState, provider: GameStateProvider,
) -> ConsiderationState:
    """Unmet beauty expectations pull actors toward hauling and cleaning."""
    weight = provider.settings.beauty
    actor = state.actor
    if weight == 0.0 or actor is None:
        return state
    alerts = provider.alerts
    expectations = weight * EXPECTATION_GRID[Expectation(actor.expectation)][BeautyCategory(actor.beauty)]
    label = _expectation_label(expectations)

    if _is(state, *HAULING_KEYS):
        if not alerts.area_has_haulables:
            return state
        return state.add(expectations, label)
    if _is(state, WorkCategory.CLEANING):
        if not alerts.area_has_filth:
            return state
        # cleaning starts from a 0.5 base rather than 0.3
        return state.add(expectations - 0.2, label)
    if _is(state, WorkCategory.SMITHING) and actor.is_mechanitor:
        return state
    if not alerts.area_has_filth and not alerts.area_has_haulables:
        return state
    return state.add(-expectations, label)


# ---------------------------------------------------------------------------
# Universal triage
# ---------------------------------------------------------------------------

@consideration
def consider_colonists_needing_treatment(
    state: ConsiderationState, provider: GameStateProvider,
) -> ConsiderationState:
    percent = provider.metrics.percent_pawns_needing_treatment
    actor = state.actor
    if percent <= 0.0 or actor is None:
        return state
    if actor.needs_tending:
        return _this_actor_needs_treatment(state)
    return _another_actor_needs_treatment(state, percent)


def _this_actor_needs_treatment(state: ConsiderationState) -> ConsiderationState:
    if _is(state, *PATIENT_KEYS):
        return state.always_do("Needs treatment").set(1.0, "Needs treatment")
    if _is(state, WorkCategory.DOCTOR):
        if state.actor.self_tend:
            reason = "Needs treatment and can self-tend"
            return state.always_do(reason).set(1.0, reason)
        return state
    return state.never_do("Needs treatment")


def _another_actor_needs_treatment(state: ConsiderationState, percent: float) -> ConsiderationState:
    reason = "Others need treatment"
    if _is(state, WorkCategory.FIREFIGHTER, WorkCategory.PATIENT_BED_REST):
        return state
    if _is(state, WorkCategory.DOCTOR):
        return state.add(percent, reason)
    if _is(state, WorkCategory.RESEARCH):
        return state.never_do(reason)
    cap = 0.3 if _is(state, *CRAFTING_KEYS) else 0.6
    if state.value > cap:
        return state.add(-(state.value - cap), reason)
    return state


@consideration
def consider_downed_colonists(state: ConsiderationState, provider: GameStateProvider) -> ConsiderationState:
    actor = state.actor
    if actor is None:
        return state
    if actor.downed:
        if _is(state, *PATIENT_KEYS):
            return state.always_do("Colonist is downed").set(1.0, "Colonist is downed")
        return state.never_do("Colonist is downed")
    percent = provider.metrics.percent_pawns_downed
    if percent <= 0.0:
        return state
    if _is(state, WorkCategory.DOCTOR):
        return state.add(percent, "Other colonists downed")
    if _is(state, *CRAFTING_KEYS, WorkCategory.RESEARCH):
        return state.never_do("Other colonists downed")
    return state


@consideration
def consider_injured_pets(state: ConsiderationState, provider: GameStateProvider) -> ConsiderationState:
    metrics = provider.metrics
    if not _is(state, WorkCategory.DOCTOR) or metrics.num_pawns == 0:
        return state
    share = clamp01(metrics.num_pets_needing_treatment / metrics.num_pawns)
    return state.add(share * 0.5, "Pets injured")


@consideration
def consider_injured_prisoners(state: ConsiderationState, provider: GameStateProvider) -> ConsiderationState:
    metrics = provider.metrics
    if not _is(state, WorkCategory.DOCTOR) or metrics.num_pawns == 0:
        return state
    share = clamp01(metrics.num_prisoners_needing_treatment / metrics.num_pawns)
    return state.add(share * 0.5, "Prisoners injured")


@consideration
def consider_colony_policy(state: ConsiderationState, provider: GameStateProvider) -> ConsiderationState:
    key = state.category_key
    if key is None:
        return state
    return state.add(provider.settings.work_adjustment(key), "Colony policy")
