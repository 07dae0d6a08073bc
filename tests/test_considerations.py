"""Tests for the consideration library."""

import sys
import os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

import pytest

from colony_priority.core.enums import BeautyCategory, Expectation, Passion
from colony_priority.core.models import Inspiration, RoomInfo
from colony_priority.priority import considerations as c
from colony_priority.priority.considerations import CONSIDERATIONS

from tests.helpers.builders import ColonyBuilder, make_actor, make_provider, make_state, with_settings


# Every consideration with the extra parameters it needs.
_PARAMS = {"set_base": (0.5, "x"), "always_do": ("x",), "consider_low_food": (0.3,)}
ALL_WITH_PARAMS = [
    pytest.param(fn, _PARAMS.get(name, ()), id=name)
    for name, fn in sorted(CONSIDERATIONS.items())
]

ACTOR_DEPENDENT = [
    c.never_do_if_downed,
    c.never_do_if_not_in_home_area,
    c.consider_relevant_skills,
    c.consider_movement_speed,
    c.consider_carrying_capacity,
    c.consider_passion,
    c.consider_is_anyone_else_doing,
    c.consider_best_at_doing,
    c.consider_inspiration,
    c.consider_bored,
    c.consider_completing_task,
    c.consider_health,
    c.consider_having_food_poisoning,
    c.consider_building_immunity,
    c.consider_operation,
    c.consider_has_hunting_weapon,
    c.consider_brawlers_not_hunting,
    c.consider_weapon_range,
    c.consider_finished_mech_gestators,
    c.consider_repairing_mech,
    c.consider_food_poisoning_risk,
    c.consider_own_room,
    c.consider_beauty_expectations,
    c.consider_colonists_needing_treatment,
    c.consider_downed_colonists,
]


def _busy_colony() -> ColonyBuilder:
    """A colony where nearly every alert and metric is active."""
    colony = ColonyBuilder()
    colony.add_colonist(2, skills={"Cooking": 18})
    colony.alerts(
        need_warm_clothes=True, animals_roaming=True, colonist_left_unburied=True,
        refuel_needed_now=True, home_fire=True, animal_pen_needed=True,
        mech_damaged=True, low_food=True, plants_blighted=True,
        area_has_haulables=True, area_has_filth=True,
    )
    colony.metrics(
        suppression_need=0.3, percent_pawns_downed=0.2, percent_pawns_needing_treatment=0.2,
        num_pets_needing_treatment=1, num_prisoners_needing_treatment=1,
        percent_pawns_mech_haulers=0.1, map_fires=3, things_deteriorating="Rice",
    )
    colony.thought("NeedFood", -6.0).thought("AteRawFood", -7.0)
    colony.settings(best_at_doing=1.0)
    return colony


# ---------------------------------------------------------------------------
# Library-wide contracts
# ---------------------------------------------------------------------------

class TestLibraryContracts:

    def test_registry_lists_every_consideration(self):
        assert len(CONSIDERATIONS) >= 40
        assert CONSIDERATIONS["consider_fire"] is c.consider_fire

    @pytest.mark.parametrize("fn", ACTOR_DEPENDENT, ids=lambda f: f.__name__)
    @pytest.mark.parametrize("key", ["Cooking", "Doctor", "Hauling", "Cleaning", "PatientBedRest"])
    def test_absent_actor_is_noop(self, fn, key):
        provider = _busy_colony().provider()
        state = make_state(None, key, 0.5)
        assert fn(state, provider) == state

    @pytest.mark.parametrize("fn,params", ALL_WITH_PARAMS)
    def test_disabled_value_never_moves(self, fn, params):
        colony = _busy_colony()
        actor = colony.add_colonist(1, skills={"Cooking": 4}, downed=True, needs_surgery=True)
        state = make_state(actor, "Cooking", 0.5, disabled=True)
        result = fn(state, colony.provider(), *params)
        assert result.value == 0.5

    @pytest.mark.parametrize("fn,params", ALL_WITH_PARAMS)
    def test_result_stays_in_unit_range(self, fn, params):
        colony = _busy_colony()
        actor = colony.add_colonist(1, skills={"Cooking": 4}, passions={"Cooking": Passion.MAJOR})
        for key in ("Cooking", "Firefighter", "Doctor", "Hauling", "Research"):
            result = fn(make_state(actor, key, 0.5), colony.provider(), *params)
            assert 0.0 <= result.value <= 1.0

    @pytest.mark.parametrize("weight,fn,actor_fields", [
        ("movement_speed", c.consider_movement_speed, {}),
        ("passions", c.consider_passion, {"passions": {"Cooking": Passion.MAJOR}}),
        ("beauty", c.consider_beauty_expectations, {"expectation": Expectation.ROYAL, "beauty": BeautyCategory.HIDEOUS}),
        ("best_at_doing", c.consider_best_at_doing, {"skills": {"Cooking": 20}}),
        ("food_poisoning", c.consider_food_poisoning_risk, {"room": RoomInfo(has_meal_source=True, food_poison_chance=0.02)}),
        ("weapon_range", c.consider_weapon_range, {"has_hunting_weapon": True, "weapon_range": 20.0}),
        ("own_room", c.consider_own_room, {"room": RoomInfo(owner_ids=(1,))}),
        ("plants_blighted", c.consider_plants_blighted, {}),
        ("tree_pruning", c.consider_tree_pruning, {"tree_needs_pruning": True}),
    ])
    def test_zero_weight_is_noop(self, weight, fn, actor_fields):
        colony = _busy_colony()
        actor = colony.add_colonist(1, **actor_fields)
        provider = with_settings(colony.provider(), **{weight: 0.0})
        for key in ("Cooking", "Cleaning", "Hauling", "PlantCutting", "Hunting"):
            state = make_state(actor, key, 0.5)
            assert fn(state, provider) == state

    def test_zero_low_food_weight_is_noop(self):
        provider = with_settings(_busy_colony().provider(), low_food=0.0)
        state = make_state(make_actor(1), "Cooking", 0.5)
        assert c.consider_low_food(state, provider, 0.3) == state


# ---------------------------------------------------------------------------
# Aptitude
# ---------------------------------------------------------------------------

class TestRelevantSkills:

    @pytest.mark.parametrize("level,expected", [(20, 0.9), (16, 0.7), (12, 0.5), (4, 0.3), (1, 0.1)])
    def test_bands_for_a_large_colony(self, level, expected):
        # bad=3, good=11.5, great=15.75, excellent=17.875
        provider = make_provider(metrics={"num_pawns": 8})
        actor = make_actor(1, skills={"Cooking": level})
        result = c.consider_relevant_skills(make_state(actor, "Cooking", 0.2), provider)
        assert result.value == pytest.approx(expected)

    def test_small_colony_lowers_the_bar(self):
        provider = make_provider(metrics={"num_pawns": 1})
        actor = make_actor(1, skills={"Cooking": 1})
        result = c.consider_relevant_skills(make_state(actor, "Cooking", 0.2), provider)
        assert result.value == pytest.approx(0.3)

    def test_should_add_accumulates(self):
        provider = make_provider(metrics={"num_pawns": 8})
        actor = make_actor(1, skills={"Social": 20})
        result = c.consider_relevant_skills(make_state(actor, "Childcare", 0.05), provider, True)
        assert result.value == pytest.approx(0.95)

    def test_reason_names_the_level(self):
        provider = make_provider(metrics={"num_pawns": 3})
        actor = make_actor(1, skills={"Cooking": 9})
        result = c.consider_relevant_skills(make_state(actor, "Cooking", 0.2), provider)
        assert result.justifications[-1].startswith("Skill level 9")


class TestMovementAndCapacity:

    def test_movement_speed_scales_by_quarter_speed(self):
        actor = make_actor(1, move_speed=2.0)
        result = c.consider_movement_speed(make_state(actor, "Hauling", 0.6), make_provider())
        assert result.value == pytest.approx(0.3)

    def test_carrying_capacity_only_for_hauling(self):
        actor = make_actor(1, carrying_capacity=37.5)
        provider = make_provider()
        assert c.consider_carrying_capacity(make_state(actor, "Hauling", 0.6), provider).value == pytest.approx(0.3)
        assert c.consider_carrying_capacity(make_state(actor, "Cooking", 0.6), provider).value == 0.6

    def test_full_capacity_unchanged(self):
        actor = make_actor(1, carrying_capacity=90.0)
        state = make_state(actor, "Hauling", 0.6)
        assert c.consider_carrying_capacity(state, make_provider()) == state


class TestPassion:

    def test_major_passion_enables_and_adds(self):
        actor = make_actor(1, passions={"Cooking": Passion.MAJOR}, mood=1.0)
        result = c.consider_passion(make_state(actor, "Cooking", 0.3), make_provider())
        assert result.enabled
        assert result.value == pytest.approx(0.8)

    def test_minor_passion_adds_less(self):
        actor = make_actor(1, passions={"Cooking": Passion.MINOR}, mood=1.0)
        result = c.consider_passion(make_state(actor, "Cooking", 0.3), make_provider())
        assert result.value == pytest.approx(0.55)

    def test_no_passion_noop(self):
        actor = make_actor(1, skills={"Cooking": 10})
        state = make_state(actor, "Cooking", 0.3)
        assert c.consider_passion(state, make_provider()) == state


class TestColleagues:

    def test_anyone_else_doing_enables_when_alone(self):
        colony = ColonyBuilder()
        me = colony.add_colonist(1)
        colony.add_colonist(2, work_tiers={"Cooking": 0})
        assert c.consider_is_anyone_else_doing(make_state(me, "Cooking", 0.3), colony.provider()).enabled

    def test_anyone_else_doing_ignores_downed_colleagues(self):
        colony = ColonyBuilder()
        me = colony.add_colonist(1)
        colony.add_colonist(2, work_tiers={"Cooking": 1}, downed=True)
        assert c.consider_is_anyone_else_doing(make_state(me, "Cooking", 0.3), colony.provider()).enabled

    def test_someone_else_doing_is_noop(self):
        colony = ColonyBuilder()
        me = colony.add_colonist(1)
        colony.add_colonist(2, work_tiers={"Cooking": 2})
        state = make_state(me, "Cooking", 0.3)
        assert c.consider_is_anyone_else_doing(state, colony.provider()) == state

    def test_mech_built_for_category_counts(self):
        colony = ColonyBuilder()
        me = colony.add_colonist(1)
        colony.add_colonist(2, is_colonist=False, is_mech=True, mech_categories=frozenset({"Hauling"}))
        state = make_state(me, "Hauling", 0.3)
        assert c.consider_is_anyone_else_doing(state, colony.provider()) == state

    def test_best_at_doing_boosts_the_best(self):
        colony = ColonyBuilder().settings(best_at_doing=1.0)
        me = colony.add_colonist(1, skills={"Cooking": 15})
        colony.add_colonist(2, skills={"Cooking": 5})
        result = c.consider_best_at_doing(make_state(me, "Cooking", 0.4), colony.provider())
        assert result.value == pytest.approx(0.6)

    def test_best_at_doing_steps_back_for_better_colleague(self):
        colony = ColonyBuilder().settings(best_at_doing=1.0)
        me = colony.add_colonist(1, skills={"Cooking": 2})
        colony.add_colonist(2, skills={"Cooking": 20}, current_job="Cooking")
        result = c.consider_best_at_doing(make_state(me, "Cooking", 0.9), colony.provider())
        # impact 0.5, far better (x1.0) and doing it (x1.5)
        assert result.value == pytest.approx(0.15)
        assert "doing it" in result.justifications[-1]

    def test_best_at_doing_needs_company(self):
        colony = ColonyBuilder().settings(best_at_doing=1.0)
        me = colony.add_colonist(1, skills={"Cooking": 15})
        state = make_state(me, "Cooking", 0.4)
        assert c.consider_best_at_doing(state, colony.provider()) == state

    def test_best_at_doing_counts_unlisted_actor(self):
        outside = ColonyBuilder().settings(best_at_doing=1.0)
        outside.add_colonist(2, skills={"Cooking": 20})
        me = make_actor(1, skills={"Cooking": 2})
        result = c.consider_best_at_doing(make_state(me, "Cooking", 0.5), outside.provider())

        listed = ColonyBuilder().settings(best_at_doing=1.0)
        listed.add_colonist(1, skills={"Cooking": 2})
        listed.add_colonist(2, skills={"Cooking": 20})
        expected = c.consider_best_at_doing(make_state(me, "Cooking", 0.5), listed.provider())

        # impact 1.0 / 2 colonists, far better (x1.0)
        assert result.value == pytest.approx(0.0)
        assert result.value == pytest.approx(expected.value)
        assert "far better" in result.justifications[-1]


# ---------------------------------------------------------------------------
# Personal state
# ---------------------------------------------------------------------------

class TestPersonalState:

    def test_bored_actor_enabled(self):
        actor = make_actor(1, idle=True)
        assert c.consider_bored(make_state(actor, "Mining", 0.3), make_provider()).enabled

    def test_recent_boredom_remembered(self):
        colony = ColonyBuilder()
        actor = colony.add_colonist(1)
        colony.bored_at(1, colony.tick - 1000)
        assert c.consider_bored(make_state(actor, "Mining", 0.3), colony.provider()).enabled

    def test_old_boredom_forgotten(self):
        colony = ColonyBuilder()
        actor = colony.add_colonist(1)
        colony.bored_at(1, colony.tick - 5000)
        state = make_state(actor, "Mining", 0.3)
        assert c.consider_bored(state, colony.provider()) == state

    def test_completing_task(self):
        actor = make_actor(1, current_job="Mining")
        result = c.consider_completing_task(make_state(actor, "Mining", 0.5), make_provider())
        assert result.enabled
        assert result.value == pytest.approx(0.9)

    def test_health_for_patients_and_workers(self):
        actor = make_actor(1, health=0.5)
        patient = c.consider_health(make_state(actor, "Patient", 0.0), make_provider())
        worker = c.consider_health(make_state(actor, "Mining", 0.8), make_provider())
        assert patient.value == pytest.approx(1.0 - 0.5 ** 7)
        assert worker.value == pytest.approx(0.4)

    def test_building_immunity(self):
        actor = make_actor(1, building_immunity=True)
        provider = make_provider()
        assert c.consider_building_immunity(make_state(actor, "PatientBedRest", 0.2), provider).value == pytest.approx(0.6)
        assert c.consider_building_immunity(make_state(actor, "Mining", 0.5), provider).value == pytest.approx(0.3)
        assert c.consider_building_immunity(make_state(actor, "Patient", 0.5), provider).value == 0.5

    def test_operation_sets_full(self):
        actor = make_actor(1, needs_surgery=True)
        assert c.consider_operation(make_state(actor, "Patient", 0.1), make_provider()).value == 1.0

    def test_inspiration(self):
        inspired = make_actor(1, inspiration=Inspiration(name="Inspired_Creativity", any_of_categories=("Art",)))
        provider = make_provider()
        assert c.consider_inspiration(make_state(inspired, "Art", 0.3), provider).value == pytest.approx(0.7)
        assert c.consider_inspiration(make_state(inspired, "Mining", 0.3), provider).value == 0.3

    def test_frenzy_inspires_hunting(self):
        actor = make_actor(1, inspiration=Inspiration(name="Frenzy_Shoot"))
        assert c.consider_inspiration(make_state(actor, "Hunting", 0.3), make_provider()).value == pytest.approx(0.7)


# ---------------------------------------------------------------------------
# Equipment
# ---------------------------------------------------------------------------

class TestHuntingEquipment:

    def test_no_weapon_disables(self):
        actor = make_actor(1, has_hunting_weapon=False)
        assert c.consider_has_hunting_weapon(make_state(actor, "Hunting", 0.5), make_provider()).disabled

    def test_setting_off_allows_unarmed(self):
        actor = make_actor(1, has_hunting_weapon=False)
        provider = make_provider(settings={"has_hunting_weapon": False})
        assert not c.consider_has_hunting_weapon(make_state(actor, "Hunting", 0.5), provider).disabled

    def test_brawlers_never_hunt(self):
        actor = make_actor(1, traits=frozenset({"Brawler"}))
        assert c.consider_brawlers_not_hunting(make_state(actor, "Hunting", 0.5), make_provider()).disabled
        assert not c.consider_brawlers_not_hunting(make_state(actor, "Mining", 0.5), make_provider()).disabled

    def test_weapon_range_relative_to_rifle(self):
        actor = make_actor(1, has_hunting_weapon=True, weapon_range=18.5)
        result = c.consider_weapon_range(make_state(actor, "Hunting", 0.8), make_provider())
        assert result.value == pytest.approx(0.4)


# ---------------------------------------------------------------------------
# Colony situation
# ---------------------------------------------------------------------------

class TestColonySituation:

    def test_fire_boosts_firefighting_to_full(self):
        provider = make_provider(alerts={"home_fire": True})
        actor = make_actor(1)
        assert c.consider_fire(make_state(actor, "Firefighter", 0.0), provider).value == 1.0
        assert c.consider_fire(make_state(actor, "Mining", 0.5), provider).value == pytest.approx(0.3)

    def test_map_fires_add_small_amount(self):
        provider = make_provider(metrics={"map_fires": 10})
        result = c.consider_fire(make_state(make_actor(1), "Firefighter", 0.0), provider)
        assert result.value == pytest.approx(0.1)

    def test_low_food_uses_strategy_adjustment(self):
        provider = make_provider(alerts={"low_food": True})
        actor = make_actor(1)
        assert c.consider_low_food(make_state(actor, "Cooking", 0.5), provider, 0.2).value == pytest.approx(0.7)
        assert c.consider_low_food(make_state(actor, "Mining", 0.5), provider, -0.3).value == pytest.approx(0.2)

    def test_low_food_hauling_needs_spoiling_items(self):
        provider = make_provider(alerts={"low_food": True})
        state = make_state(make_actor(1), "Hauling", 0.5)
        assert c.consider_low_food(state, provider, 0.2) == state
        spoiling = make_provider(alerts={"low_food": True}, metrics={"things_deteriorating": "Rice"})
        assert c.consider_low_food(state, spoiling, 0.2).value == pytest.approx(0.7)

    def test_things_deteriorating_doubles_hauling(self):
        provider = make_provider(metrics={"things_deteriorating": "Berries"})
        result = c.consider_things_deteriorating(make_state(make_actor(1), "Hauling", 0.3), provider)
        assert result.value == pytest.approx(0.6)
        assert result.justifications[-1] == "Things deteriorating: Berries: x200%"

    def test_refueling_prefers_urgent(self):
        provider = make_provider(alerts={"refuel_needed_now": True, "refuel_needed": True})
        assert c.consider_refueling(make_state(None, "Hauling", 0.3), provider).value == pytest.approx(0.65)

    def test_colony_policy_offset(self):
        provider = make_provider(settings={"global_work_adjustments": {"Mining": -0.25}})
        assert c.consider_colony_policy(make_state(None, "Mining", 0.5), provider).value == pytest.approx(0.25)

    def test_unburied_only_affects_hauling(self):
        provider = make_provider(alerts={"colonist_left_unburied": True})
        assert c.consider_colonist_left_unburied(make_state(None, "Hauling", 0.3), provider).value == pytest.approx(0.7)
        assert c.consider_colonist_left_unburied(make_state(None, "Mining", 0.3), provider).value == 0.3

    def test_hunger_thought(self):
        provider = make_provider(thoughts=({"def_name": "NeedFood", "mood_effect": -10.0},))
        assert c.consider_thoughts(make_state(None, "Cooking", 0.3), provider).value == pytest.approx(0.4)
        assert c.consider_thoughts(make_state(None, "Mining", 0.3), provider).value == pytest.approx(0.25)

    def test_ate_raw_food_raises_cooking_floor(self):
        provider = make_provider(thoughts=({"def_name": "AteRawFood", "mood_effect": -7.0},))
        assert c.consider_ate_raw_food(make_state(None, "Cooking", 0.2), provider).value == pytest.approx(0.6)
        assert c.consider_ate_raw_food(make_state(None, "Cooking", 0.8), provider).value == 0.8


class TestRooms:

    def _room(self, **fields):
        return RoomInfo(has_meal_source=True, food_poison_chance=0.01, **fields)

    def test_food_poisoning_risk(self):
        actor = make_actor(1, room=self._room())
        provider = make_provider()
        assert c.consider_food_poisoning_risk(make_state(actor, "Cleaning", 0.5), provider).value == pytest.approx(0.7)
        assert c.consider_food_poisoning_risk(make_state(actor, "Cooking", 0.5), provider).value == pytest.approx(0.3)

    def test_outdoor_rooms_ignored(self):
        actor = make_actor(1, room=self._room(touches_map_edge=True))
        state = make_state(actor, "Cleaning", 0.5)
        assert c.consider_food_poisoning_risk(state, make_provider()) == state

    def test_own_room_doubles_cleaning(self):
        actor = make_actor(1, room=RoomInfo(owner_ids=(1,)))
        assert c.consider_own_room(make_state(actor, "Cleaning", 0.3), make_provider()).value == pytest.approx(0.6)

    def test_beauty_expectations(self):
        actor = make_actor(1, expectation=Expectation.HIGH, beauty=BeautyCategory.UGLY)
        provider = make_provider(alerts={"area_has_filth": True, "area_has_haulables": True})
        # HIGH x UGLY = 0.7
        assert c.consider_beauty_expectations(make_state(actor, "Hauling", 0.1), provider).value == pytest.approx(0.8)
        assert c.consider_beauty_expectations(make_state(actor, "Cleaning", 0.1), provider).value == pytest.approx(0.6)
        assert c.consider_beauty_expectations(make_state(actor, "Art", 0.9), provider).value == pytest.approx(0.2)
        assert c.consider_beauty_expectations(make_state(actor, "Art", 0.9), provider).justifications[-1].startswith(
            "Beauty expectations let down"
        )


# ---------------------------------------------------------------------------
# Triage
# ---------------------------------------------------------------------------

class TestTriage:

    def test_downed_actor(self):
        actor = make_actor(1, downed=True)
        provider = make_provider()
        patient = c.consider_downed_colonists(make_state(actor, "Patient", 0.1), provider)
        assert patient.enabled and patient.value == 1.0
        assert c.consider_downed_colonists(make_state(actor, "Mining", 0.5), provider).disabled

    def test_others_downed(self):
        provider = make_provider(metrics={"percent_pawns_downed": 0.25})
        actor = make_actor(1)
        assert c.consider_downed_colonists(make_state(actor, "Doctor", 0.5), provider).value == pytest.approx(0.75)
        assert c.consider_downed_colonists(make_state(actor, "Research", 0.5), provider).disabled
        assert c.consider_downed_colonists(make_state(actor, "Mining", 0.5), provider).value == 0.5

    def test_actor_needing_treatment(self):
        provider = make_provider(metrics={"percent_pawns_needing_treatment": 0.5})
        actor = make_actor(1, needs_tending=True)
        assert c.consider_colonists_needing_treatment(make_state(actor, "PatientBedRest", 0.1), provider).value == 1.0
        assert c.consider_colonists_needing_treatment(make_state(actor, "Mining", 0.5), provider).disabled
        doctor = c.consider_colonists_needing_treatment(make_state(actor, "Doctor", 0.5), provider)
        assert doctor.value == 0.5 and not doctor.disabled

    def test_self_tending_doctor(self):
        provider = make_provider(metrics={"percent_pawns_needing_treatment": 0.5})
        actor = make_actor(1, needs_tending=True, self_tend=True)
        result = c.consider_colonists_needing_treatment(make_state(actor, "Doctor", 0.5), provider)
        assert result.enabled and result.value == 1.0

    def test_other_needing_treatment_caps_work(self):
        provider = make_provider(metrics={"percent_pawns_needing_treatment": 0.5})
        actor = make_actor(1)
        assert c.consider_colonists_needing_treatment(make_state(actor, "Art", 0.8), provider).value == pytest.approx(0.3)
        assert c.consider_colonists_needing_treatment(make_state(actor, "Mining", 0.8), provider).value == pytest.approx(0.6)
        assert c.consider_colonists_needing_treatment(make_state(actor, "Mining", 0.4), provider).value == 0.4
        assert c.consider_colonists_needing_treatment(make_state(actor, "Doctor", 0.3), provider).value == pytest.approx(0.8)

    def test_injured_pets_share(self):
        provider = make_provider(metrics={"num_pawns": 4, "num_pets_needing_treatment": 2})
        assert c.consider_injured_pets(make_state(None, "Doctor", 0.5), provider).value == pytest.approx(0.75)

    def test_mech_haulers_reduce_hauling(self):
        provider = make_provider(metrics={"percent_pawns_mech_haulers": 0.2})
        assert c.consider_mech_haulers(make_state(None, "Hauling", 0.5), provider).value == pytest.approx(0.3)
