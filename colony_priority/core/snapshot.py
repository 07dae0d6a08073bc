"""Immutable snapshot of the colony state for one evaluation."""

from __future__ import annotations

from dataclasses import field

from pydantic.dataclasses import dataclass as pydantic_dataclass

from colony_priority.core.models import Actor, Thought
from colony_priority.core.settings import ConsiderationSettings


@pydantic_dataclass(frozen=True)
class Alerts:
    """Boolean colony alerts raised by the host."""

    need_warm_clothes: bool = False
    animals_roaming: bool = False
    colonist_left_unburied: bool = False
    refuel_needed_now: bool = False
    refuel_needed: bool = False
    home_fire: bool = False
    animal_pen_needed: bool = False
    animal_pen_not_enclosed: bool = False
    mech_damaged: bool = False
    low_food: bool = False
    plants_blighted: bool = False
    area_has_haulables: bool = False
    area_has_filth: bool = False


@pydantic_dataclass(frozen=True)
class ColonyMetrics:
    """Numeric colony-wide measurements."""

    suppression_need: float = 0.0
    percent_pawns_downed: float = 0.0
    percent_pawns_needing_treatment: float = 0.0
    num_pets_needing_treatment: float = 0.0
    num_prisoners_needing_treatment: float = 0.0
    num_pawns: int = 0
    percent_pawns_mech_haulers: float = 0.0
    map_fires: int = 0
    things_deteriorating: str | None = None   # name of an item about to spoil


@pydantic_dataclass(frozen=True)
class ColonySnapshot:
    """Read-only view of everything considerations may look at.

    Owned by the caller for the duration of one evaluation; the engine
    never keeps a reference once the call returns.
    """

    tick: int = 0
    alerts: Alerts = field(default_factory=Alerts)
    metrics: ColonyMetrics = field(default_factory=ColonyMetrics)
    settings: ConsiderationSettings = field(default_factory=ConsiderationSettings)
    colonists: tuple[Actor, ...] = ()
    thoughts: tuple[Thought, ...] = ()
    disabled_categories: frozenset[str] = frozenset()
    last_bored: dict[int, int] = field(default_factory=dict)   # actor id -> tick
