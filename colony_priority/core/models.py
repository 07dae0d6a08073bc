"""Core data models: Actor, SkillRecord, WorkCategoryDef and friends.

These are pydantic dataclasses so the same definitions validate scenario
payloads on the wire and travel through the scoring engine unchanged.
All of them are frozen: considerations only ever read them.
"""

from __future__ import annotations

from dataclasses import field

from pydantic.dataclasses import dataclass as pydantic_dataclass

from colony_priority.core.enums import BeautyCategory, Expectation, Passion


@pydantic_dataclass(frozen=True)
class WorkCategoryDef:
    """Definition of one task category as loaded by the host."""

    key: str
    label: str = ""
    relevant_skills: tuple[str, ...] = ()


@pydantic_dataclass(frozen=True)
class SkillRecord:
    level: float = 0.0          # 0-20
    passion: Passion = Passion.NONE


@pydantic_dataclass(frozen=True)
class Inspiration:
    """An active inspiration and the categories it unlocks."""

    name: str
    required_categories: tuple[str, ...] = ()
    any_of_categories: tuple[str, ...] = ()

    def favours(self, category_key: str) -> bool:
        return category_key in self.required_categories or category_key in self.any_of_categories


@pydantic_dataclass(frozen=True)
class RoomInfo:
    """The room the actor currently stands in."""

    touches_map_edge: bool = False
    is_huge: bool = False
    has_meal_source: bool = False     # player-owned stove, dispenser, etc.
    food_poison_chance: float = 0.0   # room stat, 0.0-1.0
    owner_ids: tuple[int, ...] = ()


@pydantic_dataclass(frozen=True)
class Thought:
    """A colony-wide mood thought with its current mood effect."""

    def_name: str
    mood_effect: float = 0.0


@pydantic_dataclass(frozen=True)
class Actor:
    """Read-only attribute bag describing one colonist (or mech)."""

    id: int
    name: str = ""

    # --- Condition ---
    downed: bool = False
    awake: bool = True
    dead: bool = False
    charging: bool = False
    idle: bool = False
    mood: float = 0.5                 # 0.0-1.0
    health: float = 1.0               # summary health, 0.0-1.0
    move_speed: float = 4.6           # cells per second
    carrying_capacity: float = 75.0

    # --- Control ---
    is_colonist: bool = True
    is_mech: bool = False
    mech_categories: frozenset[str] = frozenset()
    mech_skill_level: float = 10.0

    # --- Skills & personality ---
    skills: dict[str, SkillRecord] = field(default_factory=dict)
    traits: frozenset[str] = frozenset()
    inspiration: Inspiration | None = None
    current_job: str | None = None    # category key of the job in progress
    work_tiers: dict[str, int] = field(default_factory=dict)

    # --- Equipment ---
    has_hunting_weapon: bool = False
    weapon_range: float = 0.0

    # --- Health ---
    needs_tending: bool = False
    self_tend: bool = False
    building_immunity: bool = False   # has an immunizable disease not yet immune
    needs_surgery: bool = False
    food_poisoned: bool = False

    # --- Surroundings ---
    in_home_area: bool = True
    room: RoomInfo | None = None
    expectation: Expectation = Expectation.MODERATE
    beauty: BeautyCategory = BeautyCategory.NEUTRAL
    tree_needs_pruning: bool = False

    # --- Mechanitor ---
    is_mechanitor: bool = False
    mech_gestator_formed: bool = False

    @property
    def player_controlled(self) -> bool:
        return self.is_colonist or self.is_mech

    @property
    def available(self) -> bool:
        """Awake and able to pick up work."""
        return self.awake and not (self.downed or self.dead or self.charging)

    def skill(self, name: str) -> SkillRecord:
        return self.skills.get(name) or SkillRecord()

    def average_skill(self, category: WorkCategoryDef) -> float:
        """Mean level over the category's relevant skills (0 when it has none)."""
        if not category.relevant_skills:
            return 0.0
        total = sum(self.skill(s).level for s in category.relevant_skills)
        return total / len(category.relevant_skills)

    def effective_skill(self, category: WorkCategoryDef) -> float:
        """Skill as seen by colleagues: mechs work at a fixed level."""
        if self.is_mech and not self.is_colonist:
            return self.mech_skill_level
        return self.average_skill(category)

    def works_on(self, category_key: str) -> bool:
        """True when this actor has the category turned on (or is a mech built for it)."""
        if self.work_tiers.get(category_key, 0) != 0:
            return True
        return category_key in self.mech_categories
