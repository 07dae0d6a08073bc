"""Enumerations used throughout the engine."""

from __future__ import annotations

from enum import Enum, IntEnum, unique


@unique
class WorkCategory(str, Enum):
    """Keys of the task categories that have a dedicated strategy."""

    FIREFIGHTER = "Firefighter"
    PATIENT = "Patient"
    DOCTOR = "Doctor"
    PATIENT_BED_REST = "PatientBedRest"
    CHILDCARE = "Childcare"
    BASIC_WORKER = "BasicWorker"
    WARDEN = "Warden"
    HANDLING = "Handling"
    COOKING = "Cooking"
    HUNTING = "Hunting"
    CONSTRUCTION = "Construction"
    GROWING = "Growing"
    MINING = "Mining"
    PLANT_CUTTING = "PlantCutting"
    SMITHING = "Smithing"
    TAILORING = "Tailoring"
    ART = "Art"
    CRAFTING = "Crafting"
    HAULING = "Hauling"
    CLEANING = "Cleaning"
    RESEARCH = "Research"
    HAULING_URGENT = "HaulingUrgent"  # modded category, only present when installed


@unique
class Tier(IntEnum):
    """Discrete work priority understood by the host scheduler."""

    NEVER = 0
    HIGHEST = 1
    HIGH = 2
    LOW = 3
    LOWEST = 4


@unique
class Passion(IntEnum):
    """How much an actor enjoys a skill."""

    NONE = 0
    MINOR = 1
    MAJOR = 2


@unique
class BeautyCategory(IntEnum):
    """Perceived beauty of the actor's surroundings."""

    HIDEOUS = 0
    VERY_UGLY = 1
    UGLY = 2
    NEUTRAL = 3
    PRETTY = 4
    VERY_PRETTY = 5
    BEAUTIFUL = 6


@unique
class Expectation(IntEnum):
    """Actor's living-standard expectation level."""

    EXTREMELY_LOW = 0
    VERY_LOW = 1
    LOW = 2
    MODERATE = 3
    HIGH = 4
    SKY_HIGH = 5
    NOBLE = 6
    ROYAL = 7
