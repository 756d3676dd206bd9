"""Canonical enums for plan computation.

All enums are string-based so skeletons and realized plans serialize to
JSON without conversion.
"""

from enum import StrEnum


# -----------------------------
# Race Distances
# -----------------------------
class RaceDistance(StrEnum):
    """Race distances with a parameter table."""

    FIVE_K = "5K"
    TEN_K = "10K"
    HALF_MARATHON = "Half Marathon"
    MARATHON = "Marathon"


# -----------------------------
# Phases
# -----------------------------
class Phase(StrEnum):
    """Training phase of a week."""

    BASE = "base"
    BUILD = "build"
    PEAK = "peak"
    TAPER = "taper"


# -----------------------------
# Experience
# -----------------------------
class ExperienceLevel(StrEnum):
    """Runner experience level used to scale targets."""

    BEGINNER = "beginner"
    INTERMEDIATE = "intermediate"
    ADVANCED = "advanced"
    ELITE = "elite"


# -----------------------------
# Workout Types
# -----------------------------
class WorkoutType(StrEnum):
    """Authoritative classifier of a day-level workout entry."""

    TEMPO = "tempo"
    INTERVAL = "interval"
    HILL = "hill"
    LONG_RUN = "longRun"
    EASY = "easy"
    RECOVERY = "recovery"
    REST = "rest"
    RACE = "race"
    CROSS_TRAINING = "cross-training"


class QualityWorkout(StrEnum):
    """Workout kinds that receive a per-week distance target."""

    TEMPO = "tempo"
    INTERVAL = "interval"
    HILL = "hill"


HARD_WORKOUT_TYPES = frozenset({WorkoutType.TEMPO, WorkoutType.INTERVAL, WorkoutType.HILL})
RUNNING_WORKOUT_TYPES = frozenset(
    {
        WorkoutType.TEMPO,
        WorkoutType.INTERVAL,
        WorkoutType.HILL,
        WorkoutType.LONG_RUN,
        WorkoutType.EASY,
        WorkoutType.RECOVERY,
        WorkoutType.RACE,
    }
)
