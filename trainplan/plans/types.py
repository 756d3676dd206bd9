"""Realized plan types.

A realized plan holds concrete day-level workouts per week. These types
mirror the stored plan documents: camelCase on the wire, snake_case in
Python, and unknown keys are preserved untouched so that regeneration
never drops data it does not understand.
"""

import re
from typing import Any

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from trainplan.planner.enums import HARD_WORKOUT_TYPES, RUNNING_WORKOUT_TYPES, WorkoutType
from trainplan.workouts.cross_training.interface import EquipmentType

WORKOUT_TYPE_ALIASES: dict[str, WorkoutType] = {
    "tempo": WorkoutType.TEMPO,
    "threshold": WorkoutType.TEMPO,
    "interval": WorkoutType.INTERVAL,
    "intervals": WorkoutType.INTERVAL,
    "speed": WorkoutType.INTERVAL,
    "track": WorkoutType.INTERVAL,
    "hill": WorkoutType.HILL,
    "hills": WorkoutType.HILL,
    "hillrepeats": WorkoutType.HILL,
    "long": WorkoutType.LONG_RUN,
    "longrun": WorkoutType.LONG_RUN,
    "easy": WorkoutType.EASY,
    "easyrun": WorkoutType.EASY,
    "recovery": WorkoutType.RECOVERY,
    "recoveryrun": WorkoutType.RECOVERY,
    "rest": WorkoutType.REST,
    "restday": WorkoutType.REST,
    "off": WorkoutType.REST,
    "race": WorkoutType.RACE,
    "raceday": WorkoutType.RACE,
    "crosstraining": WorkoutType.CROSS_TRAINING,
    "cross": WorkoutType.CROSS_TRAINING,
    "xt": WorkoutType.CROSS_TRAINING,
    "bike": WorkoutType.CROSS_TRAINING,
    "cycling": WorkoutType.CROSS_TRAINING,
}

_TYPE_KEY_PATTERN = re.compile(r"[\s_\-]+")
_LEADING_NUMBER = re.compile(r"-?\d+(?:\.\d+)?")


def normalize_workout_type(value: str | None) -> str | None:
    """Canonical workout type for a stored spelling.

    "LONG", "long-run" and "longRun" all map to "longRun". Unknown values
    are returned unchanged.
    """
    if value is None:
        return None
    key = _TYPE_KEY_PATTERN.sub("", str(value)).lower()
    canonical = WORKOUT_TYPE_ALIASES.get(key)
    return str(canonical) if canonical is not None else str(value)


class PlanModel(BaseModel):
    """Base for stored plan documents."""

    model_config = ConfigDict(populate_by_name=True, alias_generator=to_camel, extra="allow")

    def to_document(self) -> dict[str, Any]:
        """Serialize with camelCase keys, omitting unset optional fields."""
        return self.model_dump(by_alias=True, exclude_none=True)


class Workout(PlanModel):
    """One day-level entry of a realized week.

    The type field is the authoritative classifier; name and description
    are advisory text.
    """

    day: str | None = None
    date: str | None = None
    type: str | None = None
    name: str | None = None
    description: str | None = None
    distance: float | None = None
    duration: str | int | float | None = None
    pace: str | None = None
    cross_training_type: str | None = None
    notes: str | None = None
    original_workout: dict[str, Any] | None = None
    workout_details: dict[str, Any] | None = None

    @field_validator("type", mode="before")
    @classmethod
    def normalize_type(cls, value: Any) -> Any:
        if isinstance(value, str):
            return normalize_workout_type(value)
        return value

    @field_validator("distance", mode="before")
    @classmethod
    def parse_distance(cls, value: Any) -> Any:
        """Accept "5", "5 miles" and numbers; anything else becomes None."""
        if isinstance(value, str):
            match = _LEADING_NUMBER.search(value)
            return float(match.group(0)) if match else None
        return value

    @property
    def is_rest(self) -> bool:
        return self.type == WorkoutType.REST

    @property
    def is_hard(self) -> bool:
        return self.type in HARD_WORKOUT_TYPES

    @property
    def is_running(self) -> bool:
        return self.type in RUNNING_WORKOUT_TYPES


class RealizedWeek(PlanModel):
    """One week of day-level workouts, one entry per calendar day."""

    week: int
    week_dates: dict[str, Any] | str | None = None
    phase: str | None = None
    total_mileage: float | None = None
    workouts: list[Workout] = Field(default_factory=list)
    week_type: str | None = None
    note: str | None = None


class PlanOverview(PlanModel):
    start_date: str | None = None
    total_weeks: int | None = None
    race_date: str | None = None
    race_distance: str | None = None


class InjuryRecoveryInfo(PlanModel):
    """Metadata of an active injury recovery window."""

    start_week: int
    end_week: int
    return_week: int
    selected_equipment: list[str] = Field(default_factory=list)
    weeks_off_running: int
    reduce_training_days: int = 0


class PlanSnapshot(PlanModel):
    """Copy of a plan's weeks and overview taken when injury recovery starts."""

    weeks: list[RealizedWeek | None] = Field(default_factory=list)
    plan_overview: PlanOverview | None = None


class TrainingPlan(PlanModel):
    """A realized training plan.

    Older documents store the week list under weeklyPlans instead of weeks.
    """

    weeks: list[RealizedWeek | None] | None = None
    weekly_plans: list[RealizedWeek | None] | None = None
    plan_overview: PlanOverview | None = None
    injury_recovery_active: bool = False
    injury_recovery_info: InjuryRecoveryInfo | None = None
    original_plan_before_injury: PlanSnapshot | None = None

    @property
    def week_field(self) -> str | None:
        """Name of the field holding the week list, None when neither exists."""
        if self.weeks is not None:
            return "weeks"
        if self.weekly_plans is not None:
            return "weekly_plans"
        return None

    def week_list(self) -> list[RealizedWeek | None] | None:
        field_name = self.week_field
        return getattr(self, field_name) if field_name else None

    def with_weeks(self, weeks: list[RealizedWeek | None], **updates: Any) -> "TrainingPlan":
        """Copy of the plan with its week list replaced in the field it came from."""
        field_name = self.week_field or "weeks"
        return self.model_copy(update={field_name: weeks, **updates}, deep=True)


class UserProfile(PlanModel):
    """Runner profile fields the core reads."""

    quality_days: list[str] = Field(
        default_factory=list,
        validation_alias=AliasChoices("quality_days", "qualityDays", "hardSessionDays", "hard_session_days"),
    )
    rest_days: list[str] = Field(default_factory=list)
    long_run_day: str | None = None
    start_date: str | None = None
    race_date: str | None = None
    stand_up_bike_type: str | None = None
    current_weekly_mileage: float | None = None
    current_long_run: float | None = None
    race_distance: str | None = None
    experience_level: str | None = None

    def plan_inputs(self, total_weeks: int | None) -> dict[str, Any]:
        """Raw calculator request built from the profile."""
        return {
            "currentWeeklyMileage": self.current_weekly_mileage,
            "currentLongRun": self.current_long_run,
            "totalWeeks": total_weeks,
            "raceDistance": self.race_distance,
            "experienceLevel": self.experience_level,
        }


class EquipmentSelection(PlanModel):
    pool: bool = False
    elliptical: bool = False
    stationary_bike: bool = False
    swimming: bool = False
    rowing: bool = False
    stand_up_bike: bool = False

    def selected(self) -> list[EquipmentType]:
        """Selected equipment types in canonical order."""
        flags = {
            EquipmentType.POOL: self.pool,
            EquipmentType.ELLIPTICAL: self.elliptical,
            EquipmentType.STATIONARY_BIKE: self.stationary_bike,
            EquipmentType.SWIMMING: self.swimming,
            EquipmentType.ROWING: self.rowing,
            EquipmentType.STAND_UP_BIKE: self.stand_up_bike,
        }
        return [equipment for equipment, chosen in flags.items() if chosen]
