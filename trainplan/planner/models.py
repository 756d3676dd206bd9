"""Core immutable data models for plan computation.

This module defines the canonical numeric structures:
- Plan inputs (current fitness and race goal)
- Race parameter tables
- Phase distribution and per-week targets
- The plan skeleton handed to day assignment

All models are frozen (immutable); regeneration always builds new ones.
"""

from dataclasses import dataclass, field
from typing import Any

from trainplan.planner.enums import Phase, QualityWorkout, RaceDistance


# -----------------------------
# Inputs
# -----------------------------
@dataclass(frozen=True)
class PlanInputs:
    """Immutable calculator inputs.

    Attributes:
        current_weekly_mileage: Miles currently run per week
        current_long_run: Longest recent run in miles
        total_weeks: Plan length in weeks
        race_distance: Canonical race distance
        experience_level: Runner experience level
    """

    current_weekly_mileage: float
    current_long_run: float
    total_weeks: int
    race_distance: RaceDistance
    experience_level: str = "intermediate"

    def to_dict(self) -> dict[str, Any]:
        return {
            "currentWeeklyMileage": self.current_weekly_mileage,
            "currentLongRun": self.current_long_run,
            "totalWeeks": self.total_weeks,
            "raceDistance": str(self.race_distance),
            "experienceLevel": self.experience_level,
        }


# -----------------------------
# Race Parameters
# -----------------------------
@dataclass(frozen=True)
class WorkoutBounds:
    """Inclusive mile bounds for one quality workout kind."""

    min: int
    max: int


@dataclass(frozen=True)
class RaceParameters:
    """Static parameter table for one race distance.

    Attributes:
        race_distance: Race distance the table applies to
        distance_miles: Race length in miles
        peak_weekly_mileage_cap: Hard ceiling for peak weekly mileage
        long_run_max: Hard ceiling for the long run
        long_run_floor: Long run the plan should at least reach
        long_run_percentage: Long run share of peak weekly mileage
        minimum_long_run_target: Long run below which a warning is emitted
        workout_percentages: Share of weekly mileage per quality workout kind
        workout_bounds: Mile bounds per quality workout kind
    """

    race_distance: RaceDistance
    distance_miles: float
    peak_weekly_mileage_cap: int
    long_run_max: int
    long_run_floor: int
    long_run_percentage: float
    minimum_long_run_target: int
    workout_percentages: dict[QualityWorkout, float]
    workout_bounds: dict[QualityWorkout, WorkoutBounds]

    def to_dict(self) -> dict[str, Any]:
        return {
            "raceDistance": str(self.race_distance),
            "distanceMiles": self.distance_miles,
            "peakWeeklyMileageCap": self.peak_weekly_mileage_cap,
            "longRunMax": self.long_run_max,
            "longRunFloor": self.long_run_floor,
            "longRunPercentage": self.long_run_percentage,
            "minimumLongRunTarget": self.minimum_long_run_target,
            "workoutPercentages": {str(kind): pct for kind, pct in self.workout_percentages.items()},
            "workoutBounds": {
                str(kind): {"min": bounds.min, "max": bounds.max} for kind, bounds in self.workout_bounds.items()
            },
        }


# -----------------------------
# Phases
# -----------------------------
@dataclass(frozen=True)
class PhaseSpan:
    """Inclusive week range of one phase. Empty when end_week < start_week."""

    start_week: int
    end_week: int

    @property
    def weeks(self) -> int:
        return max(0, self.end_week - self.start_week + 1)

    def contains(self, week: int) -> bool:
        return self.start_week <= week <= self.end_week


@dataclass(frozen=True)
class PhaseDistribution:
    """Week counts per phase.

    Invariant: base + build + peak + taper == total_weeks and taper >= 1.
    """

    base: int
    build: int
    peak: int
    taper: int

    @property
    def total_weeks(self) -> int:
        return self.base + self.build + self.peak + self.taper

    @property
    def total_build_weeks(self) -> int:
        """Weeks before the taper (base + build + peak)."""
        return self.base + self.build + self.peak

    def spans(self) -> dict[Phase, PhaseSpan]:
        spans: dict[Phase, PhaseSpan] = {}
        start = 1
        for phase, count in (
            (Phase.BASE, self.base),
            (Phase.BUILD, self.build),
            (Phase.PEAK, self.peak),
            (Phase.TAPER, self.taper),
        ):
            spans[phase] = PhaseSpan(start_week=start, end_week=start + count - 1)
            start += count
        return spans

    def to_dict(self) -> dict[str, Any]:
        payload: dict[str, Any] = {
            str(phase): {"startWeek": span.start_week, "endWeek": span.end_week, "weeks": span.weeks}
            for phase, span in self.spans().items()
        }
        payload["totalBuildWeeks"] = self.total_build_weeks
        return payload


# -----------------------------
# Weekly Targets
# -----------------------------
@dataclass(frozen=True)
class WeekMathEntry:
    """Numeric targets for one week.

    Invariant: long_run <= weekly_mileage.
    """

    week_number: int
    phase: Phase
    weekly_mileage: int
    long_run: int
    tempo_distance: int
    interval_distance: int
    hill_distance: int

    def to_dict(self) -> dict[str, Any]:
        return {
            "weekNumber": self.week_number,
            "phase": str(self.phase),
            "weeklyMileage": self.weekly_mileage,
            "longRun": self.long_run,
            "tempoDistance": self.tempo_distance,
            "intervalDistance": self.interval_distance,
            "hillDistance": self.hill_distance,
        }


@dataclass(frozen=True)
class ExperienceAdjustment:
    """Peak and long-run targets after experience scaling."""

    peak_mileage: int
    long_run_max: int
    experience_level: str
    warnings: tuple[str, ...] = ()


@dataclass(frozen=True)
class PlanTargets:
    """Race-level targets before and after experience scaling."""

    peak_weekly_mileage: int
    long_run_max: int
    base_peak_weekly_mileage: int
    base_long_run_max: int

    def to_dict(self) -> dict[str, Any]:
        return {
            "peakWeeklyMileage": self.peak_weekly_mileage,
            "longRunMax": self.long_run_max,
            "basePeakWeeklyMileage": self.base_peak_weekly_mileage,
            "baseLongRunMax": self.base_long_run_max,
        }


# -----------------------------
# Skeleton
# -----------------------------
@dataclass(frozen=True)
class PlanSkeleton:
    """Day-agnostic week-by-week plan produced by a race calculator."""

    race_distance: RaceDistance
    inputs: PlanInputs
    experience_level: str
    targets: PlanTargets
    phases: PhaseDistribution
    weeks: tuple[WeekMathEntry, ...]
    race_params: RaceParameters
    warnings: tuple[str, ...] = field(default_factory=tuple)

    def week(self, week_number: int) -> WeekMathEntry | None:
        for entry in self.weeks:
            if entry.week_number == week_number:
                return entry
        return None

    def to_dict(self) -> dict[str, Any]:
        """Serialize to the acyclic camelCase payload consumed by day assignment."""
        return {
            "raceDistance": str(self.race_distance),
            "inputs": self.inputs.to_dict(),
            "experienceLevel": self.experience_level,
            "targets": self.targets.to_dict(),
            "phases": self.phases.to_dict(),
            "weeks": [entry.to_dict() for entry in self.weeks],
            "raceParams": self.race_params.to_dict(),
            "warnings": list(self.warnings),
        }
