"""Race-agnostic periodization primitives.

These functions turn a plan length and a pair of (current, target) values
into a week-by-week progression. They carry no race-specific knowledge;
race calculators supply caps and floors.

Rules:
- Week 1 reproduces the supplied current value
- No week exceeds the supplied cap
- Every third pre-taper week is a reduced cutback week
- The taper steps down monotonically to the race
"""

import math
from dataclasses import dataclass

from loguru import logger

from trainplan.planner.enums import ExperienceLevel, Phase
from trainplan.planner.errors import ConfigurationError
from trainplan.planner.models import ExperienceAdjustment, PhaseDistribution

CUTBACK_INTERVAL = 3
CUTBACK_MILEAGE_FACTOR = 0.9
CUTBACK_LONG_RUN_DROP = 2.0
CUTBACK_LONG_RUN_FACTOR = 0.85

TAPER_MILEAGE_STEP = 0.2
TAPER_MILEAGE_FLOOR = 0.4
TAPER_LONG_RUN_FACTORS = (0.65, 0.5, 0.35)

SHORT_PLAN_WEEKS = 12
LONG_PLAN_WEEKS = 28
MAX_GROWTH_RATE = 0.10
MIN_GROWTH_RATE = 0.04

AGGRESSIVE_LONG_RUN_GROWTH = 0.75


@dataclass(frozen=True)
class ExperienceMultiplier:
    peak: float
    long_run: float


EXPERIENCE_MULTIPLIERS: dict[ExperienceLevel, ExperienceMultiplier] = {
    ExperienceLevel.BEGINNER: ExperienceMultiplier(peak=0.80, long_run=0.95),
    ExperienceLevel.INTERMEDIATE: ExperienceMultiplier(peak=1.00, long_run=1.00),
    ExperienceLevel.ADVANCED: ExperienceMultiplier(peak=1.15, long_run=1.10),
    ExperienceLevel.ELITE: ExperienceMultiplier(peak=1.25, long_run=1.15),
}


def round_half_up(value: float) -> int:
    """Round to the nearest integer with halves rounding up (2.5 -> 3)."""
    return math.floor(value + 0.5)


def _taper_weeks(total_weeks: int) -> int:
    default = 3 if total_weeks >= 20 else 2
    return max(1, min(default, total_weeks - 1))


def _phase_percentages(total_weeks: int) -> tuple[float, float, float]:
    if total_weeks <= 14:
        return 0.25, 0.55, 0.20
    if total_weeks >= 24:
        return 0.35, 0.45, 0.20
    return 0.30, 0.50, 0.20


def calculate_phase_distribution(total_weeks: int) -> PhaseDistribution:
    """Split a plan into base, build, peak and taper week counts.

    Args:
        total_weeks: Plan length in weeks

    Returns:
        PhaseDistribution whose counts sum to total_weeks with taper >= 1

    Raises:
        ConfigurationError: If total_weeks < 1
    """
    if total_weeks < 1:
        logger.error("Invalid plan length", total_weeks=total_weeks)
        raise ConfigurationError(f"total_weeks must be at least 1, got {total_weeks}")

    taper = _taper_weeks(total_weeks)
    training_weeks = total_weeks - taper
    base_pct, _build_pct, peak_pct = _phase_percentages(total_weeks)

    base = round_half_up(training_weeks * base_pct)
    peak = round_half_up(training_weeks * peak_pct)
    build = training_weeks - base - peak

    return PhaseDistribution(base=base, build=build, peak=peak, taper=taper)


def calculate_weekly_growth_rate(total_weeks: int) -> float:
    """Per-cycle growth rate, smaller for longer plans.

    Plans of 12 weeks or less grow at 10%, plans of 28 weeks or more at 4%,
    with linear interpolation in between.
    """
    if total_weeks <= SHORT_PLAN_WEEKS:
        return MAX_GROWTH_RATE
    if total_weeks >= LONG_PLAN_WEEKS:
        return MIN_GROWTH_RATE
    progress = (total_weeks - SHORT_PLAN_WEEKS) / (LONG_PLAN_WEEKS - SHORT_PLAN_WEEKS)
    return MAX_GROWTH_RATE - (MAX_GROWTH_RATE - MIN_GROWTH_RATE) * progress


def _build_progress(week: int, build_weeks: int) -> float:
    if build_weeks <= 1:
        return 0.0
    return min(1.0, max(0.0, (week - 1) / (build_weeks - 1)))


def _is_cutback_week(week: int) -> bool:
    return (week - 1) % CUTBACK_INTERVAL == CUTBACK_INTERVAL - 1


def calculate_weekly_mileage(week: int, current: float, peak: float, total_weeks: int) -> int:
    """Weekly mileage for a given week.

    Args:
        week: 1-based week number
        current: Current weekly mileage (week 1 value)
        peak: Peak weekly mileage, also the cap for every week
        total_weeks: Plan length in weeks

    Returns:
        Weekly mileage in whole miles
    """
    phases = calculate_phase_distribution(total_weeks)
    build_weeks = phases.total_build_weeks

    if week > build_weeks:
        taper_week = week - build_weeks
        factor = max(1 - TAPER_MILEAGE_STEP * taper_week, TAPER_MILEAGE_FLOOR)
        return min(round_half_up(peak * factor), round_half_up(peak))

    linear = current + (peak - current) * _build_progress(week, build_weeks)
    if _is_cutback_week(week):
        linear *= CUTBACK_MILEAGE_FACTOR
    return min(round_half_up(linear), round_half_up(peak))


def calculate_weekly_long_run(week: int, current: float, cap: float, total_weeks: int) -> int:
    """Long run distance for a given week.

    Args:
        week: 1-based week number
        current: Current long run (week 1 value)
        cap: Long run maximum, never exceeded
        total_weeks: Plan length in weeks

    Returns:
        Long run in whole miles
    """
    phases = calculate_phase_distribution(total_weeks)
    build_weeks = phases.total_build_weeks

    if week > build_weeks:
        taper_index = min(week - build_weeks, len(TAPER_LONG_RUN_FACTORS)) - 1
        return round_half_up(cap * TAPER_LONG_RUN_FACTORS[taper_index])

    linear = current + (cap - current) * _build_progress(week, build_weeks)
    if _is_cutback_week(week):
        linear = max(linear - CUTBACK_LONG_RUN_DROP, linear * CUTBACK_LONG_RUN_FACTOR)
    return min(round_half_up(linear), round_half_up(cap))


def get_phase_for_week(week: int, phases: PhaseDistribution) -> Phase:
    """Phase name for a 1-based week. Weeks past the plan belong to the taper."""
    for phase, span in phases.spans().items():
        if span.contains(week):
            return phase
    if week < 1:
        return Phase.BASE
    return Phase.TAPER


def _resolve_experience_level(experience_level: str | None) -> ExperienceLevel:
    try:
        return ExperienceLevel((experience_level or ExperienceLevel.INTERMEDIATE).strip().lower())
    except ValueError:
        logger.warning(
            "Unknown experience level, using intermediate multipliers",
            experience_level=experience_level,
        )
        return ExperienceLevel.INTERMEDIATE


def apply_experience_adjustments(
    peak_mileage: float,
    long_run_max: float,
    experience_level: str | None,
    long_run_floor: float,
    current_long_run: float | None = None,
    total_build_weeks: int | None = None,
) -> ExperienceAdjustment:
    """Scale race targets by experience level.

    Beginners get lower targets, advanced and elite runners higher ceilings.
    The long run is raised toward long_run_floor. When the current long run
    and the build length are known, it is raised only as far as the build
    can safely reach, and a warning is recorded if that stays below the floor.

    Args:
        peak_mileage: Race-level peak weekly mileage
        long_run_max: Race-level long run maximum
        experience_level: Experience level name, unknown values map to intermediate
        long_run_floor: Long run the plan should reach
        current_long_run: Current long run, enables the reachability check
        total_build_weeks: Weeks before the taper, enables the reachability check

    Returns:
        ExperienceAdjustment with adjusted targets and any warnings
    """
    level = _resolve_experience_level(experience_level)
    multiplier = EXPERIENCE_MULTIPLIERS[level]

    adjusted_peak = round_half_up(peak_mileage * multiplier.peak)
    adjusted_long_run = round_half_up(long_run_max * multiplier.long_run)
    warnings: list[str] = []

    if adjusted_long_run < long_run_floor:
        if current_long_run is not None and total_build_weeks:
            reachable = math.floor(current_long_run + total_build_weeks * AGGRESSIVE_LONG_RUN_GROWTH)
            raised = min(round_half_up(long_run_floor), max(adjusted_long_run, reachable))
        else:
            raised = round_half_up(long_run_floor)

        if raised < long_run_floor:
            message = (
                f"Long run target of {raised} miles is below the recommended {long_run_floor:g} miles; "
                "the plan is too short to build there safely"
            )
            logger.warning(
                "Long run floor unreachable",
                long_run=raised,
                long_run_floor=long_run_floor,
                experience_level=str(level),
            )
            warnings.append(message)
        adjusted_long_run = raised

    logger.debug(
        "Experience adjustments applied",
        experience_level=str(level),
        peak_mileage=adjusted_peak,
        long_run_max=adjusted_long_run,
    )
    return ExperienceAdjustment(
        peak_mileage=adjusted_peak,
        long_run_max=adjusted_long_run,
        experience_level=str(level),
        warnings=tuple(warnings),
    )
