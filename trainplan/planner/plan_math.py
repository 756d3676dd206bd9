"""Plan math orchestrator.

Routes a request to the race calculator for its distance. Mandatory
numeric inputs are never defaulted: a request missing any of them fails
with a ConfigurationError naming every absent field.
"""

from collections.abc import Mapping
from typing import Any

from loguru import logger

from trainplan.config.settings import settings
from trainplan.planner.enums import RaceDistance
from trainplan.planner.errors import ConfigurationError, UnsupportedRaceError
from trainplan.planner.models import PlanInputs, PlanSkeleton, RaceParameters
from trainplan.planner.race_calculator import RaceCalculator
from trainplan.planner.race_params import load_race_parameters

RACE_DISTANCE_ALIASES: dict[str, RaceDistance] = {
    "5k": RaceDistance.FIVE_K,
    "5km": RaceDistance.FIVE_K,
    "10k": RaceDistance.TEN_K,
    "10km": RaceDistance.TEN_K,
    "half": RaceDistance.HALF_MARATHON,
    "half marathon": RaceDistance.HALF_MARATHON,
    "half-marathon": RaceDistance.HALF_MARATHON,
    "half_marathon": RaceDistance.HALF_MARATHON,
    "halfmarathon": RaceDistance.HALF_MARATHON,
    "marathon": RaceDistance.MARATHON,
    "full": RaceDistance.MARATHON,
    "full marathon": RaceDistance.MARATHON,
}

# (snake_case, camelCase) key pairs accepted for each mandatory input
REQUIRED_INPUTS: tuple[tuple[str, str], ...] = (
    ("current_weekly_mileage", "currentWeeklyMileage"),
    ("current_long_run", "currentLongRun"),
    ("total_weeks", "totalWeeks"),
    ("race_distance", "raceDistance"),
)


def get_available_races() -> list[str]:
    """Canonical names of every race distance with a parameter table."""
    return [str(distance) for distance in sorted(load_race_parameters(), key=list(RaceDistance).index)]


def normalize_race_distance(race_distance: str | RaceDistance) -> RaceDistance:
    """Map a race distance or one of its aliases to the canonical name.

    Raises:
        UnsupportedRaceError: If the distance has no parameter table
    """
    key = str(race_distance).strip().lower()
    distance = RACE_DISTANCE_ALIASES.get(key)
    if distance is None or distance not in load_race_parameters():
        logger.error("Unsupported race distance", race_distance=race_distance)
        raise UnsupportedRaceError(str(race_distance), get_available_races())
    return distance


def get_race_params(race_distance: str | RaceDistance) -> RaceParameters:
    """Parameter table for a race distance, aliases accepted."""
    return load_race_parameters()[normalize_race_distance(race_distance)]


def _read_input(inputs: Mapping[str, Any], snake: str, camel: str) -> Any:
    value = inputs.get(snake)
    if value is None:
        value = inputs.get(camel)
    if isinstance(value, str) and not value.strip():
        return None
    return value


def _coerce_int(value: Any, field_name: str) -> int:
    try:
        return int(value)
    except (TypeError, ValueError) as e:
        logger.error("Non-numeric plan input", field=field_name, value=value)
        raise ConfigurationError(f"{field_name} must be numeric, got {value!r}") from e


def build_plan_inputs(inputs: Mapping[str, Any]) -> PlanInputs:
    """Validate a raw request and convert it into PlanInputs.

    Accepts snake_case or camelCase keys.

    Raises:
        ConfigurationError: If any mandatory input is missing or non-numeric
        UnsupportedRaceError: If the race distance is unknown
    """
    missing = [camel for snake, camel in REQUIRED_INPUTS if _read_input(inputs, snake, camel) is None]
    if missing:
        logger.error("Missing required plan inputs", missing_fields=missing)
        raise ConfigurationError(f"Missing required plan inputs: {', '.join(missing)}", missing_fields=missing)

    race_distance = normalize_race_distance(_read_input(inputs, "race_distance", "raceDistance"))
    experience_level = _read_input(inputs, "experience_level", "experienceLevel") or settings.default_experience_level

    return PlanInputs(
        current_weekly_mileage=_coerce_int(
            _read_input(inputs, "current_weekly_mileage", "currentWeeklyMileage"), "currentWeeklyMileage"
        ),
        current_long_run=_coerce_int(_read_input(inputs, "current_long_run", "currentLongRun"), "currentLongRun"),
        total_weeks=_coerce_int(_read_input(inputs, "total_weeks", "totalWeeks"), "totalWeeks"),
        race_distance=race_distance,
        experience_level=str(experience_level),
    )


def calculate_plan_math(inputs: Mapping[str, Any] | PlanInputs) -> PlanSkeleton:
    """Compute the plan skeleton for a request.

    Args:
        inputs: Raw request mapping or already validated PlanInputs

    Returns:
        PlanSkeleton from the matching race calculator, unchanged

    Raises:
        ConfigurationError: If mandatory inputs are missing or total weeks < 1
        UnsupportedRaceError: If the race distance is unknown
    """
    plan_inputs = inputs if isinstance(inputs, PlanInputs) else build_plan_inputs(inputs)
    calculator = RaceCalculator(get_race_params(plan_inputs.race_distance))
    skeleton = calculator.generate_plan(plan_inputs)

    logger.info(
        "Plan math calculated",
        race_distance=str(skeleton.race_distance),
        total_weeks=plan_inputs.total_weeks,
        experience_level=skeleton.experience_level,
        peak_weekly_mileage=skeleton.targets.peak_weekly_mileage,
        long_run_max=skeleton.targets.long_run_max,
        base_weeks=skeleton.phases.base,
        build_weeks=skeleton.phases.build,
        peak_weeks=skeleton.phases.peak,
        taper_weeks=skeleton.phases.taper,
        warnings=len(skeleton.warnings),
    )
    logger.debug(
        "Long run progression",
        long_runs=[entry.long_run for entry in skeleton.weeks],
    )
    return skeleton
