"""Race parameter tables.

One YAML file per race distance lives beside this module. The tables are
plain data: every race distance runs through the same calculator, so
supporting a new distance means adding a file here.
"""

from functools import lru_cache
from pathlib import Path

import yaml

from trainplan.planner.enums import QualityWorkout, RaceDistance
from trainplan.planner.models import RaceParameters, WorkoutBounds

RACE_PARAMS_DIR = Path(__file__).parent

_REQUIRED_FIELDS = (
    "race_distance",
    "distance_miles",
    "peak_weekly_mileage_cap",
    "long_run_max",
    "long_run_floor",
    "long_run_percentage",
    "minimum_long_run_target",
    "workout_percentages",
    "workout_bounds",
)


def _parse_race_parameters(data: object, source: Path) -> RaceParameters:
    if not isinstance(data, dict):
        raise TypeError(f"Invalid race parameter format in {source}: expected dict")

    for field_name in _REQUIRED_FIELDS:
        if field_name not in data:
            raise ValueError(f"Missing required field '{field_name}' in {source}")

    percentages = data["workout_percentages"]
    bounds = data["workout_bounds"]
    if not isinstance(percentages, dict) or not isinstance(bounds, dict):
        raise TypeError(f"Invalid workout tables in {source}")

    workout_percentages: dict[QualityWorkout, float] = {}
    workout_bounds: dict[QualityWorkout, WorkoutBounds] = {}
    for kind in QualityWorkout:
        if kind.value not in percentages or kind.value not in bounds:
            raise ValueError(f"Missing '{kind.value}' workout entry in {source}")
        workout_percentages[kind] = float(percentages[kind.value])
        kind_bounds = bounds[kind.value]
        workout_bounds[kind] = WorkoutBounds(min=int(kind_bounds["min"]), max=int(kind_bounds["max"]))
        if workout_bounds[kind].min > workout_bounds[kind].max:
            raise ValueError(f"Invalid '{kind.value}' bounds in {source}: min exceeds max")

    return RaceParameters(
        race_distance=RaceDistance(data["race_distance"]),
        distance_miles=float(data["distance_miles"]),
        peak_weekly_mileage_cap=int(data["peak_weekly_mileage_cap"]),
        long_run_max=int(data["long_run_max"]),
        long_run_floor=int(data["long_run_floor"]),
        long_run_percentage=float(data["long_run_percentage"]),
        minimum_long_run_target=int(data["minimum_long_run_target"]),
        workout_percentages=workout_percentages,
        workout_bounds=workout_bounds,
    )


def load_race_parameters_file(path: Path) -> RaceParameters:
    """Load a single race parameter table.

    Args:
        path: YAML file path

    Returns:
        Parsed RaceParameters

    Raises:
        FileNotFoundError: If the file doesn't exist
        ValueError: If a required field is missing or invalid
    """
    if not path.exists():
        raise FileNotFoundError(f"Race parameter table not found: {path}")

    with path.open(encoding="utf-8") as f:
        data = yaml.safe_load(f)

    return _parse_race_parameters(data, path)


@lru_cache(maxsize=1)
def load_race_parameters() -> dict[RaceDistance, RaceParameters]:
    """Load every race parameter table in this directory, keyed by race distance."""
    tables: dict[RaceDistance, RaceParameters] = {}
    for path in sorted(RACE_PARAMS_DIR.glob("*.yaml")):
        params = load_race_parameters_file(path)
        if params.race_distance in tables:
            raise ValueError(f"Duplicate race parameter table for {params.race_distance} in {path}")
        tables[params.race_distance] = params
    return tables


__all__ = [
    "RACE_PARAMS_DIR",
    "load_race_parameters",
    "load_race_parameters_file",
]
