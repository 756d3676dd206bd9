"""YAML-backed cross-training catalogues.

Each catalogue maps intensity buckets onto its own categories and lists
the workouts available in each category. Selection picks the workout
whose duration midpoint is closest to the requested minutes.
"""

import re
from pathlib import Path
from typing import Any

import yaml
from loguru import logger

from trainplan.workouts.cross_training.interface import CrossTrainingWorkout, EquipmentType, IntensityBucket

CATALOG_DIR = Path(__file__).parent / "catalogs"
DEFAULT_DURATION_MINUTES = 60.0

_DURATION_PATTERN = re.compile(r"(\d+)(?:\s*-\s*(\d+))?")


def parse_duration_midpoint(duration: str | None) -> float:
    """Midpoint of a duration range in minutes.

    "50-65 minutes" -> 57.5, "90 minutes" -> 90. Unparsable values fall
    back to one hour.
    """
    if not duration:
        return DEFAULT_DURATION_MINUTES
    match = _DURATION_PATTERN.search(duration)
    if not match:
        return DEFAULT_DURATION_MINUTES
    low = int(match.group(1))
    high = int(match.group(2)) if match.group(2) else low
    return (low + high) / 2


def _parse_workout(data: Any, category: str, source: Path) -> CrossTrainingWorkout:
    if not isinstance(data, dict):
        raise TypeError(f"Invalid workout entry in {source}: expected dict")
    for field_name in ("name", "duration", "description", "intensity"):
        if field_name not in data:
            raise ValueError(f"Missing required field '{field_name}' in {category} workout of {source}")
    return CrossTrainingWorkout(
        name=str(data["name"]),
        duration=str(data["duration"]),
        description=str(data["description"]),
        intensity=str(data["intensity"]),
        structure=data.get("structure"),
        benefits=data.get("benefits"),
        technique=data.get("technique"),
        effort=dict(data.get("effort") or {}),
        coaching_tips=data.get("coaching_tips"),
        category=category,
    )


class WorkoutCatalog:
    """Cross-training catalogue for one equipment type."""

    def __init__(
        self,
        equipment: EquipmentType,
        name: str,
        workouts: dict[str, list[CrossTrainingWorkout]],
        bucket_categories: dict[IntensityBucket, str],
        description: str = "",
        variants: dict[str, str] | None = None,
    ) -> None:
        self.equipment = equipment
        self.name = name
        self.description = description
        self.variants = dict(variants or {})
        self._workouts = workouts
        self._bucket_categories = bucket_categories

    @classmethod
    def from_yaml(cls, path: Path) -> "WorkoutCatalog":
        """Load a catalogue from a YAML file.

        Raises:
            FileNotFoundError: If the file doesn't exist
            ValueError: If a required field is missing or invalid
        """
        if not path.exists():
            raise FileNotFoundError(f"Workout catalogue not found: {path}")

        with path.open(encoding="utf-8") as f:
            data = yaml.safe_load(f)

        if not isinstance(data, dict):
            raise TypeError(f"Invalid catalogue format in {path}: expected dict")
        for field_name in ("equipment", "name", "bucket_categories", "workouts"):
            if field_name not in data:
                raise ValueError(f"Missing required field '{field_name}' in {path}")

        workouts = {
            str(category).upper(): [_parse_workout(entry, str(category).upper(), path) for entry in entries or []]
            for category, entries in data["workouts"].items()
        }
        bucket_categories = {
            IntensityBucket(str(bucket).upper()): str(category).upper()
            for bucket, category in data["bucket_categories"].items()
        }
        for bucket, category in bucket_categories.items():
            if category not in workouts:
                raise ValueError(f"Bucket {bucket} maps to unknown category '{category}' in {path}")

        return cls(
            equipment=EquipmentType(data["equipment"]),
            name=str(data["name"]),
            workouts=workouts,
            bucket_categories=bucket_categories,
            description=str(data.get("description", "")),
            variants=data.get("variants"),
        )

    @property
    def categories(self) -> list[str]:
        return list(self._workouts)

    def category_for_bucket(self, bucket: IntensityBucket | str) -> str | None:
        """Catalogue category that serves an intensity bucket, None if unsupported."""
        try:
            return self._bucket_categories.get(IntensityBucket(str(bucket).upper()))
        except ValueError:
            return None

    def get_workouts_by_type(self, workout_type: str) -> list[CrossTrainingWorkout]:
        """All workouts of a bucket or raw catalogue category."""
        key = str(workout_type).upper()
        category = self.category_for_bucket(key) or key
        return list(self._workouts.get(category, []))

    def get_workout_by_duration(self, bucket: IntensityBucket | str, minutes: float) -> CrossTrainingWorkout | None:
        """Workout of the bucket whose duration midpoint is closest to minutes.

        Ties go to the first listed workout. Returns None when the catalogue
        has nothing for the bucket.
        """
        workouts = self.get_workouts_by_type(str(bucket))
        if not workouts:
            logger.debug("No catalogue workouts for bucket", equipment=str(self.equipment), bucket=str(bucket))
            return None

        return min(workouts, key=lambda workout: abs(parse_duration_midpoint(workout.duration) - minutes))
