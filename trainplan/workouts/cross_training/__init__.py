"""Cross-training content libraries."""

from trainplan.workouts.cross_training.catalog import WorkoutCatalog, parse_duration_midpoint
from trainplan.workouts.cross_training.interface import (
    EQUIPMENT_DISPLAY_NAMES,
    ContentLibrary,
    CrossTrainingWorkout,
    EquipmentType,
    IntensityBucket,
)
from trainplan.workouts.cross_training.registry import ContentLibraryRegistry, default_registry

__all__ = [
    "EQUIPMENT_DISPLAY_NAMES",
    "ContentLibrary",
    "ContentLibraryRegistry",
    "CrossTrainingWorkout",
    "EquipmentType",
    "IntensityBucket",
    "WorkoutCatalog",
    "default_registry",
    "parse_duration_midpoint",
]
