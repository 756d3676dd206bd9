"""Registry of cross-training content libraries keyed by equipment type."""

from collections.abc import Mapping
from functools import lru_cache

from trainplan.workouts.cross_training.catalog import CATALOG_DIR, WorkoutCatalog
from trainplan.workouts.cross_training.interface import ContentLibrary, EquipmentType

CATALOG_FILES: dict[EquipmentType, str] = {
    EquipmentType.POOL: "pool.yaml",
    EquipmentType.ELLIPTICAL: "elliptical.yaml",
    EquipmentType.STATIONARY_BIKE: "stationary_bike.yaml",
    EquipmentType.SWIMMING: "swimming.yaml",
    EquipmentType.ROWING: "rowing.yaml",
    EquipmentType.STAND_UP_BIKE: "stand_up_bike.yaml",
}


class ContentLibraryRegistry:
    """Resolves the content library serving an equipment type.

    Libraries are interchangeable; callers select one with the runtime
    equipment key and only use the ContentLibrary capability.
    """

    def __init__(self, libraries: Mapping[EquipmentType, ContentLibrary]) -> None:
        self._libraries = dict(libraries)

    def get(self, equipment: EquipmentType | str) -> ContentLibrary | None:
        try:
            return self._libraries.get(EquipmentType(equipment))
        except ValueError:
            return None

    def __contains__(self, equipment: object) -> bool:
        return equipment in self._libraries

    def equipment_types(self) -> list[EquipmentType]:
        return [equipment for equipment in EquipmentType if equipment in self._libraries]


def load_catalog(equipment: EquipmentType) -> WorkoutCatalog:
    """Load the bundled catalogue for one equipment type."""
    catalog = WorkoutCatalog.from_yaml(CATALOG_DIR / CATALOG_FILES[equipment])
    if catalog.equipment != equipment:
        raise ValueError(f"Catalogue {CATALOG_FILES[equipment]} declares {catalog.equipment}, expected {equipment}")
    return catalog


@lru_cache(maxsize=1)
def default_registry() -> ContentLibraryRegistry:
    """Registry backed by the bundled YAML catalogues."""
    return ContentLibraryRegistry({equipment: load_catalog(equipment) for equipment in EquipmentType})
