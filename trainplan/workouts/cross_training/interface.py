"""Cross-training content library interface.

Content libraries are opaque providers: the planner only chooses an
intensity bucket and a duration, and the library decides what workout
fits. Every equipment type is served through the same capability.
"""

from dataclasses import dataclass, field
from enum import StrEnum
from typing import Any, Protocol


class EquipmentType(StrEnum):
    """Cross-training equipment, in selection order."""

    POOL = "pool"
    ELLIPTICAL = "elliptical"
    STATIONARY_BIKE = "stationaryBike"
    SWIMMING = "swimming"
    ROWING = "rowing"
    STAND_UP_BIKE = "standUpBike"


class IntensityBucket(StrEnum):
    """Intensity category a running workout maps onto."""

    EASY = "EASY"
    TEMPO = "TEMPO"
    INTERVALS = "INTERVALS"
    LONG = "LONG"
    HILLS = "HILLS"
    RECOVERY = "RECOVERY"


EQUIPMENT_DISPLAY_NAMES: dict[EquipmentType, str] = {
    EquipmentType.POOL: "Aqua Running",
    EquipmentType.ELLIPTICAL: "Elliptical",
    EquipmentType.STATIONARY_BIKE: "Stationary Bike",
    EquipmentType.SWIMMING: "Swimming",
    EquipmentType.ROWING: "Rowing",
    EquipmentType.STAND_UP_BIKE: "Stand-Up Bike",
}


@dataclass(frozen=True)
class CrossTrainingWorkout:
    """One catalogue workout.

    Attributes:
        name: Workout name
        duration: Duration range as written in the catalogue (e.g. "45-60 minutes")
        description: Short description
        intensity: Intensity label
        structure: Optional session structure
        benefits: Optional benefits summary
        technique: Optional technique cues
        effort: Optional effort guidance
        coaching_tips: Optional coaching tips
        category: Catalogue category the workout was found in
    """

    name: str
    duration: str
    description: str
    intensity: str
    structure: str | None = None
    benefits: str | None = None
    technique: str | None = None
    effort: dict[str, str] = field(default_factory=dict)
    coaching_tips: str | None = None
    category: str | None = None

    def to_dict(self) -> dict[str, Any]:
        payload: dict[str, Any] = {
            "name": self.name,
            "duration": self.duration,
            "description": self.description,
            "intensity": self.intensity,
        }
        optional = {
            "structure": self.structure,
            "benefits": self.benefits,
            "technique": self.technique,
            "effort": self.effort or None,
            "coachingTips": self.coaching_tips,
            "category": self.category,
        }
        payload.update({key: value for key, value in optional.items() if value is not None})
        return payload


class ContentLibrary(Protocol):
    """Capability every cross-training content provider exposes."""

    def get_workout_by_duration(self, bucket: IntensityBucket | str, minutes: float) -> CrossTrainingWorkout | None:
        """Workout of the given bucket closest to the requested duration, or None."""
        ...
