"""Domain-specific errors for plan computation and regeneration.

Every fatal condition in the planner derives from PlannerError so callers
can catch the whole family at one seam. All of them abort the enclosing
operation before any result is returned.
"""


class PlannerError(Exception):
    """Base exception for all planning errors."""

    pass


class ConfigurationError(PlannerError):
    """Raised when mandatory inputs are missing or unusable.

    Attributes:
        missing_fields: Names of the absent inputs, empty for other misconfigurations
    """

    def __init__(self, message: str, missing_fields: list[str] | None = None) -> None:
        super().__init__(message)
        self.missing_fields = list(missing_fields or [])


class UnsupportedRaceError(PlannerError):
    """Raised when no parameter table exists for the requested race distance."""

    def __init__(self, race_distance: str, supported: list[str]) -> None:
        super().__init__(f"Unsupported race distance: {race_distance}. Supported distances: {', '.join(supported)}")
        self.race_distance = race_distance
        self.supported = list(supported)


class StructuralError(PlannerError):
    """Raised when a plan lacks an expected week-list field."""

    pass


class PlanCorruptionError(PlannerError):
    """Raised when a required week cannot be realized from the plan or its snapshot."""

    pass
