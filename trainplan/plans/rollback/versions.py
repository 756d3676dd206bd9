"""Named plan versions.

A plan carries at most two versions of its weeks: the current one and
the snapshot captured when injury recovery started. Undo restores a
named version wholesale instead of reversing individual edits.
"""

from enum import StrEnum
from typing import Any

from loguru import logger

from trainplan.planner.errors import PlanCorruptionError
from trainplan.plans.types import PlanSnapshot, TrainingPlan


class PlanVersion(StrEnum):
    CURRENT = "current"
    PRE_INJURY_SNAPSHOT = "preInjurySnapshot"


def capture_snapshot(plan: TrainingPlan) -> PlanSnapshot:
    """Deep copy of a plan's weeks and overview."""
    weeks = plan.week_list() or []
    return PlanSnapshot(
        weeks=[week.model_copy(deep=True) if week is not None else None for week in weeks],
        plan_overview=plan.plan_overview.model_copy(deep=True) if plan.plan_overview is not None else None,
    )


class PlanVersionArena:
    """Read and restore the named versions attached to one plan."""

    def __init__(self, plan: TrainingPlan) -> None:
        self._plan = plan

    def get(self, version: PlanVersion) -> PlanSnapshot | None:
        if version == PlanVersion.CURRENT:
            return capture_snapshot(self._plan)
        snapshot = self._plan.original_plan_before_injury
        return snapshot.model_copy(deep=True) if snapshot is not None else None

    def has(self, version: PlanVersion) -> bool:
        return version == PlanVersion.CURRENT or self._plan.original_plan_before_injury is not None

    def pre_injury_snapshot(self) -> PlanSnapshot:
        """Snapshot to attach when injury recovery is activated.

        An already active recovery keeps its original snapshot, so undo
        always returns to the plan as it was before the first activation.
        """
        if self._plan.injury_recovery_active:
            existing = self.get(PlanVersion.PRE_INJURY_SNAPSHOT)
            if existing is not None:
                return existing
        return capture_snapshot(self._plan)

    def restore(self, version: PlanVersion, **updates: Any) -> TrainingPlan:
        """Copy of the plan with weeks and overview taken from a named version.

        Raises:
            PlanCorruptionError: If the version does not exist
        """
        snapshot = self.get(version)
        if snapshot is None:
            logger.error("Plan version not found", version=str(version))
            raise PlanCorruptionError(f"Cannot restore plan: version '{version}' not found")
        return self._plan.with_weeks(snapshot.weeks, plan_overview=snapshot.plan_overview, **updates)
