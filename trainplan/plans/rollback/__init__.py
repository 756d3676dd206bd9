"""Plan version snapshots and undo."""

from trainplan.plans.rollback.cancel import cancel_injury_recovery
from trainplan.plans.rollback.versions import PlanVersion, PlanVersionArena, capture_snapshot

__all__ = ["PlanVersion", "PlanVersionArena", "cancel_injury_recovery", "capture_snapshot"]
