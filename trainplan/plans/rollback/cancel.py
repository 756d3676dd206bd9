"""Cancel an injury recovery protocol."""

from loguru import logger

from trainplan.plans.rollback.versions import PlanVersion, PlanVersionArena
from trainplan.plans.types import TrainingPlan


def cancel_injury_recovery(plan: TrainingPlan) -> TrainingPlan:
    """Restore the plan captured when injury recovery started.

    Cancelling when no recovery is active returns the plan unchanged.

    Args:
        plan: Plan with injury recovery active

    Returns:
        Plan with the pre-injury weeks and overview and no recovery metadata

    Raises:
        PlanCorruptionError: If recovery is active but its snapshot is missing
    """
    if not plan.injury_recovery_active:
        logger.warning("No active injury recovery to cancel")
        return plan

    info = plan.injury_recovery_info
    restored = PlanVersionArena(plan).restore(
        PlanVersion.PRE_INJURY_SNAPSHOT,
        injury_recovery_active=False,
        injury_recovery_info=None,
        original_plan_before_injury=None,
    )

    logger.info(
        "Injury recovery cancelled",
        start_week=info.start_week if info else None,
        return_week=info.return_week if info else None,
        restored_weeks=len(restored.week_list() or []),
    )
    return restored
