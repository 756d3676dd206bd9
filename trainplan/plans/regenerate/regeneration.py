"""General plan regeneration.

Recomputes the plan skeleton from the updated profile, realizes every
week from the current week onward through the day-assignment
collaborator, and merges the result behind the preserved history.
"""

from loguru import logger

from trainplan.planner.errors import ConfigurationError, PlanCorruptionError
from trainplan.planner.plan_math import calculate_plan_math
from trainplan.plans.merge import preserve_and_merge_weeks
from trainplan.plans.regenerate.day_assignment import DayAssigner, is_realized
from trainplan.plans.regenerate.types import RegenerationRequest
from trainplan.plans.regenerate.workout_priority import reduce_week_workouts
from trainplan.plans.types import RealizedWeek, TrainingPlan


def _plan_length(plan: TrainingPlan) -> int:
    if plan.plan_overview is not None and plan.plan_overview.total_weeks:
        return plan.plan_overview.total_weeks
    return len(plan.week_list() or [])


async def regenerate_plan_from_week(request: RegenerationRequest, day_assigner: DayAssigner) -> TrainingPlan:
    """Regenerate a plan from request.current_week onward.

    Args:
        request: Regeneration request
        day_assigner: Collaborator that realizes a week of numeric targets

    Returns:
        New plan with preserved history and regenerated future weeks. Any
        injury recovery metadata is cleared because its weeks are replaced.

    Raises:
        ConfigurationError: If current_week < 1 or profile inputs are missing
        UnsupportedRaceError: If the profile's race distance is unknown
        StructuralError: If the plan has no week list
        PlanCorruptionError: If the day assigner cannot realize a week
    """
    plan = request.existing_plan
    current_week = request.current_week
    if current_week < 1:
        logger.error("Invalid current week", current_week=current_week)
        raise ConfigurationError(f"current_week must be at least 1, got {current_week}")

    # Fails with StructuralError before any collaborator is called
    preserve_and_merge_weeks(plan, [], current_week)

    total_weeks = _plan_length(plan)
    skeleton = calculate_plan_math(request.updated_profile.plan_inputs(total_weeks))

    logger.info(
        "Regenerating plan",
        current_week=current_week,
        total_weeks=total_weeks,
        reduce_training_days=request.reduce_training_days,
    )

    new_weeks: list[RealizedWeek | None] = []
    for entry in skeleton.weeks:
        if entry.week_number < current_week:
            continue
        week = await day_assigner(entry, request.updated_profile)
        if not is_realized(week):
            logger.error("Day assignment returned no workouts", week=entry.week_number)
            raise PlanCorruptionError(f"Failed to generate workouts for week {entry.week_number}")
        if request.reduce_training_days > 0:
            week = week.model_copy(
                update={"workouts": reduce_week_workouts(week.workouts, request.reduce_training_days)},
                deep=True,
            )
        new_weeks.append(week)

    merged = preserve_and_merge_weeks(plan, new_weeks, current_week)
    logger.info("Plan regenerated", total_weeks=len(merged), regenerated_weeks=len(new_weeks))
    return plan.with_weeks(
        merged,
        injury_recovery_active=False,
        injury_recovery_info=None,
        original_plan_before_injury=None,
    )
