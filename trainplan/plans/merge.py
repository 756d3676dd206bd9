"""Plan merge engine.

Splits a realized plan at a week boundary and recombines the already
lived weeks with newly generated future weeks. General regeneration and
injury recovery both go through this function, so the past is never
rewritten by either.
"""

from loguru import logger

from trainplan.planner.errors import StructuralError
from trainplan.plans.types import RealizedWeek, TrainingPlan


def preserve_and_merge_weeks(
    existing_plan: TrainingPlan,
    new_weeks: list[RealizedWeek | None],
    current_week: int,
) -> list[RealizedWeek | None]:
    """Keep weeks before current_week and append the new weeks.

    The preserved prefix is copied, never inspected or modified, and the
    caller's lists are left untouched.

    Args:
        existing_plan: Plan whose history is preserved
        new_weeks: Weeks covering current_week onward
        current_week: 1-based first week to replace

    Returns:
        New list of (current_week - 1) preserved weeks followed by new_weeks

    Raises:
        StructuralError: If the plan has neither weeks nor weeklyPlans
    """
    existing_weeks = existing_plan.week_list()
    if existing_weeks is None:
        logger.error("Plan has no week list", current_week=current_week)
        raise StructuralError("Plan has neither 'weeks' nor 'weeklyPlans'; cannot merge regenerated weeks")

    preserved_count = max(0, current_week - 1)
    preserved = [week.model_copy(deep=True) if week is not None else None for week in existing_weeks[:preserved_count]]
    merged = preserved + [week.model_copy(deep=True) if week is not None else None for week in new_weeks]

    logger.debug(
        "Merged plan weeks",
        preserved_weeks=len(preserved),
        new_weeks=len(new_weeks),
        total_weeks=len(merged),
    )
    return merged
