"""Validation engine.

Read-only and advisory: validate_training_plan never raises and never
blocks anything itself. Callers decide whether a failing report blocks a
save, shows a warning, or is ignored.
"""

from collections.abc import Mapping
from typing import Any

from loguru import logger
from pydantic import ValidationError

from trainplan.config.settings import settings
from trainplan.plans.types import TrainingPlan, UserProfile
from trainplan.plans.validation.checks import (
    check_equivalent_distance,
    check_hard_days,
    check_long_run_distance,
    check_long_runs_present,
    check_rest_days,
    check_start_date,
    check_total_weeks,
    check_workouts_parsed,
)
from trainplan.plans.validation.types import ValidationReport


def _parse(
    plan: TrainingPlan | Mapping[str, Any],
    profile: UserProfile | Mapping[str, Any] | None,
) -> tuple[TrainingPlan, UserProfile] | list[str]:
    errors: list[str] = []
    parsed_plan: TrainingPlan | None = None
    parsed_profile: UserProfile | None = None
    try:
        parsed_plan = plan if isinstance(plan, TrainingPlan) else TrainingPlan.model_validate(plan)
    except ValidationError as e:
        errors.append(f"Plan is malformed: {e.error_count()} invalid field(s)")
    try:
        if isinstance(profile, UserProfile):
            parsed_profile = profile
        else:
            parsed_profile = UserProfile.model_validate(profile or {})
    except ValidationError as e:
        errors.append(f"User profile is malformed: {e.error_count()} invalid field(s)")
    if errors or parsed_plan is None or parsed_profile is None:
        return errors
    return parsed_plan, parsed_profile


def validate_training_plan(
    plan: TrainingPlan | Mapping[str, Any],
    user_profile: UserProfile | Mapping[str, Any] | None,
) -> ValidationReport:
    """Check a realized plan against its originating profile.

    Args:
        plan: Realized plan, as a model or a stored document
        user_profile: Profile the plan was generated from

    Returns:
        ValidationReport accumulating the errors of every check
    """
    parsed = _parse(plan, user_profile)
    if isinstance(parsed, list):
        logger.warning("Training plan validation failed", errors=parsed)
        return ValidationReport.from_errors(parsed)
    training_plan, profile = parsed

    weeks = training_plan.week_list()
    if not weeks:
        logger.warning("Training plan validation failed: plan has no weeks")
        return ValidationReport.from_errors(["Plan or weeks missing"])

    long_run_day = profile.long_run_day or settings.default_long_run_day
    errors: list[str] = []
    errors.extend(check_workouts_parsed(weeks))
    errors.extend(check_hard_days(weeks, profile.quality_days))
    errors.extend(check_rest_days(weeks, profile.rest_days))
    errors.extend(check_equivalent_distance(weeks))
    errors.extend(check_long_runs_present(weeks, long_run_day))
    errors.extend(check_long_run_distance(weeks))

    overview = training_plan.plan_overview
    if profile.start_date:
        errors.extend(check_start_date(overview, profile.start_date))
    if profile.race_date:
        start_date = profile.start_date or (overview.start_date if overview else None)
        errors.extend(check_total_weeks(overview, start_date, profile.race_date))

    report = ValidationReport.from_errors(errors)
    if report.valid:
        logger.info("All training plan validations passed", weeks=len(weeks))
    else:
        logger.warning("Training plan validation failed", error_count=len(errors))
        for error in errors:
            logger.debug("Validation error", error=error)
    return report
