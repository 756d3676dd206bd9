"""Domain types for plan regeneration.

Regeneration rewrites the future weeks of a realized plan from a week
boundary onward, without touching the weeks already lived.
"""

from enum import StrEnum

from pydantic import BaseModel, Field

from trainplan.plans.types import EquipmentSelection, TrainingPlan, UserProfile


class WeekState(StrEnum):
    """Role of a week in an injury recovery regeneration."""

    COMPLETED = "completed"
    INJURY = "injury"
    RETURN = "return"
    POST_RECOVERY = "post_recovery"


class RegenerationRequest(BaseModel):
    """Request to regenerate a plan from a week onward.

    Attributes:
        existing_plan: Plan to regenerate
        updated_profile: Profile carrying the new plan inputs and day preferences
        current_week: 1-based first week to regenerate
        reduce_training_days: Workouts to drop per week (missed-day reduction)
    """

    existing_plan: TrainingPlan
    updated_profile: UserProfile
    current_week: int
    reduce_training_days: int = Field(default=0, ge=0, le=2)


class InjuryRecoveryRequest(BaseModel):
    """Request to rewrite a plan around an injury.

    Attributes:
        existing_plan: Plan to modify
        updated_profile: Profile with day preferences and plan inputs
        current_week: 1-based first injury week
        weeks_off_running: Weeks with no running before the return week
        selected_equipment: Cross-training equipment available to the runner
        reduce_training_days: Workouts to drop per injury/return week
    """

    existing_plan: TrainingPlan
    updated_profile: UserProfile
    current_week: int
    weeks_off_running: int = Field(ge=1)
    selected_equipment: EquipmentSelection
    reduce_training_days: int = Field(default=0, ge=0, le=2)

    @property
    def injury_start_week(self) -> int:
        return self.current_week

    @property
    def injury_end_week(self) -> int:
        return self.current_week + self.weeks_off_running - 1

    @property
    def return_week(self) -> int:
        return self.current_week + self.weeks_off_running
