"""Plan regeneration: general re-planning and injury recovery."""

from trainplan.plans.regenerate.day_assignment import DayAssigner
from trainplan.plans.regenerate.injury_recovery import InjuryRecoveryRegenerator, regenerate_plan_with_injury
from trainplan.plans.regenerate.regeneration import regenerate_plan_from_week
from trainplan.plans.regenerate.types import InjuryRecoveryRequest, RegenerationRequest, WeekState

__all__ = [
    "DayAssigner",
    "InjuryRecoveryRegenerator",
    "InjuryRecoveryRequest",
    "RegenerationRequest",
    "WeekState",
    "regenerate_plan_from_week",
    "regenerate_plan_with_injury",
]
