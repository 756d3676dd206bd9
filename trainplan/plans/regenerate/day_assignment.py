"""Day-assignment collaborator.

Placing a week's numeric targets onto calendar days happens outside this
package. Regeneration only awaits it to realize a week that the plan
does not already hold.
"""

from typing import Protocol

from trainplan.planner.models import WeekMathEntry
from trainplan.plans.types import RealizedWeek, UserProfile


class DayAssigner(Protocol):
    """Turns one week of numeric targets into day-level workouts."""

    async def __call__(self, entry: WeekMathEntry, profile: UserProfile) -> RealizedWeek | None: ...


def is_realized(week: RealizedWeek | None) -> bool:
    """Whether a week exists and holds at least one day entry."""
    return week is not None and len(week.workouts) > 0
