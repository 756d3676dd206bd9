"""Root conftest for all tests.

Shared builders for realized plans, user profiles and a fake
day-assignment collaborator.
"""

from collections.abc import Callable

import pytest

from trainplan.planner.models import WeekMathEntry
from trainplan.plans.types import PlanOverview, RealizedWeek, TrainingPlan, UserProfile, Workout

PLAN_START_DATE = "2025-01-06"
PLAN_RACE_DATE = "2025-03-30"
PLAN_WEEKS = 12


def build_week(week_number: int, long_run: float = 10.0, final: bool = False) -> RealizedWeek:
    """Monday-to-Sunday week: two rest days, tempo, interval, two easy runs, long run or race."""
    if final:
        sunday = Workout(day="Sunday", type="race", name="Race Day", description="Half marathon race day", distance=13.1)
    else:
        sunday = Workout(
            day="Sunday",
            type="longRun",
            name="Long Run",
            description="Long run at conversational pace",
            distance=long_run,
            pace="easy",
        )
    workouts = [
        Workout(day="Monday", type="rest", name="Rest Day", description="Full rest"),
        Workout(day="Tuesday", type="tempo", name="Tempo Run", description="Tempo effort", distance=5.0, pace="7:30"),
        Workout(day="Wednesday", type="easy", name="Easy Run", description="Easy aerobic run", distance=4.0),
        Workout(day="Thursday", type="interval", name="Track Intervals", description="6 x 800m", distance=5.0),
        Workout(day="Friday", type="rest", name="Rest Day", description="Full rest"),
        Workout(day="Saturday", type="easy", name="Easy Run", description="Easy shakeout", distance=3.0),
        sunday,
    ]
    total = sum(workout.distance or 0.0 for workout in workouts)
    return RealizedWeek(week=week_number, phase="build", total_mileage=total, workouts=workouts)


def build_plan(total_weeks: int = PLAN_WEEKS) -> TrainingPlan:
    weeks: list[RealizedWeek | None] = [
        build_week(number, long_run=8.0 + number * 0.5, final=number == total_weeks)
        for number in range(1, total_weeks + 1)
    ]
    return TrainingPlan(
        weeks=weeks,
        plan_overview=PlanOverview(
            start_date=PLAN_START_DATE,
            total_weeks=total_weeks,
            race_date=PLAN_RACE_DATE,
            race_distance="Half Marathon",
        ),
    )


class FakeDayAssigner:
    """Records requested weeks and realizes them from the numeric targets."""

    def __init__(self, fail_weeks: set[int] | None = None) -> None:
        self.calls: list[int] = []
        self.fail_weeks = fail_weeks or set()

    async def __call__(self, entry: WeekMathEntry, profile: UserProfile) -> RealizedWeek | None:
        self.calls.append(entry.week_number)
        if entry.week_number in self.fail_weeks:
            return None
        workouts = [
            Workout(day="Monday", type="rest", name="Rest Day"),
            Workout(day="Tuesday", type="tempo", name="Tempo Run", distance=entry.tempo_distance),
            Workout(day="Wednesday", type="easy", name="Easy Run", distance=4.0),
            Workout(day="Thursday", type="interval", name="Intervals", distance=entry.interval_distance),
            Workout(day="Friday", type="rest", name="Rest Day"),
            Workout(day="Saturday", type="easy", name="Easy Run", distance=3.0),
            Workout(day=profile.long_run_day or "Sunday", type="longRun", name="Long Run", distance=entry.long_run),
        ]
        return RealizedWeek(
            week=entry.week_number,
            phase=str(entry.phase),
            total_mileage=float(entry.weekly_mileage),
            workouts=workouts,
        )


@pytest.fixture
def make_week() -> Callable[..., RealizedWeek]:
    return build_week


@pytest.fixture
def training_plan() -> TrainingPlan:
    """Twelve-week realized half marathon plan starting Monday 2025-01-06."""
    return build_plan()


@pytest.fixture
def user_profile() -> UserProfile:
    return UserProfile(
        quality_days=["Tuesday", "Thursday"],
        rest_days=["Monday", "Friday"],
        long_run_day="Sunday",
        start_date=PLAN_START_DATE,
        race_date=PLAN_RACE_DATE,
        current_weekly_mileage=25,
        current_long_run=8,
        race_distance="Half Marathon",
        experience_level="intermediate",
    )


@pytest.fixture
def fake_day_assigner() -> FakeDayAssigner:
    return FakeDayAssigner()


@pytest.fixture
def day_assigner_factory() -> type[FakeDayAssigner]:
    return FakeDayAssigner
