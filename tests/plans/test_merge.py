"""Tests for the plan merge engine."""

import pytest

from trainplan.planner.errors import StructuralError
from trainplan.plans.merge import preserve_and_merge_weeks
from trainplan.plans.types import RealizedWeek, TrainingPlan


@pytest.mark.parametrize("current_week", [1, 2, 5, 12, 13])
def test_merge_preserves_prefix(training_plan, make_week, current_week):
    """Test that weeks before current_week are kept exactly and new weeks follow."""
    new_weeks = [make_week(number, long_run=20.0) for number in range(current_week, 15)]

    merged = preserve_and_merge_weeks(training_plan, new_weeks, current_week)

    assert len(merged) == (current_week - 1) + len(new_weeks)
    for index in range(current_week - 1):
        assert merged[index] == training_plan.weeks[index]
    assert merged[current_week - 1 :] == new_weeks


def test_merge_copies_instead_of_sharing(training_plan, make_week):
    new_weeks = [make_week(5)]

    merged = preserve_and_merge_weeks(training_plan, new_weeks, 5)
    merged[0].workouts[1].name = "Changed"
    merged[4].workouts[1].name = "Changed"

    assert training_plan.weeks[0].workouts[1].name == "Tempo Run"
    assert new_weeks[0].workouts[1].name == "Tempo Run"


def test_merge_keeps_missing_weeks_as_none(make_week):
    plan = TrainingPlan(weeks=[make_week(1), None, make_week(3)])

    merged = preserve_and_merge_weeks(plan, [None], 4)

    assert merged[1] is None
    assert merged[3] is None
    assert len(merged) == 4


def test_merge_reads_legacy_weekly_plans(make_week):
    plan = TrainingPlan(weekly_plans=[make_week(1), make_week(2)])

    merged = preserve_and_merge_weeks(plan, [RealizedWeek(week=2)], 2)

    assert merged[0] == plan.weekly_plans[0]
    assert merged[1].workouts == []


def test_merge_without_week_list_raises():
    with pytest.raises(StructuralError):
        preserve_and_merge_weeks(TrainingPlan(), [], 1)
