"""Tests for the plan validation engine.

These tests verify that:
- A well-formed plan passes every check
- Structured workout types win over keyword text
- Each check reports the week and day it failed on
- The engine reports instead of raising
"""

import pytest

from trainplan.plans.types import PlanOverview, RealizedWeek, TrainingPlan, Workout
from trainplan.plans.validation import ValidationReport, validate_training_plan


def _replace_workout(plan: TrainingPlan, week_index: int, day_index: int, workout: Workout) -> TrainingPlan:
    weeks = [week.model_copy(deep=True) for week in plan.weeks]
    weeks[week_index].workouts[day_index] = workout
    return plan.with_weeks(weeks)


def test_valid_plan_passes(training_plan, user_profile):
    report = validate_training_plan(training_plan, user_profile)

    assert report == ValidationReport(valid=True, errors=[])


def test_accepts_stored_documents(training_plan, user_profile):
    report = validate_training_plan(training_plan.to_document(), user_profile.to_document())

    assert report.valid


def test_sandwich_tempo_on_hard_day_passes(training_plan, user_profile):
    """Test that a typed tempo with easy segments is not flagged as an easy day."""
    sandwich = Workout(
        day="Tuesday",
        type="tempo",
        name="Sandwich Tempo",
        description="2 miles easy, 3 miles at tempo, 2 miles easy",
        distance=7.0,
    )
    plan = _replace_workout(training_plan, 0, 1, sandwich)

    report = validate_training_plan(plan, user_profile)

    assert report.valid
    assert not any("hard day" in error for error in report.errors)


def test_easy_run_on_hard_day_fails(training_plan, user_profile):
    easy = Workout(day="Tuesday", type="easy", name="Easy Run", description="Easy aerobic run", distance=4.0)
    plan = _replace_workout(training_plan, 1, 1, easy)

    report = validate_training_plan(plan, user_profile)

    assert not report.valid
    assert report.errors == ["Week 2: Tuesday is a hard day but has Easy aerobic run"]


@pytest.mark.parametrize(
    ("workout_type", "label"),
    [
        ("longRun", "Long run on a quality day"),
        ("cross-training", "Elliptical session"),
        ("race", "Tune-up race"),
    ],
)
def test_non_quality_type_on_hard_day_fails(training_plan, user_profile, workout_type, label):
    """Test that only tempo, interval or hill types satisfy a hard day."""
    workout = Workout(day="Tuesday", type=workout_type, name=label, description=label, distance=6.0)
    plan = _replace_workout(training_plan, 0, 1, workout)

    report = validate_training_plan(plan, user_profile)

    assert f"Week 1: Tuesday is a hard day but has {label}" in report.errors


def test_untyped_entries_fall_back_to_text(training_plan, user_profile):
    untyped_easy = Workout(day="Thursday", name="Easy Run", description="Easy recovery jog", distance=3.0)
    untyped_hill = Workout(day="Tuesday", name="Hill Repeats", description="Easy warmup then 8 x hill", distance=5.0)
    plan = _replace_workout(training_plan, 0, 3, untyped_easy)
    plan = _replace_workout(plan, 0, 1, untyped_hill)

    report = validate_training_plan(plan, user_profile)

    assert report.errors == ["Week 1: Thursday is a hard day but has Easy recovery jog"]


def test_hard_workout_on_rest_day_fails(training_plan, user_profile):
    tempo = Workout(day="Friday", type="tempo", name="Tempo Run", description="Tempo effort", distance=5.0)
    plan = _replace_workout(training_plan, 2, 4, tempo)

    report = validate_training_plan(plan, user_profile)

    assert report.errors == ["Week 3: Friday is a rest day but has hard workout: Tempo effort"]


def test_final_week_without_race_day(training_plan, user_profile):
    """Test that the last week must hold the race."""
    long_run = Workout(day="Sunday", type="longRun", name="Long Run", description="Long run", distance=8.0)
    plan = _replace_workout(training_plan, 11, 6, long_run)

    report = validate_training_plan(plan, user_profile)

    assert not report.valid
    assert "Week 12: Final week missing race day workout" in report.errors


def test_missing_long_run(training_plan, user_profile):
    easy = Workout(day="Sunday", type="easy", name="Easy Run", description="Easy aerobic run", distance=5.0)
    plan = _replace_workout(training_plan, 2, 6, easy)

    report = validate_training_plan(plan, user_profile)

    assert report.errors == ["Week 3: Missing long run on Sunday"]


def test_long_run_day_from_profile(training_plan, user_profile):
    profile = user_profile.model_copy(update={"long_run_day": "Saturday"})
    untyped = Workout(day="Sunday", name="Easy Run", description="Easy jog", distance=10.0)
    plan = _replace_workout(training_plan, 0, 6, untyped)

    report = validate_training_plan(plan, profile)

    assert "Week 1: Missing long run on Saturday" in report.errors


def test_typed_long_run_on_another_day_passes(training_plan, user_profile):
    saturday = Workout(day="Saturday", type="longRun", name="Long Run", description="Long run", distance=10.0)
    sunday = Workout(day="Sunday", type="easy", name="Easy Run", description="Easy shakeout", distance=3.0)
    plan = _replace_workout(training_plan, 0, 5, saturday)
    plan = _replace_workout(plan, 0, 6, sunday)

    report = validate_training_plan(plan, user_profile)

    assert report.valid


def test_long_run_with_duration_only(training_plan, user_profile):
    duration_only = Workout(day="Sunday", type="longRun", name="Long Run", description="Long run 90-120 minutes")
    plan = _replace_workout(training_plan, 3, 6, duration_only)

    report = validate_training_plan(plan, user_profile)

    assert report.errors == [
        "Week 4: Sunday long run shows duration instead of distance: Long run 90-120 minutes",
        "Week 4: Sunday long run missing distance property",
    ]


@pytest.mark.parametrize(
    ("description", "flagged"),
    [
        ("Ride 10 miles at an easy effort", True),
        ("Ride 10 RunEQ miles at an easy effort", False),
        ("45 minutes steady", False),
    ],
)
def test_bike_distance_uses_run_equivalent(training_plan, user_profile, description, flagged):
    ride = Workout(
        day="Wednesday",
        type="cross-training",
        cross_training_type="cyclete",
        name="Easy Ride",
        description=description,
    )
    plan = _replace_workout(training_plan, 0, 2, ride)

    report = validate_training_plan(plan, user_profile)

    assert (not report.valid) is flagged
    assert any("RunEQ" in error for error in report.errors) is flagged


def test_week_without_workouts(training_plan, user_profile):
    weeks = list(training_plan.weeks)
    weeks[1] = RealizedWeek(week=2, workouts=[])
    plan = training_plan.with_weeks(weeks)

    report = validate_training_plan(plan, user_profile)

    assert "Week 2 has 0 workouts - parsing may have failed" in report.errors


def test_start_date_mismatch(training_plan, user_profile):
    profile = user_profile.model_copy(update={"start_date": "2025-01-13"})

    report = validate_training_plan(training_plan, profile)

    assert "Week 1 start date mismatch: expected 2025-01-13, got 2025-01-06" in report.errors


def test_total_weeks_mismatch(training_plan, user_profile):
    profile = user_profile.model_copy(update={"race_date": "2025-04-13"})

    report = validate_training_plan(training_plan, profile)

    assert report.errors == ["Total weeks mismatch: expected 14, got 12"]


def test_missing_overview(training_plan, user_profile):
    plan = training_plan.model_copy(update={"plan_overview": PlanOverview()})

    report = validate_training_plan(plan, user_profile)

    assert "Plan overview missing startDate" in report.errors
    assert "Plan overview missing totalWeeks" in report.errors


def test_plan_without_weeks(user_profile):
    report = validate_training_plan(TrainingPlan(), user_profile)

    assert report == ValidationReport(valid=False, errors=["Plan or weeks missing"])


def test_malformed_documents_are_reported():
    """Test that the engine reports malformed input instead of raising."""
    report = validate_training_plan({"weeks": "not a list"}, {"restDays": 7})

    assert not report.valid
    assert report.errors[0].startswith("Plan is malformed")
    assert report.errors[1].startswith("User profile is malformed")


def test_missing_profile_uses_defaults(training_plan):
    report = validate_training_plan(training_plan, None)

    assert report.valid
