"""Tests for race-agnostic periodization math.

These tests verify that:
- Phase counts always sum to the plan length with at least one taper week
- Week 1 reproduces current fitness and no week exceeds its cap
- Cutback weeks interrupt, but do not reverse, the build trend
- The taper steps down toward race day
- Experience multipliers scale targets and respect reachability
"""

import pytest

from trainplan.planner.base_math import (
    AGGRESSIVE_LONG_RUN_GROWTH,
    EXPERIENCE_MULTIPLIERS,
    apply_experience_adjustments,
    calculate_phase_distribution,
    calculate_weekly_growth_rate,
    calculate_weekly_long_run,
    calculate_weekly_mileage,
    get_phase_for_week,
    round_half_up,
)
from trainplan.planner.enums import ExperienceLevel, Phase
from trainplan.planner.errors import ConfigurationError


def test_round_half_up_rounds_halves_up():
    """Test that halves always round up instead of to the nearest even number."""
    assert round_half_up(2.5) == 3
    assert round_half_up(3.5) == 4
    assert round_half_up(2.49) == 2
    assert round_half_up(0.0) == 0


@pytest.mark.parametrize("total_weeks", range(4, 31))
def test_phase_distribution_sums_to_total_weeks(total_weeks):
    """Test that phase counts are non-negative and sum to the plan length."""
    phases = calculate_phase_distribution(total_weeks)

    assert phases.base >= 0
    assert phases.build >= 0
    assert phases.peak >= 0
    assert phases.taper >= 1
    assert phases.base + phases.build + phases.peak + phases.taper == total_weeks
    assert phases.total_weeks == total_weeks


def test_phase_distribution_known_lengths():
    """Test the split for a short and a medium plan."""
    twelve = calculate_phase_distribution(12)
    assert (twelve.base, twelve.build, twelve.peak, twelve.taper) == (3, 5, 2, 2)

    twenty = calculate_phase_distribution(20)
    assert (twenty.base, twenty.build, twenty.peak, twenty.taper) == (5, 9, 3, 3)


def test_phase_distribution_single_week_is_all_taper():
    phases = calculate_phase_distribution(1)
    assert phases.taper == 1
    assert phases.total_build_weeks == 0


@pytest.mark.parametrize("total_weeks", [0, -3])
def test_phase_distribution_rejects_empty_plans(total_weeks):
    """Test that plans without weeks raise ConfigurationError."""
    with pytest.raises(ConfigurationError):
        calculate_phase_distribution(total_weeks)


def test_phase_spans_are_contiguous():
    phases = calculate_phase_distribution(16)
    spans = phases.spans()

    assert spans[Phase.BASE].start_week == 1
    assert spans[Phase.BUILD].start_week == spans[Phase.BASE].end_week + 1
    assert spans[Phase.PEAK].start_week == spans[Phase.BUILD].end_week + 1
    assert spans[Phase.TAPER].start_week == spans[Phase.PEAK].end_week + 1
    assert spans[Phase.TAPER].end_week == 16


def test_phase_distribution_to_dict_includes_total_build_weeks():
    payload = calculate_phase_distribution(12).to_dict()

    assert payload["base"] == {"startWeek": 1, "endWeek": 3, "weeks": 3}
    assert payload["taper"] == {"startWeek": 11, "endWeek": 12, "weeks": 2}
    assert payload["totalBuildWeeks"] == 10


def test_get_phase_for_week():
    phases = calculate_phase_distribution(12)

    assert get_phase_for_week(1, phases) == Phase.BASE
    assert get_phase_for_week(4, phases) == Phase.BUILD
    assert get_phase_for_week(9, phases) == Phase.PEAK
    assert get_phase_for_week(11, phases) == Phase.TAPER
    assert get_phase_for_week(13, phases) == Phase.TAPER


def test_weekly_growth_rate_interpolates_between_limits():
    """Test that shorter plans grow faster than longer plans."""
    assert calculate_weekly_growth_rate(8) == pytest.approx(0.10)
    assert calculate_weekly_growth_rate(12) == pytest.approx(0.10)
    assert calculate_weekly_growth_rate(20) == pytest.approx(0.07)
    assert calculate_weekly_growth_rate(28) == pytest.approx(0.04)
    assert calculate_weekly_growth_rate(40) == pytest.approx(0.04)


@pytest.mark.parametrize("total_weeks", [8, 12, 16, 20, 24])
def test_weekly_mileage_starts_at_current_and_respects_peak(total_weeks):
    current, peak = 20, 45

    mileage = [calculate_weekly_mileage(week, current, peak, total_weeks) for week in range(1, total_weeks + 1)]

    assert mileage[0] == current
    assert max(mileage) <= peak


@pytest.mark.parametrize("total_weeks", [12, 16, 20, 24])
def test_weekly_mileage_trend_is_non_decreasing_outside_cutbacks(total_weeks):
    """Test that non-cutback build weeks never drop below an earlier non-cutback week."""
    build_weeks = calculate_phase_distribution(total_weeks).total_build_weeks
    trend = [
        calculate_weekly_mileage(week, 20, 50, total_weeks)
        for week in range(1, build_weeks + 1)
        if week % 3 != 0
    ]

    assert trend == sorted(trend)


def test_cutback_weeks_reduce_mileage():
    """Test that every third week sits below its neighbours' trend."""
    week_5 = calculate_weekly_mileage(5, 20, 50, 16)
    week_6 = calculate_weekly_mileage(6, 20, 50, 16)
    week_7 = calculate_weekly_mileage(7, 20, 50, 16)

    assert week_6 < week_5
    assert week_6 < week_7


def test_taper_mileage_steps_down():
    total_weeks = 20
    build_weeks = calculate_phase_distribution(total_weeks).total_build_weeks
    taper = [calculate_weekly_mileage(week, 30, 50, total_weeks) for week in range(build_weeks + 1, total_weeks + 1)]

    assert taper == sorted(taper, reverse=True)
    assert taper[0] < 50
    assert taper[-1] >= round_half_up(50 * 0.4)


@pytest.mark.parametrize("total_weeks", [8, 12, 16, 20])
def test_weekly_long_run_starts_at_current_and_respects_cap(total_weeks):
    long_runs = [calculate_weekly_long_run(week, 8, 15, total_weeks) for week in range(1, total_weeks + 1)]

    assert long_runs[0] == 8
    assert max(long_runs) <= 15


def test_weekly_long_run_taper_is_decreasing():
    total_weeks = 20
    build_weeks = calculate_phase_distribution(total_weeks).total_build_weeks
    taper = [calculate_weekly_long_run(week, 10, 20, total_weeks) for week in range(build_weeks + 1, total_weeks + 1)]

    assert taper == [13, 10, 7]


def test_experience_multipliers_cover_every_level():
    assert set(EXPERIENCE_MULTIPLIERS) == set(ExperienceLevel)
    assert EXPERIENCE_MULTIPLIERS[ExperienceLevel.INTERMEDIATE].peak == 1.0


def test_experience_adjustments_scale_targets():
    """Test that beginners are scaled down and elite runners up."""
    beginner = apply_experience_adjustments(40, 15, "beginner", 12)
    assert beginner.peak_mileage == 32
    assert beginner.long_run_max == 14
    assert beginner.experience_level == "beginner"

    elite = apply_experience_adjustments(40, 15, "Elite", 12)
    assert elite.peak_mileage == 50
    assert elite.long_run_max == 17
    assert elite.warnings == ()


def test_unknown_experience_level_uses_intermediate():
    adjustment = apply_experience_adjustments(40, 15, "professional", 12)

    assert adjustment.experience_level == "intermediate"
    assert adjustment.peak_mileage == 40
    assert adjustment.long_run_max == 15


def test_experience_adjustments_raise_long_run_to_floor():
    """Test that a long run below the race floor is raised when no limit is known."""
    adjustment = apply_experience_adjustments(30, 8, "intermediate", 12)

    assert adjustment.long_run_max == 12
    assert adjustment.warnings == ()


def test_experience_adjustments_limit_raise_to_reachable_long_run():
    """Test that the raise stops at what the build can reach and warns."""
    adjustment = apply_experience_adjustments(
        30,
        8,
        "intermediate",
        12,
        current_long_run=6,
        total_build_weeks=4,
    )

    assert adjustment.long_run_max == int(6 + 4 * AGGRESSIVE_LONG_RUN_GROWTH)
    assert len(adjustment.warnings) == 1
    assert "below the recommended 12 miles" in adjustment.warnings[0]
