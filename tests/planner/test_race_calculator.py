"""Tests for the race calculator and its parameter tables."""

import pytest

from trainplan.planner.enums import QualityWorkout, RaceDistance
from trainplan.planner.errors import ConfigurationError
from trainplan.planner.models import PlanInputs
from trainplan.planner.race_calculator import RaceCalculator
from trainplan.planner.race_params import load_race_parameters, load_race_parameters_file

RACES = list(RaceDistance)


def _calculator(race: RaceDistance) -> RaceCalculator:
    return RaceCalculator(load_race_parameters()[race])


def test_every_race_distance_has_a_table():
    tables = load_race_parameters()

    assert set(tables) == set(RaceDistance)
    for race, params in tables.items():
        assert params.race_distance == race
        assert set(params.workout_bounds) == set(QualityWorkout)
        assert params.long_run_floor <= params.long_run_max


def test_race_table_file_missing_field(tmp_path):
    """Test that a table without a required field is rejected."""
    path = tmp_path / "broken.yaml"
    path.write_text('race_distance: "5K"\ndistance_miles: 3.1\n', encoding="utf-8")

    with pytest.raises(ValueError, match="peak_weekly_mileage_cap"):
        load_race_parameters_file(path)


def test_race_table_file_not_found(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_race_parameters_file(tmp_path / "missing.yaml")


@pytest.mark.parametrize("race", RACES)
@pytest.mark.parametrize("total_weeks", [8, 12, 16, 24])
def test_peak_mileage_is_monotone_and_capped(race, total_weeks):
    """Test that more current mileage never lowers the peak, and the cap holds."""
    calculator = _calculator(race)
    peaks = [calculator.calculate_peak_mileage(current, total_weeks) for current in range(5, 121, 5)]

    assert peaks == sorted(peaks)
    assert max(peaks) <= calculator.params.peak_weekly_mileage_cap


@pytest.mark.parametrize("race", RACES)
@pytest.mark.parametrize("workout_type", list(QualityWorkout))
def test_workout_distance_stays_within_bounds(race, workout_type):
    calculator = _calculator(race)
    bounds = calculator.params.workout_bounds[workout_type]

    for mileage in [0, 0.5, *range(5, 151, 5)]:
        distance = calculator.calculate_workout_distance(mileage, workout_type)
        assert bounds.min <= distance <= bounds.max


def test_workout_distance_accepts_plain_strings():
    calculator = _calculator(RaceDistance.HALF_MARATHON)

    assert calculator.calculate_workout_distance(40, "tempo") == calculator.calculate_workout_distance(
        40, QualityWorkout.TEMPO
    )


def test_workout_distance_rejects_unknown_type():
    calculator = _calculator(RaceDistance.TEN_K)

    with pytest.raises(ConfigurationError, match="fartlek"):
        calculator.calculate_workout_distance(30, "fartlek")


def test_generate_plan_half_marathon():
    """Test the skeleton of a 16-week half marathon plan from 25 miles per week."""
    calculator = _calculator(RaceDistance.HALF_MARATHON)
    skeleton = calculator.generate_plan(
        PlanInputs(
            current_weekly_mileage=25,
            current_long_run=8,
            total_weeks=16,
            race_distance=RaceDistance.HALF_MARATHON,
        )
    )

    assert len(skeleton.weeks) == 16
    assert [entry.week_number for entry in skeleton.weeks] == list(range(1, 17))
    assert skeleton.weeks[0].weekly_mileage == 25
    assert skeleton.weeks[0].long_run == 8
    assert skeleton.targets.peak_weekly_mileage == 48
    assert skeleton.targets.long_run_max == 15
    assert skeleton.warnings == ()
    assert max(entry.weekly_mileage for entry in skeleton.weeks) <= skeleton.targets.peak_weekly_mileage
    assert max(entry.long_run for entry in skeleton.weeks) <= skeleton.targets.long_run_max


def test_generate_plan_caps_excess_current_mileage():
    """Test that the race cap wins when current mileage already exceeds it."""
    calculator = _calculator(RaceDistance.FIVE_K)
    skeleton = calculator.generate_plan(
        PlanInputs(
            current_weekly_mileage=100,
            current_long_run=10,
            total_weeks=12,
            race_distance=RaceDistance.FIVE_K,
        )
    )

    assert skeleton.targets.peak_weekly_mileage == 45
    assert skeleton.weeks[0].weekly_mileage == 45
    assert all(entry.weekly_mileage <= 45 for entry in skeleton.weeks)
    assert all(entry.long_run <= 12 for entry in skeleton.weeks)


@pytest.mark.parametrize("race", RACES)
@pytest.mark.parametrize(("mileage", "long_run", "total_weeks"), [(10, 3, 8), (25, 8, 12), (40, 14, 18), (60, 18, 24)])
def test_long_run_never_exceeds_weekly_mileage(race, mileage, long_run, total_weeks):
    skeleton = _calculator(race).generate_plan(
        PlanInputs(
            current_weekly_mileage=mileage,
            current_long_run=long_run,
            total_weeks=total_weeks,
            race_distance=race,
        )
    )

    for entry in skeleton.weeks:
        assert entry.long_run <= entry.weekly_mileage


def test_short_marathon_plan_warns_instead_of_failing():
    """Test that an unreachable long run target produces warnings and a usable plan."""
    skeleton = _calculator(RaceDistance.MARATHON).generate_plan(
        PlanInputs(
            current_weekly_mileage=20,
            current_long_run=6,
            total_weeks=8,
            race_distance=RaceDistance.MARATHON,
        )
    )

    assert len(skeleton.weeks) == 8
    assert any("miles of growth per week" in warning for warning in skeleton.warnings)
    assert skeleton.targets.long_run_max < load_race_parameters()[RaceDistance.MARATHON].minimum_long_run_target


def test_experience_level_raises_targets():
    calculator = _calculator(RaceDistance.MARATHON)
    base = PlanInputs(
        current_weekly_mileage=40,
        current_long_run=14,
        total_weeks=18,
        race_distance=RaceDistance.MARATHON,
    )
    advanced = PlanInputs(
        current_weekly_mileage=40,
        current_long_run=14,
        total_weeks=18,
        race_distance=RaceDistance.MARATHON,
        experience_level="advanced",
    )

    intermediate_plan = calculator.generate_plan(base)
    advanced_plan = calculator.generate_plan(advanced)

    assert advanced_plan.experience_level == "advanced"
    assert advanced_plan.targets.peak_weekly_mileage > intermediate_plan.targets.peak_weekly_mileage
    assert advanced_plan.targets.base_peak_weekly_mileage == intermediate_plan.targets.base_peak_weekly_mileage
