"""Individual plan checks.

Each check takes already parsed weeks and returns a list of error
messages; an empty list means the check passed. The structured workout
type is trusted over keyword text, and text is only consulted for
entries without a type.
"""

import re

from trainplan.planner.enums import WorkoutType
from trainplan.plans.calendar import expected_total_weeks, parse_plan_date
from trainplan.plans.types import PlanOverview, RealizedWeek, Workout

HARD_KEYWORDS = ("tempo", "interval", "hill", "speed")
RUN_EQUIVALENT_LABEL = "RunEQ"
BIKE_LABELS = ("standupbike", "cyclete", "elliptigo", "stationarybike", "bike")

_LITERAL_MILES = re.compile(r"\d+(?:\.\d+)?\s*(?:miles?|mi)\b", re.IGNORECASE)
_DURATION_RANGE = re.compile(r"\d+\s*-\s*\d+\s*(?:minutes?|min)\b", re.IGNORECASE)


def _text(workout: Workout) -> str:
    return f"{workout.name or ''} {workout.description or ''}".lower()


def _label(workout: Workout) -> str:
    return workout.description or workout.name or workout.type or "an unnamed workout"


def _same_day(day: str | None, days: set[str]) -> bool:
    return day is not None and day.strip().lower() in days


def _has_hard_keyword(text: str) -> bool:
    return any(keyword in text for keyword in HARD_KEYWORDS)


def _week_label(week: RealizedWeek | None, index: int) -> int:
    return week.week if week is not None else index + 1


def check_workouts_parsed(weeks: list[RealizedWeek | None]) -> list[str]:
    """Every week holds at least one workout."""
    return [
        f"Week {_week_label(week, index)} has 0 workouts - parsing may have failed"
        for index, week in enumerate(weeks)
        if week is None or not week.workouts
    ]


def check_hard_days(weeks: list[RealizedWeek | None], quality_days: list[str]) -> list[str]:
    """Quality days must carry a tempo, interval or hill workout.

    A typed entry fails unless its type is one of those, so a tempo named
    "Sandwich Tempo" with easy segments passes while a long run or a
    cross-training session does not. An untyped entry fails when its text
    reads as rest or easy without any hard keyword.
    """
    days = {day.strip().lower() for day in quality_days}
    if not days:
        return []

    errors: list[str] = []
    for week in weeks:
        if week is None:
            continue
        for workout in week.workouts:
            if not _same_day(workout.day, days):
                continue
            if workout.type is not None:
                failed = not workout.is_hard
            else:
                text = _text(workout)
                failed = not _has_hard_keyword(text) and ("rest" in text or "easy" in text)
            if failed:
                errors.append(f"Week {week.week}: {workout.day} is a hard day but has {_label(workout)}")
    return errors


def check_rest_days(weeks: list[RealizedWeek | None], rest_days: list[str]) -> list[str]:
    """Rest days must not carry hard workouts."""
    days = {day.strip().lower() for day in rest_days}
    if not days:
        return []

    errors: list[str] = []
    for week in weeks:
        if week is None:
            continue
        for workout in week.workouts:
            if not _same_day(workout.day, days) or workout.is_rest:
                continue
            text = _text(workout)
            if workout.type is None and "rest" in text:
                continue
            if workout.is_hard or _has_hard_keyword(text):
                errors.append(f"Week {week.week}: {workout.day} is a rest day but has hard workout: {_label(workout)}")
    return errors


def _is_bike_workout(workout: Workout) -> bool:
    labels = f"{workout.cross_training_type or ''} {_text(workout)}".replace("-", "").replace(" ", "").lower()
    return any(label in labels for label in BIKE_LABELS)


def check_equivalent_distance(weeks: list[RealizedWeek | None]) -> list[str]:
    """Bike cross-training distances stay in RunEQ miles, never literal miles."""
    errors: list[str] = []
    for week in weeks:
        if week is None:
            continue
        for workout in week.workouts:
            if workout.type != WorkoutType.CROSS_TRAINING or not _is_bike_workout(workout):
                continue
            description = workout.description or ""
            if _LITERAL_MILES.search(description) and RUN_EQUIVALENT_LABEL.lower() not in description.lower():
                errors.append(
                    f"Week {week.week}: {workout.day} bike workout shows actual miles instead of "
                    f"{RUN_EQUIVALENT_LABEL}: {description}"
                )
    return errors


def _is_race_day(workout: Workout) -> bool:
    return (
        workout.type == WorkoutType.RACE
        or "race" in (workout.name or "").lower()
        or "race day" in (workout.description or "").lower()
    )


def _is_long_run(workout: Workout, long_run_day: str) -> bool:
    if workout.type == WorkoutType.LONG_RUN:
        return True
    return _same_day(workout.day, {long_run_day.strip().lower()}) and "long run" in _text(workout)


def check_long_runs_present(weeks: list[RealizedWeek | None], long_run_day: str) -> list[str]:
    """Every week but the last has a long run; the last has the race."""
    errors: list[str] = []
    for index, week in enumerate(weeks):
        if week is None:
            continue
        if index == len(weeks) - 1:
            if not any(_is_race_day(workout) for workout in week.workouts):
                errors.append(f"Week {week.week}: Final week missing race day workout")
            continue
        if not any(_is_long_run(workout, long_run_day) for workout in week.workouts):
            errors.append(f"Week {week.week}: Missing long run on {long_run_day}")
    return errors


def check_long_run_distance(weeks: list[RealizedWeek | None]) -> list[str]:
    """Long runs carry a positive numeric distance, not only a duration."""
    errors: list[str] = []
    for week in weeks:
        if week is None:
            continue
        for workout in week.workouts:
            is_long_run = workout.type == WorkoutType.LONG_RUN or (
                workout.type is None and "long run" in _text(workout)
            )
            if not is_long_run:
                continue
            description = workout.description or ""
            if _DURATION_RANGE.search(description) and not _LITERAL_MILES.search(description):
                errors.append(
                    f"Week {week.week}: {workout.day} long run shows duration instead of distance: {description}"
                )
            if not workout.distance or workout.distance <= 0:
                errors.append(f"Week {week.week}: {workout.day} long run missing distance property")
    return errors


def check_start_date(overview: PlanOverview | None, expected_start_date: str) -> list[str]:
    """Plan start date matches the requested start date."""
    if overview is None or not overview.start_date:
        return ["Plan overview missing startDate"]

    actual = parse_plan_date(overview.start_date)
    expected = parse_plan_date(expected_start_date)
    if actual is not None and expected is not None:
        matches = actual == expected
    else:
        matches = overview.start_date == expected_start_date
    if not matches:
        return [f"Week 1 start date mismatch: expected {expected_start_date}, got {overview.start_date}"]
    return []


def check_total_weeks(overview: PlanOverview | None, start_date: str | None, race_date: str) -> list[str]:
    """Plan length equals ceil((race date - start date) / 7 days)."""
    if overview is None or not overview.total_weeks:
        return ["Plan overview missing totalWeeks"]

    expected = expected_total_weeks(start_date, race_date) if start_date else None
    if expected is None:
        return [f"Cannot determine expected total weeks from start date {start_date} and race date {race_date}"]
    if overview.total_weeks != expected:
        return [f"Total weeks mismatch: expected {expected}, got {overview.total_weeks}"]
    return []
