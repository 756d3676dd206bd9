"""Workout ranking and day reduction.

When a week has to carry fewer workouts, the most important sessions
survive: long run first, then tempo, interval, hill, easy and recovery.
Entries of any other type rank last. Ties keep their calendar order.
"""

from dataclasses import dataclass

from trainplan.planner.enums import WorkoutType
from trainplan.plans.types import Workout

WORKOUT_PRIORITY: dict[str, int] = {
    WorkoutType.LONG_RUN: 0,
    WorkoutType.TEMPO: 1,
    WorkoutType.INTERVAL: 2,
    WorkoutType.HILL: 3,
    WorkoutType.EASY: 4,
    WorkoutType.RECOVERY: 5,
}
UNRANKED_PRIORITY = 999

# Day-entry keys that describe the calendar slot, not the workout
CALENDAR_EXTRA_KEYS = ("fullDate", "dateString")


@dataclass(frozen=True)
class RetainedWorkout:
    """A workout kept after reduction.

    Attributes:
        position: Index of the entry in the week's day list
        rank: 0-based position in priority order among retained workouts
        workout: The original entry
    """

    position: int
    rank: int
    workout: Workout


def workout_priority(workout: Workout) -> int:
    return WORKOUT_PRIORITY.get(workout.type or "", UNRANKED_PRIORITY)


def select_retained_workouts(workouts: list[Workout], reduce_training_days: int) -> list[RetainedWorkout]:
    """Rank a week's non-rest entries and keep the top max(1, actual - reduce).

    Args:
        workouts: The week's day entries
        reduce_training_days: Number of workouts to drop

    Returns:
        Retained workouts in priority order. Empty when the week has no
        non-rest entry.
    """
    actual = [(position, workout) for position, workout in enumerate(workouts) if not workout.is_rest]
    if not actual:
        return []

    target_count = max(1, len(actual) - reduce_training_days)
    ranked = sorted(actual, key=lambda item: workout_priority(item[1]))
    return [
        RetainedWorkout(position=position, rank=rank, workout=workout)
        for rank, (position, workout) in enumerate(ranked[:target_count])
    ]


def calendar_fields(workout: Workout) -> dict[str, object]:
    """Day and date fields to carry over when an entry is replaced."""
    fields: dict[str, object] = {"day": workout.day, "date": workout.date}
    for key in CALENDAR_EXTRA_KEYS:
        if workout.model_extra and key in workout.model_extra:
            fields[key] = workout.model_extra[key]
    return fields


def make_rest_day(workout: Workout, description: str = "Recovery day - focus on healing") -> Workout:
    """Rest entry occupying the same calendar slot as workout."""
    return Workout(
        **calendar_fields(workout),
        type=WorkoutType.REST,
        name="Rest Day",
        description=description,
    )


def reduce_week_workouts(workouts: list[Workout], reduce_training_days: int) -> list[Workout]:
    """Turn the lowest-priority workouts of a week into rest days.

    Retained entries are returned unchanged; existing rest days stay as they are.
    """
    if reduce_training_days <= 0:
        return [workout.model_copy(deep=True) for workout in workouts]

    kept_positions = {retained.position for retained in select_retained_workouts(workouts, reduce_training_days)}
    return [
        workout.model_copy(deep=True)
        if workout.is_rest or position in kept_positions
        else make_rest_day(workout, description="Rest day - reduced training schedule")
        for position, workout in enumerate(workouts)
    ]
