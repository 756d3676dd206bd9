"""Calendar helpers for realized plans.

Training weeks run Monday to Sunday. Week 1 is the week containing the
plan start date, so a plan starting on a Thursday still has its first
week begin on the preceding Monday.
"""

import math
from datetime import date, timedelta

DAY_OFFSETS: dict[str, int] = {
    "monday": 0,
    "tuesday": 1,
    "wednesday": 2,
    "thursday": 3,
    "friday": 4,
    "saturday": 5,
    "sunday": 6,
}


def parse_plan_date(value: date | str | None) -> date | None:
    """Parse an ISO date (a datetime suffix is ignored). Returns None when unparsable."""
    if value is None:
        return None
    if isinstance(value, date):
        return value
    try:
        return date.fromisoformat(str(value).strip()[:10])
    except ValueError:
        return None


def monday_of_week(day: date) -> date:
    return day - timedelta(days=day.weekday())


def calculate_current_week(start_date: date | str | None, total_weeks: int, today: date | None = None) -> int:
    """1-based plan week containing today, clamped to [1, total_weeks].

    Args:
        start_date: Plan start date
        total_weeks: Plan length in weeks
        today: Reference date, defaults to the current date

    Returns:
        Current week number, 1 when the start date is unknown
    """
    start = parse_plan_date(start_date)
    if start is None:
        return 1

    reference = today or date.today()
    first_monday = monday_of_week(start)
    if reference < first_monday:
        return 1

    weeks_since_start = (reference - first_monday).days // 7
    return max(1, min(weeks_since_start + 1, max(1, total_weeks)))


def get_week_date_range(start_date: date | str, week_number: int) -> tuple[date, date] | None:
    """Monday and Sunday of a plan week, None when the start date is unparsable."""
    start = parse_plan_date(start_date)
    if start is None:
        return None
    week_start = monday_of_week(start) + timedelta(weeks=week_number - 1)
    return week_start, week_start + timedelta(days=6)


def get_workout_date(start_date: date | str, week_number: int, day_name: str) -> date | None:
    """Calendar date of a named day in a plan week, None for unknown days."""
    week_range = get_week_date_range(start_date, week_number)
    offset = DAY_OFFSETS.get(day_name.strip().lower())
    if week_range is None or offset is None:
        return None
    return week_range[0] + timedelta(days=offset)


def expected_total_weeks(start_date: date | str, race_date: date | str) -> int | None:
    """ceil((race - start) / 7 days), None when either date is unparsable."""
    start = parse_plan_date(start_date)
    race = parse_plan_date(race_date)
    if start is None or race is None:
        return None
    return math.ceil((race - start).days / 7)
