"""Injury recovery regeneration.

Rewrites a bounded window of future weeks into cross-training, then eases
back into running. For current week C and N weeks off running:

- weeks before C are completed and copied verbatim
- weeks C .. C+N-1 are injury weeks with no running at all
- week C+N is the return week, mixing easy runs and cross-training
- later weeks are post-recovery and keep their full volume

Every week inside [C, C+N] must be realizable, otherwise the whole
request fails with PlanCorruptionError and nothing is returned.
"""

import math
import re
from collections.abc import Mapping

from loguru import logger

from trainplan.config.settings import Settings, settings
from trainplan.planner.base_math import round_half_up
from trainplan.planner.enums import WorkoutType
from trainplan.planner.errors import ConfigurationError, PlanCorruptionError, PlannerError, StructuralError
from trainplan.planner.models import PlanSkeleton
from trainplan.planner.plan_math import calculate_plan_math
from trainplan.plans.merge import preserve_and_merge_weeks
from trainplan.plans.regenerate.day_assignment import DayAssigner, is_realized
from trainplan.plans.regenerate.types import InjuryRecoveryRequest, WeekState
from trainplan.plans.regenerate.workout_priority import (
    RetainedWorkout,
    calendar_fields,
    make_rest_day,
    select_retained_workouts,
)
from trainplan.plans.rollback.versions import PlanVersionArena
from trainplan.plans.types import InjuryRecoveryInfo, RealizedWeek, TrainingPlan, UserProfile, Workout
from trainplan.workouts.cross_training.interface import ContentLibrary, EquipmentType, IntensityBucket
from trainplan.workouts.cross_training.registry import default_registry

INJURY_WEEK_TYPE = "injury-recovery"
RETURN_WEEK_TYPE = "return-to-running"
INJURY_WEEK_NOTE = "Cross-training only - No running during injury recovery"
RETURN_WEEK_NOTE = "Gradual return to running - Mix of easy runs and cross-training"
RETURN_RUN_NOTE = "Return to running: Start slow, listen to your body"
RETURN_REST_DESCRIPTION = "Recovery day"

WORKOUT_BUCKETS: dict[str, IntensityBucket] = {
    WorkoutType.TEMPO: IntensityBucket.TEMPO,
    WorkoutType.INTERVAL: IntensityBucket.INTERVALS,
    WorkoutType.LONG_RUN: IntensityBucket.LONG,
    WorkoutType.HILL: IntensityBucket.HILLS,
    WorkoutType.RECOVERY: IntensityBucket.RECOVERY,
}

# Buckets an equipment type cannot express, and what replaces them
EQUIPMENT_BUCKET_SUBSTITUTIONS: dict[EquipmentType, dict[IntensityBucket, IntensityBucket]] = {
    EquipmentType.ROWING: {IntensityBucket.HILLS: IntensityBucket.INTERVALS},
    EquipmentType.SWIMMING: {IntensityBucket.HILLS: IntensityBucket.INTERVALS},
    EquipmentType.POOL: {IntensityBucket.HILLS: IntensityBucket.INTERVALS},
}

_FIRST_INTEGER = re.compile(r"\d+")


# -----------------------------
# Week classification
# -----------------------------
def classify_week(week_number: int, current_week: int, weeks_off_running: int) -> WeekState:
    if week_number < current_week:
        return WeekState.COMPLETED
    if week_number <= current_week + weeks_off_running - 1:
        return WeekState.INJURY
    if week_number == current_week + weeks_off_running:
        return WeekState.RETURN
    return WeekState.POST_RECOVERY


def classify_weeks(total_weeks: int, current_week: int, weeks_off_running: int) -> dict[int, WeekState]:
    """State of every week 1..total_weeks for one regeneration."""
    return {week: classify_week(week, current_week, weeks_off_running) for week in range(1, total_weeks + 1)}


# -----------------------------
# Equipment distribution
# -----------------------------
def distribute_equipment(workout_count: int, equipment_count: int) -> list[int]:
    """Equipment index for each of workout_count slots.

    Every equipment type gets floor(count / types) slots and the first
    count mod types get one more, so counts differ by at most one.
    Slots are grouped per equipment: 5 workouts over 3 types -> [0, 0, 1, 1, 2].
    """
    if equipment_count <= 0 or workout_count <= 0:
        return []
    base, extra = divmod(workout_count, equipment_count)
    assignments: list[int] = []
    for index in range(equipment_count):
        assignments.extend([index] * (base + (1 if index < extra else 0)))
    return assignments


def workout_bucket(workout: Workout, equipment: EquipmentType) -> IntensityBucket:
    """Intensity bucket for a running workout on a given equipment type."""
    bucket = WORKOUT_BUCKETS.get(workout.type or "", IntensityBucket.EASY)
    return EQUIPMENT_BUCKET_SUBSTITUTIONS.get(equipment, {}).get(bucket, bucket)


def estimate_duration_minutes(workout: Workout, config: Settings = settings) -> int:
    """Target cross-training minutes for a running workout.

    Distance times the estimated pace when a distance exists, otherwise the
    first number of the duration, otherwise the configured default.
    """
    if workout.distance:
        return round_half_up(workout.distance * config.estimated_minutes_per_mile)
    if isinstance(workout.duration, int | float) and workout.duration > 0:
        return int(workout.duration)
    if isinstance(workout.duration, str):
        match = _FIRST_INTEGER.search(workout.duration)
        if match:
            return int(match.group(0))
    return config.default_cross_training_minutes


class InjuryRecoveryRegenerator:
    """Applies an injury recovery protocol to a realized plan.

    Content libraries default to the bundled catalogues; day_assigner is
    only awaited when an injury or return week is missing from the plan.
    """

    def __init__(
        self,
        libraries: Mapping[EquipmentType, ContentLibrary] | None = None,
        day_assigner: DayAssigner | None = None,
        config: Settings = settings,
    ) -> None:
        self._libraries = libraries
        self._day_assigner = day_assigner
        self._config = config

    def _library(self, equipment: EquipmentType) -> ContentLibrary | None:
        if self._libraries is not None:
            return self._libraries.get(equipment)
        return default_registry().get(equipment)

    async def regenerate(self, request: InjuryRecoveryRequest) -> TrainingPlan:
        """Build the injury recovery plan for a request.

        Args:
            request: Injury recovery request

        Returns:
            New plan with recovery weeks, injury_recovery_info and the pre-injury snapshot

        Raises:
            ConfigurationError: If no equipment is selected or current_week is out of range
            StructuralError: If the plan has no week list
            PlanCorruptionError: If a required week cannot be realized
        """
        plan = request.existing_plan
        equipment = request.selected_equipment.selected()
        current_week = request.current_week

        if not equipment:
            logger.error("Injury recovery requested without equipment")
            raise ConfigurationError("Select at least one cross-training equipment type")
        if current_week < 1:
            logger.error("Invalid current week", current_week=current_week)
            raise ConfigurationError(f"current_week must be at least 1, got {current_week}")

        working_weeks = plan.week_list()
        if working_weeks is None:
            logger.error("Plan has no week list", current_week=current_week)
            raise StructuralError("Plan has neither 'weeks' nor 'weeklyPlans'; cannot create injury recovery plan")
        total_weeks = len(working_weeks)
        if current_week > total_weeks:
            logger.error("Current week beyond plan end", current_week=current_week, total_weeks=total_weeks)
            raise ConfigurationError(f"current_week {current_week} is beyond the plan's {total_weeks} weeks")

        arena = PlanVersionArena(plan)
        snapshot = arena.pre_injury_snapshot()
        states = classify_weeks(total_weeks, current_week, request.weeks_off_running)

        logger.info(
            "Generating injury recovery plan",
            current_week=current_week,
            weeks_off_running=request.weeks_off_running,
            equipment=[str(item) for item in equipment],
            reduce_training_days=request.reduce_training_days,
            total_weeks=total_weeks,
        )

        skeleton: PlanSkeleton | None = None
        new_weeks: list[RealizedWeek | None] = []
        for week_number in range(current_week, total_weeks + 1):
            state = states[week_number]
            source = self._source_week(plan, snapshot.weeks, working_weeks, week_number)

            if state == WeekState.POST_RECOVERY:
                if not is_realized(source):
                    logger.error("Post-recovery week missing from plan and snapshot", week=week_number)
                    raise PlanCorruptionError(
                        f"Cannot create injury recovery plan: week {week_number} is missing from the plan "
                        "and its snapshot. Regenerate your plan first."
                    )
                logger.debug("Keeping post-recovery week", week=week_number)
                new_weeks.append(source)
                continue

            if not is_realized(source):
                if skeleton is None:
                    skeleton = self._skeleton_for(request.updated_profile, plan, total_weeks, week_number)
                source = await self._assign_week(skeleton, request.updated_profile, week_number)

            if state == WeekState.INJURY:
                new_weeks.append(self._cross_training_week(source, equipment, request))
            else:
                new_weeks.append(self._return_to_running_week(source, equipment, request))

        merged = preserve_and_merge_weeks(plan, new_weeks, current_week)
        info = InjuryRecoveryInfo(
            start_week=request.injury_start_week,
            end_week=request.injury_end_week,
            return_week=request.return_week,
            selected_equipment=[str(item) for item in equipment],
            weeks_off_running=request.weeks_off_running,
            reduce_training_days=request.reduce_training_days,
        )

        logger.info(
            "Injury recovery plan generated",
            total_weeks=len(merged),
            completed_weeks=current_week - 1,
            modified_weeks=len(new_weeks),
            return_week=request.return_week,
        )
        return plan.with_weeks(
            merged,
            injury_recovery_active=True,
            injury_recovery_info=info,
            original_plan_before_injury=snapshot,
        )

    # -----------------------------
    # Week sources
    # -----------------------------
    @staticmethod
    def _source_week(
        plan: TrainingPlan,
        snapshot_weeks: list[RealizedWeek | None],
        working_weeks: list[RealizedWeek | None],
        week_number: int,
    ) -> RealizedWeek | None:
        """Week content to transform.

        A plan already in recovery is re-derived from its pre-injury
        snapshot; otherwise the working copy is used and the snapshot
        only fills weeks the working copy lacks.
        """
        index = week_number - 1
        working = working_weeks[index] if index < len(working_weeks) else None
        original = snapshot_weeks[index] if index < len(snapshot_weeks) else None
        if plan.injury_recovery_active and is_realized(original):
            return original
        if is_realized(working):
            return working
        return original if is_realized(original) else None

    def _skeleton_for(self, profile: UserProfile, plan: TrainingPlan, total_weeks: int, week_number: int) -> PlanSkeleton:
        plan_length = plan.plan_overview.total_weeks if plan.plan_overview and plan.plan_overview.total_weeks else total_weeks
        try:
            return calculate_plan_math(profile.plan_inputs(plan_length))
        except PlannerError as e:
            logger.error("Cannot compute plan math for missing week", week=week_number, error=str(e))
            raise PlanCorruptionError(
                f"Week {week_number} is missing and cannot be regenerated from the profile: {e}"
            ) from e

    async def _assign_week(self, skeleton: PlanSkeleton, profile: UserProfile, week_number: int) -> RealizedWeek:
        entry = skeleton.week(week_number)
        if self._day_assigner is None or entry is None:
            logger.error("Cannot realize missing recovery week", week=week_number)
            raise PlanCorruptionError(f"Week {week_number} is missing and no day assignment is available")

        logger.warning("Recovery week missing, requesting day assignment", week=week_number)
        week = await self._day_assigner(entry, profile)
        if not is_realized(week):
            logger.error("Day assignment returned no workouts", week=week_number)
            raise PlanCorruptionError(f"Failed to generate workouts for week {week_number}")
        return week

    # -----------------------------
    # Week transforms
    # -----------------------------
    def _equipment_label(self, equipment: EquipmentType, profile: UserProfile) -> str:
        if equipment == EquipmentType.STAND_UP_BIKE and profile.stand_up_bike_type:
            return profile.stand_up_bike_type
        return str(equipment)

    def _cross_training_entry(
        self,
        workout: Workout,
        equipment: EquipmentType,
        profile: UserProfile,
    ) -> Workout:
        label = self._equipment_label(equipment, profile)
        bucket = workout_bucket(workout, equipment)
        minutes = estimate_duration_minutes(workout, self._config)

        library = self._library(equipment)
        selected = library.get_workout_by_duration(bucket, minutes) if library is not None else None

        original = {
            "type": workout.type,
            "name": workout.name,
            "distance": workout.distance,
            "duration": workout.duration,
        }
        if selected is None:
            logger.warning(
                "No cross-training workout found, using placeholder",
                equipment=label,
                bucket=str(bucket),
                minutes=minutes,
            )
            return Workout(
                **calendar_fields(workout),
                type=WorkoutType.CROSS_TRAINING,
                cross_training_type=label,
                name=f"{label} – {bucket}",
                description=f"Cross-training on {label}",
                duration=f"{minutes} minutes",
                distance=None,
                pace=None,
                original_workout=original,
                workout_details={"intensity": str(bucket).lower()},
            )

        logger.debug(
            "Cross-training workout selected",
            day=workout.day,
            original_type=workout.type,
            bucket=str(bucket),
            minutes=minutes,
            equipment=label,
            workout=selected.name,
        )
        details = selected.to_dict()
        for key in ("name", "description", "duration"):
            details.pop(key, None)
        return Workout(
            **calendar_fields(workout),
            type=WorkoutType.CROSS_TRAINING,
            cross_training_type=label,
            name=selected.name,
            description=selected.description,
            duration=selected.duration,
            distance=None,
            pace=None,
            original_workout=original,
            workout_details=details,
        )

    def _cross_train(
        self,
        retained: list[RetainedWorkout],
        equipment: list[EquipmentType],
        profile: UserProfile,
    ) -> dict[int, Workout]:
        """Cross-training replacements keyed by day position, spread fairly over equipment."""
        assignments = distribute_equipment(len(retained), len(equipment))
        return {
            item.position: self._cross_training_entry(item.workout, equipment[assignments[slot]], profile)
            for slot, item in enumerate(retained)
        }

    def _cross_training_week(
        self,
        week: RealizedWeek,
        equipment: list[EquipmentType],
        request: InjuryRecoveryRequest,
    ) -> RealizedWeek:
        retained = select_retained_workouts(week.workouts, request.reduce_training_days)
        replacements = self._cross_train(retained, equipment, request.updated_profile)

        workouts = [
            replacements[position] if position in replacements else make_rest_day(day)
            for position, day in enumerate(week.workouts)
        ]
        logger.debug(
            "Injury week rewritten",
            week=week.week,
            cross_training=len(replacements),
            rest_days=len(workouts) - len(replacements),
        )
        return week.model_copy(
            update={
                "workouts": workouts,
                "total_mileage": 0.0,
                "week_type": INJURY_WEEK_TYPE,
                "note": INJURY_WEEK_NOTE,
            },
            deep=True,
        )

    def _return_run(self, workout: Workout) -> Workout:
        if workout.distance:
            distance = round_half_up(workout.distance * self._config.return_run_fraction * 10) / 10
        else:
            distance = self._config.return_run_default_miles
        return Workout(
            **calendar_fields(workout),
            type=WorkoutType.EASY,
            name="Easy Return Run",
            description="Easy-paced running to gradually return from injury",
            distance=distance,
            pace=workout.pace or "easy",
            notes=RETURN_RUN_NOTE,
        )

    def _return_to_running_week(
        self,
        week: RealizedWeek,
        equipment: list[EquipmentType],
        request: InjuryRecoveryRequest,
    ) -> RealizedWeek:
        retained = select_retained_workouts(week.workouts, request.reduce_training_days)
        running_count = math.ceil(len(retained) / 2)

        runs = {item.position: self._return_run(item.workout) for item in retained if item.rank < running_count}
        cross = self._cross_train(
            [item for item in retained if item.rank >= running_count],
            equipment,
            request.updated_profile,
        )
        replacements = {**runs, **cross}

        workouts = [
            replacements[position]
            if position in replacements
            else make_rest_day(day, description=RETURN_REST_DESCRIPTION)
            for position, day in enumerate(week.workouts)
        ]
        total_mileage = round_half_up(sum(run.distance or 0.0 for run in runs.values()) * 10) / 10
        logger.debug(
            "Return week rewritten",
            week=week.week,
            runs=len(runs),
            cross_training=len(cross),
            total_mileage=total_mileage,
        )
        return week.model_copy(
            update={
                "workouts": workouts,
                "total_mileage": total_mileage,
                "week_type": RETURN_WEEK_TYPE,
                "note": RETURN_WEEK_NOTE,
            },
            deep=True,
        )


async def regenerate_plan_with_injury(
    request: InjuryRecoveryRequest,
    day_assigner: DayAssigner | None = None,
    libraries: Mapping[EquipmentType, ContentLibrary] | None = None,
) -> TrainingPlan:
    """Apply an injury recovery protocol to a plan.

    See InjuryRecoveryRegenerator.regenerate.
    """
    regenerator = InjuryRecoveryRegenerator(libraries=libraries, day_assigner=day_assigner)
    return await regenerator.regenerate(request)


__all__ = [
    "EQUIPMENT_BUCKET_SUBSTITUTIONS",
    "InjuryRecoveryRegenerator",
    "classify_week",
    "classify_weeks",
    "distribute_equipment",
    "estimate_duration_minutes",
    "regenerate_plan_with_injury",
    "workout_bucket",
]
