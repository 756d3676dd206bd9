"""Race calculator.

A single calculation path parametrized by a RaceParameters table. Race
distance changes only the numbers, never the algorithm shape.
"""

from loguru import logger

from trainplan.planner.base_math import (
    AGGRESSIVE_LONG_RUN_GROWTH,
    apply_experience_adjustments,
    calculate_phase_distribution,
    calculate_weekly_growth_rate,
    calculate_weekly_long_run,
    calculate_weekly_mileage,
    get_phase_for_week,
    round_half_up,
)
from trainplan.planner.enums import QualityWorkout
from trainplan.planner.errors import ConfigurationError
from trainplan.planner.models import PlanInputs, PlanSkeleton, PlanTargets, RaceParameters, WeekMathEntry

CONSERVATIVE_LONG_RUN_GROWTH = 0.5
BUILD_CYCLE_WEEKS = 3
GROWTH_WEEKS_PER_CYCLE = 2


class RaceCalculator:
    """Computes peak targets and weekly progressions for one race distance."""

    def __init__(self, params: RaceParameters) -> None:
        self.params = params

    def calculate_peak_mileage(self, current: float, total_weeks: int) -> int:
        """Peak weekly mileage reachable from current mileage.

        Growth compounds over two weeks of every three-week build cycle and
        is capped by the race table.

        Args:
            current: Current weekly mileage
            total_weeks: Plan length in weeks

        Returns:
            Peak weekly mileage, never above peak_weekly_mileage_cap
        """
        phases = calculate_phase_distribution(total_weeks)
        growth_rate = calculate_weekly_growth_rate(total_weeks)
        build_cycles = phases.total_build_weeks // BUILD_CYCLE_WEEKS
        effective_growth_weeks = build_cycles * GROWTH_WEEKS_PER_CYCLE
        peak = round_half_up(current * (1 + growth_rate) ** effective_growth_weeks)
        return min(peak, self.params.peak_weekly_mileage_cap)

    def calculate_long_run_max(
        self,
        current: float,
        total_weeks: int,
        peak_mileage: float,
        warnings: list[str] | None = None,
    ) -> int:
        """Long run maximum reachable from the current long run.

        Args:
            current: Current long run
            total_weeks: Plan length in weeks
            peak_mileage: Peak weekly mileage the long run must stay proportional to
            warnings: Optional list that non-fatal warnings are appended to

        Returns:
            Long run maximum in whole miles
        """
        phases = calculate_phase_distribution(total_weeks)
        build_weeks = max(1, phases.total_build_weeks)
        target = self.params.minimum_long_run_target

        gap = max(0.0, target - current)
        required_rate = gap / build_weeks
        if required_rate > AGGRESSIVE_LONG_RUN_GROWTH:
            message = (
                f"Reaching a {target} mile long run needs {required_rate:.2f} miles of growth per week; "
                f"growth is limited to {AGGRESSIVE_LONG_RUN_GROWTH} miles per week"
            )
            logger.warning(
                "Long run growth too aggressive for plan length",
                race_distance=str(self.params.race_distance),
                required_rate=round(required_rate, 2),
                build_weeks=build_weeks,
            )
            if warnings is not None:
                warnings.append(message)

        rate = min(max(CONSERVATIVE_LONG_RUN_GROWTH, required_rate), AGGRESSIVE_LONG_RUN_GROWTH)
        theoretical_max = current + build_weeks * rate
        result = min(
            round_half_up(theoretical_max),
            self.params.long_run_max,
            round_half_up(peak_mileage * self.params.long_run_percentage),
        )

        if result < target:
            message = f"Long run maximum of {result} miles falls short of the {target} mile target for the {self.params.race_distance}"
            logger.warning(
                "Long run target unreachable",
                race_distance=str(self.params.race_distance),
                long_run_max=result,
                minimum_long_run_target=target,
            )
            if warnings is not None:
                warnings.append(message)

        return result

    def calculate_workout_distance(self, weekly_mileage: float, workout_type: QualityWorkout | str) -> int:
        """Quality workout distance for a week, clamped to the race bounds.

        Raises:
            ConfigurationError: If workout_type is not tempo, interval or hill
        """
        try:
            kind = QualityWorkout(workout_type)
        except ValueError as e:
            raise ConfigurationError(f"Unknown quality workout type: {workout_type}") from e

        bounds = self.params.workout_bounds[kind]
        distance = max(0.0, weekly_mileage) * self.params.workout_percentages[kind]
        clamped = min(max(distance, bounds.min), bounds.max)
        return round_half_up(clamped)

    def generate_plan(self, inputs: PlanInputs) -> PlanSkeleton:
        """Build the plan skeleton for the given inputs.

        Args:
            inputs: Current fitness and plan length

        Returns:
            PlanSkeleton with one WeekMathEntry per week

        Raises:
            ConfigurationError: If total_weeks < 1
        """
        warnings: list[str] = []
        phases = calculate_phase_distribution(inputs.total_weeks)

        base_peak = self.calculate_peak_mileage(inputs.current_weekly_mileage, inputs.total_weeks)
        base_long_run = self.calculate_long_run_max(inputs.current_long_run, inputs.total_weeks, base_peak, warnings)

        adjustment = apply_experience_adjustments(
            base_peak,
            base_long_run,
            inputs.experience_level,
            self.params.long_run_floor,
            current_long_run=inputs.current_long_run,
            total_build_weeks=phases.total_build_weeks,
        )
        warnings.extend(adjustment.warnings)

        # Targets never drop below current fitness, and the race cap wins over current fitness
        peak_mileage = max(
            adjustment.peak_mileage,
            round_half_up(min(inputs.current_weekly_mileage, self.params.peak_weekly_mileage_cap)),
        )
        long_run_max = max(
            adjustment.long_run_max,
            round_half_up(min(inputs.current_long_run, self.params.long_run_max)),
        )

        weeks: list[WeekMathEntry] = []
        for week_number in range(1, inputs.total_weeks + 1):
            weekly_mileage = calculate_weekly_mileage(
                week_number, inputs.current_weekly_mileage, peak_mileage, inputs.total_weeks
            )
            long_run = calculate_weekly_long_run(week_number, inputs.current_long_run, long_run_max, inputs.total_weeks)
            weeks.append(
                WeekMathEntry(
                    week_number=week_number,
                    phase=get_phase_for_week(week_number, phases),
                    weekly_mileage=weekly_mileage,
                    long_run=min(long_run, weekly_mileage),
                    tempo_distance=self.calculate_workout_distance(weekly_mileage, QualityWorkout.TEMPO),
                    interval_distance=self.calculate_workout_distance(weekly_mileage, QualityWorkout.INTERVAL),
                    hill_distance=self.calculate_workout_distance(weekly_mileage, QualityWorkout.HILL),
                )
            )

        return PlanSkeleton(
            race_distance=self.params.race_distance,
            inputs=inputs,
            experience_level=adjustment.experience_level,
            targets=PlanTargets(
                peak_weekly_mileage=peak_mileage,
                long_run_max=long_run_max,
                base_peak_weekly_mileage=base_peak,
                base_long_run_max=base_long_run,
            ),
            phases=phases,
            weeks=tuple(weeks),
            race_params=self.params,
            warnings=tuple(warnings),
        )
