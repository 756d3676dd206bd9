"""CLI for trainplan.

Developer CLI to compute plan skeletons, inspect race parameter tables,
validate realized plans and apply or cancel injury recovery on plan
documents stored as JSON files.
"""

import asyncio
import json
from pathlib import Path
from typing import Any, NoReturn

import typer
from loguru import logger
from pydantic import ValidationError
from rich.console import Console
from rich.json import JSON
from rich.panel import Panel
from rich.table import Table

from trainplan.config.settings import settings
from trainplan.core.logger import setup_logger
from trainplan.planner.errors import PlannerError
from trainplan.planner.plan_math import calculate_plan_math, get_available_races, get_race_params
from trainplan.plans.regenerate import InjuryRecoveryRequest, regenerate_plan_with_injury
from trainplan.plans.rollback import cancel_injury_recovery
from trainplan.plans.types import EquipmentSelection, TrainingPlan, UserProfile
from trainplan.plans.validation import validate_training_plan
from trainplan.workouts.cross_training import EQUIPMENT_DISPLAY_NAMES, EquipmentType

# Initialize Rich console for output
console = Console()

# Initialize Typer app
app = typer.Typer(
    name="trainplan",
    help="trainplan CLI - plan math, validation and injury recovery on plan JSON files",
    add_completion=False,
)

EQUIPMENT_CHOICES: dict[str, EquipmentType] = {
    **{equipment.value.lower(): equipment for equipment in EquipmentType},
    **{equipment.name.lower(): equipment for equipment in EquipmentType},
}


def _exit_with_error(message: str, code: int = 1) -> NoReturn:
    """Exit with error message."""
    console.print(f"[red]Error:[/red] {message}")
    raise typer.Exit(code)


def _format_response(response: dict[str, Any], pretty: bool = True) -> str:
    """Format a document for output.

    Args:
        response: JSON-serializable document
        pretty: Whether to pretty-print JSON

    Returns:
        Formatted document string
    """
    if pretty:
        return json.dumps(response, indent=2, ensure_ascii=False)
    return json.dumps(response, ensure_ascii=False)


def _read_json(path: Path) -> dict[str, Any]:
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except FileNotFoundError:
        _exit_with_error(f"File not found: {path}")
    except json.JSONDecodeError as e:
        _exit_with_error(f"Invalid JSON in {path}: {e}")
    if not isinstance(data, dict):
        _exit_with_error(f"Expected a JSON object in {path}")
    return data


def _write_json(path: Path, document: dict[str, Any]) -> None:
    """Write file synchronously (acceptable for CLI)."""
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(_format_response(document), encoding="utf-8")
    console.print(f"[green]✓ Written to {path}[/green]")


def _emit(document: dict[str, Any], output: Path | None) -> None:
    if output is not None:
        _write_json(output, document)
    else:
        console.print(JSON(_format_response(document)))


def _load_plan(path: Path) -> TrainingPlan:
    try:
        return TrainingPlan.model_validate(_read_json(path))
    except ValidationError as e:
        _exit_with_error(f"Invalid plan document {path}: {e.error_count()} invalid field(s)")


def _load_profile(path: Path | None) -> UserProfile:
    if path is None:
        return UserProfile()
    try:
        return UserProfile.model_validate(_read_json(path))
    except ValidationError as e:
        _exit_with_error(f"Invalid profile document {path}: {e.error_count()} invalid field(s)")


def _equipment_selection(names: list[str]) -> EquipmentSelection:
    chosen: list[EquipmentType] = []
    for name in names:
        equipment = EQUIPMENT_CHOICES.get(name.strip().lower())
        if equipment is None:
            _exit_with_error(f"Unknown equipment '{name}'. Choose from: {', '.join(str(e) for e in EquipmentType)}")
        chosen.append(equipment)
    return EquipmentSelection(**{equipment.name.lower(): True for equipment in chosen})


@app.callback()
def main(
    debug: bool = typer.Option(False, "--debug", help="Enable debug logging"),
) -> None:
    """Configure logging for every command."""
    setup_logger(
        level="DEBUG" if debug else settings.log_level,
        log_file=settings.log_file,
        json_file=settings.log_json,
    )


@app.command()
def plan_math(
    weekly_mileage: int = typer.Option(..., "--weekly-mileage", "-m", help="Current weekly mileage"),
    long_run: int = typer.Option(..., "--long-run", "-l", help="Current long run in miles"),
    weeks: int = typer.Option(..., "--weeks", "-w", help="Plan length in weeks"),
    race: str = typer.Option(..., "--race", "-r", help="Race distance (5K, 10K, Half Marathon, Marathon)"),
    experience: str = typer.Option(None, "--experience", "-e", help="Experience level (default from settings)"),
    output: Path = typer.Option(None, "--output", "-o", help="Write the skeleton JSON to this file"),
    as_json: bool = typer.Option(False, "--json", help="Print the skeleton as JSON instead of a table"),
) -> None:
    """Compute the week-by-week plan skeleton.

    Examples:
        trainplan plan-math -m 25 -l 8 -w 16 -r "Half Marathon"

        trainplan plan-math -m 40 -l 14 -w 18 -r marathon -e advanced -o skeleton.json
    """
    try:
        skeleton = calculate_plan_math(
            {
                "currentWeeklyMileage": weekly_mileage,
                "currentLongRun": long_run,
                "totalWeeks": weeks,
                "raceDistance": race,
                "experienceLevel": experience,
            }
        )
    except PlannerError as e:
        logger.error("Plan math failed", error=str(e))
        _exit_with_error(str(e))

    document = skeleton.to_dict()
    if output is not None or as_json:
        _emit(document, output)
        return

    targets = skeleton.targets
    console.print(
        Panel(
            f"Peak weekly mileage: [bold]{targets.peak_weekly_mileage}[/bold]\n"
            f"Long run max: [bold]{targets.long_run_max}[/bold]\n"
            f"Experience level: {skeleton.experience_level}",
            title=f"{skeleton.race_distance} - {weeks} weeks",
            border_style="cyan",
        )
    )

    table = Table(title="Weekly targets")
    for column in ("Week", "Phase", "Mileage", "Long run", "Tempo", "Interval", "Hill"):
        table.add_column(column, justify="right" if column != "Phase" else "left")
    for entry in skeleton.weeks:
        table.add_row(
            str(entry.week_number),
            str(entry.phase),
            str(entry.weekly_mileage),
            str(entry.long_run),
            str(entry.tempo_distance),
            str(entry.interval_distance),
            str(entry.hill_distance),
        )
    console.print(table)

    for warning in skeleton.warnings:
        console.print(f"[yellow]⚠️  {warning}[/yellow]")


@app.command()
def race_params(
    race: str = typer.Argument(None, help="Race distance to show; lists every race when omitted"),
) -> None:
    """Show race parameter tables."""
    if race is None:
        table = Table(title="Race parameter tables")
        for column in ("Race", "Distance (mi)", "Peak cap", "Long run max", "Long run floor"):
            table.add_column(column)
        for name in get_available_races():
            params = get_race_params(name)
            table.add_row(
                name,
                f"{params.distance_miles:g}",
                str(params.peak_weekly_mileage_cap),
                str(params.long_run_max),
                str(params.long_run_floor),
            )
        console.print(table)
        return

    try:
        params = get_race_params(race)
    except PlannerError as e:
        _exit_with_error(str(e))
    console.print(JSON(_format_response(params.to_dict())))


@app.command()
def validate(
    plan_file: Path = typer.Argument(..., help="Realized plan JSON file"),
    profile: Path = typer.Option(None, "--profile", "-p", help="User profile JSON file"),
) -> None:
    """Validate a realized plan against its user profile.

    Exits with status 1 when any check fails.
    """
    plan_document = _read_json(plan_file)
    profile_document = _read_json(profile) if profile is not None else None

    report = validate_training_plan(plan_document, profile_document)
    if report.valid:
        console.print("[bold green]✓ All validations passed[/bold green]")
        return

    console.print(f"[bold red]✗ Validation failed with {len(report.errors)} error(s):[/bold red]")
    for error in report.errors:
        console.print(f"  - {error}")
    raise typer.Exit(1)


@app.command()
def injury(
    plan_file: Path = typer.Argument(..., help="Realized plan JSON file"),
    profile: Path = typer.Option(None, "--profile", "-p", help="User profile JSON file"),
    current_week: int = typer.Option(..., "--current-week", "-c", help="First injury week (1-based)"),
    weeks_off: int = typer.Option(..., "--weeks-off", "-n", help="Weeks without running"),
    equipment: list[str] = typer.Option(
        [], "--equipment", "-e", help="Cross-training equipment (repeatable): pool, elliptical, stationaryBike, ..."
    ),
    reduce_days: int = typer.Option(0, "--reduce-days", help="Workouts to drop per recovery week (0-2)"),
    output: Path = typer.Option(None, "--output", "-o", help="Write the new plan JSON to this file"),
) -> None:
    """Apply an injury recovery protocol to a plan.

    Examples:
        trainplan injury plan.json -p profile.json -c 5 -n 3 -e pool -e rowing -o recovered.json
    """
    plan = _load_plan(plan_file)
    user_profile = _load_profile(profile)

    try:
        request = InjuryRecoveryRequest(
            existing_plan=plan,
            updated_profile=user_profile,
            current_week=current_week,
            weeks_off_running=weeks_off,
            selected_equipment=_equipment_selection(equipment),
            reduce_training_days=reduce_days,
        )
    except ValidationError as e:
        _exit_with_error(f"Invalid injury recovery request: {e.error_count()} invalid field(s)")

    try:
        recovered = asyncio.run(regenerate_plan_with_injury(request))
    except PlannerError as e:
        logger.error("Injury recovery failed", error=str(e))
        _exit_with_error(str(e))

    console.print(
        f"[bold green]✓ Injury recovery applied:[/bold green] weeks {request.injury_start_week}-"
        f"{request.injury_end_week} cross-training, return in week {request.return_week}"
    )
    equipment_names = [EQUIPMENT_DISPLAY_NAMES[item] for item in request.selected_equipment.selected()]
    console.print(f"  Equipment: {', '.join(equipment_names)}")
    _emit(recovered.to_document(), output)


@app.command()
def cancel_injury(
    plan_file: Path = typer.Argument(..., help="Plan JSON file with injury recovery active"),
    output: Path = typer.Option(None, "--output", "-o", help="Write the restored plan JSON to this file"),
) -> None:
    """Cancel an active injury recovery and restore the pre-injury plan."""
    plan = _load_plan(plan_file)
    if not plan.injury_recovery_active:
        console.print("[yellow]No active injury recovery; plan left unchanged[/yellow]")

    try:
        restored = cancel_injury_recovery(plan)
    except PlannerError as e:
        logger.error("Cancel injury recovery failed", error=str(e))
        _exit_with_error(str(e))

    _emit(restored.to_document(), output)


if __name__ == "__main__":
    app()
