"""CLI entry point for the timetable generator."""

import json
import logging
from pathlib import Path
from typing import Annotated, Optional

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

from .exceptions import ConfigurationError
from .scheduler import (
    ConfigLoader,
    Day,
    GeneratorSettings,
    PreferenceStore,
    TimetableEngine,
    export_schedule_json,
    generate_time_slots,
    load_infrastructure,
    preference_satisfaction,
    teaching_load,
    validate_infrastructure,
)

app = typer.Typer(
    name="timetable-generator",
    help="Generate college timetables from course and room configuration",
    add_completion=False,
)
console = Console()

# Default paths for configuration data
DEFAULT_PREFERENCES_JSON = Path("data/teacher-preferences.json")
DEFAULT_OUTPUT_JSON = Path("output/timetable.json")


def _setup_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.INFO if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=console, show_path=False)],
        force=True,
    )


def _load(input_file: Path):
    if not input_file.exists():
        console.print(f"[bold red]Error:[/bold red] File not found: {input_file}")
        raise typer.Exit(1)
    try:
        return load_infrastructure(input_file)
    except json.JSONDecodeError as e:
        console.print(f"[bold red]Error:[/bold red] Invalid JSON in {input_file}: {e}")
        raise typer.Exit(1)
    except ConfigurationError as e:
        console.print(f"[bold red]Error:[/bold red] {e}")
        raise typer.Exit(1)


@app.command()
def generate(
    input_file: Annotated[
        Path,
        typer.Argument(help="Infrastructure JSON file (teachers, rooms, courses, timings)"),
    ],
    output: Annotated[
        Optional[Path],
        typer.Option("-o", "--output", help="Output JSON file path"),
    ] = None,
    preferences: Annotated[
        Optional[Path],
        typer.Option("--preferences", "-p", help="Path to teacher-preferences.json file"),
    ] = None,
    seed: Annotated[
        Optional[int],
        typer.Option("--seed", "-s", help="Random seed for a reproducible timetable"),
    ] = None,
    max_attempts: Annotated[
        Optional[int],
        typer.Option("--max-attempts", help="Lecture placement attempt cap per subject"),
    ] = None,
    top_candidates: Annotated[
        Optional[int],
        typer.Option("--top-candidates", help="Ranked candidates tried per lecture attempt"),
    ] = None,
    config_dir: Annotated[
        Optional[Path],
        typer.Option("--config-dir", "-c", help="Directory with generator-settings.json"),
    ] = None,
    verbose: Annotated[
        bool,
        typer.Option("-v", "--verbose", help="Show detailed output"),
    ] = False,
) -> None:
    """Generate timetables for all courses."""
    _setup_logging(verbose)
    infrastructure = _load(input_file)

    preferences_path = preferences or DEFAULT_PREFERENCES_JSON
    store = PreferenceStore.load(preferences_path)

    settings = ConfigLoader(config_dir).load_settings() if config_dir else GeneratorSettings()
    if seed is not None:
        settings.seed = seed
    if max_attempts is not None:
        settings.max_attempts = max_attempts
    if top_candidates is not None:
        settings.top_candidates = top_candidates

    engine = TimetableEngine(store, settings)

    console.print(f"\n[bold]Timetable Generation for:[/bold] {input_file.name}")
    console.print(f"  Courses: {len(infrastructure.courses)}")

    try:
        with console.status("[bold green]Generating timetables..."):
            result = engine.generate_all(infrastructure)
    except ConfigurationError as e:
        console.print(f"[bold red]Error:[/bold red] {e}")
        raise typer.Exit(1)

    stats = result.statistics
    console.print("\n[bold]Generation Results:[/bold]")
    console.print(f"  Seed: {result.seed}")
    console.print(f"  Lecture sessions: {stats.lecture_sessions}/{stats.required_lecture_slots}")
    console.print(f"  Lab sessions: {stats.lab_sessions}/{stats.required_lab_slots}")
    console.print(f"  Elective sessions: {stats.elective_sessions}")
    console.print(f"  Placement rate: {stats.placement_rate:.0%}")

    course_table = Table(title="Sessions by Course")
    course_table.add_column("Course", style="cyan")
    course_table.add_column("Lectures", style="green")
    course_table.add_column("Labs", style="red")
    for course in infrastructure.courses:
        classes = result.classes_for(course.id)
        course_table.add_row(
            course.label,
            str(sum(1 for c in classes if not c.is_lab)),
            str(sum(1 for c in classes if c.is_lab)),
        )
    console.print(course_table)

    if stats.by_day:
        console.print("\n[bold]Distribution by day:[/bold]")
        for day in Day:
            if day.value in stats.by_day:
                console.print(f"  {day.value}: {stats.by_day[day.value]}")

    if result.warnings:
        console.print(f"\n[bold yellow]Warnings ({len(result.warnings)}):[/bold yellow]")
        for warning in result.warnings:
            console.print(f"  [yellow]• {warning.message}[/yellow]")

    if verbose:
        _show_satisfaction(store, result)

    output_path = output or DEFAULT_OUTPUT_JSON
    if output_path.suffix != ".json":
        output_path = output_path.with_suffix(".json")
    with console.status(f"[bold green]Exporting to {output_path}..."):
        export_schedule_json(result, output_path)
    console.print(f"\n[bold green]✓[/bold green] Timetables exported to: {output_path}")

    if preferences is not None:
        store.save(preferences_path)


def _show_satisfaction(store: PreferenceStore, result) -> None:
    """Show the teacher preference satisfaction table."""
    df = preference_satisfaction(store, result.sessions)
    if df.empty:
        return

    table = Table(title="Teacher Preference Satisfaction")
    table.add_column("Teacher", style="cyan")
    table.add_column("Classes", style="green")
    table.add_column("Preferred Slots", style="green")
    table.add_column("Preferred Days", style="green")
    table.add_column("Score", style="magenta")
    table.add_column("Grade", style="magenta")
    for row in df.itertuples(index=False):
        table.add_row(
            row.teacher,
            str(row.total_classes),
            str(row.preferred_slots_used),
            str(row.preferred_days_used),
            f"{row.satisfaction_score}%",
            row.grade,
        )
    console.print(table)


@app.command()
def validate(
    input_file: Annotated[
        Path,
        typer.Argument(help="Infrastructure JSON file"),
    ],
) -> None:
    """Validate a configuration without generating timetables."""
    infrastructure = _load(input_file)

    console.print(f"\n[bold]Validation Results for:[/bold] {input_file.name}")
    try:
        warnings = validate_infrastructure(infrastructure)
    except ConfigurationError as e:
        console.print("[bold red]✗ Configuration is invalid[/bold red]")
        console.print(f"  [red]• {e}[/red]")
        raise typer.Exit(1)

    console.print("[bold green]✓ Configuration is valid[/bold green]")
    if warnings:
        console.print(f"\n[bold yellow]Warnings ({len(warnings)}):[/bold yellow]")
        for warning in warnings:
            console.print(f"  [yellow]• {warning}[/yellow]")


@app.command()
def slots(
    input_file: Annotated[
        Path,
        typer.Argument(help="Infrastructure JSON file"),
    ],
) -> None:
    """Show the time slots generated from the configured timings."""
    infrastructure = _load(input_file)

    try:
        time_slots = generate_time_slots(infrastructure.time_settings)
    except ConfigurationError as e:
        console.print(f"[bold red]Error:[/bold red] {e}")
        raise typer.Exit(1)

    table = Table(title="Time Slots")
    table.add_column("#", style="blue")
    table.add_column("Start", style="cyan")
    table.add_column("End", style="cyan")
    table.add_column("Type", style="green")
    for i, slot in enumerate(time_slots, start=1):
        table.add_row(str(i), slot.start, slot.end, "Recess" if slot.is_recess else "Lecture")
    console.print(table)


@app.command("load")
def load_report(
    input_file: Annotated[
        Path,
        typer.Argument(help="Infrastructure JSON file"),
    ],
    preferences: Annotated[
        Optional[Path],
        typer.Option("--preferences", "-p", help="Path to teacher-preferences.json file"),
    ] = None,
) -> None:
    """Show weekly teaching load per teacher."""
    infrastructure = _load(input_file)
    store = PreferenceStore.load(preferences or DEFAULT_PREFERENCES_JSON)

    df = teaching_load(infrastructure, store)
    if df.empty:
        console.print("[bold yellow]Warning:[/bold yellow] No subjects configured")
        raise typer.Exit(1)

    table = Table(title="Weekly Teaching Load per Teacher")
    table.add_column("Teacher", style="cyan")
    table.add_column("Lectures", style="green")
    table.add_column("Labs", style="red")
    table.add_column("Electives", style="yellow")
    table.add_column("Total Hours / Week", style="magenta")
    table.add_column("Limit", style="blue")
    for row in df.itertuples(index=False):
        total = f"[bold red]{row.total_hours}[/bold red]" if row.overloaded else str(row.total_hours)
        table.add_row(
            row.teacher,
            str(row.lecture_hours),
            str(row.lab_hours),
            str(row.elective_hours),
            total,
            str(row.max_weekly_hours),
        )
    console.print(table)
    console.print(f"\n  Total weekly teaching hours (all teachers): {int(df['total_hours'].sum())}")


if __name__ == "__main__":
    app()
