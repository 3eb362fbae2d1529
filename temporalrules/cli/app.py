"""
Main CLI application using Typer.
"""

import logging
from pathlib import Path
from typing import List, Optional, Annotated

import typer
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from ..config import AppConfig, get_default_config_path
from ..domain.exceptions import TemporalRulesError
from ..domain.leaves import WEEKDAY_NAMES

app = typer.Typer(
    name="temporalrules",
    help="Check dates against a business calendar built from temporal expressions",
    add_completion=False
)

console = Console()

# Exit code when at least one checked date falls outside the schedule
EXIT_EXCLUDED = 2


def _load_config(config_file: Optional[Path]) -> AppConfig:
    config_path = config_file or get_default_config_path()
    return AppConfig.load_from_yaml(config_path)


@app.command()
def check(
    dates: Annotated[List[str], typer.Argument(help="Dates or datetimes in ISO-8601 format, e.g. 2024-11-25T10:00. A bare date means midnight; a bare time is rejected.")],
    config_file: Annotated[Optional[Path], typer.Option("--config", "-c", help="Path to config file. Defaults to ./temporalrules.yaml")] = None,
    verbose: Annotated[bool, typer.Option("--verbose", "-v", help="Enable debug logging.")] = False,
):
    """
    Check whether each date falls within the configured business calendar.

    Examples:

        temporalrules check 2024-11-25T10:00

        temporalrules check 2024-11-23T10:00 2024-12-25T10:00 --config calendar.yaml

    Exits with code 2 if any date is excluded.
    """
    if verbose:
        logging.basicConfig(level=logging.DEBUG)

    try:
        config = _load_config(config_file)
        schedule = config.build_schedule()
        parsed_dates = [config.parse_date(value) for value in dates]
    except TemporalRulesError as e:
        console.print(f"[bold red]Error:[/bold red] {escape(str(e))}")
        raise typer.Exit(1)

    table = Table(
        title=f"Business calendar ({config.timezone})",
        show_header=True,
        header_style="bold cyan"
    )
    table.add_column("Date", style="bold")
    table.add_column("Weekday", style="dim")
    table.add_column("Result")

    all_included = True
    for moment in parsed_dates:
        included = schedule.includes(moment)
        all_included = all_included and included
        table.add_row(
            moment.format("YYYY-MM-DD HH:mm"),
            WEEKDAY_NAMES[moment.weekday()],
            "[green]✓ included[/green]" if included else "[red]✗ excluded[/red]"
        )

    console.print()
    console.print(table)
    console.print()

    if not all_included:
        raise typer.Exit(EXIT_EXCLUDED)


@app.command()
def show_config(
    config_file: Optional[Path] = typer.Option(
        None,
        "--config", "-c",
        help="Path to config file"
    )
):
    """
    Show the configured business calendar.
    """
    try:
        config = _load_config(config_file)
    except TemporalRulesError as e:
        console.print(f"[bold red]Error:[/bold red] {escape(str(e))}")
        raise typer.Exit(1)

    working_days = ", ".join(WEEKDAY_NAMES[day] for day in config.working_days()) or "none"
    holidays = ", ".join(day.isoformat() for day in config.holidays) or "none"
    hours = config.business_hours

    console.print(Panel.fit(
        f"[bold]Timezone:[/bold] {config.timezone}\n"
        f"[bold]Business hours:[/bold] {hours.start_hour:02d}:00 - {hours.end_hour:02d}:00\n"
        f"[bold]Working days:[/bold] {working_days}\n"
        f"[bold]Holidays:[/bold] {holidays}",
        title="Business calendar"
    ))


@app.command()
def version():
    """
    Show version information.
    """
    from .. import __version__
    console.print(f"\n[bold cyan]temporalrules[/bold cyan] version [bold]{__version__}[/bold]\n")


if __name__ == "__main__":
    app()
