"""
Main CLI application using Typer.
"""

import asyncio
import logging
from pathlib import Path
from typing import Annotated, NoReturn, Optional

import pendulum
import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.table import Table

from ..config import AppConfig
from ..adapters.file_source import FileScheduleSource
from ..domain.availability_resolver import AvailabilityResolver
from ..domain.exceptions import AvailabilityError
from ..domain.models import ViewMode
from ..domain.schedule_expander import WeeklyScheduleExpander
from ..domain.timeutils import DayKey, parse_iso_date
from ..services.booking import BookingAvailabilityService

app = typer.Typer(
    name="inspectoravail",
    help="Resolve inspector availability for the online booking scheduler",
    add_completion=False
)

console = Console()

logger = logging.getLogger(__name__)

ConfigOption = Annotated[
    Optional[Path],
    typer.Option("--config", "-c", help="Path to config file. Defaults to ./config.yaml"),
]
DataOption = Annotated[
    Optional[Path],
    typer.Option("--data", "-d", help="Schedule data file (JSON or YAML). Defaults to data_file from the config."),
]
ViewModeOption = Annotated[
    Optional[ViewMode],
    typer.Option("--view-mode", help="Override the company's availability view mode."),
]
VerboseOption = Annotated[bool, typer.Option("--verbose", "-v", help="Enable debug logging.")]


def _configure_logging(level: str, verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else level,
        format="%(message)s",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
        force=True,
    )


def _build_service(
    *,
    config_file: Optional[Path],
    data_file: Optional[Path],
    view_mode: Optional[ViewMode],
    verbose: bool,
) -> BookingAvailabilityService:
    """
    Load configuration and schedule data and wire up the booking service.

    Raises:
        FileNotFoundError: If the config or data file doesn't exist
        ValueError: If no data file is configured or the config is invalid
        ScheduleSourceError: If the data file cannot be parsed
    """
    config = AppConfig.load_or_default(config_file)
    _configure_logging(config.log_level, verbose)

    data_path = data_file or config.data_file
    if data_path is None:
        raise ValueError("No schedule data file given. Use --data or set data_file in the config.")

    logger.debug("Using schedule data from %s", data_path)
    source = FileScheduleSource(data_path, default_view_mode=config.defaults.view_mode)
    resolver = AvailabilityResolver(
        expander=WeeklyScheduleExpander(interval_minutes=config.defaults.slot_interval_minutes)
    )
    return BookingAvailabilityService(
        schedule_source=source,
        resolver=resolver,
        view_mode_override=view_mode,
    )


def _fail(error: Exception) -> NoReturn:
    console.print(f"[bold red]Error:[/bold red] {escape(str(error))}")
    raise typer.Exit(1)


@app.command()
def times(
    company: Annotated[str, typer.Argument(help="Company id")],
    inspector: Annotated[str, typer.Argument(help="Inspector id")],
    date: Annotated[str, typer.Argument(help="Date (YYYY-MM-DD)")],
    config_file: ConfigOption = None,
    data_file: DataOption = None,
    view_mode: ViewModeOption = None,
    verbose: VerboseOption = False,
):
    """
    List the bookable times of an inspector on a date.

    Examples:

        inspectoravail times acme insp-1 2025-03-10 --data schedules.yaml
    """
    try:
        target_date = parse_iso_date(date)
        service = _build_service(
            config_file=config_file,
            data_file=data_file,
            view_mode=view_mode,
            verbose=verbose,
        )
        available = asyncio.run(
            service.available_times(
                company_id=company,
                inspector_id=inspector,
                target_date=target_date,
            )
        )
    except (FileNotFoundError, ValueError, AvailabilityError) as e:
        _fail(e)

    console.print()
    if not available:
        console.print(f"[yellow]⚠ No bookable times on {target_date.format('dddd, YYYY-MM-DD')}.[/yellow]\n")
        return

    table = Table(
        title=f"Bookable times on {target_date.format('dddd, YYYY-MM-DD')}",
        show_header=True,
        header_style="bold cyan"
    )
    table.add_column("#", style="dim", justify="right")
    table.add_column("Time", style="bold green")

    for idx, value in enumerate(available, 1):
        table.add_row(str(idx), value)

    console.print(table)
    console.print()


@app.command()
def check(
    company: Annotated[str, typer.Argument(help="Company id")],
    inspector: Annotated[str, typer.Argument(help="Inspector id")],
    date: Annotated[str, typer.Argument(help="Date (YYYY-MM-DD)")],
    time: Annotated[str, typer.Argument(help="Time (HH:MM)")],
    config_file: ConfigOption = None,
    data_file: DataOption = None,
    view_mode: ViewModeOption = None,
    verbose: VerboseOption = False,
):
    """
    Check whether an inspector can be booked at a given date and time.

    Exits with status 2 when the time is not available.
    """
    try:
        target_date = parse_iso_date(date)
        service = _build_service(
            config_file=config_file,
            data_file=data_file,
            view_mode=view_mode,
            verbose=verbose,
        )
        result = asyncio.run(
            service.check_time(
                company_id=company,
                inspector_id=inspector,
                target_date=target_date,
                time=time,
            )
        )
    except (FileNotFoundError, ValueError, AvailabilityError) as e:
        _fail(e)

    console.print()
    if result.available:
        console.print(f"[bold green]✓ {time} on {target_date.to_date_string()} is available[/bold green]")
    else:
        console.print(f"[bold red]✗ {time} on {target_date.to_date_string()} is not available[/bold red]")

    if result.available_times:
        console.print(f"   Bookable that day: {', '.join(result.available_times)}")
    else:
        console.print("   [dim]No bookable times that day.[/dim]")
    console.print()

    if not result.available:
        raise typer.Exit(2)


@app.command()
def month(
    company: Annotated[str, typer.Argument(help="Company id")],
    inspector: Annotated[str, typer.Argument(help="Inspector id")],
    year_month: Annotated[str, typer.Argument(metavar="YYYY-MM", help="Month to show")],
    config_file: ConfigOption = None,
    data_file: DataOption = None,
    view_mode: ViewModeOption = None,
    verbose: VerboseOption = False,
):
    """
    Show a month calendar marking the days with at least one bookable time.
    """
    try:
        try:
            first_day = pendulum.from_format(year_month, "YYYY-MM").date()
        except ValueError as exc:
            raise ValueError(f"Month must be in YYYY-MM format, got {year_month!r}") from exc

        service = _build_service(
            config_file=config_file,
            data_file=data_file,
            view_mode=view_mode,
            verbose=verbose,
        )
        calendar = asyncio.run(
            service.month_view(
                company_id=company,
                inspector_id=inspector,
                year=first_day.year,
                month=first_day.month,
            )
        )
    except (FileNotFoundError, ValueError, AvailabilityError) as e:
        _fail(e)

    table = Table(
        title=first_day.format("MMMM YYYY"),
        show_header=True,
        header_style="bold cyan"
    )
    for day_key in DayKey:
        table.add_column(day_key.value[:3].title(), justify="center")

    # Sunday-first grid
    row = [""] * (first_day.isoweekday() % 7)
    for iso_date, is_available in calendar.items():
        day_number = str(int(iso_date[-2:]))
        row.append(f"[bold green]{day_number}[/bold green]" if is_available else f"[dim]{day_number}[/dim]")
        if len(row) == 7:
            table.add_row(*row)
            row = []
    if row:
        table.add_row(*(row + [""] * (7 - len(row))))

    bookable_days = sum(1 for is_available in calendar.values() if is_available)

    console.print()
    console.print(table)
    console.print(f"\n[bold]{bookable_days}[/bold] bookable day(s)\n")


@app.command()
def inspectors(
    company: Annotated[str, typer.Argument(help="Company id")],
    date: Annotated[str, typer.Argument(help="Date (YYYY-MM-DD)")],
    config_file: ConfigOption = None,
    data_file: DataOption = None,
    view_mode: ViewModeOption = None,
    verbose: VerboseOption = False,
):
    """
    List the inspectors of a company who are bookable on a date.
    """
    try:
        target_date = parse_iso_date(date)
        service = _build_service(
            config_file=config_file,
            data_file=data_file,
            view_mode=view_mode,
            verbose=verbose,
        )
        bookable = asyncio.run(
            service.available_inspectors(company_id=company, target_date=target_date)
        )
    except (FileNotFoundError, ValueError, AvailabilityError) as e:
        _fail(e)

    console.print()
    if not bookable:
        console.print(f"[yellow]⚠ No inspector is bookable on {target_date.to_date_string()}.[/yellow]\n")
        return

    table = Table(
        title=f"Bookable inspectors on {target_date.to_date_string()}",
        show_header=True,
        header_style="bold cyan"
    )
    table.add_column("Inspector", style="bold yellow")
    table.add_column("Times", style="green")

    for inspector, available in bookable.items():
        table.add_row(inspector.display_name(), ", ".join(available))

    console.print(table)
    console.print()


@app.command()
def version():
    """
    Show version information.
    """
    from .. import __version__
    console.print(f"\n[bold cyan]inspectoravail[/bold cyan] version [bold]{__version__}[/bold]\n")


if __name__ == "__main__":
    app()
