"""
Main CLI application using Typer.
"""

import asyncio
import logging
from pathlib import Path
from typing import Optional, Annotated, Tuple

import pendulum
import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

from ..adapters.json_booking_source import JsonBookingSource
from ..adapters.yaml_repository import YamlConfigurationRepository
from ..config import AppConfig, get_default_config_path
from ..domain.booking_duration import describe_date_range, describe_duration
from ..domain.exceptions import RentalCalendarError
from ..domain.hourly_pricing import format_hour_range
from ..domain.models import DayStatus, to_date
from ..domain.schedule_summary import group_weekly_hours, summarize
from ..services.asset_calendar import AssetCalendarService

app = typer.Typer(
    name="rentalcalendar",
    help="Inspect and edit availability for rentable assets",
    add_completion=False
)

console = Console()

ConfigOption = Annotated[
    Optional[Path],
    typer.Option("--config", "-c", help="Path to config file. Defaults to ./config.yaml")
]

STATUS_STYLES = {
    DayStatus.AVAILABLE: "bold",
    DayStatus.BLOCKED: "dim strike",
    DayStatus.BOOKED: "bold green",
    DayStatus.PENDING: "bold yellow",
    DayStatus.PAST: "dim",
    DayStatus.OUTSIDE_WINDOW: "dim italic",
    DayStatus.UNKNOWN: "red",
}


@app.callback()
def main(
    verbose: Annotated[bool, typer.Option("--verbose", "-v", help="Show debug logging")] = False,
):
    """
    Availability calendars, weekly hours and hourly pricing for rentable assets.
    """
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=console, show_path=False)],
    )


def _build_service(config_file: Optional[Path]) -> Tuple[AppConfig, AssetCalendarService]:
    config_path = config_file or get_default_config_path()
    config = AppConfig.load_from_yaml(config_path) if config_path.exists() else AppConfig()

    service = AssetCalendarService(
        booking_source=JsonBookingSource(config.storage.bookings_file),
        repository=YamlConfigurationRepository(config.storage.data_dir),
        timezone=config.timezone,
        operating_start=config.operating_hours.get_start(),
        operating_end=config.operating_hours.get_end(),
        presets=config.pricing.presets(),
        fallback_rate=config.pricing.fallback_hourly_rate,
    )
    return config, service


def _parse_date(value: str, label: str):
    try:
        return to_date(value)
    except ValueError as e:
        console.print(f"[bold red]Error:[/bold red] Invalid {label} date '{value}': {e}")
        raise typer.Exit(1)


def _fail(error: Exception) -> None:
    console.print(f"[bold red]Error:[/bold red] {error}")
    raise typer.Exit(1)


@app.command()
def calendar(
    asset_id: Annotated[str, typer.Argument(help="Asset identifier")],
    month: Annotated[Optional[str], typer.Option("--month", "-m", help="Month to show (YYYY-MM)")] = None,
    config_file: ConfigOption = None,
):
    """
    Show the availability status of every day in a month.

    Examples:

        rentalcalendar calendar truck-42
        rentalcalendar calendar truck-42 --month 2025-03
    """
    try:
        config, service = _build_service(config_file)

        if month:
            try:
                first = pendulum.from_format(month, "YYYY-MM", tz=config.timezone)
            except ValueError as e:
                console.print(f"[bold red]Error:[/bold red] Invalid month '{month}': {e}")
                raise typer.Exit(1)
        else:
            first = pendulum.now(config.timezone).start_of("month")

        statuses = asyncio.run(
            service.month_calendar(asset_id, year=first.year, month=first.month)
        )
    except (FileNotFoundError, ValueError, RentalCalendarError) as e:
        _fail(e)

    table = Table(
        title=f"{asset_id} - {first.format('MMMM YYYY')}",
        show_header=True,
        header_style="bold cyan"
    )
    for header in ("Mon", "Tue", "Wed", "Thu", "Fri", "Sat", "Sun"):
        table.add_column(header, justify="right")

    days = list(statuses.items())
    week = [""] * days[0][0].weekday()

    for day, status in days:
        week.append(f"[{STATUS_STYLES[status]}]{day.day}[/]")
        if len(week) == 7:
            table.add_row(*week)
            week = []
    if week:
        table.add_row(*(week + [""] * (7 - len(week))))

    console.print()
    console.print(table)
    console.print(
        "  ".join(f"[{style}]{status.value}[/]" for status, style in STATUS_STYLES.items())
    )
    if DayStatus.UNKNOWN in statuses.values():
        console.print("[yellow]⚠ Booking data unavailable; some days could not be resolved.[/yellow]")
    console.print()


@app.command()
def summary(
    asset_id: Annotated[str, typer.Argument(help="Asset identifier")],
    config_file: ConfigOption = None,
):
    """
    Show weekly hours and hourly pricing tiers for an asset.
    """
    try:
        _, service = _build_service(config_file)
        configuration = asyncio.run(service.load_configuration(asset_id))
    except (FileNotFoundError, ValueError, RentalCalendarError) as e:
        _fail(e)

    schedule_summary = summarize(configuration.schedule)

    console.print()
    if schedule_summary is None:
        console.print("[yellow]No weekly hours configured.[/yellow]")
    else:
        hours = f" · {schedule_summary.hours_text}" if schedule_summary.hours_text else ""
        console.print(f"[bold cyan]{schedule_summary.days_text}{hours}[/bold cyan]\n")

        hours_table = Table(title="Operating Hours", show_header=False)
        hours_table.add_column("Days", style="bold")
        hours_table.add_column("Hours")
        for group in group_weekly_hours(configuration.schedule):
            hours_table.add_row(group.label, group.hours_text)
        console.print(hours_table)

    pricing = configuration.pricing
    if pricing and pricing.enabled:
        pricing_table = Table(
            title=f"Hourly Pricing (default {pricing.default_price}/h)",
            show_header=True,
            header_style="bold cyan"
        )
        pricing_table.add_column("Tier", style="bold yellow")
        pricing_table.add_column("Hours")
        pricing_table.add_column("Price", justify="right")
        for tier in pricing.tiers:
            pricing_table.add_row(tier.label, format_hour_range(tier.hours), f"{tier.price}")
        console.print(pricing_table)
    console.print()


@app.command()
def bookings(
    asset_id: Annotated[str, typer.Argument(help="Asset identifier")],
    config_file: ConfigOption = None,
):
    """
    List bookings for an asset with their dates and duration.
    """
    try:
        _, service = _build_service(config_file)
        records = asyncio.run(service.fetch_bookings(asset_id))
    except (FileNotFoundError, ValueError, RentalCalendarError) as e:
        _fail(e)

    if records is None:
        console.print("[bold red]Error:[/bold red] Booking data is unavailable.")
        raise typer.Exit(1)

    if not records:
        console.print("[yellow]No bookings for this asset.[/yellow]")
        return

    table = Table(title=f"Bookings for {asset_id}", show_header=True, header_style="bold cyan")
    table.add_column("ID", style="dim")
    table.add_column("Status")
    table.add_column("Dates")
    table.add_column("Duration")

    for record in sorted(records, key=lambda r: r.start_date):
        table.add_row(
            record.id,
            record.status.value,
            describe_date_range(record),
            describe_duration(record),
        )

    console.print()
    console.print(table)
    console.print()


@app.command()
def block(
    asset_id: Annotated[str, typer.Argument(help="Asset identifier")],
    start: Annotated[str, typer.Argument(help="Date to block (YYYY-MM-DD)")],
    end: Annotated[Optional[str], typer.Argument(help="Last date of a range to block")] = None,
    reason: Annotated[Optional[str], typer.Option("--reason", "-r", help="Why the dates are blocked")] = None,
    config_file: ConfigOption = None,
):
    """
    Block a date, or an inclusive range of dates.
    """
    start_date = _parse_date(start, "start")
    end_date = _parse_date(end, "end") if end else None

    try:
        _, service = _build_service(config_file)
        configuration = asyncio.run(
            service.block_dates(asset_id, start_date=start_date, end_date=end_date, reason=reason)
        )
    except (FileNotFoundError, ValueError, RentalCalendarError) as e:
        _fail(e)

    console.print(f"[green]✓ {len(configuration.blocking)} blocked date(s) for {asset_id}.[/green]")


@app.command()
def unblock(
    asset_id: Annotated[str, typer.Argument(help="Asset identifier")],
    start: Annotated[str, typer.Argument(help="Date to unblock (YYYY-MM-DD)")],
    end: Annotated[Optional[str], typer.Argument(help="Last date of a range to unblock")] = None,
    config_file: ConfigOption = None,
):
    """
    Unblock a date, or an inclusive range of dates.
    """
    start_date = _parse_date(start, "start")
    end_date = _parse_date(end, "end") if end else None

    try:
        _, service = _build_service(config_file)
        configuration = asyncio.run(
            service.unblock_dates(asset_id, start_date=start_date, end_date=end_date)
        )
    except (FileNotFoundError, ValueError, RentalCalendarError) as e:
        _fail(e)

    console.print(f"[green]✓ {len(configuration.blocking)} blocked date(s) for {asset_id}.[/green]")


@app.command()
def block_until(
    asset_id: Annotated[str, typer.Argument(help="Asset identifier")],
    until: Annotated[str, typer.Argument(help="Last date to block (YYYY-MM-DD)")],
    reason: Annotated[Optional[str], typer.Option("--reason", "-r", help="Why the dates are blocked")] = None,
    config_file: ConfigOption = None,
):
    """
    Block every date from today through the given date.
    """
    until_date = _parse_date(until, "until")

    try:
        config, service = _build_service(config_file)
        configuration = asyncio.run(
            service.block_until(
                asset_id,
                until=until_date,
                today=pendulum.today(config.timezone),
                reason=reason,
            )
        )
    except (FileNotFoundError, ValueError, RentalCalendarError) as e:
        _fail(e)

    console.print(f"[green]✓ {len(configuration.blocking)} blocked date(s) for {asset_id}.[/green]")


@app.command()
def clear_blocks(
    asset_id: Annotated[str, typer.Argument(help="Asset identifier")],
    config_file: ConfigOption = None,
):
    """
    Remove every blocked date for an asset.
    """
    try:
        _, service = _build_service(config_file)
        asyncio.run(service.clear_blocks(asset_id))
    except (FileNotFoundError, ValueError, RentalCalendarError) as e:
        _fail(e)

    console.print(f"[green]✓ All blocked dates cleared for {asset_id}.[/green]")


@app.command()
def add_hours(
    asset_id: Annotated[str, typer.Argument(help="Asset identifier")],
    day: Annotated[str, typer.Argument(help="Day of the week (mon..sun)")],
    start: Annotated[str, typer.Argument(help="Opening hour (HH:00)")],
    end: Annotated[str, typer.Argument(help="Closing hour (HH:00)")],
    config_file: ConfigOption = None,
):
    """
    Add an opening range to one day of the weekly schedule.

    Examples:

        rentalcalendar add-hours truck-42 mon 08:00 18:00
    """
    try:
        _, service = _build_service(config_file)
        configuration = asyncio.run(service.add_hours(asset_id, day=day, start=start, end=end))
    except (FileNotFoundError, ValueError, RentalCalendarError) as e:
        _fail(e)

    if configuration is None:
        options = service.time_options()
        console.print(
            f"[yellow]⚠ {start}-{end} was not added. Ranges must not overlap and must use "
            f"hours from {options[0]} to {options[-1]}.[/yellow]"
        )
        raise typer.Exit(1)

    console.print(f"[green]✓ Added {start}-{end} on {day} for {asset_id}.[/green]")


@app.command()
def remove_hours(
    asset_id: Annotated[str, typer.Argument(help="Asset identifier")],
    day: Annotated[str, typer.Argument(help="Day of the week (mon..sun)")],
    index: Annotated[int, typer.Argument(help="Position of the range on that day, starting at 1")],
    config_file: ConfigOption = None,
):
    """
    Remove an opening range from one day of the weekly schedule.
    """
    try:
        _, service = _build_service(config_file)
        configuration = asyncio.run(service.remove_hours(asset_id, day=day, index=index - 1))
    except (FileNotFoundError, ValueError, RentalCalendarError) as e:
        _fail(e)

    if configuration is None:
        console.print(f"[yellow]⚠ {day} has no range #{index}.[/yellow]")
        raise typer.Exit(1)

    console.print(f"[green]✓ Removed range #{index} on {day} for {asset_id}.[/green]")


@app.command()
def copy_hours(
    asset_id: Annotated[str, typer.Argument(help="Asset identifier")],
    source_day: Annotated[str, typer.Argument(help="Day to copy from (mon..sun)")],
    weekdays: Annotated[bool, typer.Option("--weekdays", help="Only copy to Monday-Friday")] = False,
    config_file: ConfigOption = None,
):
    """
    Copy one day's opening hours to the weekdays or to every other day.
    """
    try:
        _, service = _build_service(config_file)
        asyncio.run(service.copy_hours(asset_id, source_day=source_day, weekdays_only=weekdays))
    except (FileNotFoundError, ValueError, RentalCalendarError) as e:
        _fail(e)

    target = "weekdays" if weekdays else "every day"
    console.print(f"[green]✓ Copied {source_day} hours to {target} for {asset_id}.[/green]")


@app.command()
def pricing(
    asset_id: Annotated[str, typer.Argument(help="Asset identifier")],
    enable: Annotated[bool, typer.Option("--enable/--disable", help="Turn special hourly pricing on or off")] = True,
    config_file: ConfigOption = None,
):
    """
    Turn special hourly pricing on or off.

    Enabling pricing without tiers seeds a peak tier from the configured presets.
    """
    try:
        _, service = _build_service(config_file)
        configuration = asyncio.run(service.set_hourly_pricing(asset_id, enabled=enable))
    except (FileNotFoundError, ValueError, RentalCalendarError) as e:
        _fail(e)

    state = "enabled" if enable else "disabled"
    console.print(
        f"[green]✓ Hourly pricing {state} for {asset_id} "
        f"({len(configuration.pricing.tiers)} tier(s)).[/green]"
    )


@app.command()
def add_tier(
    asset_id: Annotated[str, typer.Argument(help="Asset identifier")],
    kind: Annotated[str, typer.Argument(help="Tier type: peak, offpeak or custom")],
    config_file: ConfigOption = None,
):
    """
    Add a pricing tier seeded from the configured presets.
    """
    try:
        _, service = _build_service(config_file)
        configuration = asyncio.run(service.add_pricing_tier(asset_id, kind=kind))
    except (FileNotFoundError, ValueError, RentalCalendarError) as e:
        _fail(e)

    tier = configuration.pricing.tiers[-1]
    console.print(
        f"[green]✓ Added {tier.label} ({tier.id}) at {tier.price}/h: "
        f"{format_hour_range(tier.hours)}[/green]"
    )


@app.command()
def tier_hour(
    asset_id: Annotated[str, typer.Argument(help="Asset identifier")],
    tier_id: Annotated[str, typer.Argument(help="Tier identifier")],
    hour: Annotated[int, typer.Argument(help="Hour of day (0-23)")],
    config_file: ConfigOption = None,
):
    """
    Toggle an hour in a pricing tier, taking it away from any other tier.
    """
    try:
        _, service = _build_service(config_file)
        configuration = asyncio.run(service.toggle_tier_hour(asset_id, tier_id=tier_id, hour=hour))
    except (FileNotFoundError, ValueError, RentalCalendarError) as e:
        _fail(e)

    if configuration is None:
        console.print(f"[yellow]⚠ {asset_id} has no pricing tier '{tier_id}'.[/yellow]")
        raise typer.Exit(1)

    tier = configuration.pricing.tier(tier_id)
    console.print(f"[green]✓ {tier.label}: {format_hour_range(tier.hours)}[/green]")


@app.command()
def version():
    """
    Show version information.
    """
    from .. import __version__
    console.print(f"\n[bold cyan]rentalcalendar[/bold cyan] version [bold]{__version__}[/bold]\n")


if __name__ == "__main__":
    app()
