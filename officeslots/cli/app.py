"""
Main CLI application using Typer.
"""

import asyncio
from pathlib import Path
from typing import List, Optional, Annotated

import typer
from rich.console import Console
from rich.table import Table

from ..adapters.yaml_store import OfficeStore, load_store
from ..config import AppConfig, get_default_config_path
from ..domain.exceptions import SchedulingError
from ..domain.models import OfficeWindow, TimeSlot
from ..logging_config import setup_logging

app = typer.Typer(
    name="officeslots",
    help="Validate and inspect office time slots",
    add_completion=False
)

console = Console()

ConfigOption = Annotated[
    Optional[Path],
    typer.Option("--config", "-c", help="Path to config file. Defaults to ./config.yaml"),
]


def _load_config(config_file: Optional[Path]) -> AppConfig:
    try:
        config = AppConfig.load_from_yaml(config_file or get_default_config_path())
    except (FileNotFoundError, ValueError) as e:
        console.print(f"[bold red]Error:[/bold red] {e}")
        raise typer.Exit(1)

    setup_logging(config.log_level)
    return config


async def _open_store(config: AppConfig) -> OfficeStore:
    """Seed the in-memory store from the configured offices."""
    try:
        return await load_store(config)
    except SchedulingError as e:
        console.print(f"[bold red]Error:[/bold red] {e}")
        raise typer.Exit(1)


async def _resolve_office(store: OfficeStore, identifier: str) -> OfficeWindow:
    try:
        return await store.office_service.resolve(identifier)
    except SchedulingError as e:
        console.print(f"[bold red]Error:[/bold red] {e}")
        raise typer.Exit(1)


def _resolve_slot(slots: List[TimeSlot], identifier: str) -> Optional[TimeSlot]:
    """Find a slot by ID, or by sequence number when the identifier is a number."""
    for slot in slots:
        if slot.id == identifier:
            return slot
    if identifier.isdigit():
        for slot in slots:
            if slot.sequence == int(identifier):
                return slot
    return None


def _format_days(office: OfficeWindow) -> str:
    return ", ".join(day.name.capitalize() for day in office.sorted_working_days()) or "-"


async def _check(config: AppConfig, office: str, start: str, end: str, exclude: Optional[str]) -> None:
    store = await _open_store(config)
    target = await _resolve_office(store, office)

    exclude_id = None
    if exclude:
        slots = await store.time_slot_service.list_for_office(target.id)
        excluded = _resolve_slot(slots, exclude)
        if excluded is None:
            console.print(f"[bold red]Error:[/bold red] No slot '{exclude}' in office {target.name}")
            raise typer.Exit(1)
        exclude_id = excluded.id

    result = await store.time_slot_service.validator.validate_and_stage(
        target.id, start, end, exclude_slot_id=exclude_id
    )

    if result.accepted:
        console.print(f"[bold green]✓ Slot {result.interval} fits in {target.name}[/bold green]")
        return

    console.print(f"[bold red]✗ Rejected ({type(result.violation).__name__}):[/bold red] {result.violation.message}")
    raise typer.Exit(1)


@app.command()
def check(
    office: Annotated[str, typer.Argument(help="Office ID or name")],
    start: Annotated[str, typer.Argument(help="Slot start (HH:MM or HH:MM:SS)")],
    end: Annotated[str, typer.Argument(help="Slot end (HH:MM or HH:MM:SS)")],
    exclude: Annotated[Optional[str], typer.Option("--exclude", "-x", help="Slot ID or sequence number to ignore (when moving a slot)")] = None,
    config_file: ConfigOption = None,
):
    """
    Check whether a slot could be added to an office.

    Examples:

        officeslots check "Room A" 09:00 10:00

        officeslots check "Room A" 10:00 11:30 --exclude 2
    """
    config = _load_config(config_file)
    asyncio.run(_check(config, office, start, end, exclude))


async def _list_offices(config: AppConfig) -> List[OfficeWindow]:
    store = await _open_store(config)
    return await store.office_service.list()


@app.command()
def list_offices(config_file: ConfigOption = None):
    """
    List all configured offices.
    """
    config = _load_config(config_file)
    offices = asyncio.run(_list_offices(config))

    if not offices:
        console.print("[yellow]No offices defined in the config file.[/yellow]")
        return

    table = Table(title="Offices", show_header=True, header_style="bold cyan")
    table.add_column("Name", style="bold yellow")
    table.add_column("Working hours")
    table.add_column("Working days", style="dim")

    for item in offices:
        table.add_row(item.name, str(item.work_interval), _format_days(item))

    console.print()
    console.print(table)
    console.print()


async def _list_slots(config: AppConfig, office: str):
    store = await _open_store(config)
    target = await _resolve_office(store, office)
    return target, await store.time_slot_service.list_for_office(target.id)


@app.command()
def list_slots(
    office: Annotated[str, typer.Argument(help="Office ID or name")],
    config_file: ConfigOption = None,
):
    """
    List an office's time slots ordered by start time.
    """
    config = _load_config(config_file)
    target, slots = asyncio.run(_list_slots(config, office))

    if not slots:
        console.print(f"[yellow]Office {target.name} has no time slots.[/yellow]")
        return

    table = Table(
        title=f"Time slots - {target.name} ({target.work_interval})",
        show_header=True,
        header_style="bold cyan"
    )
    table.add_column("Slot", style="bold")
    table.add_column("ID", style="dim")

    for slot in slots:
        table.add_row(slot.format_display(), slot.id)

    console.print()
    console.print(table)
    console.print()


@app.command()
def version():
    """
    Show version information.
    """
    from .. import __version__
    console.print(f"\n[bold cyan]officeslots[/bold cyan] version [bold]{__version__}[/bold]\n")


if __name__ == "__main__":
    app()
