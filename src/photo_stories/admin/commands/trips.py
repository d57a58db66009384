"""Trip commands for photo-stories-admin.

Provides CLI commands for listing and inspecting trips and rebuilding the
trips index.
"""

from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from photo_stories.admin.config import AdminConfig, ensure_config_exists
from photo_stories.core.timeline import format_time, resolve_timeline
from photo_stories.core.trip_store import TripLoadError, TripStore

console = Console()
app = typer.Typer(help="Trip operations")


def _load_config(config_path: Optional[Path]) -> AdminConfig:
    """Load the admin config, creating the default one if needed."""
    if config_path:
        try:
            return AdminConfig.load(config_path)
        except FileNotFoundError:
            console.print(f"[red]Config file not found: {config_path}[/red]")
            raise typer.Exit(1)
    return ensure_config_exists()


@app.command("list")
def list_trips(
    config_path: Path = typer.Option(
        None,
        "--config",
        "-c",
        help="Path to config file",
    ),
) -> None:
    """List trips from the trips index."""
    config = _load_config(config_path)
    store = TripStore(config.data_dir, config.music_dir)

    try:
        trips = store.list_trips()
    except TripLoadError as e:
        console.print(f"[red]Error: {e}[/red]")
        raise typer.Exit(1)

    if not trips:
        console.print(f"[yellow]No trips found in {store.index_path}[/yellow]")
        return

    table = Table(title="Trips")
    table.add_column("ID", style="cyan")
    table.add_column("Title", style="green")
    table.add_column("Photos", justify="right")
    table.add_column("Duration", justify="right")
    table.add_column("Created", style="dim")

    for trip in trips:
        table.add_row(
            trip.id,
            trip.title,
            str(trip.photo_count),
            trip.formatted_duration,
            trip.created_date,
        )

    console.print(table)


@app.command("show")
def show_trip(
    trip_id: str = typer.Argument(..., help="Trip ID"),
    config_path: Path = typer.Option(
        None,
        "--config",
        "-c",
        help="Path to config file",
    ),
) -> None:
    """Show a trip and its photo timeline."""
    config = _load_config(config_path)
    store = TripStore(config.data_dir, config.music_dir)

    try:
        trip = store.load_trip(trip_id)
    except TripLoadError as e:
        console.print(f"[red]{e}[/red]")
        raise typer.Exit(1)

    music = trip.background_music
    console.print(
        Panel.fit(
            f"[cyan]Title:[/cyan] {trip.title}\n"
            f"[cyan]Description:[/cyan] {trip.description or '-'}\n"
            f"[cyan]Created:[/cyan] {trip.created_date}\n"
            f"[cyan]Photos:[/cyan] {trip.photo_count}\n"
            f"[cyan]Duration:[/cyan] {format_time(trip.total_duration)}\n"
            f"[cyan]Music:[/cyan] {'enabled' if music.enabled else 'disabled'}"
            f"{f' ({music.track_id})' if music.track_id else ''}",
            title=trip.id,
            border_style="green",
        )
    )

    timeline = resolve_timeline(trip)
    table = Table(title="Photo Timeline")
    table.add_column("#", style="dim", justify="right")
    table.add_column("ID", style="cyan")
    table.add_column("Start", justify="right")
    table.add_column("End", justify="right")
    table.add_column("Caption")

    for i, photo in enumerate(trip.photos, 1):
        window = timeline.get(photo.id)
        table.add_row(
            str(i),
            photo.id,
            f"{window.start:.1f}" if window else "-",
            f"{window.end:.1f}" if window else "-",
            photo.caption,
        )

    console.print(table)


@app.command("reindex")
def reindex(
    config_path: Path = typer.Option(
        None,
        "--config",
        "-c",
        help="Path to config file",
    ),
) -> None:
    """Rebuild the trips index from the trip files on disk."""
    config = _load_config(config_path)
    store = TripStore(config.data_dir, config.music_dir)

    count = 0
    for trip_id in store.list_trip_ids():
        try:
            trip = store.load_trip(trip_id)
        except TripLoadError as e:
            console.print(f"[yellow]Skipping {trip_id}: {e}[/yellow]")
            continue
        store.update_index(trip)
        count += 1

    console.print(f"[green]Indexed {count} trip(s) in {store.index_path}[/green]")
