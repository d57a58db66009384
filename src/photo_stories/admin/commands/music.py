"""Music commands for photo-stories-admin.

Provides CLI commands for listing the track pool and configuring trip
background music.
"""

from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.table import Table

from photo_stories.admin.config import AdminConfig, ensure_config_exists
from photo_stories.admin.services.importer import TripImporter
from photo_stories.core.trip_store import TripLoadError, TripNotFoundError, TripStore

console = Console()
app = typer.Typer(help="Background music")


def _load_config(config_path: Optional[Path]) -> AdminConfig:
    """Load the admin config, creating the default one if needed."""
    if config_path:
        try:
            return AdminConfig.load(config_path)
        except FileNotFoundError:
            console.print(f"[red]Config file not found: {config_path}[/red]")
            raise typer.Exit(1)
    return ensure_config_exists()


def _print_tracks(store: TripStore) -> None:
    """Print the available tracks."""
    tracks = store.load_tracks()
    if not tracks:
        console.print(f"[yellow]No tracks found in {store.tracks_path}[/yellow]")
        return

    table = Table(title="Available Tracks")
    table.add_column("ID", style="cyan")
    table.add_column("Title", style="green")
    table.add_column("Artist")
    table.add_column("Mood", style="magenta")
    table.add_column("Duration", justify="right")

    for track in tracks:
        seconds = int(track.duration)
        table.add_row(
            track.id,
            track.title or "-",
            track.artist or "-",
            track.mood or "-",
            f"{seconds // 60}:{seconds % 60:02d}",
        )

    console.print(table)


@app.command("tracks")
def list_tracks(
    config_path: Path = typer.Option(
        None,
        "--config",
        "-c",
        help="Path to config file",
    ),
) -> None:
    """List tracks in the music library."""
    config = _load_config(config_path)
    store = TripStore(config.data_dir, config.music_dir)

    try:
        _print_tracks(store)
    except TripLoadError as e:
        console.print(f"[red]Error: {e}[/red]")
        raise typer.Exit(1)


@app.command("set")
def set_music(
    trip_id: str = typer.Argument(..., help="Trip ID"),
    track_id: str = typer.Argument(..., help="Track ID from tracks.json"),
    enabled: bool = typer.Option(
        True,
        "--enabled/--disabled",
        help="Enable or disable music for the trip",
    ),
    volume: Optional[float] = typer.Option(
        None,
        "--volume",
        help="Playback volume (0.0 to 1.0)",
    ),
    config_path: Path = typer.Option(
        None,
        "--config",
        "-c",
        help="Path to config file",
    ),
) -> None:
    """Set or update background music for a trip."""
    config = _load_config(config_path)
    store = TripStore(config.data_dir, config.music_dir)
    importer = TripImporter(store)

    try:
        importer.set_music(
            trip_id,
            track_id,
            enabled=enabled,
            volume=volume if volume is not None else config.default_music_volume,
        )
    except TripNotFoundError as e:
        console.print(f"[red]{e}[/red]")
        raise typer.Exit(1)
    except ValueError as e:
        console.print(f"[red]{e}[/red]")
        _print_tracks(store)
        raise typer.Exit(1)

    track = store.get_track(track_id)
    console.print(f"[green]Updated {trip_id} with music: {track.title or track.id}[/green]")
    console.print(f"   Track: {track_id}")
    console.print(f"   Enabled: {enabled}")

    audio_file = store.track_path(track)
    if not audio_file.exists():
        console.print(f"[yellow]Music file missing: {audio_file}[/yellow]")


@app.command("enable-all")
def enable_all(
    config_path: Path = typer.Option(
        None,
        "--config",
        "-c",
        help="Path to config file",
    ),
) -> None:
    """Enable shuffled background music for all trips."""
    config = _load_config(config_path)
    store = TripStore(config.data_dir, config.music_dir)

    try:
        result = TripImporter(store).enable_music_all(volume=config.default_music_volume)
    except TripLoadError as e:
        console.print(f"[red]Error: {e}[/red]")
        raise typer.Exit(1)

    for trip_id in result.already_enabled:
        console.print(f"[dim]✓ {trip_id} - Already has music enabled[/dim]")
    for trip_id in result.updated:
        console.print(f"[green]✓ {trip_id} - Music enabled[/green]")

    console.print("\n[bold]Summary:[/bold]")
    console.print(f"   Total trips: {result.total}")
    console.print(f"   Updated: {len(result.updated)}")
    console.print(f"   Already enabled: {len(result.already_enabled)}")
