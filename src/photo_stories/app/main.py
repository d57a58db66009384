"""CLI entry point for the photo-stories viewer.

Provides the `photo-stories` command for launching the Textual interface
and previewing a trip's slideshow schedule.
"""

import os
import random
import subprocess
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from photo_stories.app import __version__
from photo_stories.app.app import PhotoStoriesApp
from photo_stories.app.config import AppConfig, ensure_app_config_exists, get_app_config_path
from photo_stories.app.device import DeviceType, detect_device_type, parse_device_type
from photo_stories.app.logging_config import setup_logging
from photo_stories.app.services.slideshow import select_music_pool
from photo_stories.core.playlist import generate_playlist, playlist_duration
from photo_stories.core.timeline import InvalidDurationError, format_time, resolve_timeline, validate_duration
from photo_stories.core.trip_store import TripLoadError, TripStore

app = typer.Typer(
    name="photo-stories",
    help="Photo Stories - trip slideshow viewer",
    no_args_is_help=False,
)
console = Console()

# Width assumed when nothing describes the display
DEFAULT_SCREEN_WIDTH = 1280


def version_callback(value: bool) -> None:
    """Callback for --version flag."""
    if value:
        console.print(f"photo-stories version {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: bool = typer.Option(
        None,
        "--version",
        "-v",
        help="Show version and exit",
        callback=version_callback,
        is_eager=True,
    ),
) -> None:
    """Photo Stories - play trip photo collections as slideshows."""


def _check_first_run() -> bool:
    """Check if this is the first run (no config exists)."""
    return not get_app_config_path().exists()


def _show_welcome() -> None:
    """Show welcome message for first run."""
    console.print(
        Panel.fit(
            "[bold green]Welcome to Photo Stories![/bold green]\n\n"
            "Import trips with [bold]photo-stories-admin import[/bold], then enjoy them here.\n"
            "Configuration will be created at: "
            f"[cyan]{get_app_config_path()}[/cyan]",
            title="photo-stories",
            border_style="green",
        )
    )


def _load_config(config_path: Optional[Path]) -> AppConfig:
    """Load the given config file or the default one."""
    try:
        if config_path:
            return AppConfig.load(config_path)
        return ensure_app_config_exists()
    except FileNotFoundError as e:
        console.print(f"[red]Config file not found: {e}[/red]")
        raise typer.Exit(1)
    except Exception as e:
        console.print(f"[red]Error loading config: {e}[/red]")
        raise typer.Exit(1)


def _resolve_device(
    config: AppConfig,
    device: Optional[str],
    user_agent: Optional[str],
    screen_width: Optional[int],
) -> DeviceType:
    """Pick the device type: explicit flag, then config, then detection."""
    override = device or config.device
    if override:
        try:
            return parse_device_type(override)
        except ValueError as e:
            console.print(f"[red]{e}[/red]")
            raise typer.Exit(1)
    return detect_device_type(user_agent, screen_width or DEFAULT_SCREEN_WIDTH)


@app.command()
def run(
    config_path: Path = typer.Option(
        None,
        "--config",
        "-c",
        help="Path to config file",
    ),
    device: Optional[str] = typer.Option(
        None,
        "--device",
        "-d",
        help="Force the device type (tv, tablet, mobile)",
    ),
    user_agent: Optional[str] = typer.Option(
        None,
        "--user-agent",
        envvar="PHOTO_STORIES_USER_AGENT",
        help="User agent used for device detection",
    ),
    screen_width: Optional[int] = typer.Option(
        None,
        "--screen-width",
        envvar="PHOTO_STORIES_SCREEN_WIDTH",
        help="Screen width in pixels used for device detection",
    ),
) -> None:
    """Launch the TUI application."""
    if _check_first_run() and not config_path:
        _show_welcome()

    config = _load_config(config_path)
    device_type = _resolve_device(config, device, user_agent, screen_width)

    logger = setup_logging(config.log_dir)
    logger.info(f"Data dir: {config.data_dir}")
    logger.info(f"Music dir: {config.music_dir}")
    logger.info(f"Device type: {device_type.value}")
    console.print(f"[dim]Session log: {config.log_dir}/photo_stories.log[/dim]")

    try:
        app_instance = PhotoStoriesApp(config, device_type=device_type)
        logger.info("Launching TUI application")
        app_instance.run()
        logger.info("Application exited normally")
    except KeyboardInterrupt:
        logger.info("Application interrupted by user (Ctrl+C)")
        console.print("\n[yellow]Interrupted by user[/yellow]")
        raise typer.Exit(0)
    except Exception as e:
        logger.exception(f"Application error: {e}")
        console.print(f"[red]Error running app: {e}[/red]")
        raise typer.Exit(1)


@app.command()
def play(
    trip_id: str = typer.Argument(..., help="Trip ID"),
    config_path: Path = typer.Option(
        None,
        "--config",
        "-c",
        help="Path to config file",
    ),
    seed: Optional[int] = typer.Option(
        None,
        "--seed",
        help="Seed for the playlist shuffle",
    ),
) -> None:
    """Print a trip's photo schedule and music playlist without the TUI."""
    config = _load_config(config_path)
    store = TripStore(config.data_dir, config.music_dir)

    try:
        trip = store.load_trip(trip_id)
        validate_duration(trip.total_duration)
        tracks = store.load_tracks() if trip.background_music.enabled else []
    except (TripLoadError, InvalidDurationError) as e:
        console.print(f"[red]Error Loading Trip: {e}[/red]")
        raise typer.Exit(1)

    if not trip.photos:
        console.print("[yellow]No Photos: this trip doesn't have any photos yet.[/yellow]")
        raise typer.Exit(1)

    console.print(f"[bold]{trip.title}[/bold] ({trip.photo_count} photos, {format_time(trip.total_duration)})")

    timeline = resolve_timeline(trip)
    photo_table = Table(title="Photo Schedule")
    photo_table.add_column("#", style="dim", justify="right")
    photo_table.add_column("Start", justify="right")
    photo_table.add_column("End", justify="right")
    photo_table.add_column("Type")
    photo_table.add_column("Caption", style="green")

    for i, photo in enumerate(trip.photos, 1):
        window = timeline.get(photo.id)
        photo_table.add_row(
            str(i),
            f"{window.start:.1f}" if window else "-",
            f"{window.end:.1f}" if window else "-",
            photo.type,
            photo.caption,
        )
    console.print(photo_table)

    rng = random.Random(seed) if seed is not None else None
    playlist = generate_playlist(select_music_pool(trip.background_music, tracks), trip.total_duration, rng)

    if not playlist:
        console.print("[dim]No background music[/dim]")
        return

    music_table = Table(title="Music Playlist")
    music_table.add_column("#", style="dim", justify="right")
    music_table.add_column("Starts", justify="right")
    music_table.add_column("Track", style="cyan")
    music_table.add_column("Title")
    music_table.add_column("Duration", justify="right")

    start = 0.0
    for i, track in enumerate(playlist, 1):
        music_table.add_row(str(i), format_time(start), track.id, track.title or "-", format_time(track.duration))
        start += track.duration
    console.print(music_table)
    console.print(f"Playlist covers {format_time(playlist_duration(playlist))} of {format_time(trip.total_duration)}")
    volume = trip.background_music.volume
    console.print(f"Volume: {config.music_volume if volume is None else volume:.2f}")


@app.command()
def config(
    show: bool = typer.Option(
        False,
        "--show",
        help="Show current configuration",
    ),
    edit: bool = typer.Option(
        False,
        "--edit",
        help="Open config in editor",
    ),
) -> None:
    """Manage application configuration."""
    config_path = get_app_config_path()

    if show or (not edit):
        if config_path.exists():
            cfg = AppConfig.load(config_path)
            console.print(f"[bold]Config file:[/bold] {config_path}")
            console.print(f"[bold]Data dir:[/bold] {cfg.data_dir}")
            console.print(f"[bold]Music dir:[/bold] {cfg.music_dir}")
            console.print(f"[bold]State dir:[/bold] {cfg.state_dir}")
            console.print(f"[bold]Auth expiry:[/bold] {cfg.auth_expiry_days} days")
            console.print(f"[bold]Countdown:[/bold] {cfg.countdown_seconds}s")
            console.print(f"[bold]Device:[/bold] {cfg.device or 'auto'}")
        else:
            console.print(f"[yellow]No config file at {config_path}[/yellow]")
            console.print("Run [bold]photo-stories run[/bold] to create default config.")

    if edit:
        editor = os.environ.get("EDITOR", "nano")
        subprocess.call([editor, str(config_path)])


def cli_entry() -> None:
    """Entry point for the CLI."""
    app()


if __name__ == "__main__":
    cli_entry()
