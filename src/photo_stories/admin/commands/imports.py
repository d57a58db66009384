"""Import commands for photo-stories-admin.

Provides CLI commands that import Flickr albums into trip files, either
through the Flickr API or by scraping a guest pass page.
"""

from pathlib import Path
from typing import List, Optional

import typer
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from photo_stories.admin.config import AdminConfig, ensure_config_exists, get_secret
from photo_stories.admin.services.flickr import (
    FlickrClient,
    FlickrError,
    FlickrPhoto,
    GuestPassScraper,
    parse_flickr_url,
)
from photo_stories.admin.services.importer import TripImporter, build_trip
from photo_stories.core.models import BackgroundMusic, Trip
from photo_stories.core.paths import get_trip_path
from photo_stories.core.trip_store import TripStore

console = Console()
app = typer.Typer(help="Import Flickr albums")


def _load_config(config_path: Optional[Path]) -> AdminConfig:
    """Load the admin config, creating the default one if needed."""
    if config_path:
        try:
            return AdminConfig.load(config_path)
        except FileNotFoundError:
            console.print(f"[red]Config file not found: {config_path}[/red]")
            raise typer.Exit(1)
    return ensure_config_exists()


def _save_trip(
    config: AdminConfig,
    photos: List[FlickrPhoto],
    trip_id: str,
    title: str,
    description: str,
    duration: int,
    dry_run: bool,
) -> Trip:
    """Build, preview, and save an imported trip."""
    music = BackgroundMusic(
        enabled=False,
        track_id=config.default_track_id,
        volume=config.default_music_volume,
    )
    trip = build_trip(photos, trip_id, title, description, duration, music)

    video_count = sum(1 for p in trip.photos if p.is_video)
    total_seconds = int(trip.total_duration)

    preview_table = Table(title=f"Trip Preview: {trip.title}")
    preview_table.add_column("ID", style="dim")
    preview_table.add_column("Type", style="magenta")
    preview_table.add_column("Caption", style="cyan")
    preview_table.add_column("URL", style="green")

    for photo in trip.photos[:20]:
        preview_table.add_row(photo.id, photo.type, photo.caption, photo.url)

    if len(trip.photos) > 20:
        preview_table.add_row("...", "", f"[dim]{len(trip.photos) - 20} more items...[/dim]", "")

    console.print(preview_table)
    console.print(
        f"[cyan]Trip ID:[/cyan] {trip.id}  "
        f"[cyan]Items:[/cyan] {len(trip.photos)} ({len(trip.photos) - video_count} photos, "
        f"{video_count} videos)  "
        f"[cyan]Duration:[/cyan] {total_seconds // 60}m {total_seconds % 60}s"
    )

    if dry_run:
        console.print("[yellow]Dry run - trip not saved[/yellow]")
        return trip

    store = TripStore(config.data_dir, config.music_dir)
    TripImporter(store).save(trip)

    console.print(
        Panel.fit(
            f"[green]Saved trip data:[/green] {get_trip_path(config.data_dir, trip.id)}\n"
            f"[green]Updated trips index:[/green] {store.index_path}\n\n"
            "Next: [bold]photo-stories run[/bold] to view the slideshow",
            title="Import complete",
            border_style="green",
        )
    )
    return trip


@app.command("flickr")
def import_flickr(
    album_url: str = typer.Argument(..., help="Flickr album URL"),
    trip_id: str = typer.Argument(..., help="Trip ID (e.g., mexico-city-2024)"),
    title: str = typer.Option("Photo Trip", "--title", "-t", help="Trip title"),
    description: str = typer.Option("", "--description", "-d", help="Trip description"),
    duration: Optional[int] = typer.Option(
        None,
        "--duration",
        help="Seconds per photo",
    ),
    dry_run: bool = typer.Option(
        False,
        "--dry-run",
        "-n",
        help="Preview without saving",
    ),
    config_path: Path = typer.Option(
        None,
        "--config",
        "-c",
        help="Path to config file",
    ),
) -> None:
    """Import a public Flickr album using the Flickr API.

    Requires the FLICKR_API_KEY environment variable. Private albums shared
    through a guest pass should use 'import scrape' instead.
    """
    config = _load_config(config_path)

    try:
        album = parse_flickr_url(album_url)
    except ValueError as e:
        console.print(f"[red]{e}[/red]")
        raise typer.Exit(1)

    try:
        client = FlickrClient(
            api_key=get_secret("flickr.api_key") or "",
            api_secret=get_secret("flickr.api_secret"),
            base_url=config.flickr_api_base,
        )
    except ValueError as e:
        console.print(f"[red]{e}[/red]")
        raise typer.Exit(1)

    if not client.api_secret:
        console.print("[yellow]Warning: FLICKR_API_SECRET not set. Public albums may still work.[/yellow]")

    console.print(f"[cyan]User:[/cyan] {album.user_id}  [cyan]Album:[/cyan] {album.photoset_id}")
    if album.is_guest_pass:
        console.print("[yellow]Guest pass URL (private album)[/yellow]")

    try:
        photos = client.get_album_photos(album)
    except FlickrError as e:
        console.print(f"[red]Error: {e}[/red]")
        raise typer.Exit(1)

    if not photos:
        console.print("[red]No photos found in album[/red]")
        raise typer.Exit(1)

    console.print(f"[green]Found {len(photos)} photos[/green]")
    _save_trip(
        config,
        photos,
        trip_id,
        title,
        description,
        duration or config.default_photo_duration,
        dry_run,
    )


@app.command("scrape")
def import_scrape(
    guest_pass_url: str = typer.Argument(..., help="Flickr guest pass URL"),
    trip_id: str = typer.Argument(..., help="Trip ID (e.g., mexico-city-2024)"),
    title: str = typer.Option("Photo Trip", "--title", "-t", help="Trip title"),
    description: str = typer.Option("", "--description", "-d", help="Trip description"),
    duration: Optional[int] = typer.Option(
        None,
        "--duration",
        help="Seconds per photo",
    ),
    max_pages: int = typer.Option(
        50,
        "--max-pages",
        help="Maximum album pages to follow",
    ),
    probe_sizes: bool = typer.Option(
        False,
        "--probe-sizes",
        help="Probe for the largest available image size (slower)",
    ),
    dry_run: bool = typer.Option(
        False,
        "--dry-run",
        "-n",
        help="Preview without saving",
    ),
    config_path: Path = typer.Option(
        None,
        "--config",
        "-c",
        help="Path to config file",
    ),
) -> None:
    """Import a Flickr album by scraping its guest pass page.

    Works with private albums; no API key is needed.
    """
    config = _load_config(config_path)
    scraper = GuestPassScraper(max_pages=max_pages)

    console.print(f"[cyan]Scraping {guest_pass_url}...[/cyan]")
    try:
        photos = scraper.scrape(guest_pass_url)
    except FlickrError as e:
        console.print(f"[red]Error: {e}[/red]")
        console.print("Make sure the guest pass URL is valid and opens in a browser.")
        raise typer.Exit(1)

    if not photos:
        console.print("[red]No photos found in album[/red]")
        raise typer.Exit(1)

    if probe_sizes:
        for photo in photos:
            if not photo.is_video:
                photo.url = scraper.best_available_url(photo)

    video_count = sum(1 for p in photos if p.is_video)
    console.print(
        f"[green]Found {len(photos)} items ({len(photos) - video_count} photos, "
        f"{video_count} videos)[/green]"
    )
    _save_trip(
        config,
        photos,
        trip_id,
        title,
        description,
        duration or config.default_photo_duration,
        dry_run,
    )
