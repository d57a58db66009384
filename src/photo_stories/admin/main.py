"""Main entry point for photo-stories-admin CLI.

Provides a Typer-based CLI for importing Flickr albums into trip files
and managing trip background music.
"""

import logging

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.panel import Panel

from photo_stories.admin import __version__
from photo_stories.admin.commands import imports as import_commands
from photo_stories.admin.commands import music as music_commands
from photo_stories.admin.commands import trips as trip_commands

console = Console()

# Create the main Typer app
app = typer.Typer(
    name="photo-stories-admin",
    help="Administrative tools for Photo Stories",
    rich_markup_mode="rich",
)

# Add subcommand groups
app.add_typer(import_commands.app, name="import", help="Import Flickr albums")
app.add_typer(music_commands.app, name="music", help="Background music")
app.add_typer(trip_commands.app, name="trips", help="Trip operations")


def version_callback(value: bool) -> None:
    """Callback for --version flag."""
    if value:
        console.print(f"photo-stories-admin version {__version__}")
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
    debug: bool = typer.Option(
        False,
        "--debug",
        help="Show debug logging",
    ),
) -> None:
    """photo-stories-admin: Administrative tools for Photo Stories.

    Import Flickr albums as trips and manage their background music.

    ## Commands

    * [bold cyan]import[/bold cyan] - Import albums (flickr, scrape)
    * [bold cyan]music[/bold cyan] - Background music (tracks, set, enable-all)
    * [bold cyan]trips[/bold cyan] - Trip operations (list, show, reindex)

    ## Getting Started

    1. Import a private album through its guest pass:
       [dim]$ photo-stories-admin import scrape <guest_pass_url> mexico-city-2024[/dim]

    2. Enable music:
       [dim]$ photo-stories-admin music enable-all[/dim]
    """
    logging.basicConfig(
        level=logging.DEBUG if debug else logging.INFO,
        format="%(message)s",
        handlers=[RichHandler(console=console, show_path=False)],
    )


@app.command()
def config(
    action: str = typer.Argument(
        ...,
        help="Action to perform (show, set, path)",
    ),
    key: str = typer.Argument(
        None,
        help="Configuration key (for set action)",
    ),
    value: str = typer.Argument(
        None,
        help="Configuration value (for set action)",
    ),
) -> None:
    """Manage configuration.

    Show, set, or display the path to the configuration file.

    Examples:
        photo-stories-admin config show
        photo-stories-admin config set default_photo_duration 4
        photo-stories-admin config path
    """
    from photo_stories.admin.config import ensure_config_exists, get_config_path

    if action == "show":
        try:
            cfg = ensure_config_exists()
        except OSError as e:
            console.print(f"[red]Error loading config: {e}[/red]")
            raise typer.Exit(1)

        table = Panel.fit(
            f"[cyan]Data Dir:[/cyan] {cfg.data_dir}\n"
            f"[cyan]Music Dir:[/cyan] {cfg.music_dir}\n"
            f"[cyan]Flickr API:[/cyan] {cfg.flickr_api_base}\n"
            f"[cyan]Photo Duration:[/cyan] {cfg.default_photo_duration}s\n"
            f"[cyan]Music Volume:[/cyan] {cfg.default_music_volume}\n"
            f"[cyan]Default Track:[/cyan] {cfg.default_track_id}",
            title="Configuration",
            border_style="green",
        )
        console.print(table)

    elif action == "set":
        if not key or value is None:
            console.print("[red]Usage: photo-stories-admin config set <key> <value>[/red]")
            raise typer.Exit(1)

        try:
            cfg = ensure_config_exists()
            cfg.set(key, value)
            cfg.save()
            console.print(f"[green]Set {key} = {value}[/green]")
        except ValueError as e:
            console.print(f"[red]Error: {e}[/red]")
            raise typer.Exit(1)

    elif action == "path":
        console.print(get_config_path())

    else:
        console.print(f"[red]Unknown action: {action}[/red]")
        console.print("Valid actions: show, set, path")
        raise typer.Exit(1)


# Entry point for the CLI
def cli_entry() -> None:
    """Entry point for the CLI application."""
    app()


if __name__ == "__main__":
    cli_entry()
