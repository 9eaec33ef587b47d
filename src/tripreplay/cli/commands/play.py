"""Command play - animated playback of a trip in the terminal."""

from pathlib import Path
from typing import Any, Optional

import typer
from pydantic import ValidationError
from rich.console import Console

from tripreplay.core.config import Config, PlaybackOptions
from tripreplay.core.exceptions import TripReplayError
from tripreplay.core.logger import set_verbose, log_warning
from tripreplay.cli.commands._common import load_classified
from tripreplay.models.location import GPSCoordinates
from tripreplay.services.marker_icon import MarkerIcon
from tripreplay.services.playback import PlaybackController
from tripreplay.services.renderer import MarkerTrail, Renderer
from tripreplay.services.trip_store import TripPointStore

console = Console()


class ConsoleRenderer(Renderer):
    """Prints markers and trail segments instead of drawing them."""

    def __init__(self, console: Console):
        self.console = console
        self.markers = 0
        self.live = 0
        self.segments = 0

    def add_marker(self, position: GPSCoordinates, icon: Any) -> Any:
        self.markers += 1
        self.live += 1
        size = f" icon {icon.width}x{icon.height}" if icon is not None else ""
        self.console.print(f"[green]●[/green] {position}{size}")
        return self.markers

    def remove_marker(self, marker: Any) -> None:
        self.live -= 1
        self.console.print(f"[dim]○ marker {marker} removed[/dim]")

    def add_trail_segment(self, start: GPSCoordinates, end: GPSCoordinates) -> None:
        self.segments += 1
        self.console.print(f"  [red]─[/red] {start} → {end}  [dim]{start.distance_to(end):.0f} m[/dim]")

    def clear(self) -> None:
        self.markers = 0
        self.live = 0
        self.segments = 0


def play(
    trip_csv: Path = typer.Argument(
        ...,
        help="Path to the trip log CSV",
        exists=True,
        file_okay=True,
        dir_okay=False,
        resolve_path=True,
    ),
    seconds: int = typer.Option(
        0,
        "--seconds",
        "-s",
        help="Animation time in seconds (0/15/30/60/90, 0 = no animation)",
    ),
    include_stops: bool = typer.Option(
        False,
        "--include-stops",
        help="Play stopped points too",
    ),
    icon: Optional[Path] = typer.Option(
        None,
        "--icon",
        help="Marker icon PNG pointing up",
        exists=True,
        file_okay=True,
        dir_okay=False,
        resolve_path=True,
    ),
    distance: float = typer.Option(
        50.0,
        "--distance",
        "-d",
        help="Stop radius around the anchor fix (meters)",
        min=0.0,
    ),
    duration: float = typer.Option(
        120.0,
        "--duration",
        "-t",
        help="Minimum time spent inside the radius (seconds)",
        min=0.0,
    ),
    time_unit: str = typer.Option(
        "seconds",
        "--time-unit",
        help="Unit of numeric Time values (seconds/minutes)",
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Verbose output of service calls",
    ),
) -> None:
    """Play the trip: one heading-oriented marker moving along a growing trail."""
    set_verbose(verbose)

    try:
        options = PlaybackOptions(include_stops=include_stops, total_animation_seconds=seconds)
    except ValidationError as e:
        console.print(f"[red]Error:[/red] {e.errors()[0]['msg']}")
        raise typer.Exit(1)

    controller = PlaybackController()
    try:
        config = Config(
            trip_path=trip_csv,
            distance_threshold_m=distance,
            duration_threshold_s=duration,
            time_unit=time_unit,
            icon_path=icon,
            verbose=verbose,
        )
        store = TripPointStore()
        trip = load_classified(config, store)
        marker_icon = MarkerIcon.load(config.icon_path) if config.icon_path else MarkerIcon.default()

        points = store.view(options.include_stops, trip)
        if not points:
            log_warning("Every point is a stop, nothing to play. Try --include-stops.")
            return

        renderer = ConsoleRenderer(console)
        trail = MarkerTrail(renderer, marker_icon)
        handle = controller.start(points, options.total_animation_seconds)
        drawn = trail.play(handle)
    except (TripReplayError, ValueError) as e:
        console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(1)
    except KeyboardInterrupt:
        controller.stop()
        console.print("\n[yellow]Interrupted by user[/yellow]")
        raise typer.Exit(130)

    console.print()
    console.print(f"[green]Done![/green] {drawn} of {len(trip)} points played")
