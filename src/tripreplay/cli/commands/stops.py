"""Command stops - list detected stops of a trip."""

from pathlib import Path

import typer
from rich.console import Console
from rich.table import Table

from tripreplay.core.config import Config
from tripreplay.core.exceptions import TripReplayError
from tripreplay.core.logger import set_verbose
from tripreplay.cli.commands._common import format_duration, load_classified
from tripreplay.services.trip_store import TripPointStore

console = Console()


def stops(
    trip_csv: Path = typer.Argument(
        ...,
        help="Path to the trip log CSV",
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
    """Detect stops in a trip and print them with a trip summary."""
    set_verbose(verbose)

    try:
        config = Config(
            trip_path=trip_csv,
            distance_threshold_m=distance,
            duration_threshold_s=duration,
            time_unit=time_unit,
            verbose=verbose,
        )
        store = TripPointStore()
        trip = load_classified(config, store)
        summary = store.summary(trip)
    except (TripReplayError, ValueError) as e:
        console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(1)

    if trip.clusters:
        table = Table(title=f"Stops: {trip_csv.name}")
        table.add_column("#", style="cyan", justify="right")
        table.add_column("Points", justify="right")
        table.add_column("Start")
        table.add_column("End")
        table.add_column("Duration", style="green")
        table.add_column("Anchor")

        for number, cluster in enumerate(trip.clusters, 1):
            table.add_row(
                str(number),
                f"{cluster.start_index}-{cluster.end_index}",
                cluster.start_time.isoformat(sep=" "),
                cluster.end_time.isoformat(sep=" "),
                format_duration(cluster.duration.total_seconds()),
                str(cluster.anchor),
            )
        console.print(table)
    else:
        console.print("[yellow]No stops detected[/yellow]")

    console.print()
    console.print(f"Points: {summary.points} ({summary.stop_points} stopped, {summary.moving_points} moving)")
    console.print(f"Distance: {summary.distance_km:.2f} km")
    console.print(
        f"Elapsed: {format_duration(summary.elapsed.total_seconds())}, "
        f"stopped: {format_duration(summary.stopped_for.total_seconds())}"
    )
