"""Main CLI definition for Tripreplay."""

from typing import Optional

import typer

from tripreplay import __version__
from tripreplay.cli.commands.play import play
from tripreplay.cli.commands.stops import stops


def version_callback(value: bool) -> None:
    if value:
        print(f"tripreplay {__version__}")
        raise typer.Exit()


app = typer.Typer(help="Stop detection and animated playback of recorded GPS trips.")


@app.callback()
def main(
    version: Optional[bool] = typer.Option(
        None,
        "--version",
        callback=version_callback,
        is_eager=True,
        help="Show the program version",
    ),
) -> None:
    pass


app.command()(stops)
app.command()(play)


if __name__ == "__main__":
    app()
