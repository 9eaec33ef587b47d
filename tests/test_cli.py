"""Tests for the command-line interface."""

import pytest
from typer.testing import CliRunner

from tripreplay import __version__
from tripreplay.cli.main import app

runner = CliRunner()


@pytest.fixture
def trip_csv(tmp_path):
    path = tmp_path / "triplog.csv"
    path.write_text(
        "Time,Latitude,Longitude\n"
        "0,34.0,-106.0\n"
        "30,34.0,-106.0\n"
        "60,34.0,-106.0\n"
        "90,34.1,-106.1\n",
        encoding="utf-8",
    )
    return path


class TestStops:
    """Tests for the stops command."""

    def test_lists_stops(self, trip_csv):
        """Test the scenario trip with a 60 s threshold."""
        result = runner.invoke(app, ["stops", str(trip_csv), "-d", "50", "-t", "60"])

        assert result.exit_code == 0, result.output
        assert "Points: 4 (3 stopped, 1 moving)" in result.output
        assert "00:01:00" in result.output

    def test_no_stops(self, trip_csv):
        """Test a threshold longer than the trip."""
        result = runner.invoke(app, ["stops", str(trip_csv), "-t", "600"])

        assert result.exit_code == 0, result.output
        assert "No stops detected" in result.output

    def test_bad_log(self, tmp_path):
        """Test that a broken trip log exits with an error."""
        path = tmp_path / "broken.csv"
        path.write_text("Time,Latitude\n0,1.0\n", encoding="utf-8")

        result = runner.invoke(app, ["stops", str(path)])

        assert result.exit_code == 1
        assert "Error" in result.output


class TestPlay:
    """Tests for the play command."""

    def test_moving_only(self, trip_csv):
        """Test that only the moving point is played."""
        result = runner.invoke(app, ["play", str(trip_csv), "-t", "60"])

        assert result.exit_code == 0, result.output
        assert "1 of 4 points played" in result.output

    def test_include_stops(self, trip_csv):
        """Test playing every point."""
        result = runner.invoke(app, ["play", str(trip_csv), "-t", "60", "--include-stops"])

        assert result.exit_code == 0, result.output
        assert "4 of 4 points played" in result.output

    def test_invalid_animation_time(self, trip_csv):
        """Test that only the offered animation times are accepted."""
        result = runner.invoke(app, ["play", str(trip_csv), "--seconds", "7"])

        assert result.exit_code == 1
        assert "animation time" in result.output

    def test_all_stopped(self, tmp_path):
        """Test a trip where every point is a stop."""
        path = tmp_path / "parked.csv"
        path.write_text("Time,Latitude,Longitude\n0,1.0,1.0\n600,1.0,1.0\n", encoding="utf-8")

        result = runner.invoke(app, ["play", str(path)])

        assert result.exit_code == 0, result.output
        assert "nothing to play" in result.output


def test_version():
    """Test the --version option."""
    result = runner.invoke(app, ["--version"])
    assert result.exit_code == 0
    assert __version__ in result.output


class TestConsoleRenderer:
    """Tests for the terminal renderer."""

    def test_removals_are_printed(self, trip_csv):
        """Test that every replaced marker shows up as removed."""
        result = runner.invoke(app, ["play", str(trip_csv), "-t", "60", "--include-stops"])

        assert result.exit_code == 0, result.output
        assert result.output.count("removed") == 3

    def test_live_count(self):
        """Test that the live marker count drops when a marker is removed."""
        from rich.console import Console

        from tripreplay.cli.commands.play import ConsoleRenderer
        from tripreplay.models.location import GPSCoordinates

        renderer = ConsoleRenderer(Console(quiet=True))
        first = renderer.add_marker(GPSCoordinates(1.0, 2.0), None)
        renderer.remove_marker(first)
        renderer.add_marker(GPSCoordinates(1.1, 2.0), None)

        assert renderer.markers == 2
        assert renderer.live == 1
