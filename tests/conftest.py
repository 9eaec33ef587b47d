"""Shared helpers for the tests."""

import threading
from datetime import datetime, timedelta
from typing import Any, List, Sequence, Tuple

import pytest

from tripreplay.models.location import GPSCoordinates
from tripreplay.models.trip import TripPoint
from tripreplay.services.renderer import Renderer

START = datetime(2023, 5, 1, 8, 0, 0)

# Meters per degree of latitude on the 6 371 km sphere
METERS_PER_DEG_LAT = 111_194.93

# t=0..90 s, three fixes at one place and a fourth ~14 km away
SCENARIO = [
    (0, 34.0, -106.0),
    (30, 34.0, -106.0),
    (60, 34.0, -106.0),
    (90, 34.1, -106.1),
]


def records(rows: Sequence[Tuple[float, float, float]]) -> List[Tuple[datetime, float, float]]:
    """(seconds, lat, lon) rows to loader-style records."""
    return [(START + timedelta(seconds=s), lat, lon) for s, lat, lon in rows]


def make_points(rows: Sequence[Tuple[float, float, float]]) -> Tuple[TripPoint, ...]:
    """(seconds, lat, lon) rows to unclassified trip points."""
    return tuple(
        TripPoint(timestamp=ts, coordinates=GPSCoordinates(latitude=lat, longitude=lon))
        for ts, lat, lon in records(rows)
    )


class RecordingRenderer(Renderer):
    """Keeps track of what was drawn and how many markers were live at once."""

    def __init__(self):
        self.lock = threading.Lock()
        self.live: List[Any] = []
        self.max_live = 0
        self.added = 0
        self.removed = 0
        self.icons: List[Any] = []
        self.segments: List[Tuple[GPSCoordinates, GPSCoordinates]] = []
        self.clears = 0

    def add_marker(self, position: GPSCoordinates, icon: Any) -> Any:
        with self.lock:
            self.added += 1
            marker = (self.added, position)
            self.live.append(marker)
            self.icons.append(icon)
            self.max_live = max(self.max_live, len(self.live))
            return marker

    def remove_marker(self, marker: Any) -> None:
        with self.lock:
            self.live.remove(marker)
            self.removed += 1

    def add_trail_segment(self, start: GPSCoordinates, end: GPSCoordinates) -> None:
        with self.lock:
            self.segments.append((start, end))

    def clear(self) -> None:
        with self.lock:
            self.live.clear()
            self.segments.clear()
            self.clears += 1


@pytest.fixture
def scenario_points():
    return make_points(SCENARIO)


@pytest.fixture
def renderer():
    return RecordingRenderer()
