"""Models for trip points and their classification."""

from dataclasses import dataclass, field, replace
from datetime import datetime, timedelta
from typing import Tuple

from tripreplay.models.location import GPSCoordinates


@dataclass(frozen=True)
class TripPoint:
    """A single GPS fix of the trip."""

    timestamp: datetime
    coordinates: GPSCoordinates
    is_stop: bool = False

    @property
    def latitude(self) -> float:
        return self.coordinates.latitude

    @property
    def longitude(self) -> float:
        return self.coordinates.longitude

    def with_stop(self, is_stop: bool) -> "TripPoint":
        """Return a copy with the stop flag set."""
        return replace(self, is_stop=is_stop)

    def __lt__(self, other: "TripPoint") -> bool:
        """Order by time."""
        return self.timestamp < other.timestamp


@dataclass(frozen=True)
class StopCluster:
    """A run of consecutive fixes that stayed near the anchor fix long enough."""

    start_index: int
    end_index: int  # inclusive
    start_time: datetime
    end_time: datetime
    anchor: GPSCoordinates

    @property
    def points(self) -> int:
        return self.end_index - self.start_index + 1

    @property
    def duration(self) -> timedelta:
        return self.end_time - self.start_time


@dataclass(frozen=True)
class ClassifiedTrip:
    """Time-ordered trip points with stop flags populated.

    A freshly loaded trip has every flag set to False and no clusters.
    """

    points: Tuple[TripPoint, ...]
    clusters: Tuple[StopCluster, ...] = field(default_factory=tuple)
    classified: bool = False

    def __len__(self) -> int:
        return len(self.points)

    @property
    def stop_count(self) -> int:
        return sum(1 for p in self.points if p.is_stop)

    @property
    def moving_count(self) -> int:
        return len(self.points) - self.stop_count


@dataclass(frozen=True)
class TripSummary:
    """Summary statistics of a classified trip."""

    points: int
    stop_points: int
    moving_points: int
    clusters: int
    distance_km: float
    elapsed: timedelta
    stopped_for: timedelta
