"""Data models for Tripreplay."""

from tripreplay.models.location import GPSCoordinates
from tripreplay.models.trip import TripPoint, StopCluster, ClassifiedTrip, TripSummary
from tripreplay.models.playback import RenderEvent

__all__ = [
    "GPSCoordinates",
    "TripPoint",
    "StopCluster",
    "ClassifiedTrip",
    "TripSummary",
    "RenderEvent",
]
