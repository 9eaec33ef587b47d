"""Services for Tripreplay."""

from tripreplay.services.trip_loader import TripLogLoader
from tripreplay.services.stop_detector import StopDetector
from tripreplay.services.trip_store import TripPointStore
from tripreplay.services.playback import PlaybackScheduler, PlaybackHandle, PlaybackController
from tripreplay.services.marker_icon import MarkerIcon
from tripreplay.services.renderer import Renderer, MarkerTrail

__all__ = [
    "TripLogLoader",
    "StopDetector",
    "TripPointStore",
    "PlaybackScheduler",
    "PlaybackHandle",
    "PlaybackController",
    "MarkerIcon",
    "Renderer",
    "MarkerTrail",
]
