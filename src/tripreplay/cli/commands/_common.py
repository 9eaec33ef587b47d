"""Helpers shared by the CLI commands."""

from tripreplay.core.config import Config
from tripreplay.models.trip import ClassifiedTrip
from tripreplay.services.stop_detector import StopDetector
from tripreplay.services.trip_loader import TripLogLoader
from tripreplay.services.trip_store import TripPointStore


def load_classified(config: Config, store: TripPointStore) -> ClassifiedTrip:
    """Loads the trip log into the store and classifies stops."""
    records = TripLogLoader(time_unit=config.time_unit).load(config.trip_path)
    store.load(records)
    detector = StopDetector(
        distance_threshold_m=config.distance_threshold_m,
        duration_threshold_s=config.duration_threshold_s,
    )
    return store.classify(detector)


def format_duration(seconds: float) -> str:
    s = int(round(seconds))
    h = s // 3600
    m = (s % 3600) // 60
    sec = s % 60
    return f"{h:02d}:{m:02d}:{sec:02d}"
