"""Owns the loaded trip and exposes its views."""

from datetime import datetime, timedelta
from typing import Iterable, Optional, Tuple

from tripreplay.core.exceptions import IngestionError
from tripreplay.core.logger import log_result
from tripreplay.models.location import GPSCoordinates
from tripreplay.models.trip import ClassifiedTrip, TripPoint, TripSummary
from tripreplay.services.stop_detector import StopDetector

TripRecord = Tuple[datetime, float, float]


class TripPointStore:
    """Holds one loaded trip; a new load replaces it wholesale."""

    def __init__(self) -> None:
        self.trip: Optional[ClassifiedTrip] = None

    def load(self, records: Iterable[TripRecord]) -> ClassifiedTrip:
        """Validates records and stores them as an unclassified trip.

        Args:
            records: (timestamp, latitude, longitude) tuples in time order

        Returns:
            Trip with every stop flag False

        Raises:
            IngestionError: If the records are empty, out of range or out of order.
                The previously loaded trip stays in place.
        """
        points = []
        for idx, record in enumerate(records):
            try:
                timestamp, lat, lon = record
                coords = GPSCoordinates(latitude=float(lat), longitude=float(lon))
                out_of_order = bool(points) and timestamp < points[-1].timestamp
            except (TypeError, ValueError) as e:
                raise IngestionError(f"Record {idx}: malformed record {record!r}: {e}")

            if not isinstance(timestamp, datetime):
                raise IngestionError(
                    f"Record {idx}: timestamp must be a datetime, got {type(timestamp).__name__}"
                )
            if not coords.is_valid:
                raise IngestionError(f"Record {idx}: coordinates out of range ({lat}, {lon})")
            if out_of_order:
                raise IngestionError(
                    f"Record {idx}: timestamp {timestamp} is earlier than the previous {points[-1].timestamp}"
                )
            points.append(TripPoint(timestamp=timestamp, coordinates=coords))

        if not points:
            raise IngestionError("Trip contains no records")

        log_result("TripPointStore", "load", f"{len(points)} points")
        self.trip = ClassifiedTrip(points=tuple(points))
        return self.trip

    def classify(self, detector: StopDetector, trip: Optional[ClassifiedTrip] = None) -> ClassifiedTrip:
        """Runs stop detection and replaces the stored trip with the result.

        The new trip is built completely before it becomes visible.
        """
        trip = self._resolve(trip)
        points, clusters = detector.classify(trip.points)
        self.trip = ClassifiedTrip(points=points, clusters=tuple(clusters), classified=True)
        log_result("TripPointStore", "classify", f"{self.trip.stop_count}/{len(self.trip)} stopped")
        return self.trip

    def full_view(self, trip: Optional[ClassifiedTrip] = None) -> Tuple[TripPoint, ...]:
        """Every point in original order."""
        return self._resolve(trip).points

    def moving_view(self, trip: Optional[ClassifiedTrip] = None) -> Tuple[TripPoint, ...]:
        """Points not flagged as stops, in original order. May be shorter than 2."""
        return tuple(p for p in self._resolve(trip).points if not p.is_stop)

    def view(self, include_stops: bool, trip: Optional[ClassifiedTrip] = None) -> Tuple[TripPoint, ...]:
        """Full view when stops are included, moving view otherwise."""
        if include_stops:
            return self.full_view(trip)
        return self.moving_view(trip)

    def summary(self, trip: Optional[ClassifiedTrip] = None) -> TripSummary:
        """Computes summary statistics of the trip."""
        trip = self._resolve(trip)
        points = trip.points

        distance_m = 0.0
        for prev, cur in zip(points, points[1:]):
            distance_m += prev.coordinates.distance_to(cur.coordinates)

        stopped_for = timedelta()
        for cluster in trip.clusters:
            stopped_for += cluster.duration

        return TripSummary(
            points=len(points),
            stop_points=trip.stop_count,
            moving_points=trip.moving_count,
            clusters=len(trip.clusters),
            distance_km=distance_m / 1000.0,
            elapsed=points[-1].timestamp - points[0].timestamp,
            stopped_for=stopped_for,
        )

    def _resolve(self, trip: Optional[ClassifiedTrip]) -> ClassifiedTrip:
        if trip is not None:
            return trip
        if self.trip is None:
            raise IngestionError("No trip loaded")
        return self.trip
