"""Tests for TripPointStore."""

from datetime import timedelta

import pytest

from tripreplay.core.exceptions import IngestionError
from tripreplay.services.stop_detector import StopDetector
from tripreplay.services.trip_store import TripPointStore

from conftest import SCENARIO, records


@pytest.fixture
def store():
    return TripPointStore()


@pytest.fixture
def detector():
    return StopDetector(distance_threshold_m=50, duration_threshold_s=60)


class TestLoad:
    """Tests for loading records."""

    def test_load_valid(self, store):
        """Test that every record becomes an unflagged point."""
        trip = store.load(records(SCENARIO))

        assert len(trip) == 4
        assert store.trip is trip
        assert not trip.classified
        assert not any(p.is_stop for p in trip.points)
        assert trip.points[3].latitude == 34.1

    def test_equal_timestamps_allowed(self, store):
        """Test that non-decreasing (not strictly increasing) time is accepted."""
        trip = store.load(records([(0, 1.0, 1.0), (0, 1.0, 1.0), (5, 1.0, 1.0)]))
        assert len(trip) == 3

    def test_accepts_generator(self, store):
        """Test loading from a one-shot iterable."""
        trip = store.load(r for r in records(SCENARIO))
        assert len(trip) == 4

    def test_empty(self, store):
        """Test that an empty trip is refused."""
        with pytest.raises(IngestionError):
            store.load([])

    @pytest.mark.parametrize(
        "lat, lon",
        [(90.1, 0.0), (-90.1, 0.0), (0.0, 180.1), (0.0, -180.1), (float("nan"), 0.0)],
    )
    def test_out_of_range(self, store, lat, lon):
        """Test that invalid coordinates are refused."""
        with pytest.raises(IngestionError, match="Record 1"):
            store.load(records([(0, 1.0, 1.0), (10, lat, lon)]))

    def test_non_monotonic(self, store):
        """Test that going back in time is refused."""
        with pytest.raises(IngestionError, match="Record 2"):
            store.load(records([(0, 1.0, 1.0), (20, 1.0, 1.0), (10, 1.0, 1.0)]))

    def test_failed_load_keeps_previous_trip(self, store):
        """Test that a failed load leaves the loaded trip in place."""
        trip = store.load(records(SCENARIO))
        with pytest.raises(IngestionError):
            store.load([])
        assert store.trip is trip

    def test_reload_replaces_trip(self, store):
        """Test that a new load replaces the trip wholesale."""
        store.load(records(SCENARIO))
        trip = store.load(records([(0, 5.0, 5.0)]))
        assert store.full_view() == trip.points


class TestViews:
    """Tests for full and moving views."""

    def test_views_before_classification(self, store):
        """Test that an unclassified trip is entirely moving."""
        trip = store.load(records(SCENARIO))
        assert store.moving_view(trip) == store.full_view(trip)

    def test_scenario_views(self, store, detector):
        """Test full and moving views of the classified scenario."""
        store.load(records(SCENARIO))
        trip = store.classify(detector)

        full = store.full_view(trip)
        moving = store.moving_view(trip)

        assert trip.classified
        assert len(full) == 4
        assert [p.is_stop for p in full] == [True, True, True, False]
        assert len(moving) == 1
        assert moving[0] == full[3]

    def test_view_selects_by_include_stops(self, store, detector):
        """Test the include_stops switch."""
        store.load(records(SCENARIO))
        store.classify(detector)
        assert len(store.view(include_stops=True)) == 4
        assert len(store.view(include_stops=False)) == 1

    def test_moving_view_can_be_empty(self, store, detector):
        """Test that a trip made only of stops has an empty moving view."""
        store.load(records([(0, 1.0, 1.0), (60, 1.0, 1.0), (120, 1.0, 1.0)]))
        store.classify(detector)
        assert store.moving_view() == ()
        assert len(store.full_view()) == 3

    def test_single_point_trip(self, store, detector):
        """Test that a one-point trip is entirely moving."""
        store.load(records([(0, 1.0, 1.0)]))
        store.classify(detector)
        assert store.moving_view() == store.full_view()
        assert len(store.moving_view()) == 1

    def test_moving_view_never_longer(self, store, detector):
        """Test the view length relation."""
        store.load(records(SCENARIO + [(200, 34.1, -106.1), (400, 34.1, -106.1)]))
        trip = store.classify(detector)
        assert len(store.full_view(trip)) == 6
        assert len(store.moving_view(trip)) <= len(store.full_view(trip))

    def test_no_trip_loaded(self, store):
        """Test that views need a loaded trip."""
        with pytest.raises(IngestionError):
            store.full_view()


class TestSummary:
    """Tests for the trip summary."""

    def test_scenario_summary(self, store, detector):
        """Test counts, distance and times of the scenario."""
        store.load(records(SCENARIO))
        store.classify(detector)
        summary = store.summary()

        assert summary.points == 4
        assert summary.stop_points == 3
        assert summary.moving_points == 1
        assert summary.clusters == 1
        assert 13.0 < summary.distance_km < 15.5
        assert summary.elapsed == timedelta(seconds=90)
        assert summary.stopped_for == timedelta(seconds=60)


class TestMalformedRecords:
    """Tests for records that are not (timestamp, lat, lon) triples."""

    @pytest.mark.parametrize(
        "bad",
        [
            ("x", "north", 1.0),
            (None, 1.0),
        ],
    )
    def test_malformed(self, store, bad):
        """Test that malformed records are ingestion errors."""
        good = records([(0, 1.0, 1.0)])[0]
        with pytest.raises(IngestionError, match="Record 1"):
            store.load([good, bad])

    def test_mixed_timestamp_types(self, store):
        """Test that incomparable timestamps are ingestion errors."""
        good = records([(0, 1.0, 1.0)])[0]
        with pytest.raises(IngestionError, match="Record 1"):
            store.load([good, (12.5, 1.0, 1.0)])

    def test_numeric_timestamps(self, store):
        """Test that plain numbers are refused as timestamps."""
        with pytest.raises(IngestionError, match="Record 0: timestamp must be a datetime"):
            store.load([(0, 34.0, -106.0), (30, 34.0, -106.0), (60, 34.0, -106.0), (90, 34.1, -106.1)])
        assert store.trip is None
