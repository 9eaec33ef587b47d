"""Stay-point stop detection over a time-ordered trip."""

from datetime import timedelta
from typing import List, Sequence, Tuple

from tripreplay.core.exceptions import ClassificationPreconditionError
from tripreplay.core.logger import log_call, log_result
from tripreplay.models.trip import TripPoint, StopCluster


class StopDetector:
    """Marks fixes as stopped when they stay near an anchor fix long enough.

    Scanning left to right, each fix becomes an anchor and the cluster grows
    forward while the next fix is within ``distance_threshold_m`` of the
    anchor. If the cluster spans at least ``duration_threshold_s`` it is a
    stop and the scan resumes after it, otherwise the anchor is moving and
    the scan resumes at the next fix.
    """

    def __init__(self, distance_threshold_m: float, duration_threshold_s: float):
        """
        Args:
            distance_threshold_m: Maximum distance from the anchor fix in meters
            duration_threshold_s: Minimum time span of a stop in seconds
        """
        if distance_threshold_m < 0:
            raise ValueError(f"distance threshold must not be negative: {distance_threshold_m}")
        if duration_threshold_s < 0:
            raise ValueError(f"duration threshold must not be negative: {duration_threshold_s}")

        self.distance_threshold_m = distance_threshold_m
        self.min_duration = timedelta(seconds=duration_threshold_s)

    def find_clusters(self, points: Sequence[TripPoint]) -> List[StopCluster]:
        """Finds non-overlapping stop clusters.

        Args:
            points: Trip points sorted by time

        Returns:
            Clusters in index order

        Raises:
            ClassificationPreconditionError: If the sequence is empty or unordered
        """
        self._check_preconditions(points)

        clusters: List[StopCluster] = []
        n = len(points)
        i = 0
        while i < n:
            anchor = points[i]
            j = i
            while j + 1 < n and anchor.coordinates.distance_to(points[j + 1].coordinates) <= self.distance_threshold_m:
                j += 1

            # A lone fix never forms a stop, even with a zero duration threshold
            if j > i and points[j].timestamp - anchor.timestamp >= self.min_duration:
                clusters.append(
                    StopCluster(
                        start_index=i,
                        end_index=j,
                        start_time=anchor.timestamp,
                        end_time=points[j].timestamp,
                        anchor=anchor.coordinates,
                    )
                )
                i = j + 1
            else:
                i += 1

        return clusters

    def classify(self, points: Sequence[TripPoint]) -> Tuple[Tuple[TripPoint, ...], List[StopCluster]]:
        """Builds a freshly classified copy of the points.

        Existing stop flags are ignored, so classifying twice gives the same result.

        Returns:
            (classified points, clusters)
        """
        log_call(
            "StopDetector",
            "classify",
            points=len(points),
            distance_m=self.distance_threshold_m,
            duration_s=self.min_duration.total_seconds(),
        )

        clusters = self.find_clusters(points)

        flags = [False] * len(points)
        for cluster in clusters:
            for k in range(cluster.start_index, cluster.end_index + 1):
                flags[k] = True

        classified = tuple(p.with_stop(flag) for p, flag in zip(points, flags))

        log_result("StopDetector", "classify", f"{len(clusters)} clusters, {sum(flags)} stop points")
        return classified, clusters

    @staticmethod
    def _check_preconditions(points: Sequence[TripPoint]) -> None:
        if not points:
            raise ClassificationPreconditionError("Cannot classify an empty trip")
        for idx in range(1, len(points)):
            if points[idx].timestamp < points[idx - 1].timestamp:
                raise ClassificationPreconditionError(
                    f"Trip points are not sorted by time at index {idx}"
                )
