"""Models for GPS coordinates and the geometry between them."""

import math
from dataclasses import dataclass

# Mean Earth radius in meters
EARTH_RADIUS_M = 6_371_000.0


def haversine_m(lat1: float, lon1: float, lat2: float, lon2: float) -> float:
    """Compute haversine distance in meters between two lat/lon points.

    Args:
        lat1: Latitude 1 in degrees
        lon1: Longitude 1 in degrees
        lat2: Latitude 2 in degrees
        lon2: Longitude 2 in degrees

    Returns:
        Distance in meters
    """
    phi1 = math.radians(lat1)
    phi2 = math.radians(lat2)
    d_phi = math.radians(lat2 - lat1)
    d_lambda = math.radians(lon2 - lon1)

    a = math.sin(d_phi / 2.0) ** 2 + math.cos(phi1) * math.cos(phi2) * math.sin(d_lambda / 2.0) ** 2
    c = 2.0 * math.atan2(math.sqrt(a), math.sqrt(1.0 - a))
    return EARTH_RADIUS_M * c


def bearing_degrees(lat1: float, lon1: float, lat2: float, lon2: float) -> float:
    """Heading of travel from point 1 to point 2, normalized to [0, 360).

    The angle is measured on the lat/lon grid: 0 is east, 90 is north.
    Identical points give 0.
    """
    angle = math.degrees(math.atan2(lat2 - lat1, lon2 - lon1))
    heading = (angle + 360.0) % 360.0
    # -1e-15 + 360 rounds up to exactly 360.0
    return 0.0 if heading >= 360.0 else heading


@dataclass(frozen=True)
class GPSCoordinates:
    """GPS coordinates in decimal degrees."""

    latitude: float
    longitude: float

    @property
    def is_valid(self) -> bool:
        """True if both values are inside the valid degree ranges (NaN is invalid)."""
        return -90.0 <= self.latitude <= 90.0 and -180.0 <= self.longitude <= 180.0

    def distance_to(self, other: "GPSCoordinates") -> float:
        """Calculate distance to other coordinates in meters (haversine formula)."""
        return haversine_m(self.latitude, self.longitude, other.latitude, other.longitude)

    def bearing_to(self, other: "GPSCoordinates") -> float:
        """Heading from these coordinates to other, in [0, 360)."""
        return bearing_degrees(self.latitude, self.longitude, other.latitude, other.longitude)

    def __str__(self) -> str:
        return f"{self.latitude:.6f}, {self.longitude:.6f}"
