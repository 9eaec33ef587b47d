"""Model for playback render events."""

from dataclasses import dataclass
from typing import Optional

from tripreplay.models.location import GPSCoordinates


@dataclass(frozen=True)
class RenderEvent:
    """One step of the playback, consumed by the renderer and then discarded."""

    index: int
    position: GPSCoordinates
    heading_degrees: float  # 0 for the first event
    is_first: bool
    trail_from: Optional[GPSCoordinates] = None  # previous position, None for the first event
    offset_ms: float = 0.0  # scheduled time since the run started
