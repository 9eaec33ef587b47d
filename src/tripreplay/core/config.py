"""Configuration for Tripreplay."""

from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from pydantic import BaseModel, field_validator

# Durations offered by the animation time picker (0 = no animation)
ANIMATION_CHOICES = (0, 15, 30, 60, 90)

TIME_UNITS = ("seconds", "minutes")


@dataclass
class Config:
    """Configuration for loading and classifying a trip."""

    # Path to the trip log CSV
    trip_path: Path

    # Stop cluster radius around the anchor fix (meters)
    distance_threshold_m: float = 50.0

    # Minimum time spent inside the radius to count as a stop (seconds)
    duration_threshold_s: float = 120.0

    # Unit of numeric values in the Time column
    time_unit: str = "seconds"

    # Optional marker icon (PNG pointing up)
    icon_path: Optional[Path] = None

    # Verbose mode
    verbose: bool = False

    def __post_init__(self) -> None:
        if self.time_unit not in TIME_UNITS:
            raise ValueError(
                f"Unknown time unit '{self.time_unit}', expected one of {', '.join(TIME_UNITS)}"
            )


class PlaybackOptions(BaseModel):
    """Options chosen by the user before pressing play."""

    include_stops: bool = False
    total_animation_seconds: int = 0

    @field_validator("total_animation_seconds")
    @classmethod
    def _check_choice(cls, value: int) -> int:
        if value not in ANIMATION_CHOICES:
            choices = ", ".join(str(c) for c in ANIMATION_CHOICES)
            raise ValueError(f"animation time must be one of {choices}")
        return value
