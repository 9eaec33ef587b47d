"""Core modules for Tripreplay."""

from tripreplay.core.config import Config, PlaybackOptions, ANIMATION_CHOICES
from tripreplay.core.exceptions import (
    TripReplayError,
    IngestionError,
    InvalidDurationError,
    ClassificationPreconditionError,
)
from tripreplay.core import logger

__all__ = [
    "Config",
    "PlaybackOptions",
    "ANIMATION_CHOICES",
    "TripReplayError",
    "IngestionError",
    "InvalidDurationError",
    "ClassificationPreconditionError",
    "logger",
]
