"""Marker icon rotated to the heading of travel."""

from pathlib import Path
from typing import Dict, Optional

from PIL import Image, ImageDraw

from tripreplay.core.exceptions import TripReplayError
from tripreplay.core.logger import log_call

# Heading at which the unrotated icon points (up = north)
ICON_HEADING = 90.0


class MarkerIcon:
    """Base marker icon pointing up, with rotated variants per heading."""

    def __init__(self, base: Image.Image):
        self.base = base.convert("RGBA")
        self._cache: Dict[float, Image.Image] = {}

    @classmethod
    def load(cls, path: Path) -> "MarkerIcon":
        """Loads the icon from an image file.

        Raises:
            TripReplayError: If the file cannot be read as an image
        """
        log_call("MarkerIcon", "load", path=str(path))
        try:
            with Image.open(path) as img:
                img.load()
                return cls(img)
        except (OSError, ValueError) as e:
            raise TripReplayError(f"Cannot load marker icon {path}: {e}")

    @classmethod
    def default(cls, size: int = 32) -> "MarkerIcon":
        """Generates a plain red arrow pointing up."""
        img = Image.new("RGBA", (size, size), (0, 0, 0, 0))
        draw = ImageDraw.Draw(img)
        draw.polygon(
            [(size / 2, 0), (size - 1, size - 1), (size / 2, size * 0.7), (0, size - 1)],
            fill=(220, 30, 30, 255),
        )
        return cls(img)

    def rotated(self, heading: float, precision: int = 1) -> Image.Image:
        """Returns the icon turned so that its "up" points along the heading.

        The canvas grows to fit the rotated icon; the padding is transparent.

        Args:
            heading: Heading in degrees, 0 = east, 90 = north
            precision: Decimal places the heading is rounded to for caching
        """
        key = round(heading % 360.0, precision)
        cached: Optional[Image.Image] = self._cache.get(key)
        if cached is not None:
            return cached

        # PIL rotates counter-clockwise for positive angles
        rotated = self.base.rotate(
            key - ICON_HEADING,
            resample=Image.Resampling.BICUBIC,
            expand=True,
            fillcolor=(0, 0, 0, 0),
        )
        self._cache[key] = rotated
        return rotated
