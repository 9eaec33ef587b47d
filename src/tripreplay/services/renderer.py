"""Renderer boundary and the marker + trail presenter."""

import threading
from abc import ABC, abstractmethod
from typing import Any, Optional

from tripreplay.models.location import GPSCoordinates
from tripreplay.models.playback import RenderEvent
from tripreplay.services.marker_icon import MarkerIcon
from tripreplay.services.playback import PlaybackHandle


class Renderer(ABC):
    """Map widget the playback draws on."""

    @abstractmethod
    def add_marker(self, position: GPSCoordinates, icon: Any) -> Any:
        """Place a marker and return a reference to it."""
        pass

    @abstractmethod
    def remove_marker(self, marker: Any) -> None:
        pass

    @abstractmethod
    def add_trail_segment(self, start: GPSCoordinates, end: GPSCoordinates) -> None:
        pass

    @abstractmethod
    def clear(self) -> None:
        """Remove all markers and trail segments."""
        pass


class MarkerTrail:
    """Draws render events: one live marker plus a growing trail."""

    def __init__(self, renderer: Renderer, icon: Optional[MarkerIcon] = None):
        """
        Args:
            renderer: Target map widget
            icon: Marker icon, or None to pass no image to the renderer
        """
        self.renderer = renderer
        self.icon = icon
        self._marker: Any = None
        self._lock = threading.Lock()

    def reset(self) -> None:
        """Clears the map before a new run."""
        with self._lock:
            self._marker = None
            self.renderer.clear()

    def show(self, event: RenderEvent) -> None:
        """Draws one event."""
        with self._lock:
            self._draw(event)

    def play(self, handle: PlaybackHandle) -> int:
        """Resets the map and draws every event of the run.

        Events still queued when the run is cancelled are dropped.

        Returns:
            Number of events drawn
        """
        self.reset()
        drawn = 0
        for event in handle:
            with self._lock:
                if handle.cancelled:
                    break
                self._draw(event)
            drawn += 1
        return drawn

    def _draw(self, event: RenderEvent) -> None:
        icon = None
        if self.icon is not None:
            icon = self.icon.base if event.is_first else self.icon.rotated(event.heading_degrees)

        # Previous marker goes first so only one is ever on the map
        if self._marker is not None:
            self.renderer.remove_marker(self._marker)
            self._marker = None

        self._marker = self.renderer.add_marker(event.position, icon)
        if event.trail_from is not None:
            self.renderer.add_trail_segment(event.trail_from, event.position)
