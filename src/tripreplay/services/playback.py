"""Time-paced playback of a trip as render events."""

import queue
import threading
from typing import Iterator, Optional, Sequence

from tripreplay.core.exceptions import InvalidDurationError
from tripreplay.core.logger import log_call, log_info, log_result
from tripreplay.models.playback import RenderEvent
from tripreplay.models.trip import TripPoint

# Marks the end of a run in the event channel
_DONE = object()


class PlaybackScheduler:
    """Turns a point sequence and a total duration into paced render events."""

    @staticmethod
    def delay_ms(point_count: int, total_seconds: int) -> float:
        """Uniform delay between two events in milliseconds.

        Raises:
            InvalidDurationError: If total_seconds is negative
        """
        if total_seconds < 0:
            raise InvalidDurationError(total_seconds)
        if point_count == 0:
            return 0.0
        return total_seconds * 1000 / point_count

    def events(
        self,
        points: Sequence[TripPoint],
        total_seconds: int,
        cancel: Optional[threading.Event] = None,
    ) -> Iterator[RenderEvent]:
        """Lazily yields one event per point in index order.

        The duration is validated here, before the iterator is returned, so a
        bad request never produces a partial playback.

        Args:
            points: Trip view to play (may be empty)
            total_seconds: Total animation time, 0 for no pacing
            cancel: Once set, no further events are produced

        Raises:
            InvalidDurationError: If total_seconds is negative
        """
        delay_ms = self.delay_ms(len(points), total_seconds)
        if cancel is None:
            cancel = threading.Event()
        return self._emit(tuple(points), delay_ms, cancel)

    def _emit(
        self, points: Sequence[TripPoint], delay_ms: float, cancel: threading.Event
    ) -> Iterator[RenderEvent]:
        delay_s = delay_ms / 1000.0
        previous: Optional[TripPoint] = None

        for idx, point in enumerate(points):
            if previous is not None and delay_s > 0:
                # wait() returns True as soon as the run is cancelled
                if cancel.wait(delay_s):
                    return
            elif cancel.is_set():
                return

            if previous is None:
                yield RenderEvent(
                    index=idx,
                    position=point.coordinates,
                    heading_degrees=0.0,
                    is_first=True,
                )
            else:
                yield RenderEvent(
                    index=idx,
                    position=point.coordinates,
                    heading_degrees=previous.coordinates.bearing_to(point.coordinates),
                    is_first=False,
                    trail_from=previous.coordinates,
                    offset_ms=idx * delay_ms,
                )
            previous = point


class PlaybackHandle:
    """One playback run on a worker thread, owned by whoever started it.

    The worker pushes events into a channel; the owner pulls them by
    iterating the handle, typically on the thread that renders.
    """

    def __init__(self, events: Iterator[RenderEvent], cancel: threading.Event):
        self._events = events
        self._cancel = cancel
        self._channel: "queue.Queue" = queue.Queue()
        self._thread = threading.Thread(target=self._run, name="tripreplay-playback", daemon=True)
        self.error: Optional[BaseException] = None
        self._emitted = 0
        self._lock = threading.Lock()

    def start(self) -> "PlaybackHandle":
        self._thread.start()
        return self

    def _run(self) -> None:
        try:
            for event in self._events:
                if self._cancel.is_set():
                    break
                self._channel.put(event)
                with self._lock:
                    self._emitted += 1
        except Exception as e:
            self.error = e
        finally:
            self._channel.put(_DONE)

    def cancel(self) -> None:
        """Stops the run. Calling it again has no effect."""
        if not self._cancel.is_set():
            log_info(f"playback cancelled after {self.emitted} events")
        self._cancel.set()

    @property
    def emitted(self) -> int:
        """Number of events handed to the channel so far."""
        with self._lock:
            return self._emitted

    @property
    def cancelled(self) -> bool:
        return self._cancel.is_set()

    @property
    def is_running(self) -> bool:
        return self._thread.is_alive()

    def join(self, timeout: Optional[float] = None) -> None:
        self._thread.join(timeout)

    def __iter__(self) -> Iterator[RenderEvent]:
        while True:
            item = self._channel.get()
            if item is _DONE:
                break
            if self._cancel.is_set():
                return
            yield item

        if self.error is not None:
            raise self.error


class PlaybackController:
    """Starts playback runs, keeping at most one of them live."""

    def __init__(self, scheduler: Optional[PlaybackScheduler] = None):
        self.scheduler = scheduler or PlaybackScheduler()
        self._current: Optional[PlaybackHandle] = None
        self._lock = threading.Lock()

    @property
    def current(self) -> Optional[PlaybackHandle]:
        with self._lock:
            return self._current

    def start(self, points: Sequence[TripPoint], total_seconds: int) -> PlaybackHandle:
        """Cancels the live run (if any) and starts a new one.

        Raises:
            InvalidDurationError: If total_seconds is negative. The live run is left alone.
        """
        log_call("PlaybackController", "start", points=len(points), total_seconds=total_seconds)

        cancel = threading.Event()
        events = self.scheduler.events(points, total_seconds, cancel)
        handle = PlaybackHandle(events, cancel)

        with self._lock:
            previous = self._current
            if previous is not None:
                previous.cancel()
                previous.join()
            self._current = handle.start()

        log_result(
            "PlaybackController",
            "start",
            f"delay={self.scheduler.delay_ms(len(points), total_seconds):.1f} ms",
        )
        return handle

    def stop(self) -> None:
        """Cancels the live run, if any."""
        with self._lock:
            if self._current is not None:
                self._current.cancel()
                self._current.join()
                self._current = None
