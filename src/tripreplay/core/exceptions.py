"""Custom exceptions for Tripreplay."""


class TripReplayError(Exception):
    """Base exception for Tripreplay."""

    pass


class IngestionError(TripReplayError):
    """Trip records could not be loaded (empty, out of range or out of order)."""

    pass


class InvalidDurationError(TripReplayError):
    """A negative playback duration was requested."""

    def __init__(self, total_seconds: int) -> None:
        self.total_seconds = total_seconds
        super().__init__(
            f"Animation duration must not be negative, got {total_seconds} s"
        )


class ClassificationPreconditionError(TripReplayError):
    """Stop detection was run on an empty or unordered sequence."""

    pass
