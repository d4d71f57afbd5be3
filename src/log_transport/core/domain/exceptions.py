"""Domain exceptions for log_transport."""

from __future__ import annotations


class LogTransportError(Exception):
    """Base class for every error raised by log_transport."""


class InvalidRecordError(LogTransportError, ValueError):
    """Raised when an input item cannot be turned into a LogRecord at all.

    Only structurally wrong input (e.g. a JSON array instead of an object)
    triggers this. Missing fields never do; they degrade instead.
    """

    def __init__(self, value: object, message: str | None = None) -> None:
        self.value = value
        if message is None:
            message = f"Expected a JSON object, got {type(value).__name__}"
        super().__init__(message)


class DestinationError(LogTransportError):
    """Raised when the output destination cannot be opened or written."""

    def __init__(self, target: object, message: str | None = None) -> None:
        self.target = target
        if message is None:
            message = f"Destination failure: {target!r}"
        super().__init__(message)


class DestinationWriteError(DestinationError):
    """Raised when a write to the destination fails. Fatal to the pipeline."""


class DestinationClosedError(DestinationError):
    """Raised when the reading side of the destination went away (broken pipe)."""
