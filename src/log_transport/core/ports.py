from __future__ import annotations

from typing import Any, Mapping, Protocol, Union

from .domain.models import LogRecord

RecordLike = Union[LogRecord, Mapping[str, Any]]


class Formatter(Protocol):
    """Renders one record into one output line.

    The returned string is self-contained (it may hold internal newlines for
    error traces) and ends with exactly one line separator.
    """

    def transform(self, record: RecordLike) -> str:
        ...


class DestinationPort(Protocol):
    """Append-only byte sink receiving formatted lines."""

    def write(self, data: bytes) -> None:
        """Write every byte before returning.

        Raises:
            DestinationWriteError: The write failed
            DestinationClosedError: The reader went away
        """
        ...

    def flush(self) -> None:
        ...

    def close(self) -> None:
        ...


class LoggerPort(Protocol):
    """Port for the transport's own diagnostics.

    Keyword arguments are attached to the log entry as structured fields.
    """

    def debug(self, message: str, **kwargs: Any) -> None:
        ...

    def info(self, message: str, **kwargs: Any) -> None:
        ...

    def warning(self, message: str, **kwargs: Any) -> None:
        ...

    def error(self, message: str, exc_info: bool = False, **kwargs: Any) -> None:
        ...
