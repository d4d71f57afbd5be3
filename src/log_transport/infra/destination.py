from __future__ import annotations

import errno
import os
import select
from pathlib import Path
from typing import Iterator, Union

from ..core.domain.exceptions import (
    DestinationClosedError,
    DestinationError,
    DestinationWriteError,
)

Target = Union[int, str, Path]

STDOUT_FD = 1

_CLOSED_ERRNOS = frozenset({errno.EPIPE, errno.ECONNRESET})


def resolve_target(dest: Target | None) -> Target:
    """Normalize a configured destination: None -> stdout, "2" -> fd 2."""
    if dest is None or dest == "":
        return STDOUT_FD
    if isinstance(dest, str) and dest.isdigit():
        return int(dest)
    return dest


class Destination:
    """Append-only sink over a file descriptor.

    Opens a path in append mode (creating it when missing) or adopts an
    existing descriptor number. Writes are unbuffered and block until every
    byte has been accepted, waiting for writability when the descriptor is
    non-blocking.
    """

    def __init__(self, dest: Target | None = None, *, fsync: bool = False) -> None:
        target = resolve_target(dest)
        self._target = target
        self._fsync = fsync
        self._closed = False
        if isinstance(target, int):
            self._fd = target
            self._owned = False
        else:
            path = Path(target)
            try:
                path.parent.mkdir(parents=True, exist_ok=True)
                self._fd = os.open(path, os.O_WRONLY | os.O_APPEND | os.O_CREAT, 0o644)
            except OSError as e:
                raise DestinationError(target, f"Cannot open destination {path}: {e}") from e
            self._owned = True

    @property
    def target(self) -> Target:
        return self._target

    @property
    def fileno(self) -> int:
        return self._fd

    def write(self, data: bytes) -> None:
        if self._closed:
            raise DestinationClosedError(self._target, "Destination already closed")
        view = memoryview(data)
        while view:
            try:
                written = os.write(self._fd, view)
            except BlockingIOError:
                select.select([], [self._fd], [])
                continue
            except InterruptedError:
                continue
            except OSError as e:
                if e.errno in _CLOSED_ERRNOS:
                    raise DestinationClosedError(self._target, f"Destination closed: {e}") from e
                raise DestinationWriteError(self._target, f"Write to destination failed: {e}") from e
            view = view[written:]

    def flush(self) -> None:
        if self._closed or not self._fsync:
            return
        try:
            os.fsync(self._fd)
        except OSError as e:
            # pipes and ttys cannot be synced
            if e.errno not in (errno.EINVAL, errno.EROFS, errno.ENOTSUP):
                raise DestinationWriteError(self._target, f"fsync failed: {e}") from e

    def close(self) -> None:
        if self._closed:
            return
        self._closed = True
        if self._owned:
            os.close(self._fd)

    def __enter__(self) -> "Destination":
        return self

    def __exit__(self, *exc: object) -> None:
        self.close()


def open_destination(dest: Target | None = None, fsync: bool = False) -> Iterator[Destination]:
    """Generator resource: yields an open Destination and closes it afterwards."""
    destination = Destination(dest, fsync=fsync)
    try:
        yield destination
    finally:
        destination.close()
