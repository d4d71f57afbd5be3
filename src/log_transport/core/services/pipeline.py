from __future__ import annotations

import json
from dataclasses import dataclass
from typing import Any, Callable, Iterable, Mapping, Optional, Union

from ..domain.exceptions import DestinationClosedError, InvalidRecordError
from ..domain.models import LogRecord
from ..ports import DestinationPort, Formatter, LoggerPort

InputItem = Union[bytes, bytearray, str, Mapping[str, Any]]

_LINE_ENDINGS = b"\r\n"


@dataclass
class PipelineStats:
    formatted: int = 0
    passthrough: int = 0
    degraded: int = 0
    destination_closed: bool = False


class PipelineDriver:
    """Connects line-delimited records to a destination through one formatter.

    Items are handled strictly one at a time in arrival order. Lines that do
    not parse into a JSON object are written through untouched (plus a
    newline) without reaching the formatter.
    """

    def __init__(
        self,
        *,
        formatter: Formatter,
        destination: DestinationPort,
        logger: Optional[LoggerPort] = None,
        on_close: Optional[Callable[[], None]] = None,
    ) -> None:
        self._formatter = formatter
        self._destination = destination
        self._logger = logger
        self._on_close = on_close
        self.stats = PipelineStats()

    @property
    def formatter(self) -> Formatter:
        return self._formatter

    def feed(self, item: InputItem) -> None:
        """Process one input item.

        Raises:
            DestinationWriteError: Writing the output failed
            DestinationClosedError: The destination was closed by its reader
        """
        if isinstance(item, Mapping):
            self._emit(LogRecord.from_mapping(item))
            return

        raw = bytes(item) if isinstance(item, (bytes, bytearray)) else item.encode("utf-8")
        raw = raw.rstrip(_LINE_ENDINGS)
        try:
            record = LogRecord.from_mapping(json.loads(raw.decode("utf-8", errors="replace")))
        except (ValueError, RecursionError, InvalidRecordError):
            self._passthrough(raw)
            return
        self._emit(record)

    def run(self, lines: Iterable[InputItem]) -> PipelineStats:
        """Feed every item, then flush.

        Ends quietly when the input is exhausted or the destination closes;
        any other destination failure propagates.
        """
        try:
            for line in lines:
                self.feed(line)
        except DestinationClosedError:
            self.stats.destination_closed = True
            if self._logger:
                self._logger.info("destination_closed", **vars(self.stats))
            return self.stats

        self._destination.flush()
        if self._logger:
            self._logger.debug("pipeline_finished", **vars(self.stats))
        return self.stats

    def close(self) -> None:
        """Flush and close the destination, then run the ``on_close`` hook."""
        try:
            self._destination.flush()
        finally:
            try:
                self._destination.close()
            finally:
                if self._on_close is not None:
                    self._on_close()

    def __enter__(self) -> "PipelineDriver":
        return self

    def __exit__(self, *exc: object) -> None:
        self.close()

    def _emit(self, record: LogRecord) -> None:
        if record.degraded:
            self.stats.degraded += 1
            if self._logger:
                self._logger.warning("record_degraded", issues=list(record.issues))
        line = self._formatter.transform(record)
        self._destination.write(line.encode("utf-8"))
        self.stats.formatted += 1

    def _passthrough(self, raw: bytes) -> None:
        self._destination.write(raw + b"\n")
        self.stats.passthrough += 1
        if self._logger:
            self._logger.debug("line_passthrough", size=len(raw))
