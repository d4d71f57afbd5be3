from __future__ import annotations

from typing import Iterable

from ..domain.exceptions import DestinationWriteError
from ..ports import LoggerPort
from ..services import PipelineDriver, PipelineStats
from ..services.pipeline import InputItem


class StreamUseCase:
    """Use case for streaming an input through the pipeline.

    Thin orchestration layer that delegates to PipelineDriver.
    """

    def __init__(
        self,
        *,
        pipeline: PipelineDriver,
        logger: LoggerPort,
    ) -> None:
        self._pipeline = pipeline
        self._logger = logger

    def execute(self, lines: Iterable[InputItem]) -> PipelineStats:
        """Stream every line to the destination.

        Args:
            lines: Input lines (bytes/str) or already-parsed records

        Returns:
            Counters for formatted, passed-through and degraded lines

        Raises:
            DestinationWriteError: If the destination rejects a write
        """
        self._logger.debug("stream_started", formatter=type(self._pipeline.formatter).__name__)
        try:
            stats = self._pipeline.run(lines)
        except DestinationWriteError as e:
            self._logger.error("stream_failed", exc_info=True, target=str(e.target))
            raise
        self._logger.info(
            "stream_finished",
            formatted=stats.formatted,
            passthrough=stats.passthrough,
            degraded=stats.degraded,
        )
        return stats
