from __future__ import annotations

from typing import Any, Mapping

from ..domain.models import LogRecord, as_record
from ..ports import Formatter


class FormatUseCase:
    def __init__(self, *, formatter: Formatter) -> None:
        self._formatter = formatter

    def execute(self, record: LogRecord | Mapping[str, Any]) -> str:
        """Format one record; mappings are normalized the way the pipeline does."""
        return self._formatter.transform(as_record(record))
