from __future__ import annotations

import logging
from typing import Any

from pythonjsonlogger.json import JsonFormatter

from ...shared.to_jsonable import to_jsonable


class DiagnosticsJSONFormatter(JsonFormatter):
    """One JSON object per diagnostic event (python-json-logger).

    Keyword fields given to TransportLogger arrive through ``extra`` and end
    up as top-level keys; values json cannot encode go through to_jsonable.
    """

    def __init__(self, **kwargs: Any) -> None:
        kwargs.setdefault("timestamp", True)
        kwargs.setdefault("json_default", to_jsonable)
        super().__init__(**kwargs)

    def add_fields(self, log_record: dict, record: logging.LogRecord, message_dict: dict) -> None:
        super().add_fields(log_record, record, message_dict)

        log_record['level'] = record.levelname
        log_record['logger'] = record.name
        log_record['message'] = record.getMessage()


class DiagnosticsTextFormatter(logging.Formatter):
    """Human-readable formatter for diagnostics on stderr."""

    def __init__(self) -> None:
        super().__init__(
            fmt='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
            datefmt='%Y-%m-%d %H:%M:%S'
        )
