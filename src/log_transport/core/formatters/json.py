from __future__ import annotations

import json
import os
from typing import Any

from ...shared.host import current_username
from ...shared.to_jsonable import to_jsonable
from ..domain.levels import iso_timestamp, label_for
from ..domain.models import as_record
from ..ports import RecordLike

# mapped onto the fixed keys below
MAPPED_FIELDS = frozenset({"time", "level", "msg", "name", "hostname"})
FIXED_KEYS = frozenset({"@timestamp", "log.level", "log.name", "hostname", "message"})


class JsonFormatter:
    """Canonical JSON formatter: one compact object per line, no colors."""

    def __init__(self, *, username: str | None = None) -> None:
        self._username = username

    @property
    def username(self) -> str:
        return self._username if self._username is not None else current_username()

    def transform(self, record: RecordLike) -> str:
        record = as_record(record)

        payload: dict[str, Any] = {
            "@timestamp": iso_timestamp(record.time),
            "log.level": label_for(record.level) or record.level,
            "log.name": record.target,
            "hostname": f"{self.username}@{record.hostname}",
        }
        if record.msg is not None:
            payload["message"] = record.msg

        for key, value in record.fields.items():
            if key in MAPPED_FIELDS or key in FIXED_KEYS:
                continue
            payload[key] = to_jsonable(value)

        return json.dumps(payload, ensure_ascii=False, separators=(",", ":")) + os.linesep
