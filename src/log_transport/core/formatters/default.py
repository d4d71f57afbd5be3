from __future__ import annotations

import os
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from typing import Any, Callable, Mapping

from ...shared import ansi
from ...shared.host import color_supported, current_username
from ...shared.to_jsonable import stringify
from ..domain.levels import LABEL_WIDTH, TimestampRenderer, default_level_palette
from ..domain.models import LogRecord, SerializedError, SerializedRequest, as_record
from ..ports import RecordLike

DEFAULT_TARGET_PADDING = 30

# never rendered as key=value tokens
CONSUMED_FIELDS = frozenset({
    "time",
    "level",
    "msg",
    "name",
    "hostname",
    "pid",
    "err",
    "error",
    "req",
    "request",
    "res",
    "response",
    "reqId",
    "responseTime",
})


def _round_ms(value: Any) -> str | None:
    try:
        amount = Decimal(str(value))
    except (InvalidOperation, ValueError):
        return None
    if not amount.is_finite():
        return None
    return str(amount.quantize(Decimal("0.01"), rounding=ROUND_HALF_UP))


class DefaultFormatter:
    """Colorized, human-scannable single-line formatter.

    Layout: ``[time] LEVEL [target | user@host (pid)] key=value msg`` followed
    by request/response summaries and, on following lines, an error trace
    where repeated files are collapsed.
    """

    def __init__(
        self,
        *,
        levels: Mapping[int, str] | None = None,
        timestamps: TimestampRenderer | Callable[[float], str] | None = None,
        target_padding: int = DEFAULT_TARGET_PADDING,
        colors: bool | None = None,
        username: str | None = None,
    ) -> None:
        self._colors = color_supported() if colors is None else colors
        self._levels = dict(levels) if levels is not None else default_level_palette(self._colors)
        self._timestamps = timestamps if timestamps is not None else TimestampRenderer()
        self._target_padding = max(0, target_padding)
        self._username = username

    @property
    def colors(self) -> bool:
        return self._colors

    @property
    def username(self) -> str:
        return self._username if self._username is not None else current_username()

    def transform(self, record: RecordLike) -> str:
        record = as_record(record)
        paint = ansi.Painter(self._colors)

        parts = [
            paint.gray(f"[{self._timestamps(record.time)}]"),
            self._level(record, paint),
            self._origin(record, paint),
        ]

        attrs = [
            paint.gray(f"{key}={stringify(value)}")
            for key, value in record.fields.items()
            if key not in CONSUMED_FIELDS
        ]
        parts.extend(attrs)

        if record.msg is not None:
            parts.append(record.msg)

        response = record.response
        request = response.request if response is not None and response.request is not None else record.request
        request_id = self._request_id(record, request)
        if request is not None:
            parts.append(paint.gray(f"{request.method.upper()} {request.url}"))
            if request_id is not None:
                parts.append(paint.gray(f"[{request_id}]"))
        if response is not None:
            parts.append(f"-> {response.status} {response.status_message}")
            elapsed = _round_ms(record.fields.get("responseTime")) if "responseTime" in record.fields else None
            if elapsed is not None:
                parts.append(paint.gray(f"({elapsed}ms)"))

        buf = " ".join(part for part in parts if part)

        error = record.error
        if error is not None:
            buf += os.linesep + self._trace(error, paint)

        return buf.rstrip() + os.linesep

    def _level(self, record: LogRecord, paint: ansi.Painter) -> str:
        display = self._levels.get(record.level) if record.level is not None else None
        if display is None:
            return "?".ljust(LABEL_WIDTH) if record.level is None else str(record.level).ljust(LABEL_WIDTH)
        return paint.bold(display)

    def _origin(self, record: LogRecord, paint: ansi.Painter) -> str:
        target = paint.rgb(ansi.TARGET, record.target.ljust(self._target_padding))
        owner = paint.magenta(f"{self.username}@{record.hostname}")
        origin = f"{target} {paint.gray('|')} {owner}"
        if record.pid is not None:
            origin += f" {paint.gray('(')}{paint.rgb(ansi.PID, str(record.pid))}{paint.gray(')')}"
        return f"{paint.gray('[')}{origin}{paint.gray(']')}"

    @staticmethod
    def _request_id(record: LogRecord, request: SerializedRequest | None) -> str | None:
        explicit = record.fields.get("reqId")
        if explicit is not None:
            return stringify(explicit)
        if request is not None:
            return request.id
        return None

    def _trace(self, error: SerializedError, paint: ansi.Painter) -> str:
        lines = [f"{paint.bold(paint.red(error.name))}: {error.message}"]
        seen: set[str] = set()
        for frame in error.stack or ():
            location = f"{frame.line}:{frame.col}"
            if frame.file in seen:
                lines.append(f"       {paint.dim('~')} {paint.bold(paint.dim(f'{frame.file}:{location}'))}")
                continue
            seen.add(frame.file)
            line = f"   • {paint.dim(f'in {os.path.basename(frame.file)}:{location}')}"
            if frame.native:
                line += " (native method)"
            lines.append(line)
        return os.linesep.join(lines)
