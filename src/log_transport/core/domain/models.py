from __future__ import annotations

import math
import time
from dataclasses import dataclass, field
from datetime import datetime, timezone
from types import MappingProxyType
from typing import Any, Mapping

from .exceptions import InvalidRecordError
from .levels import LEVEL_LABELS, LEVEL_NUMBERS

ANONYMOUS_FUNCTION = "<anonymous>"
UNKNOWN_METHOD = "<unknown>"
DEFAULT_CONTEXT = "Object"
DEFAULT_TARGET = "root"


def _as_int(value: Any, default: int = -1) -> int:
    if isinstance(value, bool):
        return default
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return int(value)
    if isinstance(value, str):
        try:
            return int(value)
        except ValueError:
            return default
    return default


def _as_epoch_ms(value: Any) -> float | None:
    """Epoch milliseconds when ``value`` is a representable instant, else None."""
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return None
    try:
        millis = float(value)
        if not math.isfinite(millis):
            return None
        datetime.fromtimestamp(millis / 1000, tz=timezone.utc)
    except (OverflowError, OSError, ValueError):
        return None
    return millis


def _as_str(value: Any, default: str = "") -> str:
    if value is None:
        return default
    return str(value)


def _as_headers(value: Any) -> dict[str, str]:
    if isinstance(value, Mapping):
        return {str(k): _as_str(v) for k, v in value.items()}
    return {}


@dataclass(frozen=True)
class StackFrame:
    """One captured call-stack entry of a serialized error."""
    file: str = ""
    line: int = -1
    col: int = -1
    function: str = ANONYMOUS_FUNCTION
    method: str = UNKNOWN_METHOD
    this_context: str = DEFAULT_CONTEXT
    native: bool = False
    toplevel: bool = False
    constructor: bool = False
    eval_invocation: bool = False

    def to_dict(self) -> dict[str, Any]:
        return {
            "eval_invocation": self.eval_invocation,
            "this_context": self.this_context,
            "constructor": self.constructor,
            "function": self.function,
            "toplevel": self.toplevel,
            "native": self.native,
            "method": self.method,
            "file": self.file,
            "line": self.line,
            "col": self.col,
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "StackFrame":
        return cls(
            file=_as_str(data.get("file")),
            line=_as_int(data.get("line")),
            col=_as_int(data.get("col")),
            function=_as_str(data.get("function"), ANONYMOUS_FUNCTION) or ANONYMOUS_FUNCTION,
            method=_as_str(data.get("method"), UNKNOWN_METHOD) or UNKNOWN_METHOD,
            this_context=_as_str(data.get("this_context"), DEFAULT_CONTEXT) or DEFAULT_CONTEXT,
            native=bool(data.get("native", False)),
            toplevel=bool(data.get("toplevel", False)),
            constructor=bool(data.get("constructor", False)),
            eval_invocation=bool(data.get("eval_invocation", False)),
        )


@dataclass(frozen=True)
class SerializedError:
    """Portable view of an exception.

    ``stack`` is None when capture was not requested and a (possibly empty)
    tuple otherwise. ``original`` points back at the exception for
    programmatic consumers; it is never compared, printed or serialized.
    """
    name: str
    message: str
    stack: tuple[StackFrame, ...] | None = None
    original: BaseException | None = field(default=None, repr=False, compare=False)

    def to_dict(self) -> dict[str, Any]:
        payload: dict[str, Any] = {"name": self.name, "message": self.message}
        if self.stack is not None:
            payload["stack"] = [frame.to_dict() for frame in self.stack]
        return payload

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "SerializedError":
        stack = data.get("stack")
        frames: tuple[StackFrame, ...] | None = None
        if isinstance(stack, (list, tuple)):
            frames = tuple(StackFrame.from_dict(item) for item in stack if isinstance(item, Mapping))
        return cls(
            name=_as_str(data.get("name"), "Error") or "Error",
            message=_as_str(data.get("message")),
            stack=frames,
        )


def original_error(serialized: SerializedError) -> BaseException | None:
    """Return the exception a SerializedError was built from, if still known."""
    return serialized.original


@dataclass(frozen=True)
class SerializedRequest:
    method: str
    url: str
    id: str | None = None
    headers: dict[str, str] = field(default_factory=dict, hash=False)

    def to_dict(self) -> dict[str, Any]:
        payload: dict[str, Any] = {"method": self.method, "url": self.url}
        if self.id is not None:
            payload["id"] = self.id
        payload["headers"] = dict(self.headers)
        return payload

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "SerializedRequest":
        raw_id = data.get("id")
        return cls(
            method=_as_str(data.get("method")),
            url=_as_str(data.get("url")),
            id=None if raw_id is None else str(raw_id),
            headers=_as_headers(data.get("headers")),
        )


@dataclass(frozen=True)
class SerializedResponse:
    status: int
    status_message: str
    headers: dict[str, str] = field(default_factory=dict, hash=False)
    request: SerializedRequest | None = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "status": self.status,
            "status_message": self.status_message,
            "headers": dict(self.headers),
            "request": self.request.to_dict() if self.request is not None else None,
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "SerializedResponse":
        request = data.get("request") or data.get("req")
        return cls(
            status=_as_int(data.get("status", data.get("statusCode"))),
            status_message=_as_str(data.get("status_message")),
            headers=_as_headers(data.get("headers")),
            request=SerializedRequest.from_dict(request) if isinstance(request, Mapping) else None,
        )


def _first_mapping(fields: Mapping[str, Any], *keys: str) -> Mapping[str, Any] | None:
    for key in keys:
        value = fields.get(key)
        if isinstance(value, Mapping):
            return value
    return None


@dataclass(frozen=True)
class LogRecord:
    """One structured log entry, normalized for formatting.

    ``fields`` keeps every key of the original object in insertion order.
    The typed attributes hold normalized values, with placeholders for
    required fields that were missing; their names are listed in ``issues``.
    """
    time: float
    level: int | None
    hostname: str
    fields: Mapping[str, Any]
    name: str | None = None
    pid: int | None = None
    msg: str | None = None
    issues: tuple[str, ...] = ()

    @classmethod
    def from_mapping(cls, data: Any) -> "LogRecord":
        if not isinstance(data, Mapping):
            raise InvalidRecordError(data)

        issues: list[str] = []

        record_time = _as_epoch_ms(data.get("time"))
        if record_time is None:
            issues.append("time")
            record_time = time.time() * 1000

        raw_level = data.get("level")
        level: int | None
        if isinstance(raw_level, str) and raw_level.lower() in LEVEL_NUMBERS:
            level = LEVEL_NUMBERS[raw_level.lower()]
        elif isinstance(raw_level, int) and not isinstance(raw_level, bool):
            level = raw_level
        else:
            level = None
        if level not in LEVEL_LABELS:
            issues.append("level")

        hostname = data.get("hostname")
        if not isinstance(hostname, str):
            issues.append("hostname")
            hostname = _as_str(hostname)

        raw_pid = data.get("pid")
        pid = raw_pid if isinstance(raw_pid, int) and not isinstance(raw_pid, bool) else None

        name = data.get("name")
        msg = data.get("msg")
        return cls(
            time=record_time,
            level=level,
            hostname=hostname,
            fields=MappingProxyType(dict(data)),
            name=None if name is None else str(name),
            pid=pid,
            msg=None if msg is None else str(msg),
            issues=tuple(issues),
        )

    @property
    def target(self) -> str:
        return self.name or DEFAULT_TARGET

    @property
    def degraded(self) -> bool:
        return bool(self.issues)

    @property
    def error(self) -> SerializedError | None:
        payload = _first_mapping(self.fields, "err", "error")
        return SerializedError.from_dict(payload) if payload is not None else None

    @property
    def request(self) -> SerializedRequest | None:
        payload = _first_mapping(self.fields, "req", "request")
        return SerializedRequest.from_dict(payload) if payload is not None else None

    @property
    def response(self) -> SerializedResponse | None:
        payload = _first_mapping(self.fields, "res", "response")
        return SerializedResponse.from_dict(payload) if payload is not None else None


def as_record(record: LogRecord | Mapping[str, Any]) -> LogRecord:
    if isinstance(record, LogRecord):
        return record
    return LogRecord.from_mapping(record)
