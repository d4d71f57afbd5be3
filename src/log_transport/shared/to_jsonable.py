from __future__ import annotations

import json
from datetime import date, datetime, time
from enum import Enum
from pathlib import PurePath
from typing import Any, Mapping


def to_jsonable(obj: Any) -> Any:
    """Convert a record value into something ``json.dumps`` accepts.

    Handles:
    - Basic types (str, int, float, bool, None)
    - Collections (list, tuple, set, dict)
    - Serialized errors/requests/responses and anything else with ``to_dict``
    - Dates and times (ISO-8601), enums (their value), paths
    - Bytes/Bytearray (hex)
    - Exceptions (``{"name": ..., "message": ...}``)
    - Dataclasses and objects with ``__dict__``

    Anything else falls back to ``str(obj)``.
    """
    if obj is None or isinstance(obj, (str, int, float, bool)):
        return obj
    if isinstance(obj, (bytes, bytearray)):
        return obj.hex()
    if isinstance(obj, Mapping):
        return {str(k): to_jsonable(v) for k, v in obj.items()}
    if isinstance(obj, (list, tuple, set, frozenset)):
        return [to_jsonable(item) for item in obj]
    if hasattr(obj, "to_dict"):
        return to_jsonable(obj.to_dict())
    if isinstance(obj, (datetime, date, time)):
        return obj.isoformat()
    if isinstance(obj, Enum):
        return to_jsonable(obj.value)
    if isinstance(obj, PurePath):
        return str(obj)
    if isinstance(obj, BaseException):
        return {"name": type(obj).__name__, "message": str(obj)}
    if hasattr(obj, "__dataclass_fields__"):
        from dataclasses import asdict
        return to_jsonable(asdict(obj))
    if hasattr(obj, "__dict__"):
        return to_jsonable(vars(obj))
    return str(obj)


def stringify(value: Any) -> str:
    """Render an attribute value for a ``key=value`` token.

    Strings are kept verbatim; everything else becomes compact JSON.
    """
    if isinstance(value, str):
        return value
    return json.dumps(to_jsonable(value), ensure_ascii=False, separators=(",", ":"))
