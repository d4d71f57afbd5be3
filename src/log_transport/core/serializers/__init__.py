from __future__ import annotations

from typing import Any, Callable, Mapping

from .callsites import capture, is_runtime_internal
from .error import create_error_serializer, serialize_error
from .request import serialize_headers, serialize_request
from .response import reason_phrase, serialize_response

DEFAULT_ALLOW = {"req": True, "res": True, "err": True}


def create_serializers(
    *,
    request: bool = True,
    response: bool = True,
    error: bool | Mapping[str, bool] = True,
    allow: Mapping[str, bool] | None = None,
) -> dict[str, Callable[[Any], Any]]:
    """Build the serializers a producer should apply to record fields.

    Args:
        request: Register the request serializer under ``request``
        response: Register the response serializer under ``response``
        error: ``True`` registers the error serializer without stack capture;
            ``{"callsites": bool}`` chooses stack capture explicitly;
            ``False`` disables it.
        allow: Which short aliases (``req``, ``res``, ``err``) to register as
            well. Defaults to all of them.

    Returns:
        Mapping of record field name to serializer callable
    """
    allow = DEFAULT_ALLOW if allow is None else allow
    serializers: dict[str, Callable[[Any], Any]] = {}

    if request:
        serializers["request"] = serialize_request
        if allow.get("req"):
            serializers["req"] = serialize_request

    if response:
        serializers["response"] = serialize_response
        if allow.get("res"):
            serializers["res"] = serialize_response

    if error is not False:
        callsites = False if error is True else bool(error.get("callsites", False))
        serializers["error"] = create_error_serializer(callsites)
        if allow.get("err"):
            serializers["err"] = create_error_serializer(callsites)

    return serializers


__all__ = [
    "capture",
    "create_error_serializer",
    "create_serializers",
    "is_runtime_internal",
    "reason_phrase",
    "serialize_error",
    "serialize_headers",
    "serialize_request",
    "serialize_response",
]
