from __future__ import annotations

from typing import Any, Mapping

from ..domain.models import SerializedRequest


def serialize_headers(headers: Any) -> dict[str, str]:
    """Copy headers from a mapping, a list of pairs or a ``getheaders()`` object."""
    if headers is None:
        return {}
    if callable(headers):
        headers = headers()
    if isinstance(headers, Mapping) or hasattr(headers, "items"):
        items = headers.items()
    else:
        items = headers
    result: dict[str, str] = {}
    try:
        for key, value in items:
            result[str(key)] = str(value)
    except (TypeError, ValueError):
        return {}
    return result


def serialize_request(request: Any) -> SerializedRequest:
    """Serialize an HTTP request object.

    Works on anything exposing ``method``, ``url`` (or ``path``) and
    ``headers``, such as requests' PreparedRequest or Starlette's Request.
    The input is only read.
    """
    url = getattr(request, "url", None)
    if url is None:
        url = getattr(request, "path", None)
    request_id = getattr(request, "id", None)
    if request_id is not None and not isinstance(request_id, (str, int)):
        request_id = None
    return SerializedRequest(
        method=str(getattr(request, "method", "") or ""),
        url="" if url is None else str(url),
        id=None if request_id is None else str(request_id),
        headers=serialize_headers(getattr(request, "headers", None)),
    )
