from __future__ import annotations

from http import HTTPStatus
from typing import Any

from ..domain.models import SerializedResponse
from .request import serialize_headers, serialize_request

UNKNOWN_STATUS = "Unknown"


def reason_phrase(status: int) -> str:
    """Standard reason phrase for ``status``, or ``"Unknown"``."""
    try:
        return HTTPStatus(status).phrase
    except ValueError:
        return UNKNOWN_STATUS


def _status_of(response: Any) -> int:
    for attr in ("status_code", "status"):
        value = getattr(response, attr, None)
        if isinstance(value, int) and not isinstance(value, bool):
            return value
    return -1


def _message_of(response: Any) -> str | None:
    for attr in ("status_message", "reason", "reason_phrase"):
        value = getattr(response, attr, None)
        if isinstance(value, str) and value:
            return value
    return None


def _headers_of(response: Any) -> dict[str, str]:
    headers = getattr(response, "headers", None)
    if headers is None:
        headers = getattr(response, "getheaders", None)
    return serialize_headers(headers)


def serialize_response(response: Any) -> SerializedResponse:
    """Serialize an HTTP response object together with its request.

    If the response exposes a ``raw`` attribute (framework wrappers), the raw
    object is serialized instead. The wrapper's request is still used when
    the raw object does not carry one.
    """
    wrapper = response
    raw = getattr(response, "raw", None)
    if raw is not None:
        response = raw

    status = _status_of(response)
    request = getattr(response, "request", None)
    if request is None and response is not wrapper:
        request = getattr(wrapper, "request", None)

    return SerializedResponse(
        status=status,
        status_message=_message_of(response) or reason_phrase(status),
        headers=_headers_of(response),
        request=serialize_request(request) if request is not None else None,
    )
