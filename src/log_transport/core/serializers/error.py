from __future__ import annotations

from typing import Callable

from ..domain.models import SerializedError
from .callsites import capture


def serialize_error(error: BaseException, capture_stack: bool = True) -> SerializedError:
    """Convert an exception into a SerializedError.

    Args:
        error: Exception to serialize
        capture_stack: Include the call stack (excluding runtime internals).
            When False the result has no ``stack`` at all.

    Returns:
        SerializedError keeping a back-reference to ``error``
    """
    return SerializedError(
        name=type(error).__name__,
        message=str(error),
        stack=capture(error) if capture_stack else None,
        original=error,
    )


def create_error_serializer(callsites: bool = True) -> Callable[[BaseException], SerializedError]:
    """Return a one-argument serializer with the stack capture choice baked in."""

    def serializer(error: BaseException) -> SerializedError:
        return serialize_error(error, capture_stack=callsites)

    return serializer
