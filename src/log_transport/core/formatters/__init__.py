from __future__ import annotations

from typing import Callable

from ..ports import Formatter
from .default import DefaultFormatter
from .json import JsonFormatter


def select_formatter(
    transport: Formatter | None = None,
    json: bool = False,
    *,
    json_factory: Callable[[], Formatter] = JsonFormatter,
    default_factory: Callable[[], Formatter] = DefaultFormatter,
) -> Formatter:
    """Pick the active formatter: explicit instance, then JSON mode, then text."""
    if transport is not None:
        return transport
    if json:
        return json_factory()
    return default_factory()


__all__ = [
    "DefaultFormatter",
    "Formatter",
    "JsonFormatter",
    "select_formatter",
]
