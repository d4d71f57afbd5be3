from __future__ import annotations

import logging
import sys
from logging import Handler
from typing import IO, Optional

from .formatters import DiagnosticsJSONFormatter, DiagnosticsTextFormatter


def build_json_console_handler(level: int = logging.INFO, stream: Optional[IO[str]] = None) -> Handler:
    """Create a stderr handler emitting one JSON object per diagnostic.

    Args:
        level: Logging level
        stream: Target stream (defaults to stderr)

    Returns:
        Configured StreamHandler with JSON formatter
    """
    h = logging.StreamHandler(stream if stream is not None else sys.stderr)
    h.setLevel(level)
    h.setFormatter(DiagnosticsJSONFormatter())
    return h


def build_human_console_handler(level: int = logging.INFO, stream: Optional[IO[str]] = None) -> Handler:
    """Create a stderr handler with human-readable formatting.

    Diagnostics never go to stdout, which may be the transport's destination.

    Args:
        level: Logging level
        stream: Target stream (defaults to stderr)

    Returns:
        Configured StreamHandler with human-readable formatter
    """
    h = logging.StreamHandler(stream if stream is not None else sys.stderr)
    h.setLevel(level)
    h.setFormatter(DiagnosticsTextFormatter())
    return h
