from __future__ import annotations

from .logger import TransportLogger
from .handlers import build_json_console_handler, build_human_console_handler
from .formatters import DiagnosticsJSONFormatter, DiagnosticsTextFormatter

__all__ = [
    "TransportLogger",
    "build_json_console_handler",
    "build_human_console_handler",
    "DiagnosticsJSONFormatter",
    "DiagnosticsTextFormatter",
]
