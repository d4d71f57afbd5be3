"""Severity labels, the default level palette and timestamp rendering."""

from __future__ import annotations

import os
from datetime import datetime, timezone, tzinfo
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from ...shared import ansi

LEVEL_LABELS: dict[int, str] = {
    10: "trace",
    20: "debug",
    30: "info",
    40: "warn",
    50: "error",
    60: "fatal",
}

LEVEL_NUMBERS: dict[str, int] = {label: level for level, label in LEVEL_LABELS.items()}

LABEL_WIDTH = 5

# 24-bit colors per severity
LEVEL_COLORS: dict[int, tuple[int, int, int]] = {
    10: (163, 182, 138),
    20: (163, 182, 138),
    30: (178, 157, 243),
    40: (234, 234, 208),
    50: (153, 75, 104),
    60: (166, 76, 76),
}

DEFAULT_TIMEZONE = "America/Phoenix"


def label_for(level: int | None) -> str | None:
    """Return the lowercase label of a known severity, None otherwise."""
    if level is None:
        return None
    return LEVEL_LABELS.get(level)


def default_level_palette(colors: bool) -> dict[int, str]:
    """Build the severity -> display string mapping used by DefaultFormatter.

    Labels are uppercased and padded to a fixed width before colorizing so
    the columns line up whether or not colors are enabled.
    """
    palette: dict[int, str] = {}
    for level, label in LEVEL_LABELS.items():
        text = label.upper().ljust(LABEL_WIDTH)
        palette[level] = ansi.rgb(LEVEL_COLORS[level], text, enabled=colors)
    return palette


def resolve_timezone(name: str | None = None) -> tzinfo:
    """Resolve a timezone name, falling back to $TZ and then DEFAULT_TIMEZONE."""
    candidate = name or os.environ.get("TZ") or DEFAULT_TIMEZONE
    if candidate.upper() in ("UTC", "Z"):
        return timezone.utc
    try:
        return ZoneInfo(candidate)
    except (ZoneInfoNotFoundError, ValueError):
        return ZoneInfo(DEFAULT_TIMEZONE)


class TimestampRenderer:
    """Renders epoch milliseconds like ``14 Nov 2023, 15:13:20 MST``."""

    def __init__(self, tz: str | tzinfo | None = None) -> None:
        self._tz = tz if isinstance(tz, tzinfo) else resolve_timezone(tz)

    @property
    def tz(self) -> tzinfo:
        return self._tz

    def render(self, epoch_ms: float) -> str:
        moment = datetime.fromtimestamp(epoch_ms / 1000, tz=self._tz)
        return f"{moment.day} {moment:%b %Y, %H:%M:%S} {moment.tzname()}"

    __call__ = render


def iso_timestamp(epoch_ms: float) -> str:
    """ISO-8601 UTC with millisecond precision and a ``Z`` suffix."""
    moment = datetime.fromtimestamp(epoch_ms / 1000, tz=timezone.utc)
    return moment.isoformat(timespec="milliseconds").replace("+00:00", "Z")
