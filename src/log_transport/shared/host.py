"""Process-wide host facts, each computed at most once."""

from __future__ import annotations

import getpass
import os
import sys
from functools import lru_cache

UNKNOWN_USER = "(unknown)"


@lru_cache(maxsize=None)
def current_username() -> str:
    """Name of the user owning this process, ``"(unknown)"`` if the lookup fails."""
    try:
        return getpass.getuser() or UNKNOWN_USER
    except (OSError, KeyError, ImportError):
        return UNKNOWN_USER


@lru_cache(maxsize=None)
def color_supported() -> bool:
    """Whether stdout should receive ANSI colors.

    Honors NO_COLOR and FORCE_COLOR, refuses dumb terminals, and otherwise
    asks whether stdout is a TTY.
    """
    env = os.environ
    if "NO_COLOR" in env:
        return False
    force = env.get("FORCE_COLOR")
    if force is not None:
        return force not in ("0", "false")
    if env.get("TERM") == "dumb":
        return False
    stream = sys.stdout
    try:
        return stream is not None and stream.isatty()
    except (AttributeError, ValueError):
        return False
