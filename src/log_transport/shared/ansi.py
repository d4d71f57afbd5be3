"""Minimal ANSI styling helpers.

Every helper takes an ``enabled`` flag and returns the text untouched when it
is false, so callers never have to branch on color support themselves.
"""

from __future__ import annotations

RESET = "\x1b[0m"
BOLD = "\x1b[1m"
DIM = "\x1b[2m"
RED = "\x1b[31m"
MAGENTA = "\x1b[35m"

GRAY = (134, 134, 134)
TARGET = (120, 231, 255)
PID = (169, 147, 227)


def _wrap(code: str, text: str, enabled: bool) -> str:
    if not enabled:
        return text
    return f"{code}{text}{RESET}"


def rgb(color: tuple[int, int, int], text: str, enabled: bool = True) -> str:
    r, g, b = color
    return _wrap(f"\x1b[38;2;{r};{g};{b}m", text, enabled)


def gray(text: str, enabled: bool = True) -> str:
    return rgb(GRAY, text, enabled)


def bold(text: str, enabled: bool = True) -> str:
    return _wrap(BOLD, text, enabled)


def dim(text: str, enabled: bool = True) -> str:
    return _wrap(DIM, text, enabled)


def red(text: str, enabled: bool = True) -> str:
    return _wrap(RED, text, enabled)


def magenta(text: str, enabled: bool = True) -> str:
    return _wrap(MAGENTA, text, enabled)


class Painter:
    """Binds the helpers above to one color capability."""

    def __init__(self, enabled: bool) -> None:
        self.enabled = enabled

    def rgb(self, color: tuple[int, int, int], text: str) -> str:
        return rgb(color, text, self.enabled)

    def gray(self, text: str) -> str:
        return gray(text, self.enabled)

    def bold(self, text: str) -> str:
        return bold(text, self.enabled)

    def dim(self, text: str) -> str:
        return dim(text, self.enabled)

    def red(self, text: str) -> str:
        return red(text, self.enabled)

    def magenta(self, text: str) -> str:
        return magenta(text, self.enabled)
