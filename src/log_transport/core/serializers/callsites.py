"""Call-stack capture for exceptions.

Turns the frames an exception travelled through into StackFrame values,
outermost call first, skipping frames that belong to the Python runtime.
"""

from __future__ import annotations

import importlib.machinery
import itertools
import os
import sysconfig
from contextlib import contextmanager
from functools import lru_cache
from types import CodeType, FrameType, TracebackType
from typing import Iterator, NamedTuple

from ..domain.models import (
    ANONYMOUS_FUNCTION,
    DEFAULT_CONTEXT,
    UNKNOWN_METHOD,
    StackFrame,
)

_CONSTRUCTORS = frozenset({"__init__", "__new__"})
_EVAL_SOURCES = ("<string>", "<stdin>", "<console>")


class _RawFrame(NamedTuple):
    frame: FrameType
    lineno: int | None
    lasti: int


@lru_cache(maxsize=None)
def _runtime_prefixes() -> tuple[tuple[str, ...], tuple[str, ...]]:
    paths = sysconfig.get_paths()
    internal = {os.path.normcase(os.path.realpath(paths[key])) for key in ("stdlib", "platstdlib") if key in paths}
    installed = {os.path.normcase(os.path.realpath(paths[key])) for key in ("purelib", "platlib") if key in paths}
    return tuple(sorted(internal)), tuple(sorted(installed))


def _within(path: str, prefix: str) -> bool:
    return path == prefix or path.startswith(prefix + os.sep)


def is_runtime_internal(filename: str | None) -> bool:
    """True for frames of the standard library or frozen import machinery.

    Third-party packages live under site-packages, which sits inside the
    stdlib directory on most installs; those frames are kept.
    """
    if not filename:
        return False
    if filename.startswith("<frozen "):
        return True
    if filename.startswith("<"):
        return False
    path = os.path.normcase(os.path.realpath(filename))
    internal, installed = _runtime_prefixes()
    if any(_within(path, prefix) for prefix in installed):
        return False
    return any(_within(path, prefix) for prefix in internal)


def _context_of(frame: FrameType) -> str:
    f_locals = frame.f_locals
    if "self" in f_locals:
        return type(f_locals["self"]).__name__
    owner = f_locals.get("cls")
    if isinstance(owner, type):
        return owner.__name__
    return DEFAULT_CONTEXT


def _method_of(code: CodeType) -> str:
    qualname = getattr(code, "co_qualname", None)
    if not qualname or "." not in qualname:
        return UNKNOWN_METHOD
    owner, _, method = qualname.rpartition(".")
    if owner.endswith("<locals>"):
        return UNKNOWN_METHOD
    return method


def _column_of(code: CodeType, lasti: int) -> int:
    positions = getattr(code, "co_positions", None)
    if positions is None or lasti < 0:
        return -1
    position = next(itertools.islice(positions(), lasti // 2, None), None)
    if position is None or position[2] is None:
        return -1
    return position[2] + 1


def _to_frame(raw: _RawFrame) -> StackFrame:
    code = raw.frame.f_code
    filename = code.co_filename or ""
    function = code.co_name
    return StackFrame(
        file=filename,
        line=raw.lineno if raw.lineno is not None else -1,
        col=_column_of(code, raw.lasti),
        function=ANONYMOUS_FUNCTION if not function or function == "<lambda>" else function,
        method=_method_of(code),
        this_context=_context_of(raw.frame),
        native=filename.endswith(tuple(importlib.machinery.EXTENSION_SUFFIXES)),
        toplevel=function == "<module>",
        constructor=function in _CONSTRUCTORS,
        eval_invocation=filename in _EVAL_SOURCES,
    )


@contextmanager
def _walk(tb: TracebackType) -> Iterator[list[_RawFrame]]:
    """Yield the raw frames outermost first and drop them on exit."""
    walked: list[_RawFrame] = []

    current: TracebackType | None = tb
    while current is not None:
        walked.append(_RawFrame(current.tb_frame, current.tb_lineno, current.tb_lasti))
        current = current.tb_next

    try:
        yield walked
    finally:
        # frames keep their locals alive
        walked.clear()


def capture(error: BaseException) -> tuple[StackFrame, ...]:
    """Capture the stack of ``error``; an empty tuple when none is available."""
    tb = error.__traceback__
    if tb is None:
        return ()
    try:
        with _walk(tb) as walked:
            return tuple(
                _to_frame(raw)
                for raw in walked
                if not is_runtime_internal(raw.frame.f_code.co_filename)
            )
    except Exception:
        return ()
