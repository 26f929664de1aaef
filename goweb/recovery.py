"""Helpers for reporting recovered errors: stack dumps and request masking."""

from __future__ import annotations

import inspect
import linecache
from collections.abc import Sequence
from datetime import datetime

__all__ = ["source", "function_name", "time_format", "stack", "mask_authorization"]

_DUNNO = "???"


def source(lines: Sequence[str], n: int) -> str:
    """Return the 1-based line ``n`` of ``lines`` stripped, or ``???``."""
    n -= 1
    if n < 0 or n >= len(lines):
        return _DUNNO
    return lines[n].strip()


def function_name(name: str | None) -> str:
    """Shorten a qualified function name to the part after its package path."""
    if not name:
        return _DUNNO
    last_slash = name.rfind("/")
    if last_slash >= 0:
        name = name[last_slash + 1:]
    period = name.find(".")
    if period >= 0:
        name = name[period + 1:]
    return name.replace("·", ".")


def time_format(t: datetime) -> str:
    """Format a time as ``YYYY/MM/DD - hh:mm:ss``."""
    return t.strftime("%Y/%m/%d - %H:%M:%S")


def stack(skip: int) -> str:
    """Describe the call stack, innermost first, leaving out ``skip`` frames.

    Frame 0 is ``stack`` itself. Each frame gives a line with its file, line
    number and bytecode offset, followed, if the source can be read, by a
    tab-indented line with the function name and the source line.
    """
    out: list[str] = []
    frame = inspect.currentframe()
    for _ in range(skip):
        if frame is None:
            break
        frame = frame.f_back
    while frame is not None:
        code = frame.f_code
        file = code.co_filename
        line = frame.f_lineno
        out.append(f"{file}:{line} (0x{frame.f_lasti:x})\n")
        lines = linecache.getlines(file)
        if lines:
            name = getattr(code, "co_qualname", code.co_name)
            out.append(f"\t{function_name(name)}: {source(lines, line)}\n")
        frame = frame.f_back
    return "".join(out)


def mask_authorization(dump: str) -> str:
    """Replace the value of any Authorization header in a request dump with ``*``."""
    headers = dump.split("\r\n")
    masked = [
        "Authorization: *" if header.split(":")[0] == "Authorization" else header
        for header in headers
    ]
    return "\r\n".join(masked)