"""Access-log line formatting with optional ANSI colours."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timedelta
from enum import Enum
from typing import Any

__all__ = [
    "GREEN",
    "WHITE",
    "YELLOW",
    "RED",
    "BLUE",
    "MAGENTA",
    "CYAN",
    "RESET",
    "ConsoleColorMode",
    "LogFormatterParams",
    "format_duration",
    "default_log_formatter",
    "disable_console_color",
    "force_console_color",
    "reset_console_color",
    "console_color_mode",
]

GREEN = "\033[97;42m"
WHITE = "\033[90;47m"
YELLOW = "\033[90;43m"
RED = "\033[97;41m"
BLUE = "\033[97;44m"
MAGENTA = "\033[97;45m"
CYAN = "\033[97;46m"
RESET = "\033[0m"

_TIME_FORMAT = "%Y/%m/%d - %H:%M:%S"

_METHOD_COLORS = {
    "GET": BLUE,
    "POST": CYAN,
    "PUT": YELLOW,
    "DELETE": RED,
    "PATCH": GREEN,
    "HEAD": MAGENTA,
    "OPTIONS": WHITE,
}


class ConsoleColorMode(Enum):
    AUTO = "auto"
    DISABLE = "disable"
    FORCE = "force"


@dataclass
class _ColorState:
    mode: ConsoleColorMode = ConsoleColorMode.AUTO


_state = _ColorState()


def disable_console_color() -> None:
    """Never colour log output."""
    _state.mode = ConsoleColorMode.DISABLE


def force_console_color() -> None:
    """Always colour log output, terminal or not."""
    _state.mode = ConsoleColorMode.FORCE


def reset_console_color() -> None:
    """Colour log output only when it goes to a terminal."""
    _state.mode = ConsoleColorMode.AUTO


def console_color_mode() -> ConsoleColorMode:
    """Return the current colour mode."""
    return _state.mode


@dataclass
class LogFormatterParams:
    """Everything a log formatter is handed about one finished request."""

    request: Any = None
    time_stamp: datetime = field(default_factory=datetime.now)
    status_code: int = 0
    latency: timedelta = field(default_factory=timedelta)
    client_ip: str = ""
    method: str = ""
    path: str = ""
    error_message: str = ""
    is_term: bool = False
    body_size: int = 0
    keys: dict[str, Any] | None = None

    def status_code_color(self) -> str:
        """ANSI colour for the status code class."""
        code = self.status_code
        if 200 <= code < 300:
            return GREEN
        if 300 <= code < 400:
            return WHITE
        if 400 <= code < 500:
            return YELLOW
        return RED

    def method_color(self) -> str:
        """ANSI colour for the HTTP method."""
        return _METHOD_COLORS.get(self.method, RESET)

    def reset_color(self) -> str:
        """ANSI sequence that resets all attributes."""
        return RESET

    def is_output_color(self) -> bool:
        """Tell whether colours should be written."""
        mode = _state.mode
        return mode is ConsoleColorMode.FORCE or (
            mode is ConsoleColorMode.AUTO and self.is_term
        )


def _duration_ns(d: timedelta) -> int:
    return (d.days * 86400 + d.seconds) * 1_000_000_000 + d.microseconds * 1000


def _frac(value: int, precision: int) -> str:
    whole, frac = divmod(value, 10**precision)
    digits = f"{frac:0{precision}d}".rstrip("0")
    return f"{whole}.{digits}" if digits else str(whole)


def format_duration(latency: timedelta) -> str:
    """Format a duration as e.g. ``1.5ms``, ``5s`` or ``2743h29m3s``."""
    ns = _duration_ns(latency)
    if ns == 0:
        return "0s"
    sign = "-" if ns < 0 else ""
    u = abs(ns)
    if u < 1_000_000_000:
        if u < 1000:
            return f"{sign}{u}ns"
        if u < 1_000_000:
            return f"{sign}{_frac(u, 3)}µs"
        return f"{sign}{_frac(u, 6)}ms"

    text = _frac(u % 60_000_000_000, 9) + "s"
    minutes = u // 60_000_000_000
    if minutes:
        text = f"{minutes % 60}m{text}"
        hours = minutes // 60
        if hours:
            text = f"{hours}h{text}"
    return sign + text


_QUOTE_ESCAPES = {
    '"': '\\"',
    "\\": "\\\\",
    "\a": "\\a",
    "\b": "\\b",
    "\f": "\\f",
    "\n": "\\n",
    "\r": "\\r",
    "\t": "\\t",
    "\v": "\\v",
}


def _quote(s: str) -> str:
    out = ['"']
    for ch in s:
        code = ord(ch)
        if ch in _QUOTE_ESCAPES:
            out.append(_QUOTE_ESCAPES[ch])
        elif ch.isprintable():
            out.append(ch)
        elif code < 0x80:
            out.append(f"\\x{code:02x}")
        elif code < 0x10000:
            out.append(f"\\u{code:04x}")
        else:
            out.append(f"\\U{code:08x}")
    out.append('"')
    return "".join(out)


def default_log_formatter(param: LogFormatterParams) -> str:
    """Format one access-log line in the default layout."""
    status_color = method_color = reset_color = ""
    if param.is_output_color():
        status_color = param.status_code_color()
        method_color = param.method_color()
        reset_color = param.reset_color()

    latency = param.latency
    if latency > timedelta(minutes=1):
        latency -= latency % timedelta(seconds=1)

    return (
        f"[GIN] {param.time_stamp.strftime(_TIME_FORMAT)} "
        f"|{status_color} {param.status_code:3d} {reset_color}"
        f"| {format_duration(latency):>13} "
        f"| {param.client_ip:>15} "
        f"|{method_color} {param.method:<7} {reset_color} {_quote(param.path)}\n"
        f"{param.error_message}"
    )