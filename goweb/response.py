"""Response writing: headers, an in-memory recorder and a tracking writer."""

from __future__ import annotations

import logging
from collections.abc import Iterator
from typing import Any

from goweb.mode import is_debugging

__all__ = ["NO_WRITTEN", "DEFAULT_STATUS", "Headers", "ResponseRecorder", "ResponseWriter"]

NO_WRITTEN = -1
DEFAULT_STATUS = 200

_log = logging.getLogger(__name__)


def _canonical(key: str) -> str:
    return "-".join(part[:1].upper() + part[1:].lower() for part in key.split("-"))


def _as_bytes(data: bytes | bytearray | str) -> bytes:
    if isinstance(data, str):
        return data.encode("utf-8")
    return bytes(data)


class Headers:
    """Case-insensitive HTTP header map holding a list of values per name."""

    def __init__(self, initial: dict[str, str] | None = None) -> None:
        self._values: dict[str, list[str]] = {}
        for key, value in (initial or {}).items():
            self.set(key, value)

    def get(self, key: str, default: str = "") -> str:
        """Return the first value for ``key``, or ``default``."""
        values = self._values.get(_canonical(key))
        return values[0] if values else default

    def set(self, key: str, value: str) -> None:
        """Replace all values for ``key`` with ``value``."""
        self._values[_canonical(key)] = [value]

    def add(self, key: str, value: str) -> None:
        self._values.setdefault(_canonical(key), []).append(value)

    def get_all(self, key: str) -> list[str]:
        """Return every value for ``key``."""
        return list(self._values.get(_canonical(key), []))

    def __getitem__(self, key: str) -> list[str]:
        return self._values[_canonical(key)]

    def __setitem__(self, key: str, values: list[str]) -> None:
        self._values[_canonical(key)] = list(values)

    def __delitem__(self, key: str) -> None:
        canonical = _canonical(key)
        if canonical not in self._values:
            raise KeyError(key)
        self._values.pop(canonical)

    def __contains__(self, key: object) -> bool:
        return isinstance(key, str) and _canonical(key) in self._values

    def __iter__(self) -> Iterator[str]:
        return iter(self._values)

    def __len__(self) -> int:
        return len(self._values)

    def items(self) -> list[tuple[str, list[str]]]:
        return [(key, list(values)) for key, values in self._values.items()]

    def __repr__(self) -> str:
        return f"Headers({self._values!r})"


class ResponseRecorder:
    """In-memory response target that records status, headers and body."""

    def __init__(self) -> None:
        self.headers = Headers()
        self.code = DEFAULT_STATUS
        self.body = bytearray()
        self.wrote_header = False
        self.flushed = False

    def write_header(self, code: int) -> None:
        """Record the status code; only the first call counts."""
        if code < 100 or code > 999:
            raise ValueError(f"invalid WriteHeader code {code}")
        if self.wrote_header:
            return
        self.code = code
        self.wrote_header = True

    def write(self, data: bytes | bytearray | str) -> int:
        """Append to the body, sending a 200 status first if none was sent."""
        if not self.wrote_header:
            self.write_header(DEFAULT_STATUS)
        payload = _as_bytes(data)
        self.body.extend(payload)
        return len(payload)

    def flush(self) -> None:
        if not self.wrote_header:
            self.write_header(DEFAULT_STATUS)
        self.flushed = True

    def text(self) -> str:
        """Return the body decoded as UTF-8."""
        return self.body.decode("utf-8")


class ResponseWriter:
    """Wraps a response target and tracks status and bytes written."""

    def __init__(self, writer: Any = None) -> None:
        self.writer: Any = None
        self.size = NO_WRITTEN
        self.status = DEFAULT_STATUS
        self.reset(writer)

    def reset(self, writer: Any) -> None:
        """Attach a new target and forget any previous state."""
        self.writer = writer
        self.size = NO_WRITTEN
        self.status = DEFAULT_STATUS

    @property
    def headers(self) -> Headers:
        return self.writer.headers

    @property
    def written(self) -> bool:
        """True once the status line has gone to the target."""
        return self.size != NO_WRITTEN

    def write_header(self, code: int) -> None:
        """Remember the status code to send; non-positive codes are ignored."""
        if code > 0 and self.status != code:
            if self.written and is_debugging():
                _log.warning(
                    "[GIN-debug] [WARNING] Headers were already written. "
                    "Wanted to override status code %d with %d",
                    self.status,
                    code,
                )
            self.status = code

    def write_header_now(self) -> None:
        """Send the status to the target unless it was already sent."""
        if not self.written:
            self.size = 0
            self.writer.write_header(self.status)

    def write(self, data: bytes | bytearray | str) -> int:
        self.write_header_now()
        n = self.writer.write(_as_bytes(data))
        self.size += n
        return n

    def write_string(self, s: str) -> int:
        return self.write(s.encode("utf-8"))

    def flush(self) -> None:
        self.write_header_now()
        flush = getattr(self.writer, "flush", None)
        if not callable(flush):
            raise TypeError("the response target does not support flushing")
        flush()

    def hijack(self) -> Any:
        """Hand the underlying connection over to the caller."""
        if self.size < 0:
            self.size = 0
        hijack = getattr(self.writer, "hijack", None)
        if not callable(hijack):
            raise TypeError("the response target does not support hijacking")
        return hijack()

    def close_notify(self) -> Any:
        close_notify = getattr(self.writer, "close_notify", None)
        if not callable(close_notify):
            raise TypeError("the response target does not support close notification")
        return close_notify()

    def pusher(self) -> Any:
        """Return the target if it supports server push, else None."""
        if callable(getattr(self.writer, "push", None)):
            return self.writer
        return None