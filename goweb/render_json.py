"""JSON response renderers in their several flavours."""

from __future__ import annotations

import base64
import json
from dataclasses import dataclass
from typing import Any

from goweb.render import Render, write_content_type

__all__ = [
    "JSON",
    "IndentedJSON",
    "SecureJSON",
    "JsonpJSON",
    "AsciiJSON",
    "PureJSON",
    "write_json",
    "marshal",
]

JSON_CONTENT_TYPE = ("application/json; charset=utf-8",)
JSONP_CONTENT_TYPE = ("application/javascript; charset=utf-8",)
JSON_ASCII_CONTENT_TYPE = ("application/json",)

_LINE_ESCAPES = {0x2028: "\\u2028", 0x2029: "\\u2029"}
_HTML_ESCAPES = {
    ord("<"): "\\u003c",
    ord(">"): "\\u003e",
    ord("&"): "\\u0026",
    **_LINE_ESCAPES,
}

_JS_ESCAPES = {
    "\\": "\\\\",
    "'": "\\'",
    '"': '\\"',
    "<": "\\u003C",
    ">": "\\u003E",
    "&": "\\u0026",
    "=": "\\u003D",
}


def _default(obj: Any) -> Any:
    if isinstance(obj, (bytes, bytearray)):
        return base64.b64encode(bytes(obj)).decode("ascii")
    raise TypeError(f"json: unsupported type: {type(obj).__name__}")


def _encode(obj: Any, *, escape_html: bool = True, indent: int | None = None) -> str:
    separators = (",", ": ") if indent is not None else (",", ":")
    text = json.dumps(
        obj,
        ensure_ascii=False,
        sort_keys=True,
        allow_nan=False,
        default=_default,
        indent=indent,
        separators=separators,
    )
    return text.translate(_HTML_ESCAPES if escape_html else _LINE_ESCAPES)


def marshal(obj: Any) -> bytes:
    """Encode ``obj`` as compact JSON with sorted keys and HTML-safe strings."""
    return _encode(obj).encode("utf-8")


def write_json(w: Any, obj: Any) -> None:
    """Write the JSON content type and ``obj`` encoded as JSON."""
    write_content_type(w, JSON_CONTENT_TYPE)
    w.write(marshal(obj))


def _js_escape(s: str) -> str:
    out = []
    for ch in s:
        code = ord(ch)
        if ch in _JS_ESCAPES:
            out.append(_JS_ESCAPES[ch])
        elif code < 0x20:
            out.append(f"\\u{code:04X}")
        elif code < 0x80 or ch.isprintable():
            out.append(ch)
        else:
            out.append(f"\\u{code:04X}")
    return "".join(out)


@dataclass
class JSON(Render):
    """An object encoded as JSON."""

    data: Any = None

    _content_type = JSON_CONTENT_TYPE

    def render(self, w: Any) -> None:
        write_json(w, self.data)


@dataclass
class IndentedJSON(Render):
    """An object encoded as JSON indented by four spaces."""

    data: Any = None

    _content_type = JSON_CONTENT_TYPE

    def render(self, w: Any) -> None:
        self.write_content_type(w)
        w.write(_encode(self.data, indent=4).encode("utf-8"))


@dataclass
class SecureJSON(Render):
    """JSON whose top-level arrays are preceded by ``prefix``."""

    prefix: str = ""
    data: Any = None

    _content_type = JSON_CONTENT_TYPE

    def render(self, w: Any) -> None:
        self.write_content_type(w)
        body = marshal(self.data)
        if body.startswith(b"[") and body.endswith(b"]"):
            w.write(self.prefix.encode("utf-8"))
        w.write(body)


@dataclass
class JsonpJSON(Render):
    """JSON wrapped in a call to ``callback``; plain JSON without a callback."""

    callback: str = ""
    data: Any = None

    _content_type = JSONP_CONTENT_TYPE

    def render(self, w: Any) -> None:
        self.write_content_type(w)
        body = marshal(self.data)
        if not self.callback:
            w.write(body)
            return
        w.write(_js_escape(self.callback).encode("utf-8"))
        w.write(b"(")
        w.write(body)
        w.write(b");")


@dataclass
class AsciiJSON(Render):
    """JSON with every non-ASCII character written as a \\u escape."""

    data: Any = None

    _content_type = JSON_ASCII_CONTENT_TYPE

    def render(self, w: Any) -> None:
        self.write_content_type(w)
        text = marshal(self.data).decode("utf-8")
        ascii_text = "".join(
            ch if ord(ch) < 128 else f"\\u{ord(ch):04x}" for ch in text
        )
        w.write(ascii_text.encode("ascii"))


@dataclass
class PureJSON(Render):
    """JSON without HTML escaping, followed by a newline."""

    data: Any = None

    _content_type = JSON_CONTENT_TYPE

    def render(self, w: Any) -> None:
        self.write_content_type(w)
        w.write((_encode(self.data, escape_html=False) + "\n").encode("utf-8"))