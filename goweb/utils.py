"""Small helpers shared by the router and the response renderers."""

from __future__ import annotations

import logging
import os
from collections.abc import Mapping, Sequence
from typing import Any
from xml.sax.saxutils import escape

from goweb.mode import is_debugging

__all__ = [
    "H",
    "filter_flags",
    "choose_data",
    "parse_accept",
    "last_char",
    "join_paths",
    "resolve_address",
]

_log = logging.getLogger(__name__)


def _debug(message: str) -> None:
    if is_debugging():
        _log.debug("[GIN-debug] %s", message)


def _xml_text(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (bytes, bytearray)):
        return escape(bytes(value).decode("utf-8", errors="replace"))
    return escape(str(value))


def _xml_element(name: str, value: Any) -> str:
    if not name:
        raise ValueError("xml: start tag with no name")
    if value is None:
        return ""
    if isinstance(value, H):
        inner = "".join(_xml_element(k, v) for k, v in value.items())
        return f"<{name}>{inner}</{name}>"
    if isinstance(value, Mapping):
        raise TypeError(f"xml: unsupported type: {type(value).__name__}")
    if isinstance(value, (list, tuple)):
        return "".join(_xml_element(name, item) for item in value)
    return f"<{name}>{_xml_text(value)}</{name}>"


class H(dict):
    """A plain string-keyed mapping, handy for building responses."""

    def to_xml(self) -> str:
        """Encode the mapping as ``<map><key>value</key>...</map>``."""
        body = "".join(_xml_element(key, value) for key, value in self.items())
        return f"<map>{body}</map>"


def filter_flags(content: str) -> str:
    """Return ``content`` up to the first space or semicolon."""
    for index, char in enumerate(content):
        if char in " ;":
            return content[:index]
    return content


def choose_data(custom: Any, wildcard: Any) -> Any:
    """Return ``custom`` if set, else ``wildcard``; one of them must be set."""
    if custom is not None:
        return custom
    if wildcard is not None:
        return wildcard
    raise ValueError("negotiation config is invalid")


def parse_accept(accept_header: str) -> list[str]:
    """Split an Accept header into media types, dropping parameters."""
    out = []
    for part in accept_header.split(","):
        semicolon = part.find(";")
        if semicolon > 0:
            part = part[:semicolon]
        part = part.strip()
        if part:
            out.append(part)
    return out


def last_char(s: str) -> str:
    """Return the last character of a non-empty string."""
    if not s:
        raise ValueError("The length of the string can't be 0")
    return s[-1]


def _clean(p: str) -> str:
    if not p:
        return "."
    rooted = p.startswith("/")
    out: list[str] = []
    for part in p.split("/"):
        if part in ("", "."):
            continue
        if part == "..":
            if out and out[-1] != "..":
                out.pop()
            elif not rooted:
                out.append("..")
            continue
        out.append(part)
    joined = "/".join(out)
    if rooted:
        joined = "/" + joined
    return joined or "."


def _join(*elements: str) -> str:
    present = [element for element in elements if element]
    if not present:
        return ""
    return _clean("/".join(present))


def join_paths(absolute_path: str, relative_path: str) -> str:
    """Join a base path and a relative path, keeping a trailing slash."""
    if relative_path == "":
        return absolute_path
    final_path = _join(absolute_path, relative_path)
    if last_char(relative_path) == "/" and last_char(final_path) != "/":
        return final_path + "/"
    return final_path


def resolve_address(addr: Sequence[str]) -> str:
    """Pick the listen address: the one given, else ``$PORT``, else ``:8080``."""
    if len(addr) == 0:
        port = os.environ.get("PORT", "")
        if port:
            _debug(f'Environment variable PORT="{port}"')
            return ":" + port
        _debug("Environment variable PORT is undefined. Using port :8080 by default")
        return ":8080"
    if len(addr) == 1:
        return addr[0]
    raise ValueError("too many parameters")