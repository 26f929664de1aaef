"""Response renderers: raw data, text, XML, YAML, MessagePack, protobuf, streams, redirects and HTML."""

from __future__ import annotations

import glob as _glob
import os
from abc import ABC, abstractmethod
from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from http import HTTPStatus
from typing import Any, ClassVar
from urllib.parse import urlsplit

import jinja2
import msgpack
import yaml

from goweb.paths import clean_path

__all__ = [
    "Render",
    "write_content_type",
    "Data",
    "String",
    "write_string",
    "XML",
    "YAML",
    "MsgPack",
    "write_msgpack",
    "ProtoBuf",
    "Reader",
    "Redirect",
    "Delims",
    "HTML",
    "HTMLProduction",
    "HTMLDebug",
]

PLAIN_CONTENT_TYPE = ("text/plain; charset=utf-8",)
XML_CONTENT_TYPE = ("application/xml; charset=utf-8",)
YAML_CONTENT_TYPE = ("application/x-yaml; charset=utf-8",)
MSGPACK_CONTENT_TYPE = ("application/msgpack; charset=utf-8",)
PROTOBUF_CONTENT_TYPE = ("application/x-protobuf",)
HTML_CONTENT_TYPE = ("text/html; charset=utf-8",)

_CHUNK_SIZE = 32 * 1024


def write_content_type(w: Any, value: Sequence[str]) -> None:
    """Set the Content-Type header of ``w`` unless it already has one."""
    headers = w.headers
    if not headers.get_all("Content-Type"):
        headers["Content-Type"] = list(value)


class Render(ABC):
    """Something that can write itself as an HTTP response body."""

    _content_type: ClassVar[tuple[str, ...]] = ()

    @abstractmethod
    def render(self, w: Any) -> None:
        """Write the content type and the body to ``w``."""

    def write_content_type(self, w: Any) -> None:
        """Write this renderer's content type to ``w``."""
        if self._content_type:
            write_content_type(w, self._content_type)


@dataclass
class Data(Render):
    """Raw bytes with a caller-chosen content type."""

    content_type: str = ""
    data: bytes = b""

    def render(self, w: Any) -> None:
        self.write_content_type(w)
        w.write(self.data)

    def write_content_type(self, w: Any) -> None:
        write_content_type(w, [self.content_type])


def write_string(w: Any, fmt: str, data: Sequence[Any]) -> None:
    """Write ``fmt`` formatted with ``data``, or ``fmt`` itself when there is no data."""
    write_content_type(w, PLAIN_CONTENT_TYPE)
    if data:
        w.write((fmt % tuple(data)).encode("utf-8"))
    else:
        w.write(fmt.encode("utf-8"))


@dataclass
class String(Render):
    """Plain text built from a %-style format and its arguments."""

    format: str = ""
    data: Sequence[Any] = ()

    _content_type = PLAIN_CONTENT_TYPE

    def render(self, w: Any) -> None:
        write_string(w, self.format, self.data)


@dataclass
class XML(Render):
    """An object encoded as XML through its ``to_xml`` method."""

    data: Any = None

    _content_type = XML_CONTENT_TYPE

    def render(self, w: Any) -> None:
        self.write_content_type(w)
        to_xml = getattr(self.data, "to_xml", None)
        if not callable(to_xml):
            raise TypeError(f"xml: unsupported type: {type(self.data).__name__}")
        w.write(to_xml().encode("utf-8"))


@dataclass
class YAML(Render):
    """An object encoded as YAML."""

    data: Any = None

    _content_type = YAML_CONTENT_TYPE

    def render(self, w: Any) -> None:
        self.write_content_type(w)
        body = yaml.safe_dump(self.data, allow_unicode=True, default_flow_style=False)
        w.write(body.encode("utf-8"))


def write_msgpack(w: Any, obj: Any) -> None:
    """Write the MessagePack content type and ``obj`` encoded as MessagePack."""
    write_content_type(w, MSGPACK_CONTENT_TYPE)
    w.write(msgpack.packb(obj))


@dataclass
class MsgPack(Render):
    """An object encoded as MessagePack."""

    data: Any = None

    _content_type = MSGPACK_CONTENT_TYPE

    def render(self, w: Any) -> None:
        write_msgpack(w, self.data)


@dataclass
class ProtoBuf(Render):
    """A protobuf message, serialised with its ``SerializeToString`` method."""

    data: Any = None

    _content_type = PROTOBUF_CONTENT_TYPE

    def render(self, w: Any) -> None:
        self.write_content_type(w)
        serialize = getattr(self.data, "SerializeToString", None)
        if not callable(serialize):
            raise TypeError(
                f"protobuf: {type(self.data).__name__} is not a protobuf message"
            )
        w.write(serialize())


@dataclass
class Reader(Render):
    """A stream copied to the response, with optional length and extra headers."""

    content_type: str = ""
    content_length: int = -1
    reader: Any = None
    headers: dict[str, str] | None = None

    def render(self, w: Any) -> None:
        self.write_content_type(w)
        headers = dict(self.headers or {})
        if self.content_length >= 0:
            headers["Content-Length"] = str(self.content_length)
        target = w.headers
        for key, value in headers.items():
            if target.get(key) == "":
                target.set(key, value)
        while chunk := self.reader.read(_CHUNK_SIZE):
            w.write(chunk)

    def write_content_type(self, w: Any) -> None:
        write_content_type(w, [self.content_type])


def _html_escape(s: str) -> str:
    return (
        s.replace("&", "&amp;")
        .replace("<", "&lt;")
        .replace(">", "&gt;")
        .replace('"', "&#34;")
        .replace("'", "&#39;")
    )


def _hex_escape_non_ascii(s: str) -> str:
    return "".join(
        chr(b) if b < 0x80 else f"%{b:x}" for b in s.encode("utf-8")
    )


def _status_text(code: int) -> str:
    try:
        return HTTPStatus(code).phrase
    except ValueError:
        return ""


def _resolve_location(location: str, request_path: str) -> str:
    parts = urlsplit(location)
    if parts.scheme or parts.netloc:
        return location
    old_path = request_path or "/"
    url = location
    if not url or url[0] != "/":
        old_dir = old_path[: old_path.rfind("/") + 1]
        url = old_dir + url
    query = ""
    question = url.find("?")
    if question != -1:
        url, query = url[:question], url[question:]
    trailing = url.endswith("/")
    url = clean_path(url)
    if trailing and not url.endswith("/"):
        url += "/"
    return url + query


@dataclass
class Redirect(Render):
    """An HTTP redirect to ``location``.

    ``request`` is any object with ``method`` and ``path`` attributes; when it is
    None the request counts as ``GET /``.
    """

    code: int
    request: Any = None
    location: str = ""

    def render(self, w: Any) -> None:
        if (self.code < 300 or self.code > 308) and self.code != 201:
            raise ValueError(f"Cannot redirect with status code {self.code}")
        method = getattr(self.request, "method", "GET") if self.request is not None else "GET"
        path = getattr(self.request, "path", "/") if self.request is not None else "/"
        url = _resolve_location(self.location, path)

        headers = w.headers
        had_content_type = "Content-Type" in headers
        headers.set("Location", _hex_escape_non_ascii(url))
        if not had_content_type and method in ("GET", "HEAD"):
            headers.set("Content-Type", HTML_CONTENT_TYPE[0])
        w.write_header(self.code)

        if not had_content_type and method == "GET":
            body = f'<a href="{_html_escape(url)}">{_status_text(self.code)}</a>.\n\n'
            w.write(body.encode("utf-8"))

    def write_content_type(self, w: Any) -> None:
        """Redirects carry no content type of their own."""


@dataclass
class Delims:
    """Left and right delimiters of template variables."""

    left: str = "{{"
    right: str = "}}"


def _template_context(data: Any) -> dict[str, Any]:
    if data is None:
        return {}
    if isinstance(data, Mapping):
        return dict(data)
    return {"data": data}


def _execute(template: Any, name: str, data: Any) -> str:
    context = _template_context(data)
    if isinstance(template, jinja2.Environment):
        if not name:
            raise ValueError("html: no template name given")
        return template.get_template(name).render(context)
    if not name or name == template.name:
        return template.render(context)
    raise jinja2.TemplateNotFound(name)


@dataclass
class HTML(Render):
    """A template executed with data.

    ``template`` is either a jinja2 Environment, from which the template called
    ``name`` is taken, or a single jinja2 Template. A mapping as ``data`` becomes
    the template context; any other value is available as ``data``.
    """

    template: Any = None
    name: str = ""
    data: Any = None

    _content_type = HTML_CONTENT_TYPE

    def render(self, w: Any) -> None:
        self.write_content_type(w)
        w.write(_execute(self.template, self.name, self.data).encode("utf-8"))


@dataclass
class HTMLProduction:
    """Hands out HTML renderers that share one loaded template set."""

    template: Any = None
    delims: Delims = field(default_factory=Delims)

    def instance(self, name: str, data: Any) -> HTML:
        """Return a renderer for the template ``name`` with ``data``."""
        return HTML(template=self.template, name=name, data=data)


@dataclass
class HTMLDebug:
    """Hands out HTML renderers that reload their templates every time."""

    files: list[str] | None = None
    glob: str = ""
    delims: Delims = field(default_factory=Delims)
    func_map: dict[str, Any] | None = None

    def instance(self, name: str, data: Any) -> HTML:
        """Reload the templates and return a renderer for ``name`` with ``data``."""
        return HTML(template=self._load_template(), name=name, data=data)

    def _load_template(self) -> jinja2.Environment:
        if self.files:
            paths = list(self.files)
        elif self.glob:
            paths = sorted(_glob.glob(self.glob))
            if not paths:
                raise ValueError(f"html/template: pattern matches no files: {self.glob!r}")
        else:
            raise ValueError("the HTML debug render was created without files or glob pattern")

        sources: dict[str, str] = {}
        for path in paths:
            with open(path, encoding="utf-8") as handle:
                sources[os.path.basename(path)] = handle.read()

        env = jinja2.Environment(
            loader=jinja2.DictLoader(sources),
            autoescape=True,
            keep_trailing_newline=True,
            variable_start_string=self.delims.left or "{{",
            variable_end_string=self.delims.right or "}}",
        )
        env.globals.update(self.func_map or {})
        return env