"""Canonicalisation of URL paths."""

from __future__ import annotations

__all__ = ["clean_path"]


def clean_path(p: str) -> str:
    """Return the canonical URL path for ``p``.

    Multiple slashes collapse into one, ``.`` elements are dropped, and each
    ``..`` removes the element before it. A ``..`` that would climb above the
    root is ignored. The result always starts with ``/``. A trailing slash is
    kept, and a final ``.`` element counts as a trailing slash. The empty
    string becomes ``/``.
    """
    if not p:
        return "/"

    trailing = len(p) > 1 and p.endswith("/")
    elements: list[str] = []
    parts = p.split("/")

    for position, part in enumerate(parts):
        if part == "":
            continue
        if part == ".":
            if position == len(parts) - 1:
                trailing = True
            continue
        if part == "..":
            if elements:
                elements.pop()
            continue
        elements.append(part)

    result = "/" + "/".join(elements)
    if trailing and elements:
        result += "/"
    return result