"""Server-side HTML layout assembly for flipscroll."""
from __future__ import annotations

from typing import Mapping

from ... import __version__ as PACKAGE_VERSION

_BASE_STYLES = (
    ".pagination ul{list-style:none;display:flex;gap:.25rem;padding:0;}"
    ".pagination li a{display:block;padding:.25rem .5rem;border:1px solid #d0d7de;"
    "color:#2563eb;text-decoration:none;}"
    ".pagination li.active a{color:#57606a;background:#f6f8fa;pointer-events:none;}"
    "table{border-collapse:collapse;}"
    "th,td{border:1px solid #d0d7de;padding:.25rem .5rem;text-align:left;}"
)


def container_attribute(selector: str) -> tuple[str, str]:
    """Return the ``(attribute, value)`` pair addressed by a container selector.

    ``#orders`` maps to ``id='orders'`` and ``.orders`` to ``class='orders'``.
    """

    selector = selector.strip()
    name = selector[1:]
    if len(selector) < 2 or selector[0] not in "#." or not _is_plain_name(name):
        raise ValueError(f"Container selector must be '#id' or '.class', got {selector!r}")
    return ("id" if selector[0] == "#" else "class"), name


def _is_plain_name(name: str) -> bool:
    return all(ch.isalnum() or ch in "-_" for ch in name)


def render_layout(
    *,
    page_title: str | None,
    container_selector: str,
    container_html: str,
    body_data: Mapping[str, object] | None = None,
) -> str:
    """Assemble the final HTML document.

    ``container_html`` is placed verbatim inside the element addressed by
    ``container_selector``; ``body_data`` becomes ``data-*`` attributes on
    ``<body>`` so client code can pick up the paging options.
    """

    body_attrs = {"data-flipscroll-version": PACKAGE_VERSION}
    for key, value in (body_data or {}).items():
        body_attrs[f"data-{key}"] = "" if value is None else str(value)
    body_attr_text = "".join(f" {k}='{_escape_attr(v)}'" for k, v in body_attrs.items())

    document = ["<!doctype html>", "<html><head>", "<meta charset='utf-8'>"]
    if page_title:
        document.append("<title>" + _escape_text(page_title) + "</title>")
    document.append("<style>" + _BASE_STYLES + "</style>")
    document.append("</head><body" + body_attr_text + ">")
    if page_title:
        document.append("<h1>" + _escape_text(page_title) + "</h1>")
    attribute, value = container_attribute(container_selector)
    document.append(f"<div {attribute}='{_escape_attr(value)}'>")
    document.append(container_html)
    document.append("</div></body></html>")
    return "".join(document)


def _escape_text(value: str) -> str:
    return (
        value.replace("&", "&amp;")
        .replace("<", "&lt;")
        .replace(">", "&gt;")
    )


def _escape_attr(value: str) -> str:
    return (
        _escape_text(value)
        .replace("'", "&#39;")
        .replace('"', "&quot;")
    )


__all__ = ["container_attribute", "render_layout"]
