"""HTML fragment for the pagination controls."""
from __future__ import annotations

from ...core.paging import Limit, PagingConfig, PagingResponse
from ...core.window import WindowResult


def _item(kind: str, label: object, page: int, limit: Limit, active: bool) -> str:
    css = "active" if active else ""
    return (
        f'<li data-page="{page}" data-limit="{limit}" class="{kind} {css}">'
        f'<a href="">{label}</a></li>'
    )


def render_pager(state: PagingConfig, paging: PagingResponse, window: WindowResult) -> str:
    """Build ``<div class="pagination">`` for ``window``.

    In show-all mode the list collapses to a single ``back`` item pointing at the
    page/limit pair that was active before switching.
    """

    current = paging.current_page
    limit = window.link_limit
    items: list[str] = []
    if not window.showing_all:
        on_last = current == paging.last_page
        items.append(_item("all", "All", 1, paging.total_rows, window.start == window.end))
        items.append(_item("first", "First", 1, limit, current == 1))
        items.append(_item("prev", "Prev", current - 1, limit, current <= 1))
        for number in window.pages:
            items.append(_item("numeric", number, number, limit, number == current))
        items.append(_item("next", "Next", current + 1, limit, on_last))
        items.append(_item("last", "Last", paging.last_page, limit, on_last))
    else:
        items.append(
            f'<li data-page="{state.last_page}" data-limit="{state.last_limit}" class="back">'
            '<a href="">Back</a></li>'
        )
    return '<div class="pagination"><ul>' + "".join(items) + "</ul></div>"


__all__ = ["render_pager"]
