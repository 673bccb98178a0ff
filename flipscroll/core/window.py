"""Pagination window calculation."""
from __future__ import annotations

from dataclasses import dataclass

from .paging import Limit, PagingConfig, PagingResponse


@dataclass(frozen=True, slots=True)
class WindowResult:
    """Numeric page links to expose, ``start``..``end`` inclusive.

    ``link_limit`` is the limit the pager links should request. It falls back to
    the configured default once all rows are being shown.
    """

    start: int
    end: int
    showing_all: bool
    link_limit: Limit

    @property
    def pages(self) -> range:
        return range(self.start, self.end + 1)


def compute_window(state: PagingConfig, paging: PagingResponse) -> WindowResult:
    """Return the page window for ``paging`` given the table's ``state``.

    The window is ``state.pager_length`` pages wide where possible, centred on the
    current page and clamped to ``[1, paging.last_page]``. Near either edge the
    short side is compensated by widening the other.
    """

    current = paging.current_page
    remaining = paging.last_page - current
    step = state.pager_length // 2
    start = 1
    end = state.pager_length

    if current == start:
        if remaining >= state.pager_length:
            end = state.pager_length
        elif remaining:
            end = current + remaining
        else:
            end = current
    elif remaining == 0:
        end = paging.last_page
        start = end - (state.pager_length - 1)
    else:
        if remaining >= step:
            end = current + step
        else:
            end = paging.last_page
            step += remaining
        if current <= step:
            start = 1
            end = current + start + step
        else:
            start = current - step
            if start == 0:
                start += 1
                end += 1

    start = max(start, 1)
    end = min(end, paging.last_page)

    showing_all = state.showing_all or state.limit == paging.total_rows
    link_limit = state.default_limit if showing_all else state.limit
    return WindowResult(start=start, end=end, showing_all=showing_all, link_limit=link_limit)


__all__ = ["WindowResult", "compute_window"]
