"""Compose the pager and the table for one response payload."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping, Sequence

from ...core.paging import PagingConfig, PagingResponse
from ...core.templates import UNSET, Template
from ...core.window import WindowResult, compute_window
from ...errors import DataShapeError
from .pager import render_pager
from .views.table import render_table

RESERVED_KEYS = frozenset({"paging", "metadata"})


@dataclass(frozen=True, slots=True)
class RenderedPage:
    markup: str
    data_key: str
    paging: PagingResponse
    window: WindowResult
    row_count: int


def resolve_data_key(payload: Mapping[str, Any], data_key: str | None = None) -> str:
    """Return the key holding the row collection.

    An explicit ``data_key`` wins. Otherwise the first top-level key that is not
    ``paging`` or ``metadata`` is used.
    """

    if data_key:
        if data_key not in payload:
            raise DataShapeError(f"Response has no '{data_key}' collection")
        return data_key
    for key in payload:
        if key not in RESERVED_KEYS:
            return str(key)
    raise DataShapeError("Response has no row collection besides 'paging' and 'metadata'")


def render_page(
    payload: Mapping[str, Any],
    state: PagingConfig,
    *,
    header_template: Template = UNSET,
    row_template: Template = UNSET,
    data_key: str | None = None,
) -> RenderedPage:
    """Render the pager followed by the table for ``payload``.

    ``payload`` and ``state`` are left untouched; callers persist
    ``RenderedPage.data_key`` so later pages skip the key scan.
    """

    if not isinstance(payload, Mapping):
        raise DataShapeError("Response body must be a JSON object")
    paging = PagingResponse.from_mapping(payload.get("paging"))
    metadata = payload.get("metadata")
    if not isinstance(metadata, Mapping):
        raise DataShapeError("Response is missing a 'metadata' object")

    window = compute_window(state, paging)
    pager_html = render_pager(state, paging, window)

    resolved = resolve_data_key(payload, data_key)
    rows = payload[resolved]
    if not isinstance(rows, Sequence) or isinstance(rows, (str, bytes)):
        raise DataShapeError(f"Response field '{resolved}' must be a list of rows")
    for row in rows:
        if not isinstance(row, Mapping):
            raise DataShapeError(f"Rows in '{resolved}' must be objects")

    table_html = render_table(
        metadata,
        rows,
        header_template=header_template,
        row_template=row_template,
    )
    return RenderedPage(
        markup=pager_html + table_html,
        data_key=resolved,
        paging=paging,
        window=window,
        row_count=len(rows),
    )


__all__ = ["RESERVED_KEYS", "RenderedPage", "render_page", "resolve_data_key"]
