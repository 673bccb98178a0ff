"""HTML fragments for the table view."""
from __future__ import annotations

from typing import Any, Mapping, Sequence

from ....core.templates import UNSET, Template, render_fragment

TABLE_CLASSES = "table-bordered table-striped table-condensed cf"


def render_table(
    metadata: Mapping[str, Any],
    records: Sequence[Mapping[str, Any]],
    *,
    header_template: Template = UNSET,
    row_template: Template = UNSET,
) -> str:
    header_html = render_fragment(header_template, metadata, cell_tag="th")
    rows_html = "".join(
        render_fragment(row_template, record, index) for index, record in enumerate(records)
    )
    return (
        f'<table class="{TABLE_CLASSES}">'
        '<thead class="cf">'
        + header_html
        + "</thead><tbody>"
        + rows_html
        + "</tbody></table>"
    )


__all__ = ["TABLE_CLASSES", "render_table"]
