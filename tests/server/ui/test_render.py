from __future__ import annotations

import copy

import pytest

from flipscroll.core.paging import PagingConfig
from flipscroll.core.templates import Callback, PlaceholderString
from flipscroll.errors import DataShapeError
from flipscroll.server.ui.render import render_page, resolve_data_key
from flipscroll.server.ui.views.table import render_table


def test_render_table_default_markup() -> None:
    html = render_table({"id": "ID", "name": "Name"}, [{"id": 1, "name": "Mallard"}])
    assert html == (
        '<table class="table-bordered table-striped table-condensed cf">'
        '<thead class="cf"><tr><th>ID</th><th>Name</th></tr></thead>'
        "<tbody><tr><td>1</td><td>Mallard</td></tr></tbody></table>"
    )


def test_render_page_combines_pager_and_table(payload_factory) -> None:
    payload = payload_factory()
    original = copy.deepcopy(payload)
    state = PagingConfig("/orders", page=1, limit=10)

    rendered = render_page(payload, state)

    assert rendered.markup.startswith('<div class="pagination"><ul>')
    assert "<th>ID</th><th>Name</th>" in rendered.markup
    assert "<tr><td>2</td><td>Teal</td></tr>" in rendered.markup
    assert rendered.data_key == "items"
    assert rendered.row_count == 2
    assert (rendered.window.start, rendered.window.end) == (1, 3)
    assert payload == original
    assert state.data_key is None


def test_render_page_uses_templates(payload_factory) -> None:
    rendered = render_page(
        payload_factory(),
        PagingConfig("/orders", limit=10),
        header_template=PlaceholderString("<tr><th>{name}!</th></tr>"),
        row_template=Callback(lambda row, index: f"<tr data-i='{index}'><td>{row['name']}</td></tr>"),
    )
    assert "<thead class=\"cf\"><tr><th>Name!</th></tr></thead>" in rendered.markup
    assert "<tr data-i='0'><td>Mallard</td></tr><tr data-i='1'><td>Teal</td></tr>" in rendered.markup


def test_resolve_data_key_scans_in_order() -> None:
    payload = {"paging": {}, "metadata": {}, "items": [], "extra": []}
    assert resolve_data_key(payload) == "items"
    assert resolve_data_key(payload, "extra") == "extra"

    with pytest.raises(DataShapeError):
        resolve_data_key({"paging": {}, "metadata": {}})
    with pytest.raises(DataShapeError):
        resolve_data_key(payload, "rows")


def test_resolved_key_is_reused_when_new_fields_appear(payload_factory) -> None:
    state = PagingConfig("/orders", limit=10)
    first = render_page(payload_factory(), state)
    state.data_key = first.data_key

    payload = {"aardvark": [{"x": 1}], **payload_factory()}
    second = render_page(payload, state, data_key=state.data_key)

    assert second.data_key == "items"
    assert "Mallard" in second.markup


def test_render_page_empty_collection_renders_empty_body(payload_factory) -> None:
    rendered = render_page(payload_factory(rows=[], total_rows=0, last_page=1), PagingConfig("/orders", limit=10))
    assert rendered.markup.endswith("<tbody></tbody></table>")
    assert rendered.row_count == 0


@pytest.mark.parametrize(
    "mutate",
    [
        lambda body: body.pop("paging"),
        lambda body: body.pop("metadata"),
        lambda body: body.pop("items"),
        lambda body: body.__setitem__("items", "not rows"),
        lambda body: body.__setitem__("items", [1, 2]),
    ],
)
def test_render_page_rejects_malformed_payloads(payload_factory, mutate) -> None:
    payload = payload_factory()
    mutate(payload)
    with pytest.raises(DataShapeError):
        render_page(payload, PagingConfig("/orders", limit=10))
