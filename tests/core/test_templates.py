from __future__ import annotations

import pytest

from flipscroll.core.templates import (
    UNSET,
    Callback,
    PlaceholderString,
    as_template,
    render_fragment,
)
from flipscroll.errors import ConfigurationError


def test_as_template_classifies_once() -> None:
    def row(record, index):
        return "<tr></tr>"

    assert as_template(None) is UNSET
    assert as_template("") is UNSET
    assert as_template("<tr><td>{id}</td></tr>") == PlaceholderString("<tr><td>{id}</td></tr>")
    assert as_template(row) == Callback(row)
    existing = PlaceholderString("{x}")
    assert as_template(existing) is existing
    with pytest.raises(ConfigurationError):
        as_template(42)


def test_callback_receives_index_for_rows_only() -> None:
    calls: list[tuple] = []

    def template(*args):
        calls.append(args)
        return "<tr class='x'></tr>"

    record = {"id": 1}
    assert render_fragment(Callback(template), record, 3) == "<tr class='x'></tr>"
    assert render_fragment(Callback(template), record, cell_tag="th") == "<tr class='x'></tr>"
    assert calls == [(record, 3), (record,)]


def test_placeholder_replaces_every_occurrence() -> None:
    template = PlaceholderString("<tr><td>{name}</td><td>{name}/{id}</td><td>{missing}</td></tr>")
    html = render_fragment(template, {"id": 7, "name": "Teal"}, 0)
    assert html == "<tr><td>Teal</td><td>Teal/7</td><td>{missing}</td></tr>"


def test_placeholder_without_matching_keys_is_unchanged() -> None:
    text = "<tr><td>{alpha}</td></tr>"
    assert render_fragment(PlaceholderString(text), {"beta": 1, "gamma": 2}, 0) == text


def test_placeholder_substitution_follows_record_order() -> None:
    template = PlaceholderString("{a}|{b}")
    assert render_fragment(template, {"a": "{b}", "b": "x"}, 0) == "x|x"
    assert render_fragment(template, {"b": "x", "a": "{b}"}, 0) == "{b}|x"


def test_unset_renders_one_cell_per_field() -> None:
    record = {"id": 1, "name": "<b>Mallard</b>"}
    assert render_fragment(UNSET, record, 0) == "<tr><td>1</td><td><b>Mallard</b></td></tr>"
    assert render_fragment(UNSET, {"id": "ID"}, cell_tag="th") == "<tr><th>ID</th></tr>"
