"""Header and row templates.

A template is classified once, when it is assigned, into one of three variants:

``Callback``
    A callable producing markup. Row callbacks receive ``(record, index)``,
    header callbacks receive ``(record)``.
``PlaceholderString``
    Markup containing ``{field}`` tokens. Every occurrence of ``{key}`` is
    replaced by ``str(record[key])`` in the record's key order. Tokens without a
    matching key are left untouched. No escaping is applied, and a substituted
    value that itself contains another field's token will be substituted again
    when that field comes later in the record.
``Unset``
    One ``<th>`` (header) or ``<td>`` (row) cell per record value, wrapped in
    ``<tr>``.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Mapping, Union

from ..errors import ConfigurationError


@dataclass(frozen=True, slots=True)
class Callback:
    func: Callable[..., Any]


@dataclass(frozen=True, slots=True)
class PlaceholderString:
    text: str


@dataclass(frozen=True, slots=True)
class Unset:
    pass


UNSET = Unset()

Template = Union[Callback, PlaceholderString, Unset]


def as_template(value: object) -> Template:
    """Classify a user supplied template value."""

    if value is None:
        return UNSET
    if isinstance(value, (Callback, PlaceholderString, Unset)):
        return value
    if isinstance(value, str):
        return PlaceholderString(value) if value else UNSET
    if callable(value):
        return Callback(value)
    raise ConfigurationError(
        f"Templates must be a callable or a string, got {type(value).__name__}"
    )


def render_fragment(
    template: Template,
    record: Mapping[str, Any],
    index: int | None = None,
    *,
    cell_tag: str = "td",
) -> str:
    """Render ``record`` through ``template``.

    ``index`` is passed to row callbacks only; header rendering leaves it as
    ``None`` and uses ``cell_tag="th"``.
    """

    if isinstance(template, Callback):
        if index is None:
            return str(template.func(record))
        return str(template.func(record, index))
    if isinstance(template, PlaceholderString):
        return substitute_placeholders(template.text, record)
    cells = "".join(f"<{cell_tag}>{value}</{cell_tag}>" for value in record.values())
    return f"<tr>{cells}</tr>"


def substitute_placeholders(text: str, record: Mapping[str, Any]) -> str:
    for key, value in record.items():
        text = text.replace("{" + str(key) + "}", str(value))
    return text


__all__ = [
    "UNSET",
    "Callback",
    "PlaceholderString",
    "Template",
    "Unset",
    "as_template",
    "render_fragment",
    "substitute_placeholders",
]
