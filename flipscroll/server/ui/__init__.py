"""Markup builders for the pager, the table and the page shell."""

from .pager import render_pager
from .render import RenderedPage, render_page, resolve_data_key
from .views.table import render_table

__all__ = [
    "RenderedPage",
    "render_page",
    "render_pager",
    "render_table",
    "resolve_data_key",
]
