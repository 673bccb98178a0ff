"""Pure paging and templating primitives."""

from .paging import ALL, PagingConfig, PagingResponse, is_show_all
from .templates import UNSET, Callback, PlaceholderString, Template, Unset, as_template, render_fragment
from .window import WindowResult, compute_window

__all__ = [
    "ALL",
    "UNSET",
    "Callback",
    "PagingConfig",
    "PagingResponse",
    "PlaceholderString",
    "Template",
    "Unset",
    "WindowResult",
    "as_template",
    "compute_window",
    "is_show_all",
    "render_fragment",
]
