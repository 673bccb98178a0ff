"""Client side of flipscroll: transport, container collaborators and controller."""

from .container import MarkupContainer, MarkupDialog, PagerItem
from .controller import FlipScroll
from .transport import JsonTransport

__all__ = ["FlipScroll", "JsonTransport", "MarkupContainer", "MarkupDialog", "PagerItem"]
