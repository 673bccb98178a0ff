"""Container and dialog collaborators used by the controller.

The controller only needs two things from its host: somewhere to put markup and
a way to hear about clicks on pager entries. :class:`MarkupContainer` keeps the
markup in memory and dispatches clicks by parsing the current pager, which is
what the CLI and the tests drive.
"""
from __future__ import annotations

import inspect
from dataclasses import dataclass
from html.parser import HTMLParser
from typing import Awaitable, Callable, Protocol, Union


@dataclass(frozen=True, slots=True)
class PagerItem:
    """A ``<li>`` in the pager together with its ``data-*`` attributes."""

    classes: frozenset[str]
    page: str | None
    limit: str | None
    label: str

    @property
    def kind(self) -> str:
        for name in ("all", "first", "prev", "numeric", "next", "last", "back"):
            if name in self.classes:
                return name
        return ""

    @property
    def active(self) -> bool:
        return "active" in self.classes


ClickResult = Union[bool, None, Awaitable[Union[bool, None]]]
ClickHandler = Callable[[PagerItem], ClickResult]


class Container(Protocol):
    selector: str

    def html(self, markup: str) -> None:
        ...

    def on_click(self, name: str, handler: ClickHandler) -> None:
        ...


class Dialog(Protocol):
    def open(self, message: str) -> None:
        ...


class MarkupContainer:
    """In-memory container holding the latest markup."""

    def __init__(self, selector: str = "#flip-scroll") -> None:
        self.selector = selector
        self.markup = ""
        self.swaps = 0
        self._handlers: dict[str, ClickHandler] = {}

    def html(self, markup: str) -> None:
        self.markup = markup
        self.swaps += 1

    def on_click(self, name: str, handler: ClickHandler) -> None:
        # One handler per name; rebinding replaces it.
        self._handlers[name] = handler

    @property
    def handler_names(self) -> list[str]:
        return list(self._handlers)

    def pager_items(self) -> list[PagerItem]:
        parser = _PagerParser()
        parser.feed(self.markup)
        parser.close()
        return parser.items

    def find(self, kind: str, label: str | None = None) -> PagerItem:
        for item in self.pager_items():
            if item.kind == kind and (label is None or item.label == label):
                return item
        raise LookupError(f"No pager item {kind!r} (label={label!r}) in {self.selector}")

    async def click(self, kind: str, label: str | None = None) -> bool:
        """Dispatch a click on a pager item.

        Returns ``True`` when a handler suppressed the default navigation.
        """

        item = self.find(kind, label)
        prevented = False
        for handler in list(self._handlers.values()):
            result = handler(item)
            if inspect.isawaitable(result):
                result = await result
            if result is False:
                prevented = True
        return prevented


class MarkupDialog:
    """In-memory stand-in for a modal dialog."""

    def __init__(self) -> None:
        self.markup = ""
        self.is_open = False
        self.messages: list[str] = []

    def open(self, message: str) -> None:
        self.markup = f"<p>{message}</p>"
        self.messages.append(message)
        self.is_open = True

    def close(self) -> None:
        self.is_open = False


class _PagerParser(HTMLParser):
    def __init__(self) -> None:
        super().__init__(convert_charrefs=True)
        self.items: list[PagerItem] = []
        self._depth = 0
        self._current: dict[str, str | None] | None = None
        self._label: list[str] = []

    def handle_starttag(self, tag: str, attrs: list[tuple[str, str | None]]) -> None:
        attr_map = dict(attrs)
        if tag == "div" and "pagination" in (attr_map.get("class") or "").split():
            self._depth += 1
        elif tag == "li" and self._depth:
            self._current = attr_map
            self._label = []

    def handle_endtag(self, tag: str) -> None:
        if tag == "li" and self._current is not None:
            current = self._current
            self.items.append(
                PagerItem(
                    classes=frozenset((current.get("class") or "").split()),
                    page=current.get("data-page"),
                    limit=current.get("data-limit"),
                    label="".join(self._label).strip(),
                )
            )
            self._current = None
        elif tag == "div" and self._depth:
            self._depth -= 1

    def handle_data(self, data: str) -> None:
        if self._current is not None:
            self._label.append(data)


__all__ = [
    "ClickHandler",
    "Container",
    "Dialog",
    "MarkupContainer",
    "MarkupDialog",
    "PagerItem",
]
