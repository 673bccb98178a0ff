"""The table controller: fetch, render, swap markup, rebind pager clicks."""
from __future__ import annotations

import logging
from typing import Any, Callable, Protocol

from ..config import Config
from ..core.paging import DEFAULT_LIMIT, DEFAULT_PAGE, DEFAULT_PAGER_LENGTH, Limit, PagingConfig
from ..core.templates import UNSET, Template, as_template
from ..errors import ConfigurationError, DataShapeError, TransportError
from ..server.ui.render import RenderedPage, render_page
from .container import Container, Dialog, MarkupContainer, MarkupDialog, PagerItem
from .transport import JsonTransport

logger = logging.getLogger(__name__)

PAGER_HANDLER = "flipscroll.pager"


class Transport(Protocol):
    async def fetch(self, action: str, page: int, limit: Limit) -> Any:
        ...


class FlipScroll:
    """Paged table bound to a container.

    Each :meth:`load` fetches ``<action>.json`` for the current page and limit,
    renders pager and table into the container and rebinds the pager so clicking
    an inactive entry loads that page. Overlapping loads resolve latest-wins: a
    completion that has been superseded by a newer :meth:`load` is dropped.
    """

    def __init__(
        self,
        container_selector: str | None = None,
        action: str = "",
        page: int | None = None,
        limit: Limit | None = None,
        template: object = None,
        data_key: str | None = None,
        *,
        transport: Transport,
        container: Container | None = None,
        dialog: Dialog | None = None,
        pager_length: int = DEFAULT_PAGER_LENGTH,
    ) -> None:
        self.container_selector = container_selector or "#flip-scroll"
        self.paging = PagingConfig(
            action,
            page or DEFAULT_PAGE,
            limit or DEFAULT_LIMIT,
            pager_length=pager_length,
            data_key=data_key or None,
        )
        self.row_template: Template = as_template(template)
        self.header_template: Template = UNSET
        self.event_handlers: list[object] = []
        self.transport = transport
        self.container = container or MarkupContainer(self.container_selector)
        self.dialog = dialog or MarkupDialog()
        self.last_render: RenderedPage | None = None
        self._ticket = 0

    @classmethod
    def from_config(
        cls,
        config: Config,
        *,
        transport: Transport | None = None,
        container: Container | None = None,
        dialog: Dialog | None = None,
    ) -> "FlipScroll":
        table = config.table
        if transport is None:
            transport = JsonTransport(
                config.transport.base_url,
                timeout=config.transport.timeout_seconds,
                headers=config.transport.headers,
            )
        return cls(
            table.container_selector,
            table.action,
            table.page,
            table.limit,
            data_key=table.data_key,
            transport=transport,
            container=container,
            dialog=dialog,
            pager_length=table.pager_length,
        )

    def set_paging_options(self, action: str, page: int | None = None, limit: Limit | None = None) -> None:
        self.paging.set_paging_options(action, page, limit)

    def set_row_template(self, template: object) -> None:
        """Use ``template`` for body rows: a ``(row, index)`` callable or a ``{key}`` string."""

        self.row_template = as_template(template)

    def set_row_header_template(self, template: object) -> None:
        """Use ``template`` for the header row: a ``(metadata)`` callable or a ``{key}`` string."""

        self.header_template = as_template(template)

    def set_limit(self, limit: Limit) -> None:
        self.paging.set_limit(limit)

    def set_current_page(self, page: int) -> None:
        self.paging.set_current_page(page)

    def push_event_handler(self, handler: Callable[[], object]) -> None:
        self.event_handlers.append(handler)

    async def load(self) -> bool:
        """Fetch and render the current page.

        Returns ``True`` when the container was updated. Transport and payload
        failures are shown in the dialog; paging state is left as it was.
        """

        self._ticket += 1
        ticket = self._ticket
        paging = self.paging
        try:
            payload = await self.transport.fetch(paging.action, paging.page, paging.limit)
            if ticket != self._ticket:
                logger.debug("Discarding superseded response for %s page=%s", paging.action, paging.page)
                return False
            rendered = render_page(
                payload,
                paging,
                header_template=self.header_template,
                row_template=self.row_template,
                data_key=paging.data_key,
            )
        except (TransportError, DataShapeError) as exc:
            if ticket != self._ticket:
                logger.debug("Discarding superseded failure for %s: %s", paging.action, exc)
                return False
            logger.warning("Failed to load %s page=%s limit=%s: %s", paging.action, paging.page, paging.limit, exc)
            self.dialog.open(exc.message)
            return False

        paging.data_key = rendered.data_key
        if rendered.window.showing_all:
            paging.limit = rendered.window.link_limit
        self.last_render = rendered
        self.container.html(rendered.markup)
        logger.info(
            "Rendered %s page %s/%s (%s rows from '%s')",
            paging.action,
            rendered.paging.current_page,
            rendered.paging.last_page,
            rendered.row_count,
            rendered.data_key,
        )
        self.bind()
        return True

    def bind(self) -> None:
        """Install pager click delegation, then run registered event handlers."""

        self.container.on_click(PAGER_HANDLER, self._on_pager_click)
        for handler in self.event_handlers:
            if not callable(handler):
                raise ConfigurationError(
                    f"Invalid handler {handler!r}: event handlers must be callable"
                )
        for handler in self.event_handlers:
            handler()

    async def _on_pager_click(self, item: PagerItem) -> bool:
        if item.active:
            return False
        self.set_paging_options(self.paging.action, item.page, item.limit)
        await self.load()
        return False

    async def aclose(self) -> None:
        close = getattr(self.transport, "aclose", None)
        if close is not None:
            await close()


__all__ = ["FlipScroll", "PAGER_HANDLER", "Transport"]
