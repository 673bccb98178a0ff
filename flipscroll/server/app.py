from __future__ import annotations

import logging
from typing import Iterable, Mapping

import duckdb
import pyarrow as pa
from fastapi import FastAPI, HTTPException, Request
from fastapi.responses import HTMLResponse, JSONResponse

from .. import __version__
from ..config import Config
from ..core.paging import ALL, Limit, PagingConfig, coerce_limit, coerce_page, is_show_all
from ..errors import DataShapeError
from .datasets import Dataset
from .ui.layout import render_layout
from .ui.render import render_page

logger = logging.getLogger(__name__)


def create_app(config: Config, datasets: Iterable[Dataset] | None = None) -> FastAPI:
    """Serve ``/<action>.json`` payloads and ``/view/<action>`` pages.

    ``datasets`` defaults to the ``[datasets]`` tables of ``config``.
    """

    if datasets is None:
        datasets = [Dataset(spec) for spec in config.datasets.values()]
    registry = {dataset.action: dataset for dataset in datasets}
    if not registry:
        raise ValueError("At least one dataset must be provided to create the application")

    app = FastAPI(title="flipscroll", version=__version__)
    app.state.config = config
    app.state.datasets = registry

    @app.get("/datasets")
    async def list_datasets() -> Mapping[str, object]:
        return {
            "datasets": [
                {
                    "action": dataset.action,
                    "data_key": dataset.config.resolved_data_key,
                    "json": f"/{dataset.action}.json",
                    "view": f"/view/{dataset.action}",
                }
                for dataset in sorted(registry.values(), key=lambda item: item.action)
            ]
        }

    @app.get("/view/{action:path}", response_class=HTMLResponse)
    async def view_dataset(action: str, request: Request) -> HTMLResponse:
        dataset = _get_dataset(request.app.state.datasets, action)
        table_cfg = request.app.state.config.table
        state = PagingConfig(
            dataset.action,
            table_cfg.page,
            table_cfg.limit,
            pager_length=table_cfg.pager_length,
        )
        page, limit = _paging_params(request, default_page=None, default_limit=None)
        if limit is not None and is_show_all(limit):
            # 0 would otherwise read as "no override" in set_paging_options.
            limit = ALL
        if page is not None or limit is not None:
            state.set_paging_options(dataset.action, page, limit)
        payload = _load_page(dataset, state.page, state.limit)
        try:
            rendered = render_page(payload, state, data_key=dataset.config.resolved_data_key)
        except DataShapeError as exc:  # pragma: no cover - payload is built locally
            raise HTTPException(status_code=500, detail={"errors": [str(exc)]}) from exc
        document = render_layout(
            page_title=request.app.state.config.server.title,
            container_selector=table_cfg.container_selector,
            container_html=rendered.markup,
            body_data={
                "action": "/" + dataset.action,
                "page": rendered.paging.current_page,
                "limit": rendered.window.link_limit,
                "key": rendered.data_key,
            },
        )
        return HTMLResponse(document)

    @app.get("/{action:path}.json")
    async def dataset_json(action: str, request: Request) -> JSONResponse:
        dataset = _get_dataset(request.app.state.datasets, action)
        table_cfg = request.app.state.config.table
        page, limit = _paging_params(request, default_page=1, default_limit=table_cfg.limit)
        payload = _load_page(dataset, page, limit)
        return JSONResponse(payload)

    return app


def _load_page(dataset: Dataset, page: int, limit: Limit) -> dict[str, object]:
    try:
        payload = dataset.page(page, limit)
    except (duckdb.Error, pa.ArrowException, OSError) as exc:
        logger.warning("Dataset %s failed: %s", dataset.action, exc)
        raise HTTPException(
            status_code=500,
            detail={"errors": [f"Dataset '{dataset.action}' could not be loaded: {exc}"]},
        ) from exc
    logger.debug("Served %s page=%s limit=%s", dataset.action, page, limit)
    return payload


def _paging_params(
    request: Request,
    *,
    default_page: int | None,
    default_limit: Limit | None,
) -> tuple[int | None, Limit | None]:
    raw_page = request.query_params.get("page")
    raw_limit = request.query_params.get("limit")
    try:
        page = coerce_page(raw_page) if raw_page not in (None, "") else default_page
        limit = coerce_limit(raw_limit) if raw_limit not in (None, "") else default_limit
    except ValueError as exc:
        raise HTTPException(status_code=400, detail={"errors": [str(exc)]}) from exc
    return page, limit


def _get_dataset(datasets: Mapping[str, Dataset], action: str) -> Dataset:
    key = action.strip("/")
    dataset = datasets.get(key)
    if dataset is None:
        raise HTTPException(status_code=404, detail={"errors": [f"Dataset '{key}' not found"]})
    return dataset


__all__ = ["create_app"]
