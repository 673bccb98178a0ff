"""Dataset sources producing paged ``{paging, metadata, <data_key>}`` payloads."""
from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Mapping

import duckdb
import pyarrow as pa
import pyarrow.csv as pa_csv

from ..config import DatasetConfig
from ..core.paging import Limit, PagingResponse, is_show_all
from .ui.utils import table_to_records


def build_payload(
    table: pa.Table,
    *,
    page: int,
    limit: Limit,
    data_key: str,
    labels: Mapping[str, str] | None = None,
) -> dict[str, object]:
    """Slice ``table`` into one page and describe it with a ``paging`` block.

    ``page`` is clamped into ``[1, last_page]``. A show-all ``limit`` returns
    every row on a single page with ``limit`` equal to the row count.
    """

    total = table.num_rows
    if is_show_all(limit):
        effective_limit = total
        last_page = 1
        current = 1
        sliced = table
    else:
        effective_limit = int(limit)
        last_page = max(1, math.ceil(total / effective_limit))
        current = min(max(int(page), 1), last_page)
        sliced = table.slice((current - 1) * effective_limit, effective_limit)

    labels = labels or {}
    metadata = {name: labels.get(name, name) for name in table.column_names}
    paging = PagingResponse(
        total_rows=total,
        last_page=last_page,
        current_page=current,
        limit=effective_limit,
    )
    return {
        "paging": paging.to_dict(),
        "metadata": metadata,
        data_key: table_to_records(sliced),
    }


@dataclass(slots=True)
class Dataset:
    config: DatasetConfig

    @property
    def action(self) -> str:
        return self.config.action

    def load_table(self) -> pa.Table:
        if self.config.sql is not None:
            return _execute_sql(self.config.sql)
        if self.config.csv is None:
            raise ValueError(f"Dataset '{self.action}' has no source")
        return pa_csv.read_csv(self.config.csv)

    def page(self, page: int, limit: Limit) -> dict[str, object]:
        return build_payload(
            self.load_table(),
            page=page,
            limit=limit,
            data_key=self.config.resolved_data_key,
            labels=self.config.labels,
        )


def _execute_sql(sql: str) -> pa.Table:
    con = duckdb.connect()
    try:
        cursor = con.execute(sql)
        return cursor.fetch_arrow_table()
    finally:
        con.close()


__all__ = ["Dataset", "build_payload"]
