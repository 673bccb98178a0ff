"""Paging state owned by a table controller and the paging block of a response."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Mapping, Union

from ..errors import DataShapeError

ALL = "all"

Limit = Union[int, str]

DEFAULT_PAGE = 1
DEFAULT_LIMIT = 25
DEFAULT_PAGER_LENGTH = 5


def is_show_all(limit: Limit | None) -> bool:
    """Return ``True`` when ``limit`` asks for every row on a single page."""

    return not limit or limit == ALL


def coerce_limit(value: object) -> Limit:
    """Normalise a limit coming from config, CLI or a ``data-limit`` attribute."""

    if isinstance(value, bool):
        raise ValueError(f"Invalid limit {value!r}")
    if isinstance(value, int):
        if value < 0:
            raise ValueError(f"Limit must be >= 0, got {value}")
        return value
    text = str(value).strip().lower()
    if text == ALL:
        return ALL
    try:
        number = int(text)
    except ValueError as exc:
        raise ValueError(f"Invalid limit {value!r}") from exc
    return coerce_limit(number)


def coerce_page(value: object) -> int:
    if isinstance(value, bool):
        raise ValueError(f"Invalid page {value!r}")
    if isinstance(value, int):
        number = value
    else:
        try:
            number = int(str(value).strip())
        except ValueError as exc:
            raise ValueError(f"Invalid page {value!r}") from exc
    if number < 1:
        raise ValueError(f"Page must be >= 1, got {number}")
    return number


@dataclass(slots=True)
class PagingConfig:
    """Mutable paging state for one table instance.

    ``default_page``/``default_limit`` snapshot the constructor values and are
    restored by :meth:`set_paging_options` when no override is given.
    ``last_page``/``last_limit`` hold the pair that was current right before the
    most recent :meth:`set_paging_options` call; the pager's "Back" link uses them
    while showing all rows.
    """

    action: str
    page: int = DEFAULT_PAGE
    limit: Limit = DEFAULT_LIMIT
    pager_length: int = DEFAULT_PAGER_LENGTH
    data_key: str | None = None
    default_page: int = field(init=False)
    default_limit: Limit = field(init=False)
    last_page: int = field(init=False)
    last_limit: Limit = field(init=False)

    def __post_init__(self) -> None:
        self.page = coerce_page(self.page)
        self.limit = coerce_limit(self.limit)
        if isinstance(self.pager_length, bool) or int(self.pager_length) < 1:
            raise ValueError(f"pager_length must be >= 1, got {self.pager_length!r}")
        self.pager_length = int(self.pager_length)
        self.default_page = self.page
        self.default_limit = self.limit
        self.last_page = self.page
        self.last_limit = self.limit

    def set_paging_options(
        self,
        action: str,
        page: int | None = None,
        limit: Limit | None = None,
    ) -> None:
        self.action = action
        self.last_page = self.page
        self.last_limit = self.limit
        self.page = coerce_page(page) if page else self.default_page
        self.limit = coerce_limit(limit) if limit else self.default_limit

    def set_limit(self, limit: Limit) -> None:
        """Change the page size and rewind to the first page."""

        self.limit = coerce_limit(limit)
        self.page = 1

    def set_current_page(self, page: int) -> None:
        self.page = coerce_page(page)

    @property
    def showing_all(self) -> bool:
        return is_show_all(self.limit)


@dataclass(frozen=True, slots=True)
class PagingResponse:
    """The ``paging`` block of a response payload."""

    total_rows: int
    last_page: int
    current_page: int
    limit: int

    @classmethod
    def from_mapping(cls, data: object) -> "PagingResponse":
        if not isinstance(data, Mapping):
            raise DataShapeError("Response is missing a 'paging' object")
        values: dict[str, int] = {}
        for name in ("total_rows", "last_page", "current_page", "limit"):
            values[name] = _paging_int(data, name)
        if values["total_rows"] < 0 or values["limit"] < 0:
            raise DataShapeError("paging.total_rows and paging.limit must be >= 0")
        if values["last_page"] < 1:
            raise DataShapeError("paging.last_page must be >= 1")
        if not 1 <= values["current_page"] <= values["last_page"]:
            raise DataShapeError(
                f"paging.current_page {values['current_page']} is outside [1, {values['last_page']}]"
            )
        return cls(**values)

    def to_dict(self) -> dict[str, int]:
        return {
            "total_rows": self.total_rows,
            "last_page": self.last_page,
            "current_page": self.current_page,
            "limit": self.limit,
        }


def _paging_int(data: Mapping[str, Any], name: str) -> int:
    if name not in data:
        raise DataShapeError(f"paging.{name} is missing")
    value = data[name]
    if isinstance(value, bool):
        raise DataShapeError(f"paging.{name} must be an integer")
    try:
        return int(value)
    except (TypeError, ValueError) as exc:
        raise DataShapeError(f"paging.{name} must be an integer") from exc


__all__ = [
    "ALL",
    "DEFAULT_LIMIT",
    "DEFAULT_PAGE",
    "DEFAULT_PAGER_LENGTH",
    "Limit",
    "PagingConfig",
    "PagingResponse",
    "coerce_limit",
    "coerce_page",
    "is_show_all",
]
