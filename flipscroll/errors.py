"""Exception hierarchy shared by the renderer, controller and transport."""
from __future__ import annotations

from typing import Iterable


class FlipScrollError(Exception):
    """Base class for flipscroll failures."""


class TransportError(FlipScrollError):
    """Raised when the data endpoint cannot be reached or answers with an error."""

    def __init__(
        self,
        errors: Iterable[str],
        *,
        status_code: int | None = None,
        timed_out: bool = False,
    ) -> None:
        self.errors = [str(item) for item in errors] or ["Request failed"]
        self.status_code = status_code
        self.timed_out = timed_out
        super().__init__("; ".join(self.errors))

    @property
    def message(self) -> str:
        return "<br/>".join(self.errors)


class DataShapeError(FlipScrollError):
    """Raised when a response payload does not follow the paging contract."""

    @property
    def errors(self) -> list[str]:
        return [str(self)]

    @property
    def message(self) -> str:
        return str(self)


class ConfigurationError(FlipScrollError):
    """Raised for invalid templates or post-bind handlers."""


__all__ = [
    "ConfigurationError",
    "DataShapeError",
    "FlipScrollError",
    "TransportError",
]
