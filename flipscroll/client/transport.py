"""HTTP collaborator fetching ``<action>.json`` payloads."""
from __future__ import annotations

import logging
from typing import Any, Mapping

import httpx

from ..core.paging import Limit
from ..errors import TransportError

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT_SECONDS = 60.0


def build_url(base_url: str, action: str) -> str:
    return base_url.rstrip("/") + "/" + action.strip("/") + ".json"


class JsonTransport:
    """Fetch paged JSON payloads with :mod:`httpx`.

    ``client`` may be supplied to share connection pools or to plug in a
    ``httpx.MockTransport`` in tests; otherwise one is created per instance and
    closed by :meth:`aclose`.
    """

    def __init__(
        self,
        base_url: str,
        *,
        timeout: float = DEFAULT_TIMEOUT_SECONDS,
        headers: Mapping[str, str] | None = None,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        self.base_url = base_url
        self.timeout = timeout
        self._owns_client = client is None
        self._client = client or httpx.AsyncClient(
            timeout=timeout,
            headers={"Accept": "application/json", **dict(headers or {})},
        )

    async def fetch(self, action: str, page: int, limit: Limit) -> Mapping[str, Any]:
        url = build_url(self.base_url, action)
        params = {"page": str(page), "limit": str(limit)}
        logger.debug("GET %s page=%s limit=%s", url, page, limit)
        try:
            response = await self._client.get(url, params=params, timeout=self.timeout)
        except httpx.TimeoutException as exc:
            raise TransportError(
                [f"Request to {url} timed out after {self.timeout:g} seconds"],
                timed_out=True,
            ) from exc
        except httpx.RequestError as exc:
            raise TransportError([f"Request to {url} failed: {exc}"]) from exc

        if response.is_error:
            raise TransportError(_error_messages(response), status_code=response.status_code)
        try:
            payload = response.json()
        except ValueError as exc:
            raise TransportError(
                [f"Response from {url} is not valid JSON"],
                status_code=response.status_code,
            ) from exc
        if not isinstance(payload, Mapping):
            raise TransportError(
                [f"Response from {url} is not a JSON object"],
                status_code=response.status_code,
            )
        return payload

    async def aclose(self) -> None:
        if self._owns_client:
            await self._client.aclose()

    async def __aenter__(self) -> "JsonTransport":
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()


def _error_messages(response: httpx.Response) -> list[str]:
    try:
        body = response.json()
    except ValueError:
        body = None
    if isinstance(body, Mapping):
        errors = body.get("errors")
        if isinstance(errors, (list, tuple)) and errors:
            return [str(item) for item in errors]
        detail = body.get("detail")
        if isinstance(detail, Mapping) and isinstance(detail.get("errors"), list):
            return [str(item) for item in detail["errors"]]
    return [f"{response.status_code} {response.reason_phrase}".strip()]


__all__ = ["DEFAULT_TIMEOUT_SECONDS", "JsonTransport", "build_url"]
