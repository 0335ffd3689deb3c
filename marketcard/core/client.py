"""marketcard.core.client

Shared HTTP client with:
- one attempt per call (no retries, no backoff)
- a per-client timeout
- response size caps

The goal is uniform behavior across sources.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

import httpx

from marketcard.core.config import HttpConfig


@dataclass(frozen=True, slots=True)
class ClientConfig:
    timeout_s: float = 20.0
    max_bytes: int = 1024 * 1024

    @classmethod
    def from_http(cls, http: HttpConfig) -> ClientConfig:
        return cls(timeout_s=http.timeout_s, max_bytes=http.max_bytes)


class DataClient:
    def __init__(self, config: ClientConfig | None = None, *, transport: httpx.AsyncBaseTransport | None = None) -> None:
        self.config = config or ClientConfig()
        self._client = httpx.AsyncClient(timeout=self.config.timeout_s, transport=transport)

    @staticmethod
    def _enforce_max_bytes(resp: httpx.Response, *, max_bytes: int) -> None:
        size = len(resp.content)
        if size > int(max_bytes):
            raise httpx.TransportError(f"response_too_large:{size}")

    async def __aenter__(self) -> DataClient:
        return self

    async def __aexit__(self, *exc: object) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._client.aclose()

    async def request(self, method: str, url: str, *, check_status: bool = True, **kwargs: Any) -> httpx.Response:
        """Single attempt. Raises ``httpx.HTTPStatusError`` on non-2xx unless ``check_status`` is off."""

        resp = await self._client.request(method, url, **kwargs)
        await resp.aread()
        self._enforce_max_bytes(resp, max_bytes=self.config.max_bytes)
        if check_status:
            resp.raise_for_status()
        return resp

    async def request_json(
        self,
        method: str,
        url: str,
        *,
        expected: type | tuple[type, ...] | None = None,
        **kwargs: Any,
    ) -> Any:
        """Request and parse JSON.

        Raises ``ValueError`` for bodies that are not JSON and
        ``httpx.TransportError`` when the top-level type is not ``expected``.
        """

        resp = await self.request(method, url, **kwargs)
        data: Any = resp.json()
        if expected is not None and not isinstance(data, expected):
            raise httpx.TransportError("response_schema_mismatch")
        return data
