"""Minimal asynchronous Ethereum JSON-RPC client."""

from __future__ import annotations

import itertools
import logging
from typing import Any, Optional, Type
from types import TracebackType

import httpx

from ...domain.errors import ExternalQueryFailure
from ..http.http_client import AsyncHttpClient

logger = logging.getLogger(__name__)


class AsyncJsonRpcClient:
    """JSON-RPC 2.0 over HTTP.

    Every failure (transport, HTTP status, JSON-RPC error object, malformed
    body) surfaces as ``ExternalQueryFailure`` carrying the node's message and
    chaining the original exception. Nothing is retried.
    """

    def __init__(
        self,
        url: str,
        timeout: float = 10.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self._http = AsyncHttpClient(url, timeout=timeout, transport=transport)
        self._ids = itertools.count(1)

    async def call(self, method: str, params: list[Any]) -> Any:
        request_id = next(self._ids)
        payload = {"jsonrpc": "2.0", "id": request_id, "method": method, "params": params}
        logger.debug("JSON-RPC %s #%d -> %s", method, request_id, self._http.base_url)
        try:
            resp = await self._http.post("", json=payload)
            body = resp.json()
        except httpx.HTTPError as e:
            raise ExternalQueryFailure(str(e)) from e
        except ValueError as e:
            raise ExternalQueryFailure(f"Invalid JSON-RPC response: {e}") from e

        if not isinstance(body, dict):
            raise ExternalQueryFailure(f"Invalid JSON-RPC response: {body!r}")
        error = body.get("error")
        if error is not None:
            message = error.get("message") if isinstance(error, dict) else None
            raise ExternalQueryFailure(message or str(error))
        if "result" not in body:
            raise ExternalQueryFailure(f"JSON-RPC response without result: {body!r}")
        return body["result"]

    async def aclose(self) -> None:
        await self._http.aclose()

    async def __aenter__(self) -> "AsyncJsonRpcClient":
        return self

    async def __aexit__(
        self,
        exc_type: Optional[Type[BaseException]],
        exc_val: Optional[BaseException],
        exc_tb: Optional[TracebackType],
    ) -> None:
        await self.aclose()
