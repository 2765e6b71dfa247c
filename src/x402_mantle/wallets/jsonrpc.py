"""
JsonRpcProvider - EIP-1193 provider that forwards requests to a JSON-RPC endpoint
"""

import itertools
import logging
from typing import Any, Sequence

import httpx

from x402_mantle.exceptions import ProviderRpcError

logger = logging.getLogger(__name__)


class JsonRpcProvider:
    """
    EIP-1193 ``request`` over HTTP JSON-RPC.

    Points an Eip1193Wallet at a node or wallet daemon that manages unlocked
    accounts (e.g. a local dev node). JSON-RPC error objects are raised as
    ProviderRpcError; transport failures propagate as httpx errors.
    """

    def __init__(
        self,
        url: str,
        headers: dict[str, str] | None = None,
        http_client: httpx.AsyncClient | None = None,
    ) -> None:
        """
        Initialize JSON-RPC provider.

        Args:
            url: JSON-RPC endpoint URL
            headers: Custom HTTP headers (e.g., Authorization)
            http_client: Existing httpx.AsyncClient to reuse (optional)
        """
        self._url = url
        self._headers = headers or {}
        self._http_client = http_client
        self._owns_client = http_client is None
        self._ids = itertools.count(1)

    async def _get_client(self) -> httpx.AsyncClient:
        """Get or create HTTP client"""
        if self._http_client is None:
            self._http_client = httpx.AsyncClient(headers=self._headers, timeout=30.0)
        return self._http_client

    async def close(self) -> None:
        """Close HTTP client if this provider created it"""
        if self._http_client and self._owns_client:
            await self._http_client.aclose()
            self._http_client = None

    async def request(self, method: str, params: Sequence[Any] | None = None) -> Any:
        client = await self._get_client()
        payload = {
            "jsonrpc": "2.0",
            "id": next(self._ids),
            "method": method,
            "params": list(params or []),
        }
        logger.debug(f"JSON-RPC call {method} -> {self._url}")

        response = await client.post(self._url, json=payload, headers=self._headers)
        response.raise_for_status()
        body = response.json()

        error = body.get("error")
        if error:
            raise ProviderRpcError(
                error.get("code"),
                error.get("message") or f"JSON-RPC error in {method}",
                error.get("data"),
            )
        return body.get("result")
