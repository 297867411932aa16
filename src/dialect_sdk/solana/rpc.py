"""Solana RPC client wrapper."""
from __future__ import annotations

import logging
from typing import Any, Optional

import httpx

from ..errors import SolanaRpcError

logger = logging.getLogger(__name__)


class SolanaRpcClient:
    """Async Solana JSON-RPC client.

    Uses raw httpx instead of solana-py to minimize dependencies.
    The HTTP client is created on first call.
    """

    def __init__(
        self,
        rpc_url: str,
        commitment: str = "confirmed",
        timeout: float = 30.0,
    ) -> None:
        self.rpc_url = rpc_url
        self.commitment = commitment
        self._timeout = timeout
        self._client: Optional[httpx.AsyncClient] = None
        self._request_id = 0

    def _get_client(self) -> httpx.AsyncClient:
        if self._client is None or self._client.is_closed:
            self._client = httpx.AsyncClient(timeout=self._timeout)
        return self._client

    async def _rpc(self, method: str, params: list[Any] | None = None) -> Any:
        """Make a JSON-RPC call to Solana."""
        self._request_id += 1
        payload = {
            "jsonrpc": "2.0",
            "id": self._request_id,
            "method": method,
            "params": params or [],
        }
        resp = await self._get_client().post(self.rpc_url, json=payload)
        resp.raise_for_status()
        data = resp.json()
        if "error" in data:
            raise SolanaRpcError(data["error"].get("message", "Unknown RPC error"), data["error"])
        return data.get("result")

    async def get_account_info(self, address: str) -> Optional[dict[str, Any]]:
        """Get raw account info, ``None`` if the account does not exist."""
        result = await self._rpc(
            "getAccountInfo",
            [address, {"encoding": "base64", "commitment": self.commitment}],
        )
        return result.get("value") if result else None

    async def get_program_accounts(
        self, program_id: str, filters: Optional[list[dict[str, Any]]] = None
    ) -> list[dict[str, Any]]:
        """Get all accounts owned by a program, optionally filtered."""
        options: dict[str, Any] = {"encoding": "base64", "commitment": self.commitment}
        if filters:
            options["filters"] = filters
        return await self._rpc("getProgramAccounts", [program_id, options]) or []

    async def send_raw_transaction(self, signed_tx_base64: str) -> str:
        """Send a signed transaction. Returns transaction signature."""
        result = await self._rpc(
            "sendTransaction",
            [signed_tx_base64, {"encoding": "base64", "skipPreflight": False}],
        )
        logger.info("Solana tx sent: %s", result)
        return result

    async def close(self) -> None:
        """Close the HTTP client."""
        if self._client is not None and not self._client.is_closed:
            await self._client.aclose()
        self._client = None
