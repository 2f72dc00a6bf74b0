"""JSON-RPC wallet backend.

Talks to a wallet (or a node with unlocked accounts) over JSON-RPC:
- personal_sign
- eth_signTypedData_v4
- eth_signTypedData (relay for contract wallets)

The signing calls never raise for a wallet-side failure: JSON-RPC errors,
malformed replies and transport errors come back as WalletResponse.error.
The relay call returns the raw result and lets transport errors propagate.
"""

import itertools
import logging
from typing import Any, Optional

import httpx
from eth_utils import encode_hex, is_0x_prefixed, is_hexstr

from loopring_signer.signing.base import TypedDataRelay, WalletResponse, WalletSigner

logger = logging.getLogger(__name__)


class JsonRpcWallet(WalletSigner, TypedDataRelay):
    """Wallet reached through a JSON-RPC endpoint."""

    def __init__(
        self,
        rpc_url: str,
        timeout: float = 120.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        """Initialize JSON-RPC wallet.

        Args:
            rpc_url: Wallet RPC endpoint
            timeout: HTTP timeout in seconds (wallet calls wait for the user)
            transport: Optional httpx transport (tests use httpx.MockTransport)
        """
        self.rpc_url = rpc_url
        self.timeout = timeout
        self._transport = transport
        self._ids = itertools.count(1)

    async def _call(self, method: str, params: list, **extra: Any) -> dict:
        """POST a JSON-RPC request and return the decoded response body."""
        body = {"jsonrpc": "2.0", "id": next(self._ids), "method": method, "params": params, **extra}
        async with httpx.AsyncClient(timeout=self.timeout, transport=self._transport) as client:
            response = await client.post(self.rpc_url, json=body)
            response.raise_for_status()
            return response.json()

    async def _request(self, method: str, params: list, **extra: Any) -> WalletResponse:
        try:
            data = await self._call(method, params, **extra)
        except httpx.HTTPError as e:
            logger.error(f"Wallet RPC {method} failed: {e}")
            return WalletResponse(error=str(e) or e.__class__.__name__)
        except ValueError as e:
            logger.error(f"Wallet RPC {method} returned invalid JSON: {e}")
            return WalletResponse(error=f"{method} returned invalid JSON")

        if not isinstance(data, dict):
            logger.error(f"Wallet RPC {method} returned unexpected body: {data!r}")
            return WalletResponse(error=f"{method} returned an unexpected response")

        if data.get("error"):
            error = data["error"]
            message = error.get("message") if isinstance(error, dict) else str(error)
            logger.warning(f"Wallet RPC {method} returned error: {message}")
            return WalletResponse(error=message or "wallet error")

        result = data.get("result")
        if result is None:
            return WalletResponse(error=f"{method} returned no result")
        return WalletResponse(result=result)

    async def sign_personal_message(self, address: str, message: str, password: str = "") -> WalletResponse:
        # personal_sign takes hex-encoded data
        data = message if is_0x_prefixed(message) and is_hexstr(message) else encode_hex(message.encode())
        params = [data, address]
        if password:
            params.append(password)
        return await self._request("personal_sign", params)

    async def sign_typed_data_v4(self, address: str, payload_json: str) -> WalletResponse:
        return await self._request("eth_signTypedData_v4", [address, payload_json])

    async def send_typed_data_legacy(self, method: str, params: list, account: str) -> WalletResponse:
        """Send an arbitrary typed-data signing method (pre-v4 wallets).

        Injected providers read ``account`` from the request object itself.
        """
        logger.debug(f"Sending legacy typed-data method {method} for {account}")
        return await self._request(method, params, account=account)

    async def relay_sign_typed_data(self, payload_json: str, account: str) -> Any:
        data = await self._call("eth_signTypedData", [payload_json, account])
        return data.get("result")
