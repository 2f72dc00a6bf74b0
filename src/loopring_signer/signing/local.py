"""Local wallet backend.

Signs with an in-memory secp256k1 key through eth_account. Suitable for:
- Development/testing
- Bots that hold their own L1 key

WARNING: The private key is held in memory.
"""

import json
import logging
from typing import Any

from eth_account import Account
from eth_account.messages import encode_defunct
from eth_utils import is_0x_prefixed, is_hexstr

from loopring_signer.signing.base import SignerRejected, TypedDataRelay, WalletResponse, WalletSigner
from loopring_signer.typed_data.hashing import signable_typed_data

logger = logging.getLogger(__name__)


class LocalWallet(WalletSigner, TypedDataRelay):
    """Wallet backed by a local private key.

    Behaves like a browser wallet: personal messages given as 0x-hex are
    signed as bytes, other messages as UTF-8 text.
    """

    def __init__(self, private_key: str):
        self._account = Account.from_key(private_key)

    @property
    def address(self) -> str:
        return self._account.address

    def _owns(self, address: str) -> bool:
        return address.lower() == self._account.address.lower()

    @staticmethod
    def _hex(signature: bytes) -> str:
        return "0x" + bytes(signature).hex()

    async def sign_personal_message(self, address: str, message: str, password: str = "") -> WalletResponse:
        if not self._owns(address):
            return WalletResponse(error=f"Unknown account {address}")

        try:
            if is_0x_prefixed(message) and is_hexstr(message):
                signable = encode_defunct(hexstr=message)
            else:
                signable = encode_defunct(text=message)
            signed = self._account.sign_message(signable)
            return WalletResponse(result=self._hex(signed.signature))
        except Exception as e:
            logger.error(f"Local personal signing failed: {e}")
            return WalletResponse(error=str(e))

    async def sign_typed_data_v4(self, address: str, payload_json: str) -> WalletResponse:
        if not self._owns(address):
            return WalletResponse(error=f"Unknown account {address}")

        try:
            signable = signable_typed_data(json.loads(payload_json))
            signed = self._account.sign_message(signable)
            return WalletResponse(result=self._hex(signed.signature))
        except Exception as e:
            logger.error(f"Local typed-data signing failed: {e}")
            return WalletResponse(error=str(e))

    async def relay_sign_typed_data(self, payload_json: str, account: str) -> Any:
        response = await self.sign_typed_data_v4(account, payload_json)
        if not response.success:
            raise SignerRejected(response.error)
        return response.result

    def __repr__(self) -> str:
        return f"LocalWallet(address={self._account.address})"
