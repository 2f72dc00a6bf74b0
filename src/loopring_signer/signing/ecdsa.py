"""Wallet (ECDSA) signatures over typed-data payloads.

Each strategy carries exactly what it needs to reach the wallet:
- TypedDataStrategy: wallet supports eth_signTypedData_v4
- RawHashStrategy: wallet can only personal_sign, so the EIP-712 hash is
  computed locally and signed as a message
- ContractStrategy: smart-contract wallets signing through a relay
"""

import json
import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum
from typing import Any

from loopring_signer.signing.base import SignerRejected, TypedDataRelay, WalletSigner
from loopring_signer.typed_data.hashing import typed_data_hash

logger = logging.getLogger(__name__)


class EcdsaMode(str, Enum):
    """How the ECDSA signature is obtained."""
    TYPED_DATA = "typed_data"   # eth_signTypedData_v4
    RAW_HASH = "raw_hash"       # personal_sign over the EIP-712 hash
    CONTRACT = "contract"       # relay for contract wallets


@dataclass
class EcdsaSignatureResult:
    """ECDSA signature as returned by the wallet, passed through untouched."""
    ecdsa_sig: Any


def payload_json(payload: dict[str, Any]) -> str:
    return json.dumps(payload)


class EcdsaStrategy(ABC):
    """Abstract ECDSA signing strategy."""

    def __init__(self, mode: EcdsaMode, address: str):
        self.mode = mode
        self.address = address

    @abstractmethod
    async def sign(self, payload: dict[str, Any]) -> Any:
        """Sign a typed-data payload.

        Args:
            payload: Builder output

        Returns:
            Signature as produced by the wallet

        Raises:
            SignerRejected: If the wallet refused or failed
        """
        pass

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(mode={self.mode.value}, address={self.address})"


class TypedDataStrategy(EcdsaStrategy):
    def __init__(self, wallet: WalletSigner, address: str):
        super().__init__(EcdsaMode.TYPED_DATA, address)
        self.wallet = wallet

    async def sign(self, payload: dict[str, Any]) -> str:
        response = await self.wallet.sign_typed_data_v4(self.address, payload_json(payload))
        if not response.success:
            logger.warning(f"Typed-data signing rejected for {self.address}: {response.error}")
            raise SignerRejected(response.error or "wallet returned no signature")
        return response.result


class RawHashStrategy(EcdsaStrategy):
    def __init__(self, wallet: WalletSigner, address: str, password: str = ""):
        super().__init__(EcdsaMode.RAW_HASH, address)
        self.wallet = wallet
        self.password = password

    async def sign(self, payload: dict[str, Any]) -> str:
        digest = "0x" + typed_data_hash(payload).hex()
        logger.debug(f"Signing {payload['primaryType']} hash {digest} as personal message")

        response = await self.wallet.sign_personal_message(self.address, digest, self.password)
        if not response.success:
            logger.warning(f"Personal signing rejected for {self.address}: {response.error}")
            raise SignerRejected(response.error or "wallet returned no signature")
        return response.result


class ContractStrategy(EcdsaStrategy):
    """Relay response is returned as-is; transport errors propagate."""

    def __init__(self, relay: TypedDataRelay, address: str):
        super().__init__(EcdsaMode.CONTRACT, address)
        self.relay = relay

    async def sign(self, payload: dict[str, Any]) -> Any:
        return await self.relay.relay_sign_typed_data(payload_json(payload), self.address)


async def get_ecdsa_signature(payload: dict[str, Any], strategy: EcdsaStrategy) -> EcdsaSignatureResult:
    """Sign ``payload`` with ``strategy``."""
    return EcdsaSignatureResult(ecdsa_sig=await strategy.sign(payload))
