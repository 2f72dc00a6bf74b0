"""Base interfaces for wallet and curve collaborators.

Signing flow:
1. Derive the EdDSA keypair from a wallet signature (once per key nonce)
2. Build the typed-data payload for the transaction
3. Obtain the ECDSA signature from the wallet and/or
   compute the EdDSA signature locally
4. Submit both with the request

Wallet calls are the only suspension points. They never raise for a user
rejection; the rejection comes back in WalletResponse.error and is turned
into SignerRejected by the caller.
"""

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Callable, Optional, Protocol

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class KeyPair:
    """EdDSA keypair on the Baby-Jubjub curve.

    Attributes:
        secret_key: Secret scalar
        public_key_x: X coordinate of secret_key * B
        public_key_y: Y coordinate of secret_key * B
    """
    secret_key: int
    public_key_x: int
    public_key_y: int


@dataclass
class WalletResponse:
    """Result of a wallet call.

    Exactly one of result/error is set.
    """
    result: Optional[str] = None
    error: Optional[str] = None

    @property
    def success(self) -> bool:
        return self.error is None and self.result is not None


class WalletSigner(ABC):
    """Wallet-side ECDSA signing entry points."""

    @abstractmethod
    async def sign_personal_message(self, address: str, message: str, password: str = "") -> WalletResponse:
        """Sign an EIP-191 personal message.

        A 0x-prefixed hex message is signed as raw bytes, anything else as
        UTF-8 text.
        """
        pass

    @abstractmethod
    async def sign_typed_data_v4(self, address: str, payload_json: str) -> WalletResponse:
        """Sign an EIP-712 payload (eth_signTypedData_v4)."""
        pass


class TypedDataRelay(ABC):
    """External relay that signs typed data on behalf of a contract wallet."""

    @abstractmethod
    async def relay_sign_typed_data(self, payload_json: str, account: str) -> Any:
        """Return the relay's raw response."""
        pass


class CurvePrimitive(Protocol):
    """Baby-Jubjub arithmetic provided by an external library."""

    def generate_keypair(self, seed: bytes) -> KeyPair:
        ...

    def sign(self, secret_key: int, message: int) -> tuple[int, int, int]:
        ...

    def pack_point(self, x: int, y: int) -> int:
        ...

    def unpack_point(self, packed: int) -> tuple[int, int]:
        ...


# make_hasher(arity, full_rounds, partial_rounds) -> hasher(inputs) -> digest
SpongeHasherFactory = Callable[[int, int, int], Callable[[list[int]], int]]


class SigningError(Exception):
    """Exception raised when signing fails."""
    pass


class SignerRejected(SigningError):
    """Wallet or relay returned an error or the user rejected the request."""
    pass


class UnsupportedStrategy(SigningError):
    """Unknown ECDSA signing mode."""
    pass


class UnsupportedMethod(SigningError):
    """HTTP method cannot be canonicalized."""
    pass


class SignatureEncodingError(SigningError, ValueError):
    """Signature component does not fit the fixed-width encoding."""
    pass
