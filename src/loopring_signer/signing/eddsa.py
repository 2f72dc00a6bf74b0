"""EdDSA (Baby-Jubjub) signing of L2 requests.

Three ways of turning a request into the field element that gets signed:
- sha256 of a message string, reduced into the SNARK scalar field
- Poseidon over transaction-specific field elements
- EIP-712 hash of a typed-data payload, divided by the cofactor

Signatures are sent as 0x + Rx + Ry + s, each 64 hex characters.
"""

import hashlib
import logging
from dataclasses import dataclass
from typing import Any, Union

from loopring_signer.signing.base import CurvePrimitive, SignatureEncodingError, SpongeHasherFactory
from loopring_signer.typed_data.hashing import typed_data_hash
from loopring_signer.utils.formatter import HEX_WIDTH, IntLike, clear_hex_prefix, pad_hex, to_big

logger = logging.getLogger(__name__)

SNARK_SCALAR_FIELD = 21888242871839275222246405745257275088548364400416034343698204186575808495617

POSEIDON_FULL_ROUNDS = 6
POSEIDON_PARTIAL_ROUNDS = 53

# Baby-Jubjub cofactor
COFACTOR = 8

SIGNATURE_LENGTH = 2 + 3 * HEX_WIDTH


@dataclass(frozen=True)
class EdDSASignature:
    rx: int
    ry: int
    s: int

    def encode(self) -> str:
        """Fixed-width wire form.

        Raises:
            SignatureEncodingError: If a component is negative or wider than 32 bytes
        """
        parts = []
        for name, value in (("Rx", self.rx), ("Ry", self.ry), ("s", self.s)):
            try:
                parts.append(pad_hex(value))
            except ValueError as e:
                raise SignatureEncodingError(f"{name}: {e}") from e
        return "0x" + "".join(parts)

    @classmethod
    def decode(cls, encoded: str) -> "EdDSASignature":
        body = clear_hex_prefix(encoded)
        if len(body) != 3 * HEX_WIDTH:
            raise SignatureEncodingError(
                f"Expected {3 * HEX_WIDTH} hex characters, got {len(body)}"
            )
        rx, ry, s = (int(body[i:i + HEX_WIDTH], 16) for i in range(0, len(body), HEX_WIDTH))
        return cls(rx=rx, ry=ry, s=s)

    def __str__(self) -> str:
        return self.encode()


def sha256_field_hash(message: Union[str, bytes]) -> int:
    """sha256 of ``message`` as an integer modulo the SNARK scalar field."""
    data = message.encode() if isinstance(message, str) else message
    return int(hashlib.sha256(data).hexdigest(), 16) % SNARK_SCALAR_FIELD


def typed_data_field_hash(payload: dict[str, Any]) -> int:
    """EIP-712 hash with the cofactor cleared, small enough to sign."""
    return int.from_bytes(typed_data_hash(payload), "big") // COFACTOR


class EddsaSigner:
    """Stateless EdDSA signer over the injected curve and Poseidon libraries.

    Usage:
        signer = EddsaSigner(curve, make_hasher)
        sig = signer.sign_poseidon(secret_key, [exchange, account_id, ...])
    """

    def __init__(self, curve: CurvePrimitive, make_hasher: SpongeHasherFactory):
        self.curve = curve
        self.make_hasher = make_hasher

    def sign(self, secret_key: IntLike, hash_value: IntLike) -> EdDSASignature:
        rx, ry, s = self.curve.sign(to_big(secret_key), to_big(hash_value))
        return EdDSASignature(rx=int(rx), ry=int(ry), s=int(s))

    def sign_encoded(self, secret_key: IntLike, hash_value: IntLike) -> str:
        return self.sign(secret_key, hash_value).encode()

    def poseidon_hash(self, inputs: list[IntLike]) -> int:
        elements = [to_big(value) for value in inputs]
        hasher = self.make_hasher(len(elements) + 1, POSEIDON_FULL_ROUNDS, POSEIDON_PARTIAL_ROUNDS)
        return int(hasher(elements))

    def sign_message(self, secret_key: IntLike, message: Union[str, bytes]) -> str:
        """Sign sha256(message) mod the scalar field."""
        digest = sha256_field_hash(message)
        logger.debug(f"EdDSA message hash: {digest}")
        return self.sign_encoded(secret_key, digest)

    def sign_poseidon(self, secret_key: IntLike, inputs: list[IntLike]) -> str:
        """Sign the Poseidon hash of transaction field elements."""
        digest = self.poseidon_hash(inputs)
        logger.debug(f"EdDSA poseidon hash over {len(inputs)} inputs: {digest}")
        return self.sign_encoded(secret_key, digest)

    def sign_typed_data(self, secret_key: IntLike, payload: dict[str, Any]) -> str:
        """Sign a builder payload's EIP-712 hash divided by the cofactor."""
        digest = typed_data_field_hash(payload)
        logger.debug(f"EdDSA typed-data hash for {payload['primaryType']}: {hex(digest)}")
        return self.sign_encoded(secret_key, digest)
