"""EdDSA key derivation and public key packing.

The EdDSA key is never stored. It is re-derived whenever needed from the
wallet's signature over a fixed, nonce-bound message; a wallet produces the
same signature for the same message, so the derived key is stable.
"""

import hashlib
import logging
from dataclasses import dataclass
from typing import Optional, Union

from loopring_signer.config import get_settings
from loopring_signer.signing.base import CurvePrimitive, KeyPair, SignerRejected, WalletSigner
from loopring_signer.utils.formatter import IntLike, format_eddsa_key, to_big, to_buffer, to_hex

logger = logging.getLogger(__name__)

KEY_MESSAGE = "Sign this message to access Loopring Exchange: "


@dataclass(frozen=True)
class DerivedKeys:
    """Keypair plus the hex forms the exchange API expects.

    Attributes:
        key_pair: Raw keypair
        formatted_px: Public key X, 0x + 64 hex chars
        formatted_py: Public key Y, 0x + 64 hex chars
        sk: Secret key as 0x-hex
    """
    key_pair: KeyPair
    formatted_px: str
    formatted_py: str
    sk: str


def key_message(exchange_address: str, key_nonce: int) -> str:
    """Message the wallet signs to unlock the EdDSA key for ``key_nonce``."""
    return f"{KEY_MESSAGE}{exchange_address} with key nonce: {key_nonce}"


def key_pair_from_signature(signature: Union[str, bytes], curve: CurvePrimitive) -> DerivedKeys:
    """Derive the keypair seeded by sha256 of the raw signature bytes."""
    seed = hashlib.sha256(to_buffer(signature)).digest()
    key_pair = curve.generate_keypair(seed)
    return DerivedKeys(
        key_pair=key_pair,
        formatted_px=format_eddsa_key(key_pair.public_key_x),
        formatted_py=format_eddsa_key(key_pair.public_key_y),
        sk=to_hex(key_pair.secret_key),
    )


async def derive_key_pair(
    wallet: WalletSigner,
    address: str,
    exchange_address: Optional[str],
    key_nonce: int,
    curve: CurvePrimitive,
) -> DerivedKeys:
    """Ask the wallet to sign the key message and derive the EdDSA keypair.

    Args:
        wallet: Wallet signer holding ``address``
        address: Account owner address
        exchange_address: Exchange contract address, None for the configured one
        key_nonce: Key nonce of the account (bumped on key rotation)
        curve: Curve library used for keypair generation

    Returns:
        DerivedKeys for the account

    Raises:
        SignerRejected: If the wallet returned an error
        ValueError: If no exchange address is given or configured
    """
    if exchange_address is None:
        exchange_address = get_settings().exchange_address
    if not exchange_address:
        raise ValueError("exchange address is not configured")

    message = key_message(exchange_address, key_nonce)
    response = await wallet.sign_personal_message(address, message)

    if not response.success:
        logger.warning(f"Wallet rejected key derivation for {address}: {response.error}")
        raise SignerRejected(response.error or "wallet returned no signature")

    derived = key_pair_from_signature(response.result, curve)
    logger.info(f"Derived EdDSA key for {address} (key nonce {key_nonce})")
    return derived


def pack_public_key(x: IntLike, y: IntLike, curve: CurvePrimitive) -> int:
    """Pack public key coordinates into their compact integer form."""
    return curve.pack_point(to_big(x), to_big(y))


def unpack_public_key(packed: IntLike, curve: CurvePrimitive) -> tuple[str, str]:
    """Unpack a compact public key into fixed-width hex coordinates."""
    x, y = curve.unpack_point(to_big(packed))
    return format_eddsa_key(x), format_eddsa_key(y)
