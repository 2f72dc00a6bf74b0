"""Signing services.

Provides:
- Key derivation of the EdDSA (L2) key from a wallet signature
- EddsaSigner: protocol-native signatures
- ECDSA strategies: wallet signatures over typed data
- LocalWallet / JsonRpcWallet: wallet backends
"""

from loopring_signer.signing.base import (
    CurvePrimitive,
    KeyPair,
    SignatureEncodingError,
    SignerRejected,
    SigningError,
    TypedDataRelay,
    UnsupportedMethod,
    UnsupportedStrategy,
    WalletResponse,
    WalletSigner,
)
from loopring_signer.signing.ecdsa import (
    ContractStrategy,
    EcdsaMode,
    EcdsaSignatureResult,
    EcdsaStrategy,
    RawHashStrategy,
    TypedDataStrategy,
    get_ecdsa_signature,
)
from loopring_signer.signing.eddsa import EdDSASignature, EddsaSigner
from loopring_signer.signing.factory import get_ecdsa_strategy
from loopring_signer.signing.keys import DerivedKeys, derive_key_pair
from loopring_signer.signing.local import LocalWallet

__all__ = [
    "ContractStrategy",
    "CurvePrimitive",
    "DerivedKeys",
    "EcdsaMode",
    "EcdsaSignatureResult",
    "EcdsaStrategy",
    "EdDSASignature",
    "EddsaSigner",
    "KeyPair",
    "LocalWallet",
    "RawHashStrategy",
    "SignatureEncodingError",
    "SignerRejected",
    "SigningError",
    "TypedDataRelay",
    "TypedDataStrategy",
    "UnsupportedMethod",
    "UnsupportedStrategy",
    "WalletResponse",
    "WalletSigner",
    "derive_key_pair",
    "get_ecdsa_signature",
    "get_ecdsa_strategy",
]
