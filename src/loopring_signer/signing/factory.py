"""ECDSA strategy factory.

Selects the signing strategy from an explicit mode value. The mode is never
inferred from the wallet; an unknown mode is an error.
"""

import logging
from typing import Optional, Union

from loopring_signer.config import get_settings
from loopring_signer.signing.base import TypedDataRelay, UnsupportedStrategy, WalletSigner
from loopring_signer.signing.ecdsa import (
    ContractStrategy,
    EcdsaMode,
    EcdsaStrategy,
    RawHashStrategy,
    TypedDataStrategy,
)

logger = logging.getLogger(__name__)


def get_ecdsa_strategy(
    mode: Union[EcdsaMode, str],
    address: str,
    wallet: Optional[WalletSigner] = None,
    relay: Optional[TypedDataRelay] = None,
    password: str = "",
) -> EcdsaStrategy:
    """Create the ECDSA strategy for ``mode``.

    Args:
        mode: EcdsaMode or its string value
        address: Signing account
        wallet: Wallet for typed_data / raw_hash modes
        relay: Relay for contract mode
        password: Passed to personal_sign in raw_hash mode

    Returns:
        EcdsaStrategy instance

    Raises:
        UnsupportedStrategy: If mode is unknown
        ValueError: If the collaborator the mode needs is missing
    """
    try:
        mode = EcdsaMode(mode)
    except ValueError:
        raise UnsupportedStrategy(f"Unsupported ECDSA signing mode: {mode!r}") from None

    logger.info(f"Using {mode.value} ECDSA strategy for {address}")

    if mode == EcdsaMode.CONTRACT:
        if relay is None:
            raise ValueError("contract mode requires a relay")
        return ContractStrategy(relay, address)

    if wallet is None:
        raise ValueError(f"{mode.value} mode requires a wallet")

    if mode == EcdsaMode.TYPED_DATA:
        return TypedDataStrategy(wallet, address)

    return RawHashStrategy(wallet, address, password=password)


def get_json_rpc_wallet():
    """JSON-RPC wallet for the configured WALLET_RPC_URL.

    Raises:
        RuntimeError: If WALLET_RPC_URL is not set
    """
    settings = get_settings()
    if not settings.has_wallet_rpc:
        raise RuntimeError("WALLET_RPC_URL is not configured")

    from loopring_signer.signing.rpc import JsonRpcWallet
    return JsonRpcWallet(settings.wallet_rpc_url, timeout=settings.wallet_rpc_timeout)
