"""Per-transaction signing.

Joins the typed-data builders with the two signers. Withdrawals and transfers
carry an ECDSA signature (wallet) and/or an EdDSA signature over a Poseidon
hash; AMM joins and exits are EdDSA-signed over their typed-data hash.
"""

import logging
from typing import Optional

from eth_abi.packed import encode_packed
from eth_utils import keccak, to_checksum_address

from loopring_signer.config import get_settings
from loopring_signer.signing.base import CurvePrimitive
from loopring_signer.signing.ecdsa import EcdsaSignatureResult, EcdsaStrategy, get_ecdsa_signature
from loopring_signer.signing.eddsa import EddsaSigner
from loopring_signer.typed_data.builders import (
    get_amm_exit_typed_data,
    get_amm_join_typed_data,
    get_transfer_typed_data,
    get_update_account_typed_data,
    get_withdraw_typed_data,
)
from loopring_signer.typed_data.models import (
    AmmPoolContext,
    ExitAmmPoolRequest,
    JoinAmmPoolRequest,
    OffChainWithdrawalRequest,
    OriginTransferRequest,
    UpdateAccountRequest,
)
from loopring_signer.utils.formatter import IntLike, to_big, to_buffer

logger = logging.getLogger(__name__)


# ======================
# ECDSA
# ======================

def _resolve_chain_id(chain_id: Optional[int]) -> int:
    """Explicit chain id, or the configured one."""
    return get_settings().chain_id if chain_id is None else chain_id


async def sign_update_account(
    strategy: EcdsaStrategy,
    request: UpdateAccountRequest,
    curve: CurvePrimitive,
    chain_id: Optional[int] = None,
) -> EcdsaSignatureResult:
    payload = get_update_account_typed_data(request, _resolve_chain_id(chain_id), curve)
    return await get_ecdsa_signature(payload, strategy)


async def sign_offchain_withdraw(
    strategy: EcdsaStrategy,
    request: OffChainWithdrawalRequest,
    chain_id: Optional[int] = None,
) -> EcdsaSignatureResult:
    payload = get_withdraw_typed_data(request, _resolve_chain_id(chain_id))
    return await get_ecdsa_signature(payload, strategy)


async def sign_transfer(
    strategy: EcdsaStrategy,
    request: OriginTransferRequest,
    chain_id: Optional[int] = None,
) -> EcdsaSignatureResult:
    payload = get_transfer_typed_data(request, _resolve_chain_id(chain_id))
    return await get_ecdsa_signature(payload, strategy)


# ======================
# EdDSA
# ======================

def onchain_data_hash(request: OffChainWithdrawalRequest) -> int:
    """First 20 bytes of keccak256(abi.encodePacked(minGas, to, extraData))."""
    packed = encode_packed(
        ["uint256", "address", "bytes"],
        [request.min_gas, to_checksum_address(request.to), to_buffer(request.extra_data)],
    )
    digest = int.from_bytes(keccak(packed)[:20], "big")
    logger.debug(f"Withdrawal onchain data hash: {hex(digest)}")
    return digest


def withdraw_poseidon_inputs(request: OffChainWithdrawalRequest) -> list[int]:
    return [
        to_big(request.exchange),
        request.account_id,
        request.token.token_id,
        to_big(request.token.volume),
        request.max_fee.token_id,
        to_big(request.max_fee.volume),
        onchain_data_hash(request),
        request.valid_until,
        request.storage_id,
    ]


def transfer_poseidon_inputs(request: OriginTransferRequest) -> list[int]:
    return [
        to_big(request.exchange),
        request.payer_id,
        request.payee_id,
        request.token.token_id,
        to_big(request.token.volume),
        request.max_fee.token_id,
        to_big(request.max_fee.volume),
        to_big(request.payee_addr),
        0,
        0,
        request.valid_until,
        request.storage_id,
    ]


def get_withdraw_eddsa_signature(
    signer: EddsaSigner,
    request: OffChainWithdrawalRequest,
    secret_key: IntLike,
) -> str:
    return signer.sign_poseidon(secret_key, withdraw_poseidon_inputs(request))


def get_transfer_eddsa_signature(
    signer: EddsaSigner,
    request: OriginTransferRequest,
    secret_key: IntLike,
) -> str:
    return signer.sign_poseidon(secret_key, transfer_poseidon_inputs(request))


def get_join_pool_eddsa_signature(
    signer: EddsaSigner,
    request: JoinAmmPoolRequest,
    pool: AmmPoolContext,
    secret_key: IntLike,
) -> str:
    return signer.sign_typed_data(secret_key, get_amm_join_typed_data(request, pool))


def get_exit_pool_eddsa_signature(
    signer: EddsaSigner,
    request: ExitAmmPoolRequest,
    pool: AmmPoolContext,
    secret_key: IntLike,
) -> str:
    return signer.sign_typed_data(secret_key, get_amm_exit_typed_data(request, pool))
