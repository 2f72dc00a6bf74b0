"""EIP-712 payload builders.

Field names, types and their order inside each struct are part of the
on-chain verifier's encoding and must not be changed or reordered.
"""

import logging
from typing import Any, Optional, Union

from loopring_signer.signing.base import CurvePrimitive
from loopring_signer.signing.keys import pack_public_key
from loopring_signer.typed_data.models import (
    AmmPoolContext,
    ExitAmmPoolRequest,
    JoinAmmPoolRequest,
    OffChainWithdrawalRequest,
    OriginTransferRequest,
    TransactionRequest,
    UpdateAccountRequest,
)
from loopring_signer.utils.formatter import to_hex

logger = logging.getLogger(__name__)

PROTOCOL_NAME = "Loopring Protocol"
PROTOCOL_VERSION = "3.6.0"
AMM_VERSION = "1.0.0"

EIP712_DOMAIN = [
    {"name": "name", "type": "string"},
    {"name": "version", "type": "string"},
    {"name": "chainId", "type": "uint256"},
    {"name": "verifyingContract", "type": "address"},
]

ACCOUNT_UPDATE_FIELDS = [
    {"name": "owner", "type": "address"},
    {"name": "accountID", "type": "uint32"},
    {"name": "feeTokenID", "type": "uint16"},
    {"name": "maxFee", "type": "uint96"},
    {"name": "publicKey", "type": "uint256"},
    {"name": "validUntil", "type": "uint32"},
    {"name": "nonce", "type": "uint32"},
]

WITHDRAWAL_FIELDS = [
    {"name": "owner", "type": "address"},
    {"name": "accountID", "type": "uint32"},
    {"name": "tokenID", "type": "uint16"},
    {"name": "amount", "type": "uint96"},
    {"name": "feeTokenID", "type": "uint16"},
    {"name": "maxFee", "type": "uint96"},
    {"name": "to", "type": "address"},
    {"name": "extraData", "type": "bytes"},
    {"name": "minGas", "type": "uint256"},
    {"name": "validUntil", "type": "uint32"},
    {"name": "storageID", "type": "uint32"},
]

TRANSFER_FIELDS = [
    {"name": "from", "type": "address"},
    {"name": "to", "type": "address"},
    {"name": "tokenID", "type": "uint16"},
    {"name": "amount", "type": "uint96"},
    {"name": "feeTokenID", "type": "uint16"},
    {"name": "maxFee", "type": "uint96"},
    {"name": "validUntil", "type": "uint32"},
    {"name": "storageID", "type": "uint32"},
]

# The pool contracts hash the two-element amount arrays as dynamic uint96[]
POOL_JOIN_FIELDS = [
    {"name": "owner", "type": "address"},
    {"name": "joinAmounts", "type": "uint96[]"},
    {"name": "joinStorageIDs", "type": "uint32[]"},
    {"name": "mintMinAmount", "type": "uint96"},
    {"name": "fee", "type": "uint96"},
    {"name": "validUntil", "type": "uint32"},
]

POOL_EXIT_FIELDS = [
    {"name": "owner", "type": "address"},
    {"name": "burnAmount", "type": "uint96"},
    {"name": "burnStorageID", "type": "uint32"},
    {"name": "exitMinAmounts", "type": "uint96[]"},
    {"name": "fee", "type": "uint96"},
    {"name": "validUntil", "type": "uint32"},
]

TypedDataPayload = dict[str, Any]
BuildContext = Union[int, AmmPoolContext]


def _typed_data(
    primary_type: str,
    fields: list[dict[str, str]],
    domain: dict[str, Any],
    message: dict[str, Any],
) -> TypedDataPayload:
    """Assemble a payload; ``message`` keys are emitted in ``fields`` order."""
    missing = [f["name"] for f in fields if f["name"] not in message]
    if missing:
        raise ValueError(f"{primary_type} message is missing fields: {missing}")

    return {
        "types": {
            "EIP712Domain": [dict(f) for f in EIP712_DOMAIN],
            primary_type: [dict(f) for f in fields],
        },
        "primaryType": primary_type,
        "domain": domain,
        "message": {f["name"]: message[f["name"]] for f in fields},
    }


def _protocol_domain(chain_id: int, exchange: str) -> dict[str, Any]:
    return {
        "name": PROTOCOL_NAME,
        "version": PROTOCOL_VERSION,
        "chainId": chain_id,
        "verifyingContract": exchange,
    }


def _pool_domain(pool: AmmPoolContext) -> dict[str, Any]:
    return {
        "name": pool.amm_name,
        "version": AMM_VERSION,
        "chainId": pool.chain_id,
        "verifyingContract": pool.pool_address,
    }


def get_update_account_typed_data(
    request: UpdateAccountRequest,
    chain_id: int,
    curve: CurvePrimitive,
) -> TypedDataPayload:
    """AccountUpdate payload; the public key is signed in packed form."""
    packed = pack_public_key(request.public_key.x, request.public_key.y, curve)
    message = {
        "owner": request.owner,
        "accountID": request.account_id,
        "feeTokenID": request.max_fee.token_id,
        "maxFee": request.max_fee.volume,
        "publicKey": to_hex(packed),
        "validUntil": request.valid_until,
        "nonce": request.nonce,
    }
    return _typed_data(
        "AccountUpdate", ACCOUNT_UPDATE_FIELDS, _protocol_domain(chain_id, request.exchange), message
    )


def get_withdraw_typed_data(request: OffChainWithdrawalRequest, chain_id: int) -> TypedDataPayload:
    message = {
        "owner": request.owner,
        "accountID": request.account_id,
        "tokenID": request.token.token_id,
        "amount": request.token.volume,
        "feeTokenID": request.max_fee.token_id,
        "maxFee": request.max_fee.volume,
        "to": request.to,
        "extraData": request.extra_data,
        "minGas": request.min_gas,
        "validUntil": request.valid_until,
        "storageID": request.storage_id,
    }
    return _typed_data(
        "Withdrawal", WITHDRAWAL_FIELDS, _protocol_domain(chain_id, request.exchange), message
    )


def get_transfer_typed_data(request: OriginTransferRequest, chain_id: int) -> TypedDataPayload:
    message = {
        "from": request.payer_addr,
        "to": request.payee_addr,
        "tokenID": request.token.token_id,
        "amount": request.token.volume,
        "feeTokenID": request.max_fee.token_id,
        "maxFee": request.max_fee.volume,
        "validUntil": request.valid_until,
        "storageID": request.storage_id,
    }
    return _typed_data(
        "Transfer", TRANSFER_FIELDS, _protocol_domain(chain_id, request.exchange), message
    )


def get_amm_join_typed_data(request: JoinAmmPoolRequest, pool: AmmPoolContext) -> TypedDataPayload:
    pooled = request.join_tokens.pooled
    message = {
        "owner": request.owner,
        "joinAmounts": [pooled[0].volume, pooled[1].volume],
        "joinStorageIDs": list(request.storage_ids),
        "mintMinAmount": request.join_tokens.minimum_lp.volume,
        "fee": request.fee,
        "validUntil": request.valid_until,
    }
    return _typed_data("PoolJoin", POOL_JOIN_FIELDS, _pool_domain(pool), message)


def get_amm_exit_typed_data(request: ExitAmmPoolRequest, pool: AmmPoolContext) -> TypedDataPayload:
    unpooled = request.exit_tokens.unpooled
    message = {
        "owner": request.owner,
        "burnAmount": request.exit_tokens.burned.volume,
        "burnStorageID": request.storage_id,
        "exitMinAmounts": [unpooled[0].volume, unpooled[1].volume],
        "fee": request.max_fee,
        "validUntil": request.valid_until,
    }
    return _typed_data("PoolExit", POOL_EXIT_FIELDS, _pool_domain(pool), message)


def build_typed_data(
    request: TransactionRequest,
    context: BuildContext,
    curve: Optional[CurvePrimitive] = None,
) -> TypedDataPayload:
    """Build the payload for any transaction request.

    Args:
        request: One of the TransactionRequest variants
        context: Chain id for protocol kinds, AmmPoolContext for pool kinds
        curve: Required for UpdateAccountRequest (public key packing)

    Raises:
        TypeError: If the request/context combination is not supported
    """
    if isinstance(request, UpdateAccountRequest):
        if curve is None:
            raise TypeError("AccountUpdate payloads need a curve to pack the public key")
        return get_update_account_typed_data(request, _chain_id(context), curve)
    if isinstance(request, OffChainWithdrawalRequest):
        return get_withdraw_typed_data(request, _chain_id(context))
    if isinstance(request, OriginTransferRequest):
        return get_transfer_typed_data(request, _chain_id(context))
    if isinstance(request, JoinAmmPoolRequest):
        return get_amm_join_typed_data(request, _pool(context))
    if isinstance(request, ExitAmmPoolRequest):
        return get_amm_exit_typed_data(request, _pool(context))
    raise TypeError(f"Unsupported request type: {type(request).__name__}")


def _chain_id(context: BuildContext) -> int:
    if isinstance(context, bool) or not isinstance(context, int):
        raise TypeError("Protocol payloads need a chain id")
    return context


def _pool(context: BuildContext) -> AmmPoolContext:
    if not isinstance(context, AmmPoolContext):
        raise TypeError("Pool payloads need an AmmPoolContext")
    return context
