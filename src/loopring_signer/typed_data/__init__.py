"""EIP-712 payloads for exchange and AMM pool transactions."""

from loopring_signer.typed_data.builders import (
    TypedDataPayload,
    build_typed_data,
    get_amm_exit_typed_data,
    get_amm_join_typed_data,
    get_transfer_typed_data,
    get_update_account_typed_data,
    get_withdraw_typed_data,
)
from loopring_signer.typed_data.hashing import typed_data_hash
from loopring_signer.typed_data.models import (
    AmmPoolContext,
    ExitAmmPoolRequest,
    JoinAmmPoolRequest,
    OffChainWithdrawalRequest,
    OriginTransferRequest,
    PublicKey,
    TokenVolume,
    TransactionRequest,
    UpdateAccountRequest,
)

__all__ = [
    "AmmPoolContext",
    "ExitAmmPoolRequest",
    "JoinAmmPoolRequest",
    "OffChainWithdrawalRequest",
    "OriginTransferRequest",
    "PublicKey",
    "TokenVolume",
    "TransactionRequest",
    "TypedDataPayload",
    "UpdateAccountRequest",
    "build_typed_data",
    "get_amm_exit_typed_data",
    "get_amm_join_typed_data",
    "get_transfer_typed_data",
    "get_update_account_typed_data",
    "get_withdraw_typed_data",
    "typed_data_hash",
]
