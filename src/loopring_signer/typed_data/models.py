"""Request models for the signed transaction kinds.

Field aliases follow the exchange REST API (camelCase); models accept either
form. Token amounts are kept as decimal strings because uint96 values do not
survive a round trip through JSON numbers.
"""

from typing import Annotated, Literal, Union

from pydantic import BaseModel, BeforeValidator, ConfigDict, Field, StringConstraints
from pydantic.alias_generators import to_camel


def _amount_str(value):
    if isinstance(value, bool):
        raise ValueError("amount must be an integer")
    if isinstance(value, int):
        return str(value)
    return value


Amount = Annotated[str, BeforeValidator(_amount_str), StringConstraints(pattern=r"^[0-9]+$")]


class ApiModel(BaseModel):
    """Base model with camelCase aliases."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
    )


class TokenVolume(ApiModel):
    """Token id and amount in the token's smallest unit."""

    token_id: int = Field(..., ge=0, description="Token id on the exchange")
    volume: Amount = Field(..., description="Amount as decimal string")


class PublicKey(ApiModel):
    """EdDSA public key coordinates (0x-hex or decimal)."""

    x: str
    y: str


class UpdateAccountRequest(ApiModel):
    """Set or rotate the EdDSA key of an account."""

    kind: Literal["account_update"] = "account_update"
    exchange: str = Field(..., description="Exchange contract address")
    owner: str = Field(..., description="Account owner address")
    account_id: int = Field(..., ge=0)
    public_key: PublicKey
    max_fee: TokenVolume
    valid_until: int = Field(..., ge=0)
    nonce: int = Field(..., ge=0)


class OffChainWithdrawalRequest(ApiModel):
    """Withdraw tokens from L2 to an L1 address."""

    kind: Literal["withdrawal"] = "withdrawal"
    exchange: str
    owner: str
    account_id: int = Field(..., ge=0)
    storage_id: int = Field(..., ge=0)
    token: TokenVolume
    max_fee: TokenVolume
    to: str = Field(..., description="L1 recipient address")
    extra_data: str = Field(default="0x", description="Hex-encoded extra data")
    min_gas: int = Field(default=0, ge=0)
    valid_until: int = Field(..., ge=0)


class OriginTransferRequest(ApiModel):
    """L2 transfer between two accounts."""

    kind: Literal["transfer"] = "transfer"
    exchange: str
    payer_id: int = Field(..., ge=0)
    payer_addr: str
    payee_id: int = Field(default=0, ge=0, description="0 when the payee has no account yet")
    payee_addr: str
    token: TokenVolume
    max_fee: TokenVolume
    storage_id: int = Field(..., ge=0)
    valid_until: int = Field(..., ge=0)


class JoinTokens(ApiModel):
    pooled: tuple[TokenVolume, TokenVolume]
    minimum_lp: TokenVolume


class ExitTokens(ApiModel):
    unpooled: tuple[TokenVolume, TokenVolume] = Field(..., alias="unPooled")
    burned: TokenVolume


class JoinAmmPoolRequest(ApiModel):
    """Add liquidity to an AMM pool."""

    kind: Literal["pool_join"] = "pool_join"
    owner: str
    pool_address: str
    join_tokens: JoinTokens
    storage_ids: list[int]
    fee: Amount
    valid_until: int = Field(..., ge=0)


class ExitAmmPoolRequest(ApiModel):
    """Remove liquidity from an AMM pool."""

    kind: Literal["pool_exit"] = "pool_exit"
    owner: str
    pool_address: str
    exit_tokens: ExitTokens
    storage_id: int = Field(..., ge=0)
    max_fee: Amount
    valid_until: int = Field(..., ge=0)


class AmmPoolContext(ApiModel):
    """Pool metadata that forms the EIP-712 domain of pool operations."""

    amm_name: str = Field(..., description="Pool name, used as domain name")
    chain_id: int
    pool_address: str = Field(..., description="Pool contract, used as verifyingContract")


TransactionRequest = Annotated[
    Union[
        UpdateAccountRequest,
        OffChainWithdrawalRequest,
        OriginTransferRequest,
        JoinAmmPoolRequest,
        ExitAmmPoolRequest,
    ],
    Field(discriminator="kind"),
]
