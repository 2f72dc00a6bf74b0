"""Pytest configuration and fixtures."""

import copy
import hashlib
import os

import pytest

# Set test environment
os.environ["ENVIRONMENT"] = "test"
os.environ["DEBUG"] = "true"

from loopring_signer.config import get_settings
from loopring_signer.signing.base import KeyPair
from loopring_signer.signing.eddsa import SNARK_SCALAR_FIELD, EddsaSigner
from loopring_signer.signing.local import LocalWallet
from loopring_signer.typed_data.models import (
    AmmPoolContext,
    ExitAmmPoolRequest,
    JoinAmmPoolRequest,
    OffChainWithdrawalRequest,
    OriginTransferRequest,
    UpdateAccountRequest,
)

TEST_PRIVATE_KEY = "0x4c0883a69102937d6231471b5dbb6204fe5129617082792ae468d01a3f362318"
EXCHANGE_ADDRESS = "0x0baba1ad5be3a5c0a66e7ac838a129bf948f1ea4"
POOL_ADDRESS = "0x18920d6e6fb7ebe057a4dd9260d6d95845c95036"
OWNER_ADDRESS = "0x2c7536e3605d9c16a7a3d7b1898e529396a65c23"
PAYEE_ADDRESS = "0xd854872f17c2783ae9d89e7b2a29cd72ec2a74ff"

_MASK = (1 << 256) - 1


def _h(*parts) -> int:
    data = b"|".join(str(p).encode() for p in parts)
    return int.from_bytes(hashlib.sha256(data).digest(), "big") % SNARK_SCALAR_FIELD


class FakeCurve:
    """Deterministic stand-in for the Baby-Jubjub library."""

    def __init__(self):
        self.seeds: list[bytes] = []
        self.signed: list[tuple[int, int]] = []

    def generate_keypair(self, seed: bytes) -> KeyPair:
        self.seeds.append(seed)
        secret = _h("sk", seed.hex())
        return KeyPair(
            secret_key=secret,
            public_key_x=_h("x", secret),
            public_key_y=_h("y", secret),
        )

    def sign(self, secret_key: int, message: int) -> tuple[int, int, int]:
        self.signed.append((secret_key, message))
        return _h("rx", secret_key, message), _h("ry", secret_key, message), _h("s", secret_key, message)

    def pack_point(self, x: int, y: int) -> int:
        return (x << 256) | y

    def unpack_point(self, packed: int) -> tuple[int, int]:
        return packed >> 256, packed & _MASK


class FakePoseidon:
    """Records hasher parameters and hashes inputs with sha256."""

    def __init__(self):
        self.params: list[tuple[int, int, int]] = []
        self.inputs: list[list[int]] = []

    def __call__(self, arity: int, full_rounds: int, partial_rounds: int):
        self.params.append((arity, full_rounds, partial_rounds))

        def hasher(inputs: list[int]) -> int:
            assert len(inputs) == arity - 1
            self.inputs.append(list(inputs))
            return _h("poseidon", *inputs)

        return hasher


@pytest.fixture
def configured_env(monkeypatch):
    """Set settings environment variables and reload the cached settings."""
    def apply(**values):
        for name, value in values.items():
            monkeypatch.setenv(name.upper(), str(value))
        get_settings.cache_clear()

    yield apply
    get_settings.cache_clear()


@pytest.fixture
def curve() -> FakeCurve:
    return FakeCurve()


@pytest.fixture
def poseidon() -> FakePoseidon:
    return FakePoseidon()


@pytest.fixture
def eddsa_signer(curve, poseidon) -> EddsaSigner:
    return EddsaSigner(curve, poseidon)


@pytest.fixture
def local_wallet() -> LocalWallet:
    return LocalWallet(TEST_PRIVATE_KEY)


_EXIT_PAYLOAD = {
    "types": {
        "EIP712Domain": [
            {"name": "name", "type": "string"},
            {"name": "version", "type": "string"},
            {"name": "chainId", "type": "uint256"},
            {"name": "verifyingContract", "type": "address"},
        ],
        "PoolExit": [
            {"name": "owner", "type": "address"},
            {"name": "burnAmount", "type": "uint96"},
            {"name": "burnStorageID", "type": "uint32"},
            {"name": "exitMinAmounts", "type": "uint96[]"},
            {"name": "fee", "type": "uint96"},
            {"name": "validUntil", "type": "uint32"},
        ],
    },
    "primaryType": "PoolExit",
    "domain": {
        "name": "AMM-LRC-ETH",
        "version": "1.0.0",
        "chainId": 1,
        "verifyingContract": "0x18920d6e6fb7ebe057a4dd9260d6d95845c95036",
    },
    "message": {
        "owner": "0x2c7536e3605d9c16a7a3d7b1898e529396a65c23",
        "burnAmount": "40",
        "burnStorageID": 13,
        "exitMinAmounts": ["90", "180"],
        "fee": "8",
        "validUntil": 1700000000,
    },
}


@pytest.fixture
def exit_payload() -> dict:
    """A complete PoolExit payload, fresh per test."""
    return copy.deepcopy(_EXIT_PAYLOAD)


@pytest.fixture
def update_request() -> UpdateAccountRequest:
    return UpdateAccountRequest(
        exchange=EXCHANGE_ADDRESS,
        owner=OWNER_ADDRESS,
        accountId=5,
        publicKey={"x": "0x1", "y": "0x2"},
        maxFee={"tokenId": 0, "volume": 100},
        validUntil=999,
        nonce=1,
    )


@pytest.fixture
def withdraw_request() -> OffChainWithdrawalRequest:
    return OffChainWithdrawalRequest(
        exchange=EXCHANGE_ADDRESS,
        owner=OWNER_ADDRESS,
        accountId=10,
        storageId=3,
        token={"tokenId": 1, "volume": "1000000000000000000"},
        maxFee={"tokenId": 0, "volume": "5000"},
        to=PAYEE_ADDRESS,
        extraData="0x",
        minGas=0,
        validUntil=1700000000,
    )


@pytest.fixture
def transfer_request() -> OriginTransferRequest:
    return OriginTransferRequest(
        exchange=EXCHANGE_ADDRESS,
        payerId=10,
        payerAddr=OWNER_ADDRESS,
        payeeId=0,
        payeeAddr=PAYEE_ADDRESS,
        token={"tokenId": 1, "volume": "250"},
        maxFee={"tokenId": 1, "volume": "2"},
        storageId=7,
        validUntil=1700000000,
    )


@pytest.fixture
def pool() -> AmmPoolContext:
    return AmmPoolContext(ammName="AMM-LRC-ETH", chainId=5, poolAddress=POOL_ADDRESS)


@pytest.fixture
def join_request() -> JoinAmmPoolRequest:
    return JoinAmmPoolRequest(
        owner=OWNER_ADDRESS,
        poolAddress=POOL_ADDRESS,
        joinTokens={
            "pooled": [{"tokenId": 1, "volume": "100"}, {"tokenId": 2, "volume": "200"}],
            "minimumLp": {"tokenId": 3, "volume": "50"},
        },
        storageIds=[11, 12],
        fee="9",
        validUntil=1700000000,
    )


@pytest.fixture
def exit_request() -> ExitAmmPoolRequest:
    return ExitAmmPoolRequest(
        owner=OWNER_ADDRESS,
        poolAddress=POOL_ADDRESS,
        exitTokens={
            "unPooled": [{"tokenId": 1, "volume": "90"}, {"tokenId": 2, "volume": "180"}],
            "burned": {"tokenId": 3, "volume": "40"},
        },
        storageId=13,
        maxFee="8",
        validUntil=1700000000,
    )

