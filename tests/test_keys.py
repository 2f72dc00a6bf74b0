"""Tests for EdDSA key derivation and public key packing."""

import hashlib
from unittest.mock import AsyncMock

import pytest

from conftest import EXCHANGE_ADDRESS
from loopring_signer.signing.base import SignerRejected, WalletResponse
from loopring_signer.signing.keys import (
    derive_key_pair,
    key_message,
    key_pair_from_signature,
    pack_public_key,
    unpack_public_key,
)


def mock_wallet(response: WalletResponse) -> AsyncMock:
    wallet = AsyncMock()
    wallet.sign_personal_message = AsyncMock(return_value=response)
    return wallet


class TestKeyMessage:
    def test_message_text(self):
        assert key_message(EXCHANGE_ADDRESS, 0) == (
            "Sign this message to access Loopring Exchange: "
            f"{EXCHANGE_ADDRESS} with key nonce: 0"
        )


class TestDeriveKeyPair:
    @pytest.mark.asyncio
    async def test_wallet_receives_exact_message(self, curve):
        wallet = mock_wallet(WalletResponse(result="0x" + "11" * 65))

        await derive_key_pair(wallet, "0xabc", EXCHANGE_ADDRESS, 3, curve)

        wallet.sign_personal_message.assert_awaited_once_with(
            "0xabc", key_message(EXCHANGE_ADDRESS, 3)
        )

    @pytest.mark.asyncio
    async def test_seed_is_sha256_of_signature_bytes(self, curve):
        signature = "0x" + "ab" * 65
        wallet = mock_wallet(WalletResponse(result=signature))

        await derive_key_pair(wallet, "0xabc", EXCHANGE_ADDRESS, 0, curve)

        assert curve.seeds == [hashlib.sha256(bytes.fromhex("ab" * 65)).digest()]

    @pytest.mark.asyncio
    async def test_same_signature_gives_same_keys(self, curve):
        wallet = mock_wallet(WalletResponse(result="0x" + "42" * 65))

        first = await derive_key_pair(wallet, "0xabc", EXCHANGE_ADDRESS, 1, curve)
        second = await derive_key_pair(wallet, "0xabc", EXCHANGE_ADDRESS, 1, curve)

        assert first == second

    @pytest.mark.asyncio
    async def test_local_wallet_is_deterministic(self, curve, local_wallet):
        """A real wallet signs the fixed message identically every time."""
        first = await derive_key_pair(local_wallet, local_wallet.address, EXCHANGE_ADDRESS, 0, curve)
        second = await derive_key_pair(local_wallet, local_wallet.address, EXCHANGE_ADDRESS, 0, curve)
        rotated = await derive_key_pair(local_wallet, local_wallet.address, EXCHANGE_ADDRESS, 1, curve)

        assert first == second
        assert first.key_pair != rotated.key_pair

    @pytest.mark.asyncio
    async def test_formatted_coordinates(self, curve):
        wallet = mock_wallet(WalletResponse(result="0x" + "01" * 65))

        derived = await derive_key_pair(wallet, "0xabc", EXCHANGE_ADDRESS, 0, curve)

        for coord, value in (
            (derived.formatted_px, derived.key_pair.public_key_x),
            (derived.formatted_py, derived.key_pair.public_key_y),
        ):
            assert coord.startswith("0x")
            assert len(coord) == 66
            assert int(coord, 16) == value
        assert int(derived.sk, 16) == derived.key_pair.secret_key

    @pytest.mark.asyncio
    async def test_wallet_error_raises_signer_rejected(self, curve):
        wallet = mock_wallet(WalletResponse(error="User denied message signature"))

        with pytest.raises(SignerRejected, match="User denied"):
            await derive_key_pair(wallet, "0xabc", EXCHANGE_ADDRESS, 0, curve)

        assert curve.seeds == []

    @pytest.mark.asyncio
    async def test_exchange_address_defaults_to_settings(self, curve, configured_env):
        configured_env(exchange_address=EXCHANGE_ADDRESS)
        wallet = mock_wallet(WalletResponse(result="0x" + "11" * 65))

        await derive_key_pair(wallet, "0xabc", None, 2, curve)

        wallet.sign_personal_message.assert_awaited_once_with(
            "0xabc", key_message(EXCHANGE_ADDRESS, 2)
        )

    @pytest.mark.asyncio
    async def test_missing_exchange_address(self, curve, configured_env):
        configured_env(exchange_address="")
        wallet = mock_wallet(WalletResponse(result="0x" + "11" * 65))

        with pytest.raises(ValueError, match="exchange address"):
            await derive_key_pair(wallet, "0xabc", None, 0, curve)

        wallet.sign_personal_message.assert_not_awaited()

    def test_key_pair_from_bytes_signature(self, curve):
        raw = bytes(range(65))
        assert key_pair_from_signature(raw, curve) == key_pair_from_signature("0x" + raw.hex(), curve)


class TestPublicKeyCodec:
    def test_pack_accepts_hex_and_int(self, curve):
        assert pack_public_key("0x10", "0x20", curve) == pack_public_key(16, 32, curve)
        assert pack_public_key("16", "32", curve) == curve.pack_point(16, 32)

    def test_unpack_returns_fixed_width_hex(self, curve):
        packed = pack_public_key(5, 7, curve)

        x, y = unpack_public_key(packed, curve)

        assert x == "0x" + "0" * 63 + "5"
        assert y == "0x" + "0" * 63 + "7"
