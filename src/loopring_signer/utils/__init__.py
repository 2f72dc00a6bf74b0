"""Utility modules for loopring_signer."""

from loopring_signer.utils.formatter import (
    clear_hex_prefix,
    format_eddsa_key,
    pad_hex,
    to_big,
    to_buffer,
    to_hex,
)

__all__ = [
    "clear_hex_prefix",
    "format_eddsa_key",
    "pad_hex",
    "to_big",
    "to_buffer",
    "to_hex",
]
