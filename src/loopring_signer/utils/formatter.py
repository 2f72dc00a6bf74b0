"""Hex and big-integer helpers shared by the signers and builders."""

from typing import Union

from eth_utils import is_0x_prefixed, remove_0x_prefix

HEX_WIDTH = 64

IntLike = Union[int, str, bytes]


def to_big(value: IntLike) -> int:
    """Parse an integer given as int, 0x-hex string, decimal string or bytes."""
    if isinstance(value, bool):
        raise TypeError("bool is not an integer value")
    if isinstance(value, int):
        return value
    if isinstance(value, (bytes, bytearray)):
        return int.from_bytes(value, "big")
    text = value.strip()
    if is_0x_prefixed(text):
        body = remove_0x_prefix(text)
        return int(body, 16) if body else 0
    return int(text, 10)


def clear_hex_prefix(value: str) -> str:
    return remove_0x_prefix(value) if is_0x_prefixed(value) else value


def to_hex(value: IntLike) -> str:
    """0x-prefixed minimal hex form."""
    return hex(to_big(value))


def pad_hex(value: IntLike, width: int = HEX_WIDTH) -> str:
    """Unprefixed hex, left-padded with zeros to ``width`` characters.

    Raises:
        ValueError: If the value is negative or wider than ``width``
    """
    number = to_big(value)
    if number < 0:
        raise ValueError(f"cannot encode negative value {number}")
    digits = format(number, "x")
    if len(digits) > width:
        raise ValueError(f"value needs {len(digits)} hex characters, limit is {width}")
    return digits.rjust(width, "0")


def format_eddsa_key(value: IntLike) -> str:
    """0x-prefixed, 64-character hex form of a curve coordinate."""
    return "0x" + pad_hex(value)


def to_buffer(value: Union[str, bytes]) -> bytes:
    """Bytes of a hex string (0x-prefixed or not) or pass-through for bytes."""
    if isinstance(value, (bytes, bytearray)):
        return bytes(value)
    body = clear_hex_prefix(value)
    if len(body) % 2:
        body = "0" + body
    return bytes.fromhex(body)
