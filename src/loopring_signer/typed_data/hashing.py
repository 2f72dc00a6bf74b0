"""EIP-712 hashing of builder payloads.

Builder payloads keep amounts as decimal strings and bytes as 0x-hex so they
can be handed to a wallet as JSON. Before hashing locally the values are
coerced to the Python types eth_account expects.
"""

import re
from typing import Any

from eth_account.messages import SignableMessage, encode_typed_data
from eth_utils import keccak

from loopring_signer.utils.formatter import to_big, to_buffer

_ARRAY_RE = re.compile(r"^(.*)\[(\d*)\]$")


def _coerce(type_: str, value: Any, types: dict[str, list[dict[str, str]]]) -> Any:
    array = _ARRAY_RE.match(type_)
    if array:
        return [_coerce(array.group(1), item, types) for item in value]
    if type_ in types:
        return _coerce_struct(type_, value, types)
    if type_.startswith(("uint", "int")):
        return to_big(value)
    if type_ == "bytes" or (type_.startswith("bytes") and isinstance(value, str)):
        return to_buffer(value)
    return value


def _coerce_struct(type_name: str, data: dict[str, Any], types: dict[str, list[dict[str, str]]]) -> dict[str, Any]:
    return {
        field["name"]: _coerce(field["type"], data[field["name"]], types)
        for field in types[type_name]
    }


def normalize_typed_data(payload: dict[str, Any]) -> dict[str, Any]:
    """Copy of ``payload`` with integer and bytes fields as Python values."""
    types = payload["types"]
    return {
        "types": types,
        "primaryType": payload["primaryType"],
        "domain": _coerce_struct("EIP712Domain", payload["domain"], types),
        "message": _coerce_struct(payload["primaryType"], payload["message"], types),
    }


def signable_typed_data(payload: dict[str, Any]) -> SignableMessage:
    return encode_typed_data(full_message=normalize_typed_data(payload))


def typed_data_hash(payload: dict[str, Any]) -> bytes:
    """keccak256(0x19 0x01 || domainSeparator || hashStruct(message))."""
    signable = signable_typed_data(payload)
    return keccak(b"\x19" + signable.version + signable.header + signable.body)
