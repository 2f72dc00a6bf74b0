"""Canonical request strings for API request authentication.

The string signed for an API call is

    METHOD & urlencode(base_path + api_path) & param-string

where the param-string is the sorted, non-empty query parameters for
GET/DELETE and the compact JSON body for POST/PUT. Encoding follows the
browser's encodeURIComponent so signatures match the JavaScript clients.
"""

import json
import logging
from typing import Any, Mapping, Optional
from urllib.parse import quote

from loopring_signer.config import get_settings
from loopring_signer.signing.base import UnsupportedMethod
from loopring_signer.signing.eddsa import EddsaSigner
from loopring_signer.utils.formatter import IntLike

logger = logging.getLogger(__name__)

QUERY_METHODS = ("GET", "DELETE")
BODY_METHODS = ("POST", "PUT")

# Characters encodeURIComponent leaves alone besides alphanumerics
_URI_COMPONENT_SAFE = "-_.!~*'()"


def encode_uri_component(value: str) -> str:
    return quote(value, safe=_URI_COMPONENT_SAFE)


def _js_number(value: Any) -> Any:
    """Whole floats as ints; JavaScript prints 1.0 as 1."""
    if isinstance(value, float) and value.is_integer() and abs(value) < 1e21:
        return int(value)
    return value


def _js_value(value: Any) -> Any:
    if isinstance(value, Mapping):
        return {k: _js_value(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [_js_value(v) for v in value]
    return _js_number(value)


def _render(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (list, tuple)):
        return ",".join(_render(v) for v in value)
    return str(_js_number(value))


def make_request_param_str(params: Optional[Mapping[str, Any]]) -> str:
    """Sorted ``key=value`` pairs, empty values dropped, each pair encoded."""
    pairs = []
    for key in sorted((params or {}).keys()):
        value = params[key]
        if value is None or value == "":
            continue
        pairs.append(encode_uri_component(f"{key}={_render(value)}"))
    return "&".join(pairs)


def make_object_str(params: Optional[Mapping[str, Any]]) -> str:
    """Compact JSON of the request body, encoded as one component."""
    body = json.dumps(_js_value(params or {}), separators=(",", ":"), ensure_ascii=False)
    return encode_uri_component(body)


def canonicalize(
    method: str,
    base_path: str,
    api_path: str,
    params: Optional[Mapping[str, Any]] = None,
) -> str:
    """Build the string signed for an API request.

    Raises:
        UnsupportedMethod: If method is not GET, DELETE, POST or PUT
    """
    method = method.strip().upper()

    if method in QUERY_METHODS:
        param_str = make_request_param_str(params)
    elif method in BODY_METHODS:
        param_str = make_object_str(params)
    else:
        raise UnsupportedMethod(f"{method} is not supported")

    uri = encode_uri_component(f"{base_path}{api_path}")
    return f"{method}&{uri}&{param_str}"


def get_api_signature(
    signer: EddsaSigner,
    method: str,
    base_path: Optional[str],
    api_path: str,
    params: Optional[Mapping[str, Any]],
    secret_key: IntLike,
) -> str:
    """EdDSA signature authenticating an API request (X-API-SIG).

    ``base_path`` defaults to the configured ``api_base_url`` when None.
    """
    if base_path is None:
        base_path = get_settings().api_base_url
    message = canonicalize(method, base_path, api_path, params)
    logger.debug(f"Signing API request {message}")
    return signer.sign_message(secret_key, message)
