"""API request authentication."""

from loopring_signer.api.canonical import canonicalize, get_api_signature

__all__ = ["canonicalize", "get_api_signature"]
