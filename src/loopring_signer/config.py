"""Application configuration using pydantic-settings.

Holds the exchange context (chain id, exchange contract, API base URL) that
key derivation, the ECDSA helpers and API request signing fall back to when
the caller does not pass it, plus the JSON-RPC wallet endpoint.
"""

import logging
from functools import lru_cache
from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # ======================
    # Exchange
    # ======================
    chain_id: int = Field(default=1, description="EIP-155 chain id of the exchange deployment")
    exchange_address: str = Field(
        default="", description="Exchange contract address (EIP-712 verifyingContract)"
    )
    api_base_url: str = Field(
        default="https://api3.loopring.io", description="Base path used when signing API requests"
    )

    # ======================
    # Wallet
    # ======================
    wallet_rpc_url: Optional[str] = Field(
        default=None, description="JSON-RPC endpoint of the wallet signer"
    )
    wallet_rpc_timeout: float = Field(
        default=120.0, description="HTTP timeout for wallet calls (seconds)"
    )

    # ======================
    # Environment
    # ======================
    environment: str = Field(default="development", description="Runtime environment")
    debug: bool = Field(default=False, description="Enable debug logging")

    @property
    def has_wallet_rpc(self) -> bool:
        """Check if a JSON-RPC wallet endpoint is configured."""
        return bool(self.wallet_rpc_url)

    def get_safe_dict(self) -> dict:
        """Return settings dict with secrets redacted."""
        return {
            "environment": self.environment,
            "debug": self.debug,
            "chain_id": self.chain_id,
            "exchange_address": self.exchange_address or "(not set)",
            "api_base_url": self.api_base_url,
            "wallet_rpc_url": self._redact_url(self.wallet_rpc_url) if self.wallet_rpc_url else "(not set)",
            "wallet_rpc_timeout": self.wallet_rpc_timeout,
        }

    @staticmethod
    def _redact_url(url: str) -> str:
        """Redact credentials embedded in an RPC URL."""
        if "://" in url and "@" in url:
            proto, rest = url.split("://", 1)
            if "@" in rest:
                creds, host = rest.rsplit("@", 1)
                if ":" in creds:
                    user, _ = creds.split(":", 1)
                    return f"{proto}://{user}:***@{host}"
        return url


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()


def configure_logging(settings: Optional[Settings] = None) -> None:
    """Configure root logging the way the application bootstrap does."""
    settings = settings or get_settings()
    log_level = logging.DEBUG if settings.debug else logging.INFO
    logging.basicConfig(
        level=log_level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
