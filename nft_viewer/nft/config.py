"""Alchemy NFT API configuration.

The API key and endpoint are injected from the environment (or a .env file)
at process start; nothing secret lives in source.

Example .env:
    ALCHEMY_API_KEY=your_api_key_here
    ALCHEMY_NFT_BASE_URL=https://eth-mainnet.g.alchemy.com/nft/v2/{api_key}/getNFTs
    NFT_IPFS_GATEWAY_HOST=ipfs.io
"""

from __future__ import annotations

from typing import Annotated

import httpx
from pydantic import Field, SecretStr, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from nft_viewer.core.types import Address
from nft_viewer.nft.urls import API_KEY_PLACEHOLDER, build_owned_nfts_url

DEFAULT_NFT_BASE_URL = f"https://eth-mainnet.g.alchemy.com/nft/v2/{API_KEY_PLACEHOLDER}/getNFTs"
DEFAULT_IPFS_GATEWAY_HOST = "ipfs.io"


class AlchemyConfig(BaseSettings):
    """Typed configuration for the Alchemy NFT endpoint."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
        populate_by_name=True,
        validate_default=True,
    )

    # Optional so config can load (and tests can run) without credentials
    alchemy_api_key: Annotated[
        SecretStr | None,
        Field(
            alias="ALCHEMY_API_KEY",
            description="Alchemy API key (stored securely)",
        ),
    ] = None

    alchemy_nft_base_url: Annotated[
        str,
        Field(
            alias="ALCHEMY_NFT_BASE_URL",
            description="getNFTs endpoint template; '{api_key}' is replaced by the key",
        ),
    ] = DEFAULT_NFT_BASE_URL

    ipfs_gateway_host: Annotated[
        str,
        Field(
            alias="NFT_IPFS_GATEWAY_HOST",
            description="Host of the HTTP gateway used for ipfs:// references",
        ),
    ] = DEFAULT_IPFS_GATEWAY_HOST

    request_timeout: Annotated[
        float,
        Field(
            alias="ALCHEMY_REQUEST_TIMEOUT",
            ge=1.0,
            le=300.0,
            description="HTTP request timeout (seconds)",
        ),
    ] = 30.0

    @field_validator("ipfs_gateway_host")
    @classmethod
    def validate_gateway_host(cls, v: str) -> str:
        """Accept a bare host; tolerate a pasted scheme or trailing slash."""
        host = v.strip().removeprefix("https://").removeprefix("http://").rstrip("/")
        if not host or "/" in host:
            msg = f"Invalid IPFS gateway host: {v!r}"
            raise ValueError(msg)
        return host

    @classmethod
    def from_env(cls) -> AlchemyConfig:
        """Load configuration from environment variables.

        Raises:
            ValueError: If the environment holds invalid values
        """
        try:
            return cls()  # type: ignore[call-arg]
        except Exception as e:
            msg = (
                "Failed to load Alchemy configuration from environment. "
                f"Check ALCHEMY_API_KEY and ALCHEMY_NFT_BASE_URL. Error: {e}"
            )
            raise ValueError(msg) from e

    def is_configured(self) -> bool:
        """Check if an API key is configured."""
        return self.alchemy_api_key is not None and bool(
            self.alchemy_api_key.get_secret_value()
        )

    def get_api_key(self) -> str:
        """Get the API key value safely.

        Raises:
            ValueError: If the key is not configured
        """
        if not self.is_configured():
            msg = "Alchemy API key not configured. Set ALCHEMY_API_KEY environment variable."
            raise ValueError(msg)
        return self.alchemy_api_key.get_secret_value()  # type: ignore[union-attr]

    def owned_nfts_url(self, owner: Address) -> httpx.URL | None:
        """Build the getNFTs query URL for ``owner`` from this configuration."""
        key = self.alchemy_api_key.get_secret_value() if self.alchemy_api_key else ""
        return build_owned_nfts_url(self.alchemy_nft_base_url, key, owner)
