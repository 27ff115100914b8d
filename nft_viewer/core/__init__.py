"""Core types and logging setup."""

from nft_viewer.core.logging import configure_logging, redact_api_key, redact_api_keys
from nft_viewer.core.types import Address, NFTKey, TokenId

__all__ = [
    "Address",
    "NFTKey",
    "TokenId",
    "configure_logging",
    "redact_api_key",
    "redact_api_keys",
]
