"""
Alchemy NFT API v2 client for fetching the NFTs owned by a wallet.

One GET per call, no retries and no pagination: the first page the API
returns is the result.
"""

from __future__ import annotations

import httpx
import structlog
from httpx import AsyncClient

from nft_viewer.core.logging import redact_api_key
from nft_viewer.core.types import Address
from nft_viewer.nft.config import AlchemyConfig
from nft_viewer.nft.decoder import decode_owned_nfts_page
from nft_viewer.nft.errors import DecodeError, InputError, TransportError
from nft_viewer.nft.models import NFTRecord, OwnedNFTPage

log = structlog.get_logger()


def short_address(address: Address) -> str:
    """Shorten an address for log output."""
    return address[:10] + "..." if len(address) > 10 else address


class AlchemyNFTClient:
    """
    Client for the Alchemy ``getNFTs`` endpoint.

    Raises the pipeline's error taxonomy instead of returning sentinel values
    so callers can tell invalid input, transport failures and bad payloads
    apart.
    """

    def __init__(
        self,
        config: AlchemyConfig | None = None,
        *,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        """
        Initialize the client.

        Args:
            config: Endpoint configuration (loaded from env when omitted)
            transport: Optional httpx transport, used by tests
        """
        self.config = config or AlchemyConfig.from_env()
        self._transport = transport

        self.headers = {
            "Accept": "application/json",
        }

        if not self.config.is_configured():
            log.warning("alchemy.api_key_missing", hint="Set ALCHEMY_API_KEY in .env")

    async def get_owned_nfts(self, owner: Address) -> OwnedNFTPage:
        """
        Fetch the NFTs owned by a wallet address.

        Args:
            owner: Wallet address, passed to the API unvalidated

        Returns:
            Decoded page of NFT records in API order

        Raises:
            InputError: If no valid query URL can be built
            TransportError: On network failure or a non-200 status
            DecodeError: If the body lacks a required field
        """
        url = self.config.owned_nfts_url(owner)
        if url is None:
            log.warning("alchemy.invalid_url", wallet=short_address(owner))
            msg = f"Cannot build getNFTs URL for owner {owner!r}"
            raise InputError(msg)

        try:
            async with AsyncClient(
                timeout=self.config.request_timeout,
                transport=self._transport,
            ) as client:
                response = await client.get(url, headers=self.headers)
        except httpx.HTTPError as e:
            detail = redact_api_key(str(e))
            log.error("alchemy.request_failed", error_type=type(e).__name__, error=detail)
            raise TransportError(detail) from e

        if response.status_code != 200:
            log.error("alchemy.api_error", status=response.status_code)
            msg = f"getNFTs returned HTTP {response.status_code}"
            raise TransportError(msg, status_code=response.status_code)

        try:
            page = decode_owned_nfts_page(response.content)
        except DecodeError as e:
            log.error("alchemy.decode_failed", error=str(e))
            raise

        log.info(
            "alchemy.nfts_fetched",
            wallet=short_address(owner),
            count=len(page.records),
        )
        if page.is_truncated:
            log.warning(
                "alchemy.results_truncated",
                wallet=short_address(owner),
                returned=len(page.records),
                total=page.total_count,
            )

        return page


async def get_wallet_nfts(
    owner: Address,
    config: AlchemyConfig | None = None,
    *,
    transport: httpx.AsyncBaseTransport | None = None,
) -> list[NFTRecord]:
    """
    Convenience function to fetch the NFTs of a wallet.

    Args:
        owner: Wallet address
        config: Optional configuration (loaded from env when omitted)
        transport: Optional httpx transport

    Returns:
        NFTs owned by the wallet, in API order
    """
    client = AlchemyNFTClient(config, transport=transport)
    page = await client.get_owned_nfts(owner)
    return list(page.records)
