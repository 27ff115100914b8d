"""Query URL construction for the getNFTs endpoint."""

from __future__ import annotations

from urllib.parse import quote

import httpx

from nft_viewer.core.types import Address

API_KEY_PLACEHOLDER = "{api_key}"

_WEB_SCHEMES = frozenset({"http", "https"})


def parse_web_url(raw: str) -> httpx.URL | None:
    """Parse ``raw`` as an absolute http(s) URL, or return None."""
    try:
        url = httpx.URL(raw)
    except (httpx.InvalidURL, TypeError):
        return None
    if url.scheme not in _WEB_SCHEMES or not url.host:
        return None
    return url


def build_owned_nfts_url(base_url: str, api_key: str, owner: Address) -> httpx.URL | None:
    """Build the owned-NFTs query URL.

    Args:
        base_url: Endpoint template, may contain ``{api_key}``
        api_key: Alchemy API key (escaped into the path)
        owner: Wallet address, passed through as the ``owner`` parameter

    Returns:
        The composed URL, or None if the template or result is not a valid URL
    """
    if parse_web_url(base_url) is None:
        return None

    endpoint = base_url.replace(API_KEY_PLACEHOLDER, quote(api_key, safe=""))
    url = parse_web_url(endpoint)
    if url is None:
        return None

    try:
        return url.copy_merge_params({"owner": owner, "withMetadata": "true"})
    except httpx.InvalidURL:
        # e.g. a query over httpx's component length limit
        return None
