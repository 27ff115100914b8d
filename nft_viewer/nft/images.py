"""Image reference resolution for content-addressed (IPFS) storage."""

from __future__ import annotations

from nft_viewer.nft.urls import parse_web_url

IPFS_SCHEME = "ipfs://"
DEFAULT_GATEWAY_HOST = "ipfs.io"


def ipfs_gateway_url(content_hash: str, gateway_host: str = DEFAULT_GATEWAY_HOST) -> str:
    """Return the HTTP gateway URL for an IPFS content hash (not validated)."""
    return f"https://{gateway_host}/ipfs/{content_hash}"


def resolve_image_url(
    image_ref: str | None,
    gateway_host: str = DEFAULT_GATEWAY_HOST,
) -> str | None:
    """Turn a raw metadata image reference into a fetchable URL.

    Args:
        image_ref: Image reference from token metadata
        gateway_host: IPFS gateway host used for ``ipfs://`` references

    Returns:
        Gateway URL for ``ipfs://`` references, the input unchanged if it is
        already an absolute URL, otherwise None

    Examples:
        >>> resolve_image_url("ipfs://abc123")
        'https://ipfs.io/ipfs/abc123'
        >>> resolve_image_url("https://example.com/x.png")
        'https://example.com/x.png'
        >>> resolve_image_url("not a url") is None
        True
    """
    if image_ref is None:
        return None

    if image_ref.startswith(IPFS_SCHEME):
        return ipfs_gateway_url(image_ref.removeprefix(IPFS_SCHEME), gateway_host)

    # On-chain SVG/PNG metadata is commonly inlined as a data URI
    if image_ref.startswith("data:"):
        return image_ref

    if parse_web_url(image_ref) is None:
        return None
    return image_ref
