"""Stable per-NFT identity."""

from nft_viewer.core.types import Address, NFTKey, TokenId


def nft_identity(contract_address: Address, token_id: TokenId) -> NFTKey:
    """Return the list identity of an NFT.

    Plain concatenation with no separator, so ("0xA", "B1") and ("0xAB", "1")
    share an id. Kept for compatibility with existing ids.
    """
    return contract_address + token_id
