"""Normalized NFT records.

Optional fields use ``None`` for "absent"; an empty string coming from the
API is kept as ``""`` so the two cases stay distinguishable.
"""

from __future__ import annotations

import msgspec

from nft_viewer.core.types import Address, NFTKey, TokenId
from nft_viewer.nft.identity import nft_identity


class NFTRecord(msgspec.Struct, frozen=True, kw_only=True):
    """Immutable, display-ready NFT.

    Attributes:
        contract_address: Token contract address
        contract_name: Collection name from contract metadata
        token_id: Token id within the contract
        title: Title reported by the indexer
        display_name: ``name`` from the token metadata
        image_ref: Raw image reference (may be ``ipfs://...``)
    """

    contract_address: Address
    token_id: TokenId
    contract_name: str | None = None
    title: str | None = None
    display_name: str | None = None
    image_ref: str | None = None

    @property
    def id(self) -> NFTKey:
        return nft_identity(self.contract_address, self.token_id)


class OwnedNFTPage(msgspec.Struct, frozen=True, kw_only=True):
    """One decoded getNFTs response.

    ``page_key`` is set by the API when more results exist; they are not
    fetched.
    """

    records: tuple[NFTRecord, ...] = ()
    total_count: int | None = None
    page_key: str | None = None

    @property
    def is_truncated(self) -> bool:
        return self.page_key is not None
