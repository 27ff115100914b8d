"""Display values derived from a record on demand."""

from __future__ import annotations

from dataclasses import dataclass

from nft_viewer.core.types import NFTKey
from nft_viewer.nft.images import DEFAULT_GATEWAY_HOST, resolve_image_url
from nft_viewer.nft.models import NFTRecord

UNKNOWN_NFT = "Unknown NFT"
UNKNOWN_COLLECTION = "Unknown Collection"


@dataclass(frozen=True)
class NFTCard:
    """What the presentation layer renders for one NFT."""

    id: NFTKey
    title: str
    collection: str
    image_url: str | None

    @classmethod
    def from_record(
        cls,
        record: NFTRecord,
        gateway_host: str = DEFAULT_GATEWAY_HOST,
    ) -> NFTCard:
        # Metadata name wins over the indexer title; only absence falls through
        if record.display_name is not None:
            title = record.display_name
        elif record.title is not None:
            title = record.title
        else:
            title = UNKNOWN_NFT

        return cls(
            id=record.id,
            title=title,
            collection=record.contract_name if record.contract_name is not None else UNKNOWN_COLLECTION,
            image_url=resolve_image_url(record.image_ref, gateway_host),
        )
