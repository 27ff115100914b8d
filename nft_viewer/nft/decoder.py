"""getNFTs response decoding.

Required fields (``ownedNfts``, ``contract.address``, ``id.tokenId``) are
typed strictly and fail the whole decode. Optional fields are captured as
untyped JSON and narrowed per record: anything missing, null or of the wrong
type becomes ``None`` for that record alone.
"""

from __future__ import annotations

from typing import Any

import msgspec

from nft_viewer.nft.errors import DecodeError
from nft_viewer.nft.models import NFTRecord, OwnedNFTPage


class _Contract(msgspec.Struct):
    address: str
    metadata: Any = None


class _TokenRef(msgspec.Struct, rename="camel"):
    token_id: str


class _OwnedNFT(msgspec.Struct):
    contract: _Contract
    id: _TokenRef
    title: Any = None
    metadata: Any = None


class _OwnedNFTsResponse(msgspec.Struct, rename="camel"):
    owned_nfts: list[_OwnedNFT]
    total_count: Any = None
    page_key: Any = None


_decoder = msgspec.json.Decoder(_OwnedNFTsResponse)


def _optional_str(value: Any) -> str | None:
    return value if isinstance(value, str) else None


def _optional_member(obj: Any, key: str) -> str | None:
    if not isinstance(obj, dict):
        return None
    return _optional_str(obj.get(key))


def _optional_int(value: Any) -> int | None:
    if isinstance(value, bool) or not isinstance(value, int):
        return None
    return value


def _to_record(raw: _OwnedNFT) -> NFTRecord:
    return NFTRecord(
        contract_address=raw.contract.address,
        contract_name=_optional_member(raw.contract.metadata, "name"),
        token_id=raw.id.token_id,
        title=_optional_str(raw.title),
        display_name=_optional_member(raw.metadata, "name"),
        image_ref=_optional_member(raw.metadata, "image"),
    )


def decode_owned_nfts_page(payload: bytes | str) -> OwnedNFTPage:
    """Decode a getNFTs response body.

    Args:
        payload: Raw JSON response body

    Returns:
        Page with records in response order plus upstream paging hints

    Raises:
        DecodeError: If the JSON is malformed or a required field is missing
    """
    try:
        response = _decoder.decode(payload)
    except (msgspec.ValidationError, msgspec.DecodeError) as e:
        raise DecodeError(str(e)) from e

    return OwnedNFTPage(
        records=tuple(_to_record(raw) for raw in response.owned_nfts),
        total_count=_optional_int(response.total_count),
        page_key=_optional_str(response.page_key),
    )


def decode_owned_nfts(payload: bytes | str) -> list[NFTRecord]:
    """Decode a getNFTs response body into its ordered records."""
    return list(decode_owned_nfts_page(payload).records)
