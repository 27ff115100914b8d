"""Fetch lifecycle state as a tagged variant.

Exactly one state holds at a time, so combinations such as "loading with an
error showing" cannot be represented.
"""

from __future__ import annotations

from typing import TypeAlias

import msgspec

from nft_viewer.core.types import Address
from nft_viewer.nft.models import NFTRecord

EMPTY_ADDRESS_MESSAGE = "Please enter a wallet address"
INVALID_ADDRESS_MESSAGE = "Invalid wallet address"
FETCH_FAILED_MESSAGE = "Failed to fetch NFTs"


class Idle(msgspec.Struct, frozen=True, tag=True):
    """No fetch requested yet."""


class Loading(msgspec.Struct, frozen=True, tag=True):
    """A fetch for ``address`` is in flight."""

    address: Address


class ErrorState(msgspec.Struct, frozen=True, tag=True):
    """The latest fetch failed; ``message`` is user-facing."""

    message: str


class Loaded(msgspec.Struct, frozen=True, tag=True):
    """The latest fetch succeeded with ``records`` in API order."""

    address: Address
    records: tuple[NFTRecord, ...] = ()


FetchState: TypeAlias = Idle | Loading | ErrorState | Loaded


def decode_error_message(detail: object) -> str:
    return f"Error: {detail}"
