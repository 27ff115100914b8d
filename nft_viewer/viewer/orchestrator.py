"""Fetch orchestration: owns the request lifecycle for one viewer session.

Each fetch takes a generation number when it starts. A result is applied only
if its generation is still the latest one, so a slow superseded request can
never overwrite the state produced by a newer one.
"""

from __future__ import annotations

import asyncio
from collections.abc import Callable
from typing import Protocol, TypeAlias

import structlog

from nft_viewer.core.types import Address
from nft_viewer.nft.alchemy_client import AlchemyNFTClient, short_address
from nft_viewer.nft.config import AlchemyConfig
from nft_viewer.nft.errors import DecodeError, InputError, TransportError
from nft_viewer.nft.images import DEFAULT_GATEWAY_HOST
from nft_viewer.nft.models import NFTRecord, OwnedNFTPage
from nft_viewer.viewer.cards import NFTCard
from nft_viewer.viewer.state import (
    EMPTY_ADDRESS_MESSAGE,
    FETCH_FAILED_MESSAGE,
    INVALID_ADDRESS_MESSAGE,
    ErrorState,
    FetchState,
    Idle,
    Loaded,
    Loading,
    decode_error_message,
)

log = structlog.get_logger()

StateListener: TypeAlias = Callable[[FetchState], None]


class NFTSource(Protocol):
    """Anything that can fetch the NFTs owned by an address."""

    async def get_owned_nfts(self, owner: Address) -> OwnedNFTPage:
        """Fetch one page of owned NFTs.

        Raises:
            InputError: If the address cannot be queried
            TransportError: On network failure or non-200 status
            DecodeError: If the payload lacks required fields
        """
        ...


class NFTFetchOrchestrator:
    """Single-session state machine: Idle -> Loading -> Loaded | ErrorState."""

    def __init__(
        self,
        source: NFTSource,
        *,
        gateway_host: str = DEFAULT_GATEWAY_HOST,
    ):
        self._source = source
        self.gateway_host = gateway_host
        self.wallet_address: Address = ""
        self._state: FetchState = Idle()
        self._generation = 0
        self._task: asyncio.Task[FetchState] | None = None
        self._listeners: list[StateListener] = []

    @classmethod
    def from_config(cls, config: AlchemyConfig | None = None) -> NFTFetchOrchestrator:
        """Wire an orchestrator to the Alchemy client."""
        config = config or AlchemyConfig.from_env()
        return cls(AlchemyNFTClient(config), gateway_host=config.ipfs_gateway_host)

    @property
    def state(self) -> FetchState:
        return self._state

    @property
    def is_loading(self) -> bool:
        return isinstance(self._state, Loading)

    @property
    def error_message(self) -> str | None:
        return self._state.message if isinstance(self._state, ErrorState) else None

    @property
    def records(self) -> tuple[NFTRecord, ...]:
        return self._state.records if isinstance(self._state, Loaded) else ()

    @property
    def is_empty_result(self) -> bool:
        """True when a fetch succeeded for a non-empty address but found nothing."""
        return (
            isinstance(self._state, Loaded)
            and not self._state.records
            and bool(self._state.address)
        )

    def cards(self) -> list[NFTCard]:
        """Display cards for the loaded records, derived on each call."""
        return [NFTCard.from_record(record, self.gateway_host) for record in self.records]

    def subscribe(self, listener: StateListener) -> Callable[[], None]:
        """Register ``listener`` for state changes; returns an unsubscribe callable."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _set_state(self, state: FetchState) -> None:
        self._state = state
        for listener in list(self._listeners):
            listener(state)

    async def fetch(self, address: Address | None = None) -> FetchState:
        """Fetch the NFTs of ``address`` (or the current ``wallet_address``).

        Returns:
            The state after this call; for a superseded fetch, the newer state
        """
        if address is not None:
            self.wallet_address = address
        owner = self.wallet_address

        self._generation += 1
        generation = self._generation

        if not owner.strip():
            log.info("viewer.fetch_rejected", reason="empty_address")
            self._set_state(ErrorState(EMPTY_ADDRESS_MESSAGE))
            return self._state

        self._set_state(Loading(owner))
        log.info("viewer.fetch_started", wallet=short_address(owner), generation=generation)

        result: FetchState
        try:
            page = await self._source.get_owned_nfts(owner)
        except InputError:
            result = ErrorState(INVALID_ADDRESS_MESSAGE)
        except TransportError:
            result = ErrorState(FETCH_FAILED_MESSAGE)
        except DecodeError as e:
            result = ErrorState(decode_error_message(e))
        else:
            result = Loaded(address=owner, records=page.records)

        if generation != self._generation:
            log.debug(
                "viewer.fetch_superseded",
                generation=generation,
                latest=self._generation,
            )
            return self._state

        self._set_state(result)
        log.info(
            "viewer.fetch_finished",
            generation=generation,
            state=type(result).__name__,
        )
        return result

    def trigger_fetch(self) -> asyncio.Task[FetchState]:
        """Start a fetch for ``wallet_address``, cancelling any fetch in flight.

        Must be called from a running event loop.
        """
        if self._task is not None and not self._task.done():
            self._task.cancel()
        self._task = asyncio.create_task(self.fetch())
        return self._task
