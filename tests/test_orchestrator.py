"""Tests for the fetch state machine.

Covers:
- Empty address handling (no network call)
- Error mapping for each failure kind
- Superseded fetches never overwriting newer state
- Display cards derived from loaded records
"""

from __future__ import annotations

import asyncio

import pytest

from nft_viewer.nft.errors import DecodeError, InputError, TransportError
from nft_viewer.nft.models import NFTRecord, OwnedNFTPage
from nft_viewer.viewer.cards import NFTCard
from nft_viewer.viewer.orchestrator import NFTFetchOrchestrator
from nft_viewer.viewer.state import ErrorState, FetchState, Idle, Loaded, Loading


def _page(*token_ids: str, contract: str = "0xabc") -> OwnedNFTPage:
    return OwnedNFTPage(
        records=tuple(NFTRecord(contract_address=contract, token_id=t) for t in token_ids)
    )


class StubSource:
    """Returns a canned page, or raises a canned error."""

    def __init__(self, page: OwnedNFTPage | None = None, error: Exception | None = None) -> None:
        self.page = page or OwnedNFTPage()
        self.error = error
        self.calls: list[str] = []

    async def get_owned_nfts(self, owner: str) -> OwnedNFTPage:
        self.calls.append(owner)
        if self.error is not None:
            raise self.error
        return self.page


class GatedSource:
    """Blocks each owner's request until its gate is opened."""

    def __init__(self, pages: dict[str, OwnedNFTPage]) -> None:
        self.pages = pages
        self.gates = {owner: asyncio.Event() for owner in pages}
        self.calls: list[str] = []

    async def get_owned_nfts(self, owner: str) -> OwnedNFTPage:
        self.calls.append(owner)
        await self.gates[owner].wait()
        return self.pages[owner]


def test_starts_idle() -> None:
    orchestrator = NFTFetchOrchestrator(StubSource())
    assert orchestrator.state == Idle()
    assert not orchestrator.is_loading
    assert orchestrator.error_message is None
    assert orchestrator.records == ()
    assert orchestrator.cards() == []


@pytest.mark.asyncio
@pytest.mark.parametrize("address", ["", "   "])
async def test_empty_address_never_hits_network(address: str) -> None:
    source = StubSource(_page("1"))
    orchestrator = NFTFetchOrchestrator(source)

    state = await orchestrator.fetch(address)

    assert source.calls == []
    assert state == ErrorState("Please enter a wallet address")
    assert orchestrator.error_message == "Please enter a wallet address"


@pytest.mark.asyncio
async def test_success_loads_records_in_order() -> None:
    orchestrator = NFTFetchOrchestrator(StubSource(_page("3", "1", "2")))

    state = await orchestrator.fetch("0xowner")

    assert isinstance(state, Loaded)
    assert state.address == "0xowner"
    assert [r.token_id for r in orchestrator.records] == ["3", "1", "2"]
    assert orchestrator.wallet_address == "0xowner"


@pytest.mark.asyncio
async def test_empty_wallet_is_loaded_with_no_records() -> None:
    orchestrator = NFTFetchOrchestrator(StubSource(OwnedNFTPage()))

    state = await orchestrator.fetch("0xEMPTY")

    assert state == Loaded(address="0xEMPTY", records=())
    assert orchestrator.is_empty_result


@pytest.mark.asyncio
@pytest.mark.parametrize(
    ("error", "message"),
    [
        (InputError("bad url"), "Invalid wallet address"),
        (TransportError("HTTP 500", status_code=500), "Failed to fetch NFTs"),
        (DecodeError("Object missing required field `ownedNfts`"),
         "Error: Object missing required field `ownedNfts`"),
    ],
)
async def test_errors_map_to_messages(error: Exception, message: str) -> None:
    orchestrator = NFTFetchOrchestrator(StubSource(error=error))

    state = await orchestrator.fetch("0xowner")

    assert state == ErrorState(message)
    assert orchestrator.records == ()
    assert not orchestrator.is_empty_result


@pytest.mark.asyncio
async def test_refetch_discards_previous_records_while_loading() -> None:
    source = GatedSource({"0xa": _page("1"), "0xb": _page("2")})
    orchestrator = NFTFetchOrchestrator(source)

    source.gates["0xa"].set()
    await orchestrator.fetch("0xa")
    assert len(orchestrator.records) == 1

    task = asyncio.create_task(orchestrator.fetch("0xb"))
    await asyncio.sleep(0)
    assert orchestrator.state == Loading("0xb")
    assert orchestrator.records == ()
    assert orchestrator.error_message is None

    source.gates["0xb"].set()
    await task
    assert [r.token_id for r in orchestrator.records] == ["2"]


@pytest.mark.asyncio
async def test_superseded_fetch_does_not_overwrite_newer_result() -> None:
    source = GatedSource({"0xa": _page("a1", "a2"), "0xb": _page("b1")})
    orchestrator = NFTFetchOrchestrator(source)

    task_a = asyncio.create_task(orchestrator.fetch("0xa"))
    await asyncio.sleep(0)
    task_b = asyncio.create_task(orchestrator.fetch("0xb"))
    await asyncio.sleep(0)
    assert source.calls == ["0xa", "0xb"]

    source.gates["0xb"].set()
    state_b = await task_b
    assert state_b == Loaded(address="0xb", records=_page("b1").records)

    source.gates["0xa"].set()
    state_a = await task_a

    assert state_a == state_b
    assert orchestrator.state == state_b


@pytest.mark.asyncio
async def test_empty_address_supersedes_in_flight_fetch() -> None:
    source = GatedSource({"0xa": _page("1")})
    orchestrator = NFTFetchOrchestrator(source)

    task = asyncio.create_task(orchestrator.fetch("0xa"))
    await asyncio.sleep(0)
    await orchestrator.fetch("")

    source.gates["0xa"].set()
    await task
    assert orchestrator.state == ErrorState("Please enter a wallet address")


@pytest.mark.asyncio
async def test_trigger_fetch_cancels_in_flight_task() -> None:
    source = GatedSource({"0xa": _page("1"), "0xb": _page("2")})
    orchestrator = NFTFetchOrchestrator(source)

    orchestrator.wallet_address = "0xa"
    first = orchestrator.trigger_fetch()
    await asyncio.sleep(0)

    orchestrator.wallet_address = "0xb"
    second = orchestrator.trigger_fetch()

    with pytest.raises(asyncio.CancelledError):
        await first

    source.gates["0xb"].set()
    state = await second
    assert state == Loaded(address="0xb", records=_page("2").records)


@pytest.mark.asyncio
async def test_listeners_see_every_transition() -> None:
    orchestrator = NFTFetchOrchestrator(StubSource(_page("1")))
    seen: list[FetchState] = []
    unsubscribe = orchestrator.subscribe(seen.append)

    await orchestrator.fetch("0xowner")
    unsubscribe()
    await orchestrator.fetch("0xowner")

    assert [type(s) for s in seen] == [Loading, Loaded]


@pytest.mark.asyncio
async def test_cards_are_derived_from_records() -> None:
    records = (
        NFTRecord(
            contract_address="0xabc",
            token_id="1",
            contract_name="Apes",
            title="Ape #1",
            display_name="Ape One",
            image_ref="ipfs://QmApe",
        ),
        NFTRecord(contract_address="0xabc", token_id="2", title="Ape #2"),
        NFTRecord(contract_address="0xabc", token_id="3", image_ref="not a url"),
    )
    orchestrator = NFTFetchOrchestrator(
        StubSource(OwnedNFTPage(records=records)), gateway_host="gateway.example"
    )

    await orchestrator.fetch("0xowner")

    assert orchestrator.cards() == [
        NFTCard(id="0xabc1", title="Ape One", collection="Apes",
                image_url="https://gateway.example/ipfs/QmApe"),
        NFTCard(id="0xabc2", title="Ape #2", collection="Unknown Collection", image_url=None),
        NFTCard(id="0xabc3", title="Unknown NFT", collection="Unknown Collection", image_url=None),
    ]


def test_from_config_wires_alchemy_client() -> None:
    from pydantic import SecretStr

    from nft_viewer.nft.alchemy_client import AlchemyNFTClient
    from nft_viewer.nft.config import AlchemyConfig

    config = AlchemyConfig(
        alchemy_api_key=SecretStr("k"),
        ipfs_gateway_host="gateway.example",
        _env_file=None,
    )  # type: ignore[call-arg]
    orchestrator = NFTFetchOrchestrator.from_config(config)

    assert isinstance(orchestrator._source, AlchemyNFTClient)
    assert orchestrator.gateway_host == "gateway.example"
    assert orchestrator.state == Idle()


@pytest.mark.asyncio
async def test_overlong_address_is_an_invalid_address() -> None:
    import httpx
    from pydantic import SecretStr

    from nft_viewer.nft.alchemy_client import AlchemyNFTClient
    from nft_viewer.nft.config import AlchemyConfig

    requests: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        requests.append(request)
        return httpx.Response(200, json={"ownedNfts": []})

    config = AlchemyConfig(alchemy_api_key=SecretStr("k"), _env_file=None)  # type: ignore[call-arg]
    client = AlchemyNFTClient(config, transport=httpx.MockTransport(handler))
    orchestrator = NFTFetchOrchestrator(client)

    state = await orchestrator.fetch("0x" + "a" * 70_000)

    assert state == ErrorState("Invalid wallet address")
    assert orchestrator.state == state
    assert requests == []
