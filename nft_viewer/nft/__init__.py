"""NFT fetch pipeline for the Alchemy NFT API."""

from .alchemy_client import AlchemyNFTClient, get_wallet_nfts
from .config import AlchemyConfig
from .decoder import decode_owned_nfts, decode_owned_nfts_page
from .errors import DecodeError, InputError, NFTViewerError, TransportError
from .identity import nft_identity
from .images import resolve_image_url
from .models import NFTRecord, OwnedNFTPage
from .urls import build_owned_nfts_url

__all__ = [
    "AlchemyConfig",
    "AlchemyNFTClient",
    "DecodeError",
    "InputError",
    "NFTRecord",
    "NFTViewerError",
    "OwnedNFTPage",
    "TransportError",
    "build_owned_nfts_url",
    "decode_owned_nfts",
    "decode_owned_nfts_page",
    "get_wallet_nfts",
    "nft_identity",
    "resolve_image_url",
]
