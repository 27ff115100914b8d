"""Viewer session: fetch state machine and display cards."""

from .cards import NFTCard
from .orchestrator import NFTFetchOrchestrator, NFTSource
from .state import ErrorState, FetchState, Idle, Loaded, Loading

__all__ = [
    "ErrorState",
    "FetchState",
    "Idle",
    "Loaded",
    "Loading",
    "NFTCard",
    "NFTFetchOrchestrator",
    "NFTSource",
]
