"""Error taxonomy for the fetch pipeline.

Every error ends the current fetch attempt only; retries are user-initiated.
"""

from __future__ import annotations


class NFTViewerError(Exception):
    """Base exception for NFT fetch errors."""


class InputError(NFTViewerError):
    """Raised when the owner address cannot be turned into a query URL."""


class TransportError(NFTViewerError):
    """Raised on network failure or a non-200 response."""

    def __init__(self, message: str, *, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class DecodeError(NFTViewerError):
    """Raised when the response lacks its top-level shape or a required field."""
