"""Shared type definitions."""

from typing import TypeAlias

# Type aliases
Address: TypeAlias = str
TokenId: TypeAlias = str
NFTKey: TypeAlias = str  # contract address + token id
