"""Structured logging setup.

The Alchemy API key travels in the URL path (``/nft/v2/<key>/getNFTs``), so
anything that may echo a request URL goes through ``redact_api_key``.
"""

from __future__ import annotations

import logging
import re
from collections.abc import MutableMapping
from typing import Any

import structlog

_API_KEY_SEGMENT = re.compile(r"(/nft/v\d+/)[^/?#\s]+")

REDACTED = "***"


def redact_api_key(text: str) -> str:
    """Mask the API key path segment of any Alchemy NFT URL in ``text``."""
    return _API_KEY_SEGMENT.sub(rf"\g<1>{REDACTED}", text)


def redact_api_keys(
    logger: Any, method_name: str, event_dict: MutableMapping[str, Any]
) -> MutableMapping[str, Any]:
    """structlog processor applying ``redact_api_key`` to every string value."""
    for key, value in event_dict.items():
        if isinstance(value, str):
            event_dict[key] = redact_api_key(value)
    return event_dict


def configure_logging(*, json_output: bool = False, level: str = "INFO") -> None:
    """Configure structlog for the viewer process.

    Args:
        json_output: If True, output JSON logs (for production)
        level: Log level (DEBUG, INFO, WARNING, ERROR)
    """
    processors: list[structlog.types.Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        redact_api_keys,
    ]

    if json_output:
        processors.append(structlog.processors.JSONRenderer())
    else:
        processors.append(structlog.dev.ConsoleRenderer())

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(logging.getLevelName(level.upper())),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(),
        cache_logger_on_first_use=True,
    )
