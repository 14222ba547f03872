"""
delongify - batch URL shortener client.

Sends every URL given on the command line to a remote shortening service
concurrently, then prints the shortened URLs in input order as plain lines
or as JSON, optionally into a file.

- `delongify.batch` fans requests out over threads and joins on all of them
- `delongify.client` speaks the `createSlugURLPair` HTTP contract
- `delongify.output` formats and writes the aggregate
"""

from __future__ import annotations

__version__ = "0.1.0"
__license__ = "MIT"

# Public API exports
from delongify.batch import BatchShortener, ResultSlots, shorten_urls
from delongify.client import ShortenerClient
from delongify.config import Settings, get_settings
from delongify.domain.models import BatchResult, ShortenResult
from delongify.errors import (
    DecodeError,
    DelongifyError,
    FileWriteError,
    RateLimitedError,
    SerializationError,
    TransportError,
    UnexpectedStatusError,
)
from delongify.output import format_json, format_plain, render, write_output
from delongify.reporter import Reporter
from delongify.utils.logging import configure_logging, get_logger

__all__ = [
    # Version info
    "__version__",
    "__license__",
    # Configuration
    "Settings",
    "get_settings",
    # Shortening
    "BatchShortener",
    "ResultSlots",
    "ShortenerClient",
    "shorten_urls",
    # Results
    "BatchResult",
    "ShortenResult",
    # Output
    "Reporter",
    "format_json",
    "format_plain",
    "render",
    "write_output",
    # Errors
    "DelongifyError",
    "TransportError",
    "UnexpectedStatusError",
    "DecodeError",
    "RateLimitedError",
    "SerializationError",
    "FileWriteError",
    # Logging
    "configure_logging",
    "get_logger",
]
