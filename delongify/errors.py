"""
Error taxonomy for delongify.

Everything raised on purpose derives from DelongifyError so the CLI can turn
it into a logged message and a non-zero exit status. RateLimitedError is the
only one the batch recovers from; the rest abort the whole run.
"""

from __future__ import annotations

from typing import Optional


class DelongifyError(Exception):
    """Base class for all delongify errors."""


class TransportError(DelongifyError):
    """Sending the request or receiving the response failed."""

    def __init__(self, message: str, url: Optional[str] = None) -> None:
        super().__init__(message)
        self.url = url


class UnexpectedStatusError(TransportError):
    """The service answered with a status other than 200 or 429."""

    def __init__(self, status_code: int, url: str) -> None:
        super().__init__(f"Unexpected status {status_code} while shortening {url}", url=url)
        self.status_code = status_code


class DecodeError(DelongifyError):
    """A 200 response body could not be decoded into a slug."""

    def __init__(self, message: str, url: Optional[str] = None) -> None:
        super().__init__(message)
        self.url = url


class RateLimitedError(DelongifyError):
    """The service answered 429 for a single URL."""

    def __init__(self, url: str) -> None:
        super().__init__(f"Rate limit exceeded for {url}")
        self.url = url


class SerializationError(DelongifyError):
    """The formatter could not encode the batch."""


class FileWriteError(DelongifyError):
    """The output file could not be written."""

    def __init__(self, path: str, reason: str) -> None:
        super().__init__(f"Could not write output to {path}: {reason}")
        self.path = path


__all__ = [
    "DelongifyError",
    "TransportError",
    "UnexpectedStatusError",
    "DecodeError",
    "RateLimitedError",
    "SerializationError",
    "FileWriteError",
]
