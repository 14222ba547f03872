"""
Domain package for delongify.

Exports the wire contract of the shortening service and the result types
shared by the batch shortener and the output formatter.
"""

from delongify.domain.models import (
    BatchResult,
    CreateSlugURLPairResponse,
    ShortenRequest,
    ShortenResult,
    SlugURLPair,
    URLPair,
)

__all__ = [
    "BatchResult",
    "CreateSlugURLPairResponse",
    "ShortenRequest",
    "ShortenResult",
    "SlugURLPair",
    "URLPair",
]
