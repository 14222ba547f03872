"""
HTTP client for the shortening service.

Wraps a single `httpx.Client` that is shared by all batch workers and maps
every way a call can go wrong onto the delongify error taxonomy.
"""

from __future__ import annotations

from typing import Optional

import httpx
from pydantic import ValidationError

from delongify.config import Settings, get_settings
from delongify.domain.models import CreateSlugURLPairResponse, ShortenRequest
from delongify.errors import (
    DecodeError,
    RateLimitedError,
    SerializationError,
    TransportError,
    UnexpectedStatusError,
)
from delongify.utils.logging import get_logger

log = get_logger(__name__)


class ShortenerClient:
    """
    Thin client for `POST <endpoint>/createSlugURLPair`.

    Parameters
    ----------
    settings : Settings | None
        Service location and timeout. Defaults to the cached settings.
    transport : httpx.BaseTransport | None
        Optional transport override, used by tests to fake the service.
    """

    def __init__(
        self,
        settings: Optional[Settings] = None,
        transport: Optional[httpx.BaseTransport] = None,
    ) -> None:
        self.settings = settings or get_settings()
        # Created up front: workers share it from many threads.
        self._client = httpx.Client(timeout=self.settings.request_timeout, transport=transport)

    def make_short_url(self, slug: str) -> str:
        return f"{self.settings.redirect_base}/{slug}"

    def create_slug_url_pair(self, url: str) -> CreateSlugURLPairResponse:
        """
        Ask the service for a slug for `url`.

        Raises
        ------
        RateLimitedError
            On 429; the body is ignored.
        UnexpectedStatusError
            On any status other than 200 and 429.
        TransportError
            When the request could not be sent or the response not received.
        DecodeError
            When a 200 body is not a valid `createSlugURLPair` response or its
            content encoding is broken.
        SerializationError
            When `url` cannot be encoded as UTF-8 JSON.
        """
        try:
            body = ShortenRequest(url=url).model_dump()
            response = self._client.post(self.settings.create_endpoint, json=body)
        except (UnicodeEncodeError, ValidationError) as exc:
            raise SerializationError(f"Request body for {url!r} is not valid UTF-8: {exc}") from exc
        except httpx.DecodingError as exc:
            raise DecodeError(f"Undecodable response for {url}: {exc}", url=url) from exc
        except (httpx.RequestError, httpx.InvalidURL) as exc:
            raise TransportError(f"Request for {url} failed: {exc}", url=url) from exc

        if response.status_code == httpx.codes.TOO_MANY_REQUESTS:
            raise RateLimitedError(url)
        if response.status_code != httpx.codes.OK:
            raise UnexpectedStatusError(response.status_code, url)

        try:
            decoded = CreateSlugURLPairResponse.model_validate_json(response.content)
        except ValidationError as exc:
            raise DecodeError(f"Malformed response for {url}: {exc}", url=url) from exc

        log.debug(
            "Slug created",
            extra={
                "url": url,
                "slug": decoded.slug_url_pair.slug,
                "expire_at": decoded.slug_url_pair.expire_at,
            },
        )
        return decoded

    def shorten(self, url: str) -> str:
        """Return the shortened URL for `url`."""
        decoded = self.create_slug_url_pair(url)
        return self.make_short_url(decoded.slug_url_pair.slug)

    def close(self) -> None:
        self._client.close()

    def __enter__(self) -> "ShortenerClient":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        del exc_type, exc, tb
        self.close()


__all__ = ["ShortenerClient"]
