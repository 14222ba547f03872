"""
Pytest configuration for delongify.

Provides fixtures for:
- Settings pointing at the fake shortening service
- A fake `createSlugURLPair` service served through httpx.MockTransport
- Reporter capture and logging isolation
"""

from __future__ import annotations

import io
import json
import logging
import threading
import time
from typing import Callable, Dict, Generator, List, Optional

import httpx
import pytest
from rich.console import Console

from delongify.client import ShortenerClient
from delongify.config import Settings, get_settings
from delongify.reporter import Reporter

REDIRECT_BASE = "https://dlgfy.xyz"


class FakeShortenerService:
    """
    In-process stand-in for the shortening service.

    Every URL gets slug `s<n>` in arrival order unless a slug, status, raw
    body (with headers), delay or transport error is configured for it.
    """

    def __init__(self) -> None:
        self.slugs: Dict[str, str] = {}
        self.statuses: Dict[str, int] = {}
        self.raw_bodies: Dict[str, bytes] = {}
        self.headers: Dict[str, Dict[str, str]] = {}
        self.delays: Dict[str, float] = {}
        self.errors: Dict[str, Callable[[httpx.Request], Exception]] = {}
        self.before_response: Optional[Callable[[str], None]] = None
        self.requests: List[httpx.Request] = []
        self._lock = threading.Lock()

    @property
    def requested_urls(self) -> List[str]:
        with self._lock:
            return [json.loads(r.content)["url"] for r in self.requests]

    def handler(self, request: httpx.Request) -> httpx.Response:
        url = json.loads(request.content)["url"]
        with self._lock:
            self.requests.append(request)
            counter = len(self.requests)

        if self.before_response is not None:
            self.before_response(url)
        if url in self.delays:
            time.sleep(self.delays[url])
        if url in self.errors:
            raise self.errors[url](request)

        status = self.statuses.get(url, 200)
        if url in self.raw_bodies:
            return httpx.Response(
                status, content=self.raw_bodies[url], headers=self.headers.get(url, {})
            )
        if status != 200:
            return httpx.Response(status, text="")

        slug = self.slugs.get(url, f"s{counter}")
        return httpx.Response(
            200,
            json={
                "result": {"InsertedID": f"id-{counter}"},
                "slugURLPair": {
                    "Slug": slug,
                    "Url": url,
                    "ExpireAt": "2030-01-01T00:00:00Z",
                },
            },
        )

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handler)


@pytest.fixture(autouse=True)
def _isolate_settings_and_logging(monkeypatch) -> Generator[None, None, None]:
    """
    Keep env-driven settings and root logging handlers from leaking between tests.
    """
    for name in (
        "DELONGIFY_API_ENDPOINT",
        "DELONGIFY_REDIRECT_BASE",
        "DELONGIFY_REQUEST_TIMEOUT",
        "DELONGIFY_MAX_WORKERS",
        "LOG_LEVEL",
        "LOG_JSON",
    ):
        monkeypatch.delenv(name, raising=False)
    get_settings.cache_clear()

    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)
    get_settings.cache_clear()


@pytest.fixture
def settings() -> Settings:
    return Settings(api_endpoint="https://dlgfy.xyz", redirect_base=REDIRECT_BASE)


@pytest.fixture
def fake_service() -> FakeShortenerService:
    return FakeShortenerService()


@pytest.fixture
def client(
    settings: Settings, fake_service: FakeShortenerService
) -> Generator[ShortenerClient, None, None]:
    with ShortenerClient(settings=settings, transport=fake_service.transport) as c:
        yield c


@pytest.fixture
def notices() -> io.StringIO:
    """Buffer receiving everything the reporter prints."""
    return io.StringIO()


@pytest.fixture
def reporter(notices: io.StringIO) -> Reporter:
    return Reporter(Console(file=notices, soft_wrap=True, highlight=False, color_system=None))
