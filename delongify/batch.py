"""
Concurrent batch shortening.

Every input URL becomes one unit of work on a thread worker. Units write
their result into a pre-sized ResultSlots container at their own input
index, so the returned BatchResult follows input order no matter which
request finishes first.

Failure policy:
- 429 for a URL leaves an empty result at that index and the batch continues.
- Anything else that goes wrong (transport failure, unexpected status,
  malformed body) aborts the whole batch. Siblings that have not started are
  cancelled, in-flight ones discard their result, and the error is re-raised
  from `shorten_all` once every worker has returned.

Usage:
    from delongify.batch import shorten_urls

    batch = shorten_urls(["http://a.com", "http://b.com"])
    print(batch.shortened_urls)
"""

from __future__ import annotations

import threading
import time
from concurrent.futures import FIRST_EXCEPTION, Future, ThreadPoolExecutor, wait
from typing import List, Optional, Sequence

import httpx

from delongify.client import ShortenerClient
from delongify.config import Settings, get_settings
from delongify.domain.models import BatchResult
from delongify.errors import DelongifyError, RateLimitedError
from delongify.reporter import Reporter
from delongify.utils.logging import get_logger

log = get_logger(__name__)


class ResultSlots:
    """
    Fixed-size, write-once result container shared by the workers.

    The lock only guards index assignment; each worker owns exactly one index.
    """

    def __init__(self, size: int) -> None:
        self._values: List[Optional[str]] = [None] * size
        self._lock = threading.Lock()

    def __len__(self) -> int:
        return len(self._values)

    def set(self, index: int, value: str) -> None:
        with self._lock:
            if self._values[index] is not None:
                raise RuntimeError(f"Result slot {index} already set")
            self._values[index] = value

    def snapshot(self) -> List[str]:
        with self._lock:
            missing = [i for i, v in enumerate(self._values) if v is None]
            if missing:
                raise RuntimeError(f"Result slots never filled: {missing}")
            return list(self._values)  # type: ignore[arg-type]


class BatchShortener:
    """
    Fan out one shortening request per URL and join on all of them.

    Parameters
    ----------
    client : ShortenerClient
        Shared HTTP client; not closed by the shortener.
    reporter : Reporter | None
        Destination of the per-URL notices.
    max_workers : int | None
        Upper bound on concurrent requests. None means one worker per URL.
    """

    def __init__(
        self,
        client: ShortenerClient,
        reporter: Optional[Reporter] = None,
        max_workers: Optional[int] = None,
    ) -> None:
        if max_workers is not None and max_workers < 1:
            raise ValueError("max_workers must be >= 1")
        self.client = client
        self.reporter = reporter or Reporter()
        self.max_workers = max_workers

    def _worker_count(self, total: int) -> int:
        if self.max_workers is None:
            return total
        return min(self.max_workers, total)

    def _shorten_one(
        self,
        index: int,
        url: str,
        slots: ResultSlots,
        cancelled: threading.Event,
    ) -> None:
        if cancelled.is_set():
            return
        try:
            shortened = self.client.shorten(url)
        except RateLimitedError:
            if cancelled.is_set():
                return
            slots.set(index, "")
            log.info("Rate limited, skipping", extra={"url": url, "index": index})
            self.reporter.rate_limited(url)
            return
        except DelongifyError:
            cancelled.set()
            raise

        if cancelled.is_set():
            return
        slots.set(index, shortened)
        self.reporter.success(url)

    def shorten_all(self, urls: Sequence[str]) -> BatchResult:
        """
        Shorten every URL concurrently and return results in input order.

        Raises
        ------
        DelongifyError
            The first fatal error raised by any unit (lowest input index among
            the units that failed). No partial result is returned.
        """
        urls = list(urls)
        if not urls:
            return BatchResult()

        slots = ResultSlots(len(urls))
        cancelled = threading.Event()
        workers = self._worker_count(len(urls))
        log.info("Dispatching batch", extra={"urls": len(urls), "workers": workers})
        start = time.perf_counter()

        with ThreadPoolExecutor(max_workers=workers, thread_name_prefix="delongify") as pool:
            futures: List[Future[None]] = [
                pool.submit(self._shorten_one, index, url, slots, cancelled)
                for index, url in enumerate(urls)
            ]
            _, pending = wait(futures, return_when=FIRST_EXCEPTION)
            if pending:
                cancelled.set()
                for future in pending:
                    future.cancel()
        # Leaving the executor joins every worker that was already running.

        failures = [
            (index, future.exception())
            for index, future in enumerate(futures)
            if not future.cancelled() and future.exception() is not None
        ]
        if failures:
            index, error = failures[0]
            log.error(
                "Batch aborted",
                extra={"url": urls[index], "index": index, "error": str(error)},
            )
            raise error  # type: ignore[misc]

        batch = BatchResult.from_pairs(urls, slots.snapshot())
        log.info(
            "Batch complete",
            extra={
                "urls": len(batch),
                "skipped": batch.skipped_count,
                "duration_seconds": round(time.perf_counter() - start, 3),
            },
        )
        return batch


def shorten_urls(
    urls: Sequence[str],
    settings: Optional[Settings] = None,
    reporter: Optional[Reporter] = None,
    transport: Optional[httpx.BaseTransport] = None,
) -> BatchResult:
    """
    Build a client from settings, shorten `urls` and close the client.
    """
    settings = settings or get_settings()
    with ShortenerClient(settings=settings, transport=transport) as client:
        shortener = BatchShortener(client, reporter=reporter, max_workers=settings.max_workers)
        return shortener.shorten_all(urls)


__all__ = ["BatchShortener", "ResultSlots", "shorten_urls"]
