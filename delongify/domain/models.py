"""
Domain models for delongify.

Covers the wire contract of the shortening service (request body and the
`createSlugURLPair` response) and the per-URL and per-batch results handed
to the output formatter.
"""
from __future__ import annotations

from collections.abc import Sequence
from typing import Iterable, Iterator, List, Optional, Tuple, overload

from pydantic import BaseModel, ConfigDict, Field


class ShortenRequest(BaseModel):
    """
    Body of a `createSlugURLPair` call.
    """

    url: str = Field(..., description="The original URL to shorten.")

    model_config = ConfigDict(frozen=True)


class InsertResult(BaseModel):
    inserted_id: str = Field("", alias="InsertedID")

    model_config = ConfigDict(populate_by_name=True)


class SlugURLPair(BaseModel):
    slug: str = Field(..., alias="Slug", description="Identifier appended to the redirect base.")
    url: str = Field("", alias="Url")
    expire_at: str = Field("", alias="ExpireAt")

    model_config = ConfigDict(populate_by_name=True)


class CreateSlugURLPairResponse(BaseModel):
    """
    Decoded 200 response of the shortening service.

    Only `slug_url_pair.slug` is used; the rest is kept for logging.
    """

    result: Optional[InsertResult] = Field(None, alias="result")
    slug_url_pair: SlugURLPair = Field(..., alias="slugURLPair")

    model_config = ConfigDict(populate_by_name=True)


class ShortenResult(BaseModel):
    """
    Outcome for one input URL. `shortened_url` is empty when the item was skipped.
    """

    original_url: str
    shortened_url: str = ""

    model_config = ConfigDict(frozen=True)

    @property
    def skipped(self) -> bool:
        return self.shortened_url == ""


class URLPair(BaseModel):
    """
    One record of the JSON output.
    """

    original_url: str = Field(..., alias="originalUrl")
    new_url: str = Field(..., alias="newUrl")

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    @classmethod
    def from_result(cls, result: ShortenResult) -> "URLPair":
        return cls(original_url=result.original_url, new_url=result.shortened_url)


class BatchResult(Sequence):
    """
    Ordered, immutable results of a batch; index i always belongs to input i.
    """

    __slots__ = ("_results",)

    def __init__(self, results: Iterable[ShortenResult] = ()) -> None:
        self._results: Tuple[ShortenResult, ...] = tuple(results)

    @classmethod
    def from_pairs(cls, original_urls: Iterable[str], shortened_urls: Iterable[str]) -> "BatchResult":
        originals = list(original_urls)
        shortened = list(shortened_urls)
        if len(originals) != len(shortened):
            raise ValueError(
                f"Length mismatch: {len(originals)} original URLs, {len(shortened)} results"
            )
        return cls(
            ShortenResult(original_url=o, shortened_url=s) for o, s in zip(originals, shortened)
        )

    @overload
    def __getitem__(self, index: int) -> ShortenResult: ...

    @overload
    def __getitem__(self, index: slice) -> "BatchResult": ...

    def __getitem__(self, index):
        if isinstance(index, slice):
            return BatchResult(self._results[index])
        return self._results[index]

    def __len__(self) -> int:
        return len(self._results)

    def __iter__(self) -> Iterator[ShortenResult]:
        return iter(self._results)

    def __eq__(self, other: object) -> bool:
        if isinstance(other, BatchResult):
            return self._results == other._results
        return NotImplemented

    def __hash__(self) -> int:
        return hash(self._results)

    def __repr__(self) -> str:
        return f"BatchResult({list(self._results)!r})"

    @property
    def original_urls(self) -> List[str]:
        return [r.original_url for r in self._results]

    @property
    def shortened_urls(self) -> List[str]:
        return [r.shortened_url for r in self._results]

    @property
    def skipped_count(self) -> int:
        return sum(1 for r in self._results if r.skipped)


__all__ = [
    "BatchResult",
    "CreateSlugURLPairResponse",
    "InsertResult",
    "ShortenRequest",
    "ShortenResult",
    "SlugURLPair",
    "URLPair",
]
