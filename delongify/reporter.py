from __future__ import annotations

from typing import Optional

from rich.console import Console


class Reporter:
    """
    User-facing progress notices on the diagnostic stream (stderr).

    These are printed as plain text regardless of the logging level; the
    payload itself never goes through here.
    """

    def __init__(self, console: Optional[Console] = None) -> None:
        self.console = console or Console(stderr=True, soft_wrap=True, highlight=False)

    def _emit(self, message: str) -> None:
        self.console.print(message, markup=False, highlight=False, emoji=False)

    def success(self, url: str) -> None:
        self._emit(f"✓  {url}")

    def rate_limited(self, url: str) -> None:
        self._emit(f"Rate limit exceeded. Skipping url: {url}")

    def done(self, saved_to: Optional[str] = None) -> None:
        self._emit("Done!")
        if saved_to:
            self._emit(f"Saved output to: {saved_to}")


__all__ = ["Reporter"]
