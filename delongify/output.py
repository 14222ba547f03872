"""
Output formatting and writing for a finished batch.

Two formats are supported:
- plain: one shortened URL per line in input order, skipped items as empty lines
- json: array of {"originalUrl", "newUrl"} objects, indented with 2 spaces
"""

from __future__ import annotations

import json
import sys
from pathlib import Path
from typing import Optional, TextIO, Union

from delongify.domain.models import BatchResult, URLPair
from delongify.errors import FileWriteError, SerializationError
from delongify.utils.logging import get_logger

log = get_logger(__name__)


def format_plain(batch: BatchResult) -> str:
    return "\n".join(batch.shortened_urls)


def format_json(batch: BatchResult) -> str:
    """
    Pair each original URL with its shortened one and encode as pretty JSON.
    """
    try:
        pairs = [URLPair.from_result(result).model_dump(by_alias=True) for result in batch]
        text = json.dumps(pairs, indent=2, ensure_ascii=False)
        # Lone surrogates survive dumps but not the UTF-8 write.
        text.encode("utf-8")
        return text
    except (TypeError, ValueError) as exc:
        raise SerializationError(f"Could not encode results as JSON: {exc}") from exc


def render(batch: BatchResult, as_json: bool = False) -> str:
    return format_json(batch) if as_json else format_plain(batch)


def write_output(
    text: str,
    path: Optional[Union[str, Path]] = None,
    stream: Optional[TextIO] = None,
) -> None:
    """
    Write formatted output to `path` (overwritten) or to `stream`.

    The file receives `text` exactly; the stream gets a trailing newline.

    Parameters
    ----------
    text : str
        Formatted batch output.
    path : str | Path | None
        Output file. Created if missing, truncated if present.
    stream : TextIO | None
        Stream used when no path is given. Defaults to stdout.
    """
    if path:
        target = Path(path)
        try:
            with target.open("w", encoding="utf-8", newline="") as f:
                f.write(text)
        except (OSError, UnicodeEncodeError) as exc:
            raise FileWriteError(str(target), getattr(exc, "strerror", None) or str(exc)) from exc
        log.info("Output written", extra={"path": str(target), "chars": len(text)})
        return

    out = stream if stream is not None else sys.stdout
    try:
        out.write(text + "\n")
        out.flush()
    except (OSError, UnicodeEncodeError) as exc:
        raise FileWriteError(getattr(out, "name", "<stdout>"), str(exc)) from exc


__all__ = ["format_json", "format_plain", "render", "write_output"]
