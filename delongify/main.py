from __future__ import annotations

import sys
from pathlib import Path
from typing import List, Optional

import typer

from delongify import __version__
from delongify.batch import shorten_urls
from delongify.config import get_settings
from delongify.errors import DelongifyError
from delongify.output import render, write_output
from delongify.reporter import Reporter
from delongify.utils.logging import configure_logging, get_logger

log = get_logger(__name__)

app = typer.Typer(
    name="delongify",
    help="Shrinks your url's.",
    add_completion=False,
)


def _version_callback(value: bool) -> None:
    if value:
        typer.echo(f"delongify {__version__}")
        raise typer.Exit()


@app.command()
def shorten(
    ctx: typer.Context,
    urls: Optional[List[str]] = typer.Argument(
        None,
        help="URLs to shorten, in the order they should be printed.",
        show_default=False,
    ),
    as_json: bool = typer.Option(False, "--json", help="Output in json format."),
    output: Optional[Path] = typer.Option(
        None,
        "--output",
        "-o",
        help="Output to file instead of stdout (overwritten if present).",
        dir_okay=False,
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging."),
    version: Optional[bool] = typer.Option(
        None,
        "--version",
        callback=_version_callback,
        is_eager=True,
        help="Show the version and exit.",
    ),
) -> None:
    """
    Shorten every URL concurrently and print the results in input order.
    """
    del version
    if not urls:
        # Rich help prints itself and returns an empty string.
        help_text = ctx.get_help()
        if help_text:
            typer.echo(help_text)
        raise typer.Exit()

    settings = get_settings()
    configure_logging(
        level="DEBUG" if verbose else settings.log_level,
        json_logs=settings.json_logs,
    )
    log.debug(
        "Starting batch",
        extra={"urls": len(urls), "endpoint": settings.create_endpoint, "json": as_json},
    )

    reporter = Reporter()
    try:
        batch = shorten_urls(urls, settings=settings, reporter=reporter)
        text = render(batch, as_json=as_json)
        write_output(text, path=output)
    except DelongifyError as exc:
        log.error(str(exc))
        raise typer.Exit(code=1) from exc

    reporter.done(saved_to=str(output) if output else None)


def main() -> None:
    try:
        app()
    except KeyboardInterrupt:
        typer.echo("Cancelled by user.", err=True)
        sys.exit(130)


if __name__ == "__main__":
    main()
