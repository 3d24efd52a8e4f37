"""Logging setup for the CLI and the embedded uvicorn server."""
from __future__ import annotations

import logging

from rich.console import Console
from rich.logging import RichHandler


def configure_logging(verbose: bool = False, console: Console | None = None) -> None:
    """Route stdlib logging (ours and uvicorn's) through a rich handler."""
    handler = RichHandler(
        console=console,
        show_path=verbose,
        rich_tracebacks=True,
        markup=False,
    )
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[handler],
        force=True,
    )
    # uvicorn.access logs every request; only keep it when asked for
    logging.getLogger("uvicorn.access").setLevel(
        logging.INFO if verbose else logging.WARNING
    )
