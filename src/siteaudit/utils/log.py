"""Logging setup for command-line runs."""

import logging

from rich.console import Console
from rich.logging import RichHandler


def configure_logging(verbose: bool = False, console: Console | None = None) -> None:
    """Route log records through rich; INFO when verbose, WARNING otherwise."""
    handler = RichHandler(
        console=console or Console(stderr=True),
        show_path=False,
        rich_tracebacks=verbose,
    )
    logging.basicConfig(
        level=logging.INFO if verbose else logging.WARNING,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[handler],
        force=True,
    )
    # httpx logs every request at INFO
    logging.getLogger("httpx").setLevel(logging.WARNING)
