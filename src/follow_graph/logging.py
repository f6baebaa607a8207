from __future__ import annotations

import logging
from typing import Optional

from rich.console import Console
from rich.logging import RichHandler


def configure_logging(level: int = logging.INFO, *, verbose: bool = False) -> None:
    """Install a single Rich handler on the root logger."""
    root = logging.getLogger()
    if verbose:
        root.setLevel(logging.DEBUG)
    if root.handlers:
        return

    console = Console(stderr=True)
    handler = RichHandler(console=console, rich_tracebacks=True, markup=False, show_path=False)
    logging.basicConfig(
        level=logging.DEBUG if verbose else level,
        format="%(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        handlers=[handler],
    )


def get_logger(name: Optional[str] = None) -> logging.Logger:
    configure_logging()
    return logging.getLogger(name)


__all__ = ["configure_logging", "get_logger"]
