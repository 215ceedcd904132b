from __future__ import annotations

import logging

from rich.console import Console
from rich.logging import RichHandler


def rich_handler() -> RichHandler:
    """Rich handler bound to stderr; stdout carries CLI data only."""
    return RichHandler(console=Console(stderr=True), rich_tracebacks=True)


def get_logger(name: str = "refidx_app", level: int = logging.INFO) -> logging.Logger:
    """Return a Rich-configured logger; warnings (e.g. OutOfDomainWarning) are routed into logging."""
    logging.basicConfig(
        level=level,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[rich_handler()],
    )
    logging.captureWarnings(True)
    return logging.getLogger(name)
