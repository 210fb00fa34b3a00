"""Logging utilities for the fx_converter package."""

import logging

from rich.console import Console
from rich.logging import RichHandler

_CONFIGURED = False


def configure_logging(level: int = logging.INFO) -> None:
    """Route package logs through rich on stderr. Safe to call repeatedly."""
    global _CONFIGURED
    root = logging.getLogger("fx_converter")
    if not _CONFIGURED:
        handler = RichHandler(console=Console(stderr=True), show_path=False)
        handler.setFormatter(logging.Formatter("%(message)s"))
        root.addHandler(handler)
        _CONFIGURED = True
    root.setLevel(level)


def get_logger(name: str = "fx_converter") -> logging.Logger:
    """Return a package logger, configuring the handler on first use."""
    if not _CONFIGURED:
        configure_logging()
    return logging.getLogger(name)
