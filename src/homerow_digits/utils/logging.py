"""Logging setup shared by the CLI entry points."""

from __future__ import annotations

import logging
import sys

DEFAULT_FORMAT = "%(levelname)s %(name)s: %(message)s"


def setup_logging(level: str | int = "WARNING", format_string: str | None = None) -> None:
    """Configure the ``homerow_digits`` logger tree to write to stderr.

    Safe to call repeatedly: a handler from an earlier call is replaced
    by one bound to the current ``sys.stderr``.

    Args:
        level: Logging level name or number (DEBUG, INFO, WARNING, ERROR)
        format_string: Custom format string (uses default if None)
    """
    if isinstance(level, str):
        level = getattr(logging, level.upper())

    root = logging.getLogger("homerow_digits")
    root.setLevel(level)
    for old in [h for h in root.handlers if type(h) is logging.StreamHandler]:
        root.removeHandler(old)
    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter(format_string or DEFAULT_FORMAT))
    root.addHandler(handler)
