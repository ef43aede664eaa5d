"""Logging setup shared by the server and the headless CLI."""

from __future__ import annotations

import logging
import sys
from typing import TextIO

PACKAGE_LOGGER = "bomberman"


def setup_logging(level: str = "INFO", stream: TextIO | None = None) -> logging.Logger:
    """Route the package's log records to a single stream handler.

    Records go to stderr unless *stream* is given, so the CLI's board
    picture on stdout is never interleaved with log lines. Calling this
    again replaces the handler instead of stacking a second one.
    """
    numeric_level = logging.getLevelName(level.upper())
    if not isinstance(numeric_level, int):
        raise ValueError(f"Unknown log level: {level!r}")

    handler = logging.StreamHandler(stream or sys.stderr)
    handler.setFormatter(
        logging.Formatter(
            fmt="%(asctime)s [%(levelname)-5s] %(name)-28s | %(message)s",
            datefmt="%H:%M:%S",
        )
    )

    pkg = logging.getLogger(PACKAGE_LOGGER)
    pkg.setLevel(numeric_level)
    pkg.handlers.clear()
    pkg.addHandler(handler)
    pkg.propagate = False
    return pkg
