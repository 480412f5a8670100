"""Logging configuration — called once at startup by ``cli.app``.

Every module that does ``logger = logging.getLogger(__name__)``
inherits this config.

Levels are resolved in precedence order:
    ``--verbose`` (DEBUG)  >  DEVSTRAP_LOG_LEVEL  >  WARNING (default)
"""

from __future__ import annotations

import logging
import sys

_FMT_CONSOLE = "%(message)s"
_FMT_PLAIN = "%(asctime)s %(levelname)-5s %(name)s — %(message)s"
_FMT_FILE = "%(asctime)s %(levelname)-5s %(name)s:%(lineno)d — %(message)s"
_DATEFMT = "%H:%M:%S"
_DATEFMT_FILE = "%Y-%m-%d %H:%M:%S"


def setup_logging(level: str = "WARNING", log_file: str | None = None) -> None:
    """Configure the root logger.

    A ``rich.logging.RichHandler`` writes to stderr when Rich is
    installed, a plain ``StreamHandler`` otherwise.  *log_file* adds a
    full-detail file handler at the same level.
    """
    numeric_level = _parse_level(level)

    root = logging.getLogger()
    root.handlers.clear()
    root.addHandler(_console_handler(numeric_level))

    if log_file:
        fh = logging.FileHandler(log_file, encoding="utf-8")
        fh.setLevel(numeric_level)
        fh.setFormatter(logging.Formatter(_FMT_FILE, datefmt=_DATEFMT_FILE))
        root.addHandler(fh)

    root.setLevel(numeric_level)


def _console_handler(level: int) -> logging.Handler:
    try:
        from rich.logging import RichHandler

        from devstrap.cli.console import get_rich_console
    except ModuleNotFoundError:
        handler: logging.Handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(logging.Formatter(_FMT_PLAIN, datefmt=_DATEFMT))
    else:
        handler = RichHandler(
            console=get_rich_console(),
            show_path=level <= logging.DEBUG,
            rich_tracebacks=False,
            markup=False,
        )
        handler.setFormatter(logging.Formatter(_FMT_CONSOLE, datefmt=_DATEFMT))
    handler.setLevel(level)
    return handler


def _parse_level(level: str | None) -> int:
    """Convert a level name string to its numeric constant."""
    if not level:
        return logging.WARNING
    numeric = getattr(logging, level.upper(), None)
    if not isinstance(numeric, int):
        return logging.WARNING
    return numeric
