"""
Logging setup for modorder.

Modules get their logger from :func:`get_logger` and never touch handlers,
so using modorder as a library prints nothing unless the host application
configures logging. The CLI calls :func:`setup_logging` once per run,
with a level derived from ``-v``.
"""

from __future__ import annotations

import os
import sys
import logging
import threading
from typing import IO, Optional

from modorder.constants import (
    LOG_DATE_FORMAT,
    LOG_DEFAULT_FORMAT,
    LOG_VERBOSE_FORMAT,
    LOGGER_NAMESPACE,
)

_configured = False
_setup_lock = threading.Lock()


class ColoredFormatter(logging.Formatter):
    """Formatter that wraps the level name in an ANSI color."""

    COLORS = {
        "DEBUG": "\033[36m",
        "INFO": "\033[32m",
        "WARNING": "\033[33m",
        "ERROR": "\033[31m",
        "CRITICAL": "\033[35m",
    }
    RESET = "\033[0m"

    def __init__(
        self,
        fmt: str,
        *,
        datefmt: Optional[str] = None,
        use_color: bool = True,
    ) -> None:
        super().__init__(fmt=fmt, datefmt=datefmt)
        self.use_color = use_color

    def format(self, record: logging.LogRecord) -> str:
        color = self.COLORS.get(record.levelname) if self.use_color else None
        if color is None:
            return super().format(record)
        # Color a copy; other handlers must see the plain level name
        tinted = logging.makeLogRecord(record.__dict__)
        tinted.levelname = f"{color}{record.levelname}{self.RESET}"
        return super().format(tinted)


def _stream_supports_color(stream: IO[str]) -> bool:
    if os.environ.get("NO_COLOR") or os.environ.get("CI"):
        return False
    isatty = getattr(stream, "isatty", None)
    try:
        return bool(isatty and isatty())
    except (OSError, ValueError):
        return False


def setup_logging(
    *,
    level: int = logging.INFO,
    verbose: bool = False,
    stream: Optional[IO[str]] = None,
) -> None:
    """Send modorder log records to ``stream`` (default: stderr).

    Calling it again replaces the previous handler, so the level can be
    changed at any time.

    Args:
        level: Minimum level to emit.
        verbose: Prefix lines with timestamp and logger name.
        stream: Destination stream.
    """
    global _configured

    target = stream if stream is not None else sys.stderr
    handler = logging.StreamHandler(target)
    handler.setLevel(level)
    handler.setFormatter(
        ColoredFormatter(
            LOG_VERBOSE_FORMAT if verbose else LOG_DEFAULT_FORMAT,
            datefmt=LOG_DATE_FORMAT,
            use_color=_stream_supports_color(target),
        )
    )

    with _setup_lock:
        package_logger = logging.getLogger(LOGGER_NAMESPACE)
        package_logger.handlers.clear()
        package_logger.addHandler(handler)
        package_logger.setLevel(level)
        package_logger.propagate = False
        _configured = True


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """Return ``modorder.<name>``, or the package logger for ``None``.

    Names already starting with ``modorder.`` are used as they are.
    """
    if not name or name == LOGGER_NAMESPACE:
        full_name = LOGGER_NAMESPACE
    elif name.startswith(LOGGER_NAMESPACE + "."):
        full_name = name
    else:
        full_name = f"{LOGGER_NAMESPACE}.{name}"

    logger = logging.getLogger(full_name)
    if not logger.handlers and not (logger.parent and logger.parent.handlers):
        logger.addHandler(logging.NullHandler())
    return logger


def is_logging_configured() -> bool:
    """True between :func:`setup_logging` and :func:`disable_logging`."""
    return _configured


def disable_logging() -> None:
    """Drop the modorder handler so nothing is printed any more."""
    global _configured
    with _setup_lock:
        package_logger = logging.getLogger(LOGGER_NAMESPACE)
        package_logger.handlers.clear()
        package_logger.addHandler(logging.NullHandler())
        package_logger.setLevel(logging.NOTSET)
        _configured = False
