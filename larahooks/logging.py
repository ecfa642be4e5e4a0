"""Logging utilities for larahooks commands."""

from __future__ import annotations

import logging
import os
import sys
from pathlib import Path

_LOGGER_NAME = "larahooks"
_DEBUG_ENV = "LARAHOOKS_DEBUG"


def get_logger(name: str | None = None) -> logging.Logger:
    """Return a module-scoped logger under the larahooks hierarchy."""
    full_name = f"{_LOGGER_NAME}.{name}" if name else _LOGGER_NAME
    return logging.getLogger(full_name)


def debug_requested(environ: dict[str, str] | None = None) -> bool:
    env = os.environ if environ is None else environ
    return env.get(_DEBUG_ENV, "").strip().lower() in {"1", "true", "yes"}


def configure_logging(
    *, verbose: bool = False, log_file: Path | None = None
) -> logging.Logger:
    """Configure the larahooks logger with stderr output and optional file sink.

    Hooks reserve stdout for results, so console output always goes to stderr.
    """
    level = logging.DEBUG if verbose or debug_requested() else logging.INFO
    logger = logging.getLogger(_LOGGER_NAME)
    logger.setLevel(level)
    logger.propagate = False

    # Reset handlers to avoid duplicate output when the CLI is invoked multiple times.
    for handler in list(logger.handlers):
        logger.removeHandler(handler)

    stream_handler = logging.StreamHandler(sys.stderr)
    stream_handler.setLevel(level)
    stream_handler.setFormatter(logging.Formatter("[larahooks] %(levelname)s %(message)s"))
    logger.addHandler(stream_handler)

    if log_file is not None:
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setLevel(level)
        file_handler.setFormatter(
            logging.Formatter("%(asctime)s %(levelname)s %(name)s: %(message)s")
        )
        logger.addHandler(file_handler)

    return logger


__all__ = ["configure_logging", "debug_requested", "get_logger"]
