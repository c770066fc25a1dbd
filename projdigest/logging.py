"""Logger hierarchy and handler setup for the projdigest CLI and service."""

from __future__ import annotations

import logging
from pathlib import Path

ROOT_LOGGER = "projdigest"

CONSOLE_FORMAT = "[projdigest] %(levelname)s %(message)s"
FILE_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def get_logger(name: str | None = None) -> logging.Logger:
    """Return ``projdigest`` or the ``projdigest.<name>`` child logger."""
    return logging.getLogger(f"{ROOT_LOGGER}.{name}" if name else ROOT_LOGGER)


def reset_logging() -> None:
    """Close and detach every handler installed on the projdigest logger."""
    logger = logging.getLogger(ROOT_LOGGER)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()
    logger.propagate = True


def configure_logging(
    *, verbose: bool = False, log_file: Path | None = None
) -> logging.Logger:
    """Send projdigest records to stderr and, when given, to `log_file`.

    The console shows INFO (DEBUG with `verbose`). The log file always
    receives DEBUG records so a quiet run can still be diagnosed afterwards.
    Calling this again replaces the handlers from the previous call.
    """
    reset_logging()
    console_level = logging.DEBUG if verbose else logging.INFO

    logger = logging.getLogger(ROOT_LOGGER)
    logger.propagate = False

    console = logging.StreamHandler()
    console.setLevel(console_level)
    console.setFormatter(logging.Formatter(CONSOLE_FORMAT))
    logger.addHandler(console)

    if log_file is None:
        logger.setLevel(console_level)
        return logger

    log_file.parent.mkdir(parents=True, exist_ok=True)
    sink = logging.FileHandler(log_file, encoding="utf-8")
    sink.setLevel(logging.DEBUG)
    sink.setFormatter(logging.Formatter(FILE_FORMAT))
    logger.addHandler(sink)
    logger.setLevel(logging.DEBUG)
    return logger


__all__ = ["configure_logging", "get_logger", "reset_logging"]
