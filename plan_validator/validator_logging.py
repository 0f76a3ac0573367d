"""Logging setup for the plan validator.

All modules log through the ``plan_validator`` logger hierarchy so a host
application can route or silence validator output in one place.
"""

import logging
import sys
from typing import TextIO

LOGGER_NAME = "plan_validator"
LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"


def get_logger(name: str | None = None) -> logging.Logger:
    """Get the package logger or one of its children.

    Args:
        name: Optional child name (e.g. 'engine').

    Returns:
        Logger under the plan_validator namespace.
    """
    if name:
        return logging.getLogger(f"{LOGGER_NAME}.{name}")
    return logging.getLogger(LOGGER_NAME)


def setup_logging(
    verbose: bool = False,
    quiet: bool = False,
    stream: TextIO | None = None,
) -> logging.Logger:
    """Attach a stream handler to the package logger.

    Calling this more than once replaces the previous handler instead of
    stacking duplicates.

    Args:
        verbose: Log at DEBUG level.
        quiet: Only log errors. Ignored when verbose is set.
        stream: Output stream (default: stderr).

    Returns:
        The configured package logger.
    """
    logger = get_logger()

    if verbose:
        level = logging.DEBUG
    elif quiet:
        level = logging.ERROR
    else:
        level = logging.WARNING

    for handler in list(logger.handlers):
        if getattr(handler, "_plan_validator_handler", False):
            logger.removeHandler(handler)

    handler = logging.StreamHandler(stream or sys.stderr)
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    handler._plan_validator_handler = True  # type: ignore[attr-defined]
    logger.addHandler(handler)
    logger.setLevel(level)
    return logger


__all__ = ["LOGGER_NAME", "get_logger", "setup_logging"]
