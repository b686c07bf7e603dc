"""Logging and performance tracing for CONNEKS.

Enable console output by running with conneks-debug. The DEBUG_PERF flag
controls whether performance timing is logged.

Usage:
    from ..utils.debug_trace import get_logger, perf_timer

    logger = get_logger(__name__)
    logger.debug("Starting operation")

    with perf_timer("layout", row_count=len(records)):
        pages = layout(...)
"""

from __future__ import annotations

import logging
import sys
import time
from collections.abc import Callable
from contextlib import contextmanager
from functools import wraps
from typing import Any

# Global flag to enable/disable performance tracing
DEBUG_PERF = True

LOG_FORMAT = "%(asctime)s.%(msecs)03d [%(levelname)s] %(name)s: %(message)s"
LOG_DATE_FORMAT = "%H:%M:%S"

# Package logger; modules log through children of this one
logger = logging.getLogger("conneks")


def get_logger(name: str) -> logging.Logger:
    """Get a child logger of the package logger.

    Args:
        name: Usually the calling module's __name__

    Returns:
        Logger named under "conneks"
    """
    if name == "conneks" or name.startswith("conneks."):
        return logging.getLogger(name)
    return logger.getChild(name)


def setup_debug_logging(debug: bool = False) -> None:
    """Configure the package logger.

    Call once at startup. Debug mode logs everything to stdout; otherwise
    only warnings and above are emitted.

    Args:
        debug: True when started from the conneks-debug entry point
    """
    # Only configure if not already configured
    if logger.handlers:
        return

    if debug and sys.stdout is not None:
        logger.setLevel(logging.DEBUG)
        handler = logging.StreamHandler(sys.stdout)
        handler.setLevel(logging.DEBUG)
        handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt=LOG_DATE_FORMAT))
        logger.addHandler(handler)
    else:
        logger.setLevel(logging.WARNING)


@contextmanager
def perf_timer(operation: str, row_count: int | None = None):
    """Context manager for timing operations.

    Args:
        operation: Name of the operation being timed
        row_count: Optional row count for context
    """
    if not DEBUG_PERF:
        yield
        return

    start = time.perf_counter()
    try:
        yield
    finally:
        elapsed_ms = (time.perf_counter() - start) * 1000
        if row_count is not None:
            logger.debug(f"PERF: {operation} ({row_count} rows) took {elapsed_ms:.2f}ms")
        else:
            logger.debug(f"PERF: {operation} took {elapsed_ms:.2f}ms")


def log_perf(func: Callable) -> Callable:
    """Decorator to log function performance."""

    @wraps(func)
    def wrapper(*args, **kwargs) -> Any:
        if not DEBUG_PERF:
            return func(*args, **kwargs)

        start = time.perf_counter()
        try:
            return func(*args, **kwargs)
        finally:
            elapsed_ms = (time.perf_counter() - start) * 1000
            logger.debug(f"PERF: {func.__qualname__} took {elapsed_ms:.2f}ms")

    return wrapper
