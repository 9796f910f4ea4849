"""Structured logging helpers.

Modules log through ``logging.getLogger(__name__)`` and attach machine
readable context via ``extra=extra_context(...)``. Nothing here touches the
root logger unless the host application calls ``configure_logging``.
"""
from __future__ import annotations

import logging
import os
import time
from typing import Any, Dict, Optional
from urllib.parse import urlsplit, urlunsplit

from whatsnew.constants import Constants

_LIBRARY_LOGGER = "whatsnew"


def extra_context(**fields: Any) -> Dict[str, Any]:
    """Build an ``extra`` mapping for structured log records.

    None values are dropped so handlers only see populated fields.
    """
    return {key: value for key, value in fields.items() if value is not None}


def is_debug_enabled(logger: logging.Logger) -> bool:
    """Return True when DEBUG records would be emitted by ``logger``."""
    return logger.isEnabledFor(logging.DEBUG)


def safe_url(url: str) -> str:
    """Strip credentials, query string and fragment from a URL for logging."""
    try:
        parts = urlsplit(url)
    except ValueError:
        return "<invalid-url>"
    netloc = parts.hostname or ""
    if parts.port:
        netloc = f"{netloc}:{parts.port}"
    return urlunsplit((parts.scheme, netloc, parts.path, "", ""))


class Timer:
    """Context manager measuring elapsed wall time."""

    def __init__(self) -> None:
        self._start: Optional[float] = None
        self._end: Optional[float] = None

    def __enter__(self) -> "Timer":
        self._start = time.perf_counter()
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self._end = time.perf_counter()

    def duration_ms(self) -> float:
        """Elapsed milliseconds, measured up to now if still running."""
        if self._start is None:
            return 0.0
        end = self._end if self._end is not None else time.perf_counter()
        return round((end - self._start) * 1000.0, 2)


def configure_logging(level: Optional[str] = None) -> logging.Logger:
    """Attach a stream handler to the library logger.

    The level comes from ``level`` or the WHATSNEW_LOG_LEVEL environment
    variable, falling back to WARNING. Calling this twice does not add a
    second handler.
    """
    logger = logging.getLogger(_LIBRARY_LOGGER)
    level_name = (level or os.environ.get(Constants.ENV_LOG_LEVEL) or "WARNING").upper()
    logger.setLevel(getattr(logging, level_name, logging.WARNING))

    if not any(getattr(h, "_whatsnew_handler", False) for h in logger.handlers):
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(Constants.LOG_FORMAT))
        handler._whatsnew_handler = True  # type: ignore[attr-defined]
        logger.addHandler(handler)
    return logger


logging.getLogger(_LIBRARY_LOGGER).addHandler(logging.NullHandler())
