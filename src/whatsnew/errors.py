"""Exception types raised by whatsnew.

Only MisconfiguredOptionsError ever reaches the caller of ``check``; cache
and release source failures are absorbed by the resolution algorithm.
"""

from __future__ import annotations

from typing import Optional


class WhatsNewError(Exception):
    """Base class for all whatsnew errors."""


class MisconfiguredOptionsError(WhatsNewError, ValueError):
    """Raised when incompatible or insufficient options are provided."""


class CacheError(WhatsNewError):
    """Raised by a cacher when a record cannot be read or written."""


class ReleaseFetchError(WhatsNewError):
    """Raised by a releaser when the release list cannot be retrieved.

    Args:
        message: Human readable description.
        status_code: HTTP status of the failed response, if there was one.
    """

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code
