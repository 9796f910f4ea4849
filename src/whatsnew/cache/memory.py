"""In-process cache stores."""

from __future__ import annotations

import threading
from typing import Optional

from whatsnew.errors import CacheError
from ..models import CacheRecord
from .base import Cacher


class MemoryCacher(Cacher):
    """Keep the record in memory for the lifetime of the object.

    Useful in tests and for long-running hosts that re-check periodically
    without wanting a file on disk.
    """

    def __init__(self, record: Optional[CacheRecord] = None):
        self._record = record
        self._lock = threading.Lock()
        self.writes = 0

    def get(self) -> CacheRecord:
        with self._lock:
            if self._record is None:
                raise CacheError("no cached record")
            return self._record

    def set(self, record: CacheRecord) -> None:
        with self._lock:
            self._record = record
            self.writes += 1

    @property
    def record(self) -> Optional[CacheRecord]:
        """The currently stored record, if any."""
        with self._lock:
            return self._record


class NoopCacher(Cacher):
    """A cacher that stores nothing, so every check consults the release source."""

    def get(self) -> CacheRecord:
        return CacheRecord()

    def set(self, record: CacheRecord) -> None:
        return None
