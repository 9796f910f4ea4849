"""JSON file cache store, the default cacher."""

from __future__ import annotations

import json
import logging
import os
import tempfile

from whatsnew.constants import Constants
from whatsnew.errors import CacheError
from ..models import CacheRecord
from .base import Cacher

logger = logging.getLogger(__name__)


class FileCacher(Cacher):
    """Persist the cache record as a small JSON document on disk."""

    def __init__(self, path: str):
        """Initialize the file cacher.

        Args:
            path: Full path of the cache file, typically ending in ``.json``.
        """
        self.path = os.fspath(path)

    def __repr__(self) -> str:
        return f"FileCacher(path={self.path!r})"

    def get(self) -> CacheRecord:
        """Read the cached record from disk."""
        try:
            with open(self.path, "r", encoding="utf-8") as fh:
                data = json.load(fh)
        except FileNotFoundError as exc:
            raise CacheError(f"cache file not found: {self.path}") from exc
        except (OSError, ValueError) as exc:
            raise CacheError(f"unreadable cache file {self.path}: {exc}") from exc

        try:
            return CacheRecord.from_dict(data)
        except ValueError as exc:
            raise CacheError(f"corrupt cache file {self.path}: {exc}") from exc

    def set(self, record: CacheRecord) -> None:
        """Write the record, replacing the file atomically."""
        directory = os.path.dirname(os.path.abspath(self.path))
        try:
            os.makedirs(directory, mode=Constants.CACHE_DIR_MODE, exist_ok=True)
            fd, tmp_path = tempfile.mkstemp(prefix=".whatsnew-", suffix=".tmp", dir=directory)
            try:
                with os.fdopen(fd, "w", encoding="utf-8") as fh:
                    json.dump(record.to_dict(), fh, indent=Constants.CACHE_JSON_INDENT)
                    fh.write("\n")
                os.replace(tmp_path, self.path)
            except BaseException:
                try:
                    os.unlink(tmp_path)
                except OSError:
                    pass
                raise
        except OSError as exc:
            raise CacheError(f"cannot write cache file {self.path}: {exc}") from exc
        logger.debug("Wrote cache file %s", self.path)
