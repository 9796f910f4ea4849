"""Abstract cache store interface."""

from abc import ABC, abstractmethod

from ..models import CacheRecord


class Cacher(ABC):
    """Sets and gets the cached record for release checks.

    Implement a Cacher to change where and how previous release checks are
    persisted, or to disable persistence altogether.
    """

    @abstractmethod
    def get(self) -> CacheRecord:
        """Return the stored record.

        Raises:
            CacheError: If the record is missing, unreadable or corrupt.
        """

    @abstractmethod
    def set(self, record: CacheRecord) -> None:
        """Replace the stored record.

        Raises:
            CacheError: If the record cannot be written.
        """
