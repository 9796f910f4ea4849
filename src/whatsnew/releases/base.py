"""Abstract release source interface."""

from abc import ABC, abstractmethod
from typing import List, Optional, Tuple

from ..models import Release


class Releaser(ABC):
    """Gets a list of releases from a source.

    Implement a Releaser to access private repositories, or to get releases
    from other hosting services or locations.
    """

    @abstractmethod
    def get(self, etag: str, timeout: Optional[float] = None) -> Tuple[List[Release], str]:
        """Fetch the current list of releases.

        Where possible, honor ``etag`` and return a new entity tag on every
        call. If the data has not changed since ``etag``, return that tag and
        an empty list of releases.

        Args:
            etag: Entity tag from the previous successful fetch, or "".
            timeout: Seconds the source may spend on the network, None for no bound.

        Returns:
            Tuple of (releases, new_etag)

        Raises:
            ReleaseFetchError: If the releases cannot be retrieved.
        """
