"""A releaser returning a predefined set of releases."""

from __future__ import annotations

from typing import Iterable, List, Optional, Tuple

from ..models import Release
from .base import Releaser


class StaticReleaser(Releaser):
    """Serve a fixed release list.

    Not useful in production beyond pinning a known release set, but handy
    in tests and as a template for custom releasers. ``calls`` counts how
    many times the list was requested.
    """

    def __init__(self, releases: Iterable[Release], etag: str = "static"):
        self.releases: List[Release] = list(releases)
        self.etag = etag
        self.calls = 0

    def get(self, etag: str, timeout: Optional[float] = None) -> Tuple[List[Release], str]:
        self.calls += 1
        return list(self.releases), self.etag
