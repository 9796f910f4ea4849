"""Release sources."""

from .base import Releaser
from .github import GitHubReleaser
from .static import StaticReleaser

__all__ = [
    "Releaser",
    "GitHubReleaser",
    "StaticReleaser",
]
