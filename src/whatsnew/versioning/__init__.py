"""Semantic version helpers for release tags."""

from .semver import compare, is_prerelease, is_valid, normalize, parse

__all__ = [
    "compare",
    "is_prerelease",
    "is_valid",
    "normalize",
    "parse",
]
