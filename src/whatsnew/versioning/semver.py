"""Semantic version parsing and ordering for release tags.

Release tags commonly carry a single leading marker such as ``v`` in
``v1.2.3``. The marker is kept for display but never takes part in
ordering; ``v1.2.3`` and ``1.2.3`` compare equal.
"""

from typing import Optional, Tuple

import semantic_version


def normalize(tag: str) -> Tuple[str, str]:
    """Split a tag into (prefix, semver body).

    A single leading non-digit character is treated as the prefix.
    """
    if tag and not tag[0].isdigit():
        return tag[0], tag[1:]
    return "", tag


def parse(tag: str) -> Optional[semantic_version.Version]:
    """Parse the semver body of ``tag``; None when empty or invalid."""
    if not tag:
        return None
    _, body = normalize(tag)
    try:
        return semantic_version.Version(body)
    except ValueError:
        return None


def is_valid(tag: str) -> bool:
    """True if ``tag`` is a valid semantic version, prefix allowed."""
    return parse(tag) is not None


def is_prerelease(tag: str) -> bool:
    """True if the tag's semver body has a non-empty prerelease component."""
    ver = parse(tag)
    return ver is not None and bool(ver.prerelease)


def _precedence(ver: semantic_version.Version) -> semantic_version.Version:
    # build metadata does not participate in precedence
    return semantic_version.Version(
        major=ver.major,
        minor=ver.minor,
        patch=ver.patch,
        prerelease=ver.prerelease,
        build=(),
    )


def compare(a: str, b: str) -> int:
    """Compare two tags by semver precedence.

    Returns -1, 0 or 1. Invalid or empty tags sort below every valid
    version, and two invalid tags compare equal.
    """
    va, vb = parse(a), parse(b)
    if va is None or vb is None:
        if va is None and vb is None:
            return 0
        return -1 if va is None else 1

    pa, pb = _precedence(va), _precedence(vb)
    if pa < pb:
        return -1
    if pa > pb:
        return 1
    return 0
