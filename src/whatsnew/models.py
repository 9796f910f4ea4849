"""Data models for release checks."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict, Optional

EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)

_FRACTION_RE = re.compile(r"\.(\d{6})\d+")


def parse_timestamp(value: str) -> datetime:
    """Parse an RFC 3339 timestamp into an aware UTC datetime.

    Accepts a trailing ``Z`` and fractional seconds longer than
    microseconds; naive values are taken as UTC.
    """
    text = value.strip()
    if text.endswith(("Z", "z")):
        text = text[:-1] + "+00:00"
    text = _FRACTION_RE.sub(r".\1", text)
    parsed = datetime.fromisoformat(text)
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed.astimezone(timezone.utc)


@dataclass(frozen=True)
class CacheRecord:
    """Cached information about the newest last-seen release."""
    check_time: datetime = EPOCH  # when the release source was last consulted
    version: str = ""  # largest stable version seen in the last check
    etag: str = ""  # entity tag to revalidate the release list

    def to_dict(self) -> Dict[str, Any]:
        """Serialize to the JSON cache layout."""
        return {
            "check_time": self.check_time.isoformat(),
            "version": self.version,
            "etag": self.etag,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "CacheRecord":
        """Build a record from the JSON cache layout.

        Raises:
            ValueError: If the payload is not a mapping or has a bad timestamp.
        """
        if not isinstance(data, dict):
            raise ValueError("cache record must be a JSON object")
        raw_time = data.get("check_time")
        check_time = parse_timestamp(raw_time) if raw_time else EPOCH
        return cls(
            check_time=check_time,
            version=str(data.get("version") or ""),
            etag=str(data.get("etag") or ""),
        )


@dataclass(frozen=True)
class Release:
    """A single release entry, modeled after GitHub release fields."""
    tag_name: str
    draft: bool = False
    prerelease: bool = False

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Release":
        """Build a release from a GitHub API release object; unknown keys are ignored."""
        return cls(
            tag_name=str(data.get("tag_name") or ""),
            draft=bool(data.get("draft", False)),
            prerelease=bool(data.get("prerelease", False)),
        )


@dataclass
class ResolutionResult:
    """Outcome of one check: empty version means no update is available."""
    version: str = ""
    error: Optional[BaseException] = field(default=None, repr=False)
