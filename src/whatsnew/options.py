"""Options for a release check, with YAML and environment loading.

An Options value holds either an explicit collaborator (``cacher``,
``releaser``) or the parameters to build the default one (``cache``,
``slug``), never both. ``resolve`` enforces that before any work starts.
"""

from __future__ import annotations

import dataclasses
import logging
import os
import re
from dataclasses import dataclass
from datetime import timedelta
from typing import Any, Dict, Mapping, Optional, Union

import yaml

from whatsnew.cache import Cacher, FileCacher
from whatsnew.constants import Constants
from whatsnew.errors import MisconfiguredOptionsError
from whatsnew.releases import GitHubReleaser, Releaser

logger = logging.getLogger(__name__)

Duration = Union[timedelta, int, float, str, None]

_DURATION_RE = re.compile(r"^\s*(-?\d+(?:\.\d+)?)\s*([smhdw]?)\s*$", re.IGNORECASE)
_UNIT_SECONDS = {"": 1, "s": 1, "m": 60, "h": 3600, "d": 86400, "w": 604800}

_MAPPING_KEYS = ("slug", "cache", "version", "frequency", "timeout", "github_token", "api_base")


def parse_duration(value: Duration, *, name: str = "duration") -> Optional[timedelta]:
    """Coerce a config value into a timedelta.

    Numbers are seconds; strings may carry one unit suffix (``s``, ``m``,
    ``h``, ``d``, ``w``), e.g. ``"24h"`` or ``"-1"``. None stays None.

    Raises:
        MisconfiguredOptionsError: If the value cannot be interpreted.
    """
    if value is None or isinstance(value, timedelta):
        return value
    if isinstance(value, bool):
        raise MisconfiguredOptionsError(f"{name} must be a duration, got {value!r}")
    if isinstance(value, (int, float)):
        return timedelta(seconds=value)
    if isinstance(value, str):
        m = _DURATION_RE.match(value)
        if m:
            return timedelta(seconds=float(m.group(1)) * _UNIT_SECONDS[m.group(2).lower()])
    raise MisconfiguredOptionsError(f"{name} must be a duration, got {value!r}")


@dataclass
class Options:
    """Required and optional values for running a release check."""

    version: str = ""  # current semver version of the host program
    slug: str = ""  # GitHub repository slug, e.g. "owner/repo"
    cache: str = ""  # full path of the JSON cache file

    # How often the release source may be consulted. DEFAULT_FREQUENCY if unset.
    frequency: Duration = None
    # Bound on the release fetch. DEFAULT_TIMEOUT if unset; NO_TIMEOUT (-1) disables it.
    timeout: Duration = None

    # Slots to override the defaults built from cache/slug
    cacher: Optional[Cacher] = None
    releaser: Optional[Releaser] = None

    github_token: Optional[str] = None  # for private repositories
    api_base: Optional[str] = None  # GitHub Enterprise API base URL
    logger: Optional[logging.Logger] = None  # receives degraded-path events

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any], **overrides: Any) -> "Options":
        """Build options from plain configuration keys.

        Unknown keys are ignored with a warning so config files can carry
        other sections.
        """
        kwargs: Dict[str, Any] = {}
        for key, value in data.items():
            if key in _MAPPING_KEYS:
                kwargs[key] = value
            else:
                logger.warning("Ignoring unknown whatsnew option: %s", key)
        for key in ("slug", "cache", "version", "github_token", "api_base"):
            if kwargs.get(key) is not None:
                kwargs[key] = str(kwargs[key])
        kwargs.update({k: v for k, v in overrides.items() if v is not None})
        return cls(**kwargs)

    def resolve(self) -> "Options":
        """Validate and return a copy with defaults filled in.

        Raises:
            MisconfiguredOptionsError: On conflicting or missing options.
        """
        if self.cacher is not None and self.cache:
            raise MisconfiguredOptionsError("cache and cacher set")
        if self.releaser is not None and self.slug:
            raise MisconfiguredOptionsError("releaser and slug set")
        if self.cacher is None and not self.cache:
            raise MisconfiguredOptionsError("one of cache or cacher is required")
        if self.releaser is None and not self.slug:
            raise MisconfiguredOptionsError("one of slug or releaser is required")
        if not self.version:
            raise MisconfiguredOptionsError("current version is required")

        frequency = parse_duration(self.frequency, name="frequency")
        if not frequency:
            frequency = Constants.DEFAULT_FREQUENCY

        timeout = parse_duration(self.timeout, name="timeout")
        if not timeout:
            timeout = Constants.DEFAULT_TIMEOUT

        cacher = self.cacher if self.cacher is not None else FileCacher(self.cache)
        releaser = self.releaser
        if releaser is None:
            releaser = GitHubReleaser.for_slug(
                self.slug, api_base=self.api_base, token=self.github_token
            )

        return dataclasses.replace(
            self,
            frequency=frequency,
            timeout=timeout,
            cacher=cacher,
            releaser=releaser,
            cache="",
            slug="",
        )


def _env_overrides() -> Dict[str, Any]:
    """Collect WHATSNEW_* environment overrides."""
    found: Dict[str, Any] = {}
    for key in ("frequency", "timeout", "cache", "slug", "api_base"):
        value = os.environ.get(f"{Constants.ENV_PREFIX}{key.upper()}")
        if value is not None and value.strip():
            found[key] = value.strip()
    return found


def load_options(path: Optional[str] = None, **overrides: Any) -> Options:
    """Load options from a YAML file, the environment and keyword overrides.

    Precedence, lowest first: file, WHATSNEW_* environment variables,
    keyword overrides. The file may hold the keys at the top level or under
    a ``whatsnew:`` section.

    Raises:
        MisconfiguredOptionsError: If the file cannot be read or parsed.
    """
    data: Dict[str, Any] = {}
    if path:
        try:
            with open(path, "r", encoding="utf-8") as fh:
                loaded = yaml.safe_load(fh) or {}
        except (OSError, yaml.YAMLError) as exc:
            raise MisconfiguredOptionsError(f"cannot load config {path}: {exc}") from exc
        if not isinstance(loaded, dict):
            raise MisconfiguredOptionsError(f"config {path} must contain a mapping")
        section = loaded.get(Constants.CONFIG_SECTION, loaded)
        if not isinstance(section, dict):
            raise MisconfiguredOptionsError(
                f"'{Constants.CONFIG_SECTION}' section in {path} must be a mapping"
            )
        data.update(section)

    data.update(_env_overrides())
    return Options.from_mapping(data, **overrides)
