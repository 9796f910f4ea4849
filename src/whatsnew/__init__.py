"""whatsnew - check for new releases of your application.

Versions are expected to follow https://semver.org, optionally with a
single leading marker such as ``v``.

By default results are cached to a JSON file and releases come from the
public GitHub releases API. Provide your own ``Cacher`` or ``Releaser``
to change either.
"""

from .cache import Cacher, FileCacher, MemoryCacher, NoopCacher
from .checker import check
from .constants import Constants
from .errors import CacheError, MisconfiguredOptionsError, ReleaseFetchError, WhatsNewError
from .future import UpdateFuture
from .models import CacheRecord, Release, ResolutionResult
from .options import Options, load_options
from .releases import GitHubReleaser, Releaser, StaticReleaser

DEFAULT_FREQUENCY = Constants.DEFAULT_FREQUENCY
DEFAULT_TIMEOUT = Constants.DEFAULT_TIMEOUT
NO_TIMEOUT = Constants.NO_TIMEOUT

__all__ = [
    "CacheError",
    "CacheRecord",
    "Cacher",
    "Constants",
    "DEFAULT_FREQUENCY",
    "DEFAULT_TIMEOUT",
    "FileCacher",
    "GitHubReleaser",
    "MemoryCacher",
    "MisconfiguredOptionsError",
    "NO_TIMEOUT",
    "NoopCacher",
    "Options",
    "Release",
    "ReleaseFetchError",
    "Releaser",
    "ResolutionResult",
    "StaticReleaser",
    "UpdateFuture",
    "WhatsNewError",
    "check",
    "load_options",
]
