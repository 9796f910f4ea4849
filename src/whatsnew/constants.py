"""Constants used in the project."""

from datetime import timedelta


class Constants:  # pylint: disable=too-few-public-methods
    """General constants used in the project.
    Data holder for configuration constants; not intended to provide behavior.
    """

    # How often a release check may hit the network
    DEFAULT_FREQUENCY = timedelta(days=7)

    # Bound on the network leg of a check; NO_TIMEOUT disables the bound
    DEFAULT_TIMEOUT = timedelta(seconds=5)
    NO_TIMEOUT = timedelta(seconds=-1)

    # Release source
    GITHUB_API_BASE = "https://api.github.com"
    GITHUB_ACCEPT = "application/vnd.github.v3+json"
    ENV_GITHUB_TOKEN = "GITHUB_TOKEN"
    USER_AGENT = "whatsnew-release-check"

    # File cache
    CACHE_DIR_MODE = 0o750
    CACHE_JSON_INDENT = 2

    # Environment overrides for configuration loading
    ENV_PREFIX = "WHATSNEW_"
    ENV_LOG_LEVEL = "WHATSNEW_LOG_LEVEL"
    CONFIG_SECTION = "whatsnew"

    LOG_FORMAT = "[%(levelname)s] %(name)s: %(message)s"

    # Poll slice while waiting on an abandonable fetch, in seconds
    FETCH_POLL_INTERVAL_SEC = 0.05
