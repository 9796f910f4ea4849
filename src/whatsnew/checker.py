"""Entry point: start a release check without blocking the caller."""

from __future__ import annotations

import functools
import logging
import threading
from typing import Optional

from whatsnew.future import UpdateFuture
from whatsnew.options import Options
from whatsnew.resolution import resolve

logger = logging.getLogger(__name__)


def check(opts: Options, cancel: Optional[threading.Event] = None) -> UpdateFuture:
    """Check for a newer release of the configured application.

    Meant for short-lived CLI programs: call it before doing the program's
    main work, then call ``get()`` on the returned future afterwards.

    Args:
        opts: Check options. They are validated before anything runs.
        cancel: Optional event; setting it abandons a pending release fetch,
            exactly as if the fetch had failed.

    Returns:
        UpdateFuture whose ``get()`` yields the newer version or "".

    Raises:
        MisconfiguredOptionsError: If incompatible options are set.
    """
    resolved = opts.resolve()
    logger.debug(
        "Starting release check with %r and %r",
        resolved.cacher,
        resolved.releaser,
    )
    work = functools.partial(
        resolve,
        resolved.version,
        resolved.cacher,
        resolved.releaser,
        resolved.frequency,
        timeout=resolved.timeout,
        cancel=cancel,
        log=resolved.logger,
    )
    return UpdateFuture(work)
