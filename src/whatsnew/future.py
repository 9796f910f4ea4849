"""Single-shot handle for a release check running on a worker thread."""

from __future__ import annotations

import logging
import threading
from typing import Callable, Optional

from whatsnew.models import ResolutionResult

logger = logging.getLogger(__name__)


class UpdateFuture:
    """Holds the future result of a call to ``check``.

    The check runs once on its own daemon thread. The first read blocks
    until it finishes; the result is kept, so later reads return the same
    value immediately. There is no cancel operation.
    """

    def __init__(self, work: Callable[[], str], *, name: str = "whatsnew-check"):
        self._done = threading.Event()
        self._result: Optional[ResolutionResult] = None
        self._thread = threading.Thread(target=self._run, args=(work,), name=name, daemon=True)
        self._thread.start()

    def _run(self, work: Callable[[], str]) -> None:
        try:
            result = ResolutionResult(version=work())
        except Exception as exc:  # pylint: disable=broad-exception-caught
            logger.error("Release check crashed: %s", exc, exc_info=True)
            result = ResolutionResult(error=exc)
        self._result = result
        self._done.set()

    def done(self) -> bool:
        """True once the check has finished."""
        return self._done.is_set()

    def result(self, timeout: Optional[float] = None) -> ResolutionResult:
        """Return the full ResolutionResult, waiting for the worker if needed.

        Raises:
            TimeoutError: If ``timeout`` seconds pass before the check finishes.
        """
        if not self._done.wait(timeout):
            raise TimeoutError("release check still running")
        assert self._result is not None
        return self._result

    def get(self, timeout: Optional[float] = None) -> str:
        """Return the newer version, or "" when no update is found.

        Blocks on the first call until the check completes. An unexpected
        failure inside the worker is re-raised on every call.
        """
        res = self.result(timeout)
        if res.error is not None:
            raise res.error
        return res.version
