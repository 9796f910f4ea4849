"""Update resolution: decide whether a newer release exists.

A run reads the cache once, decides whether the cached answer is fresh,
otherwise asks the release source (revalidating with the cached entity
tag), writes the cache at most once and compares the answer against the
running version. Cache and release source failures never fail the run;
they degrade to the last known cached answer.
"""

from __future__ import annotations

import logging
import threading
import time
from datetime import datetime, timedelta, timezone
from typing import Iterable, List, Optional, Tuple

from whatsnew.cache import Cacher
from whatsnew.common.logging_utils import Timer, extra_context, is_debug_enabled
from whatsnew.constants import Constants
from whatsnew.errors import ReleaseFetchError
from whatsnew.models import CacheRecord, Release
from whatsnew.releases import Releaser
from whatsnew.versioning import semver

logger = logging.getLogger(__name__)


class FetchAbandonedError(ReleaseFetchError):
    """The release fetch outlived its deadline or was cancelled."""


def select_latest(releases: Iterable[Release], log: Optional[logging.Logger] = None) -> str:
    """Pick the greatest stable, published release tag.

    Drafts, tags that are not semantic versions and prereleases (by flag or
    by tag) are skipped. On equal precedence the first release seen wins.
    Returns "" when nothing is eligible.
    """
    log = log or logger
    best = ""
    for rel in releases:
        if rel.draft:
            continue
        if not semver.is_valid(rel.tag_name):
            if is_debug_enabled(log):
                log.debug("Skipping non-semver release tag %r", rel.tag_name)
            continue
        if rel.prerelease or semver.is_prerelease(rel.tag_name):
            continue
        if semver.compare(best, rel.tag_name) < 0:
            best = rel.tag_name
    return best


def _as_utc(value: datetime) -> datetime:
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


def _read_cache(cacher: Cacher, log: logging.Logger) -> CacheRecord:
    try:
        record = cacher.get()
    except Exception as exc:  # pylint: disable=broad-exception-caught
        log.debug(
            "Cache read failed, treating as empty: %s",
            exc,
            extra=extra_context(event="cache_read", component="resolution", outcome="miss"),
        )
        return CacheRecord()
    if record is None:
        return CacheRecord()
    return record


def _write_cache(cacher: Cacher, record: CacheRecord, log: logging.Logger) -> None:
    try:
        cacher.set(record)
    except Exception as exc:  # pylint: disable=broad-exception-caught
        log.debug(
            "Cache write failed, ignoring: %s",
            exc,
            extra=extra_context(event="cache_write", component="resolution", outcome="error"),
        )


def _fetch(
    releaser: Releaser,
    etag: str,
    deadline: Optional[float],
    cancel: Optional[threading.Event],
) -> Tuple[List[Release], str]:
    """Call the releaser, abandoning it at ``deadline`` or when ``cancel`` is set.

    ``deadline`` is a time.monotonic() value. An abandoned fetch keeps
    running on its daemon thread; its outcome is discarded.
    """
    if deadline is None and cancel is None:
        return releaser.get(etag, timeout=None)

    remaining = None if deadline is None else deadline - time.monotonic()
    if remaining is not None and remaining <= 0:
        raise FetchAbandonedError("release check timed out")
    if cancel is not None and cancel.is_set():
        raise FetchAbandonedError("release check cancelled")

    outcome: dict = {}
    finished = threading.Event()

    def _run() -> None:
        try:
            outcome["value"] = releaser.get(etag, timeout=remaining)
        except Exception as exc:  # pylint: disable=broad-exception-caught
            outcome["error"] = exc
        finally:
            finished.set()

    threading.Thread(target=_run, name="whatsnew-fetch", daemon=True).start()

    while True:
        wait_for = None if deadline is None else max(deadline - time.monotonic(), 0.0)
        if cancel is not None:
            poll = Constants.FETCH_POLL_INTERVAL_SEC
            wait_for = poll if wait_for is None else min(wait_for, poll)
        if finished.wait(wait_for):
            break
        if cancel is not None and cancel.is_set():
            raise FetchAbandonedError("release check cancelled")
        if deadline is not None and time.monotonic() >= deadline:
            raise FetchAbandonedError("release check timed out")

    if "error" in outcome:
        raise outcome["error"]
    return outcome["value"]


def resolve(
    current_version: str,
    cacher: Cacher,
    releaser: Releaser,
    frequency: timedelta = Constants.DEFAULT_FREQUENCY,
    *,
    timeout: Optional[timedelta] = None,
    cancel: Optional[threading.Event] = None,
    now: Optional[datetime] = None,
    log: Optional[logging.Logger] = None,
) -> str:
    """Run one update resolution.

    Args:
        current_version: Version of the running program, optionally prefixed.
        cacher: Cache store holding the last check.
        releaser: Release source consulted when the cache is stale.
        frequency: Minimum time between release source calls.
        timeout: Bound on the release fetch; None or negative means no bound.
        cancel: Optional event; once set, a pending fetch is abandoned.
        now: Reference time, sampled once; defaults to the current UTC time.
        log: Logger receiving degraded-path events.

    Returns:
        The newer release tag, or "" when no update is available.
    """
    log = log or logger
    deadline = None
    if timeout is not None and timeout >= timedelta(0):
        deadline = time.monotonic() + timeout.total_seconds()

    record = _read_cache(cacher, log)
    now = _as_utc(now) if now is not None else datetime.now(timezone.utc)

    candidate = record.version
    if now - _as_utc(record.check_time) < frequency:
        path = "fresh"
    else:
        with Timer() as t:
            try:
                releases, etag = _fetch(releaser, record.etag, deadline, cancel)
            except Exception as exc:  # pylint: disable=broad-exception-caught
                releases, etag = None, ""
                log.warning(
                    "Release check failed, using cached version %r: %s",
                    record.version,
                    exc,
                    extra=extra_context(
                        event="release_fetch",
                        component="resolution",
                        outcome="error",
                        error=type(exc).__name__,
                    ),
                )

        if releases is None:
            path = "fetch_error"
        elif not releases:
            path = "unchanged"
            _write_cache(cacher, CacheRecord(check_time=now, version=record.version, etag=etag), log)
        else:
            path = "fetched"
            latest = select_latest(releases, log)
            # store the newest remote release, regardless of what is installed
            _write_cache(cacher, CacheRecord(check_time=now, version=latest, etag=etag), log)
            if semver.compare(latest, candidate) > 0:
                candidate = latest

        if is_debug_enabled(log):
            log.debug(
                "Release source consulted",
                extra=extra_context(
                    event="release_fetch",
                    component="resolution",
                    outcome=path,
                    duration_ms=t.duration_ms(),
                ),
            )

    if semver.compare(candidate, current_version) <= 0:
        result = ""
    else:
        result = candidate

    if is_debug_enabled(log):
        log.debug(
            "Update resolution finished",
            extra=extra_context(
                event="resolve",
                component="resolution",
                outcome=path,
                current=current_version,
                latest=result or None,
            ),
        )
    return result
