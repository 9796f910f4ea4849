"""HTTP helpers for release sources.

Encapsulates request/timeout error handling and DEBUG traces so release
sources only deal with status codes and payloads.
"""
from __future__ import annotations

import logging
from typing import Any, Dict, Optional

import requests

from whatsnew.common.logging_utils import Timer, extra_context, is_debug_enabled, safe_url
from whatsnew.errors import ReleaseFetchError

logger = logging.getLogger(__name__)


def conditional_get(
    url: str,
    *,
    context: str,
    etag: str = "",
    headers: Optional[Dict[str, str]] = None,
    timeout: Optional[float] = None,
    session: Optional[requests.Session] = None,
    **kwargs: Any,
) -> requests.Response:
    """Perform a GET request, sending If-None-Match when an entity tag is known.

    Args:
        url: Target URL.
        context: Human-readable source tag for logs (e.g., "github").
        etag: Entity tag from a previous response; empty to fetch unconditionally.
        headers: Extra request headers.
        timeout: Socket timeout in seconds; None waits indefinitely.
        session: Optional requests session; module-level requests is used otherwise.
        **kwargs: Passed through to ``get``.

    Returns:
        requests.Response: The HTTP response, whatever its status.

    Raises:
        ReleaseFetchError: On timeouts and connection level failures.
    """
    request_headers = dict(headers or {})
    if etag:
        request_headers["If-None-Match"] = etag

    safe_target = safe_url(url)
    getter = session.get if session is not None else requests.get
    with Timer() as t:
        if is_debug_enabled(logger):
            logger.debug(
                "HTTP request",
                extra=extra_context(
                    event="http_request",
                    component="http_client",
                    action="GET",
                    target=safe_target,
                    context=context,
                    conditional=bool(etag),
                ),
            )
        try:
            res = getter(url, headers=request_headers, timeout=timeout, **kwargs)
        except requests.Timeout as exc:
            logger.debug("%s request timed out after %s seconds", context, timeout)
            raise ReleaseFetchError(f"{context} request timed out") from exc
        except requests.RequestException as exc:  # includes ConnectionError
            logger.debug("%s connection error: %s", context, exc)
            raise ReleaseFetchError(f"{context} connection error: {exc}") from exc

        if is_debug_enabled(logger):
            logger.debug(
                "HTTP response",
                extra=extra_context(
                    event="http_response",
                    component="http_client",
                    action="GET",
                    status_code=res.status_code,
                    duration_ms=t.duration_ms(),
                    target=safe_target,
                    context=context,
                ),
            )
        return res
