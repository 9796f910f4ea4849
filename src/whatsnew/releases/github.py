"""GitHub releases API client, the default releaser.

Only the first page of ``/repos/{owner}/{repo}/releases`` is read; GitHub
returns newest releases first, so concurrent patch releases beyond that
page may be missed.
"""
from __future__ import annotations

import json
import logging
import os
from typing import Dict, List, Optional, Tuple

import requests

from whatsnew.common.http_client import conditional_get
from whatsnew.constants import Constants
from whatsnew.errors import ReleaseFetchError
from ..models import Release
from .base import Releaser

logger = logging.getLogger(__name__)


class GitHubReleaser(Releaser):
    """Fetch releases from the GitHub REST API with ETag revalidation.

    Supports optional authentication via GITHUB_TOKEN environment variable.
    """

    def __init__(
        self,
        url: str,
        *,
        token: Optional[str] = None,
        session: Optional[requests.Session] = None,
    ):
        """Initialize GitHub releaser.

        Args:
            url: Complete URL of the releases API endpoint.
            token: GitHub token (defaults to GITHUB_TOKEN env var)
            session: Optional requests session; module-level requests is used otherwise.
        """
        self.url = url
        self.token = token or os.environ.get(Constants.ENV_GITHUB_TOKEN)
        self.session = session

    @classmethod
    def for_slug(
        cls,
        slug: str,
        *,
        api_base: Optional[str] = None,
        token: Optional[str] = None,
        session: Optional[requests.Session] = None,
    ) -> "GitHubReleaser":
        """Build a releaser for an ``owner/repo`` slug."""
        base = (api_base or Constants.GITHUB_API_BASE).rstrip("/")
        return cls(f"{base}/repos/{slug.strip('/')}/releases", token=token, session=session)

    def __repr__(self) -> str:
        return f"GitHubReleaser(url={self.url!r})"

    def _get_headers(self) -> Dict[str, str]:
        """Get request headers including authorization if token is available."""
        headers = {
            "Accept": Constants.GITHUB_ACCEPT,
            "User-Agent": Constants.USER_AGENT,
        }
        if self.token:
            headers["Authorization"] = f"token {self.token}"
        return headers

    def get(self, etag: str, timeout: Optional[float] = None) -> Tuple[List[Release], str]:
        """Get the first page of releases, revalidating with ``etag``."""
        res = conditional_get(
            self.url,
            context="github",
            etag=etag,
            headers=self._get_headers(),
            timeout=timeout,
            session=self.session,
        )

        if etag and res.status_code == 304:
            # unchanged; the caller keeps what it already knows
            return [], etag

        if res.status_code != 200:
            raise ReleaseFetchError(
                f"error getting releases: HTTP {res.status_code}",
                status_code=res.status_code,
            )

        try:
            data = json.loads(res.text)
        except ValueError as exc:
            raise ReleaseFetchError(f"malformed releases payload: {exc}", status_code=200) from exc
        if not isinstance(data, list):
            raise ReleaseFetchError("releases payload is not a list", status_code=200)

        releases = [Release.from_dict(item) for item in data if isinstance(item, dict)]
        new_etag = res.headers.get("ETag", "") or ""
        logger.debug("Fetched %d releases from %s", len(releases), self.url)
        return releases, new_etag
