"""Tests for the GitHub releases client."""

import json
from unittest.mock import MagicMock, patch

import pytest
import requests

from whatsnew.errors import ReleaseFetchError
from whatsnew.models import Release
from whatsnew.releases import GitHubReleaser

URL = "https://api.github.com/repos/you/your-app/releases"


def make_response(status_code=200, data=None, text=None, headers=None):
    """Helper to build a fake requests response."""
    response = MagicMock()
    response.status_code = status_code
    if text is None:
        text = json.dumps(data) if data is not None else ""
    response.text = text
    response.headers = headers or {}
    return response


@pytest.fixture
def session():
    return MagicMock(spec=requests.Session)


@pytest.fixture(autouse=True)
def no_env_token(monkeypatch):
    monkeypatch.delenv("GITHUB_TOKEN", raising=False)


class TestGitHubReleaserUrl:
    """Tests for endpoint construction."""

    def test_for_slug(self):
        assert GitHubReleaser.for_slug("you/your-app").url == URL

    def test_for_slug_custom_api_base(self):
        releaser = GitHubReleaser.for_slug("/org/tool/", api_base="https://ghe.example.com/api/v3/")
        assert releaser.url == "https://ghe.example.com/api/v3/repos/org/tool/releases"


class TestGitHubReleaserHeaders:
    """Tests for request headers."""

    def test_unconditional_request(self, session):
        session.get.return_value = make_response(data=[])
        GitHubReleaser(URL, session=session).get("")

        headers = session.get.call_args.kwargs["headers"]
        assert headers["Accept"] == "application/vnd.github.v3+json"
        assert "If-None-Match" not in headers
        assert "Authorization" not in headers

    def test_sends_etag(self, session):
        session.get.return_value = make_response(status_code=304)
        GitHubReleaser(URL, session=session).get('W/"abc"')

        assert session.get.call_args.kwargs["headers"]["If-None-Match"] == 'W/"abc"'

    def test_token_from_argument(self, session):
        session.get.return_value = make_response(data=[])
        GitHubReleaser(URL, token="t0k", session=session).get("")

        assert session.get.call_args.kwargs["headers"]["Authorization"] == "token t0k"

    def test_token_from_environment(self, session, monkeypatch):
        monkeypatch.setenv("GITHUB_TOKEN", "env-token")
        session.get.return_value = make_response(data=[])
        GitHubReleaser(URL, session=session).get("")

        assert session.get.call_args.kwargs["headers"]["Authorization"] == "token env-token"

    def test_timeout_forwarded(self, session):
        session.get.return_value = make_response(data=[])
        GitHubReleaser(URL, session=session).get("", timeout=2.5)

        assert session.get.call_args.kwargs["timeout"] == 2.5


class TestGitHubReleaserResponses:
    """Tests for response handling."""

    def test_parses_releases_and_etag(self, session):
        session.get.return_value = make_response(
            data=[
                {"tag_name": "v1.1.0", "draft": False, "prerelease": False, "name": "ignored"},
                {"tag_name": "v1.2.0-rc.1", "prerelease": True},
                {"tag_name": "v2.0.0", "draft": True},
            ],
            headers={"ETag": 'W/"new"'},
        )

        releases, etag = GitHubReleaser(URL, session=session).get("")

        assert releases == [
            Release("v1.1.0"),
            Release("v1.2.0-rc.1", prerelease=True),
            Release("v2.0.0", draft=True),
        ]
        assert etag == 'W/"new"'

    def test_missing_etag_header(self, session):
        session.get.return_value = make_response(data=[{"tag_name": "v1.0.0"}])
        _, etag = GitHubReleaser(URL, session=session).get("")
        assert etag == ""

    def test_not_modified_returns_empty_and_same_etag(self, session):
        session.get.return_value = make_response(status_code=304)
        releases, etag = GitHubReleaser(URL, session=session).get("old")
        assert releases == []
        assert etag == "old"

    def test_not_modified_without_etag_is_error(self, session):
        session.get.return_value = make_response(status_code=304)
        with pytest.raises(ReleaseFetchError):
            GitHubReleaser(URL, session=session).get("")

    @pytest.mark.parametrize("status", [403, 404, 500])
    def test_error_status(self, session, status):
        session.get.return_value = make_response(status_code=status)
        with pytest.raises(ReleaseFetchError) as excinfo:
            GitHubReleaser(URL, session=session).get("")
        assert excinfo.value.status_code == status

    def test_malformed_json(self, session):
        session.get.return_value = make_response(text="<html>")
        with pytest.raises(ReleaseFetchError, match="malformed"):
            GitHubReleaser(URL, session=session).get("")

    def test_non_list_payload(self, session):
        session.get.return_value = make_response(data={"message": "Not Found"})
        with pytest.raises(ReleaseFetchError):
            GitHubReleaser(URL, session=session).get("")

    def test_timeout_raises_fetch_error(self, session):
        session.get.side_effect = requests.Timeout("slow")
        with pytest.raises(ReleaseFetchError, match="timed out"):
            GitHubReleaser(URL, session=session).get("")

    def test_connection_error_raises_fetch_error(self, session):
        session.get.side_effect = requests.ConnectionError("refused")
        with pytest.raises(ReleaseFetchError, match="connection error"):
            GitHubReleaser(URL, session=session).get("")

    @patch("whatsnew.common.http_client.requests.get")
    def test_uses_requests_without_session(self, mock_get):
        mock_get.return_value = make_response(data=[{"tag_name": "v0.99.0"}], headers={"ETag": "e"})

        releases, etag = GitHubReleaser(URL).get("")

        assert releases == [Release("v0.99.0")]
        assert mock_get.call_args.args[0] == URL
