"""
Tests for assetfind.finders.gitlab module.

Tests the GitLab release finder including:
- Permalink lookup for the latest release
- Path escaping of project and tag
- 404 on an exact tag (NoMatchError, no fallback search)
- Recency floor and latest upcoming-release resolution
"""

from __future__ import annotations

from datetime import datetime, timezone

import pytest
import requests
import requests_mock

from assetfind.exceptions import (
    ConfigError,
    DecodeError,
    GitlabError,
    NoMatchError,
    NoUpgradeError,
    TransportError,
)
from assetfind.finders import GitlabAssetFinder

PROJECT = "https://gitlab.com/api/v4/projects/g%2Fp"


class TestLookup:
    """Tests for latest and exact tag lookups."""

    def test_latest_uses_permalink(self, getter, make_gitlab_release):
        """Test that latest is requested via releases/permalink/latest."""
        release = make_gitlab_release(
            "v1.2", assets=["https://dl.example.com/a", "https://dl.example.com/b"]
        )

        with requests_mock.Mocker() as m:
            m.get(f"{PROJECT}/releases/permalink/latest", json=release)
            urls = GitlabAssetFinder(repo="g/p", get=getter).find()

        assert urls == ["https://dl.example.com/a", "https://dl.example.com/b"]
        assert m.last_request.url == f"{PROJECT}/releases/permalink/latest"

    def test_project_path_is_escaped(self, getter, make_gitlab_release):
        """Test that nested group paths are sent as a single path segment."""
        with requests_mock.Mocker() as m:
            m.get(
                "https://gitlab.com/api/v4/projects/a%2Fb%2Fc"
                "/releases/permalink/latest",
                json=make_gitlab_release("v1"),
            )
            GitlabAssetFinder(repo="a/b/c", get=getter).find()

        assert "/projects/a%2Fb%2Fc/releases/" in m.last_request.url

    def test_project_with_spaces_is_escaped(self, getter, make_gitlab_release):
        """Test that spaces in the project path become %20, slashes %2F."""
        url = (
            "https://gitlab.com/api/v4/projects/my%20group%2Fmy%20project"
            "/releases/permalink/latest"
        )
        with requests_mock.Mocker() as m:
            m.get(url, json=make_gitlab_release("v1"))
            GitlabAssetFinder(repo="my group/my project", get=getter).find()

        assert m.last_request.url == url
        assert "+" not in m.last_request.url

    def test_tag_is_escaped(self, getter, make_gitlab_release):
        """Test that spaces and slashes in a tag are percent-escaped."""
        with requests_mock.Mocker() as m:
            m.get(
                f"{PROJECT}/releases/release%201%2Frc",
                json=make_gitlab_release("release 1/rc"),
            )
            GitlabAssetFinder(repo="g/p", tag="tags/release 1/rc", get=getter).find()

        assert m.last_request.url == f"{PROJECT}/releases/release%201%2Frc"

    def test_empty_assets(self, getter, make_gitlab_release):
        """Test that a release with no links returns an empty list."""
        with requests_mock.Mocker() as m:
            m.get(
                f"{PROJECT}/releases/permalink/latest",
                json=make_gitlab_release("v1", assets=[]),
            )
            urls = GitlabAssetFinder(repo="g/p", get=getter).find()

        assert urls == []

    def test_invalid_tag_format_raises_without_request(self, getter):
        """Test that a malformed selector fails before any request."""
        with requests_mock.Mocker() as m:
            with pytest.raises(ConfigError):
                GitlabAssetFinder(repo="g/p", tag="nightly", get=getter).find()

        assert m.call_count == 0


class TestNotFound:
    """Tests for 404 handling (no substring fallback on GitLab)."""

    def test_exact_tag_404_raises_no_match(self, getter):
        """Test that a missing tag raises NoMatchError after one request."""
        with requests_mock.Mocker() as m:
            m.get(f"{PROJECT}/releases/v9.9", status_code=404, json={})
            with pytest.raises(NoMatchError, match="no matching tag for 'v9.9'"):
                GitlabAssetFinder(repo="g/p", tag="tags/v9.9", get=getter).find()

        assert m.call_count == 1

    def test_latest_404_is_platform_error(self, getter):
        """Test that 404 on the permalink is a GitlabError."""
        with requests_mock.Mocker() as m:
            m.get(
                f"{PROJECT}/releases/permalink/latest",
                status_code=404,
                reason="Not Found",
            )
            with pytest.raises(GitlabError) as exc_info:
                GitlabAssetFinder(repo="g/p", get=getter).find()

        assert exc_info.value.status_code == 404

    def test_other_status_renders_url(self, getter):
        """Test that non-404 errors render the status line and URL."""
        url = f"{PROJECT}/releases/v1"
        with requests_mock.Mocker() as m:
            m.get(url, status_code=401, reason="Unauthorized", text="denied")
            with pytest.raises(GitlabError) as exc_info:
                GitlabAssetFinder(repo="g/p", tag="tags/v1", get=getter).find()

        assert str(exc_info.value) == f"401 Unauthorized (URL: {url})"
        assert exc_info.value.body == b"denied"

    def test_403_has_no_special_rendering(self, getter):
        """Test that GitLab 403 errors use the plain URL rendering."""
        url = f"{PROJECT}/releases/permalink/latest"
        with requests_mock.Mocker() as m:
            m.get(
                url,
                status_code=403,
                reason="Forbidden",
                json={"message": "nope", "documentation_url": "https://docs"},
            )
            with pytest.raises(GitlabError) as exc_info:
                GitlabAssetFinder(repo="g/p", get=getter).find()

        assert str(exc_info.value) == f"403 Forbidden (URL: {url})"


class TestRecencyAndPrerelease:
    """Tests for min_time and upcoming releases."""

    def test_older_release_raises_no_upgrade(self, getter, make_gitlab_release):
        """Test that a release created before min_time is not returned."""
        release = make_gitlab_release("v1", created_at="2024-01-01T10:00:00.000Z")

        with requests_mock.Mocker() as m:
            m.get(f"{PROJECT}/releases/permalink/latest", json=release)
            with pytest.raises(NoUpgradeError):
                GitlabAssetFinder(
                    repo="g/p",
                    min_time=datetime(2024, 1, 2, tzinfo=timezone.utc),
                    get=getter,
                ).find()

    def test_release_without_created_at_is_old(self, getter, make_gitlab_release):
        """Test that a missing created_at counts as older than any floor."""
        release = make_gitlab_release("v1")
        release.pop("created_at")

        with requests_mock.Mocker() as m:
            m.get(f"{PROJECT}/releases/permalink/latest", json=release)
            with pytest.raises(NoUpgradeError):
                GitlabAssetFinder(
                    repo="g/p",
                    min_time=datetime(2000, 1, 1, tzinfo=timezone.utc),
                    get=getter,
                ).find()

    def test_prerelease_latest_resolves_first_listed(
        self, getter, make_gitlab_release
    ):
        """Test that prerelease=True looks up the first tag in the listing."""
        listing = [make_gitlab_release("v2.0-rc1", upcoming=True)]

        with requests_mock.Mocker() as m:
            m.get(f"{PROJECT}/releases", json=listing, complete_qs=True)
            m.get(
                f"{PROJECT}/releases/v2.0-rc1",
                json=make_gitlab_release(
                    "v2.0-rc1", upcoming=True, assets=["https://dl.example.com/rc"]
                ),
            )
            urls = GitlabAssetFinder(repo="g/p", prerelease=True, get=getter).find()

        assert urls == ["https://dl.example.com/rc"]
        assert m.call_count == 2

    def test_prerelease_listing_status_error_is_wrapped(self, getter):
        """Test that a failing listing raises a prefixed GitlabError."""
        with requests_mock.Mocker() as m:
            m.get(
                f"{PROJECT}/releases",
                status_code=403,
                reason="Forbidden",
                complete_qs=True,
            )
            with pytest.raises(GitlabError, match="^pre-release finder: 403 Forbidden"):
                GitlabAssetFinder(repo="g/p", prerelease=True, get=getter).find()

    def test_prerelease_listing_decode_error_is_wrapped(self, getter):
        """Test that an invalid listing carries the pre-release finder prefix."""
        with requests_mock.Mocker() as m:
            m.get(f"{PROJECT}/releases", json={"not": "a list"}, complete_qs=True)
            with pytest.raises(DecodeError, match="^pre-release finder: "):
                GitlabAssetFinder(repo="g/p", prerelease=True, get=getter).find()

    def test_transport_error_propagates(self, getter):
        """Test that connection failures surface as TransportError."""
        with requests_mock.Mocker() as m:
            m.get(
                f"{PROJECT}/releases/permalink/latest",
                exc=requests.exceptions.ConnectionError,
            )
            with pytest.raises(TransportError):
                GitlabAssetFinder(repo="g/p", get=getter).find()
