"""
Tests for assetfind.core module.

Tests finder selection and orchestration including:
- Project classification (repo, repo URL, direct URL)
- Finder construction from options
- Config and argument precedence
- Up-to-date reporting
"""

from __future__ import annotations

from datetime import date, datetime, timezone

import pytest
import requests_mock

from assetfind.core import (
    find_assets,
    parse_min_time,
    parse_project,
    select_finder,
)
from assetfind.exceptions import ConfigError, NoMatchError
from assetfind.finders import (
    DirectAssetFinder,
    GithubAssetFinder,
    GithubSourceFinder,
    GitlabAssetFinder,
    GitlabSourceFinder,
    TagSelector,
)

GITHUB_API = "https://api.github.com/repos/o/r"


class TestParseProject:
    """Tests for project string classification."""

    @pytest.mark.parametrize(
        "project, expected",
        [
            ("o/r", ("github", "o/r")),
            ("https://github.com/o/r", ("github", "o/r")),
            ("https://github.com/o/r.git", ("github", "o/r")),
            ("https://www.github.com/o/r/", ("github", "o/r")),
            ("github.com/o/r", ("github", "o/r")),
            ("https://gitlab.com/g/sub/p", ("gitlab", "g/sub/p")),
            ("gitlab.com/g/p", ("gitlab", "g/p")),
        ],
    )
    def test_repos(self, project, expected):
        """Test repo forms that resolve to a platform."""
        assert parse_project(project) == expected

    @pytest.mark.parametrize(
        "project",
        [
            "https://example.com/tool-1.0.tar.gz",
            "https://github.com/o/r/releases/download/v1/tool.zip",
            "https://gitlab.com/g/p/-/archive/v1/p.tar.gz",
            "http://internal.example/bin/tool",
        ],
    )
    def test_direct_urls(self, project):
        """Test that URLs not naming a repo are direct downloads."""
        assert parse_project(project) == ("direct", project)

    def test_platform_for_bare_repo(self):
        """Test that platform applies to bare repos only."""
        assert parse_project("g/sub/p", "gitlab") == ("gitlab", "g/sub/p")
        assert parse_project("github.com/o/r", "gitlab") == ("github", "o/r")

    def test_unknown_platform(self):
        """Test that an unknown platform raises ConfigError."""
        with pytest.raises(ConfigError, match="Unknown platform"):
            parse_project("o/r", "bitbucket")

    @pytest.mark.parametrize("project", ["eget", "o/r/extra", "", "   "])
    def test_invalid_github_repo(self, project):
        """Test malformed GitHub repos."""
        with pytest.raises(ConfigError):
            parse_project(project)

    def test_host_prefix_without_repo(self):
        """Test that github.com/<path> must name a repo."""
        with pytest.raises(ConfigError, match="not a repository path"):
            parse_project("github.com/o/r/tree/main")


class TestParseMinTime:
    """Tests for min_time conversion."""

    def test_none(self):
        """Test that no value means no floor."""
        assert parse_min_time(None) is None
        assert parse_min_time("") is None

    def test_string(self):
        """Test RFC 3339 strings."""
        assert parse_min_time("2024-01-01T00:00:00Z") == datetime(
            2024, 1, 1, tzinfo=timezone.utc
        )

    def test_date(self):
        """Test that a date means midnight UTC."""
        assert parse_min_time(date(2024, 1, 1)) == datetime(
            2024, 1, 1, tzinfo=timezone.utc
        )

    def test_naive_datetime(self):
        """Test that naive datetimes are taken as UTC."""
        assert parse_min_time(datetime(2024, 1, 1, 12)).tzinfo == timezone.utc

    @pytest.mark.parametrize("value", ["soon", 12345, [2024]])
    def test_invalid(self, value):
        """Test that other values raise ConfigError."""
        with pytest.raises(ConfigError):
            parse_min_time(value)


class TestSelectFinder:
    """Tests for finder construction."""

    def test_direct(self):
        """Test that a direct URL gets the direct finder."""
        name, finder = select_finder("https://example.com/a.zip")
        assert name == "direct"
        assert finder == DirectAssetFinder("https://example.com/a.zip")

    def test_github_latest(self):
        """Test that no tag selects the latest release."""
        name, finder = select_finder("o/r")
        assert name == "github"
        assert isinstance(finder, GithubAssetFinder)
        assert finder.tag == TagSelector.latest()

    def test_github_exact_tag(self):
        """Test that a bare tag becomes an exact selector."""
        floor = datetime(2024, 1, 1, tzinfo=timezone.utc)
        _, finder = select_finder("o/r", tag="v1.0", prerelease=True, min_time=floor)
        assert finder.tag == TagSelector.exact("v1.0")
        assert finder.prerelease is True
        assert finder.min_time == floor

    def test_gitlab(self):
        """Test that GitLab repos get the GitLab finder."""
        name, finder = select_finder("https://gitlab.com/g/p")
        assert name == "gitlab"
        assert isinstance(finder, GitlabAssetFinder)
        assert finder.repo == "g/p"

    def test_github_source(self):
        """Test the source tarball finder with a tag."""
        name, finder = select_finder("o/eget", tag="v1.3.3", source=True)
        assert name == "github_source"
        assert finder == GithubSourceFinder(tool="eget", repo="o/eget", tag="v1.3.3")

    def test_source_default_ref(self):
        """Test that source without a tag uses the default branch ref."""
        _, finder = select_finder("g/sub/cli", source=True, platform="gitlab")
        assert finder == GitlabSourceFinder(tool="cli", repo="g/sub/cli", tag="master")

    def test_source_ignored_for_direct(self):
        """Test that direct URLs stay direct even with source set."""
        name, _ = select_finder("https://example.com/a.zip", source=True)
        assert name == "direct"

    def test_getter_injected(self, getter):
        """Test that the getter is passed through to API finders."""
        _, finder = select_finder("o/r", get=getter)
        assert finder.get is getter


class TestFindAssets:
    """Tests for the find_assets orchestration."""

    def test_success(self, tmp_test_dir, getter, make_github_release, monkeypatch):
        """Test a plain latest lookup without a config file."""
        monkeypatch.setenv("ASSETFIND_CONFIG", str(tmp_test_dir / "none.yaml"))
        with requests_mock.Mocker() as m:
            m.get(
                f"{GITHUB_API}/releases/latest",
                json=make_github_release("v1", assets=["https://dl.example.com/a"]),
            )
            result = find_assets("o/r", get=getter)

        assert result.status == "success"
        assert result.finder == "github"
        assert result.urls == ["https://dl.example.com/a"]

    def test_direct_makes_no_request(self, tmp_test_dir, getter, monkeypatch):
        """Test that direct URLs never touch the network."""
        monkeypatch.setenv("ASSETFIND_CONFIG", str(tmp_test_dir / "none.yaml"))
        with requests_mock.Mocker() as m:
            result = find_assets("https://example.com/a.zip", get=getter)

        assert result.urls == ["https://example.com/a.zip"]
        assert m.call_count == 0

    def test_up_to_date(self, tmp_test_dir, getter, make_github_release, monkeypatch):
        """Test that NoUpgradeError is reported as status up_to_date."""
        monkeypatch.setenv("ASSETFIND_CONFIG", str(tmp_test_dir / "none.yaml"))
        release = make_github_release("v1", created_at="2023-01-01T00:00:00Z")
        with requests_mock.Mocker() as m:
            m.get(f"{GITHUB_API}/releases/latest", json=release)
            result = find_assets("o/r", min_time="2024-01-01T00:00:00Z", get=getter)

        assert result.status == "up_to_date"
        assert result.urls == []

    def test_config_options_apply(self, create_yaml_file, getter, make_github_release):
        """Test that project options from the config file are used."""
        path = create_yaml_file(
            "assetfind.yaml", {"projects": {"o/r": {"tag": "v1.0"}}}
        )
        with requests_mock.Mocker() as m:
            m.get(
                f"{GITHUB_API}/releases/tags/v1.0", json=make_github_release("v1.0")
            )
            result = find_assets("o/r", config_path=path, get=getter)

        assert result.status == "success"
        assert m.last_request.url == f"{GITHUB_API}/releases/tags/v1.0"

    def test_arguments_override_config(
        self, create_yaml_file, getter, make_github_release
    ):
        """Test that explicit arguments win over config values."""
        path = create_yaml_file(
            "assetfind.yaml", {"projects": {"o/r": {"tag": "v1.0"}}}
        )
        with requests_mock.Mocker() as m:
            m.get(
                f"{GITHUB_API}/releases/tags/v2.0", json=make_github_release("v2.0")
            )
            find_assets("o/r", config_path=path, tag="v2.0", get=getter)

        assert m.last_request.url == f"{GITHUB_API}/releases/tags/v2.0"

    def test_numeric_tag_from_yaml(self, tmp_test_dir, getter, make_github_release):
        """Test that an unquoted numeric YAML tag is used as a string."""
        path = tmp_test_dir / "assetfind.yaml"
        path.write_text("projects:\n  o/r:\n    tag: 1.5\n")
        with requests_mock.Mocker() as m:
            m.get(f"{GITHUB_API}/releases/tags/1.5", json=make_github_release("1.5"))
            find_assets("o/r", config_path=path, get=getter)

        assert m.last_request.url == f"{GITHUB_API}/releases/tags/1.5"

    def test_errors_propagate(self, tmp_test_dir, getter, monkeypatch):
        """Test that finder errors other than NoUpgradeError are raised."""
        monkeypatch.setenv("ASSETFIND_CONFIG", str(tmp_test_dir / "none.yaml"))
        project = "https://gitlab.com/api/v4/projects/g%2Fp"
        with requests_mock.Mocker() as m:
            m.get(f"{project}/releases/v1", status_code=404)
            with pytest.raises(NoMatchError):
                find_assets("g/p", platform="gitlab", tag="v1", get=getter)

    def test_string_boolean_in_config_rejected(
        self, tmp_test_dir, getter, make_github_release
    ):
        """Test that prerelease: "false" raises instead of acting as True."""
        path = tmp_test_dir / "assetfind.yaml"
        path.write_text('defaults:\n  prerelease: "false"\n')
        with requests_mock.Mocker() as m:
            m.get(
                f"{GITHUB_API}/releases",
                json=[make_github_release("v2-rc1", prerelease=True)],
                complete_qs=True,
            )
            with pytest.raises(ConfigError, match="prerelease must be true or false"):
                find_assets("o/r", config_path=path, get=getter)

        assert m.call_count == 0

    def test_bad_source_value_rejected(self, tmp_test_dir, getter):
        """Test that a non-boolean source option raises ConfigError."""
        path = tmp_test_dir / "assetfind.yaml"
        path.write_text("projects:\n  o/r:\n    source: no thanks\n")

        with pytest.raises(ConfigError, match="source must be true or false"):
            find_assets("o/r", config_path=path, get=getter)

    def test_bad_tag_type_rejected(self, tmp_test_dir, getter):
        """Test that a list-valued tag raises ConfigError."""
        path = tmp_test_dir / "assetfind.yaml"
        path.write_text("projects:\n  o/r:\n    tag: [v1, v2]\n")

        with pytest.raises(ConfigError, match="tag must be a string"):
            find_assets("o/r", config_path=path, get=getter)

    def test_false_argument_overrides_config(
        self, create_yaml_file, getter, make_github_release
    ):
        """Test that prerelease=False beats prerelease: true in the config."""
        path = create_yaml_file("assetfind.yaml", {"defaults": {"prerelease": True}})
        with requests_mock.Mocker() as m:
            m.get(f"{GITHUB_API}/releases/latest", json=make_github_release("v1"))
            find_assets("o/r", config_path=path, prerelease=False, get=getter)

        assert m.last_request.url == f"{GITHUB_API}/releases/latest"
        assert m.call_count == 1
