"""
Pytest configuration and shared fixtures for assetfind tests.

This module provides reusable fixtures and test utilities used across
the test suite.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

import pytest
import yaml

from assetfind.io import make_getter
from assetfind.logging import SilentLogger, set_global_logger


@pytest.fixture(autouse=True)
def silent_logger():
    """Reset the global logger so CLI tests don't leak verbosity."""
    set_global_logger(SilentLogger())
    yield
    set_global_logger(SilentLogger())


@pytest.fixture
def tmp_test_dir(tmp_path: Path) -> Path:
    """
    Provide a temporary directory for test artifacts.

    Automatically cleaned up after test completion.
    """
    return tmp_path


@pytest.fixture
def getter():
    """Provide an HTTP getter without a token (works under requests_mock)."""
    return make_getter(token=None)


@pytest.fixture
def create_yaml_file(tmp_test_dir: Path):
    """
    Factory fixture for creating temporary YAML files.

    Usage:
        yaml_path = create_yaml_file("assetfind.yaml", {"key": "value"})
    """

    def _create(filename: str, data: dict[str, Any]) -> Path:
        path = tmp_test_dir / filename
        path.parent.mkdir(parents=True, exist_ok=True)
        with path.open("w", encoding="utf-8") as f:
            yaml.dump(data, f)
        return path

    return _create


def github_release(
    tag: str,
    created_at: str = "2024-06-01T00:00:00Z",
    prerelease: bool = False,
    assets: list[str] | None = None,
) -> dict[str, Any]:
    """Build a GitHub release payload."""
    if assets is None:
        assets = [f"https://github.com/o/r/releases/download/{tag}/tool.tar.gz"]
    return {
        "tag_name": tag,
        "created_at": created_at,
        "prerelease": prerelease,
        "assets": [
            {"name": a.rsplit("/", 1)[-1], "browser_download_url": a} for a in assets
        ],
    }


def gitlab_release(
    tag: str,
    created_at: str = "2024-06-01T00:00:00.000Z",
    upcoming: bool = False,
    assets: list[str] | None = None,
) -> dict[str, Any]:
    """Build a GitLab release payload."""
    if assets is None:
        assets = [f"https://gitlab.com/g/p/-/releases/{tag}/downloads/tool.tar.gz"]
    return {
        "tag_name": tag,
        "created_at": created_at,
        "upcoming_release": upcoming,
        "assets": {
            "count": len(assets),
            "links": [{"name": "tool", "direct_asset_url": a} for a in assets],
        },
    }


@pytest.fixture
def make_github_release():
    """Factory fixture for GitHub release payloads."""
    return github_release


@pytest.fixture
def make_gitlab_release():
    """Factory fixture for GitLab release payloads."""
    return gitlab_release
