# Copyright 2025 Roger Cibrian
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

"""Core orchestration for assetfind.

This module turns a project string plus options into exactly one finder and
runs it.

Project Forms:

- ``https://example.com/tool.tar.gz`` - any other URL: direct finder
- ``https://github.com/owner/repo`` or ``github.com/owner/repo`` - GitHub
- ``https://gitlab.com/group/sub/project`` or ``gitlab.com/...`` - GitLab
- ``owner/repo`` - the configured platform (GitHub by default)

With ``source=True`` the source tarball finder for the platform is used
instead of the releases API. The tarball defaults to the "master" branch
when no tag is given and is named after the repository.

Example:
    Programmatic usage:
        ```python
        from assetfind.core import find_assets

        result = find_assets("zyedidia/eget", tag="v1.3.3")
        if result.status == "up_to_date":
            print("nothing to do")
        for url in result.urls:
            print(url)
        ```

"""

from __future__ import annotations

from datetime import date, datetime, time
from pathlib import Path
from typing import Any
from urllib.parse import urlparse

from assetfind.config import OPTION_KEYS, load_effective_config
from assetfind.exceptions import ConfigError, DecodeError, NoUpgradeError
from assetfind.finders import Finder, TagSelector, get_finder_class
from assetfind.finders.release import parse_timestamp
from assetfind.io import Getter, make_getter, resolve_token
from assetfind.logging import get_global_logger
from assetfind.results import FindResult

PLATFORMS = ("github", "gitlab")

_PLATFORM_HOSTS = {
    "github.com": "github",
    "www.github.com": "github",
    "gitlab.com": "gitlab",
    "www.gitlab.com": "gitlab",
}

DEFAULT_SOURCE_REF = "master"

_BOOL_KEYS = ("prerelease", "source")
_STR_KEYS = ("tag", "github_token")


def parse_min_time(value: Any) -> datetime | None:
    """Convert a config or CLI value to an aware UTC datetime.

    Accepts None, datetime, date (midnight UTC) or an ISO-8601 / RFC 3339
    string. Naive values are taken as UTC.

    Raises:
        ConfigError: If the value cannot be interpreted as a time.
    """
    if value is None or value == "":
        return None
    if isinstance(value, date) and not isinstance(value, datetime):
        value = datetime.combine(value, time.min)
    if not isinstance(value, (str, datetime)):
        raise ConfigError(f"min_time must be a timestamp, got {value!r}")
    try:
        return parse_timestamp(value)
    except DecodeError as err:
        raise ConfigError(f"invalid min_time: {value!r}") from err


def check_options(
    where: str, options: dict[str, Any]
) -> tuple[list[str], list[str]]:
    """Check one options mapping. Returns (errors, warnings).

    Unknown keys are warnings. Wrong types, an unknown platform or an
    unparsable min_time are errors.
    """
    errors = []
    warnings = []

    for key in options:
        if key not in OPTION_KEYS:
            warnings.append(f"{where}: unknown option {key!r}")

    for key in _BOOL_KEYS:
        if key in options and not isinstance(options[key], bool):
            errors.append(f"{where}.{key} must be true or false")

    for key in _STR_KEYS:
        if key in options and not isinstance(options[key], (str, int, float)):
            errors.append(f"{where}.{key} must be a string")

    if "platform" in options and options["platform"] not in PLATFORMS:
        errors.append(f"{where}.platform must be one of: {', '.join(PLATFORMS)}")

    if "min_time" in options:
        try:
            parse_min_time(options["min_time"])
        except ConfigError as err:
            errors.append(f"{where}.min_time: {err}")

    return errors, warnings


def parse_project(project: str, platform: str | None = None) -> tuple[str, str]:
    """Classify a project string.

    Args:
        project: Repo, repo URL or direct download URL.
        platform: Platform for bare repos ("github" or "gitlab"). Defaults
            to "github".

    Returns:
        A tuple (kind, target) where kind is "direct", "github" or "gitlab"
            and target is the URL (direct) or the repo path.

    Raises:
        ConfigError: For an unknown platform or a malformed repo.

    """
    project = project.strip()
    if not project:
        raise ConfigError("project cannot be empty")

    if project.startswith(("http://", "https://")):
        parsed = urlparse(project)
        kind = _PLATFORM_HOSTS.get((parsed.hostname or "").lower())
        repo = _repo_from_path(kind, parsed.path) if kind else None
        if repo is None:
            return "direct", project
        return kind, repo

    host, _, rest = project.partition("/")
    if host.lower() in _PLATFORM_HOSTS and rest:
        kind = _PLATFORM_HOSTS[host.lower()]
        repo = _repo_from_path(kind, rest)
        if repo is None:
            raise ConfigError(f"not a repository path: {project!r}")
        return kind, repo

    kind = platform or "github"
    if kind not in PLATFORMS:
        raise ConfigError(
            f"Unknown platform: {kind!r}. Available: {', '.join(PLATFORMS)}"
        )
    if kind == "github" and project.count("/") != 1:
        raise ConfigError(
            f"Invalid repo format: {project!r}. Expected 'owner/repository'"
        )
    return kind, project


def _repo_from_path(kind: str, path: str) -> str | None:
    """Extract the repo from a URL path, or None if it points at a file."""
    path = path.strip("/")
    if path.endswith(".git"):
        path = path[: -len(".git")]
    parts = [p for p in path.split("/") if p]
    if kind == "github":
        return "/".join(parts) if len(parts) == 2 else None
    # GitLab allows nested groups; "/-/" starts a sub-page (files, archives)
    if len(parts) < 2 or "-" in parts:
        return None
    return "/".join(parts)


def select_finder(
    project: str,
    *,
    tag: str | None = None,
    prerelease: bool = False,
    min_time: datetime | None = None,
    source: bool = False,
    platform: str | None = None,
    get: Getter | None = None,
) -> tuple[str, Finder]:
    """Build the finder for a project.

    Args:
        project: Repo, repo URL or direct download URL.
        tag: Exact tag to look up. None means the latest release.
        prerelease: Consider pre-releases.
        min_time: Only accept releases created at or after this time.
        source: Use the source tarball instead of release assets.
        platform: Platform for bare repos ("github" or "gitlab").
        get: HTTP getter injected into API finders.

    Returns:
        A tuple (name, finder) where name is the finder's registry name.

    Raises:
        ConfigError: For malformed projects or unknown platforms.

    """
    kind, target = parse_project(project, platform)

    if kind == "direct":
        return "direct", get_finder_class("direct")(url=target)

    if source:
        name = f"{kind}_source"
        tool = target.rsplit("/", 1)[-1]
        finder_class = get_finder_class(name)
        return name, finder_class(
            tool=tool, repo=target, tag=tag or DEFAULT_SOURCE_REF
        )

    selector = TagSelector.exact(tag) if tag else TagSelector.latest()
    finder_class = get_finder_class(kind)
    return kind, finder_class(
        repo=target,
        tag=selector,
        prerelease=prerelease,
        min_time=min_time,
        get=get,
    )


def find_assets(
    project: str,
    *,
    config_path: Path | None = None,
    tag: str | None = None,
    prerelease: bool | None = None,
    source: bool | None = None,
    platform: str | None = None,
    min_time: Any = None,
    get: Getter | None = None,
) -> FindResult:
    """Resolve a project to its candidate asset URLs.

    Explicit arguments override values from the config file; None means
    "not given".

    Args:
        project: Repo, repo URL or direct download URL.
        config_path: Config file (default location if None).
        tag: Exact tag to look up.
        prerelease: Consider pre-releases.
        source: Use the source tarball.
        platform: Platform for bare repos.
        min_time: Floor for release creation time.
        get: HTTP getter. Built from the config's github_token if omitted.

    Returns:
        A FindResult. A release that is not newer than min_time is reported
            with status "up_to_date" and no URLs.

    Raises:
        ConfigError: If a config value has the wrong type or is invalid.
        AssetFindError: Any other failure from config loading or the finder.

    """
    logger = get_global_logger()
    options = load_effective_config(config_path, project)
    errors, _ = check_options("config", options)
    if errors:
        raise ConfigError("; ".join(errors))

    def pick(key: str, value: Any) -> Any:
        return options.get(key) if value is None else value

    floor = parse_min_time(pick("min_time", min_time))
    tag = pick("tag", tag)
    if tag is not None:
        tag = str(tag)
    if get is None:
        get = make_getter(resolve_token(options.get("github_token")))

    name, finder = select_finder(
        project,
        tag=tag,
        prerelease=bool(pick("prerelease", prerelease)),
        min_time=floor,
        source=bool(pick("source", source)),
        platform=pick("platform", platform),
        get=get,
    )
    logger.verbose("FINDER", f"Using {name} finder: {finder!r}")

    try:
        urls = finder.find()
    except NoUpgradeError:
        logger.verbose("FINDER", f"{project} is up to date")
        return FindResult(project=project, finder=name, urls=[], status="up_to_date")

    logger.verbose("FINDER", f"Found {len(urls)} asset(s)")
    return FindResult(project=project, finder=name, urls=urls, status="success")
