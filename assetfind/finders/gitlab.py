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

"""GitLab release asset finder for assetfind.

Same contract as the GitHub finder, against the GitLab v4 API:

- Latest:      ``/projects/{id}/releases/permalink/latest``
- Exact tag:   ``/projects/{id}/releases/{tag}``
- Listing:     ``/projects/{id}/releases`` (latest pre-release only)

The project id (numeric id or "group/subgroup/project" path) and the tag are
percent-escaped into the path, so "/" becomes "%2F" as GitLab requires.

Note:
    Unlike the GitHub finder there is no fallback search: a 404 on an exact
    tag lookup raises NoMatchError right away, without listing releases.
    Assets are read from ``assets.links[].direct_asset_url``; GitLab's
    ``upcoming_release`` flag is treated as the prerelease marker.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from http import HTTPStatus
from urllib.parse import quote

from assetfind.exceptions import (
    DecodeError,
    GitlabError,
    NoMatchError,
    NoUpgradeError,
    TransportError,
)
from assetfind.io.http import Getter, decode_json, default_getter, fetch
from assetfind.logging import get_global_logger

from .base import PRERELEASE_CONTEXT, TagSelector, is_before, register_finder
from .release import parse_gitlab_release

API_ROOT = "https://gitlab.com/api/v4"


def _escape(value: str) -> str:
    return quote(value, safe="")


@dataclass(frozen=True)
class GitlabAssetFinder:
    """Find release assets for a GitLab project.

    Attributes:
        repo: Project path ("group/project") or numeric project id.
        tag: TagSelector, or the string form "latest" / "tags/<tag>".
        prerelease: Resolve "latest" to the newest release of any kind.
        min_time: Only accept releases created at or after this time.
        get: Injected HTTP getter. Defaults to a shared retrying session.
    """

    repo: str
    tag: TagSelector | str = "latest"
    prerelease: bool = False
    min_time: datetime | None = None
    get: Getter | None = field(default=None, repr=False, compare=False)

    @property
    def project_url(self) -> str:
        return f"{API_ROOT}/projects/{_escape(self.repo)}"

    def find(self) -> list[str]:
        logger = get_global_logger()
        selector = TagSelector.parse(self.tag)
        get = self.get or default_getter()

        if self.prerelease and selector.is_latest:
            selector = TagSelector.exact(self._latest_tag(get))
            logger.verbose("GITLAB", f"Newest release (any kind): {selector.tag}")

        if selector.is_latest:
            url = f"{self.project_url}/releases/permalink/latest"
        else:
            url = f"{self.project_url}/releases/{_escape(selector.tag)}"

        logger.verbose("GITLAB", f"Fetching release from: {url}")
        response, body = fetch(get, url)

        if response.status_code != HTTPStatus.OK:
            if (
                response.status_code == HTTPStatus.NOT_FOUND
                and not selector.is_latest
            ):
                raise NoMatchError(f"no matching tag for '{selector.tag}'")
            raise GitlabError.from_response(response, url)

        release = parse_gitlab_release(decode_json(body, url, dict))
        logger.verbose(
            "GITLAB", f"Release {release.tag} has {len(release.asset_urls)} asset(s)"
        )

        if is_before(release.created_at, self.min_time):
            raise NoUpgradeError()

        return list(release.asset_urls)

    def _latest_tag(self, get: Getter) -> str:
        """Return the tag of the newest release, upcoming releases included."""
        url = f"{self.project_url}/releases"
        try:
            response, body = fetch(get, url)
            if response.status_code != HTTPStatus.OK:
                raise GitlabError.from_response(
                    response, url, prefix=PRERELEASE_CONTEXT
                )
            releases = [
                parse_gitlab_release(item) for item in decode_json(body, url, list)
            ]
        except TransportError as err:
            raise TransportError(f"{PRERELEASE_CONTEXT}{err}") from err
        except DecodeError as err:
            raise DecodeError(f"{PRERELEASE_CONTEXT}{err}") from err

        if not releases:
            raise NoMatchError(f"{PRERELEASE_CONTEXT}no releases found")
        return releases[0].tag


# Register this finder when the module is imported
register_finder("gitlab", GitlabAssetFinder)
