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

"""GitHub release asset finder for assetfind.

Resolves a repository and tag selector to the download URLs of the release's
assets using the GitHub REST API.

Resolution:

1. **Latest pre-release** - With prerelease=True and the latest selector,
   the unfiltered release list (first page) is fetched and its first tag
   becomes the selector. ``/releases/latest`` never returns pre-releases.
2. **Direct lookup** - ``GET /repos/{repo}/releases/{latest|tags/<tag>}``.
3. **Fallback search** - If an exact tag lookup answers 404, all releases are
   paged through (30 per page) and the first one whose tag *contains* the
   requested tag is used. This finds tags with extra decoration, e.g.
   "v1.0" matches "release-v1.0-final".

Recency Filter:

- With min_time set, a direct match created before min_time raises
  NoUpgradeError ("already up to date").
- In the fallback search, releases older than min_time are skipped, so an
  exhausted search raises NoMatchError instead.

Error Handling:

- TransportError: The getter failed; never retried here
- DecodeError: Response body was not the expected JSON
- GithubError: Non-success status not eligible for the fallback; HTTP 403
  renders the API's message and documentation URL
- NoUpgradeError: Matched release is not newer than min_time
- NoMatchError: Fallback search exhausted without a match

Example:
    ```python
    from datetime import datetime, timezone
    from assetfind.finders import GithubAssetFinder
    from assetfind.exceptions import NoUpgradeError

    finder = GithubAssetFinder(
        repo="zyedidia/eget",
        tag="tags/v1.3.3",
        min_time=datetime(2023, 1, 1, tzinfo=timezone.utc),
    )
    try:
        urls = finder.find()
    except NoUpgradeError:
        urls = []
    ```

Note:
    Repository names are inserted into the URL as-is. GitHub owner/name
    pairs never need escaping.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from http import HTTPStatus

from assetfind.exceptions import (
    DecodeError,
    GithubError,
    NoMatchError,
    NoUpgradeError,
    TransportError,
)
from assetfind.io.http import Getter, decode_json, default_getter, fetch
from assetfind.logging import get_global_logger

from .base import PRERELEASE_CONTEXT, TagSelector, is_before, register_finder
from .release import parse_github_release

API_ROOT = "https://api.github.com"

# GitHub's default page size for the release listing
PAGE_SIZE = 30


@dataclass(frozen=True)
class GithubAssetFinder:
    """Find release assets for a GitHub repository.

    Attributes:
        repo: Repository in "owner/name" form.
        tag: TagSelector, or the string form "latest" / "tags/<tag>".
        prerelease: Consider pre-releases (and resolve "latest" to the newest
            release of any kind).
        min_time: Only accept releases created at or after this time.
        get: Injected HTTP getter. Defaults to a shared retrying session.
    """

    repo: str
    tag: TagSelector | str = "latest"
    prerelease: bool = False
    min_time: datetime | None = None
    get: Getter | None = field(default=None, repr=False, compare=False)

    def find(self) -> list[str]:
        logger = get_global_logger()
        get = self.get or default_getter()
        selector = TagSelector.parse(self.tag)

        if self.prerelease and selector.is_latest:
            selector = TagSelector.exact(self._latest_tag(get))
            logger.verbose("GITHUB", f"Newest release (any kind): {selector.tag}")

        url = f"{API_ROOT}/repos/{self.repo}/releases/{selector}"
        logger.verbose("GITHUB", f"Fetching release from: {url}")
        response, body = fetch(get, url)

        if response.status_code != HTTPStatus.OK:
            if (
                response.status_code == HTTPStatus.NOT_FOUND
                and not selector.is_latest
            ):
                logger.verbose(
                    "GITHUB",
                    f"No exact tag {selector.tag!r}, searching all releases",
                )
                return self.find_match(selector.tag, get)
            raise GithubError.from_response(response, url)

        release = parse_github_release(decode_json(body, url, dict))
        logger.verbose(
            "GITHUB", f"Release {release.tag} has {len(release.asset_urls)} asset(s)"
        )

        if is_before(release.created_at, self.min_time):
            logger.verbose(
                "GITHUB", f"Release {release.tag} is older than {self.min_time}"
            )
            raise NoUpgradeError()

        return list(release.asset_urls)

    def find_match(self, tag: str, get: Getter | None = None) -> list[str]:
        """Page through all releases for the first tag containing 'tag'.

        Args:
            tag: Bare tag to search for (substring match, not equality).
            get: HTTP getter. Defaults to the finder's getter.

        Returns:
            Asset URLs of the first matching release.

        Raises:
            NoMatchError: If the last page is reached without a match.
            GithubError: If a listing page answers with a non-success status.

        """
        logger = get_global_logger()
        get = get or self.get or default_getter()

        page = 1
        while True:
            url = f"{API_ROOT}/repos/{self.repo}/releases?page={page}"
            logger.debug("GITHUB", f"Fetching release page {page}: {url}")
            response, body = fetch(get, url)
            if response.status_code != HTTPStatus.OK:
                raise GithubError.from_response(response, url)

            releases = [
                parse_github_release(item) for item in decode_json(body, url, list)
            ]

            for release in releases:
                if release.is_prerelease and not self.prerelease:
                    continue
                if tag in release.tag and not is_before(
                    release.created_at, self.min_time
                ):
                    logger.verbose("GITHUB", f"Matched release tag: {release.tag}")
                    return list(release.asset_urls)

            if len(releases) < PAGE_SIZE:
                break
            page += 1

        raise NoMatchError(f"no matching tag for '{tag}'")

    def _latest_tag(self, get: Getter) -> str:
        """Return the tag of the newest release, pre-releases included."""
        url = f"{API_ROOT}/repos/{self.repo}/releases"
        try:
            response, body = fetch(get, url)
            if response.status_code != HTTPStatus.OK:
                raise GithubError.from_response(
                    response, url, prefix=PRERELEASE_CONTEXT
                )
            releases = [
                parse_github_release(item) for item in decode_json(body, url, list)
            ]
        except TransportError as err:
            raise TransportError(f"{PRERELEASE_CONTEXT}{err}") from err
        except DecodeError as err:
            raise DecodeError(f"{PRERELEASE_CONTEXT}{err}") from err

        if not releases:
            raise NoMatchError(f"{PRERELEASE_CONTEXT}no releases found")
        return releases[0].tag


# Register this finder when the module is imported
register_finder("github", GithubAssetFinder)
