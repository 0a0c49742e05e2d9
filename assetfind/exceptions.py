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

"""Exception hierarchy for assetfind.

This module defines a closed set of error kinds so callers can branch on the
type of failure instead of matching message strings:

- ConfigError: Invalid tag selectors, unknown platforms, bad config files
- TransportError: The injected HTTP getter failed (connection, timeout, ...)
- DecodeError: A response body was not the JSON shape we expected
- PlatformError: A release API answered with a non-success status
    (GithubError, GitlabError)
- NoUpgradeError: The resolved release is older than the caller's floor
- NoMatchError: No release tag matched the requested selector

All exceptions inherit from AssetFindError, allowing users to catch every
assetfind error with a single except clause if needed.

Example:
    Treating "already up to date" as a non-fatal condition:
        ```python
        from assetfind.exceptions import AssetFindError, NoUpgradeError

        try:
            urls = finder.find()
        except NoUpgradeError:
            print("Already up to date")
        except AssetFindError as e:
            print(f"Error: {e}")
        ```
"""

from __future__ import annotations

from http import HTTPStatus
import json

__all__ = [
    "AssetFindError",
    "ConfigError",
    "TransportError",
    "DecodeError",
    "PlatformError",
    "GithubError",
    "GitlabError",
    "NoUpgradeError",
    "NoMatchError",
]


class AssetFindError(Exception):
    """Base exception for all assetfind errors."""

    pass


class ConfigError(AssetFindError):
    """Raised for configuration-related errors.

    This exception is raised when there are problems with:

    - Tag selectors that are neither "latest" nor "tags/<tag>"
    - Unknown platform or finder names
    - Config file parse errors or invalid option values

    No network request is made before this error is raised.
    """

    pass


class TransportError(AssetFindError):
    """Raised when the HTTP getter or the body read fails.

    The original exception is always chained (``raise ... from err``). The
    finders never retry; retry policy belongs to the transport.
    """

    pass


class DecodeError(AssetFindError):
    """Raised when a response body is not valid JSON of the expected shape."""

    pass


class PlatformError(AssetFindError):
    """A release API answered with a non-success HTTP status.

    Attributes:
        status_code: Numeric HTTP status (e.g., 403).
        status_text: Human readable status line (e.g., "403 Forbidden").
        body: Raw response body.
        url: The request URL that failed.
        prefix: Context prepended to the message (e.g., "pre-release finder: ").
    """

    def __init__(
        self,
        status_code: int,
        status_text: str,
        body: bytes,
        url: str,
        prefix: str = "",
    ) -> None:
        self.status_code = status_code
        self.status_text = status_text
        self.body = body
        self.url = url
        self.prefix = prefix
        super().__init__(str(self))

    def _render(self) -> str:
        return f"{self.status_text} (URL: {self.url})"

    def __str__(self) -> str:
        return f"{self.prefix}{self._render()}"

    @classmethod
    def from_response(cls, response, url: str, prefix: str = "") -> PlatformError:
        """Build the error from a requests-style response object."""
        return cls(
            status_code=response.status_code,
            status_text=status_line(response.status_code, response.reason),
            body=response.content or b"",
            url=url,
            prefix=prefix,
        )


class GithubError(PlatformError):
    """Error response from the GitHub REST API.

    HTTP 403 (rate limiting or missing permissions) is rendered with the
    ``message`` and ``documentation_url`` fields of the JSON error body,
    since the URL alone does not explain what went wrong.
    """

    def _render(self) -> str:
        if self.status_code == HTTPStatus.FORBIDDEN:
            message, doc = self._error_fields()
            return f"{self.status_text}: {message}: {doc}"
        return f"{self.status_text} (URL: {self.url})"

    def _error_fields(self) -> tuple[str, str]:
        try:
            data = json.loads(self.body)
        except (ValueError, TypeError):
            return "", ""
        if not isinstance(data, dict):
            return "", ""
        return str(data.get("message", "")), str(data.get("documentation_url", ""))


class GitlabError(PlatformError):
    """Error response from the GitLab REST API (no special-cased statuses)."""

    pass


class NoUpgradeError(AssetFindError):
    """The selected release is not more recent than the caller's floor.

    Callers should treat this as "already up to date" rather than a failure.
    """

    def __init__(
        self,
        message: str = "requested release is not more recent than current version",
    ) -> None:
        super().__init__(message)


class NoMatchError(AssetFindError):
    """No release tag matched the requested selector (or none was recent enough)."""

    pass


def status_line(status_code: int, reason: str | None) -> str:
    """Return a status line like "404 Not Found".

    Falls back to the standard reason phrase when the response has none.
    """
    if not reason:
        try:
            reason = HTTPStatus(status_code).phrase
        except ValueError:
            reason = ""
    return f"{status_code} {reason}".strip()
