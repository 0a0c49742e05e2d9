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

"""Normalized release records for the GitHub and GitLab wire formats.

GitHub release JSON:
    {"tag_name": ..., "prerelease": bool, "created_at": RFC 3339,
     "assets": [{"browser_download_url": ...}, ...]}

GitLab release JSON:
    {"tag_name": ..., "upcoming_release": bool, "created_at": RFC 3339,
     "assets": {"links": [{"direct_asset_url": ...}, ...]}}

Both are parsed into the same frozen Release dataclass.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Any

from assetfind.exceptions import DecodeError

from .base import as_utc


@dataclass(frozen=True)
class Release:
    """A published release, independent of the hosting platform.

    Attributes:
        tag: Tag name (e.g., "v1.2.0").
        created_at: Creation time in UTC, or None if the API omitted it.
        is_prerelease: GitHub "prerelease" / GitLab "upcoming_release".
        asset_urls: Download URLs in listing order (may be empty).
    """

    tag: str
    created_at: datetime | None
    is_prerelease: bool
    asset_urls: tuple[str, ...]


def parse_timestamp(value: Any) -> datetime | None:
    """Parse an RFC 3339 timestamp such as "2024-05-01T12:00:00Z".

    Raises:
        DecodeError: If the value is present but not a valid timestamp.
    """
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        return as_utc(value)
    text = str(value)
    if text.endswith(("Z", "z")):
        text = text[:-1] + "+00:00"
    try:
        return as_utc(datetime.fromisoformat(text))
    except ValueError as err:
        raise DecodeError(f"invalid created_at timestamp: {value!r}") from err


def parse_github_release(data: dict[str, Any]) -> Release:
    """Parse one release object from the GitHub releases API."""
    if not isinstance(data, dict):
        raise DecodeError(f"expected release object, got {type(data).__name__}")
    try:
        urls = tuple(
            a.get("browser_download_url", "") for a in data.get("assets") or []
        )
    except (AttributeError, TypeError) as err:
        raise DecodeError(f"malformed release assets: {err}") from err
    return Release(
        tag=data.get("tag_name") or "",
        created_at=parse_timestamp(data.get("created_at")),
        is_prerelease=bool(data.get("prerelease", False)),
        asset_urls=urls,
    )


def parse_gitlab_release(data: dict[str, Any]) -> Release:
    """Parse one release object from the GitLab releases API."""
    if not isinstance(data, dict):
        raise DecodeError(f"expected release object, got {type(data).__name__}")
    try:
        links = (data.get("assets") or {}).get("links") or []
        urls = tuple(link.get("direct_asset_url", "") for link in links)
    except (AttributeError, TypeError) as err:
        raise DecodeError(f"malformed release assets: {err}") from err
    return Release(
        tag=data.get("tag_name") or "",
        created_at=parse_timestamp(data.get("created_at")),
        is_prerelease=bool(data.get("upcoming_release", False)),
        asset_urls=urls,
    )
