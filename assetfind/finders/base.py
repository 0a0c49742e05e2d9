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

"""Finder protocol, tag selectors and registry for assetfind.

This module defines the foundational components for the finder system:

- Finder protocol: Interface that all finders must implement
- TagSelector: Value type for "latest" vs. an exact tag
- Finder registry: Global dict mapping finder names to implementations
- Registration and lookup functions: register_finder() and get_finder_class()

Available finders (registered on import of the assetfind.finders package):

- direct: Return a literal URL unchanged (no network call)
- github_source / gitlab_source: Synthesize a source tarball URL
- github: Query the GitHub releases API
- gitlab: Query the GitLab releases API

Design Philosophy:
    - Finders are Protocol classes (structural subtyping, not inheritance)
    - Finders are frozen dataclasses holding only their construction fields
    - Registration happens at module import time (finders self-register)

Example:
    Implementing a custom finder:
        ```python
        from dataclasses import dataclass

        from assetfind.finders.base import register_finder

        @dataclass(frozen=True)
        class MirrorFinder:
            url: str

            def find(self) -> list[str]:
                return [self.url.replace("github.com", "mirror.example.com")]

        register_finder("mirror", MirrorFinder)
        ```

"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Protocol

from assetfind.exceptions import ConfigError

LATEST = "latest"
TAG_PREFIX = "tags/"

PRERELEASE_CONTEXT = "pre-release finder: "

# -------------------------------
# Finder Protocol
# -------------------------------


class Finder(Protocol):
    """Protocol for asset finders.

    Each finder resolves one project/selector pair to an ordered list of
    asset URLs, or raises an AssetFindError subclass.
    """

    def find(self) -> list[str]:
        """Return the asset URLs for this finder's release.

        Returns:
            Asset URLs in the platform's listing order. An empty list is a
                valid result (a release without assets).

        Raises:
            AssetFindError: On any failure. NoUpgradeError signals that the
                matched release is older than the requested floor.

        """
        ...


# -------------------------------
# Tag selectors
# -------------------------------


@dataclass(frozen=True)
class TagSelector:
    """Either the latest release or one exact tag.

    Attributes:
        tag: The literal tag, or None for the latest release.

    Example:
        ```python
        TagSelector.parse("tags/v1.2.0").tag   # "v1.2.0"
        str(TagSelector.latest())             # "latest"
        str(TagSelector.exact("v1.2.0"))      # "tags/v1.2.0"
        ```
    """

    tag: str | None = None

    @classmethod
    def latest(cls) -> TagSelector:
        return cls(None)

    @classmethod
    def exact(cls, tag: str) -> TagSelector:
        return cls(tag)

    @classmethod
    def parse(cls, value: TagSelector | str) -> TagSelector:
        """Convert the "latest" / "tags/<tag>" string form to a selector.

        Raises:
            ConfigError: If the string is neither "latest" nor "tags/<tag>".
        """
        if isinstance(value, TagSelector):
            return value
        if value == LATEST:
            return cls.latest()
        if isinstance(value, str) and value.startswith(TAG_PREFIX):
            return cls.exact(value[len(TAG_PREFIX) :])
        raise ConfigError(f"asset finder: invalid tag format: {value}")

    @property
    def is_latest(self) -> bool:
        return self.tag is None

    def __str__(self) -> str:
        if self.tag is None:
            return LATEST
        return f"{TAG_PREFIX}{self.tag}"


# -------------------------------
# Recency helpers
# -------------------------------


def as_utc(value: datetime) -> datetime:
    """Attach UTC to naive datetimes; convert aware ones to UTC."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def is_before(created_at: datetime | None, min_time: datetime | None) -> bool:
    """Return True if a release created at 'created_at' is older than the floor.

    No floor means nothing is too old. A release without a creation time
    counts as older than any floor.
    """
    if min_time is None:
        return False
    if created_at is None:
        return True
    return as_utc(created_at) < as_utc(min_time)


# -------------------------------
# Finder Registry
# -------------------------------

_FINDER_REGISTRY: dict[str, type] = {}


def register_finder(name: str, finder_class: type) -> None:
    """Register a finder class by name in the global registry.

    Registering the same name twice overwrites the previous registration
    (allows monkey-patching for tests).

    Args:
        name: Finder name (e.g., "github").
        finder_class: A class implementing the Finder protocol.

    """
    _FINDER_REGISTRY[name] = finder_class


def get_finder_class(name: str) -> type:
    """Look up a finder class by name.

    Args:
        name: Finder name. Must exactly match a name registered via
            register_finder(). Case-sensitive.

    Returns:
        The registered finder class (not an instance; finders need
            construction arguments).

    Raises:
        ConfigError: If the finder name is not registered. The error message
            lists the available finders.

    """
    if name not in _FINDER_REGISTRY:
        available = ", ".join(sorted(_FINDER_REGISTRY))
        raise ConfigError(
            f"Unknown finder: {name!r}. Available: {available or '(none)'}"
        )
    return _FINDER_REGISTRY[name]
