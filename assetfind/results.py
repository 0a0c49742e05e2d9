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

"""Public API return types for assetfind.

All dataclasses are frozen (immutable) to prevent accidental mutation of
return values.

Note:
    Only public API return types belong in this module. Domain types (like
    Release and TagSelector) stay co-located with the finders.
"""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(frozen=True)
class FindResult:
    """Result from resolving a project to asset URLs.

    Attributes:
        project: The project string as given (repo, repo URL or direct URL).
        finder: Registered name of the finder used (e.g., "github").
        urls: Candidate asset URLs in listing order. Empty when up to date.
        status: "success", or "up_to_date" when the matched release is not
            newer than the requested floor.
    """

    project: str
    finder: str
    urls: list[str] = field(default_factory=list)
    status: str = "success"


@dataclass(frozen=True)
class ValidationResult:
    """Result from validating a config file.

    Attributes:
        status: Validation status ("valid" or "invalid").
        errors: List of error messages (empty if valid).
        warnings: List of warning messages.
        project_count: Number of entries under ``projects``.
        config_path: String path to the validated file.
    """

    status: str
    errors: list[str]
    warnings: list[str]
    project_count: int
    config_path: str
