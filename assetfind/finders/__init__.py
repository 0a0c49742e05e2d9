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

"""Asset finders for assetfind.

Every finder exposes one operation, ``find() -> list[str]``, returning the
candidate asset URLs for a project in the platform's listing order.

Available Finders:
    direct : DirectAssetFinder
        The configured URL is the only asset. No network call.
    github_source : GithubSourceFinder
        Source tarball URL on github.com. No network call.
    gitlab_source : GitlabSourceFinder
        Source tarball URL on gitlab.com. No network call.
    github : GithubAssetFinder
        GitHub releases API, with a paginated substring search when an
        exact tag is not found.
    gitlab : GitlabAssetFinder
        GitLab releases API. No fallback search.

Example:
    ```python
    from assetfind.finders import GithubAssetFinder, TagSelector

    finder = GithubAssetFinder(repo="zyedidia/eget", tag=TagSelector.exact("v1.3.3"))
    for url in finder.find():
        print(url)
    ```

"""

# Import finder modules to trigger self-registration
from . import (
    direct,  # noqa: F401
    github,  # noqa: F401
    gitlab,  # noqa: F401
    source,  # noqa: F401
)
from .base import Finder, TagSelector, get_finder_class, register_finder
from .direct import DirectAssetFinder
from .github import GithubAssetFinder
from .gitlab import GitlabAssetFinder
from .release import Release
from .source import GithubSourceFinder, GitlabSourceFinder

__all__ = [
    "Finder",
    "TagSelector",
    "Release",
    "DirectAssetFinder",
    "GithubSourceFinder",
    "GitlabSourceFinder",
    "GithubAssetFinder",
    "GitlabAssetFinder",
    "get_finder_class",
    "register_finder",
]
