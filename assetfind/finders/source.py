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

"""Source archive finders.

These build the tarball URL for a repository at a tag without calling any
API. Repo and tag are not validated; a bad pair simply yields a URL that
404s at download time.

- GitHub: https://github.com/{repo}/tarball/{tag}/{tool}.tar.gz
- GitLab: https://gitlab.com/{repo}/-/archive/{tag}/{tool}.tar.gz
"""

from __future__ import annotations

from dataclasses import dataclass

from .base import register_finder


@dataclass(frozen=True)
class GithubSourceFinder:
    """Source tarball of a GitHub repository at a tag or branch.

    Attributes:
        tool: Name used for the archive file (usually the repo name).
        repo: Repository in "owner/name" form.
        tag: Tag or branch name (bare, without "tags/").
    """

    tool: str
    repo: str
    tag: str

    def find(self) -> list[str]:
        url = f"https://github.com/{self.repo}/tarball/{self.tag}/{self.tool}.tar.gz"
        return [url]


@dataclass(frozen=True)
class GitlabSourceFinder:
    """Source tarball of a GitLab project at a tag or branch."""

    tool: str
    repo: str
    tag: str

    def find(self) -> list[str]:
        url = f"https://gitlab.com/{self.repo}/-/archive/{self.tag}/{self.tool}.tar.gz"
        return [url]


register_finder("github_source", GithubSourceFinder)
register_finder("gitlab_source", GitlabSourceFinder)
