"""
assetfind - release asset URL resolution

Resolves a project hosted on GitHub or GitLab (or a plain download URL) to
the list of downloadable asset URLs for a requested release.

assetfind provides:
  - One Finder contract over several sources (direct URL, source tarballs,
    GitHub releases API, GitLab releases API)
  - Exact tag, "latest" and "latest pre-release" selection
  - A recency floor for "skip if no newer version" workflows
  - Substring fallback search for decorated GitHub tags
  - Typed errors (transport, decode, platform, no-upgrade, no-match, config)

Quick Start
-----------
    $ assetfind find zyedidia/eget
    $ assetfind find gitlab.com/gitlab-org/cli --tag v1.40.0

Package Structure
-----------------
cli : module
    Command-line interface with argparse.
core : module
    Finder selection and orchestration.
config : package
    YAML configuration loading and merging.
finders : package
    The finder implementations and registry.
io : package
    HTTP transport (retrying requests session).

Public API
----------
    from assetfind.core import find_assets, select_finder
    from assetfind.finders import GithubAssetFinder, GitlabAssetFinder
    from assetfind.exceptions import NoUpgradeError

Project Information
-------------------
Author: Roger Cibrian
License: Apache-2.0
"""

__version__ = "0.1.0"
__author__ = "Roger Cibrian"
__license__ = "Apache-2.0"
__description__ = "Resolve release asset URLs on GitHub and GitLab"

# Re-export commonly used functions for convenience
from assetfind.config import load_effective_config
from assetfind.core import find_assets, select_finder
from assetfind.validation import validate_config

__all__ = [
    "__version__",
    "__author__",
    "__license__",
    "__description__",
    "find_assets",
    "select_finder",
    "load_effective_config",
    "validate_config",
]
