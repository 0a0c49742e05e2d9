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

"""Configuration loading and merging for assetfind.

A config file is a YAML mapping with two optional sections:

    ```yaml
    defaults:
      platform: github
      prerelease: false
      github_token: "${GITHUB_TOKEN}"

    projects:
      zyedidia/eget:
        tag: v1.3.3
      gitlab-org/cli:
        platform: gitlab
        min_time: "2024-01-01T00:00:00Z"
    ```

The effective options for a project are the ``defaults`` section with the
project's entry deep-merged on top:

- **Dicts**: Recursively merged (keys from overlay override base)
- **Lists**: Completely replaced (NOT appended/extended)
- **Scalars**: Overwritten (strings, numbers, booleans)

Recognised option keys are listed in OPTION_KEYS. Unknown keys are kept
(validation reports them as warnings).

Config File Location:
    An explicit path wins. Otherwise ASSETFIND_CONFIG is used, then
    ``~/.assetfind.yaml``. A missing default file is not an error.

Error Handling:
    ConfigError is raised for missing explicit files, YAML parse errors,
    empty files and non-mapping sections. Errors are chained with "from err".
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any

import yaml

from assetfind.exceptions import ConfigError
from assetfind.logging import get_global_logger

OPTION_KEYS = (
    "tag",
    "prerelease",
    "source",
    "platform",
    "min_time",
    "github_token",
)

CONFIG_ENV_VAR = "ASSETFIND_CONFIG"

# -------------------------------
# YAML helpers
# -------------------------------


def _load_yaml_file(p: Path) -> Any:
    """Loads a YAML file and returns the parsed Python object.

    Raises:
        ConfigError: When the file does not exist, is invalid YAML or is empty.
    """
    if not p.exists():
        raise ConfigError(f"file not found: {p}")
    try:
        with p.open("r", encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as err:
        raise ConfigError(f"Error parsing YAML: {p}: {err}") from err
    if data is None:
        raise ConfigError(f"YAML file is empty: {p}")
    return data


# -------------------------------
# Merge logic
# -------------------------------


def _deep_merge_dicts(base: dict[str, Any], overlay: dict[str, Any]) -> dict[str, Any]:
    """
    Deep-merge two dicts with "overlay wins".

    Rules:
      - dict + dict -> deep merge
      - list + list -> overlay REPLACES base (not concatenated)
      - everything else -> overlay overwrites base

    This function does not mutate inputs; returns a new dict.
    """
    result: dict[str, Any] = dict(base)
    for k, v in overlay.items():
        if k in result and isinstance(result[k], dict) and isinstance(v, dict):
            result[k] = _deep_merge_dicts(result[k], v)
        else:
            result[k] = v
    return result


def _section(data: dict[str, Any], name: str, path: Path) -> dict[str, Any]:
    value = data.get(name) or {}
    if not isinstance(value, dict):
        raise ConfigError(f"'{name}' must be a mapping in {path}")
    return value


# -------------------------------
# Public API
# -------------------------------


def default_config_path() -> Path:
    """Return the config path from ASSETFIND_CONFIG or ``~/.assetfind.yaml``."""
    env_path = os.environ.get(CONFIG_ENV_VAR)
    if env_path:
        return Path(env_path).expanduser()
    return Path.home() / ".assetfind.yaml"


def load_config_file(config_path: Path) -> dict[str, Any]:
    """Load a config file and check its top-level structure.

    Returns:
        The parsed mapping, with ``defaults`` and ``projects`` guaranteed to
            be dicts.

    Raises:
        ConfigError: On missing files, YAML errors or invalid structure.
    """
    data = _load_yaml_file(config_path)
    if not isinstance(data, dict):
        raise ConfigError(f"top-level YAML must be a mapping (dict): {config_path}")
    data["defaults"] = _section(data, "defaults", config_path)
    data["projects"] = _section(data, "projects", config_path)
    return data


def load_effective_config(
    config_path: Path | None = None,
    project: str | None = None,
) -> dict[str, Any]:
    """Load the effective options for one project.

    Args:
        config_path: Config file to read. If None, the default location is
            used and a missing file yields an empty config.
        project: Project key under ``projects``. If None or not listed, only
            the defaults apply.

    Returns:
        The merged option dict (defaults, then the project entry).

    Raises:
        ConfigError: On YAML parse errors, empty files, invalid structure, a
            non-mapping project entry, or an explicit path that is missing.

    Example:
        ```python
        from pathlib import Path
        from assetfind.config import load_effective_config

        options = load_effective_config(Path("assetfind.yaml"), "zyedidia/eget")
        options.get("tag")  # "v1.3.3"
        ```
    """
    logger = get_global_logger()

    if config_path is None:
        config_path = default_config_path()
        if not config_path.exists():
            logger.debug("CONFIG", f"No config file at {config_path}")
            return {}

    config_path = config_path.expanduser().resolve()
    logger.verbose("CONFIG", f"Loading config: {config_path}")
    data = load_config_file(config_path)

    merged = dict(data["defaults"])
    if project is not None and project in data["projects"]:
        entry = data["projects"][project] or {}
        if not isinstance(entry, dict):
            raise ConfigError(f"project {project!r} must be a mapping in {config_path}")
        logger.verbose("CONFIG", f"Applying project entry: {project}")
        merged = _deep_merge_dicts(merged, entry)

    logger.debug("CONFIG", f"Effective options: {sorted(merged)}")
    return merged
