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

"""Config file validation.

Checks a config file without making network calls, for quick feedback when
editing it and for CI pre-checks.

Validation Checks:

- YAML syntax is valid and the top level is a mapping
- ``defaults`` and ``projects`` are mappings
- Option values have the right types (bools, strings, timestamps)
- ``platform`` is a known platform
- Each project key can be turned into a finder

Example:
    ```python
    from pathlib import Path
    from assetfind.validation import validate_config

    result = validate_config(Path("assetfind.yaml"))
    if result.status == "valid":
        print(f"{result.project_count} project(s) configured")
    else:
        for error in result.errors:
            print(f"Error: {error}")
    ```

"""

from __future__ import annotations

from pathlib import Path

from assetfind.config.loader import load_config_file
from assetfind.core import check_options, parse_project
from assetfind.exceptions import ConfigError
from assetfind.logging import get_global_logger
from assetfind.results import ValidationResult

__all__ = ["validate_config"]


def validate_config(config_path: Path) -> ValidationResult:
    """Validate a config file without any network access.

    Args:
        config_path: Path to the YAML config file.

    Returns:
        A ValidationResult with status "valid" or "invalid".

    """
    logger = get_global_logger()
    logger.verbose("CONFIG", f"Validating config: {config_path}")

    errors: list[str] = []
    warnings: list[str] = []

    try:
        data = load_config_file(config_path)
    except ConfigError as err:
        return ValidationResult(
            status="invalid",
            errors=[str(err)],
            warnings=[],
            project_count=0,
            config_path=str(config_path),
        )

    defaults = data["defaults"]
    projects = data["projects"]

    e, w = check_options("defaults", defaults)
    errors.extend(e)
    warnings.extend(w)

    for project, entry in projects.items():
        where = f"projects[{project!r}]"
        entry = entry or {}
        if not isinstance(entry, dict):
            errors.append(f"{where} must be a mapping")
            continue
        e, w = check_options(where, entry)
        errors.extend(e)
        warnings.extend(w)

        platform = entry.get("platform", defaults.get("platform"))
        if not isinstance(platform, str):
            platform = None
        try:
            parse_project(str(project), platform)
        except ConfigError as err:
            errors.append(f"{where}: {err}")

    if not projects:
        warnings.append("No projects configured")

    logger.verbose("CONFIG", f"{len(errors)} error(s), {len(warnings)} warning(s)")

    return ValidationResult(
        status="invalid" if errors else "valid",
        errors=errors,
        warnings=warnings,
        project_count=len(projects),
        config_path=str(config_path),
    )
