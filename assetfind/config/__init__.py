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

"""Configuration loading for assetfind.

Public API:

- load_effective_config: Merge the defaults and one project's entry
- load_config_file: Parse a config file and check its structure
- default_config_path: ASSETFIND_CONFIG or ~/.assetfind.yaml

"""

from .loader import (
    OPTION_KEYS,
    default_config_path,
    load_config_file,
    load_effective_config,
)

__all__ = [
    "OPTION_KEYS",
    "default_config_path",
    "load_config_file",
    "load_effective_config",
]
