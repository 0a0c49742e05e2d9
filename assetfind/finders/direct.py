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

"""Direct URL finder: the configured URL is the only asset."""

from __future__ import annotations

from dataclasses import dataclass

from .base import register_finder


@dataclass(frozen=True)
class DirectAssetFinder:
    """Return the embedded URL verbatim. Never fails, never touches the network."""

    url: str

    def find(self) -> list[str]:
        return [self.url]


register_finder("direct", DirectAssetFinder)
