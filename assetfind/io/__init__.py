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

"""HTTP transport for assetfind.

Public API:

make_getter : function
    Build a ``get(url)`` callable with retries and scoped authentication.
make_session : function
    Create a requests.Session with retry/backoff defaults.
resolve_token : function
    Resolve a GitHub token from config or the environment.

Example:
    from assetfind.io import make_getter

    get = make_getter(token="${GITHUB_TOKEN}", timeout=10)
    response = get("https://api.github.com/repos/zyedidia/eget/releases/latest")

"""

from .http import Getter, Response, make_getter, make_session, resolve_token

__all__ = ["Getter", "Response", "make_getter", "make_session", "resolve_token"]
