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

Finders never talk to the network directly. They receive a single ``get``
callable (``get(url) -> response``) and only look at ``status_code``,
``reason`` and ``content`` on the response, the shape of a
``requests.Response``. This module builds the default getter on top of a
``requests.Session``.

Key Features:

- **Retry Logic with Exponential Backoff** - Transient failures (429, 500,
  502, 503, 504) are retried by urllib3 at the adapter level. The finders
  themselves never retry.
- **Scoped Authentication** - A GitHub token is sent only to api.github.com,
  never to asset hosts or GitLab.
- **Token Expansion** - ``${ENV_VAR}`` references are expanded, with
  ASSETFIND_GITHUB_TOKEN and GITHUB_TOKEN as fallbacks.

Example:
    Build a getter and hand it to a finder:

    >>> from assetfind.io import make_getter
    >>> from assetfind.finders import GithubAssetFinder
    >>> get = make_getter(token="${GITHUB_TOKEN}")
    >>> urls = GithubAssetFinder(repo="zyedidia/eget", get=get).find()
"""

from __future__ import annotations

from collections.abc import Callable
import json
import os
from typing import Any, Protocol
from urllib.parse import urlparse

import requests
from requests.adapters import HTTPAdapter
from urllib3.util.retry import Retry

from assetfind import __version__
from assetfind.exceptions import DecodeError, TransportError
from assetfind.logging import get_global_logger

DEFAULT_TIMEOUT = 30

# Hosts that receive the Authorization header
_TOKEN_HOSTS = {"api.github.com"}

_TOKEN_ENV_VARS = ("ASSETFIND_GITHUB_TOKEN", "GITHUB_TOKEN")


class Response(Protocol):
    """The subset of ``requests.Response`` that finders rely on."""

    status_code: int
    reason: str
    content: bytes


Getter = Callable[[str], Response]


def make_session() -> requests.Session:
    """
    Create a requests.Session with sane retry/backoff defaults.

    - Retries on common transient status codes.
    - Applies exponential backoff.
    - Sets a User-Agent and asks for the GitHub JSON media type.
    """
    s = requests.Session()
    retries = Retry(
        total=5,
        backoff_factor=0.5,
        status_forcelist=(429, 500, 502, 503, 504),
        allowed_methods=("GET", "HEAD"),
        raise_on_status=False,
    )
    s.headers.update(
        {
            "User-Agent": f"assetfind/{__version__}",
            "Accept": "application/vnd.github+json",
        }
    )
    s.mount("http://", HTTPAdapter(max_retries=retries))
    s.mount("https://", HTTPAdapter(max_retries=retries))
    return s


def resolve_token(value: str | None = None) -> str | None:
    """Resolve a GitHub token from config or the environment.

    Args:
        value: Configured token. ``${NAME}`` is expanded from the environment.
            If empty, ASSETFIND_GITHUB_TOKEN then GITHUB_TOKEN are tried.

    Returns:
        The token, or None when nothing is configured.
    """
    if value:
        if value.startswith("${") and value.endswith("}"):
            env_var = value[2:-1]
            token = os.environ.get(env_var)
            if not token:
                get_global_logger().verbose(
                    "HTTP", f"Warning: Environment variable {env_var} not set"
                )
            return token or None
        return value

    for env_var in _TOKEN_ENV_VARS:
        token = os.environ.get(env_var)
        if token:
            return token
    return None


def make_getter(
    token: str | None = None,
    *,
    timeout: int = DEFAULT_TIMEOUT,
    session: requests.Session | None = None,
) -> Getter:
    """Return a ``get(url)`` callable backed by a retrying session.

    Args:
        token: GitHub token, sent as ``Authorization: token <token>`` to
            api.github.com only.
        timeout: Per-request timeout in seconds.
        session: Session to reuse. A new one is created if omitted.

    Returns:
        A getter suitable for injection into any finder.
    """
    s = session or make_session()

    def get(url: str) -> requests.Response:
        headers = {}
        if token and urlparse(url).hostname in _TOKEN_HOSTS:
            headers["Authorization"] = f"token {token}"
        get_global_logger().debug("HTTP", f"GET {url}")
        return s.get(url, headers=headers, timeout=timeout)

    return get


_default_getter: Getter | None = None


def default_getter() -> Getter:
    """Return the shared default getter, created on first use."""
    global _default_getter
    if _default_getter is None:
        _default_getter = make_getter(resolve_token())
    return _default_getter


def fetch(get: Getter, url: str) -> tuple[Response, bytes]:
    """Issue one GET and read its body.

    Raises:
        TransportError: If the request or the body read fails.
    """
    try:
        response = get(url)
        body = response.content or b""
    except requests.exceptions.RequestException as err:
        raise TransportError(f"GET {url} failed: {err}") from err
    return response, body


def decode_json(body: bytes, url: str, expected: type) -> Any:
    """Decode a JSON body and check its top-level type.

    Args:
        body: Raw response body.
        url: Request URL, used in the error message.
        expected: ``dict`` for single objects, ``list`` for listings.

    Raises:
        DecodeError: If the body is not JSON or has the wrong top-level type.
    """
    try:
        data = json.loads(body)
    except ValueError as err:
        raise DecodeError(f"invalid JSON from {url}: {err}") from err
    if not isinstance(data, expected):
        raise DecodeError(
            f"unexpected JSON from {url}: expected {expected.__name__}, "
            f"got {type(data).__name__}"
        )
    return data
