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

"""Command-line interface for assetfind.

Commands:

    find: Print the candidate asset URLs for a project
    validate: Check a config file without network access

Example:
    Latest release assets:
        ```bash
        $ assetfind find zyedidia/eget
        ```

    A tag on GitLab, only if newer than a timestamp:
        ```bash
        $ assetfind find gitlab-org/cli --platform gitlab --tag v1.40.0 \\
            --min-time 2024-01-01T00:00:00Z
        ```

    Source tarball:
        ```bash
        $ assetfind find https://github.com/zyedidia/eget --source --tag v1.3.3
        ```

Exit Codes:

- 0: Success (including "already up to date")
- 1: Error (configuration, network or no matching release)

"""

from __future__ import annotations

import argparse
from importlib.metadata import PackageNotFoundError, version
from pathlib import Path
import sys

from dotenv import find_dotenv, load_dotenv

from assetfind.core import find_assets
from assetfind.exceptions import AssetFindError
from assetfind.logging import get_logger, set_global_logger
from assetfind.validation import validate_config


def _package_version() -> str:
    try:
        return version("assetfind")
    except PackageNotFoundError:
        from assetfind import __version__

        return __version__


def cmd_find(args: argparse.Namespace) -> int:
    """Handler for 'assetfind find' command.

    Args:
        args: Parsed command-line arguments.

    Returns:
        Exit code (0 for success or up to date, 1 for failure).

    """
    logger = get_logger(verbose=args.verbose, debug=args.debug)
    set_global_logger(logger)

    # GITHUB_TOKEN / ASSETFIND_GITHUB_TOKEN may live in a .env file
    load_dotenv(find_dotenv(usecwd=True))

    try:
        result = find_assets(
            args.project,
            config_path=Path(args.config) if args.config else None,
            tag=args.tag,
            prerelease=args.pre_release,
            source=args.source,
            platform=args.platform,
            min_time=args.min_time,
        )
    except AssetFindError as err:
        print(f"Error: {err}", file=sys.stderr)
        if args.verbose or args.debug:
            import traceback

            traceback.print_exc()
        return 1

    if result.status == "up_to_date":
        print(f"{args.project}: requested release is not newer than --min-time")
        return 0

    for url in result.urls:
        print(url)
    return 0


def cmd_validate(args: argparse.Namespace) -> int:
    """Handler for 'assetfind validate' command.

    Returns:
        Exit code (0 for a valid config, 1 for an invalid one).

    """
    logger = get_logger(verbose=args.verbose, debug=False)
    set_global_logger(logger)

    config_path = Path(args.config).resolve()
    result = validate_config(config_path)

    print("=" * 70)
    print("VALIDATION RESULTS")
    print("=" * 70)
    print(f"Config:         {result.config_path}")
    print(f"Status:         {result.status.upper()}")
    print(f"Project Count:  {result.project_count}")
    print()

    if result.warnings:
        print(f"Warnings ({len(result.warnings)}):")
        for warning in result.warnings:
            print(f"  [WARNING] {warning}")
        print()

    if result.errors:
        print(f"Errors ({len(result.errors)}):")
        for error in result.errors:
            print(f"  [X] {error}")
        print()

    print("=" * 70)

    if result.status == "valid":
        print("[SUCCESS] Config is valid!")
        return 0
    print(f"[FAILED] Config validation failed with {len(result.errors)} error(s).")
    return 1


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="assetfind",
        description="Resolve release asset URLs on GitHub and GitLab",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"assetfind {_package_version()}",
    )

    subparsers = parser.add_subparsers(
        dest="command",
        help="Available commands",
        required=True,
    )

    # 'find' command
    parser_find = subparsers.add_parser(
        "find",
        help="Print candidate asset URLs for a project",
        description="Resolve a repo, repo URL or direct URL to asset URLs.",
    )
    parser_find.add_argument(
        "project",
        help="owner/repo, a github.com/gitlab.com repo URL, or a direct URL",
    )
    parser_find.add_argument("--tag", help="Release tag to look up (default: latest)")
    parser_find.add_argument(
        "--pre-release",
        action=argparse.BooleanOptionalAction,
        default=None,
        help="Include pre-releases (overrides the config file)",
    )
    parser_find.add_argument(
        "--source",
        action=argparse.BooleanOptionalAction,
        default=None,
        help="Return the source tarball URL instead of release assets",
    )
    parser_find.add_argument(
        "--platform",
        choices=("github", "gitlab"),
        default=None,
        help="Platform for bare owner/repo projects (default: github)",
    )
    parser_find.add_argument(
        "--min-time",
        default=None,
        help="Only accept releases created at or after this RFC 3339 time",
    )
    parser_find.add_argument(
        "--config",
        default=None,
        help="Config file (default: $ASSETFIND_CONFIG or ~/.assetfind.yaml)",
    )
    parser_find.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Show progress and high-level status updates",
    )
    parser_find.add_argument(
        "-d",
        "--debug",
        action="store_true",
        help="Show detailed debugging output (implies --verbose)",
    )
    parser_find.set_defaults(func=cmd_find)

    # 'validate' command
    parser_validate = subparsers.add_parser(
        "validate",
        help="Validate a config file (no network calls)",
    )
    parser_validate.add_argument("config", help="Path to the config YAML file")
    parser_validate.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Show validation progress and details",
    )
    parser_validate.set_defaults(func=cmd_validate)

    return parser


def main(argv: list[str] | None = None) -> None:
    """Main entry point for the assetfind CLI."""
    parser = build_parser()
    args = parser.parse_args(argv)
    sys.exit(args.func(args))


if __name__ == "__main__":
    main()
