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

"""Command-line interface for pvpver.

This module provides the main CLI entry point for the pvp tool.

Commands:

    matches: Check whether a version is inside a range
    new-value: Compute the updated range for a new release
    releases: List a package's releases from the registry
    check: Check every dependency of a manifest

Example:
    Check a version against a range:
        ```bash
        $ pvp matches 1.0.1 ">=1.0 && <1.1"
        ```

    Widen a range for a new release:
        ```bash
        $ pvp new-value ">=1.0 && <1.1" 1.1 --strategy widen
        ```

    Check a manifest with debug output:
        ```bash
        $ pvp check pvp.yaml --debug
        ```

Exit Codes:

- 0: Success
- 1: Error

Note:
    Verbose mode shows full tracebacks on errors for debugging.
    Debug mode implies verbose mode.

"""

from __future__ import annotations

import argparse
from functools import cmp_to_key
from importlib.metadata import version
from pathlib import Path
import sys
import traceback

from pvpver.core import check_manifest, latest_version
from pvpver.datasource import get_datasource
from pvpver.exceptions import PVPError
from pvpver.logging import get_logger, set_global_logger
from pvpver.policy import RANGE_STRATEGIES, get_new_value
from pvpver.versioning import compare_versions, get_satisfying_version, matches


def _configure_logger(args: argparse.Namespace) -> None:
    logger = get_logger(verbose=args.verbose, debug=args.debug)
    set_global_logger(logger)


def _report_error(err: Exception, args: argparse.Namespace) -> int:
    print(f"Error: {err}")
    if args.verbose or args.debug:
        traceback.print_exc()
    return 1


def cmd_matches(args: argparse.Namespace) -> int:
    """Handler for 'pvp matches' command.

    Returns:
        Exit code (0 on success, 1 on error). The answer itself is printed.

    """
    _configure_logger(args)
    try:
        result = matches(args.version, args.range)
    except PVPError as err:
        return _report_error(err, args)

    print("true" if result else "false")
    return 0


def cmd_new_value(args: argparse.Namespace) -> int:
    """Handler for 'pvp new-value' command.

    Prints the new range, or "(no change)" when the strategy leaves the
    current range as it is.

    """
    _configure_logger(args)
    try:
        new_value = get_new_value(args.current, args.new_version, args.strategy)
    except PVPError as err:
        return _report_error(err, args)

    print(new_value if new_value is not None else "(no change)")
    return 0


def cmd_releases(args: argparse.Namespace) -> int:
    """Handler for 'pvp releases' command.

    Lists every release of a package in ascending order, and with --range
    also the newest release inside that range.

    """
    _configure_logger(args)

    try:
        datasource = get_datasource(args.datasource, args.registry_url)
        releases = datasource.get_releases(args.package, timeout=args.timeout)
        versions = [r.version for r in releases]
        best = get_satisfying_version(versions, args.range) if args.range else None
    except PVPError as err:
        return _report_error(err, args)

    deprecated = {r.version for r in releases if r.is_deprecated}
    for v in sorted(versions, key=cmp_to_key(compare_versions)):
        print(f"{v} (deprecated)" if v in deprecated else v)

    print()
    print(f"Latest:    {latest_version(versions) or '(none)'}")
    if args.range:
        print(f"In range:  {best or '(none)'}")
    return 0


def cmd_check(args: argparse.Namespace) -> int:
    """Handler for 'pvp check' command.

    Returns:
        Exit code (0 when every dependency could be checked, 1 otherwise).

    """
    _configure_logger(args)

    manifest_path = Path(args.manifest).resolve()
    if not manifest_path.exists():
        print(f"Error: Manifest file not found: {manifest_path}")
        return 1

    print(f"Checking manifest: {manifest_path}")
    print()

    try:
        results = check_manifest(
            manifest_path,
            state_file=args.state_file,
            stateless=args.stateless,
        )
    except PVPError as err:
        return _report_error(err, args)

    print("=" * 70)
    print("CHECK RESULTS")
    print("=" * 70)
    for result in results:
        print(f"{result.name}")
        print(f"  Range:     {result.current_value}")
        print(f"  In range:  {result.current_version or '(none)'}")
        print(f"  Latest:    {result.latest_version or '(none)'}")
        if result.status == "update":
            print(f"  Update:    {result.new_value} ({result.range_strategy})")
        elif result.status == "error":
            print(f"  [X] {result.error}")
        else:
            print("  Up to date")
    print("=" * 70)

    failed = [r for r in results if r.status == "error"]
    if failed:
        print()
        print(f"[FAILED] {len(failed)} dependency update(s) could not be computed.")
        return 1

    print()
    print("[SUCCESS] Manifest checked.")
    return 0


def _add_output_flags(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Show progress and high-level status updates",
    )
    parser.add_argument(
        "-d",
        "--debug",
        action="store_true",
        help="Show detailed debugging output (implies --verbose)",
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="pvp",
        description="pvpver - Haskell PVP version ranges",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"pvp {version('pvpver')}",
    )

    subparsers = parser.add_subparsers(
        dest="command",
        help="Available commands",
        required=True,
    )

    # 'matches' command
    parser_matches = subparsers.add_parser(
        "matches",
        help="Check whether a version is inside a range",
    )
    parser_matches.add_argument("version", help="Version, e.g. 1.0.1")
    parser_matches.add_argument("range", help="Range, e.g. '>=1.0 && <1.1'")
    _add_output_flags(parser_matches)
    parser_matches.set_defaults(func=cmd_matches)

    # 'new-value' command
    parser_new_value = subparsers.add_parser(
        "new-value",
        help="Compute the updated range for a new release",
    )
    parser_new_value.add_argument("current", help="Current range expression")
    parser_new_value.add_argument("new_version", help="Newly released version")
    parser_new_value.add_argument(
        "--strategy",
        choices=RANGE_STRATEGIES,
        default="auto",
        help="Range strategy (default: auto)",
    )
    _add_output_flags(parser_new_value)
    parser_new_value.set_defaults(func=cmd_new_value)

    # 'releases' command
    parser_releases = subparsers.add_parser(
        "releases",
        help="List a package's releases from the registry",
    )
    parser_releases.add_argument("package", help="Package name, e.g. aeson")
    parser_releases.add_argument(
        "--range",
        default=None,
        help="Also show the newest release inside this range",
    )
    parser_releases.add_argument(
        "--datasource",
        default="hackage",
        help="Datasource name (default: hackage)",
    )
    parser_releases.add_argument(
        "--registry-url",
        default=None,
        help="Registry base URL (default: the datasource's own)",
    )
    parser_releases.add_argument(
        "--timeout",
        type=int,
        default=30,
        help="Request timeout in seconds (default: 30)",
    )
    _add_output_flags(parser_releases)
    parser_releases.set_defaults(func=cmd_releases)

    # 'check' command
    parser_check = subparsers.add_parser(
        "check",
        help="Check every dependency of a manifest",
        description="Fetch releases for each manifest dependency and compute range updates.",
    )
    parser_check.add_argument("manifest", help="Path to the manifest YAML file")
    parser_check.add_argument(
        "--state-file",
        type=Path,
        default=None,
        help="Release cache file (default: defaults.cache.file from the manifest)",
    )
    parser_check.add_argument(
        "--stateless",
        action="store_true",
        help="Disable the release cache",
    )
    _add_output_flags(parser_check)
    parser_check.set_defaults(func=cmd_check)

    return parser


def main(argv: list[str] | None = None) -> None:
    """Main entry point for the pvp CLI.

    This function is registered as the 'pvp' console script in pyproject.toml.
    """
    parser = build_parser()
    args = parser.parse_args(argv)
    exit_code = args.func(args)
    sys.exit(exit_code)


if __name__ == "__main__":
    main()
