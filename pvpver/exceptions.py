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

"""Exception hierarchy for pvpver.

This module defines a custom exception hierarchy that allows library users
to distinguish between different types of errors:

- RangeSyntaxError: A range expression could not be parsed
- UnsupportedStrategyError: A range strategy PVP does not implement
- InconsistentBoundsError: widen/auto cannot reconcile a stale range
- LogicInvariantError: Internal invariant broken (e.g. no usable bound)
- ConfigError: Manifest/configuration errors (YAML parse, missing fields)
- NetworkError: Registry/API errors (HTTP failures, invalid responses)
- StateError: Release cache state file problems

All exceptions inherit from PVPError, allowing users to catch all pvpver
errors with a single except clause if needed.

Example:
    Catching specific error types:
        ```python
        from pvpver.policy import get_new_value
        from pvpver.exceptions import InconsistentBoundsError, RangeSyntaxError

        try:
            new_value = get_new_value(">=1.0 && <1.1", "1.1", "widen")
        except RangeSyntaxError as e:
            print(f"Bad range: {e}")
        except InconsistentBoundsError as e:
            print(f"Cannot compute version update: {e}")
        ```

    Catching all pvpver errors:
        ```python
        from pvpver.exceptions import PVPError

        try:
            results = check_manifest(Path("pvp.yaml"))
        except PVPError as e:
            print(f"pvpver error: {e}")
        ```
"""

from __future__ import annotations

__all__ = [
    "PVPError",
    "RangeSyntaxError",
    "UnsupportedStrategyError",
    "InconsistentBoundsError",
    "LogicInvariantError",
    "ConfigError",
    "NetworkError",
    "StateError",
]


class PVPError(Exception):
    """Base exception for all pvpver errors.

    All pvpver-specific exceptions inherit from this class, allowing users
    to catch all pvpver errors with a single except clause if needed.
    """

    pass


class RangeSyntaxError(PVPError):
    """Raised when a range expression cannot be parsed.

    This exception is raised when:

    - The expression matches none of the supported shapes
    - A required `>=` or `<` prefix is missing after splitting on `&&`
    - The major boundary of a caret range (`^>=X`) cannot be resolved
    - A bound carries no numeric component at all
    - The `bump` strategy is given a compound range

    Example:
        Catching syntax errors:
            ```python
            from pvpver.exceptions import RangeSyntaxError
            from pvpver.versioning import parse

            try:
                parse("~1.0")
            except RangeSyntaxError as e:
                print(f"Syntax error: {e}")
            ```
    """

    pass


class UnsupportedStrategyError(PVPError):
    """Raised for range strategies the PVP scheme does not implement.

    The strategies `future`, `update-lockfile` and `in-range-only` have no
    meaning for PVP ranges; callers should use `widen` or `bump` instead.
    """

    pass


class InconsistentBoundsError(PVPError):
    """Raised when widen/auto cannot reconcile a new version with the range.

    Bumping the ceiling to the new version's next major was not enough to
    admit it, which usually means the existing bounds are too old to be
    updated automatically.
    """

    pass


class LogicInvariantError(PVPError):
    """Raised when an internal invariant is broken.

    Currently only raised when a bound is requested from a disjunction whose
    every part is unsatisfiable.
    """

    pass


class ConfigError(PVPError):
    """Raised for configuration-related errors.

    This exception is raised when there are problems with:

    - YAML parsing (syntax errors, invalid structure)
    - Missing or invalid manifest fields
    - Unknown range strategies or datasources
    - Missing manifest files

    Example:
        Catching configuration errors:
            ```python
            from pvpver.exceptions import ConfigError

            try:
                config = load_effective_config(Path("invalid.yaml"))
            except ConfigError as e:
                print(f"Config error: {e}")
            ```
    """

    pass


class NetworkError(PVPError):
    """Raised for registry-related errors.

    This exception is raised when there are problems with:

    - HTTP errors and connection failures talking to the registry
    - Invalid or unexpected JSON responses
    """

    pass


class StateError(PVPError):
    """Raised for release cache state file errors.

    A corrupted state file is backed up before this is raised, so the next
    run starts from a fresh state.
    """

    pass
