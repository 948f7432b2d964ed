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

"""Core orchestration for pvpver.

This module ties the pieces together for the 'pvp check' command: it loads
a manifest, fetches releases through the configured datasource (and the
release cache), and asks the versioning engine how every declared range
should change.

Example:
    Check a manifest:
        ```python
        from pathlib import Path
        from pvpver.core import check_manifest

        for result in check_manifest(Path("pvp.yaml")):
            print(result.name, result.status, result.new_value)
        ```

"""

from __future__ import annotations

from functools import cmp_to_key
from pathlib import Path
from typing import Any

from pvpver.config.loader import load_effective_config
from pvpver.datasource import Datasource, get_datasource
from pvpver.exceptions import (
    InconsistentBoundsError,
    LogicInvariantError,
    RangeSyntaxError,
    StateError,
    UnsupportedStrategyError,
)
from pvpver.logging import get_global_logger
from pvpver.policy import RangeStrategy, get_new_value
from pvpver.results import UpdateResult
from pvpver.state import ReleaseCache
from pvpver.state.cache import DEFAULT_TTL_MINUTES
from pvpver.versioning import (
    compare_versions,
    get_satisfying_version,
    is_valid,
    matches,
)

# Engine errors that only concern a single dependency
_UPDATE_ERRORS = (
    RangeSyntaxError,
    UnsupportedStrategyError,
    InconsistentBoundsError,
    LogicInvariantError,
)


def fetch_versions(
    package_name: str,
    datasource: Datasource,
    *,
    datasource_name: str = "hackage",
    timeout: int = 30,
    cache_file: Path | None = None,
    ttl_minutes: int = DEFAULT_TTL_MINUTES,
) -> list[str]:
    """Fetch release versions, reconciling them into the release cache.

    Args:
        package_name: Package to look up.
        datasource: Release source to query.
        datasource_name: Prefix of the cache key ("hackage:aeson").
        timeout: Per-request timeout in seconds.
        cache_file: State file for the release cache. None disables it.
        ttl_minutes: Lifetime of the cache entry.

    Returns:
        Known version strings, unsorted.

    Raises:
        NetworkError: If the datasource fails.

    """
    logger = get_global_logger()
    releases = datasource.get_releases(package_name, timeout=timeout)
    if cache_file is None:
        return [r.version for r in releases]

    key = f"{datasource_name}:{package_name}"
    try:
        cache = ReleaseCache.init(cache_file, key, ttl_minutes)
    except StateError as err:
        logger.warning(str(err))
        cache = ReleaseCache.init(cache_file, key, ttl_minutes)

    items: list[dict[str, Any]] = [
        {
            "id": r.version,
            "version": r.version,
            "changelog_url": r.changelog_url,
            "last_updated": r.release_timestamp,
            "is_deprecated": r.is_deprecated,
        }
        for r in releases
    ]
    cache.reconcile(items, expected_count=len(items))
    cache.save()
    return [item["version"] for item in cache.get_items()]


def latest_version(versions: list[str]) -> str | None:
    """Return the highest valid version, or None if there is none."""
    valid = [v for v in versions if is_valid(v)]
    if not valid:
        return None
    return max(valid, key=cmp_to_key(compare_versions))


def compute_update(
    name: str,
    current_value: str,
    versions: list[str],
    range_strategy: RangeStrategy,
) -> UpdateResult:
    """Decide how one dependency range should change.

    Engine errors (bad range, unsupported strategy, stale bounds) are not
    raised; they are reported on the result with status "error".

    Args:
        name: Package name (for the result only).
        current_value: Declared range.
        versions: Known release versions.
        range_strategy: Strategy to apply when the latest release falls
            outside current_value.

    Returns:
        UpdateResult describing the outcome.

    """
    logger = get_global_logger()
    latest = latest_version(versions)
    current_version: str | None = None

    try:
        current_version = get_satisfying_version(versions, current_value)
        if latest is None or matches(latest, current_value):
            new_value = None
        else:
            new_value = get_new_value(current_value, latest, range_strategy)
    except _UPDATE_ERRORS as err:
        logger.verbose("CHECK", f"{name}: cannot compute version update: {err}")
        return UpdateResult(
            name=name,
            current_value=current_value,
            current_version=current_version,
            latest_version=latest,
            new_value=None,
            range_strategy=range_strategy,
            status="error",
            error=f"cannot compute version update: {err}",
        )

    if new_value is None or new_value == current_value:
        status = "up-to-date"
        new_value = None
    else:
        status = "update"
    logger.verbose("CHECK", f"{name}: {status} (latest {latest})")

    return UpdateResult(
        name=name,
        current_value=current_value,
        current_version=current_version,
        latest_version=latest,
        new_value=new_value,
        range_strategy=range_strategy,
        status=status,
    )


def check_manifest(
    manifest_path: Path,
    *,
    state_file: Path | None = None,
    stateless: bool = False,
) -> list[UpdateResult]:
    """Check every dependency of a manifest against its registry.

    This is the main entry point for the 'pvp check' command.

    Args:
        manifest_path: Path to the manifest YAML file.
        state_file: Release cache file overriding defaults.cache.file.
        stateless: If True, do not read or write the release cache.

    Returns:
        One UpdateResult per dependency, in manifest order.

    Raises:
        ConfigError: On manifest errors or an unknown datasource.
        NetworkError: On registry failures.

    """
    logger = get_global_logger()

    logger.step(1, 3, "Loading manifest...")
    config = load_effective_config(manifest_path)
    defaults = config["defaults"]
    registry = defaults["registry"]
    cache_config = defaults["cache"]

    datasource_name = registry.get("datasource", "hackage")
    datasource = get_datasource(datasource_name, registry.get("url"))

    cache_file: Path | None = None
    if not stateless:
        cache_file = state_file or Path(cache_config["file"])
        logger.verbose("CACHE", f"Using release cache: {cache_file}")

    dependencies = config["dependencies"]
    logger.step(2, 3, f"Fetching releases for {len(dependencies)} dependencies...")
    versions_by_name: dict[str, list[str]] = {}
    for dep in dependencies:
        versions_by_name[dep["name"]] = fetch_versions(
            dep["name"],
            datasource,
            datasource_name=datasource_name,
            timeout=registry.get("timeout", 30),
            cache_file=cache_file,
            ttl_minutes=cache_config.get("ttl_minutes", DEFAULT_TTL_MINUTES),
        )

    logger.step(3, 3, "Computing range updates...")
    return [
        compute_update(
            dep["name"],
            dep["range"],
            versions_by_name[dep["name"]],
            dep.get("range_strategy") or defaults["range_strategy"],
        )
        for dep in dependencies
    ]
