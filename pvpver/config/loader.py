"""
Manifest loading and merging for pvpver.

A manifest lists the dependencies whose ranges pvpver should keep current,
together with the defaults that control how they are checked.

Configuration Layers
--------------------
1. **Built-in defaults** (DEFAULT_CONFIG)
   - Hackage registry, `auto` range strategy, state/releases.json cache

2. **Organization defaults** (defaults/org.yaml)
   - Found by walking upward from the manifest directory
   - Optional; overrides built-in defaults

3. **Manifest** (e.g. pvp.yaml)
   - Always required; defines the dependencies
   - Overrides organization and built-in defaults

Merge Behavior
--------------
The loader performs deep merging with "last wins" semantics:
  - **Dicts**: Recursively merged (keys from overlay override base)
  - **Lists**: Completely replaced (NOT appended/extended)
  - **Scalars**: Overwritten (strings, numbers, booleans)

Path Resolution
---------------
Relative paths are resolved against the MANIFEST FILE location, making
manifests relocatable. Currently resolved paths:
  - defaults.cache.file

Manifest Example
----------------
    apiVersion: pvpver/v1
    defaults:
      range_strategy: widen
    dependencies:
      - name: aeson
        range: ">=2.0 && <2.1"
      - name: text
        range: "^>=2.0"
        range_strategy: bump

Error Handling
--------------
- ConfigError: Missing manifest, YAML parse errors, empty files, a
  non-mapping root, or validation failures
- All errors are chained with "from err" for better debugging
"""

from __future__ import annotations

import copy
from pathlib import Path
from typing import Any

import yaml

from pvpver.exceptions import ConfigError, RangeSyntaxError
from pvpver.logging import get_global_logger
from pvpver.policy import RANGE_STRATEGIES
from pvpver.versioning import parse

SUPPORTED_API_VERSIONS = ("pvpver/v1",)

DEFAULT_CONFIG: dict[str, Any] = {
    "apiVersion": "pvpver/v1",
    "defaults": {
        "range_strategy": "auto",
        "registry": {
            "datasource": "hackage",
            "url": "https://hackage.haskell.org",
            "timeout": 30,
        },
        "cache": {
            "file": "state/releases.json",
            "ttl_minutes": 3 * 60 * 24 * 30,
        },
    },
    "dependencies": [],
}

# -------------------------------
# YAML helpers
# -------------------------------


def _load_yaml_file(p: Path) -> Any:
    """
    Load a YAML file and return the parsed Python object.

    Raises:
      ConfigError - when the file is missing, invalid or empty
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


# -------------------------------
# Defaults discovery
# -------------------------------


def _find_defaults_root(start_dir: Path) -> Path | None:
    """
    Walk upward from 'start_dir' looking for a 'defaults/org.yaml'.
    Returns the 'defaults' directory or None if not found.
    """
    for parent in [start_dir] + list(start_dir.parents):
        candidate = parent / "defaults" / "org.yaml"
        if candidate.exists():
            return parent / "defaults"
    return None


def _resolve_known_paths(cfg: dict[str, Any], manifest_dir: Path) -> None:
    """
    Resolve defaults.cache.file against 'manifest_dir' if it is relative.
    Modifies cfg in place.
    """
    cache = cfg.get("defaults", {}).get("cache")
    if not isinstance(cache, dict):
        return
    raw_path = cache.get("file")
    if isinstance(raw_path, str) and raw_path:
        p = Path(raw_path)
        if not p.is_absolute():
            cache["file"] = str((manifest_dir / p).resolve())


# -------------------------------
# Validation
# -------------------------------


def validate_config(cfg: dict[str, Any]) -> list[str]:
    """Validate a merged manifest without making network calls.

    Args:
        cfg: Merged configuration.

    Returns:
        List of error messages. Empty list if the configuration is valid.

    """
    errors: list[str] = []

    api_version = cfg.get("apiVersion")
    if api_version not in SUPPORTED_API_VERSIONS:
        errors.append(
            f"Unsupported apiVersion {api_version!r}. "
            f"Supported: {', '.join(SUPPORTED_API_VERSIONS)}"
        )

    defaults = cfg.get("defaults", {})
    if not isinstance(defaults, dict):
        errors.append("defaults must be a dictionary")
        defaults = {}

    default_strategy = defaults.get("range_strategy")
    if default_strategy not in RANGE_STRATEGIES:
        errors.append(f"defaults.range_strategy: unknown strategy {default_strategy!r}")

    registry = defaults.get("registry", {})
    if not isinstance(registry, dict):
        errors.append("defaults.registry must be a dictionary")
    else:
        timeout = registry.get("timeout", 30)
        if not isinstance(timeout, int) or timeout <= 0:
            errors.append("defaults.registry.timeout must be a positive integer")

    dependencies = cfg.get("dependencies")
    if not isinstance(dependencies, list):
        errors.append("dependencies must be a list")
        return errors

    for i, dep in enumerate(dependencies):
        where = f"dependencies[{i}]"
        if not isinstance(dep, dict):
            errors.append(f"{where} must be a dictionary")
            continue

        name = dep.get("name")
        if not isinstance(name, str) or not name.strip():
            errors.append(f"{where}: missing required field 'name'")
        else:
            where = f"dependencies[{i}] ({name})"

        range_ = dep.get("range")
        if not isinstance(range_, str) or not range_.strip():
            errors.append(f"{where}: missing required field 'range'")
        else:
            try:
                parse(range_)
            except RangeSyntaxError as err:
                errors.append(f"{where}: invalid range {range_!r}: {err}")

        strategy = dep.get("range_strategy")
        if strategy is not None and strategy not in RANGE_STRATEGIES:
            errors.append(f"{where}: unknown range_strategy {strategy!r}")

    return errors


# -------------------------------
# Public API
# -------------------------------


def load_effective_config(manifest_path: Path) -> dict[str, Any]:
    """
    Load and merge the effective configuration for a manifest.

    Steps
      1) Read manifest YAML.
      2) Find defaults root by scanning upwards for 'defaults/org.yaml'.
      3) Merge: built-in -> org -> manifest (dicts deep-merge, lists replace).
      4) Resolve known relative paths (relative to the manifest directory).
      5) Validate the result.

    Returns
      A merged configuration dict ready for check_manifest().

    Raises
      ConfigError on a missing manifest, YAML errors or validation errors.
    """
    logger = get_global_logger()

    manifest_path = manifest_path.resolve()
    manifest_dir = manifest_path.parent

    logger.verbose("CONFIG", f"Loading manifest: {manifest_path}")

    manifest = _load_yaml_file(manifest_path)
    if not isinstance(manifest, dict):
        raise ConfigError(f"top-level YAML must be a mapping (dict): {manifest_path}")

    merged = copy.deepcopy(DEFAULT_CONFIG)
    layers_merged = 1

    defaults_root = _find_defaults_root(manifest_dir)
    if defaults_root:
        org_defaults_path = defaults_root / "org.yaml"
        logger.verbose("CONFIG", f"Loading: {org_defaults_path}")
        org_defaults = _load_yaml_file(org_defaults_path)
        if isinstance(org_defaults, dict):
            merged = _deep_merge_dicts(merged, org_defaults)
            layers_merged += 1

    merged = _deep_merge_dicts(merged, manifest)
    layers_merged += 1
    logger.verbose("CONFIG", f"Deep merged {layers_merged} layer(s)")
    logger.debug("CONFIG", yaml.safe_dump(merged, default_flow_style=False, sort_keys=False))

    _resolve_known_paths(merged, manifest_dir)

    errors = validate_config(merged)
    if errors:
        details = "\n".join(f"  - {e}" for e in errors)
        raise ConfigError(f"Invalid manifest {manifest_path}:\n{details}")

    return merged
