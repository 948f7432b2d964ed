"""
pvpver - PVP version ranges

A Python library and CLI for Haskell Package Versioning Policy (PVP)
version ranges: parse range expressions, test membership, pick the best
release for a range, and compute updated ranges when new releases appear.

pvpver provides:
  - A pure, synchronous range engine (caret, interval, exact, disjunction)
  - PVP-aware comparison where the first two components form the major
  - Range strategies: pin, widen/auto, bump, replace
  - Hackage release lookup with an incremental local cache
  - YAML dependency manifests with layered defaults

Quick Start
-----------
Test a version against a range:

    $ pvp matches 1.0.1 ">=1.0 && <1.1"

Compute a new range for a release:

    $ pvp new-value ">=1.0 && <1.1" 1.1 --strategy widen

Check every dependency of a manifest:

    $ pvp check pvp.yaml

Package Structure
-----------------
cli : module
    Command-line interface with argparse.
core : module
    High-level orchestration functions.
versioning : package
    Component extraction, comparison, range parsing and matching.
policy : package
    Range update strategies.
datasource : package
    Release sources (Hackage).
state : package
    Incremental release cache.
config : package
    YAML manifest loading and merging.

Public API
----------
    from pvpver.versioning import parse, matches, get_satisfying_version
    from pvpver.policy import get_new_value
    from pvpver.core import check_manifest

Project Information
-------------------
Author: Roger Cibrian
License: Apache-2.0
"""

__version__ = "0.1.0"
__author__ = "Roger Cibrian"
__license__ = "Apache-2.0"
__description__ = "PVP version range engine for Haskell dependencies"

# Re-export commonly used functions for convenience
from pvpver.policy import get_new_value
from pvpver.versioning import (
    get_satisfying_version,
    is_greater_than,
    is_less_than_range,
    is_same,
    matches,
    min_satisfying_version,
    parse,
)

__all__ = [
    "__version__",
    "__author__",
    "__license__",
    "__description__",
    "get_new_value",
    "get_satisfying_version",
    "is_greater_than",
    "is_less_than_range",
    "is_same",
    "matches",
    "min_satisfying_version",
    "parse",
]
