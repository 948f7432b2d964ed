"""
PVP version parsing, comparison and range evaluation for pvpver.

This package implements the Haskell Package Versioning Policy (PVP) range
semantics. It is a pure, synchronous engine: no network or file I/O.

Modules
-------
components : module
    Component extraction, comparison, major boundaries and is_same.
ranges : module
    Range parsing into Interval/Disjunction/Unsatisfiable, membership and
    extremal search.
scheme : module
    Scheme descriptor and constant predicates.

Public API
----------
extract_all_components : function
    Decompose "1.2.x.3" into [1, 2, 3].
is_greater_than : function
    Strict ordering with a length tie-break ("1.0.0" > "1.0").
parse : function
    Parse a range expression.
matches : function
    Check if a version is admitted by a range.
get_satisfying_version / min_satisfying_version : function
    Highest / lowest version of a list inside a range.
is_same : function
    Compare two versions at major, minor or patch level.

PVP versus semver
-----------------
PVP treats the first TWO components as the major version:

    >>> from pvpver.versioning import is_same, get_major_components
    >>> is_same("major", "4.1", "4.1.0")
    True
    >>> is_same("major", "4.1", "4.10")
    False
    >>> get_major_components("1.2.3").major_plus_one
    '1.3'

Range examples:

    >>> from pvpver.versioning import matches
    >>> matches("1.0.1", ">=1.0 && <1.1")
    True
    >>> matches("4.10", "^>=4.1")
    False

Notes
-----
- Non-numeric components are dropped, shifting later components left
- Upper bounds are compared at major granularity only
- Patch values glue trailing components as digits ("1.0.0.5.1" -> 5.1)
"""

from .components import (
    MajorBoundary,
    SameKind,
    compare_vectors,
    compare_versions,
    extract_all_components,
    get_major,
    get_major_components,
    get_minor,
    get_patch,
    is_greater_than,
    is_same,
    is_valid,
)
from .ranges import (
    Disjunction,
    Interval,
    Parsed,
    Unsatisfiable,
    get_satisfying_version,
    is_less_than_range,
    matches,
    min_satisfying_version,
    parse,
)
from .scheme import PVP_VERSIONING, VersioningScheme

__all__ = [
    "MajorBoundary",
    "SameKind",
    "compare_vectors",
    "compare_versions",
    "extract_all_components",
    "get_major",
    "get_major_components",
    "get_minor",
    "get_patch",
    "is_greater_than",
    "is_same",
    "is_valid",
    "Disjunction",
    "Interval",
    "Parsed",
    "Unsatisfiable",
    "get_satisfying_version",
    "is_less_than_range",
    "matches",
    "min_satisfying_version",
    "parse",
    "PVP_VERSIONING",
    "VersioningScheme",
]
