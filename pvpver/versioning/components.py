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

"""Component-level version utilities for PVP versions.

This module is format-agnostic: it does NOT parse ranges or talk to a
registry. It only decomposes version strings into integer components and
compares them consistently.

PVP versions are plain dot-separated integers of any length ("1.2",
"4.10.0.1"). Unlike semver, the first TWO components form the major
version, so "4.1" and "4.10" are different majors.
"""

from __future__ import annotations

from dataclasses import dataclass
import re
from typing import Literal, assert_never

# ----------------------------
# Shared DTO
# ----------------------------


@dataclass(frozen=True)
class MajorBoundary:
    """The major version of a version-like string and its successor.

    Attributes:
        current_major: Major label, e.g. "1.2" for "1.2.3" or "5" for "5".
        major_plus_one: Next major label, e.g. "1.3" or "6".

    """

    current_major: str
    major_plus_one: str


SameKind = Literal["major", "minor", "patch"]

# ----------------------------
# Extraction
# ----------------------------

_COMPONENT = re.compile(r"\s*\+?(\d+)\s*")
_TWO_GROUPS = re.compile(r"(?P<first>\d+)\.(?P<second>\d+)")
_LEADING_INT = re.compile(r"\s*([+-]?\d+)")


def extract_all_components(version: str) -> list[int]:
    """Decompose a version string into its integer components.

    Tokens that are not non-negative integers (an explicit leading "+" is
    accepted) are dropped, not truncated:
    "1.x.3" -> [1, 3]. Later components shift left, so callers must not
    assume positions line up with the original dotted text.
    """
    components: list[int] = []
    for token in version.split("."):
        m = _COMPONENT.fullmatch(token)
        if m:
            components.append(int(m.group(1)))
    return components


def is_valid(version: str) -> bool:
    """Return True if the version has at least one integer component."""
    return len(extract_all_components(version)) >= 1


# ----------------------------
# Comparison core
# ----------------------------


def compare_vectors(a: list[int], b: list[int]) -> int:
    """Compare two component vectors.

    Missing indices count as 0 while walking the longer length. If no index
    differs, the longer vector wins, so [1, 0, 0] > [1, 0] even though they
    are zero-padded equal.

    Returns -1 if a < b, 0 if equal, 1 if a > b.
    """
    for i in range(max(len(a), len(b))):
        x = a[i] if i < len(a) else 0
        y = b[i] if i < len(b) else 0
        if x != y:
            return 1 if x > y else -1
    return (len(a) > len(b)) - (len(a) < len(b))


def compare_versions(a: str, b: str) -> int:
    """Compare two version strings component-wise (see compare_vectors)."""
    return compare_vectors(extract_all_components(a), extract_all_components(b))


def is_greater_than(version: str, other: str) -> bool:
    """Return True iff version sorts strictly after other."""
    return compare_versions(version, other) > 0


# ----------------------------
# Major boundary
# ----------------------------


def get_major_components(text: str) -> MajorBoundary | None:
    """Resolve the major label of a version-like string and its successor.

    The first "A.B" pair found anywhere in the text is the major; otherwise
    a leading integer N is taken as the whole major. Returns None when
    neither is present.

    Example:
        >>> get_major_components("1.2.3")
        MajorBoundary(current_major='1.2', major_plus_one='1.3')
        >>> get_major_components("0")
        MajorBoundary(current_major='0', major_plus_one='1')
    """
    m = _TWO_GROUPS.search(text)
    if m:
        first = m.group("first")
        second = int(m.group("second"))
        return MajorBoundary(
            current_major=f"{first}.{second}",
            major_plus_one=f"{first}.{second + 1}",
        )

    single = _LEADING_INT.match(text)
    if single is None:
        return None
    n = int(single.group(1))
    return MajorBoundary(current_major=str(n), major_plus_one=str(n + 1))


# ----------------------------
# Positional accessors
# ----------------------------


def get_major(version: str) -> float | None:
    """Return the first two components joined as one number.

    "1.1" and "1.10" both become 1.1 here, so this is only informational.
    Use is_same(kind="major", ...) for an exact comparison.
    """
    components = extract_all_components(version)
    if not components:
        return None
    return float(".".join(str(c) for c in components[:2]))


def get_minor(version: str) -> int | None:
    """Return the third component (PVP "minor"), or None if absent."""
    components = extract_all_components(version)
    if len(components) < 3:
        return None
    return components[2]


def get_patch(version: str) -> float | None:
    """Return the PVP "patch" value built from components 3 and later.

    Components after the fourth are glued on as raw digits behind the
    decimal point: "1.0.0.5.1" -> 5.1, "1.0.0.5.1.2" -> 5.12.
    """
    components = extract_all_components(version)
    if len(components) < 4:
        return None
    fraction = "".join(str(c) for c in components[4:])
    return float(f"{components[3]}.{fraction}")


def is_same(kind: SameKind, a: str, b: str) -> bool:
    """Check whether two versions agree at major, minor or patch level."""
    if kind == "major":
        a_major = get_major_components(a)
        b_major = get_major_components(b)
        if a_major is None or b_major is None:
            return False
        return a_major.current_major == b_major.current_major
    elif kind == "minor":
        return get_minor(a) == get_minor(b)
    elif kind == "patch":
        return get_patch(a) == get_patch(b)
    else:
        assert_never(kind)
