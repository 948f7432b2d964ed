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

"""PVP range parsing, membership and extremal search.

Supported expressions (checked in this order):

- disjunctions: "^>=1.0 || ^>=1.2"
- caret ranges: "^>=1.2.3" -> >=1.2.3 && <1.3
- exact versions: "==1.0"
- the empty range: "<0" or "-none"
- explicit intervals: ">=1.0 && <1.1"

Every range is parsed into one of three frozen dataclasses:

- Interval: lower (inclusive) and upper (exclusive) bound strings
- Disjunction: logical OR of parts, bounds computed on access
- Unsatisfiable: matches nothing, has no bounds

Example:
    >>> from pvpver.versioning import parse, matches
    >>> parse(">=1.0 && <1.1")
    Interval(lower='1.0', upper='1.1')
    >>> matches("1.0.1", ">=1.0 && <1.1")
    True
    >>> get_satisfying_version(["1.0.0", "1.0.4", "1.3.0"], ">=1.0 && <1.1")
    '1.0.4'

Notes:
- The upper bound is only enforced at major granularity: any version whose
  major equals the upper bound's major is rejected, even "1.1.5" against
  "<1.1.9". Consumers rely on this.
- All functions are pure; a range is re-parsed on every call.
"""

from __future__ import annotations

from dataclasses import dataclass
from functools import cmp_to_key
from typing import assert_never

from pvpver.exceptions import LogicInvariantError, RangeSyntaxError

from .components import (
    compare_vectors,
    compare_versions,
    extract_all_components,
    get_major_components,
    is_greater_than,
)

# ----------------------------
# Parsed range types
# ----------------------------


@dataclass(frozen=True)
class Interval:
    """A single range with inclusive lower and exclusive upper bound."""

    lower: str
    upper: str


@dataclass(frozen=True)
class Unsatisfiable:
    """The empty range ("<0" or "-none")."""


@dataclass(frozen=True)
class Disjunction:
    """Logical OR of parsed parts.

    Attributes:
        parts: Parsed alternatives in source order. Never empty.

    """

    parts: tuple[Parsed, ...]

    @property
    def lower(self) -> str:
        """Lowest lower bound across the satisfiable parts."""
        lowest: str | None = None
        for part in self.parts:
            match part:
                case Unsatisfiable():
                    continue
                case Interval() | Disjunction():
                    if lowest is None or is_less_than_range(
                        part.lower, f"=={lowest}"
                    ):
                        lowest = part.lower
                case _:
                    assert_never(part)
        if lowest is None:
            raise LogicInvariantError("no lower bound: every part is unsatisfiable")
        return lowest

    @property
    def upper(self) -> str:
        """Highest upper bound across the satisfiable parts."""
        highest: str | None = None
        for part in self.parts:
            match part:
                case Unsatisfiable():
                    continue
                case Interval() | Disjunction():
                    if highest is None or is_greater_than(part.upper, highest):
                        highest = part.upper
                case _:
                    assert_never(part)
        if highest is None:
            raise LogicInvariantError("no upper bound: every part is unsatisfiable")
        return highest


Parsed = Interval | Disjunction | Unsatisfiable

# ----------------------------
# Parser
# ----------------------------


def _interval(lower: str, upper: str, text: str) -> Interval:
    """Build an Interval, rejecting bounds with no numeric component."""
    for bound in (lower, upper):
        if not extract_all_components(bound):
            raise RangeSyntaxError(f"invalid version bound {bound!r} in {text!r}")
    return Interval(lower, upper)


def parse(text: str) -> Parsed:
    """Parse a PVP range expression.

    Args:
        text: Range expression, e.g. ">=1.0 && <1.1" or "^>=2.1".

    Returns:
        Interval, Disjunction or Unsatisfiable.

    Raises:
        RangeSyntaxError: If the expression has no supported shape, a
            required prefix is missing, or a caret range has no
            resolvable major.

    """
    text = text.strip()

    if "||" in text:
        return Disjunction(tuple(parse(part) for part in text.split("||")))

    if text.startswith("^>=") and "&&" not in text:
        lower = text[3:].strip()
        boundary = get_major_components(lower)
        if boundary is None:
            raise RangeSyntaxError(f"couldn't get major components of {lower!r}")
        return _interval(lower, boundary.major_plus_one, text)

    if text.startswith("=="):
        version = text[2:]
        return _interval(version, version, text)

    if text in ("<0", "-none"):
        return Unsatisfiable()

    if "&&" not in text:
        raise RangeSyntaxError(f"expected range but got: {text!r}")

    left, _, right = text.partition("&&")
    left = left.strip()
    right = right.strip()
    if not left.startswith(">="):
        raise RangeSyntaxError(f"expected '>=' at start of {left!r}")
    if not right.startswith("<"):
        raise RangeSyntaxError(f"expected '<' at start of {right!r}")

    return _interval(left[2:].strip(), right[1:].strip(), text)


# ----------------------------
# Membership
# ----------------------------


def matches(version: str, range_: str) -> bool:
    """Return True if version is admitted by the range."""
    parsed = parse(range_)
    match parsed:
        case Unsatisfiable():
            return False
        case Interval() | Disjunction():
            lower, upper = parsed.lower, parsed.upper
        case _:
            assert_never(parsed)

    if is_greater_than(version, upper):
        return False

    # "<" is exclusive, and only majors are compared on the upper end
    version_major = get_major_components(version)
    upper_major = get_major_components(upper)
    if (
        version_major is not None
        and upper_major is not None
        and version_major.current_major == upper_major.current_major
    ):
        return False

    if is_greater_than(lower, version):
        return False
    return True


def is_less_than_range(version: str, range_: str) -> bool:
    """Return True if version sorts below every version the range admits."""
    parsed = parse(range_)
    match parsed:
        case Unsatisfiable():
            return False
        case Interval() | Disjunction():
            lower = parsed.lower
        case _:
            assert_never(parsed)

    version_components = extract_all_components(version)
    lower_components = extract_all_components(lower)
    for ours, theirs in zip(version_components, lower_components):
        if ours != theirs:
            return compare_vectors(version_components, lower_components) < 0
    return len(version_components) < len(lower_components)


# ----------------------------
# Extremal search
# ----------------------------


def get_satisfying_version(versions: list[str], range_: str) -> str | None:
    """Return the highest version in versions that matches range_, or None."""
    for candidate in sorted(versions, key=cmp_to_key(compare_versions), reverse=True):
        if matches(candidate, range_):
            return candidate
    return None


def min_satisfying_version(versions: list[str], range_: str) -> str | None:
    """Return the lowest version in versions that matches range_, or None."""
    for candidate in sorted(versions, key=cmp_to_key(compare_versions)):
        if matches(candidate, range_):
            return candidate
    return None
