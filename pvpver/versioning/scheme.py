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

"""Versioning scheme descriptor and trivial predicates for PVP.

Dependency-update tools describe each versioning scheme with an id and a
handful of predicates. For PVP most of them are constant: every version is
considered a stable, compatible version.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from .components import compare_versions


@dataclass(frozen=True)
class VersioningScheme:
    """Static description of a versioning scheme.

    Attributes:
        id: Short identifier used in configuration (e.g., "pvp").
        display_name: Human-readable name.
        urls: Reference documentation links.
        supports_ranges: Whether range expressions are understood.

    """

    id: str
    display_name: str
    urls: tuple[str, ...] = field(default_factory=tuple)
    supports_ranges: bool = True


PVP_VERSIONING = VersioningScheme(
    id="pvp",
    display_name="Package Versioning Policy (Haskell)",
    urls=("https://pvp.haskell.org",),
    supports_ranges=True,
)


def is_version(version: str) -> bool:
    return True


def is_stable(version: str) -> bool:
    return True


def is_compatible(version: str, current: str | None = None) -> bool:
    return True


def is_single_version(range_: str) -> bool:
    """Return True if the expression is not an explicit interval."""
    return "&&" not in range_


def equals(a: str, b: str) -> bool:
    """Exact string equality; "1.0" and "1.0.0" are different versions."""
    return a == b


def sort_versions(a: str, b: str) -> int:
    """Comparator for functools.cmp_to_key, ascending."""
    return compare_versions(a, b)
