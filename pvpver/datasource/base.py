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

"""Datasource base protocol and registry for pvpver.

This module defines the foundational components for release lookup:

- Release: Immutable record describing one published version
- Datasource protocol: Interface that all release sources must implement
- Datasource registry: Global dict mapping datasource names to implementations
- Registration and lookup functions: register_datasource() and get_datasource()

Design Philosophy:
    - Datasources are Protocol classes (structural subtyping, not inheritance)
    - Registration happens at module import time (datasources self-register)
    - Each datasource only fetches; ordering and range matching belong to
      pvpver.versioning

Example:
    Implementing a custom datasource:
        ```python
        from pvpver.datasource.base import Release, register_datasource

        class StaticDatasource:
            def __init__(self, registry_url: str | None = None) -> None:
                self.registry_url = registry_url

            def get_releases(self, package_name, *, timeout=30):
                return [Release(version="1.0", changelog_url=None)]

        register_datasource("static", StaticDatasource)
        ```

"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol

from pvpver.exceptions import ConfigError

# -------------------------------
# Shared DTO
# -------------------------------


@dataclass(frozen=True)
class Release:
    """A single published version of a package.

    Attributes:
        version: Raw version string (e.g., "2.1.2.1").
        changelog_url: Link to the release changelog, if the registry has one.
        release_timestamp: ISO-8601 publication time, None when unknown.
        is_stable: Whether the registry treats this as a stable release.
        is_deprecated: Whether the release was deprecated upstream.

    """

    version: str
    changelog_url: str | None = None
    release_timestamp: str | None = None
    is_stable: bool = True
    is_deprecated: bool = False


# -------------------------------
# Datasource Protocol
# -------------------------------


class Datasource(Protocol):
    """Protocol for release sources.

    Implementations are constructed with an optional registry URL and must
    return every known release of a package, in any order.
    """

    def get_releases(self, package_name: str, *, timeout: int = 30) -> list[Release]:
        """Return all known releases of a package.

        Args:
            package_name: Package name on the registry (e.g., "aeson").
            timeout: Per-request timeout in seconds.

        Returns:
            Releases in registry order (unsorted).

        Raises:
            NetworkError: On registry failures or unexpected responses.

        """
        ...


# -------------------------------
# Datasource Registry
# -------------------------------

_DATASOURCE_REGISTRY: dict[str, type] = {}


def register_datasource(name: str, datasource_class: type) -> None:
    """Register a datasource by name in the global registry.

    Registering the same name twice overwrites the previous registration
    (allows monkey-patching for tests).

    Args:
        name: Datasource name used in manifests under
            defaults.registry.datasource (e.g., "hackage").
        datasource_class: Class implementing the Datasource protocol. It is
            called with the registry URL (or None for its default).

    """
    _DATASOURCE_REGISTRY[name] = datasource_class


def get_datasource(name: str, registry_url: str | None = None) -> Datasource:
    """Get a datasource instance by name from the global registry.

    Args:
        name: Datasource name (e.g., "hackage"). Case-sensitive.
        registry_url: Base URL override; None keeps the datasource default.

    Returns:
        A new instance of the requested datasource.

    Raises:
        ConfigError: If the datasource name is not registered. The error
            message includes the available names.

    """
    if name not in _DATASOURCE_REGISTRY:
        available = ", ".join(_DATASOURCE_REGISTRY.keys())
        raise ConfigError(
            f"Unknown datasource: {name!r}. Available: {available or '(none)'}"
        )
    return _DATASOURCE_REGISTRY[name](registry_url)
