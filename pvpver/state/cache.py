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

"""Incremental release cache for pvpver.

Registries return release lists page by page, newest first. The cache keeps
every item seen so far, keyed by item id, so a later run can stop paging as
soon as it meets an item it already has.

The state file is a JSON file that stores, per package key:

- items: Registry items keyed by their "id"
- updated_at: Newest "last_updated" timestamp seen among the items
- expires_at: When the entry should be discarded (default TTL 90 days)

Example:
    Reconcile one page of registry items:
        ```python
        from pathlib import Path
        from pvpver.state import ReleaseCache

        cache = ReleaseCache.init(Path("state/releases.json"), "hackage:aeson")
        need_next_page = cache.reconcile(page_items, expected_count=total)
        cache.save()
        items = cache.get_items()
        ```

"""

from __future__ import annotations

from datetime import UTC, datetime, timedelta
import json
from pathlib import Path
from typing import Any

from pvpver import __version__
from pvpver.exceptions import StateError
from pvpver.logging import get_global_logger

# 3 months, in minutes
DEFAULT_TTL_MINUTES = 3 * 60 * 24 * 30


def _parse_timestamp(value: str | None) -> datetime | None:
    if not value:
        return None
    return datetime.fromisoformat(value)


class ReleaseCache:
    """Cached registry items for a single package.

    Attributes:
        state_file: Path to the JSON state file shared by all packages.
        key: Package key inside the state file (e.g., "hackage:aeson").
        ttl_minutes: Lifetime of the entry written by save().

    """

    def __init__(
        self,
        state_file: Path,
        key: str,
        items: dict[str, dict[str, Any]] | None = None,
        updated_at: str | None = None,
        ttl_minutes: int = DEFAULT_TTL_MINUTES,
    ) -> None:
        self.state_file = state_file
        self.key = key
        self.ttl_minutes = ttl_minutes
        self._items: dict[str, dict[str, Any]] = dict(items or {})
        self._updated_at = updated_at
        self._is_changed = False

    @classmethod
    def init(
        cls,
        state_file: Path,
        key: str,
        ttl_minutes: int = DEFAULT_TTL_MINUTES,
    ) -> ReleaseCache:
        """Load the cached entry for key, or start empty.

        An entry past its expires_at is ignored.

        Raises:
            StateError: If the state file is corrupted. It is renamed to
                *.json.backup first, so the next run starts clean.

        """
        logger = get_global_logger()
        state = _read_state(state_file)

        entry = state.get("packages", {}).get(key)
        if entry:
            expires_at = _parse_timestamp(entry.get("expires_at"))
            if expires_at is not None and expires_at <= datetime.now(UTC):
                logger.verbose("CACHE", f"Cache entry for {key} expired")
                entry = None

        if not entry:
            logger.verbose("CACHE", f"No cached releases for {key}")
            return cls(state_file, key, ttl_minutes=ttl_minutes)

        logger.verbose(
            "CACHE", f"Loaded {len(entry.get('items', {}))} cached item(s) for {key}"
        )
        return cls(
            state_file,
            key,
            items=entry.get("items", {}),
            updated_at=entry.get("updated_at"),
            ttl_minutes=ttl_minutes,
        )

    @property
    def is_changed(self) -> bool:
        return self._is_changed

    @property
    def updated_at(self) -> str | None:
        return self._updated_at

    def reconcile(self, items: list[dict[str, Any]], expected_count: int) -> bool:
        """Merge one page of registry items into the cache.

        Args:
            items: Page of items, each with an "id" and optionally an ISO
                "last_updated" timestamp.
            expected_count: Total item count the registry reports.

        Returns:
            True if the caller should fetch the next page, False once an
            unchanged item shows the cache has caught up.

        """
        need_next_page = True

        updated_at = self._updated_at
        latest = _parse_timestamp(updated_at)

        for item in items:
            item_id = str(item["id"])
            if self._items.get(item_id) == item:
                need_next_page = False
                continue

            self._items[item_id] = item
            item_date = _parse_timestamp(item.get("last_updated"))
            if item_date is not None and (latest is None or latest < item_date):
                updated_at = item["last_updated"]
                latest = item_date

            self._is_changed = True

        self._updated_at = updated_at
        if not need_next_page and len(self._items) != expected_count:
            get_global_logger().warning(
                f"release cache count mismatch for {self.key}: "
                f"cached={len(self._items)} expected={expected_count}"
            )
        return need_next_page

    def save(self) -> None:
        """Write the entry back to the state file if anything changed."""
        if not self._is_changed:
            return

        state = _read_state(self.state_file)
        expires_at = datetime.now(UTC) + timedelta(minutes=self.ttl_minutes)
        state.setdefault("packages", {})[self.key] = {
            "items": self._items,
            "updated_at": self._updated_at,
            "expires_at": expires_at.isoformat(),
        }
        state.setdefault("metadata", {})
        state["metadata"]["last_updated"] = datetime.now(UTC).isoformat()

        save_state(state, self.state_file)
        self._is_changed = False
        get_global_logger().verbose("CACHE", f"Updated state file: {self.state_file}")

    def get_items(self) -> list[dict[str, Any]]:
        return list(self._items.values())


def _read_state(state_file: Path) -> dict[str, Any]:
    """Load state, falling back to a default structure if missing."""
    try:
        return load_state(state_file)
    except FileNotFoundError:
        return create_default_state()
    except json.JSONDecodeError as err:
        backup = state_file.with_suffix(".json.backup")
        state_file.rename(backup)
        raise StateError(
            f"Corrupted state file backed up to {backup}. "
            f"A fresh state file will be created."
        ) from err


def create_default_state() -> dict[str, Any]:
    """Create a default empty state structure.

    Returns:
        Empty state with metadata section.

    """
    return {
        "metadata": {
            "pvpver_version": __version__,
            "schema_version": "1",
            "last_updated": datetime.now(UTC).isoformat(),
        },
        "packages": {},
    }


def load_state(state_file: Path) -> dict[str, Any]:
    """Load state from JSON file.

    Raises:
        FileNotFoundError: If state file doesn't exist.
        json.JSONDecodeError: If file contains invalid JSON.

    """
    with open(state_file, encoding="utf-8") as f:
        return json.load(f)


def save_state(state: dict[str, Any], state_file: Path) -> None:
    """Save state to JSON file with pretty-printing.

    Creates parent directories if needed. Uses 2-space indentation
    and sorted keys for consistent diffs in version control.

    """
    state_file.parent.mkdir(parents=True, exist_ok=True)

    with open(state_file, "w", encoding="utf-8") as f:
        json.dump(state, f, indent=2, sort_keys=True)
        f.write("\n")  # Trailing newline for git
