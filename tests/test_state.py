"""
Tests for pvpver.state module.

Tests the release cache including:
- Loading and saving state files
- Reconciling pages of registry items
- Expiry and corrupted state handling
"""

from __future__ import annotations

from datetime import UTC, datetime, timedelta
import json

import pytest

from pvpver.exceptions import StateError
from pvpver.logging import DefaultLogger, set_global_logger
from pvpver.state import ReleaseCache, load_state, save_state
from pvpver.state.cache import create_default_state


def _item(version: str, last_updated: str | None = None) -> dict:
    return {"id": version, "version": version, "last_updated": last_updated}


class TestStateFileOperations:
    """Tests for loading and saving state files."""

    def test_create_default_state(self):
        """Test creating default empty state structure."""
        state = create_default_state()

        assert "metadata" in state
        assert state["metadata"]["schema_version"] == "1"
        assert "pvpver_version" in state["metadata"]
        assert state["packages"] == {}

    def test_save_and_load_state(self, tmp_path):
        """Test round-trip save and load."""
        state_file = tmp_path / "releases.json"
        state = {"metadata": {}, "packages": {"hackage:aeson": {"items": {}}}}

        save_state(state, state_file)
        loaded = load_state(state_file)

        assert loaded == state

    def test_load_missing_file_raises(self, tmp_path):
        """Test that loading nonexistent file raises FileNotFoundError."""
        with pytest.raises(FileNotFoundError):
            load_state(tmp_path / "nonexistent.json")

    def test_save_creates_parent_directory(self, tmp_path):
        """Test that save creates parent directories if needed."""
        state_file = tmp_path / "nested" / "dir" / "releases.json"

        save_state(create_default_state(), state_file)

        assert state_file.exists()

    def test_save_pretty_prints_json(self, tmp_path):
        """Test that saved JSON is pretty-printed with sorted keys."""
        state_file = tmp_path / "releases.json"

        save_state({"packages": {}, "metadata": {}}, state_file)

        content = state_file.read_text(encoding="utf-8")
        assert content.index('"metadata"') < content.index('"packages"')
        assert "  " in content
        assert content.endswith("\n")


class TestReleaseCacheInit:
    """Tests for loading a cache entry."""

    def test_init_without_state_file(self, tmp_path):
        """Test that a missing state file gives an empty cache."""
        cache = ReleaseCache.init(tmp_path / "releases.json", "hackage:aeson")

        assert cache.get_items() == []
        assert cache.updated_at is None
        assert not cache.is_changed

    def test_init_loads_existing_entry(self, tmp_path):
        """Test that a cached entry is loaded."""
        state_file = tmp_path / "releases.json"
        expires_at = (datetime.now(UTC) + timedelta(days=1)).isoformat()
        save_state(
            {
                "metadata": {},
                "packages": {
                    "hackage:aeson": {
                        "items": {"2.0": _item("2.0")},
                        "updated_at": "2024-01-01T00:00:00+00:00",
                        "expires_at": expires_at,
                    }
                },
            },
            state_file,
        )

        cache = ReleaseCache.init(state_file, "hackage:aeson")

        assert cache.get_items() == [_item("2.0")]
        assert cache.updated_at == "2024-01-01T00:00:00+00:00"

    def test_init_ignores_expired_entry(self, tmp_path):
        """Test that an entry past its expiry starts empty."""
        state_file = tmp_path / "releases.json"
        expires_at = (datetime.now(UTC) - timedelta(minutes=1)).isoformat()
        save_state(
            {
                "metadata": {},
                "packages": {
                    "hackage:aeson": {
                        "items": {"2.0": _item("2.0")},
                        "expires_at": expires_at,
                    }
                },
            },
            state_file,
        )

        cache = ReleaseCache.init(state_file, "hackage:aeson")

        assert cache.get_items() == []

    def test_init_corrupted_state_is_backed_up(self, tmp_path):
        """Test that invalid JSON is moved aside and reported."""
        state_file = tmp_path / "releases.json"
        state_file.write_text("This is not JSON", encoding="utf-8")

        with pytest.raises(StateError, match="backed up"):
            ReleaseCache.init(state_file, "hackage:aeson")

        backup = tmp_path / "releases.json.backup"
        assert backup.exists()
        assert backup.read_text(encoding="utf-8") == "This is not JSON"
        assert not state_file.exists()

        # The next run starts clean
        cache = ReleaseCache.init(state_file, "hackage:aeson")
        assert cache.get_items() == []


class TestReconcile:
    """Tests for merging pages of registry items."""

    def test_new_items_request_next_page(self, tmp_path):
        """Test that a page of unseen items asks for more."""
        cache = ReleaseCache(tmp_path / "releases.json", "hackage:aeson")

        need_next_page = cache.reconcile([_item("2.1"), _item("2.0")], expected_count=2)

        assert need_next_page
        assert cache.is_changed
        assert len(cache.get_items()) == 2

    def test_known_item_stops_paging(self, tmp_path):
        """Test that meeting an unchanged item stops paging."""
        cache = ReleaseCache(
            tmp_path / "releases.json",
            "hackage:aeson",
            items={"2.0": _item("2.0")},
        )

        need_next_page = cache.reconcile([_item("2.1"), _item("2.0")], expected_count=2)

        assert not need_next_page
        assert cache.is_changed
        assert {i["version"] for i in cache.get_items()} == {"2.0", "2.1"}

    def test_unchanged_page_is_not_a_change(self, tmp_path):
        """Test that reconciling identical items leaves the cache clean."""
        cache = ReleaseCache(
            tmp_path / "releases.json",
            "hackage:aeson",
            items={"2.0": _item("2.0")},
        )

        cache.reconcile([_item("2.0")], expected_count=1)

        assert not cache.is_changed

    def test_modified_item_is_replaced(self, tmp_path):
        """Test that an item with new content overwrites the cached one."""
        cache = ReleaseCache(
            tmp_path / "releases.json",
            "hackage:aeson",
            items={"2.0": _item("2.0")},
        )
        changed = {**_item("2.0"), "is_deprecated": True}

        cache.reconcile([changed], expected_count=1)

        assert cache.get_items() == [changed]
        assert cache.is_changed

    def test_tracks_newest_timestamp(self, tmp_path):
        """Test that updated_at follows the newest last_updated."""
        cache = ReleaseCache(
            tmp_path / "releases.json",
            "hackage:aeson",
            updated_at="2024-02-01T00:00:00+00:00",
        )

        cache.reconcile(
            [
                _item("2.2", "2024-03-01T00:00:00+00:00"),
                _item("2.1", "2024-01-01T00:00:00+00:00"),
                _item("2.0"),
            ],
            expected_count=3,
        )

        assert cache.updated_at == "2024-03-01T00:00:00+00:00"

    def test_count_mismatch_warns(self, tmp_path, capsys):
        """Test that a cache/registry count mismatch is reported."""
        set_global_logger(DefaultLogger(verbose=True))
        cache = ReleaseCache(
            tmp_path / "releases.json",
            "hackage:aeson",
            items={"2.0": _item("2.0")},
        )

        cache.reconcile([_item("2.0")], expected_count=5)

        out = capsys.readouterr().out
        assert "[WARNING]" in out
        assert "cached=1 expected=5" in out


class TestSave:
    """Tests for writing the cache back."""

    def test_save_writes_entry(self, tmp_path):
        """Test that a changed cache is written with an expiry."""
        state_file = tmp_path / "releases.json"
        cache = ReleaseCache(state_file, "hackage:aeson", ttl_minutes=60)
        cache.reconcile([_item("2.0", "2024-01-01T00:00:00+00:00")], expected_count=1)

        cache.save()

        state = json.loads(state_file.read_text(encoding="utf-8"))
        entry = state["packages"]["hackage:aeson"]
        assert entry["items"] == {"2.0": _item("2.0", "2024-01-01T00:00:00+00:00")}
        assert entry["updated_at"] == "2024-01-01T00:00:00+00:00"
        expires_at = datetime.fromisoformat(entry["expires_at"])
        assert expires_at > datetime.now(UTC)
        assert expires_at <= datetime.now(UTC) + timedelta(minutes=60)
        assert "last_updated" in state["metadata"]
        assert not cache.is_changed

    def test_save_without_changes_does_nothing(self, tmp_path):
        """Test that an unchanged cache does not touch the state file."""
        state_file = tmp_path / "releases.json"
        cache = ReleaseCache(state_file, "hackage:aeson")

        cache.save()

        assert not state_file.exists()

    def test_save_keeps_other_packages(self, tmp_path):
        """Test that saving one key preserves entries of other keys."""
        state_file = tmp_path / "releases.json"
        first = ReleaseCache(state_file, "hackage:aeson")
        first.reconcile([_item("2.0")], expected_count=1)
        first.save()

        second = ReleaseCache(state_file, "hackage:text")
        second.reconcile([_item("2.1")], expected_count=1)
        second.save()

        state = load_state(state_file)
        assert set(state["packages"]) == {"hackage:aeson", "hackage:text"}

    def test_round_trip_through_init(self, tmp_path):
        """Test that a saved entry is found by the next run."""
        state_file = tmp_path / "releases.json"
        cache = ReleaseCache.init(state_file, "hackage:aeson")
        cache.reconcile([_item("2.0"), _item("2.1")], expected_count=2)
        cache.save()

        reloaded = ReleaseCache.init(state_file, "hackage:aeson")

        assert {i["version"] for i in reloaded.get_items()} == {"2.0", "2.1"}
