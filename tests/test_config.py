"""
Tests for pvpver.config.loader module.

Tests manifest loading and merging including:
- YAML file loading
- Layered merging (built-in -> org -> manifest)
- Path resolution
- Validation and error handling
"""

from __future__ import annotations

from pathlib import Path

import pytest

from pvpver.config.loader import (
    DEFAULT_CONFIG,
    _deep_merge_dicts,
    load_effective_config,
    validate_config,
)
from pvpver.exceptions import ConfigError


class TestConfigLoading:
    """Tests for basic manifest loading."""

    def test_load_simple_manifest(self, create_yaml_file, sample_manifest_data):
        """Test loading a manifest without org defaults."""
        manifest_path = create_yaml_file("pvp.yaml", sample_manifest_data)

        config = load_effective_config(manifest_path)

        assert config["apiVersion"] == "pvpver/v1"
        assert len(config["dependencies"]) == 2
        assert config["dependencies"][0]["name"] == "aeson"
        assert config["defaults"]["range_strategy"] == "widen"

    def test_built_in_defaults_fill_gaps(self, create_yaml_file, sample_manifest_data):
        """Test that registry and cache defaults are present."""
        manifest_path = create_yaml_file("pvp.yaml", sample_manifest_data)

        config = load_effective_config(manifest_path)

        assert config["defaults"]["registry"]["datasource"] == "hackage"
        assert config["defaults"]["registry"]["url"] == "https://hackage.haskell.org"
        assert config["defaults"]["cache"]["ttl_minutes"] == 3 * 60 * 24 * 30

    def test_load_manifest_with_org_defaults(
        self, tmp_test_dir, create_yaml_file, sample_manifest_data, sample_org_defaults
    ):
        """Test that org defaults sit between built-in values and the manifest."""
        create_yaml_file("defaults/org.yaml", sample_org_defaults)
        manifest_path = create_yaml_file("projects/pvp.yaml", sample_manifest_data)

        config = load_effective_config(manifest_path)

        # Manifest wins over org defaults
        assert config["defaults"]["range_strategy"] == "widen"
        # Org defaults win over built-in values
        assert config["defaults"]["registry"]["url"] == "https://hackage.example.org"
        assert config["defaults"]["registry"]["timeout"] == 10
        # Built-in values survive the deep merge
        assert config["defaults"]["registry"]["datasource"] == "hackage"

    def test_cache_file_resolved_against_manifest(
        self, tmp_test_dir, create_yaml_file, sample_manifest_data
    ):
        """Test that a relative cache path is anchored at the manifest."""
        manifest_path = create_yaml_file("projects/pvp.yaml", sample_manifest_data)

        config = load_effective_config(manifest_path)

        expected = (tmp_test_dir / "projects" / "state" / "releases.json").resolve()
        assert Path(config["defaults"]["cache"]["file"]) == expected

    def test_builtin_defaults_not_mutated(self, create_yaml_file, sample_manifest_data):
        """Test that loading does not modify DEFAULT_CONFIG."""
        manifest_path = create_yaml_file("pvp.yaml", sample_manifest_data)

        load_effective_config(manifest_path)

        assert DEFAULT_CONFIG["defaults"]["cache"]["file"] == "state/releases.json"
        assert DEFAULT_CONFIG["defaults"]["range_strategy"] == "auto"


class TestConfigErrors:
    """Tests for manifest loading failures."""

    def test_missing_manifest_raises(self, tmp_test_dir):
        """Test that a missing manifest raises ConfigError."""
        with pytest.raises(ConfigError, match="file not found"):
            load_effective_config(tmp_test_dir / "nonexistent.yaml")

    def test_invalid_yaml_raises(self, tmp_test_dir):
        """Test that invalid YAML raises ConfigError."""
        manifest_path = tmp_test_dir / "pvp.yaml"
        manifest_path.write_text("dependencies: [unclosed\n", encoding="utf-8")

        with pytest.raises(ConfigError, match="Error parsing YAML"):
            load_effective_config(manifest_path)

    def test_empty_manifest_raises(self, tmp_test_dir):
        """Test that an empty file raises ConfigError."""
        manifest_path = tmp_test_dir / "pvp.yaml"
        manifest_path.write_text("", encoding="utf-8")

        with pytest.raises(ConfigError, match="empty"):
            load_effective_config(manifest_path)

    def test_non_mapping_manifest_raises(self, tmp_test_dir):
        """Test that a top-level list is rejected."""
        manifest_path = tmp_test_dir / "pvp.yaml"
        manifest_path.write_text("- aeson\n- text\n", encoding="utf-8")

        with pytest.raises(ConfigError, match="mapping"):
            load_effective_config(manifest_path)

    def test_invalid_range_is_reported(self, create_yaml_file):
        """Test that validation errors name the dependency."""
        manifest_path = create_yaml_file(
            "pvp.yaml",
            {
                "apiVersion": "pvpver/v1",
                "dependencies": [{"name": "aeson", "range": "2.0"}],
            },
        )

        with pytest.raises(ConfigError, match=r"dependencies\[0\] \(aeson\)"):
            load_effective_config(manifest_path)


class TestValidateConfig:
    """Tests for validate_config."""

    def _config(self, **overrides):
        cfg = _deep_merge_dicts(
            DEFAULT_CONFIG,
            {"dependencies": [{"name": "aeson", "range": "^>=2.0"}]},
        )
        return _deep_merge_dicts(cfg, overrides)

    def test_valid_config(self):
        """Test that a complete configuration has no errors."""
        assert validate_config(self._config()) == []

    def test_unsupported_api_version(self):
        """Test that an unknown apiVersion is reported."""
        errors = validate_config(self._config(apiVersion="pvpver/v0"))
        assert any("apiVersion" in e for e in errors)

    def test_unknown_default_strategy(self):
        """Test that an unknown default strategy is reported."""
        errors = validate_config(self._config(defaults={"range_strategy": "yolo"}))
        assert any("defaults.range_strategy" in e for e in errors)

    def test_bad_timeout(self):
        """Test that a non-positive timeout is reported."""
        errors = validate_config(self._config(defaults={"registry": {"timeout": 0}}))
        assert any("timeout" in e for e in errors)

    def test_registry_must_be_mapping(self):
        """Test that a scalar registry is reported."""
        errors = validate_config(self._config(defaults={"registry": "hackage"}))
        assert "defaults.registry must be a dictionary" in errors

    def test_dependencies_must_be_list(self):
        """Test that dependencies must be a list."""
        errors = validate_config(self._config(dependencies={"aeson": "^>=2.0"}))
        assert "dependencies must be a list" in errors

    def test_dependency_missing_fields(self):
        """Test that name and range are required."""
        errors = validate_config(self._config(dependencies=[{}]))
        assert "dependencies[0]: missing required field 'name'" in errors
        assert "dependencies[0]: missing required field 'range'" in errors

    def test_dependency_unknown_strategy(self):
        """Test that a per-dependency strategy is checked."""
        errors = validate_config(
            self._config(
                dependencies=[
                    {"name": "text", "range": "^>=2.0", "range_strategy": "sideways"}
                ]
            )
        )
        assert errors == ["dependencies[0] (text): unknown range_strategy 'sideways'"]

    def test_unsatisfiable_range_is_valid(self):
        """Test that the empty range is accepted."""
        errors = validate_config(
            self._config(dependencies=[{"name": "text", "range": "-none"}])
        )
        assert errors == []


class TestDeepMerge:
    """Tests for the merge helper."""

    def test_lists_are_replaced(self):
        """Test that overlay lists replace base lists."""
        result = _deep_merge_dicts({"a": [1, 2]}, {"a": [3]})
        assert result == {"a": [3]}

    def test_nested_dicts_merge(self):
        """Test that nested dicts are merged key by key."""
        result = _deep_merge_dicts({"a": {"x": 1, "y": 2}}, {"a": {"y": 3}})
        assert result == {"a": {"x": 1, "y": 3}}
