"""
Pytest configuration and shared fixtures for pvpver tests.

This module provides reusable fixtures and test utilities used across
the test suite.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

import pytest
import yaml

from pvpver.logging import SilentLogger, set_global_logger


@pytest.fixture(autouse=True)
def reset_global_logger():
    """Keep CLI tests from leaking a verbose logger into other tests."""
    yield
    set_global_logger(SilentLogger())


@pytest.fixture
def tmp_test_dir(tmp_path: Path) -> Path:
    """
    Provide a temporary directory for test artifacts.

    Automatically cleaned up after test completion.
    """
    return tmp_path


@pytest.fixture
def sample_manifest_data() -> dict[str, Any]:
    """
    Provide sample manifest data.

    Returns a complete manifest structure for testing.
    """
    return {
        "apiVersion": "pvpver/v1",
        "defaults": {
            "range_strategy": "widen",
        },
        "dependencies": [
            {"name": "aeson", "range": ">=2.0 && <2.1"},
            {"name": "text", "range": "^>=2.0", "range_strategy": "bump"},
        ],
    }


@pytest.fixture
def sample_org_defaults() -> dict[str, Any]:
    """Provide sample organization defaults."""
    return {
        "defaults": {
            "range_strategy": "replace",
            "registry": {
                "url": "https://hackage.example.org",
                "timeout": 10,
            },
        },
    }


@pytest.fixture
def hackage_versions() -> dict[str, str]:
    """Provide a Hackage package.json body for 'aeson'."""
    return {
        "2.0.0.0": "normal",
        "2.0.3.0": "normal",
        "2.1.0.0": "deprecated",
        "2.2.1.0": "normal",
    }


@pytest.fixture
def create_yaml_file(tmp_test_dir: Path):
    """
    Factory fixture for creating temporary YAML files.

    Usage:
        yaml_path = create_yaml_file("test.yaml", {"key": "value"})
    """

    def _create(filename: str, data: dict[str, Any]) -> Path:
        path = tmp_test_dir / filename
        path.parent.mkdir(parents=True, exist_ok=True)
        with path.open("w", encoding="utf-8") as f:
            yaml.dump(data, f)
        return path

    return _create
