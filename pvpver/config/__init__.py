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

"""Manifest loading and validation for pvpver.

This module loads YAML dependency manifests with a layered approach:

  - Built-in defaults (Hackage, `auto` strategy, local release cache)
  - Organization-wide defaults (defaults/org.yaml)
  - The manifest itself (e.g. pvp.yaml)

The loader performs deep merging where dicts are merged recursively and
lists/scalars are replaced (last wins).

Public API:

- load_effective_config: Load, merge and validate a manifest
- validate_config: Check a merged manifest and return error messages

Example:
    Basic usage:

        from pathlib import Path
        from pvpver.config import load_effective_config

        config = load_effective_config(Path("pvp.yaml"))
        for dep in config["dependencies"]:
            print(dep["name"], dep["range"])

"""

from .loader import load_effective_config, validate_config

__all__ = ["load_effective_config", "validate_config"]
