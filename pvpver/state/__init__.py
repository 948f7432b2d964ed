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

"""Release cache persistence for pvpver.

This module keeps registry release lists between runs so repeated checks
do not re-download everything. It is never used by the versioning engine
itself, only by the manifest check orchestration.

Public API:

- ReleaseCache: Incremental, deduplicated, timestamped record set per package
- load_state: Load state from JSON file
- save_state: Save state to JSON file with pretty-printing

Example:
    Basic usage:

        from pathlib import Path
        from pvpver.state import ReleaseCache

        cache = ReleaseCache.init(Path("state/releases.json"), "hackage:text")
        cache.reconcile(items, expected_count=len(items))
        cache.save()

"""

from .cache import ReleaseCache, load_state, save_state

__all__ = ["ReleaseCache", "load_state", "save_state"]
