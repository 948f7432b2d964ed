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

"""Public API return types for pvpver.

All dataclasses are frozen (immutable) to prevent accidental mutation of
return values.

Note:
    Only public API return types belong in this module. Domain types
    (like Interval or Release) remain co-located with their related logic.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal

UpdateStatus = Literal["up-to-date", "update", "error"]


@dataclass(frozen=True)
class UpdateResult:
    """Outcome of checking one manifest dependency.

    Attributes:
        name: Package name.
        current_value: Range declared in the manifest.
        current_version: Newest release admitted by current_value, if any.
        latest_version: Newest valid release on the registry, if any.
        new_value: Range to declare instead (None when unchanged).
        range_strategy: Strategy used to compute new_value.
        status: "up-to-date", "update" or "error".
        error: User-facing message when status is "error".
    """

    name: str
    current_value: str
    current_version: str | None
    latest_version: str | None
    new_value: str | None
    range_strategy: str
    status: UpdateStatus
    error: str | None = None
