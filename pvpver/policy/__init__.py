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

"""Range update policy for pvpver.

This package decides how a declared dependency range changes when a newer
release appears.

Modules:

updates : module
    Range strategies (pin, widen/auto, bump, replace).

Public API:

RangeStrategy : Literal type
    The closed set of strategy names.
RANGE_STRATEGIES : tuple
    The same names at runtime (for CLI choices and validation).
get_new_value : function
    Compute the new range expression.

Example:
    from pvpver.policy import get_new_value

    get_new_value("==1.0", "1.1", "pin")          # "==1.1"
    get_new_value("^>=1.0.0", "1.0.1", "bump")    # "^>=1.0.1"
    get_new_value(">=1.2 && <1.3", "1.2.3", "replace")  # None (no change)

"""

from .updates import RANGE_STRATEGIES, RangeStrategy, get_new_value

__all__ = ["RANGE_STRATEGIES", "RangeStrategy", "get_new_value"]
