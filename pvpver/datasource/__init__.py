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

"""Release datasources for pvpver.

A datasource answers one question: which versions of a package have been
published? The versioning engine then decides which of them fit a range.

Available datasources:

- hackage: The Haskell package registry (https://hackage.haskell.org)

Example:
    from pvpver.datasource import get_datasource

    datasource = get_datasource("hackage")
    releases = datasource.get_releases("text")
    print(f"{len(releases)} releases of text")

"""

# Import datasource modules to trigger self-registration
from . import hackage  # noqa: F401
from .base import Datasource, Release, get_datasource, register_datasource

__all__ = ["Datasource", "Release", "get_datasource", "register_datasource"]
