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

"""Output channel shared by the pvpver library and the pvp CLI.

Library code never prints directly. It asks for the global logger, which is
silent until `pvp` installs a printing one for -v/--verbose or -d/--debug.

Channels used across pvpver:

- step: "[1/3] Loading manifest..." progress of 'pvp check' (always shown)
- verbose: tagged lines such as "[CACHE] ..." or "[HTTP] GET ..."
- debug: "[PVP] get_new_value ..." traces from the range engine
- warning: resolver fallbacks and release cache count mismatches, shown
  as "[WARNING] ..." in verbose mode

Example:
    ```python
    from pvpver.logging import get_logger, set_global_logger
    from pvpver.policy import get_new_value

    set_global_logger(get_logger(debug=True))
    get_new_value(">=1.0 && <1.1", "1.1", "widen")
    # [PVP] get_new_value current='>=1.0 && <1.1' new='1.1' strategy=widen
    # [PVP] get_new_value result='>=1.0 && <1.2'
    ```

Note:
    Whatever the range engine logs, its return values are the same with
    any logger installed.
"""

from __future__ import annotations

from typing import Protocol


class Logger(Protocol):
    """Anything with the four pvpver output channels."""

    def step(self, step: int, total: int, message: str) -> None: ...

    def verbose(self, prefix: str, message: str) -> None: ...

    def debug(self, prefix: str, message: str) -> None: ...

    def warning(self, message: str) -> None: ...


class DefaultLogger:
    """Print to stdout, filtered by the CLI's -v/-d flags.

    Lines are formatted as "[PREFIX] message"; debug implies verbose.
    """

    def __init__(self, verbose: bool = False, debug: bool = False) -> None:
        self._verbose = verbose or debug
        self._debug = debug

    def step(self, step: int, total: int, message: str) -> None:
        print(f"[{step}/{total}] {message}")

    def verbose(self, prefix: str, message: str) -> None:
        if self._verbose:
            print(f"[{prefix}] {message}")

    def debug(self, prefix: str, message: str) -> None:
        if self._debug:
            print(f"[{prefix}] {message}")

    def warning(self, message: str) -> None:
        self.verbose("WARNING", message)


class SilentLogger:
    """Drop everything. Installed by default and in tests."""

    def step(self, step: int, total: int, message: str) -> None:
        pass

    def verbose(self, prefix: str, message: str) -> None:
        pass

    def debug(self, prefix: str, message: str) -> None:
        pass

    def warning(self, message: str) -> None:
        pass


_global_logger: Logger = SilentLogger()


def get_logger(verbose: bool = False, debug: bool = False) -> Logger:
    """Build the printing logger for the given CLI flags."""
    return DefaultLogger(verbose=verbose, debug=debug)


def get_global_logger() -> Logger:
    """Return the logger library modules should write to."""
    return _global_logger


def set_global_logger(logger: Logger) -> None:
    """Install logger for every module that calls get_global_logger().

    The pvp command handlers call this first, before doing any work.
    """
    global _global_logger
    _global_logger = logger
