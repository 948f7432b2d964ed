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

Computes the new range expression for a dependency once a newer release
has been observed, according to a named range strategy.

Example:
    Widen an explicit interval to admit a new major:

        from pvpver.policy.updates import get_new_value

        new_value = get_new_value(
            current_value=">=1.0 && <1.1",
            new_version="1.1",
            range_strategy="widen",
        )
        # ">=1.0 && <1.2"

"""

from __future__ import annotations

from typing import Literal, assert_never, get_args

from pvpver.exceptions import (
    InconsistentBoundsError,
    RangeSyntaxError,
    UnsupportedStrategyError,
)
from pvpver.logging import get_global_logger
from pvpver.versioning import (
    Disjunction,
    Interval,
    Unsatisfiable,
    get_major_components,
    matches,
    parse,
)

RangeStrategy = Literal[
    "auto",
    "pin",
    "widen",
    "bump",
    "replace",
    "future",
    "update-lockfile",
    "in-range-only",
]

RANGE_STRATEGIES: tuple[str, ...] = get_args(RangeStrategy)


def get_new_value(
    current_value: str,
    new_version: str,
    range_strategy: RangeStrategy,
) -> str | None:
    """Compute the updated range expression for a new release.

    Args:
        current_value: Range currently declared for the dependency.
        new_version: Newly observed release.
        range_strategy: How the range should change.

    Returns:
        The new range expression, or None when `replace` finds that the
        current range already admits new_version.

    Raises:
        RangeSyntaxError: If current_value cannot be parsed, or `bump` is
            given anything but a plain caret range.
        UnsupportedStrategyError: For future, update-lockfile and
            in-range-only.
        InconsistentBoundsError: If widen/auto cannot admit new_version even
            after raising the ceiling to its next major.

    """
    logger = get_global_logger()
    logger.debug(
        "PVP",
        f"get_new_value current={current_value!r} new={new_version!r} "
        f"strategy={range_strategy}",
    )

    if range_strategy == "pin":
        return f"=={new_version}"

    elif range_strategy == "widen" or range_strategy == "auto":
        parsed = parse(current_value)
        match parsed:
            case Unsatisfiable():
                return f"^>={new_version}"
            case Interval() | Disjunction():
                pass
            case _:
                assert_never(parsed)

        boundary = get_major_components(new_version)
        if boundary is None:
            logger.warning(
                f"did not find two major parts in {new_version!r} "
                f"(current {current_value!r})"
            )
            return f"^>={new_version}"

        if matches(new_version, f">=0 && <{boundary.current_major}"):
            # Upper bound is already high enough
            return current_value
        if matches(new_version, f">=0 && <{boundary.major_plus_one}"):
            result = f">={parsed.lower} && <{boundary.major_plus_one}"
            logger.debug("PVP", f"get_new_value result={result!r}")
            return result
        raise InconsistentBoundsError(
            f"even with the upper bound raised to {boundary.major_plus_one}, "
            f"{new_version} is not accepted by {current_value!r}; "
            "maybe the bounds are too old?"
        )

    elif range_strategy == "bump":
        if (
            current_value.startswith("^>=")
            and "||" not in current_value
            and "&&" not in current_value
        ):
            return f"^>={new_version}"
        raise RangeSyntaxError(f"bump can't handle the range {current_value!r}")

    elif range_strategy == "replace":
        if matches(new_version, current_value):
            return None
        boundary = get_major_components(new_version)
        if boundary is None:
            logger.warning(
                f"did not find two major parts in {new_version!r} "
                f"(current {current_value!r})"
            )
            return f"^>={new_version}"
        return f"^>={boundary.current_major}"

    elif (
        range_strategy == "future"
        or range_strategy == "update-lockfile"
        or range_strategy == "in-range-only"
    ):
        raise UnsupportedStrategyError(
            f"PVP can't handle rangeStrategy={range_strategy}. "
            "Try 'widen' or 'bump'."
        )

    else:
        assert_never(range_strategy)
