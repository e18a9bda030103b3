from __future__ import annotations

"""Number helpers used by grading: digit-string comparison and significant digits."""

import math
import re
from decimal import Decimal
from typing import Any, Optional

import numpy as np

from ..app.explain import trace as xtrace


def num_str(x: Any) -> str:
    """Shortest positional decimal rendering of a number ("4700", "0.0047").

    Never uses exponent notation, so digit-based comparisons see every digit.
    """
    try:
        f = float(x)
    except (TypeError, ValueError):
        return str(x)
    if math.isnan(f) or math.isinf(f):
        return str(f)
    return np.format_float_positional(f, trim="-")


def strip_zeros(s: str) -> str:
    """Drop leading and trailing zeros, keeping at least one non-zero character."""
    s = re.sub(r"0*([^0].*)", r"\1", s, count=1)
    s = re.sub(r"(.*[^0])0*", r"\1", s, count=1)
    return s


def strip_zeros_and_dots(s: str) -> str:
    return strip_zeros(s.replace(".", "", 1))


def equal_except_power_of_ten(x: Any, y: Any) -> bool:
    """True when x and y carry the same significant digits.

    equal_except_power_of_ten(1230, 123) -> True
    equal_except_power_of_ten(1230, 124) -> False
    """
    return strip_zeros_and_dots(num_str(x)) == strip_zeros_and_dots(num_str(y))


def left_most_pos(x: Any) -> int:
    """Decimal exponent of the leading digit: 1234 -> 3, 0.05 -> -2."""
    try:
        y = float(x)
    except (TypeError, ValueError):
        y = float("nan")
    if not math.isfinite(y) or y < 0:
        xtrace("left_most_pos_invalid", {"input": str(x)})
        return 0
    if y == 0:
        return 0
    # shortest repr, so 1e-07 counts as -7; subnormals included
    return Decimal(repr(y)).adjusted()


def round_half_up(x: float) -> int:
    return int(math.floor(x + 0.5))


def _scaled(x: float, e: int) -> float:
    # no intermediate 10**e float, so tiny x and large e cannot overflow; inf past the double range
    return float(Decimal(x).scaleb(e))


def get_rounded_sig_digits(x: float, n: int) -> Optional[int]:
    """Integer formed by the first n significant digits of x, rounded half-up.

    None when x is not a finite number.
    """
    try:
        f = float(x)
    except (TypeError, ValueError):
        return None
    if not math.isfinite(f):
        return None
    scaled = _scaled(f, n - left_most_pos(f) - 1)
    if not math.isfinite(scaled):
        return None
    return round_half_up(scaled)


def round_to_sig_digits(x: float, n: int) -> float:
    """Round x to n significant digits: round_to_sig_digits(12345, 3) == 12300.

    NaN for non-finite input, so it never compares equal.
    """
    digits = get_rounded_sig_digits(x, n)
    if digits is None:
        return float("nan")
    e = n - left_most_pos(x) - 1
    return _scaled(digits, -e)


def equal_with_tolerance(a: float, b: float, tolerance: float) -> bool:
    return abs(a - b) < tolerance
