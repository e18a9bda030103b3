from __future__ import annotations

"""Resistance units: normalization to ohms and human-readable strings."""

import math
from typing import Any, Dict, Optional

from .mathutil import num_str

OHMS = "Ω"
KILO_OHMS = "kΩ"
MEGA_OHMS = "MΩ"

LABELS: Dict[str, str] = {"ohms": OHMS, "kilo_ohms": KILO_OHMS, "mega_ohms": MEGA_OHMS}

# Multiplier to ohms for every accepted spelling of a resistance unit.
_MULTIPLIERS: Dict[str, float] = {
    OHMS: 1.0,
    KILO_OHMS: 1e3,
    MEGA_OHMS: 1e6,
    "\u03a9": 1.0,  # Greek capital omega, often typed instead of the ohm sign
    "k\u03a9": 1e3,
    "M\u03a9": 1e6,
    "ohm": 1.0,
    "ohms": 1.0,
    "kohm": 1e3,
    "kohms": 1e3,
    "Mohm": 1e6,
    "Mohms": 1e6,
}


def parse_number(raw: Any) -> Optional[float]:
    """Parse a learner-entered number; None for blanks, junk and NaN."""
    if raw is None or isinstance(raw, bool):
        return None
    if isinstance(raw, str):
        raw = raw.strip()
        if not raw:
            return None
    try:
        value = float(raw)
    except (TypeError, ValueError):
        return None
    if math.isnan(value) or math.isinf(value):
        return None
    return value


def ohm_compatible(unit: Any) -> bool:
    return isinstance(unit, str) and unit in _MULTIPLIERS


def normalize_to_ohms(value: Any, unit: Any) -> Optional[float]:
    """Convert value in the given unit to ohms; None if unit is not a resistance unit.

    The product is snapped to 12 significant digits so that 4.7 kΩ and
    4700 Ω compare equal. A product outside the double range is None too.
    """
    if not ohm_compatible(unit):
        return None
    number = parse_number(value)
    if number is None:
        return None
    ohms = number * _MULTIPLIERS[unit]
    if not math.isfinite(ohms):
        return None
    return float(f"{ohms:.12g}")


def _trim(val: float) -> str:
    s = f"{val:.6f}"
    if "." in s:
        s = s.rstrip("0").rstrip(".")
    return s


def res_str(value: Any) -> str:
    """Resistance with an auto-selected unit: 4700 -> '4.7 kΩ'."""
    if isinstance(value, bool) or not isinstance(value, (int, float)) or math.isnan(value):
        return f"Invalid Value {value}"
    if value < 1000:
        return f"{_trim(value)} {OHMS}"
    if value < 1e6:
        return f"{_trim(value / 1000)} {KILO_OHMS}"
    return f"{_trim(value / 1e6)} {MEGA_OHMS}"


def res_unit_str(value: float, mult: Optional[str] = None) -> str:
    """Resistance in a forced unit: mult 'k' -> kΩ, 'M' -> MΩ, else Ω."""
    if mult == "k":
        return f"{num_str(value / 1000.0)} {KILO_OHMS}"
    if mult == "M":
        return f"{num_str(value / 1000000.0)} {MEGA_OHMS}"
    return f"{num_str(value)} {OHMS}"


def pct_str(value: Optional[float]) -> str:
    if value is None:
        return "? %"
    return f"{num_str(float(f'{value * 100:.12g}'))} %"
