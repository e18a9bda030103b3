from __future__ import annotations

"""Randomized 4- and 5-band resistors.

A resistor draws a nominal value from the E-series table of its tolerance,
then a real value that usually lies within tolerance and occasionally just
outside it, so the within-tolerance question has both answers.
"""

import random
from typing import Dict, List, Optional, Protocol, Sequence, Tuple

from ..util.mathutil import num_str
from ..util.randomness import rand_float, rand_int
from .r_values import TABLES

COLOR_MAP: Dict[int, str] = {
    -2: "silver",
    -1: "gold",
    0: "black",
    1: "brown",
    2: "red",
    3: "orange",
    4: "yellow",
    5: "green",
    6: "blue",
    7: "violet",
    8: "grey",
    9: "white",
}

TOLERANCE_COLOR_MAP: Dict[float, str] = {
    0.01: "brown",
    0.02: "red",
    5e-3: "green",
    2.5e-3: "blue",
    1e-3: "violet",
    5e-4: "gray",
    5e-2: "gold",
    0.1: "silver",
    0.2: "none",
}

# Share of resistors whose real value is drawn outside tolerance.
OUT_OF_TOLERANCE_CHANCE = 0.2


class RandomizableComponent(Protocol):
    num_bands: int
    nominal_value: float
    real_value: float
    tolerance: float
    colors: List[str]

    def randomize(self, rng: random.Random) -> None: ...


def filter_values(values: Sequence[float]) -> List[float]:
    """Values a 200 Ω to 2000 kΩ meter can show: 10 Ω <= v < 2 MΩ."""
    return [v for v in values if 10.0 <= v < 2e6]


def calc_real_value(rng: random.Random, nominal: float, tolerance: float) -> float:
    if rng.random() < OUT_OF_TOLERANCE_CHANCE:
        excess = nominal * (tolerance + rng.random() * tolerance)
        return nominal + excess if rng.random() < 0.5 else nominal - excess
    real_tolerance = tolerance * 0.9
    return nominal * rand_float(rng, 1 - real_tolerance, 1 + real_tolerance)


def _digits_and_exponent(ohms: float, num_digits: int) -> Tuple[str, int]:
    s = num_str(ohms)
    dot = s.find(".")
    dec_loc = dot if dot > -1 else len(s)
    digits = s.replace(".", "").ljust(num_digits, "0")
    return digits, dec_loc - num_digits


class Resistor:
    num_bands = 0
    tolerance_values: Tuple[float, ...] = ()

    def __init__(self) -> None:
        self.nominal_value = 0.0
        self.real_value = 0.0
        self.tolerance = 0.0
        self.colors: List[str] = []
        self.values: Dict[float, List[float]] = {
            t: filter_values(TABLES[(self.num_bands, t)]) for t in self.tolerance_values
        }

    def randomize(self, rng: random.Random) -> None:
        self.tolerance = self.tolerance_values[rand_int(rng, 0, len(self.tolerance_values) - 1)]
        values = self.values[self.tolerance]
        self.nominal_value = values[rand_int(rng, 0, len(values) - 1)]
        self.real_value = calc_real_value(rng, self.nominal_value, self.tolerance)
        self.colors = self.get_colors(self.nominal_value, self.tolerance)

    def set_values(self, nominal: float, tolerance: float, real: Optional[float] = None) -> None:
        """Pin the resistor to given values instead of drawing them."""
        self.nominal_value = nominal
        self.tolerance = tolerance
        self.real_value = nominal if real is None else real
        self.colors = self.get_colors(nominal, tolerance)

    def get_colors(self, ohms: float, tolerance: float) -> List[str]:
        num_digits = self.num_bands - 2
        digits, exponent = _digits_and_exponent(ohms, num_digits)
        bands = [COLOR_MAP[int(d)] for d in digits[:num_digits]]
        bands.append(COLOR_MAP.get(exponent, "none"))
        bands.append(TOLERANCE_COLOR_MAP.get(tolerance, "none"))
        return bands

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(nominal={self.nominal_value}, tolerance={self.tolerance}, "
            f"real={self.real_value:.3f})"
        )


class Resistor4band(Resistor):
    num_bands = 4
    tolerance_values = (0.05, 0.1)


class Resistor5band(Resistor):
    num_bands = 5
    tolerance_values = (0.01, 0.02)


def make_resistor(num_bands: int) -> Resistor:
    if num_bands == 4:
        return Resistor4band()
    if num_bands == 5:
        return Resistor5band()
    raise ValueError(f"Unsupported number of bands: {num_bands}")
