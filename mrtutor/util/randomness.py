from __future__ import annotations

"""Randomness helpers for resistor selection and seeding."""

import os
import random
from typing import Optional

import numpy as np


def seed_if_needed() -> None:
    """Seed RNGs if SEED env var is set."""
    seed = os.environ.get("SEED")
    if seed is not None:
        try:
            s = int(seed)
        except ValueError:
            return
        random.seed(s)
        np.random.seed(s)


def make_rng(seed: Optional[int] = None) -> random.Random:
    """Return a private RNG; falls back to the SEED env var when no seed is given."""
    if seed is None:
        env = os.environ.get("SEED")
        if env is not None and env.strip().lstrip("-").isdigit():
            seed = int(env)
    return random.Random(seed)


def rand_int(rng: random.Random, lo: int, hi: int) -> int:
    """Inclusive integer in [lo, hi]."""
    return rng.randint(lo, hi)


def rand_pseudo_gaussian(rng: random.Random, n: int = 3) -> float:
    """Mean of n uniform draws: a cheap bell-shaped value in [0, 1)."""
    return sum(rng.random() for _ in range(n)) / n


def rand_float(rng: random.Random, lo: float, hi: float) -> float:
    return rand_pseudo_gaussian(rng, 3) * (hi - lo) + lo
