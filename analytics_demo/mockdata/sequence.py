"""Reproducible pseudo-random streams keyed by integer seeds.

Every synthetic table draws its variance from here instead of a stateful RNG,
so a value depends only on the seed it was derived from. Callers offset the
seed per quantity (``day_index + 1000``) to get independent-looking streams
for different measures on the same day.
"""
from typing import Sequence, TypeVar, Union

import numpy as np

T = TypeVar("T")

SeedLike = Union[int, np.ndarray]


def seeded_random(seed: SeedLike):
    """Return a value in [0, 1) for ``seed``; vectorised over integer arrays."""
    x = np.sin(seed) * 10000
    frac = x - np.floor(x)
    if np.ndim(frac) == 0:
        return float(frac)
    return frac


def seeded_int(seed: SeedLike, low: int, high: int):
    """Inclusive integer in [low, high] for ``seed``; vectorised like seeded_random."""
    values = low + np.floor(seeded_random(seed) * (high - low + 1))
    if np.ndim(values) == 0:
        return int(values)
    return values.astype(int)


def seeded_choice(seed: int, options: Sequence[T]) -> T:
    return options[int(np.floor(seeded_random(seed) * len(options)))]
