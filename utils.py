"""
Small pure helpers shared by the simulation modules.
"""

import random


def random_int(low, high, rng=random):
    """Return a random integer in [low, high], both inclusive."""
    if low > high:
        raise ValueError(f"random_int: low ({low}) must be <= high ({high})")
    return rng.randint(low, high)


def clamp(value, low, high):
    """Clamp `value` into [low, high]."""
    if low > high:
        raise ValueError(f"clamp: low ({low}) must be <= high ({high})")
    return min(max(value, low), high)


def coords_equal(a, b):
    return a[0] == b[0] and a[1] == b[1]


def coord_in_list(coord, cells):
    """True when `coord` matches any cell in `cells`."""
    return any(coords_equal(cell, coord) for cell in cells)


def tick_interval_for_level(level, base_tick, increment, min_tick):
    """
    Milliseconds between two snake steps at `level`.
    Speed increases with level but never drops below `min_tick`.
    """
    return max(base_tick - (level - 1) * increment, min_tick)
