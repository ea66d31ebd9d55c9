from __future__ import annotations

"""Seeded random source shared by the generation stages.

Every stage builds its own ``MapRNG`` from an explicit seed, so two calls
with the same seed draw the same sequence and never disturb each other.
The generator is NumPy's ``default_rng`` (PCG64); the helpers below only
fix the draw order the generators rely on.
"""

from typing import Any, List, Sequence, Tuple

import numpy as np


class MapRNG:
    def __init__(self, seed: int) -> None:
        if isinstance(seed, bool) or not isinstance(seed, (int, np.integer)):
            raise TypeError(f"seed must be an integer, got {seed!r}")
        if seed < 0:
            raise ValueError("seed must be non-negative")
        self.initial_seed = int(seed)
        self.rng = np.random.default_rng(self.initial_seed)

    def get_int(self, a: int, b: int) -> int:
        """Return an integer in the inclusive range ``[a, b]``."""
        if a > b:
            raise ValueError("a <= b")
        return int(self.rng.integers(a, b + 1))

    def get_float_grid(self, width: int, height: int) -> np.ndarray:
        """Uniform [0, 1) draws laid out row-major as ``(height, width)``."""
        if width < 0 or height < 0:
            raise ValueError("grid dimensions must be non-negative")
        return self.rng.random((height, width))

    def get_point(self, width: int, height: int) -> Tuple[int, int]:
        """Random ``(x, y)`` inside ``[0, width) x [0, height)``; x is drawn first."""
        x = self.get_int(0, width - 1)
        y = self.get_int(0, height - 1)
        return x, y

    def sample(self, items: Sequence[Any], k: int) -> List[Any]:
        """Pick ``k`` items without replacement, preserving item identity."""
        if k < 0:
            raise ValueError("k >= 0")
        if k > len(items):
            raise ValueError("k <= len(items) without replacement")
        if k == 0:
            return []
        # Index selection keeps tuples intact instead of letting NumPy
        # flatten them into a 2D array.
        picked = self.rng.choice(len(items), size=k, replace=False)
        return [items[int(i)] for i in picked]


__all__ = ["MapRNG"]
