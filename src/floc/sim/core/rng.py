from __future__ import annotations

import random


class DeterministicRng:
    def __init__(self, seed: int):
        self._seed = seed
        self._random = random.Random(seed)

    def reset(self) -> None:
        self._random.seed(self._seed)

    def next_range(self, low: float, high: float) -> float:
        """Uniform float in ``[low, high)``; ``low`` when the range is empty."""
        if high <= low:
            return low
        return low + (high - low) * self._random.random()
