"""Online mean and variance using Welford's algorithm."""

from __future__ import annotations

import math


class WelfordStats:
    """Running mean and population variance in O(1) per observation."""

    __slots__ = ("_count", "_mean", "_m2")

    def __init__(self) -> None:
        self._count = 0
        self._mean = 0.0
        self._m2 = 0.0

    def update(self, value: float) -> None:
        """Feed one observation."""
        self._count += 1
        delta = value - self._mean
        self._mean += delta / self._count
        self._m2 += delta * (value - self._mean)

    @property
    def count(self) -> int:
        return self._count

    @property
    def mean(self) -> float:
        return self._mean

    @property
    def variance(self) -> float:
        """Population variance; 0.0 with fewer than two samples."""
        return self._m2 / self._count if self._count > 1 else 0.0

    @property
    def stddev(self) -> float:
        return math.sqrt(self.variance)

    @property
    def is_stable(self) -> bool:
        """True once at least two samples have been seen."""
        return self._count >= 2

    def reset(self) -> None:
        self._count = 0
        self._mean = 0.0
        self._m2 = 0.0

    def __repr__(self) -> str:
        return f"WelfordStats(count={self._count}, mean={self._mean}, stddev={self.stddev})"