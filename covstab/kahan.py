"""
Kahan compensated summation — running sum with rounding-error feedback.
"""

from dataclasses import dataclass
from typing import Union


@dataclass
class KahanAccumulator:
    """Running sum that carries the rounding error of each addition forward."""
    total: float = 0.0
    compensation: float = 0.0

    def add(self, value: float) -> "KahanAccumulator":
        # Operation order is fixed; the measured error depends on it.
        y = value - self.compensation
        t = self.total + y
        self.compensation = (t - self.total) - y
        self.total = t
        return self

    def __iadd__(self, other: Union[float, "KahanAccumulator"]) -> "KahanAccumulator":
        # Another accumulator contributes only its read-out; its
        # compensation term is not merged.
        return self.add(float(other))

    @property
    def value(self) -> float:
        return self.total + self.compensation

    def __float__(self) -> float:
        return self.value
