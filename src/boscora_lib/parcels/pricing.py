"""Price policies for materialized parcels."""

from __future__ import annotations

from dataclasses import dataclass

import numpy as np

from boscora_lib.core.exceptions import ValidationError


@dataclass(frozen=True)
class FixedPrice:
    """Every parcel costs the same amount."""

    amount: float = 50.0

    def __post_init__(self):
        if not self.amount > 0:
            raise ValidationError(f"Fixed price must be positive, got {self.amount}")

    def draw(self, count: int, rng: np.random.Generator) -> list[float]:
        return [float(self.amount)] * count


@dataclass(frozen=True)
class RandomPrice:
    """
    Whole-unit price drawn uniformly per parcel from ``[low, high)``.

    The defaults reproduce the 50-99 XLM range used by the first dapp release.
    """

    low: int = 50
    high: int = 100

    def __post_init__(self):
        if self.low <= 0:
            raise ValidationError(f"Price range must start above zero, got {self.low}")
        if self.high <= self.low:
            raise ValidationError(
                f"Price range upper bound {self.high} must exceed lower bound {self.low}"
            )

    def draw(self, count: int, rng: np.random.Generator) -> list[float]:
        return [float(p) for p in rng.integers(self.low, self.high, size=count)]


PricePolicy = FixedPrice | RandomPrice
