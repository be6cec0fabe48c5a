from __future__ import annotations

from dataclasses import dataclass
from math import isfinite

from str2quantity.core.dimensions import Dim, Dimension


def _check_scale(scale: float) -> None:
    if isinstance(scale, bool) or not isinstance(scale, (int, float)):
        raise TypeError(f"scale must be a real number, got {type(scale).__name__}")
    if not (scale > 0 and isfinite(scale)):
        raise ValueError("scale must be a positive, finite number")


@dataclass(frozen=True, slots=True)
class Unit:
    """A measurement unit: display symbol, dimension and scale to the base unit.

    `scale` converts one of this unit into the base quantity of `dim`
    (1000.0 for km when the base is m).
    """

    symbol: str
    scale: float
    dim: Dim

    def __post_init__(self) -> None:
        if not isinstance(self.dim, Dimension):
            raise ValueError("dim must be a Dimension")
        _check_scale(self.scale)


@dataclass(frozen=True, slots=True)
class Prefix:
    """A multiplicative modifier (k, Mi, µ) applied on top of a unit's scale."""

    symbol: str
    scale: float

    def __post_init__(self) -> None:
        _check_scale(self.scale)


__all__ = ["Unit", "Prefix"]
