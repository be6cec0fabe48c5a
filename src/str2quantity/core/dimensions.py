# str2quantity.core.dimensions

from __future__ import annotations

import operator
from typing import Any, Iterable, Tuple, TypeAlias, Union

from str2quantity.core.utils import format_dim

# --- Public typing -----------------------------------------------------------
Dim: TypeAlias = "Dimension"
ExponentTuple = Tuple[int, int, int, int, int, int, int]
DimLike = Union["Dimension", ExponentTuple, Iterable[int]]

_NAMES = ("L", "M", "T", "I", "Θ", "N", "J")

# --- Core object -------------------------------------------------------------

class Dimension(tuple):
    """
    Immutable vector of seven integer exponents for the SI base quantities
    (L, M, T, I, Θ, N, J) plus a free-form discriminator (`extra`) for
    domains with no SI analogue, such as digital storage.

    Tuple subclass => hashable, comparable, usable as dict keys. Equality
    covers the exponents *and* the discriminator, so `Dimension(extra="storage")`
    is never equal to the dimensionless dimension.
    """

    __slots__ = ()

    def __new__(cls, data: DimLike = (0, 0, 0, 0, 0, 0, 0), extra: str = "") -> "Dimension":
        if isinstance(data, Dimension):
            if not extra:
                return data if type(data) is cls else tuple.__new__(cls, data)
            data = data.exponents

        if not isinstance(extra, str):
            raise TypeError(f"extra must be a str, got {type(extra).__name__}")

        # exponents are exact integers; operator.index rejects floats
        t = tuple(operator.index(x) for x in data)
        if len(t) != 7:
            raise ValueError("Dimension must have length 7 (L, M, T, I, Θ, N, J).")
        return tuple.__new__(cls, t + (extra,))

    def __getnewargs__(self) -> tuple[ExponentTuple, str]:
        # copy/pickle must go back through __new__'s (exponents, extra) form
        return (self.exponents, self.extra)

    # --- No algebra: block tuple concatenation and repetition ---
    def __add__(self, other: Any) -> "Dimension":
        """Block tuple concatenation (e.g., LENGTH + MASS)."""
        return NotImplemented

    def __radd__(self, other: Any) -> "Dimension":
        return NotImplemented

    def __mul__(self, other: Any) -> "Dimension":  # type: ignore[override]
        """Block tuple repetition (e.g., LENGTH * 2)."""
        return NotImplemented

    def __rmul__(self, other: Any) -> "Dimension":  # type: ignore[override]
        return NotImplemented

    # --- Helpers ---
    @property
    def exponents(self) -> ExponentTuple:
        return tuple.__getitem__(self, slice(0, 7))  # type: ignore[return-value]

    @property
    def extra(self) -> str:
        return tuple.__getitem__(self, 7)

    @property
    def is_dimensionless(self) -> bool:
        return not self.extra and all(x == 0 for x in self.exponents)

    def as_tuple(self) -> ExponentTuple:
        # explicit narrow type for external APIs
        return self.exponents

    def __str__(self) -> str:
        return format_dim(self.exponents, self.extra)

    def __repr__(self) -> str:
        parts = ""
        for n, v in zip(_NAMES, self.exponents, strict=True):
            if v != 0:
                parts += f"[{n}^{v}]"
        if self.extra:
            parts += f"[{self.extra}]"
        return parts or "[1]"


# --- Public constants --------------------------------------------------------

DIMENSIONLESS: Dim = Dimension((0, 0, 0, 0, 0, 0, 0))
DIM_0: Dim = DIMENSIONLESS
LENGTH: Dim      = Dimension((1, 0, 0, 0, 0, 0, 0))
MASS: Dim        = Dimension((0, 1, 0, 0, 0, 0, 0))
TIME: Dim        = Dimension((0, 0, 1, 0, 0, 0, 0))
CURRENT: Dim     = Dimension((0, 0, 0, 1, 0, 0, 0))
TEMPERATURE: Dim = Dimension((0, 0, 0, 0, 1, 0, 0))
AMOUNT: Dim      = Dimension((0, 0, 0, 0, 0, 1, 0))
LUMINOUS: Dim    = Dimension((0, 0, 0, 0, 0, 0, 1))
STORAGE: Dim     = Dimension(extra="storage")

__all__ = [
    "Dim",
    "Dimension",
    "DIMENSIONLESS",
    "DIM_0",
    "LENGTH",
    "MASS",
    "TIME",
    "CURRENT",
    "TEMPERATURE",
    "AMOUNT",
    "LUMINOUS",
    "STORAGE",
]
