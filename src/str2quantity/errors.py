"""
str2quantity.errors
===================

Exception hierarchy for registry construction and quantity parsing.

Everything derives from `ValueError`, so callers that only care about
"bad input" can keep catching that.
"""

from __future__ import annotations

import math
from typing import Any


class Str2QuantityError(ValueError):
    """Base class for every error raised by str2quantity."""


# ---------------------------------------------------------------------------
# Registry construction
# ---------------------------------------------------------------------------
class RegistryError(Str2QuantityError):
    """A unit registry was configured inconsistently."""


class ConflictingPrefixError(RegistryError):
    def __init__(self, symbol: str, existing_scale: float, new_scale: float) -> None:
        self.symbol = symbol
        self.existing_scale = existing_scale
        self.new_scale = new_scale
        super().__init__(
            f"Prefix '{symbol}' already defined with scale {existing_scale!r}, "
            f"cannot redefine it as {new_scale!r}."
        )


class UnknownTargetUnitError(RegistryError):
    def __init__(self, prefix: str, unit: str) -> None:
        self.prefix = prefix
        self.unit = unit
        super().__init__(f"Cannot bind prefix '{prefix}' to unknown unit '{unit}'.")


class PrefixNotFoundError(RegistryError):
    def __init__(self, symbol: str) -> None:
        self.symbol = symbol
        super().__init__(
            f"Prefix '{symbol}' is not defined in this registry; use add_prefix instead."
        )


class DuplicateUnitError(RegistryError):
    def __init__(self, symbol: str) -> None:
        self.symbol = symbol
        super().__init__(
            f"Cannot register unit '{symbol}': a unit with this symbol already exists."
        )


# ---------------------------------------------------------------------------
# Parsing
# ---------------------------------------------------------------------------
class QuantityParseError(Str2QuantityError):
    """A quantity string could not be turned into a value."""

    def __init__(self, message: str, text: str | None = None) -> None:
        self.text = text
        super().__init__(message)


class NumberSyntaxError(QuantityParseError):
    def __init__(self, text: str, position: int, literal: str = "") -> None:
        self.position = position
        self.literal = literal
        if literal:
            msg = f"Invalid number {literal!r} at {position} in {text!r}"
        else:
            msg = f"Invalid number at {position} in {text!r}: {text[position:position + 10]!r}"
        super().__init__(msg, text)


class MissingUnitError(QuantityParseError):
    def __init__(self, text: str, position: int) -> None:
        self.position = position
        super().__init__(f"Missing unit at {position} in {text!r}", text)


class UnknownUnitError(QuantityParseError):
    def __init__(self, symbol: str, text: str | None = None) -> None:
        self.symbol = symbol
        super().__init__(f"Unknown unit symbol: {symbol}", text)


class MixedDimensionsError(QuantityParseError):
    def __init__(self, first: Any, second: Any, text: str | None = None) -> None:
        self.first = first
        self.second = second
        super().__init__(f"Mixed dimensions: {first} and {second}", text)


class MultiPartNotAllowedError(QuantityParseError):
    def __init__(self, text: str) -> None:
        super().__init__(
            f"Multi-part format is not allowed for this unit registry: {text!r}", text
        )


class PrecisionLossError(QuantityParseError):
    def __init__(self, value: float, number_type: Any, text: str | None = None) -> None:
        self.value = value
        self.number_type = number_type
        type_name = getattr(number_type, "__name__", repr(number_type))
        if isinstance(value, float) and not math.isfinite(value):
            msg = f"Overflow: part value {value!r} is out of range for {type_name}"
        else:
            msg = f"Precision loss: part value {value!r} cannot be represented exactly as {type_name}"
        super().__init__(msg, text)


class AccumulatorOverflowError(QuantityParseError):
    def __init__(self, total: Any, part: Any, text: str | None = None) -> None:
        self.total = total
        self.part = part
        super().__init__(f"Overflow while adding {part!r} to running total {total!r}", text)


class WrongDimensionError(QuantityParseError):
    def __init__(self, expected: Any, actual: Any, text: str | None = None) -> None:
        self.expected = expected
        self.actual = actual
        super().__init__(f"Parsed quantity has dimension {actual}, expected {expected}", text)


__all__ = [
    "Str2QuantityError",
    "RegistryError",
    "ConflictingPrefixError",
    "UnknownTargetUnitError",
    "PrefixNotFoundError",
    "DuplicateUnitError",
    "QuantityParseError",
    "NumberSyntaxError",
    "MissingUnitError",
    "UnknownUnitError",
    "MixedDimensionsError",
    "MultiPartNotAllowedError",
    "PrecisionLossError",
    "AccumulatorOverflowError",
    "WrongDimensionError",
]
