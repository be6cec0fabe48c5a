"""
str2quantity.core.numbers
=========================

Numeric target representations for the parsing engine.

`parse` accepts any callable that builds a value from a float, as long as
the result supports `+` and `float()`: `float`, `int`, `Fraction`,
`Decimal` all qualify. Python's `int` never overflows, so this module adds
a closed family of fixed-width two's-complement integers (`Int8` … `UInt64`)
for callers that need the wrap-around semantics of a machine integer, plus
`checked_add`, the opt-in accumulation that refuses to wrap.
"""

from __future__ import annotations

import math
from typing import Any, Callable, ClassVar, SupportsFloat, SupportsInt, TypeVar, Union

N = TypeVar("N")
NumberType = Callable[[float], N]


class FixedInt(int):
    """Integer of a fixed bit width with wrap-around addition.

    Construction from a float truncates toward zero and then wraps into
    range, like a C cast; the parser's round-trip check is what turns that
    into a precision error.
    """

    __slots__ = ()

    bits: ClassVar[int] = 64
    signed: ClassVar[bool] = True
    min_value: ClassVar[int] = -(1 << 63)
    max_value: ClassVar[int] = (1 << 63) - 1

    def __init_subclass__(cls, **kwargs: Any) -> None:
        super().__init_subclass__(**kwargs)
        if cls.signed:
            cls.min_value = -(1 << (cls.bits - 1))
            cls.max_value = (1 << (cls.bits - 1)) - 1
        else:
            cls.min_value = 0
            cls.max_value = (1 << cls.bits) - 1

    def __new__(cls, value: Union[SupportsInt, SupportsFloat, str] = 0) -> "FixedInt":
        if isinstance(value, float):
            value = math.trunc(value)  # OverflowError / ValueError for inf / nan
        return int.__new__(cls, cls.wrap(int(value)))  # type: ignore[arg-type]

    @classmethod
    def wrap(cls, value: int) -> int:
        """Reduce an unbounded integer into this type's range modulo 2**bits."""
        value &= (1 << cls.bits) - 1
        if cls.signed and value > cls.max_value:
            value -= 1 << cls.bits
        return value

    @classmethod
    def in_range(cls, value: int) -> bool:
        return cls.min_value <= value <= cls.max_value

    # --- arithmetic (wrapping) ---
    def __add__(self, other: Any) -> Any:
        if not isinstance(other, int):
            return NotImplemented
        return type(self)(int(self) + int(other))

    def __radd__(self, other: Any) -> Any:
        if not isinstance(other, int):
            return NotImplemented
        return type(self)(int(other) + int(self))

    def __sub__(self, other: Any) -> Any:
        if not isinstance(other, int):
            return NotImplemented
        return type(self)(int(self) - int(other))

    def __rsub__(self, other: Any) -> Any:
        if not isinstance(other, int):
            return NotImplemented
        return type(self)(int(other) - int(self))

    def __neg__(self) -> Any:
        return type(self)(-int(self))

    def checked_add(self, other: SupportsInt) -> "FixedInt":
        """Add without wrapping; raise `OverflowError` if the sum leaves the range."""
        raw = int(self) + int(other)
        if not self.in_range(raw):
            raise OverflowError(
                f"{type(self).__name__} overflow: {int(self)} + {int(other)} = {raw}"
            )
        return type(self)(raw)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({int(self)})"

    def __str__(self) -> str:
        return int.__repr__(self)


class Int8(FixedInt):
    bits = 8


class Int16(FixedInt):
    bits = 16


class Int32(FixedInt):
    bits = 32


class Int64(FixedInt):
    bits = 64


class UInt8(FixedInt):
    bits = 8
    signed = False


class UInt16(FixedInt):
    bits = 16
    signed = False


class UInt32(FixedInt):
    bits = 32
    signed = False


class UInt64(FixedInt):
    bits = 64
    signed = False


def checked_add(total: Any, part: Any) -> Any:
    """Add two accumulator values, raising `OverflowError` instead of wrapping.

    Fixed-width integers must stay in range; floats must not overflow to
    infinity from finite operands. Other types use their own addition.
    """
    if isinstance(total, FixedInt):
        return total.checked_add(part)
    result = total + part
    if isinstance(result, float) and math.isinf(result):
        if math.isfinite(float(total)) and math.isfinite(float(part)):
            raise OverflowError(f"float overflow: {total!r} + {part!r}")
    return result


__all__ = [
    "N",
    "NumberType",
    "FixedInt",
    "Int8",
    "Int16",
    "Int32",
    "Int64",
    "UInt8",
    "UInt16",
    "UInt32",
    "UInt64",
    "checked_add",
]
