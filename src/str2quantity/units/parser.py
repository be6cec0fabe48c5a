from __future__ import annotations

import logging
import math
from functools import lru_cache
from typing import Any, Callable, Generic, NamedTuple, Optional, Tuple, Union

from typing import TYPE_CHECKING

from str2quantity.core.dimensions import DIMENSIONLESS, Dim
from str2quantity.core.numbers import N, checked_add
from str2quantity.errors import (
    AccumulatorOverflowError,
    MissingUnitError,
    MixedDimensionsError,
    MultiPartNotAllowedError,
    NumberSyntaxError,
    PrecisionLossError,
    QuantityParseError,
    UnknownUnitError,
)

if TYPE_CHECKING:
    from str2quantity.units.registry import UnitsRegistry

logger = logging.getLogger(__name__)

# Absorbs float noise from scale multiplication (29.999999999997 -> 30).
TOLERANCE = 1e-12

_DIGITS = frozenset("0123456789")
_NUMBER_START = frozenset("0123456789.+-")


class ParseResult(NamedTuple, Generic[N]):
    value: N
    dim: Dim


# --- Plan node types ------------------------------------------------
# A plan is what the scanner saw, with no registry lookups. It is a tuple of
# steps, optionally ending in a fault where scanning stopped.
class _Step(NamedTuple):
    number: float
    symbol: str
    position: int


class _Fault(NamedTuple):
    kind: str  # "number" | "unit"
    position: int
    literal: str

    def to_error(self, text: str) -> QuantityParseError:
        if self.kind == "number":
            return NumberSyntaxError(text, self.position, self.literal)
        return MissingUnitError(text, self.position)


Plan = Tuple[Union[_Step, _Fault], ...]


# ---------------- Scanner that builds a PLAN (no registry lookups!) ----------------
class _QuantityScanner:
    """
    Grammar (repeated until the input is exhausted):
      quantity := sep* (part sep*)*
      part     := number sep* symbol
      number   := [+-]? digit* ('.' digit*)? ([eE] [+-]? digit*)?
      symbol   := (any char except digit . + - and separators)+

    Separator skipping never swallows a character that can start a number,
    even if that character is configured as a separator.
    """

    def __init__(self, text: str, separators: str):
        self.s = text
        self.n = len(text)
        self.i = 0
        self.seps = frozenset(separators)

    def compile(self) -> Plan:
        steps: list[Union[_Step, _Fault]] = []
        self._skip_separators()
        while self.i < self.n:
            start = self.i
            literal = self._scan_number()
            if not literal:
                steps.append(_Fault("number", start, ""))
                break
            value = _literal_to_float(literal)
            if value is None:
                steps.append(_Fault("number", start, literal))
                break

            # allow "100 MB"
            self._skip_separators()

            unit_start = self.i
            symbol = self._scan_symbol()
            if not symbol:
                steps.append(_Fault("unit", unit_start, ""))
                break

            steps.append(_Step(value, symbol, start))
            self._skip_separators()
        return tuple(steps)

    # ---- token helpers ----
    def _skip_separators(self) -> None:
        s, n, i, seps = self.s, self.n, self.i, self.seps
        while i < n and s[i] not in _NUMBER_START and s[i] in seps:
            i += 1
        self.i = i

    def _scan_number(self) -> str:
        s, n = self.s, self.n
        i0 = end = self.i
        allow_sign = True
        allow_dot = True
        allow_exp = True

        while end < n:
            c = s[end]
            if c in _DIGITS:
                allow_sign = False
            elif c == "." and allow_dot:
                allow_dot = False
                allow_sign = False
            elif c in "eE" and allow_exp and end > i0:  # exponent marker can't come first
                allow_exp = False
                allow_dot = False
                allow_sign = True
            elif c in "+-" and allow_sign:
                allow_sign = False
            else:
                break
            end += 1

        self.i = end
        return s[i0:end]

    def _scan_symbol(self) -> str:
        s, n, seps = self.s, self.n, self.seps
        i0 = i = self.i
        while i < n and s[i] not in _NUMBER_START and s[i] not in seps:
            i += 1
        self.i = i
        return s[i0:i]


def _literal_to_float(literal: str) -> Optional[float]:
    # float() rejects dangling pieces like "1e", "-", "."; out-of-range
    # literals ("1e999") come back as inf and are rejected too.
    try:
        value = float(literal)
    except ValueError:
        return None
    if math.isinf(value):
        return None
    return value


# ---------------- Public API with caching-safe compilation ----------------
# Cache the *compiled plan* only. Safe across registries because there's no bound objects inside.
@lru_cache(maxsize=4096)
def _compile_quantity_expr(text: str, separators: str) -> Plan:
    return _QuantityScanner(text, separators).compile()


def _convert(part_value: float, number_type: Callable[[float], N], text: str) -> N:
    """Build `number_type` from a part's base-unit value, refusing lossy results."""
    if not math.isfinite(part_value):
        raise PrecisionLossError(part_value, number_type, text)

    rounded = float(round(part_value))
    try:
        if abs(rounded - part_value) <= TOLERANCE:
            # Effectively an integer: use the clean value so 29.999... is not truncated to 29.
            expected = rounded
            result = number_type(rounded)
        else:
            expected = part_value
            result = number_type(part_value)
    except OverflowError as e:
        raise PrecisionLossError(part_value, number_type, text) from e

    # Truncating targets (int) and out-of-range fixed-width targets drift here.
    if abs(float(result) - expected) > TOLERANCE:  # type: ignore[arg-type]
        raise PrecisionLossError(part_value, number_type, text)
    return result


def parse(
    text: str,
    registry: "UnitsRegistry",
    number_type: Callable[[float], N] = float,  # type: ignore[assignment]
    *,
    checked: bool = False,
) -> ParseResult[N]:
    """
    Parse a quantity string like '1h30m', '1.5 KiB' or '100ms' against `registry`.

    Each part is `number * prefix_scale * unit_scale` in the registry's base
    unit, converted to `number_type` and summed.

    Args:
      text: The string to parse. Empty (or separator-only) input gives the
        zero value and a dimensionless result.
      registry: Units, prefixes and parsing config to use.
      number_type: Callable building the result type from a float; results
        must support `+` and `float()`. Integer types reject fractional parts
        with `PrecisionLossError`.
      checked: Accumulate with `checked_add`, raising
        `AccumulatorOverflowError` instead of wrapping fixed-width integers.

    Returns:
      `ParseResult(value, dim)`.

    Caching-safety:
      Tokenizing is cached keyed by `(text, separators)` only; symbols are
      resolved against the *provided* registry on every call.
    """
    config = registry.config
    plan = _compile_quantity_expr(text, config.effective_separators)

    total: Any = number_type(0.0)
    detected: Optional[Dim] = None

    for index, step in enumerate(plan):
        if index > 0 and not config.allow_multi_part:
            raise MultiPartNotAllowedError(text)
        if isinstance(step, _Fault):
            raise step.to_error(text)

        resolution = registry.resolve(step.symbol)
        if resolution is None:
            raise UnknownUnitError(step.symbol, text)

        unit = resolution.unit
        if detected is None:
            detected = unit.dim
        elif unit.dim != detected:
            raise MixedDimensionsError(detected, unit.dim, text)

        part = _convert(step.number * resolution.prefix_scale * unit.scale, number_type, text)

        if checked:
            try:
                total = checked_add(total, part)
            except OverflowError as e:
                raise AccumulatorOverflowError(total, part, text) from e
        else:
            total = total + part

    result = ParseResult(total, detected if detected is not None else DIMENSIONLESS)
    logger.debug("Parsed %r as %r %s", text, result.value, result.dim)
    return result


__all__ = ["TOLERANCE", "ParseResult", "parse"]
