"""
str2quantity.catalog.time
=========================

Durations such as "1h30m", "1.5h" or "10us45m2h15s".

The base unit is the nanosecond, so results are exact integer nanosecond
counts (`Duration`) and inputs finer than 1ns ("0.5ns") are rejected.
"""
from __future__ import annotations

from datetime import timedelta

from str2quantity.core.dimensions import TIME
from str2quantity.core.numbers import Int64
from str2quantity.errors import WrongDimensionError
from str2quantity.units.parser import parse
from str2quantity.units.registry import RegistryConfig, UnitsRegistry


class Duration(Int64):
    """Signed 64-bit count of nanoseconds (about ±292 years)."""

    def to_timedelta(self) -> timedelta:
        # timedelta resolution is 1µs; sub-microsecond parts are dropped (toward zero)
        micros = abs(int(self)) // 1000
        return timedelta(microseconds=micros if self >= 0 else -micros)

    @classmethod
    def from_timedelta(cls, td: timedelta) -> "Duration":
        """Convert a `timedelta`; raise `OverflowError` if it does not fit in 64 bits."""
        micros = (td.days * 86400 + td.seconds) * 1_000_000 + td.microseconds
        raw = micros * 1000
        if not cls.in_range(raw):
            raise OverflowError(f"{td!r} does not fit in {cls.__name__} ({raw} ns)")
        return cls(raw)

    def total_seconds(self) -> float:
        return int(self) / SECOND


NANOSECOND = 1
MICROSECOND = 1000 * NANOSECOND
MILLISECOND = 1000 * MICROSECOND
SECOND = 1000 * MILLISECOND
MINUTE = 60 * SECOND
HOUR = 60 * MINUTE
DAY = 24 * HOUR
WEEK = 7 * DAY


def time_registry() -> UnitsRegistry:
    """Build the registry for duration strings (additive, case-sensitive: ms, not MS)."""
    reg = UnitsRegistry(RegistryConfig(allow_multi_part=True, case_insensitive=False))

    time_units = (
        ("ns", NANOSECOND),
        ("us", MICROSECOND),
        ("µs", MICROSECOND),  # micro sign U+00B5
        ("μs", MICROSECOND),  # greek mu U+03BC
        ("ms", MILLISECOND),
        ("s",  SECOND),
        ("m",  MINUTE),
        ("h",  HOUR),
        ("d",  DAY),
        ("w",  WEEK),
    )
    for sym, scale in time_units:
        reg.add_unit(sym, float(scale), TIME)

    return reg


def parse_duration(text: str, registry: UnitsRegistry) -> Duration:
    """Parse a duration string into a `Duration` (nanoseconds).

    Supports additive formats ("1h30m") and decimal values ("1.5h").
    """
    value, dim = parse(text, registry, Duration)
    if dim != TIME:
        raise WrongDimensionError(TIME, dim, text)
    return value


__all__ = [
    "Duration",
    "NANOSECOND",
    "MICROSECOND",
    "MILLISECOND",
    "SECOND",
    "MINUTE",
    "HOUR",
    "DAY",
    "WEEK",
    "time_registry",
    "parse_duration",
]
