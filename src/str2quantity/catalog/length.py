"""
str2quantity.catalog.length
===========================

Lengths such as "1.5m", "100cm" or "1m 50cm", returned in meters.
"""
from __future__ import annotations

from str2quantity.core.dimensions import LENGTH
from str2quantity.errors import WrongDimensionError
from str2quantity.units.parser import parse
from str2quantity.units.registry import RegistryConfig, UnitsRegistry


def length_registry() -> UnitsRegistry:
    """Build the registry for length strings (additive, case-sensitive SI symbols)."""
    reg = UnitsRegistry(RegistryConfig(allow_multi_part=True, case_insensitive=False))

    # Base unit: meter
    reg.add_unit("m", 1.0, LENGTH)

    prefixes = (
        ("n", 1e-9),  # nanometer
        ("u", 1e-6),  # micrometer, ASCII fallback
        ("µ", 1e-6),  # micro sign U+00B5
        ("μ", 1e-6),  # greek mu U+03BC
        ("m", 1e-3),  # millimeter
        ("c", 1e-2),  # centimeter
        ("k", 1e3),   # kilometer
    )
    for sym, scale in prefixes:
        reg.add_prefix(sym, scale, "m")

    return reg


def parse_length(text: str, registry: UnitsRegistry) -> float:
    """Parse a length string into meters."""
    value, dim = parse(text, registry, float)
    if dim != LENGTH:
        raise WrongDimensionError(LENGTH, dim, text)
    return value


__all__ = ["length_registry", "parse_length"]
