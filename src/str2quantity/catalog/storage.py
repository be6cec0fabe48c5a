"""
str2quantity.catalog.storage
============================

Digital storage sizes such as "1.5KB", "10 MiB" or "16bits".

The base unit is the bit, so `parse_bits` can insist on whole bits. Two
registries are offered:

- `storage_registry()`: JEDEC convention, K/M/G/... are powers of 1024,
  in both letter cases ("1kB" == "1KB" == 1024 bytes).
- `decimal_storage_registry()`: the same table with K/M/G/... overwritten
  to SI powers of 1000. IEC prefixes (Ki, Mi, ...) stay binary in both.

Only single-part strings are accepted ("1GB 2MB" is an error).
"""
from __future__ import annotations

from str2quantity.core.dimensions import STORAGE
from str2quantity.core.numbers import Int64
from str2quantity.errors import WrongDimensionError
from str2quantity.units.parser import parse
from str2quantity.units.registry import RegistryConfig, UnitsRegistry

BITS_PER_BYTE = 8.0

_BIT_SYMBOLS = ("b", "bit", "bits")
_BYTE_SYMBOLS = ("B", "Byte", "Bytes")
_TARGET_UNITS = _BYTE_SYMBOLS + _BIT_SYMBOLS

# (exponent of 1024 / 1000, IEC symbols, JEDEC symbols)
_PREFIX_TABLE = (
    (1, ("Ki", "ki", "KI"), ("k", "K")),
    (2, ("Mi", "mi", "MI"), ("m", "M")),
    (3, ("Gi", "gi", "GI"), ("g", "G")),
    (4, ("Ti", "ti", "TI"), ("t", "T")),
    (5, ("Pi", "pi", "PI"), ("p", "P")),
    (6, ("Ei", "ei", "EI"), ("e", "E")),
)


def storage_registry() -> UnitsRegistry:
    """Build the binary (1024-based) storage registry."""
    reg = UnitsRegistry(RegistryConfig(allow_multi_part=False, case_insensitive=False))

    for sym in _BIT_SYMBOLS:
        reg.add_unit(sym, 1.0, STORAGE)
    for sym in _BYTE_SYMBOLS:
        reg.add_unit(sym, BITS_PER_BYTE, STORAGE)

    # Case variants are registered explicitly so "1kib" works in case-sensitive mode.
    for power, iec, jedec in _PREFIX_TABLE:
        scale = float(1 << (10 * power))
        for sym in iec + jedec:
            reg.add_prefix(sym, scale, *_TARGET_UNITS)

    return reg


def decimal_storage_registry() -> UnitsRegistry:
    """Build the storage registry with SI (1000-based) K/M/G/... prefixes."""
    reg = storage_registry().clone()
    for power, _iec, jedec in _PREFIX_TABLE:
        for sym in jedec:
            reg.overwrite_prefix(sym, 1000.0 ** power)
    return reg


def parse_bits(text: str, registry: UnitsRegistry) -> Int64:
    """Parse a storage string into an exact number of bits.

    Fractional bits ("0.5b", "0.1B") raise `PrecisionLossError`. The result
    is a signed 64-bit integer, so the largest accepted size is just under
    1 EiB (2**63 bits); use `parse_bytes` for anything bigger.
    """
    value, dim = parse(text, registry, Int64)
    if dim != STORAGE:
        raise WrongDimensionError(STORAGE, dim, text)
    return value


def parse_bytes(text: str, registry: UnitsRegistry) -> float:
    """Parse a storage string into bytes.

    Float arithmetic allows sizes beyond the `parse_bits` range and
    fractional bytes ("4 bits" == 0.5).
    """
    value, dim = parse(text, registry, float)
    if dim != STORAGE:
        raise WrongDimensionError(STORAGE, dim, text)
    return value / BITS_PER_BYTE


__all__ = [
    "BITS_PER_BYTE",
    "storage_registry",
    "decimal_storage_registry",
    "parse_bits",
    "parse_bytes",
]
