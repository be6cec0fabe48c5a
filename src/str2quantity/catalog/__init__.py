"""
Preconfigured unit registries for common domains.

Each factory returns a new, independent registry; build it once and pass it
to the matching `parse_*` helper (or to `str2quantity.parse`).
"""

from str2quantity.catalog.length import length_registry, parse_length
from str2quantity.catalog.storage import (
    decimal_storage_registry,
    parse_bits,
    parse_bytes,
    storage_registry,
)
from str2quantity.catalog.time import Duration, parse_duration, time_registry

__all__ = [
    "Duration",
    "time_registry",
    "parse_duration",
    "length_registry",
    "parse_length",
    "storage_registry",
    "decimal_storage_registry",
    "parse_bits",
    "parse_bytes",
]
