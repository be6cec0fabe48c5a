"""
str2quantity: parse human-written quantity strings into typed values.

"1h30m", "1.5KiB" or "0.5ns" become a number in a caller-chosen type plus a
physical dimension, with precision-loss checks for integer result types.
This module exposes a minimal, stable public API. The domain catalogs
(time, length, storage) are imported lazily on first access.
"""

from importlib import metadata as _metadata


__author__ = "str2quantity contributors"
__license__ = "MIT"

# Try to read the installed package version first; fall back to pyproject for local dev.
try:
    __version__ = _metadata.version("str2quantity")
except _metadata.PackageNotFoundError:
    import tomllib
    with open("pyproject.toml", "rb") as f:
        __version__ = tomllib.load(f)["project"]["version"]

from typing import Any

from str2quantity.core.dimensions import (
    AMOUNT,
    CURRENT,
    DIM_0,
    DIMENSIONLESS,
    LENGTH,
    LUMINOUS,
    MASS,
    STORAGE,
    TEMPERATURE,
    TIME,
    Dimension,
)
from str2quantity.core.numbers import (
    FixedInt,
    Int8,
    Int16,
    Int32,
    Int64,
    UInt8,
    UInt16,
    UInt32,
    UInt64,
    checked_add,
)
from str2quantity.core.unit import Prefix, Unit
from str2quantity.errors import *  # noqa: F401,F403
from str2quantity.errors import __all__ as _error_names
from str2quantity.units import (
    DEFAULT_SEPARATORS,
    TOLERANCE,
    ParseResult,
    RegistryConfig,
    Resolution,
    UnitsRegistry,
    parse,
)

# Names served from str2quantity.catalog on first access.
_CATALOG_NAMES = frozenset({
    "Duration",
    "time_registry",
    "parse_duration",
    "length_registry",
    "parse_length",
    "storage_registry",
    "decimal_storage_registry",
    "parse_bits",
    "parse_bytes",
})

# Public names exposed by the package. Keep this minimal and stable.
__all__ = [
    "__version__", "__author__", "__license__",
    "parse", "ParseResult", "TOLERANCE",
    "UnitsRegistry", "RegistryConfig", "Resolution", "DEFAULT_SEPARATORS",
    "Unit", "Prefix",
    "Dimension", "DIMENSIONLESS", "DIM_0", "LENGTH", "MASS", "TIME", "CURRENT",
    "TEMPERATURE", "AMOUNT", "LUMINOUS", "STORAGE",
    "FixedInt", "Int8", "Int16", "Int32", "Int64",
    "UInt8", "UInt16", "UInt32", "UInt64", "checked_add",
    *_error_names,
    *sorted(_CATALOG_NAMES),
]


def __getattr__(name: str) -> Any:
    """
    Lazy attribute access for the domain catalogs, e.g.
    `str2quantity.parse_duration`.
    """
    if name in _CATALOG_NAMES:
        # Import here to keep `import str2quantity` free of catalog modules.
        from str2quantity import catalog  # local import
        return getattr(catalog, name)
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")


def __dir__() -> list[str]:
    # Improve discoverability in REPL / autocomplete.
    return sorted(set(globals().keys()) | _CATALOG_NAMES)
