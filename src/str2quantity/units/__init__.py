from str2quantity.units.parser import TOLERANCE, ParseResult, parse
from str2quantity.units.registry import (
    DEFAULT_SEPARATORS,
    RegistryConfig,
    Resolution,
    UnitsRegistry,
)

__all__ = [
    "DEFAULT_SEPARATORS",
    "RegistryConfig",
    "Resolution",
    "UnitsRegistry",
    "TOLERANCE",
    "ParseResult",
    "parse",
]
