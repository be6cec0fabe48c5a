"""
str2quantity.units.registry
===========================

The unit registry: unit definitions, prefix definitions and the per-unit
whitelist of prefixes allowed to combine with each unit.

Key points
----------
- Explicit construction: build a `UnitsRegistry`, populate it with
  `add_unit` / `add_prefix`, then pass it to every parse call. There is no
  shared default registry.
- Normalization that handles Unicode NFC and, when configured,
  case-insensitive lookups.
- Prefixes are registry scoped and tried longest symbol first, so "Ki" is
  never shadowed by "K".
- Whitelisted prefix binding: "mg" only resolves if "m" was bound to "g".
- `clone()` + `overwrite_prefix()` fork a registry into a variant (binary →
  decimal storage) without touching the original.

A registry is safe to share between threads for reads once it is fully
built. Mutation while parse calls are in flight is not supported and no
locking is done.
"""
from __future__ import annotations

import logging
import unicodedata
from dataclasses import dataclass, replace
from typing import Dict, FrozenSet, List, Mapping, NamedTuple, Optional, Set, Tuple

from str2quantity.core.dimensions import Dim
from str2quantity.core.unit import Prefix, Unit
from str2quantity.errors import (
    ConflictingPrefixError,
    DuplicateUnitError,
    PrefixNotFoundError,
    UnknownTargetUnitError,
    UnknownUnitError,
)

logger = logging.getLogger(__name__)

DEFAULT_SEPARATORS = " \t\n\r,;|/"


@dataclass(frozen=True, slots=True)
class RegistryConfig:
    """Parsing behaviour attached to a registry.

    allow_multi_part:
        Sum several parts in one string ("1h30m"). When False only a single
        part is accepted ("1.5MB").
    case_insensitive:
        Lower-case unit and prefix symbols on registration and lookup.
    separators:
        Characters skipped between parts and between a number and its unit.
        Empty means `DEFAULT_SEPARATORS`.
    """

    allow_multi_part: bool = False
    case_insensitive: bool = False
    separators: str = ""

    @property
    def effective_separators(self) -> str:
        return self.separators or DEFAULT_SEPARATORS


class Resolution(NamedTuple):
    """Result of resolving a symbol: the unit and the prefix scale applied to it."""

    unit: Unit
    prefix_scale: float

    @property
    def scale(self) -> float:
        """Total factor to the base unit (prefix scale × unit scale)."""
        return self.prefix_scale * self.unit.scale


# ---------------------------------------------------------------------------
# Units registry
# ---------------------------------------------------------------------------
class UnitsRegistry:
    """Registry of `Unit` and `Prefix` objects with whitelisted prefix binding.

    This registry resolves atomic symbols (possibly prefixed). Splitting an
    input string into number/symbol parts is the parser's job.
    """

    def __init__(self, config: Optional[RegistryConfig] = None) -> None:
        self._config = config if config is not None else RegistryConfig()
        self._units: Dict[str, Unit] = {}
        # kept sorted by descending symbol length
        self._prefixes: List[Prefix] = []
        # normalized unit symbol -> normalized prefix symbols allowed on it
        self._bindings: Dict[str, Set[str]] = {}

    @property
    def config(self) -> RegistryConfig:
        return self._config

    def normalize_symbol(self, symbol: str) -> str:
        """Normalize a unit or prefix symbol for use as a key.

        Unicode NFC first, then lower-case when the registry is
        case-insensitive. Nothing else is rewritten: 'µ' (micro sign) and
        'μ' (Greek mu) stay distinct symbols.
        """
        s = unicodedata.normalize("NFC", symbol)
        if self._config.case_insensitive:
            s = s.lower()
        return s

    def __contains__(self, symbol: str) -> bool:
        return self.resolve(symbol) is not None

    # -------------------------- construction -------------------------------
    def add_unit(self, symbol: str, scale: float, dim: Dim, *, strict: bool = False) -> Unit:
        """Register a unit under its normalized symbol.

        Re-adding a symbol replaces the previous definition (last write wins).
        Pass `strict=True` to raise `DuplicateUnitError` instead. Existing
        prefix bindings of a replaced symbol are kept.
        """
        key = self.normalize_symbol(symbol)
        unit = Unit(symbol, scale, dim)

        previous = self._units.get(key)
        if previous is not None:
            if strict:
                raise DuplicateUnitError(symbol)
            if previous != unit:
                logger.debug("Replacing unit %r: %r -> %r", key, previous, unit)

        self._units[key] = unit
        return unit

    def add_prefix(self, symbol: str, scale: float, *target_units: str) -> Prefix:
        """Define a prefix (or reuse an identical one) and bind it to units.

        Raises `ConflictingPrefixError` if the symbol already exists with a
        different scale and `UnknownTargetUnitError` if a target unit is not
        registered. Targets are checked before anything changes, so a failed
        call leaves the registry as it was.
        """
        p_key = self.normalize_symbol(symbol)
        prefix = Prefix(p_key, scale)

        existing = self._find_prefix(p_key)
        if existing is not None and existing[1].scale != prefix.scale:
            raise ConflictingPrefixError(symbol, existing[1].scale, prefix.scale)

        u_keys = []
        for u_symbol in target_units:
            u_key = self.normalize_symbol(u_symbol)
            if u_key not in self._units:
                raise UnknownTargetUnitError(symbol, u_symbol)
            u_keys.append(u_key)

        if existing is None:
            self._prefixes.append(prefix)
            # stable: equal-length prefixes keep their registration order
            self._prefixes.sort(key=lambda p: len(p.symbol), reverse=True)
        else:
            prefix = existing[1]

        for u_key in u_keys:
            self._bindings.setdefault(u_key, set()).add(p_key)
        return prefix

    def overwrite_prefix(self, symbol: str, new_scale: float) -> Prefix:
        """Replace the scale of an existing prefix in place.

        Every unit the prefix is bound to picks up the new scale. Raises
        `PrefixNotFoundError` if the prefix does not exist; this is not a way
        to create one.
        """
        p_key = self.normalize_symbol(symbol)
        found = self._find_prefix(p_key)
        if found is None:
            raise PrefixNotFoundError(symbol)

        index, old = found
        new = replace(old, scale=new_scale)
        self._prefixes[index] = new
        logger.debug("Overwrote prefix %r: %r -> %r", p_key, old.scale, new.scale)
        return new

    def clone(self) -> "UnitsRegistry":
        """Return an independent deep copy (units, prefixes and bindings)."""
        new = UnitsRegistry(self._config)
        # Unit and Prefix are frozen; copying the containers is enough.
        new._units = dict(self._units)
        new._prefixes = list(self._prefixes)
        new._bindings = {u_key: set(p_keys) for u_key, p_keys in self._bindings.items()}
        logger.debug(
            "Cloned registry with %d units and %d prefixes", len(new._units), len(new._prefixes)
        )
        return new

    # -------------------------- lookup --------------------------------------
    def resolve(self, symbol: str) -> Optional[Resolution]:
        """Resolve `symbol` to a unit and a prefix scale, or `None`.

        An exact unit symbol always wins (prefix scale 1.0). Otherwise prefixes
        are tried longest first, and the first prefix whose remainder is a
        unit that whitelists it is used.
        """
        sym = self.normalize_symbol(symbol)

        unit = self._units.get(sym)
        if unit is not None:
            return Resolution(unit, 1.0)

        for prefix in self._prefixes:
            p_len = len(prefix.symbol)
            if len(sym) > p_len and sym.startswith(prefix.symbol):
                base_sym = sym[p_len:]
                base = self._units.get(base_sym)
                if base is not None and prefix.symbol in self._bindings.get(base_sym, ()):
                    return Resolution(base, prefix.scale)

        return None

    def get(self, symbol: str) -> Resolution:
        """Like `resolve`, but raise `UnknownUnitError` if the symbol is unknown."""
        found = self.resolve(symbol)
        if found is None:
            raise UnknownUnitError(symbol)
        return found

    def has(self, symbol: str) -> bool:
        return self.resolve(symbol) is not None

    def units(self) -> Mapping[str, Unit]:
        """Copy of the normalized symbol → unit table."""
        return dict(self._units)

    def prefixes(self) -> Tuple[Prefix, ...]:
        """Prefixes in resolution order (longest symbol first)."""
        return tuple(self._prefixes)

    def allowed_prefixes(self, unit_symbol: str) -> FrozenSet[str]:
        """Normalized prefix symbols whitelisted for `unit_symbol`."""
        return frozenset(self._bindings.get(self.normalize_symbol(unit_symbol), ()))

    # ------------------------- internals -----------------------------------
    def _find_prefix(self, p_key: str) -> Optional[Tuple[int, Prefix]]:
        for i, p in enumerate(self._prefixes):
            if p.symbol == p_key:
                return i, p
        return None

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(units={len(self._units)}, "
            f"prefixes={len(self._prefixes)}, config={self._config!r})"
        )


__all__ = [
    "DEFAULT_SEPARATORS",
    "RegistryConfig",
    "Resolution",
    "UnitsRegistry",
]
