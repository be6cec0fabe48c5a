# pytest tests for str2quantity.units.registry
#
# These tests exercise exact-match priority, whitelisted prefix binding,
# longest-prefix precedence, case-insensitivity, clone isolation and the
# construction-time error contract. Each test builds its own registry.

import logging

import pytest

from str2quantity.core.dimensions import LENGTH, MASS, STORAGE, TIME
from str2quantity.core.unit import Prefix, Unit
from str2quantity.errors import (
    ConflictingPrefixError,
    DuplicateUnitError,
    PrefixNotFoundError,
    RegistryError,
    UnknownTargetUnitError,
    UnknownUnitError,
)
from str2quantity.units.registry import (
    DEFAULT_SEPARATORS,
    RegistryConfig,
    Resolution,
    UnitsRegistry,
)

MICRO_SIGN = "µ"
GREEK_MU = "μ"

# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------

@pytest.fixture()
def reg():
    """meter/gram registry: k binds to both, m (milli) only to m (meter)."""
    r = UnitsRegistry(RegistryConfig(case_insensitive=False))
    r.add_unit("m", 1.0, LENGTH)
    r.add_unit("g", 1.0, MASS)
    r.add_prefix("k", 1000, "m", "g")
    r.add_prefix("m", 0.001, "m")
    return r


# ---------------------------------------------------------------------------
# Config
# ---------------------------------------------------------------------------

def test_default_config():
    cfg = RegistryConfig()
    assert cfg.allow_multi_part is False
    assert cfg.case_insensitive is False
    assert cfg.separators == ""
    assert cfg.effective_separators == DEFAULT_SEPARATORS == " \t\n\r,;|/"


def test_custom_separators_replace_default():
    assert RegistryConfig(separators=",").effective_separators == ","


def test_config_is_frozen():
    cfg = RegistryConfig()
    with pytest.raises(AttributeError):
        cfg.allow_multi_part = True  # type: ignore[misc]


def test_registry_without_config_uses_defaults():
    assert UnitsRegistry().config == RegistryConfig()


# ---------------------------------------------------------------------------
# Resolution
# ---------------------------------------------------------------------------

@pytest.mark.parametrize("inp, total_scale, unit_symbol", [
    ("m", 1.0, "m"),      # exact match
    ("km", 1000.0, "m"),  # k + m
    ("mm", 0.001, "m"),   # m + m
    ("kg", 1000.0, "g"),  # k + g
])
def test_resolve_found(reg, inp, total_scale, unit_symbol):
    res = reg.resolve(inp)
    assert res is not None
    assert res.unit.symbol == unit_symbol
    assert res.prefix_scale * res.unit.scale == total_scale
    assert res.scale == total_scale


@pytest.mark.parametrize("inp", [
    "mg",   # m + g is not whitelisted
    "x",    # unknown
    "kx",   # prefix + unknown
    "k",    # a bare prefix is not a unit
    "",     # nothing
])
def test_resolve_not_found(reg, inp):
    assert reg.resolve(inp) is None
    assert inp not in reg
    assert not reg.has(inp)


def test_resolution_is_a_named_tuple(reg):
    unit, prefix_scale = reg.resolve("km")
    assert isinstance(reg.resolve("km"), Resolution)
    assert unit == Unit("m", 1.0, LENGTH)
    assert prefix_scale == 1000


def test_exact_symbol_beats_decomposition():
    r = UnitsRegistry()
    r.add_unit("m", 1.0, LENGTH)
    r.add_prefix("m", 0.001, "m")
    # a unit literally named "mm" must never be read as milli-meter
    r.add_unit("mm", 42.0, LENGTH)
    unit, prefix_scale = r.resolve("mm")
    assert unit.symbol == "mm"
    assert prefix_scale == 1.0


def test_exact_symbol_scale_is_one_even_if_prefix_matches_start(reg):
    reg.add_unit("kelvinish", 5.0, TIME)
    unit, prefix_scale = reg.resolve("kelvinish")
    assert unit.symbol == "kelvinish"
    assert prefix_scale == 1.0


def test_longest_prefix_wins():
    r = UnitsRegistry()
    r.add_unit("b", 1.0, STORAGE)
    r.add_prefix("k", 1000, "b")
    r.add_prefix("ki", 1024, "b")
    unit, prefix_scale = r.resolve("kib")
    assert unit.symbol == "b"
    assert prefix_scale == 1024


def test_longest_prefix_wins_regardless_of_registration_order():
    r = UnitsRegistry()
    r.add_unit("b", 1.0, STORAGE)
    r.add_prefix("ki", 1024, "b")
    r.add_prefix("k", 1000, "b")
    assert [p.symbol for p in r.prefixes()] == ["ki", "k"]
    assert r.resolve("kib").prefix_scale == 1024


def test_falls_back_to_shorter_prefix_when_longer_is_not_bound():
    r = UnitsRegistry()
    r.add_unit("ib", 1.0, STORAGE)
    r.add_unit("b", 1.0, STORAGE)
    r.add_prefix("ki", 1024)  # defined but not bound to anything
    r.add_prefix("k", 1000, "ib")
    res = r.resolve("kib")
    assert res.unit.symbol == "ib"
    assert res.prefix_scale == 1000


def test_get_raises_for_unknown(reg):
    assert reg.get("km").prefix_scale == 1000
    with pytest.raises(UnknownUnitError) as exc:
        reg.get("mg")
    assert exc.value.symbol == "mg"


# ---------------------------------------------------------------------------
# Case sensitivity & normalization
# ---------------------------------------------------------------------------

@pytest.mark.parametrize("inp", ["m", "M", "km", "KM", "Km", "kM"])
def test_case_insensitive_resolution(inp):
    r = UnitsRegistry(RegistryConfig(case_insensitive=True))
    r.add_unit("m", 1.0, LENGTH)
    r.add_prefix("k", 1000, "m")
    res = r.resolve(inp)
    assert res is not None
    assert res.unit.symbol == "m"


def test_case_insensitive_variants_resolve_identically():
    r = UnitsRegistry(RegistryConfig(case_insensitive=True))
    r.add_unit("m", 1.0, LENGTH)
    r.add_prefix("K", 1000, "M")
    assert r.resolve("KM") == r.resolve("km") == r.resolve("Km")
    assert r.resolve("km").prefix_scale == 1000


def test_case_sensitive_distinguishes_symbols():
    r = UnitsRegistry()
    r.add_unit("b", 1.0, STORAGE)
    r.add_unit("B", 8.0, STORAGE)
    assert r.resolve("b").unit.scale == 1.0
    assert r.resolve("B").unit.scale == 8.0


def test_case_insensitive_add_unit_collapses_keys():
    r = UnitsRegistry(RegistryConfig(case_insensitive=True))
    r.add_unit("B", 8.0, STORAGE)
    r.add_unit("b", 1.0, STORAGE)  # same key, last write wins
    assert r.resolve("B").unit.symbol == "b"
    assert list(r.units()) == ["b"]


def test_unicode_nfc_normalization():
    r = UnitsRegistry()
    r.add_unit("Å", 1.0, LENGTH)  # precomposed A-ring
    assert r.resolve("Å") is not None  # A + combining ring


def test_micro_sign_and_greek_mu_are_distinct():
    r = UnitsRegistry()
    r.add_unit("m", 1.0, LENGTH)
    r.add_prefix(MICRO_SIGN, 1e-6, "m")
    assert r.resolve(MICRO_SIGN + "m") is not None
    assert r.resolve(GREEK_MU + "m") is None


# ---------------------------------------------------------------------------
# add_unit
# ---------------------------------------------------------------------------

def test_add_unit_last_write_wins(reg):
    reg.add_unit("g", 2.0, MASS)
    assert reg.resolve("g").unit.scale == 2.0
    # existing bindings survive the redefinition
    assert reg.resolve("kg").scale == 2000.0


def test_add_unit_strict_rejects_duplicates(reg):
    with pytest.raises(DuplicateUnitError):
        reg.add_unit("g", 2.0, MASS, strict=True)
    assert reg.resolve("g").unit.scale == 1.0


def test_add_unit_strict_accepts_new_symbols():
    r = UnitsRegistry()
    assert r.add_unit("s", 1.0, TIME, strict=True) == Unit("s", 1.0, TIME)


def test_add_unit_logs_replacement(reg, caplog):
    with caplog.at_level(logging.DEBUG, logger="str2quantity.units.registry"):
        reg.add_unit("g", 3.0, MASS)
    assert "Replacing unit 'g'" in caplog.text


def test_add_unit_validates_scale():
    with pytest.raises(ValueError):
        UnitsRegistry().add_unit("x", 0.0, LENGTH)


# ---------------------------------------------------------------------------
# add_prefix
# ---------------------------------------------------------------------------

def test_add_prefix_same_scale_is_a_merge(reg):
    reg.add_unit("s", 1.0, TIME)
    prefix = reg.add_prefix("k", 1000.0, "s")
    assert prefix == Prefix("k", 1000.0)
    assert [p.symbol for p in reg.prefixes()].count("k") == 1
    assert reg.resolve("ks").prefix_scale == 1000
    assert reg.resolve("km").prefix_scale == 1000


def test_add_prefix_conflicting_scale_rejected(reg):
    with pytest.raises(ConflictingPrefixError) as exc:
        reg.add_prefix("k", 1024, "m")
    assert exc.value.existing_scale == 1000
    assert exc.value.new_scale == 1024
    assert isinstance(exc.value, RegistryError)


def test_add_prefix_unknown_target_rejected():
    r = UnitsRegistry()
    r.add_unit("m", 1.0, LENGTH)
    with pytest.raises(UnknownTargetUnitError) as exc:
        r.add_prefix("k", 1000, "m", "nope")
    assert exc.value.unit == "nope"


def test_add_prefix_failure_leaves_registry_untouched():
    r = UnitsRegistry()
    r.add_unit("m", 1.0, LENGTH)
    with pytest.raises(UnknownTargetUnitError):
        r.add_prefix("k", 1000, "m", "nope")
    assert r.prefixes() == ()
    assert r.resolve("km") is None
    assert r.allowed_prefixes("m") == frozenset()


def test_add_prefix_without_targets_only_defines_it():
    r = UnitsRegistry()
    r.add_unit("m", 1.0, LENGTH)
    r.add_prefix("k", 1000)
    assert r.resolve("km") is None
    r.add_prefix("k", 1000, "m")
    assert r.resolve("km") is not None


def test_allowed_prefixes(reg):
    assert reg.allowed_prefixes("m") == frozenset({"k", "m"})
    assert reg.allowed_prefixes("g") == frozenset({"k"})
    assert reg.allowed_prefixes("unknown") == frozenset()


def test_case_insensitive_prefix_conflict_detected():
    r = UnitsRegistry(RegistryConfig(case_insensitive=True))
    r.add_unit("b", 1.0, STORAGE)
    r.add_prefix("k", 1000, "b")
    with pytest.raises(ConflictingPrefixError):
        r.add_prefix("K", 1024, "b")


# ---------------------------------------------------------------------------
# overwrite_prefix & clone
# ---------------------------------------------------------------------------

def test_overwrite_prefix_updates_every_binding(reg):
    reg.overwrite_prefix("k", 1024)
    assert reg.resolve("km").prefix_scale == 1024
    assert reg.resolve("kg").prefix_scale == 1024


def test_overwrite_prefix_keeps_resolution_order(reg):
    before = [p.symbol for p in reg.prefixes()]
    reg.overwrite_prefix("m", 0.002)
    assert [p.symbol for p in reg.prefixes()] == before


def test_overwrite_missing_prefix_rejected(reg):
    with pytest.raises(PrefixNotFoundError):
        reg.overwrite_prefix("G", 1e9)
    # not a back-door create
    assert all(p.symbol != "G" for p in reg.prefixes())


def test_overwrite_prefix_logs(reg, caplog):
    with caplog.at_level(logging.DEBUG, logger="str2quantity.units.registry"):
        reg.overwrite_prefix("k", 1024)
    assert "Overwrote prefix 'k'" in caplog.text


def test_clone_and_overwrite_isolation():
    r = UnitsRegistry()
    r.add_unit("B", 1.0, STORAGE)
    r.add_prefix("k", 1000, "B")

    binary = r.clone()
    binary.overwrite_prefix("k", 1024)

    assert r.resolve("kB").prefix_scale == 1000
    assert binary.resolve("kB").prefix_scale == 1024


def test_clone_is_deep_for_units_and_bindings(reg):
    twin = reg.clone()
    twin.add_unit("s", 1.0, TIME)
    twin.add_prefix("m", 0.001, "g")
    twin.add_prefix("G", 1e9, "m")

    assert reg.resolve("s") is None
    assert reg.resolve("mg") is None
    assert reg.resolve("Gm") is None
    assert twin.resolve("mg") is not None

    reg.add_unit("h", 3600.0, TIME)
    assert twin.resolve("h") is None


def test_clone_shares_config(reg):
    assert reg.clone().config is reg.config


def test_units_returns_a_copy(reg):
    table = reg.units()
    table["zzz"] = Unit("zzz", 1.0, LENGTH)  # type: ignore[index]
    assert reg.resolve("zzz") is None


def test_repr_mentions_sizes(reg):
    text = repr(reg)
    assert "units=2" in text
    assert "prefixes=2" in text
