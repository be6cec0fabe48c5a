# tests/conftest.py
import pytest

from str2quantity.catalog.length import length_registry
from str2quantity.catalog.storage import decimal_storage_registry, storage_registry
from str2quantity.catalog.time import time_registry
from str2quantity.core.dimensions import LENGTH, TIME
from str2quantity.units.registry import RegistryConfig, UnitsRegistry


@pytest.fixture()
def mixed_reg():
    """Seconds-based time units, a length unit, and milli bound to both."""
    reg = UnitsRegistry(RegistryConfig(allow_multi_part=True))
    reg.add_unit("s", 1, TIME)
    reg.add_unit("m", 60, TIME)
    reg.add_unit("h", 3600, TIME)
    reg.add_unit("meter", 1, LENGTH)
    reg.add_prefix("m", 0.001, "s", "meter")  # milli
    return reg


@pytest.fixture()
def strict_int_reg():
    """Base unit 'u' with scale 1 plus a 1000x unit, for integer targets."""
    reg = UnitsRegistry(RegistryConfig(allow_multi_part=True))
    reg.add_unit("u", 1.0, LENGTH)
    reg.add_unit("k", 1000.0, LENGTH)
    return reg


@pytest.fixture(scope="session")
def time_reg():
    return time_registry()


@pytest.fixture(scope="session")
def length_reg():
    return length_registry()


@pytest.fixture(scope="session")
def storage_reg():
    return storage_registry()


@pytest.fixture(scope="session")
def decimal_storage_reg():
    return decimal_storage_registry()
