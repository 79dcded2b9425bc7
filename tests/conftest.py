"""
Shared pytest fixtures for the zonevalue test suite.

Every test runs against a fresh registry pinned to a known system zone and a
fixed clock, so nothing depends on the host's zone settings or the wall clock.
"""

import os
from collections.abc import Iterator

import pytest

from tests.test_constants import TEST_SYSTEM_ZONE, TEST_WINTER_INSTANT
from zonevalue.clock import FixedClock, set_clock
from zonevalue.registry import ZoneRegistry, set_registry


@pytest.fixture(autouse=True)
def registry() -> Iterator[ZoneRegistry]:
    """Install a registry whose system zone is TEST_SYSTEM_ZONE."""
    zone_registry = ZoneRegistry(system_zone=TEST_SYSTEM_ZONE)
    set_registry(zone_registry)
    yield zone_registry
    set_registry(None)


@pytest.fixture(autouse=True)
def fixed_clock() -> Iterator[FixedClock]:
    """Pin "now" to a winter instant."""
    clock = FixedClock(TEST_WINTER_INSTANT)
    set_clock(clock)
    yield clock
    set_clock(None)


@pytest.fixture
def clean_env(monkeypatch: pytest.MonkeyPatch) -> pytest.MonkeyPatch:
    """Remove every ZONEVALUE_* variable from the environment."""
    for name in list(os.environ):
        if name.startswith("ZONEVALUE_"):
            monkeypatch.delenv(name, raising=False)
    return monkeypatch
