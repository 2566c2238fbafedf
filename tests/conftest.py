"""Shared test fixtures."""

import sys

import pytest

# Ensure src is in path
sys.path.insert(0, "src")

from automapper import Mapper, MapperSettings


@pytest.fixture
def mapper():
    """Fresh Mapper with default settings."""
    return Mapper(MapperSettings())


@pytest.fixture
def uncached_mapper():
    """Mapper that rediscovers plans on every call."""
    return Mapper(MapperSettings(cache_plans=False))
