"""Shared test fixtures."""

import sys

import pytest

# Ensure src is in path
sys.path.insert(0, "src")

from objmapper import Mapper, MappingConfiguration


@pytest.fixture
def configuration():
    """Fresh MappingConfiguration instance."""
    return MappingConfiguration()


@pytest.fixture
def mapper(configuration):
    """Mapper bound to the fresh configuration."""
    return Mapper(configuration)
