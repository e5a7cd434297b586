"""Mapping configuration registry."""

from objmapper.registry.configuration import ConfigurationFrozenError, MappingConfiguration
from objmapper.registry.models import OverrideEntry

__all__ = [
    "MappingConfiguration",
    "OverrideEntry",
    "ConfigurationFrozenError",
]
