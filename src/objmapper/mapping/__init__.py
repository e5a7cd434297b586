"""Mapping orchestration and service facade."""

from objmapper.mapping.mapper import Mapper
from objmapper.mapping.protocol import MappingServiceProtocol
from objmapper.mapping.service import MappingService

__all__ = [
    "Mapper",
    "MappingService",
    "MappingServiceProtocol",
]
