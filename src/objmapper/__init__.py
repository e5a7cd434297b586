"""objmapper: object-to-object mapping with named override configurations.

Usage:
    from objmapper import Mapper, MappingConfiguration

    @dataclass
    class Person:
        name: str
        tags: list[str]

    @dataclass
    class PersonDto:
        name: str = ""
        tags: list[str] = field(default_factory=list)

    configuration = MappingConfiguration()
    configuration.register(
        "Upper", Person, PersonDto, lambda src, dst: setattr(dst, "name", src.name.upper())
    )

    mapper = Mapper(configuration)
    dto = mapper.map(Person("Ann", ["a"]), PersonDto, "Upper")  # PersonDto("ANN", ["a"])
"""

__version__ = "0.1.0"

# Core primitives
from objmapper.core import (
    DEFAULT_CONFIG,
    DefaultConstructionError,
    FieldDescriptor,
    FieldKind,
    MappingDepthError,
    Override,
    StructuralCopier,
    TypeMismatchError,
    describe_shape,
)

# Configuration
from objmapper.config import MapperSettings

# Mapping
from objmapper.mapping import Mapper, MappingService, MappingServiceProtocol

# Registry
from objmapper.registry import ConfigurationFrozenError, MappingConfiguration, OverrideEntry

__all__ = [
    # Version
    "__version__",
    # Core
    "DEFAULT_CONFIG",
    "Override",
    "FieldKind",
    "FieldDescriptor",
    "describe_shape",
    "StructuralCopier",
    "TypeMismatchError",
    "MappingDepthError",
    "DefaultConstructionError",
    # Config
    "MapperSettings",
    # Registry
    "MappingConfiguration",
    "OverrideEntry",
    "ConfigurationFrozenError",
    # Mapping
    "Mapper",
    "MappingService",
    "MappingServiceProtocol",
]
