"""Core primitives: shapes, structural copy, and shared types."""

from objmapper.core.copier import MappingDepthError, StructuralCopier, TypeMismatchError
from objmapper.core.shape import (
    DefaultConstructionError,
    FieldDescriptor,
    FieldKind,
    FieldPair,
    ShapeCache,
    classify,
    create_default,
    describe_shape,
    get_correspondence,
    get_shape_cache,
)
from objmapper.core.types import DEFAULT_CONFIG, Override

__all__ = [
    # Types
    "DEFAULT_CONFIG",
    "Override",
    # Shape
    "FieldKind",
    "FieldDescriptor",
    "FieldPair",
    "ShapeCache",
    "get_shape_cache",
    "describe_shape",
    "get_correspondence",
    "classify",
    "create_default",
    "DefaultConstructionError",
    # Copier
    "StructuralCopier",
    "TypeMismatchError",
    "MappingDepthError",
]
