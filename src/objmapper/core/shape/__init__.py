"""Shape functionality: field descriptors, classification, and correspondence cache."""

from objmapper.core.shape.core import (
    DefaultConstructionError,
    ShapeCache,
    accepts,
    classify,
    create_default,
    describe_shape,
    element_type,
    get_correspondence,
    get_shape_cache,
    rebuild_collection,
    target_class,
    unwrap_optional,
)
from objmapper.core.shape.models import FieldDescriptor, FieldKind, FieldPair

__all__ = [
    # Models
    "FieldKind",
    "FieldDescriptor",
    "FieldPair",
    # Core
    "ShapeCache",
    "get_shape_cache",
    "describe_shape",
    "get_correspondence",
    "classify",
    "element_type",
    "accepts",
    "create_default",
    "rebuild_collection",
    "target_class",
    "unwrap_optional",
    "DefaultConstructionError",
]
