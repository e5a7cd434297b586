"""Structural copier: automatic name-matched copy between shapes."""

from objmapper.core.copier.core import MappingDepthError, StructuralCopier, TypeMismatchError

__all__ = [
    "StructuralCopier",
    "TypeMismatchError",
    "MappingDepthError",
]
