"""Structural copier: name-matched, type-driven field copy between two values.

Usage:
    copier = StructuralCopier()
    copier.copy(person, person_dto)  # mutates person_dto in place

Copy rules per matched field (readable on source, writable on destination):
    - None is written through as None
    - strings, primitives and other values are assigned directly
    - collections are rebuilt as a new container with the same element references
    - structured values are recursed into, creating the destination value if absent
"""

from __future__ import annotations

import logging
from typing import Any

from objmapper.config import MapperSettings
from objmapper.core.shape import (
    FieldDescriptor,
    FieldKind,
    ShapeCache,
    accepts,
    classify,
    create_default,
    element_type,
    get_shape_cache,
    rebuild_collection,
    target_class,
)

logger = logging.getLogger(__name__)


class TypeMismatchError(TypeError):
    """Raised when a source value cannot be assigned to the matching destination field."""

    pass


class MappingDepthError(RecursionError):
    """Raised when structured fields nest deeper than the configured maximum depth."""

    pass


def _read(source: Any, name: str) -> Any:
    """Read a source field; declared-but-unset plain attributes read as None.

    Property getters are called directly so their errors propagate.
    """
    if isinstance(getattr(type(source), name, None), property):
        return getattr(source, name)
    return getattr(source, name, None)


class StructuralCopier:
    """Copies fields with matching names from a source value onto a destination value.

    Never mutates the source. Has no knowledge of mapping configurations.

    Args:
        settings: Mapper settings (max_depth, strict_types). Defaults to MapperSettings().
        shapes: Shape cache to use. Defaults to the process-wide cache.
    """

    def __init__(
        self,
        settings: MapperSettings | None = None,
        shapes: ShapeCache | None = None,
    ) -> None:
        self._settings = settings or MapperSettings()
        self._shapes = shapes or get_shape_cache()

    @property
    def settings(self) -> MapperSettings:
        return self._settings

    def copy(self, source: Any, destination: Any) -> None:
        """Copy matching fields from source onto destination.

        A None source or destination is a silent no-op.

        Args:
            source: Value to read from.
            destination: Value to write to, mutated in place.

        Raises:
            TypeMismatchError: If a value is incompatible with the destination field.
            MappingDepthError: If nesting exceeds settings.max_depth.
        """
        self._copy(source, destination, depth=0)

    def _copy(self, source: Any, destination: Any, depth: int) -> None:
        if source is None or destination is None:
            return

        max_depth = self._settings.max_depth
        if max_depth is not None and depth > max_depth:
            raise MappingDepthError(
                f"Exceeded max mapping depth {max_depth} while copying "
                f"{type(source).__name__} -> {type(destination).__name__}"
            )

        for pair in self._shapes.pairs_for(source, destination):
            value = _read(source, pair.name)
            if value is None:
                setattr(destination, pair.name, None)
                continue

            kind = pair.source.kind
            if kind is FieldKind.DYNAMIC:
                kind = classify(type(value))

            if kind is FieldKind.VALUE:
                self._assign(destination, pair.destination, value)
            elif kind is FieldKind.COLLECTION:
                self._copy_collection(destination, pair.source, pair.destination, value)
            else:
                self._copy_structured(destination, pair.destination, value, depth)

    def _copy_collection(
        self,
        destination: Any,
        source_field: FieldDescriptor,
        dest_field: FieldDescriptor,
        value: Any,
    ) -> None:
        if source_field.kind is FieldKind.DYNAMIC:
            container = type(value)
        else:
            if element_type(source_field.annotation) is None:
                logger.debug(
                    "Skipping field %r: element type of %r is undetermined",
                    source_field.name,
                    source_field.annotation,
                )
                return
            container = target_class(source_field.annotation)
        self._assign(destination, dest_field, rebuild_collection(container, value))

    def _copy_structured(
        self, destination: Any, dest_field: FieldDescriptor, value: Any, depth: int
    ) -> None:
        if dest_field.kind not in (FieldKind.STRUCTURED, FieldKind.DYNAMIC):
            raise TypeMismatchError(
                f"Cannot map {type(value).__name__} onto field {dest_field.name!r} "
                f"declared as {dest_field.annotation!r}"
            )

        current = getattr(destination, dest_field.name, None)
        if current is None:
            declared = target_class(dest_field.annotation)
            if dest_field.kind is FieldKind.DYNAMIC or declared is None:
                declared = type(value)
            current = create_default(declared)
            setattr(destination, dest_field.name, current)

        self._copy(value, current, depth + 1)

    def _assign(self, destination: Any, dest_field: FieldDescriptor, value: Any) -> None:
        if self._settings.strict_types and not accepts(dest_field.annotation, value):
            raise TypeMismatchError(
                f"Cannot assign {type(value).__name__} to field {dest_field.name!r} "
                f"declared as {dest_field.annotation!r}"
            )
        setattr(destination, dest_field.name, value)
