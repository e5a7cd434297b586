"""Shape models: field kinds and descriptors.

A shape is the set of named fields a type exposes. Descriptors are derived from
annotations once per class and reused for every mapping call.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto
from typing import Any


class FieldKind(Enum):
    """Static classification of a field's declared type."""

    VALUE = auto()  # Strings, primitives, stdlib and mapping types: copied as-is
    COLLECTION = auto()  # Ordered or set-like iterables: rebuilt with same elements
    STRUCTURED = auto()  # User-defined classes: recursed into
    DYNAMIC = auto()  # Untyped or ambiguous: classified from the runtime value


@dataclass(slots=True, frozen=True)
class FieldDescriptor:
    """A single field of a shape."""

    name: str
    annotation: Any
    kind: FieldKind
    readable: bool = True
    writable: bool = True


@dataclass(slots=True, frozen=True)
class FieldPair:
    """Correspondence between a readable source field and a writable destination field."""

    source: FieldDescriptor
    destination: FieldDescriptor

    @property
    def name(self) -> str:
        return self.source.name
