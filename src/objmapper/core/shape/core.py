"""Shape introspection, classification, and the field-correspondence cache.

Supported shapes:
    - dataclasses (frozen dataclasses expose no writable fields)
    - Pydantic models (frozen models expose no writable fields)
    - plain classes with annotated attributes and/or properties

Usage:
    @dataclass
    class Person:
        name: str
        tags: list[str]

    describe_shape(Person)["tags"].kind      # FieldKind.COLLECTION
    get_shape_cache().correspondence(Person, PersonDto)
"""

from __future__ import annotations

import dataclasses
import inspect
import logging
import sys
import threading
import types
from collections import deque
from collections.abc import Collection, Iterable, Mapping, MutableSequence, MutableSet, Sequence
from collections.abc import Set as AbstractSet
from enum import Enum
from typing import Annotated, Any, ClassVar, Literal, TypeVar, Union, get_args, get_origin
from typing import get_type_hints

from objmapper.core.shape.models import FieldDescriptor, FieldKind, FieldPair

logger = logging.getLogger(__name__)

_STRING_TYPES = (str, bytes, bytearray)

_ABSTRACT_COLLECTIONS = frozenset(
    {Iterable, Collection, Sequence, MutableSequence, AbstractSet, MutableSet}
)

# Checked in order: frozenset before set, concrete containers before the abstract fallback.
_CONTAINER_FACTORIES: tuple[tuple[type, type], ...] = (
    (list, list),
    (tuple, tuple),
    (frozenset, frozenset),
    (set, set),
    (deque, deque),
)


class DefaultConstructionError(TypeError):
    """Raised when no default instance of a destination type can be built."""

    pass


def _is_pydantic(cls: type) -> bool:
    """Check if class is a Pydantic model without importing pydantic.

    Args:
        cls: Class to check.

    Returns:
        True if class inherits from pydantic.BaseModel, False otherwise.
    """
    if not isinstance(cls, type):
        return False
    for base in cls.__mro__:
        if base.__module__.startswith("pydantic") and base.__name__ == "BaseModel":
            return True
    return False


def _is_stdlib(cls: type) -> bool:
    top_level = cls.__module__.partition(".")[0]
    return top_level in sys.stdlib_module_names


def unwrap_optional(annotation: Any) -> Any:
    """Strip ``Optional``/``| None`` and ``Annotated`` wrappers from an annotation."""
    origin = get_origin(annotation)
    if origin is Annotated:
        return unwrap_optional(get_args(annotation)[0])
    if origin is Union or origin is types.UnionType:
        members = [arg for arg in get_args(annotation) if arg is not type(None)]
        if len(members) == 1:
            return unwrap_optional(members[0])
    return annotation


def target_class(annotation: Any) -> type | None:
    """Return the runtime class behind an annotation, or None if there is none."""
    annotation = unwrap_optional(annotation)
    target = get_origin(annotation) or annotation
    return target if isinstance(target, type) else None


def classify(annotation: Any) -> FieldKind:
    """Classify a declared type into the copy strategy used for it.

    Priority order: string/primitive/stdlib value, structured model,
    collection, other stdlib value, user-defined structured class.
    Mappings are values (copied by reference).

    Args:
        annotation: Declared type of a field, or a runtime class.

    Returns:
        The field kind. DYNAMIC when the annotation is untyped or ambiguous.
    """
    annotation = unwrap_optional(annotation)
    if annotation is Any or isinstance(annotation, TypeVar):
        return FieldKind.DYNAMIC
    origin = get_origin(annotation)
    if origin is Literal:
        return FieldKind.VALUE
    if origin is Union or origin is types.UnionType:
        return FieldKind.DYNAMIC

    target = origin or annotation
    if not isinstance(target, type):
        return FieldKind.DYNAMIC
    if issubclass(target, _STRING_TYPES + (Enum,)) or issubclass(target, Mapping):
        return FieldKind.VALUE
    if dataclasses.is_dataclass(target) or _is_pydantic(target):
        return FieldKind.STRUCTURED
    if issubclass(target, tuple) and hasattr(target, "_fields"):
        return FieldKind.VALUE  # NamedTuple records are immutable values
    if target in _ABSTRACT_COLLECTIONS or any(
        issubclass(target, base) for base, _ in _CONTAINER_FACTORIES
    ):
        return FieldKind.COLLECTION
    if _is_stdlib(target):
        return FieldKind.VALUE
    return FieldKind.STRUCTURED


def element_type(annotation: Any) -> Any | None:
    """Element type of a collection annotation.

    ``tuple[int, ...]`` yields ``int``; heterogeneous tuples yield ``Any``.

    Returns:
        The element type, or None when the annotation carries no parameters.
    """
    annotation = unwrap_optional(annotation)
    args = get_args(annotation)
    if not args:
        return None
    if target_class(annotation) is tuple:
        if len(args) == 2 and args[1] is Ellipsis:
            return args[0]
        return Any
    return args[0]


def rebuild_collection(container: type | None, items: Iterable[Any]) -> Any:
    """Build a new container of the same kind holding the same element references."""
    if container is not None:
        for base, factory in _CONTAINER_FACTORIES:
            if issubclass(container, base):
                return factory(items)
    return list(items)


def _accepts_class(target: type, value: Any) -> bool:
    if target is float:
        return isinstance(value, (int, float))
    if target is complex:
        return isinstance(value, (int, float, complex))
    try:
        return isinstance(value, target)
    except TypeError:
        # Non-runtime-checkable protocols cannot be checked
        return True


def accepts(annotation: Any, value: Any) -> bool:
    """Check whether ``value`` may be assigned to a field declared as ``annotation``.

    None is always accepted (null propagation). Untyped fields accept anything.
    Parameterised collections are checked element by element.
    """
    if value is None or annotation is Any or isinstance(annotation, TypeVar):
        return True
    origin = get_origin(annotation)
    if origin is Annotated:
        return accepts(get_args(annotation)[0], value)
    if origin is Union or origin is types.UnionType:
        return any(accepts(member, value) for member in get_args(annotation))
    if origin is Literal:
        return value in get_args(annotation)

    target = origin or annotation
    if not isinstance(target, type):
        return True
    if not _accepts_class(target, value):
        return False
    if origin is None or classify(target) is not FieldKind.COLLECTION:
        return True
    item = element_type(annotation)
    if item is None or item is Any:
        return True
    return all(accepts(item, element) for element in value)


def create_default(cls: type) -> Any:
    """Construct a default-initialised instance of ``cls``.

    Dataclasses with required fields get None for each of them. Pydantic models
    are built with ``model_construct`` (no validation), required fields None.

    Raises:
        DefaultConstructionError: If the class cannot be built without arguments.
    """
    if _is_pydantic(cls):
        required = {name: None for name, info in cls.model_fields.items() if info.is_required()}
        return cls.model_construct(**required)
    try:
        return cls()
    except TypeError as e:
        if not dataclasses.is_dataclass(cls):
            raise DefaultConstructionError(
                f"Cannot construct default instance of {cls.__name__}: {e}"
            ) from e
    missing = {
        f.name: None
        for f in dataclasses.fields(cls)
        if f.init
        and f.default is dataclasses.MISSING
        and f.default_factory is dataclasses.MISSING
    }
    try:
        return cls(**missing)
    except TypeError as e:
        raise DefaultConstructionError(
            f"Cannot construct default instance of {cls.__name__}: {e}"
        ) from e


def _resolve_hint(klass: type, name: str, hint: Any, localns: dict[str, Any]) -> Any:
    """Resolve one annotation of ``klass`` in its module namespace; Any if it cannot be."""
    holder = type(
        klass.__name__,
        (),
        {"__annotations__": {name: hint}, "__module__": klass.__module__},
    )
    try:
        return get_type_hints(holder, localns=localns)[name]
    except (NameError, TypeError) as e:
        logger.debug("Could not resolve %s.%s annotation %r: %s", klass.__name__, name, hint, e)
        return Any


def _resolve_hints(obj: Any) -> dict[str, Any]:
    """Resolved type hints.

    When the annotations cannot be resolved together, each one is resolved on
    its own so only the unresolvable names fall back to Any.
    """
    try:
        return get_type_hints(obj)
    except (NameError, TypeError) as e:
        logger.debug("Could not resolve type hints of %r: %s", obj, e)
    if not isinstance(obj, type):
        return {}
    hints: dict[str, Any] = {}
    for klass in reversed(obj.__mro__):
        localns = {**vars(klass), klass.__name__: klass}
        for name, hint in inspect.get_annotations(klass).items():
            hints[name] = _resolve_hint(klass, name, hint, localns)
    return hints


def _is_classvar(hint: Any) -> bool:
    return hint is ClassVar or get_origin(hint) is ClassVar


def _descriptor(
    name: str, annotation: Any, readable: bool = True, writable: bool = True
) -> FieldDescriptor:
    return FieldDescriptor(
        name=name,
        annotation=annotation,
        kind=classify(annotation),
        readable=readable,
        writable=writable,
    )


def _property_fields(cls: type, skip: Mapping[str, Any]) -> dict[str, FieldDescriptor]:
    found: dict[str, FieldDescriptor] = {}
    for klass in reversed(cls.__mro__):
        if klass is object or klass.__module__.startswith("pydantic"):
            continue
        for name, attr in vars(klass).items():
            if name.startswith("_") or name in skip or not isinstance(attr, property):
                continue
            annotation = Any
            if attr.fget is not None:
                annotation = _resolve_hints(attr.fget).get("return", Any)
            found[name] = _descriptor(
                name,
                annotation,
                readable=attr.fget is not None,
                writable=attr.fset is not None,
            )
    return found


def _build_shape(cls: type) -> dict[str, FieldDescriptor]:
    shape: dict[str, FieldDescriptor] = {}
    hints = _resolve_hints(cls)

    if dataclasses.is_dataclass(cls):
        frozen = cls.__dataclass_params__.frozen  # type: ignore[attr-defined]
        for f in dataclasses.fields(cls):
            if f.name.startswith("_"):
                continue
            shape[f.name] = _descriptor(f.name, hints.get(f.name, Any), writable=not frozen)
    elif _is_pydantic(cls):
        frozen = bool(cls.model_config.get("frozen", False))
        for name, info in cls.model_fields.items():
            annotation = info.annotation if info.annotation is not None else Any
            shape[name] = _descriptor(name, annotation, writable=not (frozen or info.frozen))
    else:
        for name, hint in hints.items():
            if name.startswith("_") or _is_classvar(hint):
                continue
            shape[name] = _descriptor(name, hint)

    shape.update(_property_fields(cls, skip=shape))
    return shape


def _instance_extras(obj: Any, shape: Mapping[str, FieldDescriptor]) -> dict[str, FieldDescriptor]:
    """Untyped attributes set on a plain instance that its class does not declare."""
    cls = type(obj)
    if dataclasses.is_dataclass(cls) or _is_pydantic(cls) or not hasattr(obj, "__dict__"):
        return {}
    return {
        name: FieldDescriptor(name=name, annotation=Any, kind=FieldKind.DYNAMIC)
        for name in vars(obj)
        if not name.startswith("_") and name not in shape
    }


def _match(
    source_fields: Mapping[str, FieldDescriptor],
    dest_fields: Mapping[str, FieldDescriptor],
) -> tuple[FieldPair, ...]:
    pairs = []
    for name, source in source_fields.items():
        if not source.readable:
            continue
        destination = dest_fields.get(name)
        if destination is None or not destination.writable:
            continue
        pairs.append(FieldPair(source=source, destination=destination))
    return tuple(pairs)


class ShapeCache:
    """Process-local cache of shapes and per-type-pair field correspondences.

    Shapes and correspondence tables are computed on first use and reused for
    every subsequent mapping between the same types.
    """

    def __init__(self) -> None:
        """Initialize empty caches."""
        self._lock = threading.Lock()
        self._shapes: dict[type, dict[str, FieldDescriptor]] = {}
        self._pairs: dict[tuple[type, type], tuple[FieldPair, ...]] = {}

    def describe(self, cls: type) -> dict[str, FieldDescriptor]:
        """Get the field descriptors of a class, keyed by field name.

        Args:
            cls: Class to describe.

        Returns:
            Field descriptors in declaration order. Do not mutate.
        """
        shape = self._shapes.get(cls)
        if shape is None:
            shape = _build_shape(cls)
            with self._lock:
                shape = self._shapes.setdefault(cls, shape)
        return shape

    def correspondence(self, source_type: type, dest_type: type) -> tuple[FieldPair, ...]:
        """Get the cached field correspondence table for a type pair.

        Args:
            source_type: Class of the source value.
            dest_type: Class of the destination value.

        Returns:
            Pairs of (readable source field, writable destination field) with
            identical names, in source declaration order.
        """
        key = (source_type, dest_type)
        pairs = self._pairs.get(key)
        if pairs is None:
            pairs = _match(self.describe(source_type), self.describe(dest_type))
            with self._lock:
                pairs = self._pairs.setdefault(key, pairs)
        return pairs

    def pairs_for(self, source: Any, destination: Any) -> tuple[FieldPair, ...]:
        """Field pairs for two concrete values, including undeclared instance attributes."""
        source_shape = self.describe(type(source))
        dest_shape = self.describe(type(destination))
        source_extras = _instance_extras(source, source_shape)
        dest_extras = _instance_extras(destination, dest_shape)
        if not source_extras and not dest_extras:
            return self.correspondence(type(source), type(destination))
        return _match({**source_shape, **source_extras}, {**dest_shape, **dest_extras})

    def clear(self) -> None:
        """Drop all cached shapes and correspondences."""
        with self._lock:
            self._shapes.clear()
            self._pairs.clear()


# Module-level cache instance
_cache = ShapeCache()


def get_shape_cache() -> ShapeCache:
    """Access the global shape cache.

    Returns:
        The process-local ShapeCache instance.
    """
    return _cache


def describe_shape(cls: type) -> dict[str, FieldDescriptor]:
    """Describe a class using the global shape cache."""
    return _cache.describe(cls)


def get_correspondence(source_type: type, dest_type: type) -> tuple[FieldPair, ...]:
    """Field correspondence table for a type pair, from the global shape cache."""
    return _cache.correspondence(source_type, dest_type)
