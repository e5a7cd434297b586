"""Tests for the structural copier."""

from dataclasses import dataclass, field
from typing import Any

import pytest

from objmapper.config import MapperSettings
from objmapper.core.copier import MappingDepthError, StructuralCopier, TypeMismatchError


@dataclass
class Address:
    city: str
    street: str | None = None


@dataclass
class Person:
    name: str
    tags: list[str]
    address: Address | None = None
    raw: list | None = None


@dataclass
class AddressDto:
    city: str = ""
    street: str | None = "unset"


@dataclass
class PersonDto:
    name: str = ""
    tags: list[str] = field(default_factory=list)
    address: AddressDto | None = None
    raw: list | None = None


@dataclass
class Team:
    members: list[Address]
    codes: tuple[str, ...] = ()


@dataclass
class TeamDto:
    members: list[Address] = field(default_factory=list)
    codes: tuple[str, ...] = ()


@dataclass
class Counter:
    count: str = ""
    values: list[str] = field(default_factory=list)


@dataclass
class CounterDto:
    count: int = 0
    values: list[int] = field(default_factory=list)


@dataclass
class Flat:
    address: str = ""


@dataclass
class Node:
    name: str = ""
    child: "Node | None" = None


class Loose:
    def __init__(self) -> None:
        self.name = "loose"
        self.items = [1, 2]
        self.address = Address("Y")


@dataclass
class Untyped:
    name: Any = None
    items: Any = None
    address: Any = None


class Lazy:
    @property
    def label(self) -> str:
        raise AttributeError("label not loaded")


class Sparse:
    label: str | None


@dataclass
class Labelled:
    label: str | None = "old"


@pytest.fixture
def copier():
    return StructuralCopier()


def test_copies_values_collections_and_nested_structures(copier):
    source = Person(name="Ann", tags=["a", "b"], address=Address("X"))
    destination = PersonDto()

    copier.copy(source, destination)

    assert destination.name == "Ann"
    assert destination.tags == ["a", "b"]
    assert destination.tags is not source.tags
    assert isinstance(destination.address, AddressDto)
    assert destination.address.city == "X"


def test_none_is_propagated_explicitly(copier):
    """A None source field overwrites the destination's current value."""
    source = Person(name="Ann", tags=[], address=Address("X", street=None))
    destination = PersonDto()

    copier.copy(source, destination)

    assert destination.address is not None
    assert destination.address.street is None


def test_none_operands_are_noops(copier):
    destination = PersonDto(name="kept")

    copier.copy(None, destination)
    copier.copy(Person("Ann", []), None)

    assert destination == PersonDto(name="kept")


def test_source_is_never_mutated(copier):
    source = Person(name="Ann", tags=["a"], address=Address("X"))
    snapshot = Person(name="Ann", tags=["a"], address=Address("X"))

    copier.copy(source, PersonDto())

    assert source == snapshot


def test_existing_nested_destination_is_updated_in_place(copier):
    existing = AddressDto(city="old", street="Main")
    destination = PersonDto(address=existing)

    copier.copy(Person("Ann", [], address=Address("new", street="Side")), destination)

    assert destination.address is existing
    assert existing.city == "new"
    assert existing.street == "Side"


def test_collection_elements_are_shallow_copied(copier):
    """CRITICAL: Collections hold the same element references, not mapped clones."""
    members = [Address("a"), Address("b")]
    source = Team(members=members, codes=("x", "y"))
    destination = TeamDto()

    copier.copy(source, destination)

    assert destination.members is not members
    assert len(destination.members) == 2
    assert all(a is b for a, b in zip(destination.members, members, strict=True))
    assert destination.codes == ("x", "y")


def test_collection_without_element_type_is_skipped(copier):
    destination = PersonDto(raw=["untouched"])

    copier.copy(Person("Ann", [], raw=[1, 2]), destination)

    assert destination.raw == ["untouched"]


def test_value_type_mismatch_raises(copier):
    with pytest.raises(TypeMismatchError, match="'count'"):
        copier.copy(Counter(count="3"), CounterDto())


def test_collection_element_mismatch_raises(copier):
    with pytest.raises(TypeMismatchError, match="'values'"):
        copier.copy(Counter(count=None, values=["a"]), CounterDto())  # type: ignore[arg-type]


def test_mismatch_is_a_type_error(copier):
    with pytest.raises(TypeError):
        copier.copy(Counter(count="3"), CounterDto())


def test_fields_written_before_a_mismatch_are_kept(copier):
    """No rollback: earlier fields stay written when a later field fails."""
    destination = CounterDto()

    with pytest.raises(TypeMismatchError):
        copier.copy(Counter(count=None, values=["a"]), destination)  # type: ignore[arg-type]

    assert destination.count is None


def test_lenient_settings_assign_without_checking():
    copier = StructuralCopier(MapperSettings(strict_types=False))
    destination = CounterDto()

    copier.copy(Counter(count="3", values=["a"]), destination)

    assert destination.count == "3"
    assert destination.values == ["a"]


def test_structured_value_onto_value_field_raises(copier):
    with pytest.raises(TypeMismatchError, match="'address'"):
        copier.copy(Person("Ann", [], address=Address("X")), Flat())


def test_nested_chain_creates_fresh_instances(copier):
    leaf = Node("c")
    source = Node("a", Node("b", leaf))
    destination = Node()

    copier.copy(source, destination)

    assert destination.child is not None and destination.child.child is not None
    assert destination.child.child.name == "c"
    assert destination.child.child is not leaf


def test_cycle_hits_depth_bound():
    a = Node("a")
    b = Node("b", child=a)
    a.child = b
    copier = StructuralCopier(MapperSettings(max_depth=5))

    with pytest.raises(MappingDepthError, match="max mapping depth 5"):
        copier.copy(a, Node())


def test_depth_error_is_a_recursion_error():
    a = Node("a")
    a.child = a

    with pytest.raises(RecursionError):
        StructuralCopier(MapperSettings(max_depth=3)).copy(a, Node())


def test_unbounded_depth_recurses_until_python_limit():
    a = Node("a")
    a.child = a

    with pytest.raises(RecursionError):
        StructuralCopier(MapperSettings(max_depth=None)).copy(a, Node())


def test_untyped_fields_are_classified_from_runtime_values(copier):
    source = Loose()
    destination = Untyped()

    copier.copy(source, destination)

    assert destination.name == "loose"
    assert destination.items == [1, 2]
    assert destination.items is not source.items
    assert isinstance(destination.address, Address)
    assert destination.address is not source.address
    assert destination.address.city == "Y"


def test_long_acyclic_chain_copies_with_default_settings(copier):
    source = Node("n0")
    tail = source
    for i in range(1, 100):
        tail.child = Node(f"n{i}")
        tail = tail.child
    destination = Node()

    copier.copy(source, destination)

    node, count = destination, 1
    while node.child is not None:
        node, count = node.child, count + 1
    assert count == 100
    assert node.name == "n99"
    assert node is not tail


def test_property_getter_errors_propagate(copier):
    destination = Labelled()

    with pytest.raises(AttributeError, match="label not loaded"):
        copier.copy(Lazy(), destination)

    assert destination.label == "old"


def test_declared_but_unset_attribute_reads_as_none(copier):
    destination = Labelled()

    copier.copy(Sparse(), destination)

    assert destination.label is None
