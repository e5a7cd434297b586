"""Tests for shapes whose annotations only partly resolve at runtime."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

import pytest

from objmapper.core.copier import TypeMismatchError
from objmapper.core.shape import FieldKind, describe_shape
from objmapper.mapping import Mapper

if TYPE_CHECKING:
    from decimal import Decimal


@dataclass
class Address:
    city: str


@dataclass
class Ledger:
    address: Address | None = None
    owner: int = 0


@dataclass
class Entry:
    owner: str = ""


@dataclass
class AddressDto:
    city: str = ""


@dataclass
class LedgerDto:
    balance: Decimal | None = None
    address: AddressDto | None = None
    owner: int = 0


def test_unresolvable_annotation_falls_back_alone():
    shape = describe_shape(LedgerDto)

    assert shape["balance"].kind is FieldKind.DYNAMIC
    assert shape["address"].kind is FieldKind.STRUCTURED
    assert shape["owner"].annotation is int


def test_nested_destination_uses_declared_class():
    dto = Mapper().map(Ledger(Address("X"), owner=7), LedgerDto)

    assert isinstance(dto.address, AddressDto)
    assert dto.address.city == "X"
    assert dto.owner == 7
    assert dto.balance is None


def test_resolved_fields_are_still_type_checked():
    with pytest.raises(TypeMismatchError):
        Mapper().map(Entry(owner="seven"), LedgerDto)
