"""Mapping service protocol for swappable implementations.

Usage:
    def handler(mapping: MappingServiceProtocol) -> PersonDto:
        return mapping.map(person, PersonDto)
"""

from __future__ import annotations

from typing import Any, Protocol, TypeVar, runtime_checkable

D = TypeVar("D")


@runtime_checkable
class MappingServiceProtocol(Protocol):
    """Abstract mapping service interface."""

    def map(self, source: Any, dest_type: type[D], config_name: str | None = None) -> D:
        """Map source onto a new dest_type instance, applying the named configuration."""
        ...

    def map_existing_destination(
        self, source: Any, destination: Any, config_name: str | None = None
    ) -> None:
        """Map source onto an existing destination, applying the named configuration."""
        ...
