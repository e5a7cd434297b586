"""Mapping service facade over an owned Mapper."""

from __future__ import annotations

from typing import Any, TypeVar

from objmapper.mapping.mapper import Mapper

D = TypeVar("D")


class MappingService:
    """Forwards mapping calls unchanged to a Mapper. Holds no state of its own."""

    __slots__ = ("_mapper",)

    def __init__(self, mapper: Mapper) -> None:
        self._mapper = mapper

    def map(self, source: Any, dest_type: type[D], config_name: str | None = None) -> D:
        return self._mapper.map(source, dest_type, config_name)

    def map_existing_destination(
        self, source: Any, destination: Any, config_name: str | None = None
    ) -> None:
        self._mapper.map_into(source, destination, config_name)
