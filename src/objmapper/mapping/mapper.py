"""Mapping orchestrator: structural copy followed by named overrides.

Usage:
    configuration = MappingConfiguration()
    configuration.register("Upper", Person, PersonDto, upper_name)

    mapper = Mapper(configuration)
    dto = mapper.map(person, PersonDto, "Upper")
    mapper.map_into(person, existing_dto, "Upper")
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable
from typing import Any, TypeVar

from objmapper.config import MapperSettings
from objmapper.core.copier import StructuralCopier
from objmapper.core.shape import create_default
from objmapper.registry import MappingConfiguration

logger = logging.getLogger(__name__)

S = TypeVar("S")
D = TypeVar("D")


class Mapper:
    """Composes the structural copier and a mapping configuration.

    Args:
        configuration: Registry of named overrides. Defaults to an empty one.
        settings: Mapper settings. Defaults to MapperSettings().
        copier: Structural copier. Defaults to one built from settings.
    """

    def __init__(
        self,
        configuration: MappingConfiguration | None = None,
        settings: MapperSettings | None = None,
        copier: StructuralCopier | None = None,
    ) -> None:
        self._settings = settings or MapperSettings()
        self._configuration = configuration if configuration is not None else MappingConfiguration()
        self._copier = copier or StructuralCopier(self._settings)
        if self._settings.freeze_configuration:
            self._configuration.freeze()

    @property
    def configuration(self) -> MappingConfiguration:
        return self._configuration

    @property
    def settings(self) -> MapperSettings:
        return self._settings

    def map(
        self,
        source: S | None,
        dest_type: type[D],
        config_name: str | None = None,
        *,
        source_type: type | None = None,
        custom: Callable[[S, D], Any] | None = None,
    ) -> D:
        """Map source onto a freshly constructed instance of dest_type.

        Args:
            source: Value to map from. None yields a default-initialised destination.
            dest_type: Destination class, constructed with create_default().
            config_name: Configuration whose overrides apply. Defaults to
                settings.default_config_name.
            source_type: Type used to select overrides. Defaults to type(source).
            custom: One-off override run after the configured ones.

        Returns:
            The populated destination.
        """
        destination = create_default(dest_type)
        self._apply(source, destination, config_name, source_type)
        if custom is not None:
            custom(source, destination)  # type: ignore[arg-type]
        return destination

    def map_into(
        self,
        source: Any,
        destination: Any,
        config_name: str | None = None,
        *,
        source_type: type | None = None,
    ) -> None:
        """Map source onto a caller-supplied destination in place.

        A None destination is a no-op.
        """
        if destination is None:
            return
        self._apply(source, destination, config_name, source_type)

    def map_many(
        self,
        sources: Iterable[S],
        dest_type: type[D],
        config_name: str | None = None,
    ) -> list[D]:
        """Map each source onto a new dest_type instance, preserving order."""
        return [self.map(source, dest_type, config_name) for source in sources]

    def _apply(
        self,
        source: Any,
        destination: Any,
        config_name: str | None,
        source_type: type | None,
    ) -> None:
        self._copier.copy(source, destination)

        name = config_name if config_name is not None else self._settings.default_config_name
        entries = self._configuration.resolve(name)
        if not entries:
            logger.debug("No overrides registered under %r", name)
            return

        src_type = source_type if source_type is not None else type(source)
        dst_type = type(destination)
        for entry in entries:
            if not entry.applies_to(src_type, dst_type):
                logger.debug(
                    "Skipping override %r: registered for %s -> %s, mapping %s -> %s",
                    name,
                    entry.source_type.__name__,
                    entry.dest_type.__name__,
                    src_type.__name__,
                    dst_type.__name__,
                )
                continue
            entry.invoke(source, destination)
