"""Mapping configuration registry: named, ordered lists of override entries.

Usage:
    configuration = MappingConfiguration()
    configuration.register("Upper", Person, PersonDto, upper_name).register(
        "Upper", Person, PersonDto, add_initials
    )

    # Original argument order, default configuration name
    configuration.create_map(Person, PersonDto, lambda src, dst: ...)

    # Decorator form
    @configuration.override(Person, PersonDto, config_name="Upper")
    def full_name(src: Person, dst: PersonDto) -> None:
        dst.full_name = f"{src.first} {src.last}"

    configuration.freeze()  # read-only from here on
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Callable
from typing import Any, Self

from objmapper.core.types import DEFAULT_CONFIG
from objmapper.registry.models import OverrideEntry

logger = logging.getLogger(__name__)


class ConfigurationFrozenError(RuntimeError):
    """Raised when registering into a frozen configuration."""

    pass


class MappingConfiguration:
    """Registry mapping configuration names to ordered override entries.

    Entries are kept in registration order and never reordered or deduplicated:
    two entries for the same type pair both run, later one last.

    Thread safety: an RLock guards the name-to-entries mapping. Populate, then
    freeze() before concurrent mapping traffic begins.
    """

    def __init__(self) -> None:
        """Initialize empty configuration registry."""
        self._lock = threading.RLock()
        self._named: dict[str, list[OverrideEntry]] = {}
        self._frozen = False

    def register(
        self,
        config_name: str,
        source_type: type,
        dest_type: type,
        fn: Callable[[Any, Any], Any] | None = None,
    ) -> Self:
        """Append an override entry to a named configuration.

        Args:
            config_name: Name of the configuration; created if absent.
            source_type: Source class the override applies to.
            dest_type: Destination class the override applies to.
            fn: Override called as fn(source, destination). None declares the
                pair without custom logic.

        Returns:
            This configuration, for chained registration.

        Raises:
            ConfigurationFrozenError: If the configuration has been frozen.
            TypeError: If fn is neither callable nor None.
        """
        if fn is not None and not callable(fn):
            raise TypeError(f"Override for {config_name!r} must be callable, got {type(fn)}")

        with self._lock:
            if self._frozen:
                raise ConfigurationFrozenError(
                    f"Cannot register {source_type.__name__} -> {dest_type.__name__} "
                    f"under {config_name!r}: configuration is frozen"
                )
            entries = self._named.setdefault(config_name, [])
            entries.append(OverrideEntry(source_type=source_type, dest_type=dest_type, fn=fn))
        return self

    def create_map(
        self,
        source_type: type,
        dest_type: type,
        fn: Callable[[Any, Any], Any] | None = None,
        *,
        config_name: str = DEFAULT_CONFIG,
    ) -> Self:
        """Register an override with the type pair first, under the default name."""
        return self.register(config_name, source_type, dest_type, fn)

    def override(
        self,
        source_type: type,
        dest_type: type,
        *,
        config_name: str = DEFAULT_CONFIG,
    ) -> Callable[[Callable[[Any, Any], Any]], Callable[[Any, Any], Any]]:
        """Decorator form of register(). Returns the function unchanged.

        Usage:
            @configuration.override(Person, PersonDto, config_name="Upper")
            def upper(src, dst):
                dst.name = src.name.upper()
        """

        def decorator(fn: Callable[[Any, Any], Any]) -> Callable[[Any, Any], Any]:
            self.register(config_name, source_type, dest_type, fn)
            return fn

        return decorator

    def resolve(self, config_name: str) -> tuple[OverrideEntry, ...]:
        """Get the entries of a configuration in registration order.

        Args:
            config_name: Configuration name to look up.

        Returns:
            The entries, or an empty tuple if the name is unknown.
        """
        with self._lock:
            entries = self._named.get(config_name)
            if entries is None:
                return ()
            return tuple(entries)

    def names(self) -> list[str]:
        """Configuration names in first-registration order."""
        with self._lock:
            return list(self._named)

    def freeze(self) -> None:
        """Make the configuration read-only. Idempotent."""
        with self._lock:
            if not self._frozen:
                logger.debug("Freezing mapping configuration with names %s", list(self._named))
            self._frozen = True

    @property
    def frozen(self) -> bool:
        return self._frozen

    def __contains__(self, config_name: object) -> bool:
        with self._lock:
            return config_name in self._named

    def __len__(self) -> int:
        with self._lock:
            return len(self._named)
