"""Configuration settings using Pydantic Settings.

Provides typed mapper configuration with environment variable support.

Usage:
    from objmapper.config import MapperSettings

    # Load from environment variables (OBJMAPPER_*)
    settings = MapperSettings()

    # Or override with explicit values
    settings = MapperSettings(max_depth=16, strict_types=False)
"""

from __future__ import annotations

try:
    from pydantic_settings import BaseSettings, SettingsConfigDict
except ImportError as e:
    raise ImportError(
        "pydantic-settings is required for config module. Install with: pip install objmapper"
    ) from e

from objmapper.core.types import DEFAULT_CONFIG


class MapperSettings(BaseSettings):  # type: ignore[misc]
    """Configuration for the mapping engine.

    Attributes:
        default_config_name: Configuration used when a call names none.
        max_depth: Maximum nesting depth of structured fields (None = unbounded).
        strict_types: Raise TypeMismatchError on incompatible assignments.
        freeze_configuration: Freeze the mapping configuration when a Mapper is built.

    Environment Variables:
        OBJMAPPER_DEFAULT_CONFIG_NAME
        OBJMAPPER_MAX_DEPTH
        OBJMAPPER_STRICT_TYPES
        OBJMAPPER_FREEZE_CONFIGURATION
    """

    model_config = SettingsConfigDict(
        env_prefix="OBJMAPPER_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    default_config_name: str = DEFAULT_CONFIG
    max_depth: int | None = None
    strict_types: bool = True
    freeze_configuration: bool = False
