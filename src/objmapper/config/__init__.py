"""Configuration module using Pydantic Settings.

Usage:
    from objmapper.config import MapperSettings

    settings = MapperSettings(max_depth=16)
"""

from objmapper.config.settings import MapperSettings

__all__ = [
    "MapperSettings",
]
