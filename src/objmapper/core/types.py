"""Core type definitions for objmapper."""

from collections.abc import Callable
from typing import Any

DEFAULT_CONFIG = "Default"
"""Reserved configuration name meaning "no custom configuration"."""

type Override[S, D] = Callable[[S, D], Any]
"""Override function signature: (source, destination) -> ignored.

Overrides mutate the destination in place after the automatic copy. Any
return value is discarded.
"""
