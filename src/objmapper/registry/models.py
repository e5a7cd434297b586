"""Registry models: override entries."""

from __future__ import annotations

import threading
from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Any


@dataclass(slots=True, eq=False)
class OverrideEntry:
    """An override function tagged with the (source type, destination type) it applies to.

    The function is never replaced once registered; only usage_count changes.
    """

    source_type: type
    dest_type: type
    fn: Callable[[Any, Any], Any] | None = None
    usage_count: int = 0
    """Successful invocations so far. Observability only."""

    _lock: threading.Lock = field(default_factory=threading.Lock, init=False, repr=False)

    def applies_to(self, source_type: type, dest_type: type) -> bool:
        """Check whether this entry targets exactly the given type pair."""
        return self.source_type is source_type and self.dest_type is dest_type

    def invoke(self, source: Any, destination: Any) -> None:
        """Run the override against (source, destination) and count the use.

        Entries registered without a function do nothing and are not counted.
        Exceptions from the function propagate and the use is not counted.
        """
        if self.fn is None:
            return
        self.fn(source, destination)
        with self._lock:
            self.usage_count += 1
