"""Protocols for the external tools the core drives."""

from __future__ import annotations

from collections.abc import Sequence
from typing import Protocol

from awsssh.core.models import InstanceRecord


class InventoryProvider(Protocol):
    """Source of instance inventory."""

    def fetch(self, tag_key: str, tag_value_pattern: str) -> list[InstanceRecord]:
        """Return instances matching the tag filter."""
        ...


class Selector(Protocol):
    """Interactive picker over inventory rows."""

    def select(
        self, records: Sequence[InstanceRecord], multi: bool = False
    ) -> list[InstanceRecord]:
        """Return the picked records; empty when the operator cancelled."""
        ...


class Multiplexer(Protocol):
    """Persistent terminal workspace with named windows."""

    def session_exists(self, session: str) -> bool:
        """Return True if the named session exists."""
        ...

    def create_session(self, session: str) -> None:
        """Create a detached session."""
        ...

    def window_names(self, session: str) -> set[str]:
        """Return the names of all windows in the session."""
        ...

    def window_exists(self, session: str, name: str) -> bool:
        """Return True if a window with exactly this name exists."""
        ...

    def create_window(self, session: str, name: str, command: str) -> None:
        """Open a window running ``command`` without waiting for it."""
        ...

    def attach(self, session: str) -> None:
        """Bring the operator's terminal into the session."""
        ...


__all__ = ["InventoryProvider", "Selector", "Multiplexer"]
