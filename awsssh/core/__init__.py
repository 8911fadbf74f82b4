"""Core awsssh functionality."""

from __future__ import annotations

from awsssh.core.interfaces import InventoryProvider, Multiplexer, Selector
from awsssh.core.models import (
    ConnectionOutcome,
    ConnectionResult,
    ConnectionSpec,
    InstanceRecord,
    LaunchReport,
)

__all__ = [
    "ConnectionOutcome",
    "ConnectionResult",
    "ConnectionSpec",
    "InstanceRecord",
    "InventoryProvider",
    "LaunchReport",
    "Multiplexer",
    "Selector",
]
