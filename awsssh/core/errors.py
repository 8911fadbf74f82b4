"""Exceptions raised by the selection and connection components."""

from __future__ import annotations


class AwsSshError(Exception):
    """Base class for awsssh errors that are not provider errors."""


class TableFormatError(ValueError):
    """A line could not be decoded as an inventory row."""


class SelectorError(AwsSshError):
    """The fuzzy finder is missing or failed unexpectedly."""


class WorkspaceError(AwsSshError):
    """The terminal multiplexer rejected an operation."""


class ConnectionAborted(AwsSshError):
    """Base class for per-instance outcomes that abort a single connection.

    Parameters
    ----------
    name : str
        Display name of the instance
    instance_id : str
        Instance identifier
    reason : str
        Short machine-friendly reason
    """

    def __init__(self, name: str, instance_id: str, reason: str, message: str) -> None:
        super().__init__(message)
        self.name = name
        self.instance_id = instance_id
        self.reason = reason


class InstanceNotRunning(ConnectionAborted):
    """The selected instance is not in the ``running`` state."""

    def __init__(self, name: str, instance_id: str, status: str) -> None:
        super().__init__(
            name,
            instance_id,
            reason=status,
            message=f"Aborting. Instance {name} ({instance_id}) is {status or 'unknown'}.",
        )
        self.status = status


class UnsupportedConnection(ConnectionAborted):
    """The instance lacks the address the requested connection mode needs."""

    def __init__(self, name: str, instance_id: str, mode: str, detail: str) -> None:
        super().__init__(
            name,
            instance_id,
            reason="unsupported",
            message=(
                f"Unable to connect to {name} ({instance_id}) using {mode}: {detail}."
            ),
        )
        self.mode = mode


class DuplicateWindow(AwsSshError):
    """A workspace window with the same name is already open."""

    def __init__(self, window_name: str) -> None:
        super().__init__(f"Window {window_name} already exists, skipping.")
        self.window_name = window_name


__all__ = [
    "AwsSshError",
    "ConnectionAborted",
    "DuplicateWindow",
    "InstanceNotRunning",
    "SelectorError",
    "TableFormatError",
    "UnsupportedConnection",
    "WorkspaceError",
]
