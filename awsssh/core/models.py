"""Value objects passed between the inventory, selector and launcher stages."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

from awsssh.constants import (
    DEFAULT_SESSION_NAME,
    WINDOW_NAME_PREFIX,
    ConnectionMode,
    InstanceStatus,
)


@dataclass(frozen=True)
class InstanceRecord:
    """One row of the instance inventory.

    Field order mirrors the tabular wire format and must not change.

    Attributes
    ----------
    name : str
        Value of the ``Name`` tag, empty when the instance has none
    instance_id : str
        Provider-assigned instance identifier
    private_ip : str | None
        Private IPv4 address
    public_ip : str | None
        Public IPv4 address
    status : str
        Lifecycle state name as reported by EC2
    image_id : str | None
        AMI the instance was launched from
    instance_type : str | None
        Instance type (e.g. ``t3.micro``)
    public_dns : str | None
        Public DNS name, used for direct SSH
    """

    name: str
    instance_id: str
    private_ip: str | None = None
    public_ip: str | None = None
    status: str = ""
    image_id: str | None = None
    instance_type: str | None = None
    public_dns: str | None = None

    def __post_init__(self) -> None:
        if not self.instance_id:
            raise ValueError("InstanceRecord requires a non-empty instance_id")

    @property
    def display_name(self) -> str:
        return self.name or self.instance_id

    @property
    def is_running(self) -> bool:
        return self.status == InstanceStatus.RUNNING.value

    @property
    def window_name(self) -> str:
        """Workspace window name, ``ssh:<name>:<instance-id>``."""
        return f"{WINDOW_NAME_PREFIX}:{self.name}:{self.instance_id}"


@dataclass(frozen=True)
class ConnectionSpec:
    """Operator intent for one invocation."""

    region: str
    tag_key: str
    tag_value: str
    mode: ConnectionMode
    username: str
    profile: str | None = None
    session_name: str = DEFAULT_SESSION_NAME


class ConnectionOutcome(str, Enum):
    """Terminal states of a single connection attempt."""

    CONNECTED = "connected"
    ABORTED = "aborted"


@dataclass(frozen=True)
class ConnectionResult:
    """Result of :meth:`ConnectionLauncher.connect`.

    ``exit_code`` is the remote shell's exit status for connected sessions;
    it is informational only.
    """

    outcome: ConnectionOutcome
    reason: str | None = None
    exit_code: int | None = None

    @property
    def connected(self) -> bool:
        return self.outcome is ConnectionOutcome.CONNECTED


@dataclass
class LaunchReport:
    """What the workspace orchestrator did with a batch of selections."""

    created: list[str] = field(default_factory=list)
    duplicates: list[str] = field(default_factory=list)
    failed: list[str] = field(default_factory=list)
    session_created: bool = False
    attached: bool = False


def parse_connection_mode(value: str | ConnectionMode) -> ConnectionMode:
    """Convert a user-supplied mode string to :class:`ConnectionMode`.

    Parameters
    ----------
    value : str | ConnectionMode
        Mode name, case-insensitive

    Returns
    -------
    ConnectionMode
        Parsed connection mode

    Raises
    ------
    ValueError
        If the mode is not ``ssh`` or ``ssm``
    """
    if isinstance(value, ConnectionMode):
        return value

    normalized = str(value).strip().lower()
    try:
        return ConnectionMode(normalized)
    except ValueError:
        valid = ", ".join(mode.value for mode in ConnectionMode)
        raise ValueError(
            f"Invalid connection mode: '{value}'. Valid modes: {valid}"
        ) from None
