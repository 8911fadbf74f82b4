"""Global constants for awsssh.

This module contains application-wide constants shared by the inventory,
selection and connection components.
"""

from enum import Enum

DEFAULT_TAG_KEY = "Name"
"""Tag key used to filter instances when none is given."""

DEFAULT_TAG_VALUE = "*"
"""Tag value used to filter instances when none is given.

EC2 filters accept ``*`` and ``?`` wildcards, so the default matches every
instance that carries the tag key at all.
"""

DEFAULT_USERNAME = "ec2-user"
"""Remote login user for SSH sessions.

Matches the default account on Amazon Linux AMIs.
"""

DEFAULT_SESSION_NAME = "awsssh"
"""Name of the persistent tmux session that hosts multi-select windows."""

DEFAULT_CONFIG_PATH = "~/.awsssh.yaml"
"""Location of the optional YAML configuration file.

Overridden by the ``AWSSSH_CONFIG`` environment variable.
"""

WINDOW_NAME_PREFIX = "ssh"
"""Prefix of every workspace window name (``ssh:<name>:<instance-id>``).

Existing windows are matched by exact name, so changing this breaks
deduplication against windows opened by earlier runs.
"""

ABSENT_SENTINEL = "None"
"""Literal the AWS CLI text output uses for missing values."""

SSM_SSH_DOCUMENT = "AWS-StartSSHSession"
"""SSM document that tunnels an SSH session through Session Manager."""

FZF_EXIT_NO_MATCH = 1
"""fzf exit status when the query matched nothing."""

FZF_EXIT_INTERRUPTED = 130
"""fzf exit status when the operator pressed Esc or Ctrl-C."""

EXIT_SUCCESS = 0
"""Exit code indicating successful program completion."""

EXIT_ERROR = 1
"""Exit code indicating a general application error.

Used for credential failures, provider query failures and broken external
tools.
"""

EXIT_CONFIG_ERROR = 2
"""Exit code indicating a configuration or argument error.

Raised before any query runs, so nothing external has been touched.
"""


class InstanceStatus(str, Enum):
    """EC2 instance lifecycle states."""

    PENDING = "pending"
    RUNNING = "running"
    SHUTTING_DOWN = "shutting-down"
    STOPPING = "stopping"
    STOPPED = "stopped"
    TERMINATED = "terminated"


class ConnectionMode(str, Enum):
    """How a remote shell reaches the instance."""

    SSH = "ssh"
    SSM = "ssm"
