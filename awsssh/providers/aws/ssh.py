"""AWS-specific SSH command construction."""

from __future__ import annotations

import shlex

from awsssh.constants import SSM_SSH_DOCUMENT


def build_ssm_proxy_command(region: str, profile: str | None = None) -> str:
    """Build the ssh ``ProxyCommand`` that tunnels through Session Manager.

    ssh substitutes ``%h`` with the target host, which is the instance id,
    and ``%p`` with the port.

    Parameters
    ----------
    region : str
        Region of the target instance
    profile : str | None
        Named AWS profile for the ``aws`` CLI, if any

    Returns
    -------
    str
        Value for ``-o ProxyCommand=...``
    """
    parts = [
        "aws",
        "ssm",
        "start-session",
        "--target",
        "%h",
        "--document-name",
        SSM_SSH_DOCUMENT,
        "--parameters",
        "portNumber=%p",
        "--region",
        region,
    ]
    if profile:
        parts.extend(["--profile", profile])

    return " ".join(shlex.quote(part) for part in parts)


def build_ssh_command(username: str, host: str) -> list[str]:
    """Build a direct ``ssh user@host`` command."""
    return ["ssh", f"{username}@{host}"]


def build_ssm_ssh_command(
    username: str,
    instance_id: str,
    region: str,
    profile: str | None = None,
) -> list[str]:
    """Build an ssh command whose transport is an SSM session.

    Parameters
    ----------
    username : str
        Remote login user
    instance_id : str
        Target instance id, used as the ssh host name
    region : str
        Region of the target instance
    profile : str | None
        Named AWS profile for the ``aws`` CLI, if any

    Returns
    -------
    list[str]
        Command suitable for ``subprocess.run``
    """
    return [
        "ssh",
        "-o",
        f"ProxyCommand={build_ssm_proxy_command(region, profile)}",
        f"{username}@{instance_id}",
    ]
