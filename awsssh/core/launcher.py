"""Open a remote shell on one selected instance."""

from __future__ import annotations

import logging
import subprocess
from collections.abc import Callable
from typing import Any

from awsssh.constants import ConnectionMode
from awsssh.core.errors import (
    ConnectionAborted,
    InstanceNotRunning,
    UnsupportedConnection,
)
from awsssh.core.models import (
    ConnectionOutcome,
    ConnectionResult,
    InstanceRecord,
)
from awsssh.providers.aws.ssh import build_ssh_command, build_ssm_ssh_command

logger = logging.getLogger(__name__)


class ConnectionLauncher:
    """Validate instance readiness and run an interactive ssh session.

    A connection attempt checks the instance status first, then dispatches
    on the connection mode. Aborts are reported, never raised, from
    :meth:`connect`.

    Parameters
    ----------
    region : str
        Region of the instances, passed to the SSM proxy
    profile : str | None
        Named AWS profile for the SSM proxy, if any
    runner : Callable[..., Any] | None
        Function used to run the ssh command. Defaults to ``subprocess.run``;
        it must block until the session ends
    """

    def __init__(
        self,
        region: str,
        profile: str | None = None,
        runner: Callable[..., Any] | None = None,
    ) -> None:
        self.region = region
        self.profile = profile
        self.runner = runner or subprocess.run

    def build_command(
        self, record: InstanceRecord, mode: ConnectionMode | str, username: str
    ) -> list[str]:
        """Return the ssh command for ``record`` without running it.

        Parameters
        ----------
        record : InstanceRecord
            Selected instance
        mode : ConnectionMode | str
            ``ssh`` for direct connections, ``ssm`` for Session Manager
        username : str
            Remote login user

        Returns
        -------
        list[str]
            Command line for the remote shell

        Raises
        ------
        InstanceNotRunning
            If the instance status is not ``running``
        UnsupportedConnection
            If the mode is unknown or the instance lacks the address it needs
        """
        if not record.is_running:
            raise InstanceNotRunning(record.display_name, record.instance_id, record.status)

        mode_value = mode.value if isinstance(mode, ConnectionMode) else str(mode)

        if mode_value == ConnectionMode.SSH.value:
            if not record.public_dns:
                raise UnsupportedConnection(
                    record.display_name,
                    record.instance_id,
                    mode_value,
                    "instance has no public DNS name",
                )
            return build_ssh_command(username, record.public_dns)

        if mode_value == ConnectionMode.SSM.value:
            if not record.instance_id:
                raise UnsupportedConnection(
                    record.display_name,
                    record.instance_id,
                    mode_value,
                    "instance has no id",
                )
            return build_ssm_ssh_command(
                username, record.instance_id, self.region, self.profile
            )

        raise UnsupportedConnection(
            record.display_name,
            record.instance_id,
            mode_value,
            "unrecognized connection mode",
        )

    def connect(
        self, record: InstanceRecord, mode: ConnectionMode | str, username: str
    ) -> ConnectionResult:
        """Connect to ``record`` and block until the session ends.

        Parameters
        ----------
        record : InstanceRecord
            Selected instance
        mode : ConnectionMode | str
            ``ssh`` or ``ssm``
        username : str
            Remote login user

        Returns
        -------
        ConnectionResult
            ``CONNECTED`` with the ssh exit code, or ``ABORTED`` with the
            reason (the instance status for non-running instances)

        Raises
        ------
        OSError
            If the ssh binary cannot be executed
        """
        try:
            command = self.build_command(record, mode, username)
        except ConnectionAborted as e:
            logger.warning("%s", e)
            return ConnectionResult(ConnectionOutcome.ABORTED, reason=e.reason)

        target = command[-1]
        logger.info("Connecting to %s...", target.split("@", 1)[-1])

        completed = self.runner(command, check=False)
        exit_code = getattr(completed, "returncode", None)

        if exit_code:
            logger.debug("ssh to %s exited with status %s", record.instance_id, exit_code)

        return ConnectionResult(ConnectionOutcome.CONNECTED, exit_code=exit_code)
