"""Connection launcher entry point run inside each workspace window."""

from __future__ import annotations

import logging
import shlex
import sys

import fire

from awsssh.constants import ConnectionMode
from awsssh.core.launcher import ConnectionLauncher
from awsssh.core.models import InstanceRecord
from awsssh.core.table import decode_record, encode_record
from awsssh.logging import configure_logging

logger = logging.getLogger(__name__)

KEEP_ALIVE = 'exec "${SHELL:-/bin/sh}"'


def _fire_literal(value: str) -> str:
    # fire evaluates arguments as Python literals; a repr round-trips exactly
    return repr(str(value))


def build_window_command(
    record: InstanceRecord,
    mode: ConnectionMode | str,
    username: str,
    region: str,
    profile: str | None = None,
) -> str:
    """Shell command a workspace window runs for ``record``.

    The launcher runs first; the window's shell is kept alive afterwards so
    the operator can read its output or retry.

    Parameters
    ----------
    record : InstanceRecord
        Instance the window connects to
    mode : ConnectionMode | str
        Connection mode
    username : str
        Remote login user
    region : str
        Region of the instance
    profile : str | None
        Named AWS profile for SSM, if any

    Returns
    -------
    str
        Command line for ``sh -c``
    """
    mode_value = mode.value if isinstance(mode, ConnectionMode) else str(mode)
    args = [
        sys.executable,
        "-m",
        "awsssh.cli.connect",
        f"--line={_fire_literal(encode_record(record))}",
        f"--mode={_fire_literal(mode_value)}",
        f"--username={_fire_literal(username)}",
        f"--region={_fire_literal(region)}",
    ]
    if profile:
        args.append(f"--profile={_fire_literal(profile)}")

    return f"{shlex.join(args)}; {KEEP_ALIVE}"


def connect_line(
    line: str,
    mode: str,
    username: str,
    region: str,
    profile: str | None = None,
) -> int:
    """Decode one inventory row and connect to it.

    Parameters
    ----------
    line : str
        Encoded inventory row
    mode : str
        ``ssh`` or ``ssm``
    username : str
        Remote login user
    region : str
        Region of the instance
    profile : str | None
        Named AWS profile for SSM, if any

    Returns
    -------
    int
        ssh exit status, or 1 if the connection was aborted
    """
    record = decode_record(str(line))
    launcher = ConnectionLauncher(
        region=str(region), profile=str(profile) if profile else None
    )
    result = launcher.connect(record, str(mode), str(username))

    if not result.connected:
        return 1
    return result.exit_code or 0


def _connect_and_exit(
    line: str,
    mode: str,
    username: str,
    region: str,
    profile: str | None = None,
) -> None:
    sys.exit(connect_line(line, mode, username, region, profile))


def main() -> None:
    configure_logging()
    fire.Fire(_connect_and_exit, name="awsssh-connect")


if __name__ == "__main__":
    main()
