"""Fan multi-select results out into tmux windows."""

from __future__ import annotations

import logging
from collections.abc import Callable, Sequence

from awsssh.constants import ConnectionMode
from awsssh.core.errors import DuplicateWindow, WorkspaceError
from awsssh.core.interfaces import Multiplexer
from awsssh.core.models import InstanceRecord, LaunchReport

logger = logging.getLogger(__name__)

WindowCommandBuilder = Callable[[InstanceRecord, ConnectionMode | str, str], str]


class WorkspaceOrchestrator:
    """Open one workspace window per selected instance.

    Each window runs the connection launcher for its instance. Windows are
    dispatched and left running; the orchestrator only confirms creation.

    Parameters
    ----------
    multiplexer : Multiplexer
        Workspace backend (tmux in production)
    session_name : str
        Name of the persistent workspace session
    command_builder : WindowCommandBuilder
        Returns the shell command a window runs for a record, mode and user
    """

    def __init__(
        self,
        multiplexer: Multiplexer,
        session_name: str,
        command_builder: WindowCommandBuilder,
    ) -> None:
        self.multiplexer = multiplexer
        self.session_name = session_name
        self.command_builder = command_builder

    def ensure_session(self) -> bool:
        """Create the workspace session if it does not exist.

        Returns
        -------
        bool
            True if the session was created by this call
        """
        if self.multiplexer.session_exists(self.session_name):
            logger.debug("Reusing workspace session %s", self.session_name)
            return False

        logger.info("Creating workspace session %s", self.session_name)
        self.multiplexer.create_session(self.session_name)
        return True

    def open_window(
        self, record: InstanceRecord, mode: ConnectionMode | str, username: str
    ) -> str:
        """Open the window for one record.

        Parameters
        ----------
        record : InstanceRecord
            Instance to connect to
        mode : ConnectionMode | str
            Connection mode passed to the launcher
        username : str
            Remote login user passed to the launcher

        Returns
        -------
        str
            Name of the created window

        Raises
        ------
        DuplicateWindow
            If a window with the same name is already open
        WorkspaceError
            If the multiplexer failed to create the window
        """
        window_name = record.window_name

        if self.multiplexer.window_exists(self.session_name, window_name):
            raise DuplicateWindow(window_name)

        command = self.command_builder(record, mode, username)
        self.multiplexer.create_window(self.session_name, window_name, command)
        logger.info("Opened window %s", window_name)
        return window_name

    def launch_all(
        self,
        records: Sequence[InstanceRecord],
        mode: ConnectionMode | str,
        username: str,
    ) -> LaunchReport:
        """Open windows for all records, then attach to the workspace.

        Duplicates and per-window failures are reported and skipped so one
        bad selection never blocks the rest.

        Parameters
        ----------
        records : Sequence[InstanceRecord]
            Selected instances in selection order
        mode : ConnectionMode | str
            Connection mode for every window
        username : str
            Remote login user for every window

        Returns
        -------
        LaunchReport
            Created, duplicate and failed window names
        """
        report = LaunchReport()
        report.session_created = self.ensure_session()

        for record in records:
            try:
                report.created.append(self.open_window(record, mode, username))
            except DuplicateWindow as e:
                logger.warning("%s", e)
                report.duplicates.append(e.window_name)
            except WorkspaceError as e:
                logger.error(
                    "Failed to open window for %s (%s): %s",
                    record.display_name,
                    record.instance_id,
                    e,
                )
                report.failed.append(record.window_name)

        self.multiplexer.attach(self.session_name)
        report.attached = True
        return report
