"""tmux workspace backend.

Session and window queries go through libtmux. Attaching needs the
operator's terminal, so it runs the tmux binary directly with inherited
stdio.
"""

from __future__ import annotations

import logging
import os
import shutil
import subprocess
from collections.abc import Callable
from typing import Any

import libtmux
from libtmux.exc import LibTmuxException

from awsssh.core.errors import WorkspaceError

logger = logging.getLogger(__name__)


def is_tmux_available(tmux_binary: str = "tmux") -> bool:
    return shutil.which(tmux_binary) is not None


class TmuxWorkspace:
    """Persistent tmux session holding one window per connection.

    Parameters
    ----------
    server : libtmux.Server | None
        tmux server handle. If None, connects to the default server
    runner : Callable[..., Any] | None
        Function used for the interactive attach. Defaults to
        ``subprocess.run``
    inside_tmux : bool | None
        Whether the operator is already inside tmux. If None, detected from
        the ``TMUX`` environment variable
    tmux_binary : str
        Name or path of the tmux executable
    """

    def __init__(
        self,
        server: libtmux.Server | None = None,
        runner: Callable[..., Any] | None = None,
        inside_tmux: bool | None = None,
        tmux_binary: str = "tmux",
    ) -> None:
        self.server = server or libtmux.Server()
        self.runner = runner or subprocess.run
        self.inside_tmux = (
            bool(os.environ.get("TMUX")) if inside_tmux is None else inside_tmux
        )
        self.tmux_binary = tmux_binary

    def _get_session(self, session: str) -> libtmux.Session:
        try:
            found = self.server.sessions.get(session_name=session, default=None)
        except LibTmuxException as e:
            raise WorkspaceError(f"Failed to query tmux sessions: {e}") from e

        if found is None:
            raise WorkspaceError(f"tmux session {session} does not exist")
        return found

    def session_exists(self, session: str) -> bool:
        try:
            return self.server.has_session(session)
        except LibTmuxException as e:
            logger.debug("tmux has-session failed for %s: %s", session, e)
            return False

    def create_session(self, session: str) -> None:
        try:
            self.server.new_session(session_name=session, attach=False)
        except LibTmuxException as e:
            raise WorkspaceError(f"Failed to create tmux session {session}: {e}") from e

    def window_names(self, session: str) -> set[str]:
        return {
            window.window_name
            for window in self._get_session(session).windows
            if window.window_name
        }

    def window_exists(self, session: str, name: str) -> bool:
        return name in self.window_names(session)

    def create_window(self, session: str, name: str, command: str) -> None:
        """Open a detached window that runs ``command``.

        Raises
        ------
        WorkspaceError
            If tmux refused to create the window
        """
        tmux_session = self._get_session(session)
        try:
            tmux_session.new_window(
                window_name=name,
                window_shell=command,
                attach=False,
            )
        except LibTmuxException as e:
            raise WorkspaceError(f"Failed to create window {name}: {e}") from e

    def attach(self, session: str) -> None:
        """Attach to ``session``, or switch to it when already inside tmux.

        Raises
        ------
        WorkspaceError
            If tmux could not attach
        """
        verb = "switch-client" if self.inside_tmux else "attach-session"
        try:
            completed = self.runner([self.tmux_binary, verb, "-t", session], check=False)
        except OSError as e:
            raise WorkspaceError(f"Failed to run {self.tmux_binary}: {e}") from e

        if completed.returncode != 0:
            raise WorkspaceError(
                f"tmux {verb} -t {session} exited with status {completed.returncode}"
            )
