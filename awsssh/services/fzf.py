"""Interactive instance picker backed by fzf."""

from __future__ import annotations

import logging
import shlex
import shutil
import subprocess
import sys
from collections.abc import Callable, Sequence
from typing import Any

from awsssh.constants import FZF_EXIT_INTERRUPTED, FZF_EXIT_NO_MATCH
from awsssh.core.errors import SelectorError, TableFormatError
from awsssh.core.models import InstanceRecord
from awsssh.core.table import (
    FIELD_SEPARATOR,
    SEARCHABLE_COLUMNS,
    decode_record,
    encode_table,
    is_header,
)

logger = logging.getLogger(__name__)

KEY_HINTS = "Select (Enter), Toggle Details (Ctrl-/), Quit (Ctrl-C or ESC)"
MULTI_KEY_HINTS = (
    "Mark (Tab), Select (Enter), Toggle Details (Ctrl-/), Quit (Ctrl-C or ESC)"
)


def default_preview_command() -> str:
    """Command fzf runs to render the detail pane for the highlighted row."""
    return f"{shlex.quote(sys.executable)} -m awsssh.cli.preview {{}}"


class FzfSelector:
    """Pick instances from the inventory table with fzf.

    Only the first five columns are searchable; the preview pane shows the
    full row.

    Parameters
    ----------
    fzf_binary : str
        Name or path of the fzf executable
    preview_command : str | None
        Shell command for the preview pane, with ``{}`` standing for the
        highlighted line. Defaults to :func:`default_preview_command`
    runner : Callable[..., Any] | None
        Function used to run fzf. Defaults to ``subprocess.run``
    height : str
        Value for fzf ``--height``
    """

    def __init__(
        self,
        fzf_binary: str = "fzf",
        preview_command: str | None = None,
        runner: Callable[..., Any] | None = None,
        height: str = "40%",
    ) -> None:
        self.fzf_binary = fzf_binary
        self.preview_command = preview_command or default_preview_command()
        self.runner = runner or subprocess.run
        self.height = height

    def build_command(self, multi: bool = False) -> list[str]:
        searchable = ",".join(str(i) for i in range(1, SEARCHABLE_COLUMNS + 1))
        command = [
            self.fzf_binary,
            f"--height={self.height}",
            "--layout=reverse",
            "--border",
            "--border-label=EC2 Instances",
            "--info=default",
            "--prompt=Search Instance: ",
            f"--header={MULTI_KEY_HINTS if multi else KEY_HINTS}",
            "--header-lines=1",
            "--bind=ctrl-/:toggle-preview",
            "--preview-window=right:40%:wrap",
            "--preview-label=Details",
            f"--preview={self.preview_command}",
            f"--delimiter={FIELD_SEPARATOR}",
            f"--with-nth={searchable}",
        ]
        if multi:
            command.append("--multi")
        return command

    def select(
        self, records: Sequence[InstanceRecord], multi: bool = False
    ) -> list[InstanceRecord]:
        """Let the operator pick one or more records.

        Parameters
        ----------
        records : Sequence[InstanceRecord]
            Inventory to choose from
        multi : bool
            Allow marking several rows

        Returns
        -------
        list[InstanceRecord]
            Picked records in selection order; empty if the operator
            cancelled or there was nothing to pick

        Raises
        ------
        SelectorError
            If fzf is not installed or exits with an unexpected status
        """
        if not records:
            logger.debug("No records to select from")
            return []

        if shutil.which(self.fzf_binary) is None:
            raise SelectorError(
                f"{self.fzf_binary} not found. Install it from "
                "https://github.com/junegunn/fzf and make sure it is on PATH."
            )

        try:
            completed = self.runner(
                self.build_command(multi=multi),
                input=encode_table(records),
                stdout=subprocess.PIPE,
                text=True,
                check=False,
            )
        except OSError as e:
            raise SelectorError(f"Failed to run {self.fzf_binary}: {e}") from e

        if completed.returncode in (FZF_EXIT_INTERRUPTED, FZF_EXIT_NO_MATCH):
            logger.debug("Selection cancelled (fzf exit %s)", completed.returncode)
            return []

        if completed.returncode != 0:
            raise SelectorError(
                f"{self.fzf_binary} exited with status {completed.returncode}"
            )

        by_id = {record.instance_id: record for record in records}
        selected: list[InstanceRecord] = []
        seen: set[str] = set()

        for line in completed.stdout.splitlines():
            if not line.strip() or is_header(line):
                continue
            try:
                picked = decode_record(line)
            except TableFormatError as e:
                logger.warning("Ignoring unparseable selection: %s", e)
                continue
            if picked.instance_id in seen:
                continue
            seen.add(picked.instance_id)
            selected.append(by_id.get(picked.instance_id, picked))

        if not multi:
            return selected[:1]
        return selected
