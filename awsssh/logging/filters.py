"""Logging filters for stream routing."""

import logging


class StreamRoutingFilter(logging.Filter):
    """Route log records to stdout or stderr by level.

    Informational records go to stdout; warnings and errors go to stderr so
    diagnostics stay visible when stdout is redirected.

    Parameters
    ----------
    stream : str
        ``"stdout"`` or ``"stderr"``
    """

    def __init__(self, stream: str) -> None:
        super().__init__()
        if stream not in ("stdout", "stderr"):
            raise ValueError(f"Unknown stream: {stream}")
        self.stream = stream

    def filter(self, record: logging.LogRecord) -> bool:
        """Return True if the record belongs on this filter's stream.

        Parameters
        ----------
        record : logging.LogRecord
            Log record to check

        Returns
        -------
        bool
            Whether the handler should emit the record
        """
        if self.stream == "stderr":
            return record.levelno >= logging.WARNING
        return record.levelno < logging.WARNING
