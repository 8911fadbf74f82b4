"""Logging setup for the awsssh command line."""

import logging
import sys

from awsssh.logging.filters import StreamRoutingFilter

QUIET_LOGGERS = ("botocore", "boto3", "urllib3", "libtmux")


def configure_logging(level: int = logging.INFO) -> None:
    """Install stdout/stderr handlers on the root logger.

    Parameters
    ----------
    level : int
        Root log level
    """
    stdout_handler = logging.StreamHandler(sys.stdout)
    stdout_handler.setFormatter(logging.Formatter("%(message)s"))
    stdout_handler.addFilter(StreamRoutingFilter("stdout"))

    stderr_handler = logging.StreamHandler(sys.stderr)
    stderr_handler.setFormatter(logging.Formatter("%(message)s"))
    stderr_handler.addFilter(StreamRoutingFilter("stderr"))

    logging.basicConfig(
        level=level,
        handlers=[stdout_handler, stderr_handler],
        force=True,
    )

    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)


__all__ = ["StreamRoutingFilter", "configure_logging"]
