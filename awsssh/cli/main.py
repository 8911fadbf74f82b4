"""CLI entry point for awsssh."""

from __future__ import annotations

import logging
import os
import sys

import fire

from awsssh.__main__ import AwsSsh
from awsssh.constants import EXIT_CONFIG_ERROR, EXIT_ERROR
from awsssh.core.errors import SelectorError, WorkspaceError
from awsssh.logging import configure_logging
from awsssh.providers.aws.utils import get_aws_credentials_error_message
from awsssh.providers.exceptions import CredentialError, ProviderQueryError

logger = logging.getLogger(__name__)


class AwsSshCLI(AwsSsh):
    """CLI wrapper that turns the flow's return value into a process exit code."""

    def run(
        self,
        region: str | None = None,
        tag_key: str | None = None,
        tag_value: str | None = None,
        connection: str | None = None,
        username: str | None = None,
        *args: str,
        **unknown: str,
    ) -> None:
        """Select EC2 instances by tag and open shells on them.

        Parameters
        ----------
        region : str | None
            AWS region to search
        tag_key : str | None
            Tag key to filter on (default: Name)
        tag_value : str | None
            Tag value to match; * and ? are wildcards (default: *)
        connection : str | None
            ssh for direct connections, ssm for Session Manager (default: ssh)
        username : str | None
            Remote login user (default: ec2-user)

        Raises
        ------
        ValueError
            If the command line carries positional arguments or flags other
            than the ones above
        """
        unrecognized = [str(arg) for arg in args]
        unrecognized += [f"--{key.replace('_', '-')}" for key in unknown]
        if unrecognized:
            raise ValueError(f"Unrecognized option(s): {', '.join(unrecognized)}")

        sys.exit(
            super().run(
                region=region,
                tag_key=tag_key,
                tag_value=tag_value,
                connection=connection,
                username=username,
            )
        )


def handle_credentials_error(error: CredentialError, debug_mode: bool) -> None:
    """Handle missing or rejected credentials.

    Parameters
    ----------
    error : CredentialError
        The credentials error that was raised
    debug_mode : bool
        Whether debug mode is enabled

    Raises
    ------
    CredentialError
        Re-raised if debug mode is enabled
    """
    if debug_mode:
        raise error

    logger.debug("Credential check failed: %s", error)
    print(get_aws_credentials_error_message(), file=sys.stderr)

    if error.error_code in ("ExpiredToken", "ExpiredTokenException", "RequestExpired"):
        print("\nYour session has expired. Run 'aws sso login' again.", file=sys.stderr)

    sys.exit(EXIT_ERROR)


def handle_query_error(error: ProviderQueryError, debug_mode: bool) -> None:
    """Report a failed inventory query verbatim.

    Parameters
    ----------
    error : ProviderQueryError
        The query error that was raised
    debug_mode : bool
        Whether debug mode is enabled

    Raises
    ------
    ProviderQueryError
        Re-raised if debug mode is enabled
    """
    if debug_mode:
        raise error

    if error.error_code == "UnauthorizedOperation":
        print("Insufficient IAM permissions\n", file=sys.stderr)
        print("Your credentials need ec2:DescribeInstances.", file=sys.stderr)
    else:
        print(f"AWS query failed: {error}", file=sys.stderr)

    sys.exit(EXIT_ERROR)


def handle_value_error(error: ValueError, debug_mode: bool) -> None:
    if debug_mode:
        raise error

    print(f"Configuration error: {error}", file=sys.stderr)
    sys.exit(EXIT_CONFIG_ERROR)


def handle_tool_error(error: Exception, debug_mode: bool) -> None:
    """Report a failure of fzf, tmux or ssh.

    Parameters
    ----------
    error : Exception
        SelectorError, WorkspaceError or OSError
    debug_mode : bool
        Whether debug mode is enabled

    Raises
    ------
    Exception
        Re-raised if debug mode is enabled
    """
    if debug_mode:
        raise error

    print(f"Error: {error}", file=sys.stderr)
    sys.exit(EXIT_ERROR)


def main() -> None:
    """Entry point for the fire CLI with graceful error handling.

    fire maps the ``run`` method's parameters to ``--region``,
    ``--tag-key``, ``--tag-value``, ``--connection`` and ``--username``.
    Any other flag is rejected as a configuration error before the flow
    starts.
    """
    configure_logging()

    debug_mode = os.environ.get("AWSSSH_DEBUG") == "1"

    try:
        fire.Fire(AwsSshCLI().run, name="awsssh")
    except CredentialError as e:
        handle_credentials_error(e, debug_mode)
    except ProviderQueryError as e:
        handle_query_error(e, debug_mode)
    except ValueError as e:
        handle_value_error(e, debug_mode)
    except (SelectorError, WorkspaceError, OSError) as e:
        handle_tool_error(e, debug_mode)
    except KeyboardInterrupt:
        print("", file=sys.stderr)
        sys.exit(130)
