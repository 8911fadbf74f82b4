"""Credential presence check performed before any inventory query."""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import Any

import boto3

from awsssh.providers.aws.errors import handle_aws_errors
from awsssh.providers.aws.utils import build_session_kwargs

logger = logging.getLogger(__name__)


def verify_credentials(
    profile: str | None = None,
    region: str | None = None,
    boto3_client_factory: Callable[..., Any] | None = None,
) -> dict[str, Any]:
    """Confirm the active credentials are accepted by AWS.

    Parameters
    ----------
    profile : str | None
        Named AWS profile, or None for the default credential chain
    region : str | None
        Region for the STS endpoint
    boto3_client_factory : Callable[..., Any] | None
        Optional factory for creating the STS client (for testing)

    Returns
    -------
    dict[str, Any]
        Caller identity with ``Account``, ``Arn`` and ``UserId`` keys

    Raises
    ------
    CredentialError
        If no usable credentials are available
    ProviderQueryError
        If STS could not be reached or failed for another reason
    """
    with handle_aws_errors():
        if boto3_client_factory is None:
            session = boto3.Session(**build_session_kwargs(profile, region))
            boto3_client_factory = session.client

        sts_client = boto3_client_factory("sts", region_name=region)
        identity = sts_client.get_caller_identity()

    logger.debug("Authenticated as %s", identity.get("Arn"))
    return identity


def default_region(profile: str | None = None) -> str | None:
    """Return the region configured for ``profile`` in the AWS config, if any."""
    with handle_aws_errors():
        session = boto3.Session(**build_session_kwargs(profile, None))
    return session.region_name
