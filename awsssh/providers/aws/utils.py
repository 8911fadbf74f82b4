"""AWS-specific utility functions for awsssh."""

from __future__ import annotations

from collections.abc import Iterable
from typing import Any

from awsssh.constants import ABSENT_SENTINEL


def tag_value(tags: Iterable[dict[str, str]] | None, key: str) -> str | None:
    """Return the value of tag ``key`` from an EC2 tag list.

    Parameters
    ----------
    tags : Iterable[dict[str, str]] | None
        ``Tags`` list from a describe_instances response
    key : str
        Tag key to look up

    Returns
    -------
    str | None
        Tag value, or None if the tag is not present
    """
    for tag in tags or []:
        if tag.get("Key") == key:
            return tag.get("Value")
    return None


def absent_to_none(value: Any) -> str | None:
    """Normalize missing values to None.

    EC2 reports a missing public DNS name as an empty string and the AWS CLI
    prints missing values as ``None``; both are treated as absent.
    """
    if value is None:
        return None

    text = str(value).strip()
    if not text or text == ABSENT_SENTINEL:
        return None
    return text


def build_session_kwargs(profile: str | None, region: str | None) -> dict[str, str]:
    """Build keyword arguments for ``boto3.Session`` from optional values."""
    kwargs: dict[str, str] = {}
    if profile:
        kwargs["profile_name"] = profile
    if region:
        kwargs["region_name"] = region
    return kwargs


def get_aws_credentials_error_message() -> str:
    """Get standard AWS credentials error message.

    Returns
    -------
    str
        Formatted AWS credentials error message
    """
    return (
        "AWS credentials not found\n\n"
        "Set AWS_PROFILE or pass a profile in ~/.awsssh.yaml, then sign in:\n"
        "  aws sso login\n"
        "  aws configure sso\n\n"
        "Or configure static credentials:\n"
        "  aws configure"
    )
