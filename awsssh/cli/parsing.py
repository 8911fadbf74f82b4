"""CLI argument resolution and interactive prompts."""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

from awsssh.constants import DEFAULT_SESSION_NAME
from awsssh.core.models import ConnectionSpec, parse_connection_mode


def prompt_with_default(
    label: str,
    default: str | None,
    input_func: Callable[[str], str] = input,
) -> str | None:
    """Ask for a value, falling back to ``default`` on empty input.

    Parameters
    ----------
    label : str
        Prompt label, e.g. ``"AWS region"``
    default : str | None
        Value used when the operator just presses Enter
    input_func : Callable[[str], str]
        Function that reads one line (``input`` by default)

    Returns
    -------
    str | None
        Entered value, or the default
    """
    try:
        answer = input_func(f"Enter {label} [{default or ''}]: ")
    except EOFError:
        answer = ""

    answer = answer.strip()
    return answer or default


def flag_value(value: Any) -> str | None:
    """Normalize a fire-parsed flag value to a string.

    fire evaluates flag values as Python literals, so ``--username=123``
    arrives as an int.
    """
    if value is None or value is True or value is False:
        return None
    text = str(value).strip()
    return text or None


def build_connection_spec(
    settings: dict[str, Any],
    region: Any = None,
    tag_key: Any = None,
    tag_value: Any = None,
    connection: Any = None,
    username: Any = None,
    default_region_getter: Callable[[], str | None] | None = None,
    input_func: Callable[[str], str] = input,
) -> ConnectionSpec:
    """Combine flags, config settings and prompts into a ConnectionSpec.

    When no flag is supplied every value is prompted for, with the config
    value (or built-in default) shown as the default. When at least one flag
    is supplied, missing values fall back to their defaults silently.

    Parameters
    ----------
    settings : dict[str, Any]
        Merged configuration from :class:`ConfigLoader`
    region, tag_key, tag_value, connection, username : Any
        Raw flag values from the command line
    default_region_getter : Callable[[], str | None] | None
        Fallback for the region when neither flag nor config sets one
    input_func : Callable[[str], str]
        Function that reads one line of operator input

    Returns
    -------
    ConnectionSpec
        Resolved, validated connection intent

    Raises
    ------
    ValueError
        If no region can be determined or the connection mode is invalid
    """
    flags = {
        "region": flag_value(region),
        "tag_key": flag_value(tag_key),
        "tag_value": flag_value(tag_value),
        "connection": flag_value(connection),
        "username": flag_value(username),
    }

    defaults = {key: settings.get(key) for key in flags}
    if not defaults["region"] and default_region_getter is not None:
        defaults["region"] = default_region_getter()

    labels = {
        "region": "AWS region",
        "tag_key": "tag key",
        "tag_value": "tag value",
        "connection": "connection type (ssh/ssm)",
        "username": "username",
    }

    interactive = all(value is None for value in flags.values())
    values: dict[str, str | None] = {}

    for key, value in flags.items():
        if value is not None:
            values[key] = value
        elif interactive:
            values[key] = prompt_with_default(labels[key], defaults[key], input_func)
        else:
            values[key] = defaults[key]

    if not values["region"]:
        raise ValueError(
            "No AWS region specified. Pass --region or set a default with "
            "'aws configure set region <region>'"
        )

    for key in ("tag_key", "tag_value", "username"):
        if not values[key]:
            raise ValueError(f"{labels[key].capitalize()} must not be empty")

    mode = parse_connection_mode(values["connection"] or "")

    return ConnectionSpec(
        region=values["region"],
        tag_key=values["tag_key"],
        tag_value=values["tag_value"],
        mode=mode,
        username=values["username"],
        profile=settings.get("profile"),
        session_name=settings.get("session_name") or DEFAULT_SESSION_NAME,
    )


__all__ = ["build_connection_spec", "flag_value", "prompt_with_default"]
