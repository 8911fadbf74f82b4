"""Provider-agnostic exceptions raised by inventory and identity lookups."""

from __future__ import annotations


class ProviderError(Exception):
    """Base class for cloud provider failures."""


class CredentialError(ProviderError):
    """Cloud credentials are missing, expired or rejected.

    Parameters
    ----------
    message : str
        Description of the failure
    error_code : str | None
        Provider error code, if the provider returned one
    """

    def __init__(self, message: str, error_code: str | None = None) -> None:
        super().__init__(message)
        self.error_code = error_code


class ProviderQueryError(ProviderError):
    """An inventory query failed in transport or at the provider API.

    Parameters
    ----------
    message : str
        Description of the failure
    error_code : str | None
        Provider error code, if the provider returned one
    """

    def __init__(self, message: str, error_code: str | None = None) -> None:
        super().__init__(message)
        self.error_code = error_code


__all__ = ["ProviderError", "CredentialError", "ProviderQueryError"]
