"""Cloud provider integrations."""

from __future__ import annotations

from awsssh.providers.exceptions import (
    CredentialError,
    ProviderError,
    ProviderQueryError,
)

__all__ = [
    "ProviderError",
    "CredentialError",
    "ProviderQueryError",
]
