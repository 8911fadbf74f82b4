"""Translation of botocore exceptions into provider exceptions."""

from __future__ import annotations

import logging
from collections.abc import Iterator
from contextlib import contextmanager

from botocore.exceptions import (
    BotoCoreError,
    ClientError,
    NoCredentialsError,
    NoRegionError,
    PartialCredentialsError,
    ProfileNotFound,
    TokenRetrievalError,
)

from awsssh.providers.exceptions import CredentialError, ProviderQueryError

logger = logging.getLogger(__name__)

CREDENTIAL_ERROR_CODES = frozenset(
    (
        "AuthFailure",
        "ExpiredToken",
        "ExpiredTokenException",
        "InvalidClientTokenId",
        "RequestExpired",
        "SignatureDoesNotMatch",
        "UnrecognizedClientException",
    )
)


@contextmanager
def handle_aws_errors() -> Iterator[None]:
    """Convert botocore errors raised inside the block.

    Credential problems become :class:`CredentialError`; every other client
    or transport failure becomes :class:`ProviderQueryError`.

    Raises
    ------
    CredentialError
        If credentials are missing, expired or rejected
    ProviderQueryError
        For any other AWS API or transport failure
    """
    try:
        yield
    except (
        NoCredentialsError,
        PartialCredentialsError,
        ProfileNotFound,
        TokenRetrievalError,
    ) as e:
        raise CredentialError(str(e)) from e
    except ClientError as e:
        error = e.response.get("Error", {})
        error_code = error.get("Code")
        message = error.get("Message") or str(e)

        if error_code in CREDENTIAL_ERROR_CODES:
            raise CredentialError(message, error_code=error_code) from e

        logger.debug("AWS API error %s: %s", error_code, message)
        raise ProviderQueryError(message, error_code=error_code) from e
    except NoRegionError as e:
        raise ProviderQueryError(str(e)) from e
    except BotoCoreError as e:
        raise ProviderQueryError(str(e)) from e
