"""Loggly token resolution."""

from __future__ import annotations

import logging

from ..errors import MissingSecretError
from ..settings import TokenSettings
from .lookup import SecretLookup

logger = logging.getLogger(__name__)


def resolve_token(settings: TokenSettings, lookup: SecretLookup) -> str:
    """Resolve the Loggly token from the secret store or a literal value.

    Args:
        settings: Token source settings
        lookup: Secret store, consulted only when ``from_databag`` is set

    Returns:
        The token string

    Raises:
        MissingSecretError: No record or no token could be found
    """
    if not settings.from_databag:
        token = settings.value.get_secret_value()
        if not token:
            raise MissingSecretError(
                "token.from_databag is false but token.value is empty"
            )
        logger.debug("Using Loggly token from attribute value")
        return token

    record = lookup.lookup(settings.databag, settings.databag_item)
    if record is None:
        raise MissingSecretError(
            f"Loggly token not found in data bag "
            f"'{settings.databag}' item '{settings.databag_item}'"
        )

    token = record.get("token")
    if not token:
        raise MissingSecretError(
            f"Data bag '{settings.databag}' item '{settings.databag_item}' "
            "has no 'token' field"
        )

    logger.debug(
        f"Using Loggly token from data bag {settings.databag}/{settings.databag_item}"
    )
    return str(token)
