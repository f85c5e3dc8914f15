"""TLS setup step included when ``tls.enabled`` is set."""

from __future__ import annotations

import logging
from typing import Callable

from ..settings import TlsSettings

logger = logging.getLogger(__name__)

TlsSetup = Callable[[TlsSettings], None]


def check_ca_certificate(tls: TlsSettings) -> None:
    """Warn when the CA bundle rsyslog verifies Loggly against is missing.

    Installing the certificate is left to whatever provisions the host.
    """
    if tls.ca_file.exists():
        logger.debug(f"CA certificate present: {tls.ca_file}")
        return

    logger.warning(
        f"CA certificate {tls.ca_file} not found; rsyslog cannot verify Loggly until it is installed"
    )
