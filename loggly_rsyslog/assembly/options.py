"""Build the render options from settings and a resolved token."""

from __future__ import annotations

import logging
from typing import Iterable

from ..core.models import LogFileRule, RenderOptions, TlsDirectives
from ..settings import NON_TLS_PORT, LogglySettings, RsyslogSettings, TlsSettings

logger = logging.getLogger(__name__)


def format_tags(tags: Iterable[str]) -> str:
    """Format tags as space-joined ``tag="x"`` tokens, keeping input order."""
    return " ".join(f'tag="{tag}"' for tag in tags)


def collect_log_files(
    rules: Iterable[LogFileRule],
) -> tuple[bool, list[LogFileRule]]:
    """Return whether imfile monitoring is needed, and the rules to render."""
    collected = list(rules)
    return bool(collected), collected


def resolve_port(rsyslog: RsyslogSettings, tls: TlsSettings) -> int:
    """Destination port: explicit setting, else the TLS or plain syslog port."""
    if rsyslog.port is not None:
        return rsyslog.port
    return tls.port if tls.enabled else NON_TLS_PORT


def select_tls_directives(tls: TlsSettings) -> TlsDirectives | None:
    if not tls.enabled:
        return None
    return TlsDirectives(ca_file=str(tls.ca_file))


def build_render_options(settings: LogglySettings, token: str) -> RenderOptions:
    """Assemble the options consumed by the template renderer.

    Args:
        settings: Loaded node attributes
        token: Resolved Loggly token

    Returns:
        Immutable render options
    """
    monitor_files, log_files = collect_log_files(settings.log_files)
    port = resolve_port(settings.rsyslog, settings.tls)

    logger.debug(
        f"Options: {len(settings.tags)} tag(s), {len(log_files)} log file(s), "
        f"tls={settings.tls.enabled}, port={port}"
    )

    return RenderOptions(
        token=token,
        tags=format_tags(settings.tags),
        monitor_files=monitor_files,
        log_files=log_files,
        tls_enabled=settings.tls.enabled,
        tls=select_tls_directives(settings.tls),
        host=settings.rsyslog.host,
        port=port,
    )
