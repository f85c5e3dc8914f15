"""Convergence run: resolve, render, write, notify."""

from __future__ import annotations

import logging
from pathlib import Path

from .assembly.options import build_render_options
from .core.models import ConvergeResult
from .rendering.engine import render_config
from .rendering.io import write_if_changed
from .secretstore import SecretLookup, resolve_token
from .service.notify import NotificationQueue, RestartTrigger
from .service.tls import TlsSetup, check_ca_certificate
from .settings import LogglySettings

logger = logging.getLogger(__name__)


def target_path(settings: LogglySettings, dest_root: Path | None = None) -> Path:
    """Configuration file path, re-rooted under ``dest_root`` when given."""
    path = settings.rsyslog.conf_path
    if dest_root is None:
        return path
    if path.is_absolute():
        path = path.relative_to(path.anchor)
    return dest_root / path


def render(settings: LogglySettings, lookup: SecretLookup) -> str:
    """Resolve the token and render the configuration text without writing it."""
    token = resolve_token(settings.token, lookup)
    options = build_render_options(settings, token)
    return render_config(options, template_path=settings.rsyslog.template)


def converge(
    settings: LogglySettings,
    lookup: SecretLookup,
    restarter: RestartTrigger | None,
    tls_setup: TlsSetup = check_ca_certificate,
    dest_root: Path | None = None,
) -> ConvergeResult:
    """Bring the Loggly rsyslog configuration to the desired state.

    Args:
        settings: Loaded node attributes
        lookup: Secret store for the Loggly token
        restarter: Restart trigger; None leaves queued restarts unrun
        tls_setup: Step run first when TLS is enabled
        dest_root: Optional root to write under instead of ``/``

    Returns:
        What the run changed
    """
    queue = NotificationQueue()
    included_steps: list[str] = []

    if settings.tls.enabled:
        tls_setup(settings.tls)
        included_steps.append("tls")

    text = render(settings, lookup)

    path = target_path(settings, dest_root)
    rsyslog = settings.rsyslog
    changed = write_if_changed(
        path, text, mode=rsyslog.file_mode, owner=rsyslog.owner, group=rsyslog.group
    )
    if changed:
        queue.notify("restart", rsyslog.service)

    restarted = False
    if restarter is None:
        if queue.pending:
            logger.info(f"Skipping restart of service[{rsyslog.service}]")
    else:
        restarted = bool(queue.flush(restarter))

    return ConvergeResult(
        path=path,
        changed=changed,
        restarted=restarted,
        included_steps=included_steps,
    )
