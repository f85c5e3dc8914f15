"""Deferred service notifications."""

from __future__ import annotations

import logging
import subprocess
from typing import Protocol, Sequence

from ..errors import ServiceRestartError

logger = logging.getLogger(__name__)


class RestartTrigger(Protocol):
    def restart(self, service: str) -> None: ...


class SystemctlRestart:
    """Restart a service through the host's service manager."""

    def __init__(self, command: Sequence[str] = ("systemctl", "restart")) -> None:
        self.command = list(command)

    def restart(self, service: str) -> None:
        cmd = [*self.command, service]
        logger.info(f"Restarting service[{service}]")
        try:
            result = subprocess.run(cmd, capture_output=True, text=True)
        except OSError as e:
            raise ServiceRestartError(f"Cannot run {' '.join(cmd)}: {e}") from e

        if result.returncode != 0:
            raise ServiceRestartError(
                f"{' '.join(cmd)} exited with {result.returncode}: "
                f"{result.stderr.strip()}"
            )


class NotificationQueue:
    """Collects delayed notifications and runs each one once at end of run."""

    ACTIONS = ("restart",)

    def __init__(self) -> None:
        self._pending: dict[tuple[str, str], None] = {}

    def notify(self, action: str, service: str) -> None:
        if action not in self.ACTIONS:
            raise ValueError(f"Unknown action: {action}")
        logger.debug(f"Queued {action} of service[{service}]")
        self._pending[(action, service)] = None

    @property
    def pending(self) -> list[tuple[str, str]]:
        return list(self._pending)

    def flush(self, trigger: RestartTrigger) -> list[tuple[str, str]]:
        """Run queued notifications in order and clear the queue.

        Returns:
            The notifications that ran
        """
        ran = []
        while self._pending:
            action, service = next(iter(self._pending))
            del self._pending[(action, service)]
            trigger.restart(service)
            ran.append((action, service))
        return ran
