"""Exceptions raised during a convergence run."""

from __future__ import annotations


class LogglyRsyslogError(Exception):
    """Base class for errors that abort a convergence run."""


class MissingSecretError(LogglyRsyslogError):
    """Raised when no Loggly token can be resolved."""


class SecretStoreError(LogglyRsyslogError):
    """Raised when the secret store itself cannot be read."""


class ServiceRestartError(LogglyRsyslogError):
    """Raised when the rsyslog service fails to restart."""


class ConfigWriteError(LogglyRsyslogError):
    """Raised when the configuration file cannot be read or written."""
