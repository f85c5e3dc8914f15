"""Shared pytest fixtures and configuration."""

import os
from unittest.mock import Mock

import pytest

from loggly_rsyslog.secretstore import MappingLookup
from loggly_rsyslog.settings import LogglySettings


@pytest.fixture(autouse=True)
def clean_loggly_env(monkeypatch):
    """Keep LOGGLY_* variables from the host out of the settings."""
    for key in list(os.environ):
        if key.upper().startswith("LOGGLY_"):
            monkeypatch.delenv(key)


@pytest.fixture
def lookup():
    """Secret store holding the default loggly/token item."""
    return MappingLookup({("loggly", "token"): {"id": "token", "token": "abc123"}})


@pytest.fixture
def make_settings(tmp_path):
    """Build settings that write under tmp_path without changing ownership."""

    def _make(**overrides):
        rsyslog = {"conf_dir": tmp_path / "rsyslog.d", "owner": None, "group": None}
        rsyslog.update(overrides.pop("rsyslog", {}))
        return LogglySettings(rsyslog=rsyslog, **overrides)

    return _make


@pytest.fixture
def restarter():
    """Mock restart trigger."""
    return Mock()


@pytest.fixture
def tls_setup():
    """Mock TLS setup step."""
    return Mock()
