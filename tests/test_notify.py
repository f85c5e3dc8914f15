"""Tests for loggly_rsyslog.service."""

import logging
import subprocess
from pathlib import Path
from unittest.mock import Mock, patch

import pytest

from loggly_rsyslog.errors import ServiceRestartError
from loggly_rsyslog.service.notify import NotificationQueue, SystemctlRestart
from loggly_rsyslog.service.tls import check_ca_certificate
from loggly_rsyslog.settings import TlsSettings


class TestNotificationQueue:
    """Test cases for NotificationQueue."""

    def test_duplicate_notifications_run_once(self):
        queue = NotificationQueue()
        trigger = Mock()

        queue.notify("restart", "rsyslog")
        queue.notify("restart", "rsyslog")
        ran = queue.flush(trigger)

        assert ran == [("restart", "rsyslog")]
        trigger.restart.assert_called_once_with("rsyslog")

    def test_flush_clears_queue(self):
        queue = NotificationQueue()
        trigger = Mock()
        queue.notify("restart", "rsyslog")
        queue.flush(trigger)

        assert queue.flush(trigger) == []
        assert trigger.restart.call_count == 1

    def test_notifications_are_deferred(self):
        queue = NotificationQueue()
        queue.notify("restart", "rsyslog")
        assert queue.pending == [("restart", "rsyslog")]

    def test_unknown_action(self):
        with pytest.raises(ValueError):
            NotificationQueue().notify("reload", "rsyslog")


class TestSystemctlRestart:
    """Test cases for SystemctlRestart."""

    @patch("loggly_rsyslog.service.notify.subprocess.run")
    def test_runs_restart_command(self, mock_run):
        mock_run.return_value = subprocess.CompletedProcess(
            args=[], returncode=0, stdout="", stderr=""
        )

        SystemctlRestart().restart("rsyslog")

        mock_run.assert_called_once_with(
            ["systemctl", "restart", "rsyslog"], capture_output=True, text=True
        )

    @patch("loggly_rsyslog.service.notify.subprocess.run")
    def test_custom_command(self, mock_run):
        mock_run.return_value = subprocess.CompletedProcess(
            args=[], returncode=0, stdout="", stderr=""
        )

        SystemctlRestart(["service", "--quiet"]).restart("rsyslog")

        assert mock_run.call_args[0][0] == ["service", "--quiet", "rsyslog"]

    @patch("loggly_rsyslog.service.notify.subprocess.run")
    def test_failure_raises(self, mock_run):
        mock_run.return_value = subprocess.CompletedProcess(
            args=[], returncode=1, stdout="", stderr="Unit rsyslog.service not found."
        )

        with pytest.raises(ServiceRestartError) as exc_info:
            SystemctlRestart().restart("rsyslog")

        assert "not found" in str(exc_info.value)

    @patch("loggly_rsyslog.service.notify.subprocess.run", side_effect=FileNotFoundError)
    def test_missing_command_raises(self, mock_run):
        with pytest.raises(ServiceRestartError):
            SystemctlRestart().restart("rsyslog")


class TestCheckCaCertificate:
    """Test cases for check_ca_certificate."""

    def test_missing_certificate_warns(self, tmp_path, caplog):
        tls = TlsSettings(cert_path=tmp_path)

        with caplog.at_level(logging.WARNING):
            check_ca_certificate(tls)

        assert "loggly_full.crt" in caplog.text

    def test_present_certificate_is_quiet(self, tmp_path, caplog):
        (tmp_path / "loggly_full.crt").write_text("cert")
        tls = TlsSettings(cert_path=Path(tmp_path))

        with caplog.at_level(logging.WARNING):
            check_ca_certificate(tls)

        assert caplog.text == ""
