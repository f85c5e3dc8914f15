"""Domain models for assembling and converging the Loggly rsyslog config."""

from __future__ import annotations

from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field, model_validator
from typing_extensions import Self

LOGGLY_DISTRIBUTION_ID = 41058
DEFAULT_POLL_INTERVAL = 10


class LogFileRule(BaseModel):
    """An extra log file tailed through rsyslog's imfile module."""

    filename: str = Field(..., min_length=1, description="File to tail")
    tag: str = Field(..., min_length=1, description="Syslog tag prefix")
    statefile: str = Field(..., min_length=1, description="imfile state file name")
    poll_interval: int = Field(
        default=DEFAULT_POLL_INTERVAL, ge=1, description="Poll interval in seconds"
    )


class TlsDirectives(BaseModel):
    """Transport-security directives emitted when TLS is enabled."""

    model_config = ConfigDict(frozen=True)

    ca_file: str = Field(..., description="CA bundle used to verify Loggly")
    stream_driver: str = "gtls"
    driver_mode: int = 1
    auth_mode: str = "x509/name"
    permitted_peer: str = "*.loggly.com"


class RenderOptions(BaseModel):
    """Everything the template needs for a single render."""

    model_config = ConfigDict(frozen=True)

    token: str = Field(..., min_length=1, description="Loggly customer token")
    tags: str = Field(default="", description="Space-joined tag=\"x\" tokens")
    monitor_files: bool = False
    log_files: list[LogFileRule] = Field(default_factory=list)
    tls_enabled: bool = True
    tls: TlsDirectives | None = None
    host: str = "logs-01.loggly.com"
    port: int = Field(..., ge=1, le=65535)
    distribution_id: int = LOGGLY_DISTRIBUTION_ID

    @model_validator(mode="after")
    def _tls_directives_match_toggle(self) -> Self:
        if self.tls_enabled and self.tls is None:
            raise ValueError("tls directives are required when tls_enabled is true")
        if not self.tls_enabled and self.tls is not None:
            raise ValueError("tls directives given but tls_enabled is false")
        return self


class ConvergeResult(BaseModel):
    """Outcome of one convergence run."""

    path: Path
    changed: bool
    restarted: bool
    included_steps: list[str] = Field(default_factory=list)
