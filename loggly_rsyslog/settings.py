"""Node attributes for the Loggly rsyslog configuration.

Sources are layered, lowest priority first: field defaults, an optional YAML
attributes file, ``LOGGLY_*`` environment variables (nested keys separated by
``__``, e.g. ``LOGGLY_TLS__ENABLED=false``), then explicit keyword overrides.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field, SecretStr, field_validator
from pydantic_settings import (
    BaseSettings,
    PydanticBaseSettingsSource,
    SettingsConfigDict,
    YamlConfigSettingsSource,
)

from .core.models import LogFileRule

NON_TLS_PORT = 514
DEFAULT_TLS_PORT = 6514


class TokenSettings(BaseModel):
    from_databag: bool = True
    databag: str = "loggly"
    databag_item: str = "token"
    value: SecretStr = SecretStr("")


class TlsSettings(BaseModel):
    enabled: bool = True
    port: int = Field(default=DEFAULT_TLS_PORT, ge=1, le=65535)
    cert_path: Path = Path("/etc/rsyslog.d/keys/ca.d")
    cert_file: str = "loggly_full.crt"

    @property
    def ca_file(self) -> Path:
        return self.cert_path / self.cert_file


class RsyslogSettings(BaseModel):
    host: str = "logs-01.loggly.com"
    port: int | None = Field(
        default=None,
        ge=1,
        le=65535,
        description="Explicit destination port; derived from tls.enabled when unset",
    )
    conf_dir: Path = Path("/etc/rsyslog.d")
    conf_file: str = "10-loggly.conf"
    template: Path | None = Field(
        default=None, description="Custom Jinja2 template replacing the bundled one"
    )
    service: str = "rsyslog"
    owner: str | None = "root"
    group: str | None = "root"
    file_mode: int = Field(default=0o644, description="File permissions (octal)")

    @field_validator("file_mode", mode="before")
    @classmethod
    def _parse_octal(cls, value: Any) -> Any:
        # "0644" from YAML or the environment is octal, not decimal.
        if isinstance(value, str):
            return int(value, 8)
        return value

    @property
    def conf_path(self) -> Path:
        return self.conf_dir / self.conf_file


class LogglySettings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="LOGGLY_",
        env_nested_delimiter="__",
        case_sensitive=False,
        extra="ignore",
    )

    token: TokenSettings = Field(default_factory=TokenSettings)
    tags: list[str] = Field(default_factory=list)
    log_files: list[LogFileRule] = Field(default_factory=list)
    tls: TlsSettings = Field(default_factory=TlsSettings)
    rsyslog: RsyslogSettings = Field(default_factory=RsyslogSettings)
    databag_dir: Path = Path("/etc/loggly/data_bags")

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        return (init_settings, env_settings, YamlConfigSettingsSource(settings_cls))


def load_settings(
    attributes_file: Path | None = None, **overrides: Any
) -> LogglySettings:
    """Load settings, optionally layering a YAML attributes file under the env.

    Args:
        attributes_file: YAML document with the same nested keys as the settings
        **overrides: Highest-priority values, typically from CLI flags

    Returns:
        Validated settings
    """
    if attributes_file is None:
        return LogglySettings(**overrides)

    if not attributes_file.exists():
        raise FileNotFoundError(f"Attributes file not found: {attributes_file}")

    class _FileBackedSettings(LogglySettings):
        model_config = SettingsConfigDict(yaml_file=attributes_file)

    return _FileBackedSettings(**overrides)
