from __future__ import annotations

from typing import Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


APP_NAME = "log_transport"


class OutputConfig(BaseModel):
    """Where formatted lines go and in which shape."""

    json_output: bool = Field(
        default=False,
        alias="json",
        description="Emit canonical JSON lines instead of colorized text",
    )

    dest: Optional[Union[int, str]] = Field(
        default=None,
        description="Destination file path or file descriptor number (default: stdout)",
    )

    fsync: bool = Field(
        default=False,
        description="fsync the destination when the stream ends",
    )

    model_config = ConfigDict(populate_by_name=True)


class FormatterConfig(BaseModel):
    """Options of the human-readable formatter."""

    target_padding: int = Field(
        default=30,
        ge=0,
        description="Width of the target-name column",
    )

    timezone: Optional[str] = Field(
        default=None,
        description="IANA timezone for timestamps (falls back to $TZ, then America/Phoenix)",
    )

    color: Optional[bool] = Field(
        default=None,
        description="Force colors on or off; None probes the terminal",
    )

    levels: Optional[dict[int, str]] = Field(
        default=None,
        description="Severity -> display label overrides",
    )

    @field_validator("levels")
    @classmethod
    def _complete_levels(cls, value: Optional[dict[int, str]]) -> Optional[dict[int, str]]:
        if value is None:
            return value
        unknown = set(value) - {10, 20, 30, 40, 50, 60}
        if unknown:
            raise ValueError(f"Unknown severities in levels: {sorted(unknown)}")
        return value


class LoggingConfig(BaseModel):
    """Diagnostics emitted by the transport itself (always on stderr)."""

    level: str = Field(
        default="WARNING",
        description="Diagnostics log level",
    )

    json_output: bool = Field(
        default=False,
        alias="json",
        description="Emit diagnostics as JSON",
    )

    logger_name: str = Field(
        default=APP_NAME,
        description="Name of the diagnostics logger",
    )

    model_config = ConfigDict(populate_by_name=True)


class TransportConfig(BaseSettings):
    """Root configuration.

    All configuration is loaded from environment variables with LOG_TRANSPORT_ prefix.
    Use double underscore for nested config: LOG_TRANSPORT_OUTPUT__DEST

    Example env vars:
        export LOG_TRANSPORT_OUTPUT__JSON=true
        export LOG_TRANSPORT_OUTPUT__DEST=/var/log/app.log
        export LOG_TRANSPORT_FORMATTER__TARGET_PADDING=24
        export LOG_TRANSPORT_FORMATTER__TIMEZONE=Europe/Berlin
        export LOG_TRANSPORT_FORMATTER__COLOR=false
        export LOG_TRANSPORT_LOGGING__LEVEL=DEBUG
    """

    model_config = SettingsConfigDict(
        env_prefix="LOG_TRANSPORT_",
        env_nested_delimiter="__",
        frozen=True,
        extra="forbid",
    )

    output: OutputConfig = Field(default_factory=OutputConfig)
    formatter: FormatterConfig = Field(default_factory=FormatterConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)
