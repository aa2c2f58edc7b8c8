"""Configuration loading for Newshound.

This module provides centralized configuration management:
- Load settings from environment variables and .env files
- Accept explicit overrides from the host application at startup
- Validate configuration using pydantic
- Provide typed access to all settings

The Settings instance is constructed once when the host application starts
and then passed by reference to every reporter, adapter and transport.
"""

import re
from collections.abc import Callable
from datetime import timedelta, timezone, tzinfo
from typing import Any, Literal
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from newshound.core.ports import ExceptionSource, JobSource, WarningSource

_REPORT_TIME_PATTERN = re.compile(r"^([01]?\d|2[0-3]):([0-5]\d)$")


class Settings(BaseSettings):
    """Application configuration loaded from environment.

    Uses pydantic-settings for environment variable handling with
    .env file support via python-dotenv. Source selectors accept either a
    registry name or a ready adapter instance.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
        arbitrary_types_allowed=True,
    )

    enabled: bool = Field(
        default=True,
        description="Enable or disable Newshound completely",
    )

    # Source configuration
    exception_source: str | ExceptionSource = Field(
        default="exception_track",
        description="Exception source name or adapter instance",
    )
    warning_source: str | WarningSource | None = Field(
        default=None,
        description="Warning source name or adapter instance (optional)",
    )
    job_source: str | JobSource | None = Field(
        default=None,
        description="Job source name or adapter instance (optional)",
    )
    database_url: str = Field(
        default="sqlite:///./db/development.sqlite3",
        description="Database URL the built-in sources read from",
    )

    # Report configuration
    exception_limit: int = Field(
        default=10,
        description="Maximum number of exceptions per report",
    )
    warning_limit: int = Field(
        default=10,
        description="Maximum number of warnings per report",
    )
    time_window_hours: int = Field(
        default=24,
        description="Lookback window in hours for exceptions and warnings",
    )
    time_zone: str = Field(
        default="UTC",
        description="Time zone used for displayed times and 'today'",
    )
    truncate_suffix: str = Field(
        default="",
        description="Suffix appended to messages cut at 100 characters",
    )
    badge_counts_warnings: bool = Field(
        default=True,
        description="Whether warnings raise the banner badge to the warning tier",
    )
    report_time: str = Field(
        default="09:00",
        description="Time of day (HH:MM) for the daily digest",
    )

    # Authorization configuration
    authorized_roles: list[str] = Field(
        default_factory=lambda: ["developer", "super_user"],
        description="User roles allowed to see the banner",
    )
    current_user_accessor: str = Field(
        default="current_user",
        description="Request attribute or key holding the current user",
    )
    custom_authorization: Callable[[Any], bool] | None = Field(
        default=None,
        description="Custom predicate replacing role-based authorization",
    )

    # Transport configuration
    transport_adapter: str | Callable[..., Any] | None = Field(
        default="slack",
        description="Transport name ('slack', 'sns') or transport factory",
    )
    slack_webhook_url: str = Field(
        default="",
        description="Slack incoming webhook URL",
    )
    slack_channel: str = Field(
        default="#general",
        description="Slack channel for Web API delivery",
    )
    slack_api_token: str = Field(
        default="",
        description="Slack Web API token (SLACK_API_TOKEN)",
    )
    sns_topic_arn: str = Field(
        default="",
        description="AWS SNS topic ARN",
    )
    aws_region: str = Field(
        default="us-east-1",
        description="AWS region for SNS",
    )
    aws_access_key_id: str = Field(
        default="",
        description="AWS access key ID (optional, falls back to the default chain)",
    )
    aws_secret_access_key: str = Field(
        default="",
        description="AWS secret access key",
    )

    # Logging configuration
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(
        default="INFO",
        description="Log level",
    )
    log_format: Literal["json", "text"] = Field(
        default="text",
        description="Log format",
    )

    @field_validator("exception_limit", "warning_limit", "time_window_hours")
    @classmethod
    def validate_positive(cls, v: int) -> int:
        """Ensure limits and the lookback window are positive."""
        if v <= 0:
            raise ValueError("limits and time_window_hours must be positive")
        return v

    @field_validator("report_time")
    @classmethod
    def validate_report_time(cls, v: str) -> str:
        """Ensure report time is in HH:MM format."""
        if not _REPORT_TIME_PATTERN.match(v):
            raise ValueError(f"report_time must be HH:MM, got {v!r}")
        return v

    @field_validator("time_zone")
    @classmethod
    def validate_time_zone(cls, v: str) -> str:
        """Ensure the time zone is known."""
        if v.upper() == "UTC":
            return v
        try:
            ZoneInfo(v)
        except (ZoneInfoNotFoundError, ValueError) as e:
            raise ValueError(f"Unknown time zone: {v}") from e
        return v

    @property
    def zone(self) -> tzinfo:
        """Configured time zone as a tzinfo."""
        if self.time_zone.upper() == "UTC":
            return timezone.utc
        return ZoneInfo(self.time_zone)

    @property
    def time_window(self) -> timedelta:
        """Lookback window for exceptions and warnings."""
        return timedelta(hours=self.time_window_hours)

    def authorize_with(
        self, predicate: Callable[[Any], bool]
    ) -> Callable[[Any], bool]:
        """Install a custom authorization predicate.

        Can be used as a decorator:

            @settings.authorize_with
            def staff_only(request):
                return request["user"].is_staff
        """
        self.custom_authorization = predicate
        return predicate

    def has_delivery_credential(self) -> bool:
        """Whether the selected transport has what it needs to deliver."""
        if self.transport_adapter in (None, "slack"):
            return bool(self.slack_webhook_url or self.slack_api_token)
        if self.transport_adapter == "sns":
            return bool(self.sns_topic_arn)
        return True

    def is_valid(self, for_notification: bool = False) -> bool:
        """Check whether Newshound should run.

        Args:
            for_notification: Also require a delivery credential.

        Returns:
            True if enabled (and, when asked, deliverable).
        """
        if not self.enabled:
            return False
        if for_notification:
            return self.has_delivery_credential()
        return True


def load_settings(env_file: str | None = None, **overrides: Any) -> Settings:
    """Load application settings from environment.

    Args:
        env_file: Optional path to .env file. If not provided,
                 uses the default .env in the current directory.
        **overrides: Explicit values from the host application; these
                 take precedence over the environment.

    Returns:
        Validated Settings instance.

    Raises:
        ValidationError: If settings validation fails.
    """
    if env_file:
        return Settings(_env_file=env_file, **overrides)  # type: ignore[call-arg]
    return Settings(**overrides)


__all__ = ["Settings", "load_settings"]
