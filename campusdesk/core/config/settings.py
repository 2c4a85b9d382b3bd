# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Application configuration settings using Pydantic Settings.

This module provides centralized configuration management for CampusDesk.
Settings are loaded from environment variables with sensible defaults.

The Settings class is the main entry point and aggregates all subsettings.
Components receive the subsettings they need at construction time; a
cached instance is provided via get_settings() for application wiring.

Example:
    >>> from campusdesk.core.config.settings import get_settings
    >>> settings = get_settings()
    >>> print(settings.environment)
    'development'
"""

from functools import lru_cache
from typing import Literal, Self

from pydantic import Field, SecretStr, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class DatabaseSettings(BaseSettings):
    """Database configuration for the back office document store.

    Attributes:
        user: PostgreSQL username.
        password: PostgreSQL password.
        host: Database host address.
        port: Database port number.
        database: Database name.
        dsn: Full connection URL; takes precedence over components.
        pool_size: Connection pool size.
        max_overflow: Maximum overflow connections.
    """

    model_config = SettingsConfigDict(
        env_prefix="DB_",
        extra="ignore",
    )

    user: str = "campusdesk"
    password: SecretStr = SecretStr("campusdesk_password")
    host: str = "localhost"
    port: int = 5432
    database: str = "campusdesk"
    dsn: str | None = None
    pool_size: int = 10
    max_overflow: int = 20

    @property
    def url(self) -> str:
        """Build the async database URL from components."""
        if self.dsn:
            return self.dsn
        pwd = self.password.get_secret_value()
        return f"postgresql+asyncpg://{self.user}:{pwd}@{self.host}:{self.port}/{self.database}"


class SMTPSettings(BaseSettings):
    """Outbound email transport configuration.

    Attributes:
        host: SMTP server hostname.
        port: SMTP server port.
        username: SMTP authentication username.
        password: SMTP authentication password.
        use_tls: Use STARTTLS.
        from_email: Sender email address.
        from_name: Sender display name.
        timeout: Seconds before a send attempt is abandoned.
    """

    model_config = SettingsConfigDict(
        env_prefix="SMTP_",
        extra="ignore",
    )

    host: str | None = None
    port: int = 587
    username: str | None = None
    password: SecretStr | None = None
    use_tls: bool = True
    from_email: str | None = None
    from_name: str = "CampusDesk"
    timeout: float = 30.0

    @property
    def is_configured(self) -> bool:
        """Check whether enough is set to attempt delivery."""
        return bool(self.host and self.username and self.password and self.from_email)


class GradingSettings(BaseSettings):
    """Defaults applied when a result upload omits maximum marks.

    Attributes:
        default_subject_max_marks: Maximum marks for a subject.
        default_max_total: Maximum aggregate marks for a term.
    """

    model_config = SettingsConfigDict(
        env_prefix="GRADING_",
        extra="ignore",
    )

    default_subject_max_marks: float = 100.0
    default_max_total: float = 500.0


class NotificationSettings(BaseSettings):
    """Notification dispatch configuration.

    Attributes:
        default_email_subject: Subject used when a dispatch omits one.
        result_email_subject: Subject of the result-uploaded email.
        admission_email_subject: Subject of the admission decision email.
        faculty_welcome_subject: Subject of the faculty welcome email.
    """

    model_config = SettingsConfigDict(
        env_prefix="NOTIFICATION_",
        extra="ignore",
    )

    default_email_subject: str = "New Notification"
    result_email_subject: str = "Result Uploaded"
    admission_email_subject: str = "Admission Update"
    faculty_welcome_subject: str = "Faculty Account Created"


class Settings(BaseSettings):
    """Main application settings aggregating all subsettings.

    Use get_settings() to obtain a cached singleton instance.

    Attributes:
        environment: Current environment (development, staging, production).
        debug: Enable debug mode.
        log_level: Logging level.
        database: Database settings.
        smtp: Email transport settings.
        grading: Grade engine defaults.
        notifications: Notification dispatch settings.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        case_sensitive=False,
    )

    environment: Literal["development", "staging", "production", "test"] = "development"
    debug: bool = True
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "DEBUG"

    # Subsettings - loaded with their own env prefixes
    database: DatabaseSettings = Field(default_factory=DatabaseSettings)
    smtp: SMTPSettings = Field(default_factory=SMTPSettings)
    grading: GradingSettings = Field(default_factory=GradingSettings)
    notifications: NotificationSettings = Field(default_factory=NotificationSettings)

    @model_validator(mode="after")
    def validate_production_settings(self) -> Self:
        """Validate that production settings are properly configured.

        Raises:
            ValueError: If running in production with the default database
                password or without an email transport.
        """
        if self.environment == "production":
            if self.database.password.get_secret_value() == "campusdesk_password":
                raise ValueError(
                    "Database password must be changed from default in production. "
                    "Set DB_PASSWORD environment variable."
                )
            if not self.smtp.is_configured:
                raise ValueError(
                    "SMTP must be configured in production. Set SMTP_HOST, "
                    "SMTP_USERNAME, SMTP_PASSWORD and SMTP_FROM_EMAIL."
                )
        return self

    @property
    def is_development(self) -> bool:
        """Check if running in development environment."""
        return self.environment == "development"

    @property
    def is_production(self) -> bool:
        """Check if running in production environment."""
        return self.environment == "production"


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Get cached settings instance.

    Uses lru_cache to ensure settings are only loaded once.
    Call clear_settings_cache() if you need to reload settings.

    Returns:
        Cached Settings instance.
    """
    return Settings()


def clear_settings_cache() -> None:
    """Clear the settings cache.

    Call this if you need to reload settings from environment.
    Useful for testing or dynamic configuration updates.
    """
    get_settings.cache_clear()
