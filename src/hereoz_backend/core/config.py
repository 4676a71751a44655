"""Application configuration management."""

from typing import Optional, List
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings with environment variable support."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore"
    )

    # Database Configuration
    postgres_host: str = Field(default="localhost", description="PostgreSQL host")
    postgres_port: int = Field(default=5432, description="PostgreSQL port")
    postgres_db: str = Field(default="hereoz", description="PostgreSQL database name")
    postgres_user: str = Field(default="hereoz", description="PostgreSQL username")
    postgres_password: str = Field(default="", description="PostgreSQL password")
    database_url_override: Optional[str] = Field(
        default=None,
        alias="database_url",
        description="Full SQLAlchemy URL, takes precedence over the postgres_* parts"
    )
    db_pool_size: int = Field(default=10, description="Persistent connections kept by the PostgreSQL pool")
    db_max_overflow: int = Field(default=20, description="Extra connections allowed above the pool size")
    db_pool_recycle_seconds: int = Field(default=3600, description="Recycle pooled connections after this many seconds")

    # API Configuration
    api_host: str = Field(default="0.0.0.0", description="API host")
    api_port: int = Field(default=8000, description="API port")
    cors_origins: List[str] = Field(
        default=["http://localhost:3000"],
        description="Origins allowed to call the API from a browser"
    )

    # JWT Configuration
    secret_key: str = Field(default="dev-secret-key", description="JWT secret key")
    algorithm: str = Field(default="HS256", description="JWT algorithm")
    access_token_expire_minutes: int = Field(default=30, description="Access token expiry minutes")
    refresh_token_expire_days: int = Field(default=7, description="Refresh token expiry days")
    email_verification_hours: int = Field(default=24, description="Email verification token lifetime")
    password_reset_hours: int = Field(default=1, description="Password reset token lifetime")

    # Application Configuration
    log_level: str = Field(default="INFO", description="Logging level")
    environment: str = Field(default="development", description="Environment name")
    default_page_size: int = Field(default=10, description="Default page size for listings")
    max_page_size: int = Field(default=100, description="Maximum page size for listings")
    slow_operation_seconds: float = Field(default=1.0, description="Timed operations slower than this log a warning")
    run_migrations_on_startup: bool = Field(
        default=False,
        description="Apply pending Alembic migrations when the API starts"
    )

    # Interviews
    video_meeting_base_url: str = Field(
        default="https://meet.hereoz.com/room",
        description="Base URL for generated video interview rooms"
    )

    # Email / Notification Configuration
    notifications_enabled: bool = Field(default=False, description="Deliver notification emails over SMTP")
    email_from: str = Field(default="no-reply@hereoz.com", description="Sender address for notifications")
    frontend_url: str = Field(default="http://localhost:3000", description="Frontend base URL used in emails")
    smtp_host: str = Field(default="localhost", description="SMTP server host")
    smtp_port: int = Field(default=587, description="SMTP server port")
    smtp_username: Optional[str] = Field(default=None, description="SMTP username")
    smtp_password: Optional[str] = Field(default=None, description="SMTP password")
    smtp_use_tls: bool = Field(default=True, description="Use TLS for SMTP")

    @property
    def database_url(self) -> str:
        """Construct database URL from components."""
        if self.database_url_override:
            return self.database_url_override
        return (
            f"postgresql://{self.postgres_user}:{self.postgres_password}"
            f"@{self.postgres_host}:{self.postgres_port}/{self.postgres_db}"
        )


# Global settings instance
settings = Settings()
