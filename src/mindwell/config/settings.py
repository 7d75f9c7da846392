"""Application settings loaded from environment variables."""

from functools import lru_cache
from typing import Literal

from pydantic import BaseModel
from pydantic_settings import BaseSettings, SettingsConfigDict


class ReportSettings(BaseModel):
    """Configuration for exported assessment reports.

    Controls the branding text embedded in exported documents and which
    output formats may be produced.
    """

    title: str = "Mental Health Assessment Report"
    """Heading of exported documents."""

    organization_name: str = "MindWell Mental Health Management System"
    """Name printed in the document footer."""

    enable_html: bool = True
    """Allow HTML export."""

    enable_json: bool = True
    """Allow JSON export."""


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_nested_delimiter="__",
        case_sensitive=False,
        extra="ignore",
    )

    # Application Configuration
    ENVIRONMENT: Literal["development", "test", "production"] = "development"
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO"

    # Report Export Configuration
    report: ReportSettings = ReportSettings()


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
