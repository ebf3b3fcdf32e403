"""
Shared configuration management for the permission engine.
"""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class BaseConfig(BaseSettings):
    """Base configuration class with common settings."""

    model_config = SettingsConfigDict(
        env_prefix="PERMISSIONS_",
        env_file=".env",
        case_sensitive=False,
        extra="ignore"
    )

    # Environment
    env: str = Field(default="local", description="Deployment environment")
    log_level: str = Field(default="info", description="Root log level")
    log_json: bool = Field(default=True, description="Render logs as JSON")

    # Observability
    metrics_enabled: bool = Field(default=True, description="Record decision metrics")
    explain_denials: bool = Field(default=False, description="Log the reason for every denied check")


class ServiceConfig(BaseConfig):
    """Service-specific configuration."""

    service_name: str = "permissions"


def get_config(service_name: str = "permissions") -> ServiceConfig:
    """Get configuration for a specific service."""
    return ServiceConfig(service_name=service_name)
