"""
Shared configuration management for the Todo Auth service.
"""

from pathlib import Path
from typing import Optional

from pydantic import AliasChoices, Field, SecretStr, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from .logging import get_logger, resolve_log_level

ENV_FILE = ".env"

logger = get_logger("auth.config")


class BaseConfig(BaseSettings):
    """Base configuration class with common settings."""

    model_config = SettingsConfigDict(
        env_prefix="TODO_AUTH_",
        env_file=ENV_FILE,
        case_sensitive=False,
        extra="ignore",
        populate_by_name=True,
    )

    # Environment
    env: str = "local"
    log_level: str = "info"

    # Security
    jwt_secret: Optional[SecretStr] = Field(
        default=None,
        validation_alias=AliasChoices("jwt_secret", "TODO_AUTH_JWT_SECRET", "JWT_SECRET"),
    )
    access_token_ttl_seconds: int = Field(default=15 * 60, gt=0)
    refresh_token_ttl_seconds: int = Field(default=7 * 24 * 60 * 60, gt=0)

    @field_validator("log_level")
    @classmethod
    def check_log_level(cls, value: str) -> str:
        resolve_log_level(value)
        return value.strip().lower()

    @model_validator(mode="after")
    def check_token_lifetimes(self) -> "BaseConfig":
        if self.access_token_ttl_seconds >= self.refresh_token_ttl_seconds:
            raise ValueError(
                "access_token_ttl_seconds must be shorter than refresh_token_ttl_seconds"
            )
        return self


class ServiceConfig(BaseConfig):
    """Service-specific configuration."""

    service_name: str
    port: int
    host: str = "0.0.0.0"

    def __init__(self, service_name: str, port: int, **kwargs):
        super().__init__(service_name=service_name, port=port, **kwargs)


def get_config(service_name: str, port: int) -> ServiceConfig:
    """Get configuration for a specific service."""
    if not Path(ENV_FILE).exists():
        logger.warning(".env file not found, using system environment variables")
    return ServiceConfig(service_name=service_name, port=port)
