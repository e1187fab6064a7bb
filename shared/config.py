"""
Shared configuration management for the Employee Gateway.
"""

from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class BaseConfig(BaseSettings):
    """Base configuration class with common settings."""

    model_config = SettingsConfigDict(
        env_prefix="EMPLOYEE_GATEWAY_",
        env_file=".env",
        case_sensitive=False,
        extra="allow"
    )

    # Environment
    env: str = Field(default="local")
    log_level: str = Field(default="info")

    # Upstream employee API
    employee_api_base_url: str = Field(default="http://localhost:8112/api/v1/employee")
    employee_api_connect_timeout: float = Field(default=5.0, gt=0)
    employee_api_read_timeout: float = Field(default=30.0, gt=0)

    # Retry policy for rate-limited upstream calls
    retry_max_attempts: int = Field(default=3, ge=1)
    retry_initial_delay_seconds: float = Field(default=2.0, ge=0)
    retry_multiplier: int = Field(default=2, ge=1)

    # Listing cache
    cache_ttl_seconds: float = Field(default=60.0, gt=0)

    # Observability
    enable_tracing: bool = Field(default=False)
    otel_exporter: Optional[str] = Field(default=None)
    enable_console_tracing: bool = Field(default=False)


class ServiceConfig(BaseConfig):
    """Service-specific configuration."""

    service_name: str
    port: int
    host: str = "0.0.0.0"

    def __init__(self, service_name: str, port: int, **kwargs):
        super().__init__(service_name=service_name, port=port, **kwargs)


def get_config(service_name: str, port: int, **overrides) -> ServiceConfig:
    """Get configuration for a specific service."""
    return ServiceConfig(service_name=service_name, port=port, **overrides)
