"""
Shared configuration management for the GitHub clients.
"""

from typing import Optional

from pydantic import Field, SecretStr
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_API_URL = "https://api.github.com"
DEFAULT_USER_AGENT = "github-reactive"


class BaseConfig(BaseSettings):
    """Client configuration read from GITHUB_CLIENT_* environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="GITHUB_CLIENT_",
        env_file=".env",
        case_sensitive=False,
        extra="ignore"
    )

    # Logging
    enable_logging: bool = Field(default=False)
    log_level: str = Field(default="info")

    # API
    api_url: str = Field(default=DEFAULT_API_URL)
    user_agent: str = Field(default=DEFAULT_USER_AGENT)
    timeout: float = Field(default=10.0, gt=0)
    per_page: Optional[int] = Field(default=None, ge=1, le=100)

    # Credentials
    token: Optional[SecretStr] = Field(default=None)
    login: Optional[str] = Field(default=None)
    password: Optional[SecretStr] = Field(default=None)

    # Observability
    enable_tracing: bool = Field(default=False)
    enable_console_tracing: bool = Field(default=False)


def get_config(**overrides) -> BaseConfig:
    """Load configuration, with keyword overrides taking precedence."""
    return BaseConfig(**overrides)
