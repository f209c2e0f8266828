"""
SDK configuration using Pydantic Settings.

All environment variables are accessed through PogodocSettings.
Never use os.getenv() directly in business logic.
"""

from urllib.parse import urlparse

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from .exceptions import ConfigurationError

DEFAULT_BASE_URL = "https://api.pogodoc.com/v1"
DEFAULT_REQUEST_TIMEOUT = 60.0


class PogodocSettings(BaseSettings):
    """SDK settings loaded from environment variables"""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",
    )

    POGODOC_API_TOKEN: str | None = Field(
        default=None,
        description="Bearer token for the Pogodoc API",
    )
    POGODOC_BASE_URL: str = Field(
        default=DEFAULT_BASE_URL,
        description="Pogodoc API base URL",
    )
    POGODOC_REQUEST_TIMEOUT: float = Field(
        default=DEFAULT_REQUEST_TIMEOUT,
        description="Per-request transport timeout in seconds",
    )


def validate_base_url(base_url: str) -> str:
    """
    Check that base_url is an absolute http(s) URL.

    Returns:
        str: The base URL without a trailing slash

    Raises:
        ConfigurationError: If the URL has no http/https scheme or no host
    """
    parsed = urlparse(base_url or "")
    if parsed.scheme not in ("http", "https") or not parsed.netloc:
        raise ConfigurationError(
            f"Invalid base URL '{base_url}': expected an absolute http(s) URL",
            details={"base_url": base_url},
        )
    return base_url.rstrip("/")


def require_token(token: str | None) -> str:
    """Return token, or raise ConfigurationError if it is missing."""
    if not token:
        raise ConfigurationError(
            "API token is required. Please provide it either as a parameter "
            "or set the POGODOC_API_TOKEN environment variable"
        )
    return token
