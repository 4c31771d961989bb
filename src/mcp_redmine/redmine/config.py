"""Configuration module for Redmine API interactions."""

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Literal
from urllib.parse import urlparse

from ..exceptions import ConfigurationError
from ..utils.env import getenv_int, is_env_ssl_verify, is_env_truthy

DEFAULT_REQUEST_TIMEOUT_MS = 30000
DEFAULT_MAX_RETRIES = 3


@dataclass
class RedmineConfig:
    """Redmine API configuration.

    Exactly one authentication mode is used: an API key sent in the
    X-Redmine-API-Key header, or HTTP basic auth with username and password.
    """

    url: str  # Base URL for Redmine
    auth_type: Literal["api_key", "basic"]
    api_key: str | None = None
    username: str | None = None
    password: str | None = None
    ssl_verify: bool = True  # Whether to verify SSL certificates
    ca_cert: str | None = None  # Path to a CA bundle
    request_timeout: int = DEFAULT_REQUEST_TIMEOUT_MS  # Milliseconds
    max_retries: int = DEFAULT_MAX_RETRIES  # Retries after the first attempt
    retry_writes: bool = False  # Also retry POST/PUT/DELETE

    def __post_init__(self) -> None:
        self.url = validate_url(self.url)
        if self.auth_type == "api_key" and not self.api_key:
            raise ConfigurationError("API key authentication requires an API key")
        if self.auth_type == "basic" and not (self.username and self.password):
            raise ConfigurationError(
                "Basic authentication requires both username and password"
            )
        if self.request_timeout <= 0:
            raise ConfigurationError("Request timeout must be a positive number of ms")
        if self.max_retries < 0:
            raise ConfigurationError("Max retries must not be negative")
        if self.ca_cert and not Path(self.ca_cert).is_file():
            raise ConfigurationError(f"CA certificate file not found: {self.ca_cert}")

    @property
    def timeout_seconds(self) -> float:
        return self.request_timeout / 1000

    @property
    def verify(self) -> bool | str:
        """Value for the requests `verify` option."""
        if not self.ssl_verify:
            return False
        return self.ca_cert or True

    @classmethod
    def from_env(cls) -> "RedmineConfig":
        """Create configuration from environment variables.

        Returns:
            RedmineConfig with values from environment variables

        Raises:
            ConfigurationError: If required environment variables are missing,
                contradictory or invalid
        """
        url = os.getenv("REDMINE_URL")
        if not url:
            raise ConfigurationError("Missing required REDMINE_URL environment variable")

        api_key = os.getenv("REDMINE_API_KEY") or None
        username = os.getenv("REDMINE_USERNAME") or None
        password = os.getenv("REDMINE_PASSWORD") or None

        match (bool(api_key), bool(username), bool(password)):
            case (True, False, False):
                auth_type = "api_key"
            case (False, True, True):
                auth_type = "basic"
            case (True, _, _):
                msg = (
                    "Configure either REDMINE_API_KEY or "
                    "REDMINE_USERNAME/REDMINE_PASSWORD, not both"
                )
                raise ConfigurationError(msg)
            case (False, False, False):
                msg = (
                    "Either REDMINE_API_KEY or REDMINE_USERNAME and "
                    "REDMINE_PASSWORD must be provided for authentication"
                )
                raise ConfigurationError(msg)
            case _:
                msg = "REDMINE_USERNAME and REDMINE_PASSWORD must be provided together"
                raise ConfigurationError(msg)

        try:
            request_timeout = getenv_int(
                "REDMINE_REQUEST_TIMEOUT", DEFAULT_REQUEST_TIMEOUT_MS
            )
            max_retries = getenv_int("REDMINE_MAX_RETRIES", DEFAULT_MAX_RETRIES)
        except ValueError as e:
            raise ConfigurationError(str(e)) from e

        return cls(
            url=url,
            auth_type=auth_type,
            api_key=api_key,
            username=username,
            password=password,
            ssl_verify=is_env_ssl_verify("REDMINE_SSL_VERIFY"),
            ca_cert=os.getenv("REDMINE_CA_CERT") or None,
            request_timeout=request_timeout,
            max_retries=max_retries,
            retry_writes=is_env_truthy("REDMINE_RETRY_WRITES", "false"),
        )


def validate_url(url: str) -> str:
    """Check that a base URL is an absolute http(s) URL.

    Returns:
        The URL without a trailing slash.

    Raises:
        ConfigurationError: If the URL cannot be used as a base URL.
    """
    parsed = urlparse(url.strip())
    if parsed.scheme not in ("http", "https") or not parsed.netloc:
        raise ConfigurationError(f"Invalid Redmine URL: {url!r}")
    return url.strip().rstrip("/")
