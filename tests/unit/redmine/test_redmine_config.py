"""Tests for the Redmine configuration module."""

import os
from unittest.mock import patch

import pytest

from mcp_redmine.exceptions import ConfigurationError
from mcp_redmine.redmine.config import RedmineConfig, validate_url


def test_from_env_api_key(clean_env):
    """Test that from_env picks API key authentication."""
    with patch.dict(
        os.environ,
        {
            "REDMINE_URL": "https://redmine.example.com/",
            "REDMINE_API_KEY": "secret",
        },
    ):
        config = RedmineConfig.from_env()

    assert config.url == "https://redmine.example.com"
    assert config.auth_type == "api_key"
    assert config.api_key == "secret"
    assert config.ssl_verify is True
    assert config.request_timeout == 30000
    assert config.max_retries == 3
    assert config.retry_writes is False


def test_from_env_basic_auth(clean_env):
    with patch.dict(
        os.environ,
        {
            "REDMINE_URL": "http://localhost:3000",
            "REDMINE_USERNAME": "admin",
            "REDMINE_PASSWORD": "pw",
            "REDMINE_SSL_VERIFY": "false",
            "REDMINE_REQUEST_TIMEOUT": "5000",
            "REDMINE_MAX_RETRIES": "0",
            "REDMINE_RETRY_WRITES": "true",
        },
    ):
        config = RedmineConfig.from_env()

    assert config.auth_type == "basic"
    assert config.username == "admin"
    assert config.password == "pw"
    assert config.ssl_verify is False
    assert config.verify is False
    assert config.timeout_seconds == 5.0
    assert config.max_retries == 0
    assert config.retry_writes is True


def test_from_env_missing_url(clean_env):
    with patch.dict(os.environ, {"REDMINE_API_KEY": "secret"}):
        with pytest.raises(ConfigurationError, match="REDMINE_URL"):
            RedmineConfig.from_env()


@pytest.mark.parametrize(
    "env,message",
    [
        ({}, "must be provided for authentication"),
        (
            {"REDMINE_API_KEY": "k", "REDMINE_USERNAME": "u", "REDMINE_PASSWORD": "p"},
            "not both",
        ),
        ({"REDMINE_USERNAME": "u"}, "must be provided together"),
        ({"REDMINE_PASSWORD": "p"}, "must be provided together"),
    ],
)
def test_from_env_auth_modes(clean_env, env, message):
    """Exactly one authentication mode must be configured."""
    with patch.dict(os.environ, {"REDMINE_URL": "https://redmine.example.com", **env}):
        with pytest.raises(ConfigurationError, match=message):
            RedmineConfig.from_env()


def test_from_env_invalid_integer(clean_env):
    with patch.dict(
        os.environ,
        {
            "REDMINE_URL": "https://redmine.example.com",
            "REDMINE_API_KEY": "k",
            "REDMINE_REQUEST_TIMEOUT": "soon",
        },
    ):
        with pytest.raises(ConfigurationError, match="REDMINE_REQUEST_TIMEOUT"):
            RedmineConfig.from_env()


@pytest.mark.parametrize("url", ["redmine.example.com", "ftp://redmine", "https://", ""])
def test_invalid_urls_rejected(url):
    with pytest.raises(ConfigurationError, match="Invalid Redmine URL"):
        validate_url(url)


def test_non_positive_timeout_rejected():
    with pytest.raises(ConfigurationError, match="timeout"):
        RedmineConfig(
            url="https://redmine.example.com",
            auth_type="api_key",
            api_key="k",
            request_timeout=0,
        )


def test_negative_retries_rejected():
    with pytest.raises(ConfigurationError, match="retries"):
        RedmineConfig(
            url="https://redmine.example.com",
            auth_type="api_key",
            api_key="k",
            max_retries=-1,
        )


def test_ca_cert_must_exist(tmp_path):
    with pytest.raises(ConfigurationError, match="CA certificate"):
        RedmineConfig(
            url="https://redmine.example.com",
            auth_type="api_key",
            api_key="k",
            ca_cert=str(tmp_path / "missing.pem"),
        )


def test_verify_uses_ca_cert(tmp_path):
    ca_file = tmp_path / "ca.pem"
    ca_file.write_text("-----BEGIN CERTIFICATE-----")
    config = RedmineConfig(
        url="https://redmine.example.com",
        auth_type="api_key",
        api_key="k",
        ca_cert=str(ca_file),
    )
    assert config.verify == str(ca_file)


def test_basic_auth_requires_password():
    with pytest.raises(ConfigurationError, match="username and password"):
        RedmineConfig(url="https://redmine.example.com", auth_type="basic", username="u")
