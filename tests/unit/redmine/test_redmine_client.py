"""Tests for the Redmine HTTP client."""

import pytest
import requests

from mcp_redmine.exceptions import (
    RedmineApiError,
    RedmineAuthenticationError,
    RedmineNetworkError,
    RedmineRequestError,
)
from mcp_redmine.redmine import RedmineConfig, RedmineFetcher, RetryPolicy
from mcp_redmine.redmine.client import RedmineClient
from tests.utils.factories import ResponseFactory


class TestSessionSetup:
    def test_api_key_header(self, redmine_config, mock_session):
        RedmineClient(config=redmine_config, session=mock_session)

        assert mock_session.headers["X-Redmine-API-Key"] == "test-api-key"
        assert mock_session.headers["Accept"] == "application/json"
        assert mock_session.headers["Content-Type"] == "application/json"
        assert mock_session.verify is True

    def test_basic_auth(self, mock_session):
        config = RedmineConfig(
            url="https://redmine.example.com",
            auth_type="basic",
            username="admin",
            password="pw",
            ssl_verify=False,
        )
        RedmineClient(config=config, session=mock_session)

        assert mock_session.auth == ("admin", "pw")
        assert "X-Redmine-API-Key" not in mock_session.headers
        assert mock_session.verify is False

    def test_retry_policy_from_config(self, mock_session):
        config = RedmineConfig(
            url="https://redmine.example.com",
            auth_type="api_key",
            api_key="k",
            max_retries=5,
            retry_writes=True,
        )
        client = RedmineClient(config=config, session=mock_session)

        assert client.retry_policy.max_retries == 5
        assert client.retry_policy.retry_writes is True


class TestRequest:
    def test_get_builds_url_and_timeout(self, fetcher, mock_session):
        mock_session.request.return_value = ResponseFactory.create(
            json_data={"issues": []}
        )

        result = fetcher.get("/issues.json", params={"limit": 5})

        assert result == {"issues": []}
        mock_session.request.assert_called_once_with(
            "GET",
            "https://redmine.example.com/issues.json",
            params={"limit": 5},
            json=None,
            timeout=30.0,
        )

    def test_empty_body_returns_none(self, fetcher, mock_session):
        mock_session.request.return_value = ResponseFactory.empty()
        assert fetcher.delete("/issues/1.json") is None

    def test_invalid_json_raises_api_error(self, fetcher, mock_session):
        mock_session.request.return_value = ResponseFactory.create(text="<html>")

        with pytest.raises(RedmineApiError, match="invalid JSON"):
            fetcher.get("/issues.json")

    def test_validation_errors_are_collected(self, fetcher, mock_session):
        mock_session.request.return_value = ResponseFactory.create(
            status_code=422,
            json_data={"errors": ["Subject cannot be blank", "Tracker is invalid"]},
        )

        with pytest.raises(RedmineApiError) as exc_info:
            fetcher.post("/issues.json", json={"issue": {}})

        error = exc_info.value
        assert error.status_code == 422
        assert error.errors == ["Subject cannot be blank", "Tracker is invalid"]
        assert str(error) == (
            "Redmine API error (422): Subject cannot be blank, Tracker is invalid"
        )

    def test_plain_text_error_body(self, fetcher, mock_session):
        mock_session.request.return_value = ResponseFactory.create(
            status_code=404, text="Not Found"
        )

        with pytest.raises(RedmineApiError) as exc_info:
            fetcher.get("/issues/999.json")

        assert exc_info.value.status_code == 404
        assert exc_info.value.errors == ["Not Found"]

    @pytest.mark.parametrize("status", [401, 403])
    def test_auth_errors(self, fetcher, mock_session, status):
        mock_session.request.return_value = ResponseFactory.create(
            status_code=status, text=""
        )

        with pytest.raises(RedmineAuthenticationError) as exc_info:
            fetcher.get("/users/current.json")

        assert str(exc_info.value) == f"Redmine API error ({status})"

    def test_connection_error_becomes_network_error(self, fetcher, mock_session):
        mock_session.request.side_effect = requests.ConnectionError("refused")

        with pytest.raises(RedmineNetworkError, match="refused"):
            fetcher.get("/issues.json")

        # first attempt plus three retries
        assert mock_session.request.call_count == 4

    def test_invalid_request_becomes_request_error(self, fetcher, mock_session):
        mock_session.request.side_effect = requests.exceptions.InvalidURL("bad url")

        with pytest.raises(RedmineRequestError, match="bad url"):
            fetcher.get("/issues.json")

        mock_session.request.assert_called_once()


class TestRetryIntegration:
    def test_get_retried_after_503(self, fetcher, mock_session, no_sleep):
        mock_session.request.side_effect = [
            ResponseFactory.create(status_code=503, text="Service Unavailable"),
            ResponseFactory.create(json_data={"user": {"id": 1}}),
        ]

        assert fetcher.get_current_user() == {"id": 1}
        assert mock_session.request.call_count == 2
        no_sleep.assert_called_once_with(2.0)

    def test_get_fails_after_retries_exhausted(self, fetcher, mock_session, no_sleep):
        mock_session.request.return_value = ResponseFactory.create(
            status_code=503, text="Service Unavailable"
        )

        with pytest.raises(RedmineApiError) as exc_info:
            fetcher.get_current_user()

        assert exc_info.value.status_code == 503
        assert mock_session.request.call_count == 4
        assert no_sleep.call_count == 3

    def test_writes_not_retried_by_default(self, fetcher, mock_session, no_sleep):
        mock_session.request.return_value = ResponseFactory.create(
            status_code=503, text="Service Unavailable"
        )

        with pytest.raises(RedmineApiError):
            fetcher.create_issue({"project_id": 1, "subject": "x"})

        mock_session.request.assert_called_once()
        no_sleep.assert_not_called()

    def test_writes_retried_when_enabled(self, redmine_config, mock_session, no_sleep):
        fetcher = RedmineFetcher(
            config=redmine_config,
            session=mock_session,
            retry_policy=RetryPolicy(max_retries=1, retry_writes=True, sleep=no_sleep),
        )
        mock_session.request.side_effect = [
            ResponseFactory.create(status_code=502, text="Bad Gateway"),
            ResponseFactory.empty(),
        ]

        fetcher.delete_issue(7)

        assert mock_session.request.call_count == 2
