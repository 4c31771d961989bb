"""Base client module for Redmine API interactions."""

import logging
from typing import Any
from urllib.parse import quote

import requests

from ..exceptions import (
    RedmineApiError,
    RedmineAuthenticationError,
    RedmineNetworkError,
    RedmineRequestError,
)
from .config import RedmineConfig
from .retry import RetryPolicy

logger = logging.getLogger("mcp-redmine.redmine")


class RedmineClient:
    """Base client for Redmine API interactions."""

    def __init__(
        self,
        config: RedmineConfig | None = None,
        session: requests.Session | None = None,
        retry_policy: RetryPolicy | None = None,
    ) -> None:
        """Initialize the Redmine client with a given configuration.

        Args:
            config: Redmine configuration object. If None, will be loaded from
                environment variables.
            session: HTTP session to use, mainly for tests.
            retry_policy: Retry policy for outbound calls. Defaults to one
                built from the configuration.
        """
        self.config = config or RedmineConfig.from_env()
        self.session = session or requests.Session()
        self.retry_policy = retry_policy or RetryPolicy(
            max_retries=self.config.max_retries,
            retry_writes=self.config.retry_writes,
        )
        self._configure_session()

    def _configure_session(self) -> None:
        self.session.headers.update(
            {"Content-Type": "application/json", "Accept": "application/json"}
        )
        if self.config.auth_type == "api_key":
            self.session.headers["X-Redmine-API-Key"] = self.config.api_key or ""
        else:
            self.session.auth = (self.config.username or "", self.config.password or "")

        self.session.verify = self.config.verify
        if not self.config.ssl_verify:
            logger.warning(
                f"SSL verification disabled for Redmine at {self.config.url}. "
                "This is insecure and should only be used in testing environments."
            )

    def _build_url(self, path: str) -> str:
        return f"{self.config.url}/{path.lstrip('/')}"

    def request(
        self,
        method: str,
        path: str,
        params: dict[str, Any] | None = None,
        json: Any = None,
    ) -> Any:
        """Send a request to Redmine and decode the JSON answer.

        Args:
            method: HTTP method
            path: API path relative to the base URL (e.g. "/issues.json")
            params: Query parameters
            json: JSON request body

        Returns:
            Decoded JSON, or None when the response has no body.

        Raises:
            RedmineApiError: If Redmine answered with a non-2xx status
            RedmineNetworkError: If no response was received
            RedmineRequestError: If the request could not be built
        """
        method = method.upper()
        url = self._build_url(path)
        description = f"{method} {path}"

        def send() -> Any:
            return self._send(method, url, params, json)

        if self.retry_policy.applies_to(method):
            return self.retry_policy.call(send, description=description)
        return send()

    def _send(
        self,
        method: str,
        url: str,
        params: dict[str, Any] | None,
        json: Any,
    ) -> Any:
        logger.debug(f"Sending {method} request to {url} params={params}")
        try:
            response = self.session.request(
                method,
                url,
                params=params,
                json=json,
                timeout=self.config.timeout_seconds,
            )
        except (requests.Timeout, requests.ConnectionError) as e:
            logger.warning(f"No response for {method} {url}: {e}")
            raise RedmineNetworkError(str(e)) from e
        except (requests.RequestException, TypeError, ValueError) as e:
            logger.error(f"Could not send {method} {url}: {e}")
            raise RedmineRequestError(str(e)) from e

        if response.status_code >= 400:
            raise api_error_from_response(response)

        if response.status_code == 204 or not response.content:
            return None
        try:
            return response.json()
        except ValueError as e:
            raise RedmineApiError(
                f"Redmine API error ({response.status_code}): invalid JSON in response",
                status_code=response.status_code,
            ) from e

    def get(self, path: str, params: dict[str, Any] | None = None) -> Any:
        return self.request("GET", path, params=params)

    def post(self, path: str, json: Any = None) -> Any:
        return self.request("POST", path, json=json)

    def put(self, path: str, json: Any = None) -> Any:
        return self.request("PUT", path, json=json)

    def delete(self, path: str) -> Any:
        return self.request("DELETE", path)

    def custom_request(
        self,
        method: str,
        path: str,
        data: Any = None,
        params: dict[str, Any] | None = None,
    ) -> Any:
        """Send an arbitrary request relative to the Redmine base URL."""
        return self.request(method, path, params=params, json=data)

    def close(self) -> None:
        self.session.close()


def api_error_from_response(response: requests.Response) -> RedmineApiError:
    """Build a RedmineApiError from an error response.

    Redmine reports validation failures as {"errors": [...]}; other errors
    may carry {"error": "..."} or a plain text body.
    """
    status_code = response.status_code
    errors: list[str] = []
    try:
        data = response.json()
    except ValueError:
        data = response.text

    if isinstance(data, dict) and data.get("errors"):
        raw_errors = data["errors"]
        if isinstance(raw_errors, list):
            errors = [str(e) for e in raw_errors]
        else:
            errors = [str(raw_errors)]
    elif isinstance(data, dict) and data.get("error"):
        errors = [str(data["error"])]
    elif isinstance(data, str) and data.strip():
        errors = [data.strip()]

    message = f"Redmine API error ({status_code})"
    if errors:
        message = f"{message}: {', '.join(errors)}"

    logger.error(f"HTTP error {status_code} from {response.url}: {message}")

    error_class = (
        RedmineAuthenticationError if status_code in (401, 403) else RedmineApiError
    )
    return error_class(message, status_code=status_code, errors=errors)


def project_path(project_id: int | str) -> str:
    """Path of a project, with the ID or identifier encoded as one segment."""
    return f"/projects/{quote(str(project_id), safe='')}"


def include_param(include: list[str] | None) -> dict[str, str] | None:
    """Query parameters for Redmine's `include` option."""
    if not include:
        return None
    return {"include": ",".join(include)}
