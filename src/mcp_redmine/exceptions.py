from collections.abc import Sequence


class MCPRedmineError(Exception):
    """Base exception for MCP-Redmine errors."""

    pass


class ConfigurationError(MCPRedmineError):
    """Raised when the server configuration is missing or contradictory."""

    pass


class ValidationError(MCPRedmineError):
    """Raised when tool arguments fail validation."""

    def __init__(self, message: str, fields: Sequence[str] | None = None) -> None:
        super().__init__(message)
        self.fields = list(fields or [])


class RedmineApiError(MCPRedmineError):
    """Raised when Redmine answers with a non-2xx status."""

    def __init__(
        self,
        message: str,
        status_code: int | None = None,
        errors: Sequence[str] | None = None,
    ) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.errors = list(errors or [])


class RedmineAuthenticationError(RedmineApiError):
    """Raised when Redmine API authentication fails (401/403)."""

    pass


class RedmineNetworkError(MCPRedmineError):
    """Raised when no response was received from Redmine."""

    pass


class RedmineRequestError(MCPRedmineError):
    """Raised when a request could not be built or sent."""

    pass


def format_error(error: BaseException) -> str:
    """Render an exception as the text of an error tool result.

    Args:
        error: The exception raised while handling a tool call.

    Returns:
        A human-readable, single-paragraph message.
    """
    if isinstance(error, ValidationError):
        fields = f" ({', '.join(error.fields)})" if error.fields else ""
        return f"Validation error{fields}: {error}"
    if isinstance(error, RedmineApiError):
        return str(error)
    if isinstance(error, RedmineNetworkError):
        detail = f" ({error})" if str(error) else ""
        return (
            "No response from Redmine server. "
            f"Please check the server URL and network connection.{detail}"
        )
    if isinstance(error, RedmineRequestError):
        return f"Request setup error: {error}"
    if isinstance(error, ConfigurationError):
        return f"Configuration error: {error}"
    if str(error):
        return f"Error: {error}"
    return f"An unknown error occurred ({type(error).__name__})"
