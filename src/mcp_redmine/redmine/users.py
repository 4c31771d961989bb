"""Module for Redmine user operations."""

from typing import Any

from .client import RedmineClient, include_param


class UsersMixin(RedmineClient):
    """Mixin for Redmine user operations."""

    def list_users(self, params: dict[str, Any] | None = None) -> dict[str, Any]:
        """List users. Requires administrator privileges on most servers."""
        return self.get("/users.json", params=params) or {}

    def get_current_user(self) -> dict[str, Any]:
        data = self.get("/users/current.json")
        return (data or {}).get("user", {})

    def get_user(
        self, user_id: int, include: list[str] | None = None
    ) -> dict[str, Any]:
        data = self.get(f"/users/{user_id}.json", params=include_param(include))
        return (data or {}).get("user", {})
