"""Module for Redmine enumeration lookups."""

from typing import Any

from .client import RedmineClient


class EnumerationsMixin(RedmineClient):
    """Mixin for statuses, priorities and trackers."""

    def list_issue_statuses(self) -> list[dict[str, Any]]:
        data = self.get("/issue_statuses.json")
        return (data or {}).get("issue_statuses", [])

    def list_issue_priorities(self) -> list[dict[str, Any]]:
        data = self.get("/enumerations/issue_priorities.json")
        return (data or {}).get("issue_priorities", [])

    def list_trackers(self) -> list[dict[str, Any]]:
        data = self.get("/trackers.json")
        return (data or {}).get("trackers", [])
