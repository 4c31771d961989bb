"""Module for Redmine issue operations."""

import logging
from typing import Any

from .client import RedmineClient, include_param

logger = logging.getLogger("mcp-redmine.redmine")


class IssuesMixin(RedmineClient):
    """Mixin for Redmine issue operations."""

    def list_issues(self, params: dict[str, Any] | None = None) -> dict[str, Any]:
        """List issues matching the given filters.

        Args:
            params: Query filters and pagination (offset, limit)

        Returns:
            Redmine response with `issues` and `total_count`
        """
        return self.get("/issues.json", params=params) or {}

    def get_issue(
        self, issue_id: int, include: list[str] | None = None
    ) -> dict[str, Any]:
        """Get a single issue.

        Args:
            issue_id: The issue ID
            include: Associated data to embed (journals, watchers, ...)

        Returns:
            The `issue` object
        """
        data = self.get(f"/issues/{issue_id}.json", params=include_param(include))
        return (data or {}).get("issue", {})

    def create_issue(self, issue: dict[str, Any]) -> dict[str, Any]:
        data = self.post("/issues.json", json={"issue": issue})
        created = (data or {}).get("issue", {})
        logger.info(f"Created issue #{created.get('id')}")
        return created

    def update_issue(self, issue_id: int, issue: dict[str, Any]) -> None:
        self.put(f"/issues/{issue_id}.json", json={"issue": issue})
        logger.info(f"Updated issue #{issue_id}")

    def delete_issue(self, issue_id: int) -> None:
        self.delete(f"/issues/{issue_id}.json")
        logger.info(f"Deleted issue #{issue_id}")
