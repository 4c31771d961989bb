"""Module for Redmine project operations."""

from typing import Any

from .client import RedmineClient, include_param, project_path


class ProjectsMixin(RedmineClient):
    """Mixin for Redmine project operations."""

    def list_projects(self, params: dict[str, Any] | None = None) -> dict[str, Any]:
        return self.get("/projects.json", params=params) or {}

    def get_project(
        self, project_id: int | str, include: list[str] | None = None
    ) -> dict[str, Any]:
        """Get a project by numeric ID or identifier.

        Args:
            project_id: Project ID or identifier
            include: Associated data to embed (trackers, issue_categories,
                enabled_modules, time_entry_activities)

        Returns:
            The `project` object
        """
        data = self.get(f"{project_path(project_id)}.json", params=include_param(include))
        return (data or {}).get("project", {})

    def list_versions(self, project_id: int | str) -> list[dict[str, Any]]:
        data = self.get(f"{project_path(project_id)}/versions.json")
        return (data or {}).get("versions", [])
