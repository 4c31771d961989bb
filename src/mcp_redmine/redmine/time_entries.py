"""Module for Redmine time tracking operations."""

import logging
from typing import Any

from .client import RedmineClient

logger = logging.getLogger("mcp-redmine.redmine")


class TimeEntriesMixin(RedmineClient):
    """Mixin for Redmine time entry operations."""

    def list_time_entries(
        self, params: dict[str, Any] | None = None
    ) -> dict[str, Any]:
        return self.get("/time_entries.json", params=params) or {}

    def get_time_entry(self, entry_id: int) -> dict[str, Any]:
        data = self.get(f"/time_entries/{entry_id}.json")
        return (data or {}).get("time_entry", {})

    def create_time_entry(self, time_entry: dict[str, Any]) -> dict[str, Any]:
        """Log time against an issue or a project.

        Args:
            time_entry: Fields of the new entry; needs `issue_id` or
                `project_id`, `hours` and `activity_id`

        Returns:
            The created `time_entry` object
        """
        data = self.post("/time_entries.json", json={"time_entry": time_entry})
        created = (data or {}).get("time_entry", {})
        logger.info(f"Created time entry #{created.get('id')}")
        return created

    def update_time_entry(self, entry_id: int, time_entry: dict[str, Any]) -> None:
        self.put(f"/time_entries/{entry_id}.json", json={"time_entry": time_entry})
        logger.info(f"Updated time entry #{entry_id}")

    def delete_time_entry(self, entry_id: int) -> None:
        self.delete(f"/time_entries/{entry_id}.json")
        logger.info(f"Deleted time entry #{entry_id}")

    def list_time_entry_activities(self) -> list[dict[str, Any]]:
        data = self.get("/enumerations/time_entry_activities.json")
        return (data or {}).get("time_entry_activities", [])
