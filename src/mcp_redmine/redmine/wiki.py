"""Module for Redmine wiki operations."""

import logging
from typing import Any
from urllib.parse import quote

from .client import RedmineClient, project_path

logger = logging.getLogger("mcp-redmine.redmine")


def _wiki_path(project_id: int | str, title: str, version: int | None = None) -> str:
    path = f"{project_path(project_id)}/wiki/{quote(title, safe='')}"
    if version:
        path = f"{path}/{version}"
    return f"{path}.json"


class WikiMixin(RedmineClient):
    """Mixin for Redmine wiki operations."""

    def list_wiki_pages(self, project_id: int | str) -> list[dict[str, Any]]:
        data = self.get(f"{project_path(project_id)}/wiki/index.json")
        return (data or {}).get("wiki_pages", [])

    def get_wiki_page(
        self, project_id: int | str, title: str, version: int | None = None
    ) -> dict[str, Any]:
        """Get a wiki page, optionally at a specific version.

        Args:
            project_id: Project ID or identifier
            title: Page title
            version: Historic version number, latest when omitted

        Returns:
            The `wiki_page` object
        """
        data = self.get(_wiki_path(project_id, title, version))
        return (data or {}).get("wiki_page", {})

    def create_or_update_wiki_page(
        self, project_id: int | str, title: str, wiki_page: dict[str, Any]
    ) -> None:
        # Redmine creates the page when it does not exist yet
        self.put(_wiki_path(project_id, title), json={"wiki_page": wiki_page})
        logger.info(f"Saved wiki page '{title}' in project {project_id}")

    def delete_wiki_page(self, project_id: int | str, title: str) -> None:
        self.delete(_wiki_path(project_id, title))
        logger.info(f"Deleted wiki page '{title}' in project {project_id}")
