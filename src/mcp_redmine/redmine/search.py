"""Module for Redmine full-text search."""

from typing import Any

from .client import RedmineClient


class SearchMixin(RedmineClient):
    """Mixin for Redmine search operations."""

    def search(self, params: dict[str, Any]) -> dict[str, Any]:
        """Run a full-text search.

        Boolean filters are sent as "1"/"0", which is what Redmine expects in
        the query string.

        Args:
            params: Query (`q`) plus scope, type filters and pagination

        Returns:
            Redmine response with `results` and `total_count`
        """
        query = {
            key: ("1" if value else "0") if isinstance(value, bool) else value
            for key, value in params.items()
            if value is not None
        }
        return self.get("/search.json", params=query) or {}
