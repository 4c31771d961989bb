"""Redmine API module for mcp_redmine.

This module provides the client used to talk to the Redmine REST API.
"""

from .client import RedmineClient
from .config import RedmineConfig
from .enumerations import EnumerationsMixin
from .issues import IssuesMixin
from .projects import ProjectsMixin
from .retry import RetryPolicy
from .search import SearchMixin
from .time_entries import TimeEntriesMixin
from .users import UsersMixin
from .wiki import WikiMixin


class RedmineFetcher(
    IssuesMixin,
    ProjectsMixin,
    UsersMixin,
    TimeEntriesMixin,
    WikiMixin,
    EnumerationsMixin,
    SearchMixin,
):
    """
    The main Redmine client class providing access to all Redmine operations.

    This class inherits from multiple mixins that provide specific functionality:
    - IssuesMixin: Issue CRUD
    - ProjectsMixin: Projects and versions
    - UsersMixin: User lookups
    - TimeEntriesMixin: Time tracking
    - WikiMixin: Wiki pages
    - EnumerationsMixin: Statuses, priorities, trackers
    - SearchMixin: Full-text search

    The custom request escape hatch is inherited from RedmineClient.
    """

    pass


__all__ = ["RedmineConfig", "RedmineClient", "RedmineFetcher", "RetryPolicy"]
