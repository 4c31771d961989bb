"""Redmine tool groups, in catalog order."""

from .custom import custom
from .enumerations import enumerations
from .issues import issues
from .projects import projects
from .search import search
from .time_entries import time_entries
from .users import users
from .wiki import wiki

TOOL_GROUPS = [
    issues,
    projects,
    users,
    time_entries,
    wiki,
    enumerations,
    search,
    custom,
]

__all__ = ["TOOL_GROUPS"]
