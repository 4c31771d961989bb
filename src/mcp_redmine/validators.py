"""Input models for the Redmine tools.

Every tool validates its raw arguments into one of these pydantic models
before any request is sent. Numbers given as numeric strings are accepted
and coerced; ranges, dates and composite rules are checked here.
"""

import re
from collections.abc import Mapping
from typing import Annotated, Any, Literal, TypeVar

import pydantic
from pydantic import (
    AfterValidator,
    BaseModel,
    BeforeValidator,
    ConfigDict,
    Field,
    field_validator,
    model_validator,
)

from .exceptions import ValidationError

DATE_PATTERN = re.compile(r"^\d{4}-\d{2}-\d{2}$")
DATE_ERROR = "Invalid date format (YYYY-MM-DD)"
# Redmine project identifiers; all-digit strings are IDs
PROJECT_IDENTIFIER_PATTERN = re.compile(r"^(?!\d+$)[a-z0-9_-]{1,100}$")

DEFAULT_OFFSET = 0
DEFAULT_LIMIT = 25
MAX_LIMIT = 100


def _check_date(value: str) -> str:
    if not DATE_PATTERN.match(value):
        raise ValueError(DATE_ERROR)
    return value


PositiveId = Annotated[int, Field(gt=0)]
DateStr = Annotated[str, AfterValidator(_check_date)]


def _check_project_ref(value: Any) -> Any:
    """Accept a positive project ID or a Redmine project identifier."""
    if isinstance(value, str):
        value = value.strip()
        if value.isascii() and value.isdigit():
            value = int(value)
        elif PROJECT_IDENTIFIER_PATTERN.match(value):
            return value
        else:
            raise ValueError(
                "Project identifier may only contain lowercase letters, "
                "digits, dashes and underscores"
            )
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValueError("Project must be a numeric ID or an identifier")
    if value <= 0:
        raise ValueError("Project ID must be greater than 0")
    return value


ProjectRef = Annotated[int | str, BeforeValidator(_check_project_ref)]

ModelT = TypeVar("ModelT", bound=BaseModel)


class ToolInput(BaseModel):
    """Base class for tool arguments."""

    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    def to_query(self, exclude: set[str] | None = None) -> dict[str, Any]:
        """Set fields as Redmine query parameters."""
        return self.model_dump(exclude_none=True, by_alias=True, exclude=exclude)

    def to_payload(self, exclude: set[str] | None = None) -> dict[str, Any]:
        """Set fields as a Redmine request body.

        `custom_field_values` ({"<field id>": "<value>"}) is sent in Redmine's
        own `custom_fields` shape.
        """
        data = self.to_query(exclude)
        custom_values = data.pop("custom_field_values", None)
        if custom_values:
            data["custom_fields"] = [
                {"id": int(field_id), "value": value}
                for field_id, value in custom_values.items()
            ]
        return data


class PaginationInput(ToolInput):
    offset: int = Field(DEFAULT_OFFSET, ge=0, description="Number of items to skip")
    limit: int = Field(
        DEFAULT_LIMIT,
        ge=1,
        le=MAX_LIMIT,
        description=f"Maximum number of items to return (1-{MAX_LIMIT}, default: {DEFAULT_LIMIT})",
    )


class CustomFieldsMixin(BaseModel):
    custom_field_values: dict[str, str] | None = Field(
        None, description="Custom field values keyed by custom field ID"
    )

    @field_validator("custom_field_values")
    @classmethod
    def _numeric_keys(cls, value: dict[str, str] | None) -> dict[str, str] | None:
        if value and not all(key.strip().isdigit() for key in value):
            raise ValueError("Custom field keys must be numeric custom field IDs")
        return value


class EmptyInput(ToolInput):
    """Tools without arguments."""


# Issues


class ListIssuesInput(PaginationInput):
    project_id: ProjectRef | None = Field(None, description="Project ID or identifier")
    subproject_id: str | None = Field(None, description="Subproject filter (e.g. '!*')")
    tracker_id: PositiveId | None = Field(None, description="Tracker ID")
    status_id: PositiveId | str | None = Field(
        None, description='Status ID or "open"/"closed"/"*"'
    )
    assigned_to_id: PositiveId | str | None = Field(
        None, description='User ID, "me", or group ID'
    )
    parent_id: PositiveId | None = Field(None, description="Parent issue ID")
    category_id: PositiveId | None = Field(None, description="Category ID")
    fixed_version_id: PositiveId | str | None = Field(None, description="Target version ID")
    subject: str | None = Field(None, description="Filter by subject (partial match)")
    created_on: str | None = Field(
        None, description='Created date filter (e.g. "><2024-01-01|2024-12-31")'
    )
    updated_on: str | None = Field(None, description="Updated date filter")
    closed_on: str | None = Field(None, description="Closed date filter")
    start_date: str | None = Field(None, description="Start date filter")
    due_date: str | None = Field(None, description="Due date filter")
    sort: str | None = Field(
        None, description='Sort order (e.g. "priority:desc,updated_on:desc")'
    )


class GetIssueInput(ToolInput):
    id: PositiveId = Field(description="Issue ID")
    include: list[str] = Field(
        default_factory=lambda: ["journals"],
        description=(
            "Additional data to include: journals, watchers, relations, "
            "children, attachments, changesets"
        ),
    )

    @field_validator("include")
    @classmethod
    def _always_journals(cls, value: list[str]) -> list[str]:
        if "journals" not in value:
            return [*value, "journals"]
        return value


class IssueFields(CustomFieldsMixin, ToolInput):
    tracker_id: PositiveId | None = Field(None, description="Tracker ID (e.g. Bug, Feature)")
    status_id: PositiveId | None = Field(None, description="Status ID")
    priority_id: PositiveId | None = Field(None, description="Priority ID")
    category_id: PositiveId | None = Field(None, description="Category ID")
    fixed_version_id: PositiveId | None = Field(None, description="Target version ID")
    assigned_to_id: PositiveId | None = Field(None, description="Assigned user ID")
    parent_issue_id: PositiveId | None = Field(None, description="Parent issue ID")
    description: str | None = Field(None, description="Issue description")
    start_date: DateStr | None = Field(None, description="Start date (YYYY-MM-DD)")
    due_date: DateStr | None = Field(None, description="Due date (YYYY-MM-DD)")
    estimated_hours: float | None = Field(None, gt=0, description="Estimated hours")
    done_ratio: int | None = Field(
        None, ge=0, le=100, description="Completion percentage (0-100)"
    )
    is_private: bool | None = Field(None, description="Whether the issue is private")


class CreateIssueInput(IssueFields):
    project_id: PositiveId = Field(description="Project ID")
    subject: str = Field(min_length=1, max_length=255, description="Issue subject")
    watcher_user_ids: list[PositiveId] | None = Field(
        None, description="User IDs to add as watchers"
    )


class UpdateIssueInput(IssueFields):
    id: PositiveId = Field(description="Issue ID to update")
    project_id: PositiveId | None = Field(None, description="Move to project ID")
    subject: str | None = Field(
        None, min_length=1, max_length=255, description="Issue subject"
    )
    notes: str | None = Field(None, description="Update notes/comment")
    private_notes: bool | None = Field(None, description="Whether the notes are private")


class IssueIdInput(ToolInput):
    id: PositiveId = Field(description="Issue ID")


# Projects


class ListProjectsInput(PaginationInput):
    pass


class GetProjectInput(ToolInput):
    id: ProjectRef = Field(description="Project ID or identifier")
    include: list[str] | None = Field(
        None,
        description=(
            "Additional data to include: trackers, issue_categories, "
            "enabled_modules, time_entry_activities"
        ),
    )


class ProjectRefInput(ToolInput):
    project_id: ProjectRef = Field(description="Project ID or identifier")


# Users


class ListUsersInput(PaginationInput):
    name: str | None = Field(
        None, description="Filter by name (first name, last name, or login)"
    )
    group_id: PositiveId | None = Field(None, description="Filter by group ID")


class GetUserInput(ToolInput):
    id: PositiveId = Field(description="User ID")
    include: list[str] | None = Field(
        None, description="Additional data to include: memberships, groups"
    )


# Time entries


class ListTimeEntriesInput(PaginationInput):
    project_id: ProjectRef | None = Field(None, description="Project ID or identifier")
    issue_id: PositiveId | None = Field(None, description="Issue ID")
    user_id: PositiveId | str | None = Field(None, description='User ID or "me"')
    spent_on: DateStr | None = Field(None, description="Specific date (YYYY-MM-DD)")
    from_date: DateStr | None = Field(
        None, alias="from", description="Start date for range (YYYY-MM-DD)"
    )
    to_date: DateStr | None = Field(
        None, alias="to", description="End date for range (YYYY-MM-DD)"
    )
    activity_id: PositiveId | None = Field(None, description="Time entry activity ID")


class TimeEntryIdInput(ToolInput):
    id: PositiveId = Field(description="Time entry ID")


class TimeEntryFields(CustomFieldsMixin, ToolInput):
    issue_id: PositiveId | None = Field(None, description="Issue ID")
    project_id: PositiveId | None = Field(None, description="Project ID")
    spent_on: DateStr | None = Field(
        None, description="Date when time was spent (YYYY-MM-DD, defaults to today)"
    )
    comments: str | None = Field(
        None, max_length=1024, description="Description of work done"
    )


class CreateTimeEntryInput(TimeEntryFields):
    hours: float = Field(gt=0, description="Time spent in hours")
    activity_id: PositiveId = Field(description="Activity ID")
    user_id: PositiveId | None = Field(
        None, description="User ID (admin only, defaults to current user)"
    )

    @model_validator(mode="after")
    def _issue_or_project(self) -> "CreateTimeEntryInput":
        if self.issue_id is None and self.project_id is None:
            raise ValueError("Either issue_id or project_id must be provided")
        return self


class UpdateTimeEntryInput(TimeEntryFields):
    id: PositiveId = Field(description="Time entry ID to update")
    hours: float | None = Field(None, gt=0, description="Time spent in hours")
    activity_id: PositiveId | None = Field(None, description="Activity ID")


# Wiki


class WikiPageRefInput(ToolInput):
    project_id: ProjectRef = Field(description="Project ID or identifier")
    title: str = Field(min_length=1, description="Wiki page title")


class GetWikiPageInput(WikiPageRefInput):
    version: PositiveId | None = Field(None, description="Specific version number")


class SaveWikiPageInput(WikiPageRefInput):
    text: str = Field(description="Wiki page content (Textile or Markdown)")
    comments: str | None = Field(None, description="Comments about this change")
    version: PositiveId | None = Field(
        None, description="Version being edited, rejected by Redmine if stale"
    )
    parent_title: str | None = Field(
        None, description="Parent page title (for creating sub-pages)"
    )


# Search


class SearchInput(PaginationInput):
    q: str = Field(min_length=1, description="Query string (space-separated keywords)")
    scope: Literal["all", "my_project", "subprojects"] | None = Field(
        None, description="Search scope"
    )
    all_words: bool | None = Field(None, description="Match all query words")
    titles_only: bool | None = Field(None, description="Match only in titles")
    issues: bool | None = Field(None, description="Include issues")
    news: bool | None = Field(None, description="Include news")
    documents: bool | None = Field(None, description="Include documents")
    changesets: bool | None = Field(None, description="Include changesets")
    wiki_pages: bool | None = Field(None, description="Include wiki pages")
    messages: bool | None = Field(None, description="Include forum messages")
    projects: bool | None = Field(None, description="Include projects")
    open_issues: bool | None = Field(None, description="Only open issues")
    attachments: Literal["0", "1", "only"] | None = Field(
        None, description="Search in attachments"
    )


# Custom request


class CustomRequestInput(ToolInput):
    method: Literal["GET", "POST", "PUT", "DELETE"] = Field(description="HTTP method")
    path: str = Field(description='API path relative to the Redmine URL (e.g. "/issues.json")')
    data: dict[str, Any] | list[Any] | None = Field(
        None, description="Request body (for POST/PUT)"
    )
    params: dict[str, Any] | None = Field(None, description="Query parameters")

    @field_validator("method", mode="before")
    @classmethod
    def _upper_method(cls, value: Any) -> Any:
        return value.upper() if isinstance(value, str) else value

    @field_validator("path")
    @classmethod
    def _relative_path(cls, value: str) -> str:
        if not value.startswith("/") or "://" in value or value.startswith("//"):
            raise ValueError("Path must be relative to the Redmine URL and start with '/'")
        return value


def validate_arguments(model: type[ModelT], arguments: Any) -> ModelT:
    """Validate raw tool arguments into `model`.

    Args:
        model: The tool's input model
        arguments: The untyped `arguments` mapping of the call (may be None)

    Returns:
        The validated model instance with defaults applied

    Raises:
        ValidationError: Naming the offending fields and why they failed
    """
    if arguments is None:
        arguments = {}
    if not isinstance(arguments, Mapping):
        raise ValidationError("Tool arguments must be an object")

    try:
        return model.model_validate(dict(arguments))
    except pydantic.ValidationError as e:
        fields: list[str] = []
        messages: list[str] = []
        for error in e.errors():
            loc = error.get("loc", ())
            message = error["msg"].removeprefix("Value error, ")
            if loc:
                field = str(loc[0])
                if field not in fields:
                    fields.append(field)
                messages.append(f"{'.'.join(str(part) for part in loc)}: {message}")
            else:
                messages.append(message)
        raise ValidationError("; ".join(messages), fields) from e
