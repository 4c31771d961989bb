"""Issue tools."""

from ...formatting import LIST_TEXT_LIMIT, format_count_summary, format_issue, format_list
from ...redmine import RedmineFetcher
from ...validators import (
    CreateIssueInput,
    GetIssueInput,
    IssueIdInput,
    ListIssuesInput,
    UpdateIssueInput,
)
from ..registry import ToolGroup

issues = ToolGroup("issues")


@issues.tool(
    name="redmine_list_issues",
    title="List Issues",
    description="List issues from Redmine with optional filters",
    input_model=ListIssuesInput,
)
async def list_issues(fetcher: RedmineFetcher, params: ListIssuesInput) -> str:
    response = fetcher.list_issues(params.to_query())
    items = response.get("issues") or []
    total = response.get("total_count") or len(items)

    summary = format_count_summary("issue(s)", total, params.offset, len(items))
    if not items:
        return f"{summary}\n\nNo issues found matching the criteria."
    body = format_list(
        items, lambda issue: format_issue(issue, description_limit=LIST_TEXT_LIMIT)
    )
    return f"{summary}\n\n{body}"


@issues.tool(
    name="redmine_get_issue",
    title="Get Issue",
    description="Get detailed information about a specific issue, including comments",
    input_model=GetIssueInput,
)
async def get_issue(fetcher: RedmineFetcher, params: GetIssueInput) -> str:
    return format_issue(fetcher.get_issue(params.id, include=params.include))


@issues.tool(
    name="redmine_create_issue",
    title="Create Issue",
    description="Create a new issue in Redmine",
    input_model=CreateIssueInput,
    write=True,
)
async def create_issue(fetcher: RedmineFetcher, params: CreateIssueInput) -> str:
    issue = fetcher.create_issue(params.to_payload())
    return f"Issue created successfully!\n\n{format_issue(issue)}"


@issues.tool(
    name="redmine_update_issue",
    title="Update Issue",
    description="Update an existing issue in Redmine, optionally adding notes",
    input_model=UpdateIssueInput,
    write=True,
)
async def update_issue(fetcher: RedmineFetcher, params: UpdateIssueInput) -> str:
    fetcher.update_issue(params.id, params.to_payload(exclude={"id"}))
    issue = fetcher.get_issue(params.id)
    return f"Issue updated successfully!\n\n{format_issue(issue)}"


@issues.tool(
    name="redmine_delete_issue",
    title="Delete Issue",
    description="Delete an issue from Redmine",
    input_model=IssueIdInput,
    write=True,
    destructive=True,
)
async def delete_issue(fetcher: RedmineFetcher, params: IssueIdInput) -> str:
    fetcher.delete_issue(params.id)
    return f"Issue #{params.id} deleted successfully."
