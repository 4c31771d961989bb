"""User tools."""

from ...formatting import (
    format_count_summary,
    format_list,
    format_user,
    format_user_sections,
)
from ...redmine import RedmineFetcher
from ...validators import EmptyInput, GetUserInput, ListUsersInput
from ..registry import ToolGroup

users = ToolGroup("users")


@users.tool(
    name="redmine_list_users",
    title="List Users",
    description="List users in Redmine (requires administrator privileges)",
    input_model=ListUsersInput,
)
async def list_users(fetcher: RedmineFetcher, params: ListUsersInput) -> str:
    response = fetcher.list_users(params.to_query())
    items = response.get("users") or []
    total = response.get("total_count") or len(items)

    noun = f'user(s) matching "{params.name}"' if params.name else "user(s)"
    summary = format_count_summary(noun, total, params.offset, len(items))
    if not items:
        return f"{summary}\n\nNo users found matching the criteria."
    return f"{summary}\n\n{format_list(items, format_user)}"


@users.tool(
    name="redmine_get_current_user",
    title="Get Current User",
    description="Get information about the currently authenticated user",
    input_model=EmptyInput,
)
async def get_current_user(fetcher: RedmineFetcher, params: EmptyInput) -> str:
    return f"Current User:\n\n{format_user(fetcher.get_current_user())}"


@users.tool(
    name="redmine_get_user",
    title="Get User",
    description="Get detailed information about a specific user",
    input_model=GetUserInput,
)
async def get_user(fetcher: RedmineFetcher, params: GetUserInput) -> str:
    user = fetcher.get_user(params.id, include=params.include)
    content = format_user(user)
    sections = format_user_sections(user, params.include or [])
    if sections:
        content = f"{content}\n\n{sections}"
    return content
