"""Time tracking tools."""

from ...formatting import (
    format_count_summary,
    format_enumeration_item,
    format_list,
    format_time_entry,
    total_hours,
)
from ...redmine import RedmineFetcher
from ...validators import (
    CreateTimeEntryInput,
    EmptyInput,
    ListTimeEntriesInput,
    TimeEntryIdInput,
    UpdateTimeEntryInput,
)
from ..registry import ToolGroup

time_entries = ToolGroup("time_entries")


@time_entries.tool(
    name="redmine_list_time_entries",
    title="List Time Entries",
    description="List time entries with optional filters",
    input_model=ListTimeEntriesInput,
)
async def list_time_entries(
    fetcher: RedmineFetcher, params: ListTimeEntriesInput
) -> str:
    response = fetcher.list_time_entries(params.to_query())
    items = response.get("time_entries") or []
    total = response.get("total_count") or len(items)

    summary = format_count_summary("time entry(ies)", total, params.offset, len(items))
    # Hours of the returned page only
    summary += f"\nTotal hours: {total_hours(items):.2f}"
    if not items:
        return f"{summary}\n\nNo time entries found matching the criteria."
    return f"{summary}\n\n{format_list(items, format_time_entry)}"


@time_entries.tool(
    name="redmine_get_time_entry",
    title="Get Time Entry",
    description="Get detailed information about a specific time entry",
    input_model=TimeEntryIdInput,
)
async def get_time_entry(fetcher: RedmineFetcher, params: TimeEntryIdInput) -> str:
    return format_time_entry(fetcher.get_time_entry(params.id))


@time_entries.tool(
    name="redmine_create_time_entry",
    title="Create Time Entry",
    description="Log time on an issue or project (either issue_id or project_id is required)",
    input_model=CreateTimeEntryInput,
    write=True,
)
async def create_time_entry(
    fetcher: RedmineFetcher, params: CreateTimeEntryInput
) -> str:
    entry = fetcher.create_time_entry(params.to_payload())
    return f"Time entry created successfully!\n\n{format_time_entry(entry)}"


@time_entries.tool(
    name="redmine_update_time_entry",
    title="Update Time Entry",
    description="Update an existing time entry",
    input_model=UpdateTimeEntryInput,
    write=True,
)
async def update_time_entry(
    fetcher: RedmineFetcher, params: UpdateTimeEntryInput
) -> str:
    fetcher.update_time_entry(params.id, params.to_payload(exclude={"id"}))
    entry = fetcher.get_time_entry(params.id)
    return f"Time entry updated successfully!\n\n{format_time_entry(entry)}"


@time_entries.tool(
    name="redmine_delete_time_entry",
    title="Delete Time Entry",
    description="Delete a time entry",
    input_model=TimeEntryIdInput,
    write=True,
    destructive=True,
)
async def delete_time_entry(fetcher: RedmineFetcher, params: TimeEntryIdInput) -> str:
    fetcher.delete_time_entry(params.id)
    return f"Time entry #{params.id} deleted successfully."


@time_entries.tool(
    name="redmine_list_time_entry_activities",
    title="List Time Entry Activities",
    description="List available time entry activities",
    input_model=EmptyInput,
)
async def list_time_entry_activities(
    fetcher: RedmineFetcher, params: EmptyInput
) -> str:
    activities = fetcher.list_time_entry_activities()
    if not activities:
        return "Available Time Entry Activities:\n\nNo time entry activities found."
    lines = "\n".join(format_enumeration_item(a) for a in activities)
    return f"Available Time Entry Activities:\n\n{lines}"
