"""Lookup tools for statuses, priorities and trackers."""

from ...formatting import format_enumeration_item
from ...redmine import RedmineFetcher
from ...validators import EmptyInput
from ..registry import ToolGroup

enumerations = ToolGroup("enumerations")


def _render(header: str, items: list[dict], empty: str) -> str:
    if not items:
        return f"{header}\n\n{empty}"
    return f"{header}\n\n" + "\n".join(format_enumeration_item(i) for i in items)


@enumerations.tool(
    name="redmine_list_statuses",
    title="List Issue Statuses",
    description="List all available issue statuses",
    input_model=EmptyInput,
)
async def list_statuses(fetcher: RedmineFetcher, params: EmptyInput) -> str:
    return _render(
        "Available Issue Statuses:",
        fetcher.list_issue_statuses(),
        "No issue statuses found.",
    )


@enumerations.tool(
    name="redmine_list_priorities",
    title="List Issue Priorities",
    description="List all available issue priorities",
    input_model=EmptyInput,
)
async def list_priorities(fetcher: RedmineFetcher, params: EmptyInput) -> str:
    return _render(
        "Available Issue Priorities:",
        fetcher.list_issue_priorities(),
        "No issue priorities found.",
    )


@enumerations.tool(
    name="redmine_list_trackers",
    title="List Trackers",
    description="List all available issue trackers",
    input_model=EmptyInput,
)
async def list_trackers(fetcher: RedmineFetcher, params: EmptyInput) -> str:
    return _render(
        "Available Issue Trackers:",
        fetcher.list_trackers(),
        "No trackers found.",
    )
