"""Escape hatch for endpoints without a dedicated tool."""

import json

from ...redmine import RedmineFetcher
from ...validators import CustomRequestInput
from ..registry import ToolGroup

custom = ToolGroup("custom")


@custom.tool(
    name="redmine_custom_request",
    title="Custom API Request",
    description=(
        "Make a custom API request to Redmine. The path is relative to the "
        'configured Redmine URL, e.g. "/issues/1/relations.json"'
    ),
    input_model=CustomRequestInput,
    write=True,
)
async def custom_request(fetcher: RedmineFetcher, params: CustomRequestInput) -> str:
    response = fetcher.custom_request(
        params.method, params.path, data=params.data, params=params.params
    )
    if response is None:
        return "Request completed successfully (no content)."
    return json.dumps(response, indent=2, ensure_ascii=False)
