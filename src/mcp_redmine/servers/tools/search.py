"""Full-text search tool."""

from ...formatting import format_count_summary, format_search_result
from ...redmine import RedmineFetcher
from ...validators import SearchInput
from ..registry import ToolGroup

search = ToolGroup("search")


@search.tool(
    name="redmine_search",
    title="Search",
    description="Search Redmine for issues, wiki pages, news and more",
    input_model=SearchInput,
)
async def search_redmine(fetcher: RedmineFetcher, params: SearchInput) -> str:
    response = fetcher.search(params.to_query())
    results = response.get("results") or []
    total = response.get("total_count") or len(results)

    summary = format_count_summary(
        f'result(s) for "{params.q}"', total, params.offset, len(results)
    )
    if not results:
        return f"{summary}\n\nNo results found."
    body = "\n\n".join(
        format_search_result(index, result)
        for index, result in enumerate(results, start=params.offset + 1)
    )
    return f"{summary}\n\n{body}"
