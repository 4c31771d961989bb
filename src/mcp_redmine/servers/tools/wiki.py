"""Wiki tools."""

from ...formatting import format_wiki_index, format_wiki_page
from ...redmine import RedmineFetcher
from ...validators import (
    GetWikiPageInput,
    ProjectRefInput,
    SaveWikiPageInput,
    WikiPageRefInput,
)
from ..registry import ToolGroup

wiki = ToolGroup("wiki")


@wiki.tool(
    name="redmine_list_wiki_pages",
    title="List Wiki Pages",
    description="List all wiki pages of a project as a parent/child tree",
    input_model=ProjectRefInput,
)
async def list_wiki_pages(fetcher: RedmineFetcher, params: ProjectRefInput) -> str:
    pages = fetcher.list_wiki_pages(params.project_id)
    header = f"Found {len(pages)} wiki page(s) in project"
    if not pages:
        return f"{header}\n\nNo wiki pages found for this project."
    return f"{header}\n\n{format_wiki_index(pages)}"


@wiki.tool(
    name="redmine_get_wiki_page",
    title="Get Wiki Page",
    description="Get the content of a wiki page, optionally at a specific version",
    input_model=GetWikiPageInput,
)
async def get_wiki_page(fetcher: RedmineFetcher, params: GetWikiPageInput) -> str:
    page = fetcher.get_wiki_page(params.project_id, params.title, params.version)
    return format_wiki_page(page)


@wiki.tool(
    name="redmine_create_or_update_wiki_page",
    title="Create or Update Wiki Page",
    description="Create a new wiki page or update an existing one",
    input_model=SaveWikiPageInput,
    write=True,
)
async def create_or_update_wiki_page(
    fetcher: RedmineFetcher, params: SaveWikiPageInput
) -> str:
    fetcher.create_or_update_wiki_page(
        params.project_id,
        params.title,
        params.to_payload(exclude={"project_id", "title"}),
    )
    page = fetcher.get_wiki_page(params.project_id, params.title)
    return f"Wiki page saved successfully!\n\n{format_wiki_page(page)}"


@wiki.tool(
    name="redmine_delete_wiki_page",
    title="Delete Wiki Page",
    description="Delete a wiki page",
    input_model=WikiPageRefInput,
    write=True,
    destructive=True,
)
async def delete_wiki_page(fetcher: RedmineFetcher, params: WikiPageRefInput) -> str:
    fetcher.delete_wiki_page(params.project_id, params.title)
    return f'Wiki page "{params.title}" deleted successfully from project.'
