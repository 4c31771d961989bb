"""Project tools."""

from ...formatting import (
    format_count_summary,
    format_list,
    format_project,
    format_project_sections,
    format_version,
)
from ...redmine import RedmineFetcher
from ...validators import GetProjectInput, ListProjectsInput, ProjectRefInput
from ..registry import ToolGroup

projects = ToolGroup("projects")


@projects.tool(
    name="redmine_list_projects",
    title="List Projects",
    description="List all available Redmine projects",
    input_model=ListProjectsInput,
)
async def list_projects(fetcher: RedmineFetcher, params: ListProjectsInput) -> str:
    response = fetcher.list_projects(params.to_query())
    items = response.get("projects") or []
    total = response.get("total_count") or len(items)

    summary = format_count_summary("project(s)", total, params.offset, len(items))
    if not items:
        return f"{summary}\n\nNo projects found."
    return f"{summary}\n\n{format_list(items, format_project)}"


@projects.tool(
    name="redmine_get_project",
    title="Get Project",
    description="Get detailed information about a specific project",
    input_model=GetProjectInput,
)
async def get_project(fetcher: RedmineFetcher, params: GetProjectInput) -> str:
    project = fetcher.get_project(params.id, include=params.include)
    content = format_project(project)
    sections = format_project_sections(project, params.include or [])
    if sections:
        content = f"{content}\n\n{sections}"
    return content


@projects.tool(
    name="redmine_get_project_versions",
    title="Get Project Versions",
    description="Get versions/milestones for a specific project",
    input_model=ProjectRefInput,
)
async def get_project_versions(
    fetcher: RedmineFetcher, params: ProjectRefInput
) -> str:
    versions = fetcher.list_versions(params.project_id)
    header = f"Found {len(versions)} version(s) for project"
    if not versions:
        return f"{header}\n\nNo versions found for this project."
    return f"{header}\n\n{format_list(versions, format_version)}"
