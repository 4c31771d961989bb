"""Plain-text rendering of Redmine resources.

Formatters take the JSON objects returned by Redmine as plain dicts. Labeled
lines come first in a fixed order, optional lines are skipped when the value
is missing, and free text (descriptions, comments, wiki content) comes last
after a blank line.
"""

from collections.abc import Callable, Iterable, Sequence
from typing import Any

LIST_TEXT_LIMIT = 200
MISSING = "N/A"


def truncate_text(text: str, max_length: int = 500) -> str:
    """Cut `text` to `max_length` characters, ending with an ellipsis."""
    if len(text) <= max_length:
        return text
    return text[: max_length - 3] + "..."


def _ref_name(ref: Any, default: str = MISSING) -> str:
    if isinstance(ref, dict) and ref.get("name"):
        return str(ref["name"])
    return default


def _value(value: Any, default: str = MISSING) -> str:
    if value is None or value == "":
        return default
    return str(value)


def _number(value: Any) -> str:
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return _value(value)


def format_issue(issue: dict[str, Any], description_limit: int | None = None) -> str:
    """Render an issue.

    Args:
        issue: Redmine issue object
        description_limit: Truncate the raw description to this many
            characters (used in lists). Detail views pass None.

    Returns:
        The formatted issue block
    """
    lines = [
        f"#{_value(issue.get('id'))} - {_value(issue.get('subject'))}",
        f"Project: {_ref_name(issue.get('project'))}",
    ]
    if issue.get("tracker"):
        lines.append(f"Tracker: {_ref_name(issue['tracker'])}")
    lines.extend(
        [
            f"Status: {_ref_name(issue.get('status'))}",
            f"Priority: {_ref_name(issue.get('priority'))}",
            f"Author: {_ref_name(issue.get('author'))}",
        ]
    )

    if issue.get("assigned_to"):
        lines.append(f"Assigned to: {_ref_name(issue['assigned_to'])}")
    done_ratio = issue.get("done_ratio") or 0
    if done_ratio > 0:
        lines.append(f"Progress: {done_ratio}%")
    if issue.get("start_date"):
        lines.append(f"Start date: {issue['start_date']}")
    if issue.get("due_date"):
        lines.append(f"Due date: {issue['due_date']}")
    if issue.get("fixed_version"):
        lines.append(f"Version: {_ref_name(issue['fixed_version'])}")

    description = issue.get("description")
    if description:
        if description_limit is not None:
            description = truncate_text(description, description_limit)
        lines.append(f"\nDescription:\n{description}")

    notes = [j for j in issue.get("journals") or [] if j.get("notes")]
    if notes:
        lines.append("\nComments:")
        for journal in notes:
            lines.append(
                f"- {_ref_name(journal.get('user'))} "
                f"({_value(journal.get('created_on'))}): {journal['notes']}"
            )

    return "\n".join(lines)


def format_project(project: dict[str, Any]) -> str:
    lines = [
        f"{_value(project.get('name'))} ({_value(project.get('identifier'))})",
        f"ID: {_value(project.get('id'))}",
        f"Status: {'Active' if project.get('status') == 1 else 'Closed'}",
        f"Public: {'Yes' if project.get('is_public') else 'No'}",
    ]
    if project.get("parent"):
        lines.append(f"Parent: {_ref_name(project['parent'])}")
    if project.get("description"):
        lines.append(f"\nDescription:\n{project['description']}")
    return "\n".join(lines)


def format_project_sections(project: dict[str, Any], include: Sequence[str]) -> str:
    """Render the optional `include` sections of a project.

    Returns an empty string when none of the requested sections are present.
    """
    sections: list[str] = []
    if "trackers" in include and project.get("trackers"):
        sections.append(
            "Trackers:"
            + "".join(
                f"\n  - {_value(t.get('name'))} (ID: {_value(t.get('id'))})"
                for t in project["trackers"]
            )
        )
    if "issue_categories" in include and project.get("issue_categories"):
        rows = []
        for category in project["issue_categories"]:
            row = f"\n  - {_value(category.get('name'))} (ID: {_value(category.get('id'))})"
            if category.get("assigned_to"):
                row += f" - Assigned to: {_ref_name(category['assigned_to'])}"
            rows.append(row)
        sections.append("Issue Categories:" + "".join(rows))
    if "enabled_modules" in include and project.get("enabled_modules"):
        sections.append(
            "Enabled Modules:"
            + "".join(f"\n  - {_value(m.get('name'))}" for m in project["enabled_modules"])
        )
    if "time_entry_activities" in include and project.get("time_entry_activities"):
        sections.append(
            "Time Entry Activities:"
            + "".join(
                f"\n  - {_value(a.get('name'))} (ID: {_value(a.get('id'))})"
                for a in project["time_entry_activities"]
            )
        )
    return "\n\n".join(sections)


def format_version(version: dict[str, Any]) -> str:
    lines = [
        f"Version: {_value(version.get('name'))} (ID: {_value(version.get('id'))})",
        f"  Status: {_value(version.get('status'))}",
    ]
    if version.get("due_date"):
        lines.append(f"  Due date: {version['due_date']}")
    if version.get("description"):
        lines.append(f"  Description: {version['description']}")
    return "\n".join(lines)


def format_user(user: dict[str, Any]) -> str:
    full_name = " ".join(
        part for part in (user.get("firstname"), user.get("lastname")) if part
    )
    lines = [
        f"{full_name or MISSING} ({_value(user.get('login'))})",
        f"ID: {_value(user.get('id'))}",
    ]
    if user.get("mail"):
        lines.append(f"Email: {user['mail']}")
    if user.get("admin"):
        lines.append("Role: Administrator")
    if user.get("last_login_on"):
        lines.append(f"Last login: {user['last_login_on']}")
    return "\n".join(lines)


def format_user_sections(user: dict[str, Any], include: Sequence[str]) -> str:
    sections: list[str] = []
    if "memberships" in include and user.get("memberships"):
        rows = []
        for membership in user["memberships"]:
            row = f"\n  - {_ref_name(membership.get('project'))}"
            roles = [r.get("name") for r in membership.get("roles") or [] if r.get("name")]
            if roles:
                row += f" ({', '.join(roles)})"
            rows.append(row)
        sections.append("Memberships:" + "".join(rows))
    if "groups" in include and user.get("groups"):
        sections.append(
            "Groups:"
            + "".join(
                f"\n  - {_value(g.get('name'))} (ID: {_value(g.get('id'))})"
                for g in user["groups"]
            )
        )
    return "\n\n".join(sections)


def format_time_entry(entry: dict[str, Any]) -> str:
    lines = [
        f"Time Entry #{_value(entry.get('id'))}",
        f"Hours: {_number(entry.get('hours'))}",
        f"Date: {_value(entry.get('spent_on'))}",
        f"Project: {_ref_name(entry.get('project'))}",
        f"Activity: {_ref_name(entry.get('activity'))}",
        f"User: {_ref_name(entry.get('user'))}",
    ]
    issue = entry.get("issue")
    if isinstance(issue, dict) and issue.get("id"):
        lines.append(f"Issue: #{issue['id']}")
    if entry.get("comments"):
        lines.append(f"Comments: {entry['comments']}")
    return "\n".join(lines)


def total_hours(entries: Iterable[dict[str, Any]]) -> float:
    return sum(float(entry.get("hours") or 0) for entry in entries)


def format_wiki_page(page: dict[str, Any]) -> str:
    lines = [
        f"Wiki Page: {_value(page.get('title'))}",
        f"Version: {_value(page.get('version'))}",
        f"Updated: {_value(page.get('updated_on'))}",
    ]
    if page.get("author"):
        lines.append(f"Author: {_ref_name(page['author'])}")
    parent = page.get("parent")
    if isinstance(parent, dict) and parent.get("title"):
        lines.append(f"Parent: {parent['title']}")
    if page.get("text"):
        lines.append(f"\nContent:\n{page['text']}")
    return "\n".join(lines)


def _wiki_entry(page: dict[str, Any]) -> str:
    entry = _value(page.get("title"))
    if page.get("version"):
        entry += f" (v{page['version']})"
    return entry


def format_wiki_index(pages: Sequence[dict[str, Any]]) -> str:
    """Render a wiki index as a parent/child tree.

    Top-level pages are listed with their descendants below them, indented
    one level per depth. Pages whose parent is not in the index, or that
    are only reachable through a parent cycle, are listed separately as
    orphaned pages.
    """

    def parent_title(page: dict[str, Any]) -> str | None:
        parent = page.get("parent")
        return parent.get("title") if isinstance(parent, dict) else None

    titles = {p.get("title") for p in pages}
    roots: list[dict[str, Any]] = []
    children: dict[str, list[dict[str, Any]]] = {}
    for page in pages:
        parent = parent_title(page)
        if not parent:
            roots.append(page)
        elif parent in titles:
            children.setdefault(parent, []).append(page)

    lines = ["Wiki Pages:"]
    placed: set[int] = set()

    def add_children(title: Any, depth: int) -> None:
        for child in children.get(title, []):
            if id(child) in placed:
                continue
            placed.add(id(child))
            lines.append(f"{'  ' * depth}- {_wiki_entry(child)}")
            add_children(child.get("title"), depth + 1)

    for root in roots:
        placed.add(id(root))
        lines.append(f"\n- {_wiki_entry(root)}")
        add_children(root.get("title"), 1)

    orphans = [p for p in pages if id(p) not in placed]
    if orphans:
        lines.append("\nOrphaned pages:")
        for page in orphans:
            lines.append(f"- {_value(page.get('title'))} (parent: {parent_title(page)})")

    return "\n".join(lines)


def format_enumeration_item(item: dict[str, Any]) -> str:
    """Render one status, priority, tracker or activity as a bullet line."""
    line = f"- {_value(item.get('name'))} (ID: {_value(item.get('id'))})"
    if item.get("is_closed"):
        line += " [CLOSED]"
    if item.get("is_default"):
        line += " [DEFAULT]"
    if item.get("active") is False:
        line += " [INACTIVE]"
    if item.get("description"):
        line += f"\n  Description: {item['description']}"
    return line


def format_search_result(
    index: int, result: dict[str, Any], excerpt_limit: int = LIST_TEXT_LIMIT
) -> str:
    description = truncate_text(result.get("description") or "", excerpt_limit)
    return "\n".join(
        [
            f"{index}. [{_value(result.get('type'))}] {_value(result.get('title'))}",
            f"   URL: {_value(result.get('url'))}",
            f"   Description: {description}",
            f"   Date: {_value(result.get('datetime'))}",
        ]
    )


def format_list(
    items: Iterable[dict[str, Any]],
    formatter: Callable[[dict[str, Any]], str],
    separator: str = "\n\n",
) -> str:
    return separator.join(formatter(item) for item in items)


def format_count_summary(noun: str, total: int, offset: int, shown: int) -> str:
    """Summary line for a page of a paginated collection.

    The "showing" window is added whenever the page is not the whole
    collection, so it reflects what was actually returned rather than the
    requested limit.

    Args:
        noun: Pluralized noun, e.g. "issue(s)"
        total: Size of the whole collection
        offset: Offset of the first returned item
        shown: Number of items returned

    Returns:
        e.g. "Found 40 issue(s) (showing 26-40)"
    """
    summary = f"Found {total} {noun}"
    if shown > 0 and (offset > 0 or total > shown):
        summary += f" (showing {offset + 1}-{offset + shown})"
    return summary
