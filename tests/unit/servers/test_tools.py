"""Tests for the Redmine tool handlers, driven through the dispatcher."""

import json

import pytest

from mcp_redmine.servers import ToolDispatcher, build_registry
from tests.utils.factories import (
    IssueFactory,
    ProjectFactory,
    ResponseFactory,
    TimeEntryFactory,
    UserFactory,
    WikiPageFactory,
    ref,
)


def _text(result) -> str:
    assert len(result.content) == 1
    return result.content[0].text


@pytest.mark.anyio
class TestIssueTools:
    async def test_list_issues(self, dispatcher, mock_fetcher):
        """Two issues with total_count 2 render a summary and two blocks."""
        issues = [IssueFactory.create(1), IssueFactory.create(2)]
        mock_fetcher.list_issues.return_value = {"issues": issues, "total_count": 2}

        result = await dispatcher.dispatch(
            "redmine_list_issues", {"project_id": "demo", "limit": 5}
        )

        text = _text(result)
        assert not result.is_error
        assert text.startswith("Found 2 issue(s)\n\n#1 - Test issue 1")
        assert "\n\n#2 - Test issue 2" in text
        mock_fetcher.list_issues.assert_called_once_with(
            {"project_id": "demo", "offset": 0, "limit": 5}
        )

    async def test_list_issues_truncates_descriptions(self, dispatcher, mock_fetcher):
        issue = IssueFactory.create(1, description="d" * 500)
        mock_fetcher.list_issues.return_value = {"issues": [issue], "total_count": 1}

        text = _text(await dispatcher.dispatch("redmine_list_issues", {}))

        assert text.endswith("d" * 197 + "...")

    async def test_list_issues_window(self, dispatcher, mock_fetcher):
        issues = [IssueFactory.create(i) for i in range(26, 31)]
        mock_fetcher.list_issues.return_value = {"issues": issues, "total_count": 30}

        text = _text(
            await dispatcher.dispatch("redmine_list_issues", {"offset": 25, "limit": 5})
        )

        assert text.startswith("Found 30 issue(s) (showing 26-30)")

    async def test_list_issues_empty(self, dispatcher, mock_fetcher):
        mock_fetcher.list_issues.return_value = {"issues": [], "total_count": 0}

        text = _text(await dispatcher.dispatch("redmine_list_issues", {}))

        assert text == "Found 0 issue(s)\n\nNo issues found matching the criteria."

    async def test_get_issue_is_idempotent(self, dispatcher, mock_fetcher):
        issue = IssueFactory.create(
            7, journals=[{"user": ref(1, "Test User"), "created_on": "x", "notes": "hi"}]
        )
        mock_fetcher.get_issue.return_value = issue

        first = await dispatcher.dispatch("redmine_get_issue", {"id": 7})
        second = await dispatcher.dispatch("redmine_get_issue", {"id": 7})

        assert _text(first) == _text(second)
        assert "Comments:\n- Test User (x): hi" in _text(first)
        mock_fetcher.get_issue.assert_called_with(7, include=["journals"])

    async def test_create_issue(self, dispatcher, mock_fetcher):
        mock_fetcher.create_issue.return_value = IssueFactory.create(10, subject="New")

        result = await dispatcher.dispatch(
            "redmine_create_issue", {"project_id": 1, "subject": "New"}
        )

        assert _text(result).startswith("Issue created successfully!\n\n#10 - New")
        mock_fetcher.create_issue.assert_called_once_with(
            {"project_id": 1, "subject": "New"}
        )

    async def test_update_issue_refetches(self, dispatcher, mock_fetcher):
        mock_fetcher.get_issue.return_value = IssueFactory.create(3, status=ref(5, "Closed"))

        result = await dispatcher.dispatch(
            "redmine_update_issue", {"id": 3, "status_id": 5, "notes": "Done"}
        )

        mock_fetcher.update_issue.assert_called_once_with(
            3, {"status_id": 5, "notes": "Done"}
        )
        assert _text(result).startswith("Issue updated successfully!\n\n#3")
        assert "Status: Closed" in _text(result)

    async def test_delete_issue(self, dispatcher, mock_fetcher):
        result = await dispatcher.dispatch("redmine_delete_issue", {"id": "12"})

        assert _text(result) == "Issue #12 deleted successfully."
        mock_fetcher.delete_issue.assert_called_once_with(12)


@pytest.mark.anyio
class TestProjectAndUserTools:
    async def test_list_projects(self, dispatcher, mock_fetcher):
        mock_fetcher.list_projects.return_value = {
            "projects": [ProjectFactory.create()],
            "total_count": 1,
        }

        text = _text(await dispatcher.dispatch("redmine_list_projects", None))

        assert text.startswith("Found 1 project(s)\n\nDemo (demo)")

    async def test_get_project_with_includes(self, dispatcher, mock_fetcher):
        mock_fetcher.get_project.return_value = ProjectFactory.create(
            trackers=[ref(1, "Bug")]
        )

        text = _text(
            await dispatcher.dispatch(
                "redmine_get_project", {"id": "demo", "include": ["trackers"]}
            )
        )

        assert text.endswith("\n\nTrackers:\n  - Bug (ID: 1)")
        mock_fetcher.get_project.assert_called_once_with("demo", include=["trackers"])

    async def test_project_versions(self, dispatcher, mock_fetcher):
        mock_fetcher.list_versions.return_value = [
            {"id": 1, "name": "1.0", "status": "open"}
        ]

        text = _text(
            await dispatcher.dispatch("redmine_get_project_versions", {"project_id": 1})
        )

        assert text == (
            "Found 1 version(s) for project\n\nVersion: 1.0 (ID: 1)\n  Status: open"
        )

    async def test_current_user(self, dispatcher, mock_fetcher):
        mock_fetcher.get_current_user.return_value = UserFactory.create()

        result = await dispatcher.dispatch("redmine_get_current_user", {})

        text = _text(result)
        assert not result.is_error
        assert text.startswith("Current User:")
        assert "Test User (t.user)" in text
        assert "ID: 1" in text

    async def test_list_users_with_name(self, dispatcher, mock_fetcher):
        mock_fetcher.list_users.return_value = {
            "users": [UserFactory.create()],
            "total_count": 1,
        }

        text = _text(await dispatcher.dispatch("redmine_list_users", {"name": "test"}))

        assert text.startswith('Found 1 user(s) matching "test"\n\n')

    async def test_get_user_groups(self, dispatcher, mock_fetcher):
        mock_fetcher.get_user.return_value = UserFactory.create(groups=[ref(4, "Staff")])

        text = _text(
            await dispatcher.dispatch("redmine_get_user", {"id": 1, "include": ["groups"]})
        )

        assert text.endswith("Groups:\n  - Staff (ID: 4)")


@pytest.mark.anyio
class TestTimeEntryTools:
    async def test_delete_time_entry(self, dispatcher, mock_fetcher):
        result = await dispatcher.dispatch("redmine_delete_time_entry", {"id": 42})

        assert result.is_error is False
        assert _text(result) == "Time entry #42 deleted successfully."
        mock_fetcher.delete_time_entry.assert_called_once_with(42)

    async def test_list_time_entries_total_hours(self, dispatcher, mock_fetcher):
        mock_fetcher.list_time_entries.return_value = {
            "time_entries": [
                TimeEntryFactory.create(1, hours=1.5),
                TimeEntryFactory.create(2, hours=2),
            ],
            "total_count": 2,
        }

        text = _text(
            await dispatcher.dispatch("redmine_list_time_entries", {"from": "2024-01-01"})
        )

        assert text.startswith("Found 2 time entry(ies)\nTotal hours: 3.50\n\n")
        query = mock_fetcher.list_time_entries.call_args.args[0]
        assert query["from"] == "2024-01-01"

    async def test_create_time_entry(self, dispatcher, mock_fetcher):
        mock_fetcher.create_time_entry.return_value = TimeEntryFactory.create(8)

        result = await dispatcher.dispatch(
            "redmine_create_time_entry",
            {"issue_id": 5, "hours": 1.5, "activity_id": 9, "spent_on": "2024-01-03"},
        )

        assert _text(result).startswith("Time entry created successfully!\n\nTime Entry #8")
        mock_fetcher.create_time_entry.assert_called_once_with(
            {"issue_id": 5, "hours": 1.5, "activity_id": 9, "spent_on": "2024-01-03"}
        )

    async def test_create_time_entry_requires_target(self, dispatcher, mock_fetcher):
        result = await dispatcher.dispatch(
            "redmine_create_time_entry", {"hours": 1, "activity_id": 9}
        )

        assert result.is_error is True
        assert "Either issue_id or project_id must be provided" in _text(result)
        mock_fetcher.create_time_entry.assert_not_called()

    async def test_update_time_entry(self, dispatcher, mock_fetcher):
        mock_fetcher.get_time_entry.return_value = TimeEntryFactory.create(4, hours=3)

        result = await dispatcher.dispatch(
            "redmine_update_time_entry", {"id": 4, "hours": 3}
        )

        mock_fetcher.update_time_entry.assert_called_once_with(4, {"hours": 3.0})
        assert "Hours: 3" in _text(result)

    async def test_activities(self, dispatcher, mock_fetcher):
        mock_fetcher.list_time_entry_activities.return_value = [
            {"id": 9, "name": "Development", "is_default": True}
        ]

        text = _text(
            await dispatcher.dispatch("redmine_list_time_entry_activities", {})
        )

        assert text == (
            "Available Time Entry Activities:\n\n- Development (ID: 9) [DEFAULT]"
        )


@pytest.mark.anyio
class TestWikiTools:
    async def test_save_wiki_page(self, dispatcher, mock_fetcher):
        mock_fetcher.get_wiki_page.return_value = WikiPageFactory.create("Home")

        result = await dispatcher.dispatch(
            "redmine_create_or_update_wiki_page",
            {"project_id": "demo", "title": "Home", "text": "h1. Welcome"},
        )

        mock_fetcher.create_or_update_wiki_page.assert_called_once_with(
            "demo", "Home", {"text": "h1. Welcome"}
        )
        mock_fetcher.get_wiki_page.assert_called_once_with("demo", "Home")
        assert _text(result).startswith("Wiki page saved successfully!\n\nWiki Page: Home")

    async def test_delete_wiki_page(self, dispatcher, mock_fetcher):
        result = await dispatcher.dispatch(
            "redmine_delete_wiki_page", {"project_id": "demo", "title": "Old"}
        )

        assert _text(result) == 'Wiki page "Old" deleted successfully from project.'

    async def test_list_wiki_pages_empty(self, dispatcher, mock_fetcher):
        mock_fetcher.list_wiki_pages.return_value = []

        text = _text(
            await dispatcher.dispatch("redmine_list_wiki_pages", {"project_id": "demo"})
        )

        assert text == (
            "Found 0 wiki page(s) in project\n\nNo wiki pages found for this project."
        )


@pytest.mark.anyio
class TestLookupTools:
    async def test_statuses(self, dispatcher, mock_fetcher):
        mock_fetcher.list_issue_statuses.return_value = [
            {"id": 1, "name": "New", "is_default": True},
            {"id": 5, "name": "Closed", "is_closed": True},
        ]

        text = _text(await dispatcher.dispatch("redmine_list_statuses", {}))

        assert text == (
            "Available Issue Statuses:\n\n"
            "- New (ID: 1) [DEFAULT]\n- Closed (ID: 5) [CLOSED]"
        )

    async def test_search(self, dispatcher, mock_fetcher):
        mock_fetcher.search.return_value = {
            "results": [
                {
                    "type": "issue",
                    "title": "Bug #1",
                    "url": "https://redmine.example.com/issues/1",
                    "description": "Crash",
                    "datetime": "2024-01-01",
                }
            ],
            "total_count": 1,
        }

        text = _text(
            await dispatcher.dispatch("redmine_search", {"q": "crash", "issues": True})
        )

        assert text.startswith('Found 1 result(s) for "crash"\n\n1. [issue] Bug #1')
        mock_fetcher.search.assert_called_once_with(
            {"q": "crash", "offset": 0, "limit": 25, "issues": True}
        )

    async def test_custom_request_json(self, dispatcher, mock_fetcher):
        mock_fetcher.custom_request.return_value = {"relations": []}

        text = _text(
            await dispatcher.dispatch(
                "redmine_custom_request",
                {"method": "GET", "path": "/issues/1/relations.json"},
            )
        )

        assert json.loads(text) == {"relations": []}
        mock_fetcher.custom_request.assert_called_once_with(
            "GET", "/issues/1/relations.json", data=None, params=None
        )

    async def test_custom_request_no_content(self, dispatcher, mock_fetcher):
        mock_fetcher.custom_request.return_value = None

        text = _text(
            await dispatcher.dispatch(
                "redmine_custom_request",
                {"method": "DELETE", "path": "/issues/1/relations/2.json"},
            )
        )

        assert text == "Request completed successfully (no content)."


@pytest.mark.anyio
class TestAgainstHttpSession:
    """Tool calls through the real fetcher over a mocked HTTP session."""

    @pytest.fixture
    def http_dispatcher(self, fetcher):
        return ToolDispatcher(build_registry(), fetcher)

    async def test_current_user(self, http_dispatcher, mock_session):
        mock_session.request.return_value = ResponseFactory.create(
            json_data={
                "user": {"id": 1, "firstname": "Test", "lastname": "User", "login": "t.user"}
            }
        )

        text = _text(await http_dispatcher.dispatch("redmine_get_current_user", {}))

        assert text == "Current User:\n\nTest User (t.user)\nID: 1"
