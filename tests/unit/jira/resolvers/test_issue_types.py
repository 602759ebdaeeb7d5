"""Tests for IssueTypeResolver."""

import pytest

from mcp_jira.jira.resolvers import IssueTypeResolver
from mcp_jira.models.jira import IssueTypeLabel, NotFound, NotFoundKind, ResolutionResult
from tests.fixtures.jira_metadata import make_issue_type, make_project


class TestIssueTypeResolver:
    @pytest.fixture
    def resolver(self, mock_gateway):
        return IssueTypeResolver(mock_gateway)

    @pytest.mark.anyio
    @pytest.mark.parametrize("label", ["bug", "BUG", IssueTypeLabel.BUG])
    async def test_matches_name_ignoring_case(self, resolver, mock_gateway, label):
        mock_gateway.get_issue_types_for_project.return_value = [
            make_project(
                "PROJ",
                make_issue_type("10001", "Story"),
                make_issue_type("10004", "Bug"),
            )
        ]

        result = await resolver.resolve("PROJ", label)

        assert isinstance(result, ResolutionResult)
        assert result.identifier == "10004"
        assert result.is_subtask is False
        mock_gateway.get_issue_types_for_project.assert_awaited_once_with("PROJ")

    @pytest.mark.anyio
    async def test_matches_untranslated_name(self, resolver, mock_gateway):
        mock_gateway.get_issue_types_for_project.return_value = [
            make_project(
                "PROJ",
                make_issue_type("10004", "Fehler", untranslated_name="Bug"),
            )
        ]

        result = await resolver.resolve("PROJ", "bug")

        assert result.identifier == "10004"
        assert result.matched_name == "Fehler"

    @pytest.mark.anyio
    async def test_returns_subtask_flag(self, resolver, mock_gateway):
        mock_gateway.get_issue_types_for_project.return_value = [
            make_project(
                "PROJ",
                make_issue_type("10005", "Sub-task", untranslated_name="Subtask", subtask=True),
            )
        ]

        result = await resolver.resolve("PROJ", IssueTypeLabel.SUBTASK)

        assert result.identifier == "10005"
        assert result.is_subtask is True

    @pytest.mark.anyio
    async def test_first_matching_type_wins(self, resolver, mock_gateway):
        mock_gateway.get_issue_types_for_project.return_value = [
            make_project(
                "PROJ",
                make_issue_type("1", "Task"),
                make_issue_type("2", "Aufgabe", untranslated_name="Task"),
            )
        ]

        result = await resolver.resolve("PROJ", IssueTypeLabel.TASK)

        assert result.identifier == "1"

    @pytest.mark.anyio
    async def test_project_not_found(self, resolver, mock_gateway):
        mock_gateway.get_issue_types_for_project.return_value = [
            make_project("OTHER", make_issue_type("10004", "Bug"))
        ]

        result = await resolver.resolve("PROJ", IssueTypeLabel.BUG)

        assert isinstance(result, NotFound)
        assert result.kind is NotFoundKind.PROJECT
        assert "Project 'PROJ' not found" in result.message()

    @pytest.mark.anyio
    async def test_project_key_is_case_sensitive(self, resolver, mock_gateway):
        mock_gateway.get_issue_types_for_project.return_value = [
            make_project("PROJ", make_issue_type("10004", "Bug"))
        ]

        result = await resolver.resolve("proj", IssueTypeLabel.BUG)

        assert isinstance(result, NotFound)
        assert result.kind is NotFoundKind.PROJECT

    @pytest.mark.anyio
    async def test_type_not_found_in_project(self, resolver, mock_gateway):
        mock_gateway.get_issue_types_for_project.return_value = [
            make_project(
                "PROJ",
                make_issue_type("10001", "Story"),
                make_issue_type("10002", "Task"),
            )
        ]

        result = await resolver.resolve("PROJ", IssueTypeLabel.FEATURE)

        assert isinstance(result, NotFound)
        assert result.kind is NotFoundKind.ISSUE_TYPE
        assert result.available == ("Story", "Task")
        assert "Issue type 'Feature' not found in project PROJ" in result.message()
