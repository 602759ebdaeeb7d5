"""Tests for field name matching against the global field catalog."""

import pytest

from mcp_jira.jira.resolvers import FieldNameResolver, match_field
from mcp_jira.models.jira import MatchedVia, NotFound, NotFoundKind, ResolutionResult
from tests.fixtures.jira_metadata import make_field


class TestMatchField:
    """Tests for the pure match_field function."""

    @pytest.mark.parametrize(
        "candidate",
        ["Story Points", "story points", "STORY POINTS", "sToRy PoInTs"],
    )
    def test_case_permutations_resolve_to_same_field(self, candidate):
        fields = [make_field("summary", "Summary"), make_field("customfield_10016", "Story Points")]

        match = match_field([candidate], fields)

        assert match is not None
        assert match[0].id == "customfield_10016"

    def test_no_substring_matching(self):
        fields = [make_field("customfield_10016", "Story Points (legacy)")]

        assert match_field(["Story Points"], fields) is None

    def test_first_candidate_wins_over_catalog_order(self):
        # B appears first in the catalog but A has priority.
        fields = [make_field("customfield_2", "B"), make_field("customfield_1", "A")]

        field, candidate = match_field(["A", "B"], fields)

        assert field.id == "customfield_1"
        assert candidate == "A"

    def test_duplicate_display_names_return_first_in_catalog(self):
        fields = [
            make_field("customfield_100", "Points"),
            make_field("customfield_200", "Points"),
        ]

        field, _ = match_field(["Points"], fields)

        assert field.id == "customfield_100"

    def test_empty_candidates(self):
        assert match_field([], [make_field("summary", "Summary")]) is None


class TestFieldNameResolver:
    """Tests for FieldNameResolver."""

    @pytest.fixture
    def resolver(self, mock_gateway):
        return FieldNameResolver(mock_gateway)

    @pytest.mark.anyio
    async def test_falls_back_to_second_candidate(self, resolver, mock_gateway):
        mock_gateway.list_fields.return_value = [
            make_field("customfield_10020", "Story point estimate")
        ]

        result = await resolver.resolve(["Story Points", "Story point estimate"])

        assert isinstance(result, ResolutionResult)
        assert result.identifier == "customfield_10020"
        assert result.matched_via is MatchedVia.EXACT_CANDIDATE
        assert result.matched_name == "Story point estimate"

    @pytest.mark.anyio
    async def test_prefers_first_candidate_when_both_present(self, resolver, mock_gateway):
        mock_gateway.list_fields.return_value = [
            make_field("customfield_10020", "Story point estimate"),
            make_field("customfield_10016", "Story Points"),
        ]

        result = await resolver.resolve(["Story Points", "Story point estimate"])

        assert result.identifier == "customfield_10016"

    @pytest.mark.anyio
    async def test_not_found_lists_candidates_and_available(self, resolver, mock_gateway):
        mock_gateway.list_fields.return_value = [
            make_field("summary", "Summary"),
            make_field("status", "Status"),
        ]

        result = await resolver.resolve(["Story Points", "Story point estimate"])

        assert isinstance(result, NotFound)
        assert result.kind is NotFoundKind.FIELD
        assert result.requested == ("Story Points", "Story point estimate")
        assert result.available == ("Summary", "Status")
        message = result.message()
        assert "Story Points / Story point estimate" in message
        assert "Available (2): Summary, Status" in message

    @pytest.mark.anyio
    async def test_fetches_catalog_on_every_call(self, resolver, mock_gateway):
        mock_gateway.list_fields.return_value = [make_field("summary", "Summary")]

        await resolver.resolve(["Summary"])
        await resolver.resolve(["Summary"])

        assert mock_gateway.list_fields.await_count == 2
