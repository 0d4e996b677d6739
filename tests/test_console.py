"""Tests for the terminal issue browser."""

from unittest.mock import Mock
import pytest

from explorer.console import (
    HELP_TEXT,
    handle_command,
    render,
    render_detail,
    run_browser,
)
from explorer.pipeline import IssueQueryPipeline
from fetchers.errors import NotFoundError
from fetchers.github import GitHubFetcher
from models.data_models import Comment, IssueDetail, IssuePage, Pagination

from conftest import label_data, make_issue


def sample_page(page=1, per_page=30):
    return IssuePage(
        repo="owner/repo",
        issues=[
            make_issue(1, title="Crash on startup", comments=2,
                       labels=[label_data("good first issue", "7057ff", 1)]),
            make_issue(2, title="Docs typo", state="closed",
                       created_at="2024-02-01T00:00:00Z",
                       assignee={"login": "alice"}),
        ],
        pagination=Pagination(page=page, per_page=per_page, total_pages=2, has_more=page < 2)
    )


@pytest.fixture
def fetcher():
    fetcher = Mock(spec=GitHubFetcher)
    fetcher.fetch_issue_page.side_effect = lambda repo, page, per_page: sample_page(page, per_page)
    return fetcher


@pytest.fixture
def pipeline(fetcher):
    pipeline = IssueQueryPipeline(fetcher)
    pipeline.open_repo("owner/repo")
    return pipeline


@pytest.fixture
def output():
    return []


class TestRender:
    """Tests for text rendering."""

    def test_render_list(self, pipeline):
        text = render(pipeline)

        assert "== owner/repo ==" in text
        assert "Page 1 of 2" in text
        assert "2 of 2 loaded issues shown" in text
        assert "1 good first" in text
        assert "#1 Crash on startup [good first issue]" in text
        assert "→ alice" in text
        assert "Labels: good first issue" in text

    def test_render_error_and_empty_view(self, pipeline):
        pipeline.set_filters(keyword="nothing matches this")
        pipeline.state.error = NotFoundError("Repository not found")

        text = render(pipeline)

        assert "! Repository not found" in text
        assert "No issues match." in text
        assert "search~nothing matches this" in text

    def test_render_detail_with_comments(self):
        detail = IssueDetail(
            issue=make_issue(5, title="Crash", body=None, comments=1),
            comments=[Comment.model_validate({
                "id": 1,
                "body": "Same here",
                "user": {"login": "bob"},
                "created_at": "2024-01-05T15:04:00Z",
                "updated_at": "2024-01-05T15:04:00Z",
                "html_url": "https://github.com/owner/repo/issues/5#issuecomment-1",
            })]
        )

        text = render_detail(detail)

        assert "#5 Crash (open)" in text
        assert "No description provided." in text
        assert "bob on Jan 5, 2024, 03:04 PM:" in text
        assert "Same here" in text

    def test_render_detail_comment_failure(self):
        detail = IssueDetail(issue=make_issue(5, comments=4), comments_error="Network error. Try again.")

        assert "! Comments unavailable: Network error. Try again." in render_detail(detail)


class TestHandleCommand:
    """Tests for command dispatch."""

    def test_quit(self, pipeline, output):
        assert handle_command(pipeline, "q", output.append) is False
        assert handle_command(pipeline, "quit", output.append) is False

    def test_blank_line_is_ignored(self, pipeline, output):
        assert handle_command(pipeline, "   ", output.append) is True
        assert output == []

    def test_help(self, pipeline, output):
        handle_command(pipeline, "help", output.append)
        assert output == [HELP_TEXT]

    def test_next_page(self, pipeline, fetcher, output):
        handle_command(pipeline, "n", output.append)

        assert pipeline.state.page == 2
        assert fetcher.fetch_issue_page.call_args.args == ("owner/repo", 2, 30)
        assert "Page 2 of 2" in output[-1]

    def test_go_to_page_requires_number(self, pipeline, output):
        handle_command(pipeline, "g two", output.append)
        assert output == ["'g' needs a number"]

    def test_size_restarts_at_first_page(self, pipeline, fetcher, output):
        handle_command(pipeline, "g 2", output.append)
        handle_command(pipeline, "size 10", output.append)

        assert pipeline.state.page == 1
        assert pipeline.state.per_page == 10

    def test_filters_do_not_fetch(self, pipeline, fetcher, output):
        handle_command(pipeline, "state open", output.append)
        handle_command(pipeline, 'search "crash"', output.append)

        assert fetcher.fetch_issue_page.call_count == 1
        assert [issue.number for issue in pipeline.view] == [1]

    def test_label_toggle_with_spaces(self, pipeline, output):
        handle_command(pipeline, 'label "good first issue"', output.append)
        assert pipeline.state.filters.labels == frozenset({"good first issue"})

    def test_sort(self, pipeline, output):
        handle_command(pipeline, "sort comments asc", output.append)
        assert (pipeline.state.sort.field, pipeline.state.sort.direction) == ("comments", "asc")

    def test_unknown_command(self, pipeline, output):
        handle_command(pipeline, "state merged", output.append)
        assert output == ["Unknown command: state merged (type 'help')"]

    def test_unbalanced_quotes(self, pipeline, output):
        assert handle_command(pipeline, 'search "oops', output.append) is True
        assert output[0].startswith("Could not parse command")

    def test_open_issue(self, pipeline, fetcher, output):
        fetcher.fetch_issue_detail.return_value = IssueDetail(issue=make_issue(1))

        handle_command(pipeline, "open 1", output.append)

        fetcher.fetch_issue_detail.assert_called_once_with("owner", "repo", 1)
        assert output[-1].startswith("#1 Issue 1 (open)")

    def test_open_missing_issue(self, pipeline, fetcher, output):
        fetcher.fetch_issue_detail.side_effect = NotFoundError("Issue not found")

        handle_command(pipeline, "open 99", output.append)

        assert output == ["! Issue not found"]


class TestRunBrowser:
    """Tests for the read-handle-render loop."""

    def test_scripted_session(self, fetcher, output):
        lines = iter(["n", "state closed", "q", "never read"])
        pipeline = IssueQueryPipeline(fetcher)

        run_browser(pipeline, "owner/repo", read=lambda prompt: next(lines), write=output.append)

        assert pipeline.state.page == 2
        assert pipeline.state.filters.state == "closed"
        assert next(lines) == "never read"

    def test_end_of_input_exits(self, fetcher, output):
        def read(prompt):
            raise EOFError

        run_browser(IssueQueryPipeline(fetcher), "owner/repo", read=read, write=output.append)

        assert "== owner/repo ==" in output[0]
        assert output[-1] == ""
