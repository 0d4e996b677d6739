"""
Terminal issue browser.

A small event loop over ``IssueQueryPipeline``: every line read from the
user is one event, handled by mutating the pipeline, followed by a
re-render of the current view.
"""

import logging
import shlex
from typing import Callable

from explorer.pipeline import IssueQueryPipeline
from explorer.view import beginner_counts
from fetchers.errors import IssueQueryError
from models.data_models import IssueDetail, Issue
from utils.display import format_date

logger = logging.getLogger(__name__)

HELP_TEXT = """Commands:
  n | next                 next page
  p | prev                 previous page
  g <page>                 go to page
  more                     append the next page
  size <n>                 issues per page (restarts at page 1)
  state all|open|closed    filter by state
  label <name>             toggle a label filter
  assignee <text>          filter by assignee login ('' to clear)
  search <text>            filter by title or author ('' to clear)
  sort created|comments [asc|desc]
  clear                    reset all filters
  refresh                  reload the current page
  open <number>            show an issue with its comments
  repo <owner/name>        switch repository
  help                     show this help
  q | quit                 exit"""


def render_issue_line(issue: Issue) -> str:
    marker = "●" if issue.state == "open" else "✓"
    labels = f" [{', '.join(issue.label_names)}]" if issue.labels else ""
    assignee = f" → {issue.assignee.login}" if issue.assignee else ""
    return (
        f"{marker} #{issue.number} {issue.title}{labels}\n"
        f"    by {issue.user.login} on {format_date(issue.created_at)}"
        f" · {issue.comments} comments{assignee}"
    )


def render(pipeline: IssueQueryPipeline) -> str:
    """Render the pipeline's current view as text."""
    state = pipeline.state
    lines = [f"== {state.repo or '(no repository)'} =="]

    if state.error is not None:
        lines.append(f"! {state.error.message}")

    view = pipeline.view
    counts = beginner_counts(state.issues)
    total = pipeline.total_pages
    lines.append(
        f"Page {state.page} of {total if total is not None else '?'}"
        f" · {len(view)} of {len(state.issues)} loaded issues shown"
        f" · {counts['good_first_issues']} good first"
        f" · {counts['help_wanted_issues']} help wanted"
    )

    filters = state.filters
    if filters.is_active:
        active = [f"state={filters.state}"]
        if filters.labels:
            active.append(f"labels={','.join(sorted(filters.labels))}")
        if filters.assignee:
            active.append(f"assignee~{filters.assignee}")
        if filters.keyword:
            active.append(f"search~{filters.keyword}")
        lines.append("Filters: " + " ".join(active))
    lines.append(f"Sort: {state.sort.field} {state.sort.direction}")

    if not view:
        lines.append("No issues match." if state.issues else "No issues found.")
    for issue in view:
        lines.append(render_issue_line(issue))

    if pipeline.available_labels:
        lines.append("Labels: " + ", ".join(pipeline.available_labels))
    return "\n".join(lines)


def render_detail(detail: IssueDetail) -> str:
    issue = detail.issue
    lines = [
        f"#{issue.number} {issue.title} ({issue.state})",
        f"opened by {issue.user.login} on {format_date(issue.created_at, with_time=True)}",
        issue.html_url,
        "",
        issue.body or "No description provided.",
        "",
        f"-- {issue.comments} comments --",
    ]
    if detail.comments_error:
        lines.append(f"! Comments unavailable: {detail.comments_error}")
    for comment in detail.comments:
        lines.append(f"{comment.user.login} on {format_date(comment.created_at, with_time=True)}:")
        lines.append(comment.body)
        lines.append("")
    return "\n".join(lines)


def handle_command(pipeline: IssueQueryPipeline, line: str, write: Callable[[str], None]) -> bool:
    """
    Apply one user command to the pipeline.

    Returns:
        False when the user asked to quit, True otherwise
    """
    try:
        parts = shlex.split(line)
    except ValueError as e:
        write(f"Could not parse command: {e}")
        return True
    if not parts:
        return True

    command, args = parts[0].lower(), parts[1:]
    arg = " ".join(args)

    if command in ("q", "quit", "exit"):
        return False
    if command == "help":
        write(HELP_TEXT)
        return True

    if command in ("n", "next"):
        pipeline.next_page()
    elif command in ("p", "prev"):
        pipeline.previous_page()
    elif command == "more":
        pipeline.load_more()
    elif command == "refresh":
        pipeline.refresh()
    elif command in ("g", "size") and not arg.isdigit():
        write(f"'{command}' needs a number")
        return True
    elif command == "g":
        pipeline.go_to_page(int(arg))
    elif command == "size":
        pipeline.set_per_page(int(arg))
    elif command == "state" and arg in ("all", "open", "closed"):
        pipeline.set_filters(state=arg)
    elif command == "label" and arg:
        pipeline.toggle_label(arg)
    elif command == "assignee":
        pipeline.set_filters(assignee=arg)
    elif command == "search":
        pipeline.set_filters(keyword=arg)
    elif command == "sort" and args and args[0] in ("created", "comments"):
        direction = args[1] if len(args) > 1 and args[1] in ("asc", "desc") else None
        pipeline.set_sort(field=args[0], direction=direction)
    elif command == "clear":
        pipeline.clear_filters()
    elif command == "repo" and arg:
        pipeline.open_repo(arg)
    elif command == "open" and arg.isdigit():
        show_issue(pipeline, int(arg), write)
        return True
    else:
        write(f"Unknown command: {line.strip()} (type 'help')")
        return True

    write(render(pipeline))
    return True


def show_issue(pipeline: IssueQueryPipeline, number: int, write: Callable[[str], None]) -> None:
    if pipeline.state.repo is None:
        write("No repository selected")
        return
    owner, name = pipeline.state.repo.split("/", 1)
    try:
        detail = pipeline.fetcher.fetch_issue_detail(owner, name, number)
    except IssueQueryError as e:
        write(f"! {e.message}")
        return
    write(render_detail(detail))


def run_browser(
    pipeline: IssueQueryPipeline,
    repo: str,
    read: Callable[[str], str] = input,
    write: Callable[[str], None] = print,
) -> None:
    """Open ``repo`` and process commands until quit or end of input."""
    pipeline.open_repo(repo)
    write(render(pipeline))
    write("Type 'help' for commands.")

    while True:
        try:
            line = read("> ")
        except (EOFError, KeyboardInterrupt):
            write("")
            break
        if not handle_command(pipeline, line, write):
            break

    logger.debug(f"Browser closed on {pipeline.state.repo}")
