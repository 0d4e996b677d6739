"""
Derived issue views.

Pure functions over the loaded issue list: filtering, sorting and the
option sets offered by the filter controls. None of them mutate their
input; the base list stays as fetched.
"""

from typing import Iterable

from models.data_models import FilterState, Issue, SortState


def matches_state(issue: Issue, state: str) -> bool:
    return state == "all" or issue.state == state


def matches_labels(issue: Issue, labels: Iterable[str]) -> bool:
    """True if ANY issue label equals ANY selected label (or none selected)."""
    selected = set(labels)
    if not selected:
        return True
    return any(label.name in selected for label in issue.labels)


def matches_assignee(issue: Issue, assignee: str) -> bool:
    """Case-insensitive substring match on the assignee login.

    Unassigned issues never match a non-empty filter.
    """
    if not assignee:
        return True
    if issue.assignee is None:
        return False
    return assignee.lower() in issue.assignee.login.lower()


def matches_keyword(issue: Issue, keyword: str) -> bool:
    """Case-insensitive substring match on the title OR the author login."""
    if not keyword:
        return True
    keyword = keyword.lower()
    return keyword in issue.title.lower() or keyword in issue.user.login.lower()


def matches_filters(issue: Issue, filters: FilterState) -> bool:
    return (
        matches_state(issue, filters.state)
        and matches_labels(issue, filters.labels)
        and matches_assignee(issue, filters.assignee)
        and matches_keyword(issue, filters.keyword)
    )


def _sort_key(sort: SortState):
    if sort.field == "comments":
        return lambda issue: issue.comments
    return lambda issue: issue.created_at.timestamp()


def derive_view(issues: list[Issue], filters: FilterState, sort: SortState) -> list[Issue]:
    """
    Filter and sort the loaded issues for display.

    Filters compose with AND. The sort is stable in both directions: ties
    keep their relative order from the input list.

    Args:
        issues: Loaded issues (not modified)
        filters: Active filters
        sort: Sort field and direction

    Returns:
        New list holding the matching issues in display order
    """
    filtered = [issue for issue in issues if matches_filters(issue, filters)]
    # sorted(reverse=True) keeps ties in input order
    return sorted(filtered, key=_sort_key(sort), reverse=sort.direction == "desc")


def available_labels(issues: list[Issue]) -> list[str]:
    """Distinct label names across the loaded issues, sorted ascending."""
    return sorted({label.name for issue in issues for label in issue.labels})


def available_assignees(issues: list[Issue]) -> list[str]:
    """Distinct assignee logins across the loaded issues, sorted ascending."""
    return sorted({issue.assignee.login for issue in issues if issue.assignee is not None})


def count_labelled(issues: list[Issue], needle: str) -> int:
    """Count issues carrying a label whose name contains ``needle`` (case-insensitive)."""
    needle = needle.lower()
    return sum(
        1 for issue in issues
        if any(needle in label.name.lower() for label in issue.labels)
    )


def beginner_counts(issues: list[Issue]) -> dict[str, int]:
    """Counts for the conventional beginner-friendly labels."""
    return {
        "good_first_issues": count_labelled(issues, "good first issue"),
        "help_wanted_issues": count_labelled(issues, "help wanted"),
    }
