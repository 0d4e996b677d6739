"""
Issue query pipeline.

One canonical owner of a view's query state: which repository and page is
shown, the loaded issues, pagination, filters and sort. Views compose it
instead of tracking pagination and filters themselves.

Request lifecycle:
1. ``_begin`` records the request key as in flight and hands out a ticket.
   Submitting the key that is already in flight is a no-op; a different key
   supersedes the outstanding request.
2. ``_commit`` / ``_fail`` apply the outcome only if the ticket is still the
   latest one. Outcomes of superseded requests are discarded.

A single-threaded caller never overlaps requests, so both rules only come
into play when an operation is triggered while a fetch is still running:
from another thread, or re-entrantly from a callback fired during the fetch.
"""

import logging
from dataclasses import dataclass, field
from typing import NamedTuple, Optional

from explorer.view import available_assignees, available_labels, derive_view
from fetchers.errors import IssueQueryError, ValidationError
from fetchers.github import GitHubFetcher, parse_repo_name
from models.data_models import FilterState, Issue, IssuePage, Pagination, SortState

logger = logging.getLogger(__name__)


class RequestKey(NamedTuple):
    """Identity of a page request."""
    repo: str
    page: int
    per_page: int
    append: bool = False


class Ticket(NamedTuple):
    """Handle for one submitted request."""
    seq: int
    key: RequestKey


@dataclass
class QueryState:
    """Mutable state of one issue list view."""
    repo: Optional[str] = None
    page: int = 1
    per_page: int = 30
    issues: list[Issue] = field(default_factory=list)
    pagination: Optional[Pagination] = None
    filters: FilterState = field(default_factory=FilterState)
    sort: SortState = field(default_factory=SortState)
    loading: bool = False
    error: Optional[IssueQueryError] = None
    in_flight: Optional[RequestKey] = None
    request_seq: int = 0


class IssueQueryPipeline:
    """Fetch, paginate, filter and sort the issues of one repository."""

    def __init__(self, fetcher: GitHubFetcher, per_page: int = 30):
        self.fetcher = fetcher
        self.state = QueryState(per_page=per_page)

    # -- derived --------------------------------------------------------

    @property
    def view(self) -> list[Issue]:
        return derive_view(self.state.issues, self.state.filters, self.state.sort)

    @property
    def available_labels(self) -> list[str]:
        return available_labels(self.state.issues)

    @property
    def available_assignees(self) -> list[str]:
        return available_assignees(self.state.issues)

    @property
    def total_pages(self) -> Optional[int]:
        return self.state.pagination.total_pages if self.state.pagination else None

    @property
    def has_next(self) -> bool:
        return bool(self.state.pagination and self.state.pagination.has_more)

    @property
    def has_previous(self) -> bool:
        return self.state.page > 1

    # -- navigation -----------------------------------------------------

    def open_repo(self, repo: str) -> bool:
        """Switch to another repository, starting from page 1 with fresh filters."""
        try:
            owner, name = parse_repo_name(repo)
        except ValidationError as e:
            self._reject(e)
            return False

        full_name = f"{owner}/{name}"
        if full_name != self.state.repo:
            self.state.repo = full_name
            self.state.issues = []
            self.state.pagination = None
            self.state.filters = FilterState()
        return self._submit(RequestKey(full_name, 1, self.state.per_page))

    def go_to_page(self, page: int) -> bool:
        if not self._require_repo():
            return False
        if page < 1:
            self._reject(ValidationError(f"Page must be 1 or greater (got {page})"))
            return False
        return self._submit(RequestKey(self.state.repo, page, self.state.per_page))

    def next_page(self) -> bool:
        if self._at_last_page():
            return False
        return self.go_to_page(self.state.page + 1)

    def previous_page(self) -> bool:
        if not self.has_previous:
            return False
        return self.go_to_page(self.state.page - 1)

    def load_more(self) -> bool:
        """Append the next page to the loaded issues."""
        if not self._require_repo():
            return False
        if self._at_last_page() or self.state.loading:
            return False
        key = RequestKey(self.state.repo, self.state.page + 1, self.state.per_page, append=True)
        return self._submit(key)

    def refresh(self) -> bool:
        if not self._require_repo():
            return False
        return self._submit(RequestKey(self.state.repo, self.state.page, self.state.per_page))

    def set_per_page(self, per_page: int) -> bool:
        """Change the page size; always restarts from page 1."""
        if not 1 <= per_page <= 100:
            self._reject(ValidationError(f"Page size must be between 1 and 100 (got {per_page})"))
            return False
        self.state.per_page = per_page
        self.state.page = 1
        if self.state.repo is None:
            return False
        return self._submit(RequestKey(self.state.repo, 1, per_page))

    # -- filters & sort -------------------------------------------------

    def set_filters(self, **changes) -> FilterState:
        self.state.filters = FilterState.model_validate({**self.state.filters.model_dump(), **changes})
        return self.state.filters

    def toggle_label(self, name: str) -> FilterState:
        labels = set(self.state.filters.labels)
        labels.symmetric_difference_update({name})
        return self.set_filters(labels=frozenset(labels))

    def clear_filters(self) -> FilterState:
        self.state.filters = FilterState()
        return self.state.filters

    def set_sort(self, field: Optional[str] = None, direction: Optional[str] = None) -> SortState:
        update = {}
        if field is not None:
            update["field"] = field
        if direction is not None:
            update["direction"] = direction
        self.state.sort = SortState.model_validate({**self.state.sort.model_dump(), **update})
        return self.state.sort

    # -- request lifecycle ----------------------------------------------

    def _at_last_page(self) -> bool:
        """True once a loaded page reports there is nothing after it."""
        pagination = self.state.pagination
        return pagination is not None and not pagination.has_more

    def _require_repo(self) -> bool:
        if self.state.repo is None:
            self._reject(ValidationError("No repository selected"))
            return False
        return True

    def _submit(self, key: RequestKey) -> bool:
        ticket = self._begin(key)
        if ticket is None:
            return False
        try:
            page = self.fetcher.fetch_issue_page(key.repo, key.page, key.per_page)
        except IssueQueryError as e:
            self._fail(ticket, e)
            return False
        return self._commit(ticket, page)

    def _begin(self, key: RequestKey) -> Optional[Ticket]:
        if self.state.loading and self.state.in_flight == key:
            logger.debug(f"Ignoring duplicate request while in flight: {key}")
            return None
        self.state.request_seq += 1
        self.state.in_flight = key
        self.state.loading = True
        self.state.error = None
        return Ticket(self.state.request_seq, key)

    def _is_current(self, ticket: Ticket) -> bool:
        if ticket.seq != self.state.request_seq:
            logger.debug(f"Discarding stale response for {ticket.key}")
            return False
        return True

    def _settle(self) -> None:
        self.state.loading = False
        self.state.in_flight = None

    def _commit(self, ticket: Ticket, page: IssuePage) -> bool:
        if not self._is_current(ticket):
            return False
        key = ticket.key
        if key.append:
            self.state.issues = self.state.issues + page.issues
        else:
            self.state.issues = list(page.issues)
        self.state.repo = key.repo
        self.state.page = key.page
        self.state.per_page = key.per_page
        self.state.pagination = page.pagination
        self._settle()
        return True

    def _fail(self, ticket: Ticket, error: IssueQueryError) -> None:
        if not self._is_current(ticket):
            return
        logger.warning(f"Request for {ticket.key.repo} page {ticket.key.page} failed: {error}")
        if error.clears_results:
            self.state.issues = []
            self.state.pagination = None
        self.state.error = error
        self._settle()

    def _reject(self, error: ValidationError) -> None:
        """Record a local validation failure without touching loaded data."""
        logger.debug(f"Rejected request: {error}")
        self.state.error = error
