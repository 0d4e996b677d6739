"""Data models for GitHub repositories, issues and the browsing state."""

from datetime import date, datetime
from typing import Any, Literal, Optional
from pydantic import BaseModel, ConfigDict, Field


class GitHubUser(BaseModel):
    """Author, assignee or owner account as returned by the REST API."""
    login: str
    avatar_url: Optional[str] = None


class Label(BaseModel):
    """Named, colored tag attached to an issue."""
    id: int
    name: str
    color: str = "ededed"  # 6 hex digits, no '#'


class Issue(BaseModel):
    """Issue record from the issues endpoint.

    Immutable once fetched. The issues endpoint also returns pull requests;
    those carry a ``pull_request`` object and are dropped by the fetcher.
    """
    model_config = ConfigDict(frozen=True)

    id: int
    number: int
    title: str
    body: Optional[str] = None
    state: Literal["open", "closed"]
    labels: list[Label] = Field(default_factory=list)
    assignee: Optional[GitHubUser] = None
    assignees: list[GitHubUser] = Field(default_factory=list)
    user: GitHubUser
    created_at: datetime
    updated_at: Optional[datetime] = None
    closed_at: Optional[datetime] = None
    comments: int = 0
    html_url: str
    pull_request: Optional[dict[str, Any]] = None

    @property
    def is_pull_request(self) -> bool:
        return self.pull_request is not None

    @property
    def label_names(self) -> list[str]:
        return [label.name for label in self.labels]


class Comment(BaseModel):
    """Issue comment."""
    model_config = ConfigDict(frozen=True)

    id: int
    body: str = ""
    user: GitHubUser
    created_at: datetime
    updated_at: Optional[datetime] = None
    html_url: str


class Repository(BaseModel):
    """Repository metadata from GET /repos/{owner}/{repo}."""
    name: str
    full_name: str
    description: Optional[str] = None
    language: Optional[str] = None
    stargazers_count: int = 0
    forks_count: int = 0
    open_issues_count: int = 0
    html_url: str
    owner: GitHubUser


class FilterState(BaseModel):
    """Filters applied to the loaded issue list.

    Dimensions compose with AND. Selected labels match with OR.
    """
    model_config = ConfigDict(frozen=True)

    state: Literal["all", "open", "closed"] = "all"
    labels: frozenset[str] = frozenset()
    assignee: str = ""
    keyword: str = ""

    @property
    def is_active(self) -> bool:
        return bool(self.state != "all" or self.labels or self.assignee or self.keyword)


class SortState(BaseModel):
    """Sort order for the derived view."""
    model_config = ConfigDict(frozen=True)

    field: Literal["created", "comments"] = "created"
    direction: Literal["asc", "desc"] = "desc"


class Pagination(BaseModel):
    """Pagination cursor derived from the Link response header.

    ``total_pages`` is None only when the upstream advertised a next page
    without a last page.
    """
    page: int
    per_page: int
    total_pages: Optional[int] = None
    has_more: bool = False


class IssuePage(BaseModel):
    """One fetched page of issues (pull requests removed)."""
    repo: str  # e.g., "facebook/react"
    issues: list[Issue]
    pagination: Pagination


class IssueDetail(BaseModel):
    """Single issue with its discussion thread.

    A failed comment fetch leaves ``comments`` empty and records the
    message in ``comments_error``; the issue itself is still usable.
    """
    issue: Issue
    comments: list[Comment] = Field(default_factory=list)
    comments_error: Optional[str] = None


class CuratedProject(BaseModel):
    """Entry of the curated project listing."""
    owner: str
    name: str
    description: str
    language: str
    stars: int
    forks: int
    open_issues: int
    good_first_issues: int
    help_wanted_issues: int
    tags: list[str] = Field(default_factory=list)
    last_updated: date

    @property
    def full_name(self) -> str:
        return f"{self.owner}/{self.name}"
