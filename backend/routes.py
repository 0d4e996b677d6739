"""
API routes for the issue browser.

Proxies the GitHub REST API for the browser frontend: repository listing,
repository lookup, issue lists with local filtering/sorting, and issue
detail. The GitHub token stays on this side and is never returned.
"""

from typing import Dict, List, Optional
from fastapi import APIRouter, Query
from pydantic import BaseModel

from explorer.catalog import available_languages, search_projects
from explorer.view import (
    available_assignees,
    available_labels,
    beginner_counts,
    derive_view,
)
from fetchers.github import GitHubFetcher
from models.data_models import (
    CuratedProject,
    FilterState,
    Issue,
    IssueDetail,
    Pagination,
    Repository,
    SortState,
)
from utils.config_loader import load_config
from utils.display import label_text_color
from utils.logger import setup_logger

config = load_config()
logger = setup_logger(config.log_level, name=__name__)

# Initialize GitHub client for routes
fetcher = GitHubFetcher(
    token=config.credentials.github_token,
    base_url=config.github_api_url,
    timeout=config.request_timeout
)

router = APIRouter(prefix="/api", tags=["issues"])


def _label_colors(issues: List[Issue]) -> Dict[str, str]:
    """Map every label color on the given issues to its readable text color."""
    return {
        label.color: label_text_color(label.color)
        for issue in issues
        for label in issue.labels
    }


class ProjectListResponse(BaseModel):
    """Response model for the curated project listing."""
    projects: List[CuratedProject]
    languages: List[str]
    total: int


class LookupResponse(BaseModel):
    """Response model for the landing page repository search."""
    repo: str
    path: str


class IssueListResponse(BaseModel):
    """Response model for the issue list endpoint."""
    repo: str
    issues: List[Issue]
    pagination: Pagination
    loaded: int
    available_labels: List[str]
    available_assignees: List[str]
    good_first_issues: int
    help_wanted_issues: int
    label_colors: Dict[str, str]


class IssueDetailResponse(IssueDetail):
    """Issue detail plus text colors for its labels."""
    label_colors: Dict[str, str]


@router.get("/projects", response_model=ProjectListResponse)
def list_projects(
    q: str = Query("", description="Search name, description or owner"),
    language: str = Query("all", description="Filter by language ('all' for any)"),
    sort_by: str = Query("stars", pattern="^(stars|issues|updated)$", description="Sort: stars, issues or updated")
):
    """List curated projects with search, language filter and sort."""
    projects = search_projects(q, language, sort_by)
    logger.debug(f"Listed {len(projects)} projects (q={q!r}, language={language}, sort_by={sort_by})")
    return {
        "projects": projects,
        "languages": available_languages(),
        "total": len(projects)
    }


@router.get("/lookup", response_model=LookupResponse)
def lookup_repository(repo: str = Query(..., description="Repository as 'owner/repo'")):
    """
    Validate an 'owner/repo' string and confirm the repository exists.

    Raises:
    - 400: Malformed repository string (GitHub is not contacted)
    - 404: Repository not found or private
    """
    repository = fetcher.lookup_repository(repo)
    return {
        "repo": repository.full_name,
        "path": f"/projects/{repository.full_name}"
    }


@router.get("/repos/{owner}/{repo}", response_model=Repository)
def get_repository(owner: str, repo: str):
    """Get repository metadata."""
    return fetcher.fetch_repository(owner, repo)


@router.get("/repos/{owner}/{repo}/issues", response_model=IssueListResponse)
def list_issues(
    owner: str,
    repo: str,
    page: int = Query(1, ge=1, description="Page number (1-indexed)"),
    per_page: int = Query(30, ge=1, le=100, description="Issues per page (max 100)"),
    state: str = Query("all", pattern="^(all|open|closed)$", description="Filter by state"),
    labels: Optional[List[str]] = Query(None, description="Keep issues with ANY of these labels"),
    assignee: str = Query("", description="Assignee login substring"),
    keyword: str = Query("", description="Title or author substring"),
    sort: str = Query("created", pattern="^(created|comments)$", description="Sort field"),
    direction: str = Query("desc", pattern="^(asc|desc)$", description="Sort direction")
):
    """
    Fetch one page of issues and return the filtered, sorted view.

    Filtering and sorting apply to the fetched page only. Option sets
    (labels, assignees) and beginner counts describe the whole fetched
    page, not just the filtered view.

    Raises:
    - 400: Malformed repository
    - 404: Repository not found (error="not_found") or page beyond the
      last one (error="out_of_bounds")
    - 502/503: GitHub error or unreachable
    """
    issue_page = fetcher.fetch_issue_page(f"{owner}/{repo}", page, per_page)

    filters = FilterState(
        state=state,
        labels=frozenset(labels or []),
        assignee=assignee,
        keyword=keyword
    )
    view = derive_view(issue_page.issues, filters, SortState(field=sort, direction=direction))

    logger.info(
        f"Listed {len(view)} of {len(issue_page.issues)} issues for {issue_page.repo} "
        f"(page {page}, per_page {per_page})"
    )

    return {
        "repo": issue_page.repo,
        "issues": view,
        "pagination": issue_page.pagination,
        "loaded": len(issue_page.issues),
        "available_labels": available_labels(issue_page.issues),
        "available_assignees": available_assignees(issue_page.issues),
        **beginner_counts(issue_page.issues),
        "label_colors": _label_colors(issue_page.issues)
    }


@router.get("/repos/{owner}/{repo}/issues/{number}", response_model=IssueDetailResponse)
def get_issue(owner: str, repo: str, number: int):
    """
    Get a single issue with its comments.

    A failed comment fetch does not fail the request: ``comments`` is
    empty and ``comments_error`` explains why.
    """
    detail = fetcher.fetch_issue_detail(owner, repo, number)
    return {
        **detail.model_dump(),
        "label_colors": _label_colors([detail.issue])
    }
