"""GitHub API client for browsing repositories and their issues.

All calls go through one request helper that maps failures onto the error
taxonomy in ``fetchers.errors``:

- Malformed input: ValidationError, raised before any network call
- 404: NotFoundError
- Other non-2xx: FetchError (status code + status text)
- No response at all: NetworkError
- Empty page past the first: OutOfBoundsError

Pagination is derived from the ``Link`` response header only.
"""

import logging
import re
from typing import Any, Optional
from urllib.parse import parse_qs, urlparse

import requests
from pydantic import BaseModel
from pydantic import ValidationError as PayloadValidationError

from fetchers.errors import (
    FetchError,
    NetworkError,
    NotFoundError,
    OutOfBoundsError,
    ValidationError,
)
from models.data_models import (
    Comment,
    Issue,
    IssueDetail,
    IssuePage,
    Pagination,
    Repository,
)

logger = logging.getLogger(__name__)

# owner: letters, digits, '_' and '-'; name may also contain '.'
REPO_PATTERN = re.compile(r"^(?P<owner>[\w-]+)/(?P<name>[\w.-]+)$")

MAX_PER_PAGE = 100
MAX_COMMENT_PAGES = 5

REPO_NOT_FOUND_MESSAGE = (
    "Repository not found. Please check the repository name and make sure it's public."
)


def parse_repo_name(repo: str) -> tuple[str, str]:
    """Split an ``owner/name`` string, validating its shape.

    Args:
        repo: Repository identifier (e.g., "facebook/react")

    Returns:
        Tuple of (owner, name)

    Raises:
        ValidationError: If the string is not exactly two non-empty segments

    Examples:
        "facebook/react" -> ("facebook", "react")
        "vercel/next.js" -> ("vercel", "next.js")
        "facebook//react" -> ValidationError
    """
    match = REPO_PATTERN.match((repo or "").strip())
    if not match or match.group("name") in (".", ".."):
        raise ValidationError("Please enter in the format owner/repo")
    return match.group("owner"), match.group("name")


def page_from_url(url: Optional[str]) -> Optional[int]:
    """Extract the ``page`` query parameter from a Link header URL."""
    if not url:
        return None
    values = parse_qs(urlparse(url).query).get("page")
    if not values:
        return None
    try:
        return int(values[0])
    except ValueError:
        return None


class GitHubFetcher:
    """Fetch repository and issue data from the GitHub REST API.

    The token is optional. Without it requests are sent unauthenticated and
    are subject to GitHub's lower anonymous rate limit.
    """

    def __init__(
        self,
        token: Optional[str] = None,
        base_url: str = "https://api.github.com",
        timeout: float = 30,
    ):
        """Initialize GitHub API client.

        Args:
            token: GitHub personal access token (optional)
            base_url: REST API root
            timeout: Per-request timeout in seconds
        """
        self.token = token
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.headers = {
            "Accept": "application/vnd.github+json",
            "X-GitHub-Api-Version": "2022-11-28"
        }
        if token:
            self.headers["Authorization"] = f"Bearer {token}"
        else:
            logger.info("No GitHub token configured - using unauthenticated requests")

    def _make_github_request(self, url: str, params: Optional[dict] = None) -> requests.Response:
        """Make GitHub API request.

        Args:
            url: GitHub API URL to request
            params: Optional query parameters

        Returns:
            Response object from requests (any status code)

        Raises:
            NetworkError: If no response was received
        """
        try:
            response = requests.get(url, headers=self.headers, params=params, timeout=self.timeout)
        except requests.RequestException as e:
            logger.error(f"Network error requesting {url}: {e}")
            raise NetworkError("Network error. Try again.") from e

        # Log rate limit info
        remaining = response.headers.get("X-RateLimit-Remaining")
        limit = response.headers.get("X-RateLimit-Limit")
        if remaining and limit:
            logger.debug(f"Rate limit: {remaining}/{limit} remaining")

        return response

    def _check_status(self, response: requests.Response, not_found_message: str) -> None:
        """Raise the matching error for a non-2xx response."""
        status = response.status_code
        if 200 <= status < 300:
            return
        if status == 404:
            logger.debug(f"Not found (404): {not_found_message}")
            raise NotFoundError(not_found_message)
        if status in (401, 403):
            logger.error(f"Authentication error: {status} - {response.text[:200]}")
        else:
            logger.error(f"GitHub API error: {status} {response.reason}")
        raise FetchError(status, response.reason)

    def _parse(self, response: requests.Response, model: type[BaseModel]) -> Any:
        """Validate a JSON object (or list of objects) into ``model``."""
        try:
            payload = response.json()
            if isinstance(payload, list):
                return [model.model_validate(item) for item in payload]
            return model.model_validate(payload)
        except (ValueError, PayloadValidationError) as e:
            logger.error(f"Unexpected {model.__name__} payload: {e}")
            raise FetchError(response.status_code, "Unexpected response payload") from e

    def fetch_repository(self, owner: str, repo: str) -> Repository:
        """Fetch repository metadata.

        Args:
            owner: Repository owner (e.g., "facebook")
            repo: Repository name (e.g., "react")

        Returns:
            Repository model

        Raises:
            ValidationError, NotFoundError, FetchError, NetworkError
        """
        owner, repo = parse_repo_name(f"{owner}/{repo}")
        url = f"{self.base_url}/repos/{owner}/{repo}"

        response = self._make_github_request(url)
        self._check_status(response, REPO_NOT_FOUND_MESSAGE)

        repository = self._parse(response, Repository)
        logger.debug(f"Fetched repository {repository.full_name}")
        return repository

    def lookup_repository(self, repo: str) -> Repository:
        """Validate an ``owner/name`` string and confirm the repository exists.

        Raises:
            ValidationError: Malformed identifier (no request made)
            NotFoundError: Repository missing or private
        """
        owner, name = parse_repo_name(repo)
        try:
            return self.fetch_repository(owner, name)
        except NotFoundError as e:
            raise NotFoundError("Repository not found or is private.") from e

    def fetch_issue_page(self, repo: str, page: int = 1, per_page: int = 30) -> IssuePage:
        """Fetch one page of issues for a repository.

        Issues are requested with ``state=all`` newest first; state filtering
        happens locally. Pull requests returned by the issues endpoint are
        dropped from the page.

        Args:
            repo: Repository identifier (e.g., "facebook/react")
            page: 1-indexed page number
            per_page: Page size (1-100)

        Returns:
            IssuePage with the issues and the Link-header pagination

        Raises:
            ValidationError: Malformed repo/page/per_page (no request made)
            NotFoundError: Repository not found or private
            FetchError: Other non-2xx status
            NetworkError: No response received
            OutOfBoundsError: Page > 1 returned no items
        """
        owner, name = parse_repo_name(repo)
        if page < 1:
            raise ValidationError(f"Page must be 1 or greater (got {page})")
        if not 1 <= per_page <= MAX_PER_PAGE:
            raise ValidationError(f"Page size must be between 1 and {MAX_PER_PAGE} (got {per_page})")

        url = f"{self.base_url}/repos/{owner}/{name}/issues"
        params = {
            "state": "all",
            "sort": "created",
            "direction": "desc",
            "per_page": per_page,
            "page": page
        }

        response = self._make_github_request(url, params=params)
        self._check_status(response, REPO_NOT_FOUND_MESSAGE)

        items = self._parse(response, Issue)

        if not items and page > 1:
            logger.info(f"Page {page} of {owner}/{name} is empty - beyond available results")
            raise OutOfBoundsError(page)

        issues = [item for item in items if not item.is_pull_request]
        pagination = self._pagination_from_links(response, page, per_page, len(items))

        logger.info(
            f"Fetched {len(issues)} issues from {owner}/{name} "
            f"(page {page}/{pagination.total_pages or '?'}, "
            f"{len(items) - len(issues)} pull requests skipped)"
        )

        return IssuePage(repo=f"{owner}/{name}", issues=issues, pagination=pagination)

    def _pagination_from_links(
        self,
        response: requests.Response,
        page: int,
        per_page: int,
        item_count: int
    ) -> Pagination:
        """Build the pagination cursor from the ``Link`` header relations.

        ``rel="last"`` is the total page count and ``rel="next"`` signals
        more pages. Without either, the current page is the last one (or
        there are no pages at all for an empty first page).
        """
        links = response.links or {}
        has_more = "next" in links
        last_page = page_from_url(links.get("last", {}).get("url"))

        if last_page is not None:
            total_pages = last_page
        elif has_more:
            total_pages = None
        else:
            total_pages = page if item_count else 0

        return Pagination(
            page=page,
            per_page=per_page,
            total_pages=total_pages,
            has_more=has_more
        )

    def fetch_issue(self, owner: str, repo: str, issue_number: int) -> Issue:
        """Fetch a single issue.

        Args:
            owner: Repository owner (e.g., "facebook")
            repo: Repository name (e.g., "react")
            issue_number: Issue number

        Raises:
            ValidationError, NotFoundError, FetchError, NetworkError
        """
        owner, repo = parse_repo_name(f"{owner}/{repo}")
        if issue_number < 1:
            raise ValidationError(f"Invalid issue number: {issue_number}")

        url = f"{self.base_url}/repos/{owner}/{repo}/issues/{issue_number}"

        response = self._make_github_request(url)
        self._check_status(response, "Issue not found")

        issue = self._parse(response, Issue)
        logger.debug(f"Fetched issue #{issue_number}: {issue.title[:50]}")
        return issue

    def fetch_issue_comments(self, owner: str, repo: str, issue_number: int) -> list[Comment]:
        """Fetch comments for an issue.

        Follows ``rel="next"`` for up to 5 pages of 100 comments.

        Raises:
            ValidationError, NotFoundError, FetchError, NetworkError
        """
        owner, repo = parse_repo_name(f"{owner}/{repo}")
        url = f"{self.base_url}/repos/{owner}/{repo}/issues/{issue_number}/comments"
        all_comments: list[Comment] = []
        page = 1

        while page <= MAX_COMMENT_PAGES:
            params = {"per_page": MAX_PER_PAGE, "page": page}
            response = self._make_github_request(url, params=params)
            self._check_status(response, "Comments not found")

            comments = self._parse(response, Comment)
            all_comments.extend(comments)

            if not comments or "next" not in (response.links or {}):
                break
            page += 1

        logger.debug(f"Fetched {len(all_comments)} comments for issue #{issue_number}")
        return all_comments

    def fetch_issue_detail(self, owner: str, repo: str, issue_number: int) -> IssueDetail:
        """Fetch an issue and, once it resolves, its comments.

        Comments are only requested when the issue reports ``comments > 0``.
        A failure fetching the issue propagates; a failure fetching comments
        is logged and recorded on the result without failing it.

        Returns:
            IssueDetail with the issue, its comments and any comment error
        """
        issue = self.fetch_issue(owner, repo, issue_number)

        if issue.comments == 0:
            return IssueDetail(issue=issue)

        try:
            comments = self.fetch_issue_comments(owner, repo, issue_number)
        except (NotFoundError, FetchError, NetworkError) as e:
            logger.warning(f"Failed to fetch comments for {owner}/{repo}#{issue_number}: {e}")
            return IssueDetail(issue=issue, comments_error=str(e))

        return IssueDetail(issue=issue, comments=comments)
