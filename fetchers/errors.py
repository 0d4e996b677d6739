"""Errors raised while querying GitHub for repositories and issues.

Every error carries a message suitable for showing to the user. The
``clears_results`` flag tells a view whether previously displayed data is
stale after the failure (hard errors) or still valid (soft errors).
"""

from typing import Optional


class IssueQueryError(Exception):
    """Base class for all issue query failures."""

    error_type = "query_error"
    clears_results = True

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(IssueQueryError):
    """Malformed request, rejected locally before any network call."""

    error_type = "validation_error"
    clears_results = False


class NotFoundError(IssueQueryError):
    """Upstream answered 404 (missing or private repository/issue)."""

    error_type = "not_found"


class FetchError(IssueQueryError):
    """Upstream answered with a non-2xx status other than 404."""

    error_type = "fetch_error"

    def __init__(self, status_code: int, status_text: Optional[str] = None):
        self.status_code = status_code
        self.status_text = status_text or "Unknown error"
        super().__init__(f"Failed to fetch from GitHub: {status_code} {self.status_text}")


class NetworkError(IssueQueryError):
    """The request never produced a response (DNS, connection, timeout)."""

    error_type = "network_error"


class OutOfBoundsError(IssueQueryError):
    """A page past the end of the available results was requested."""

    error_type = "out_of_bounds"
    clears_results = False

    def __init__(self, page: int):
        self.page = page
        super().__init__(f"Page {page} is beyond the available results")
