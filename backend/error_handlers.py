"""
Exception handlers mapping issue query errors onto HTTP responses.

Every payload carries a machine-readable ``error`` type so a frontend can
tell an out-of-range page apart from a missing repository even though both
answer 404.
"""

import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from fetchers.errors import (
    FetchError,
    IssueQueryError,
    NetworkError,
    NotFoundError,
    OutOfBoundsError,
    ValidationError,
)

logger = logging.getLogger(__name__)

STATUS_CODES = {
    ValidationError: 400,
    NotFoundError: 404,
    OutOfBoundsError: 404,
    FetchError: 502,
    NetworkError: 503,
}


def status_for(exc: IssueQueryError) -> int:
    for error_class, status_code in STATUS_CODES.items():
        if isinstance(exc, error_class):
            return status_code
    return 500

def _response_payload(detail: str, error_type: str, status_code: int) -> dict:
    return {
        "detail": detail,
        "error": error_type,
        "status_code": status_code,
    }


def _describe_request_errors(exc: RequestValidationError) -> str:
    """One readable line per invalid parameter, e.g. "page: Input should be ..."."""
    messages = []
    for error in exc.errors():
        field = error["loc"][-1] if error.get("loc") else "request"
        messages.append(f"{field}: {error['msg']}")
    return "; ".join(messages) or "Invalid request"


def register_exception_handlers(app: FastAPI) -> None:
    @app.exception_handler(IssueQueryError)
    async def issue_query_exception_handler(request: Request, exc: IssueQueryError):
        status_code = status_for(exc)
        logger.warning(f"{request.url.path} failed with {exc.error_type} ({status_code}): {exc.message}")
        return JSONResponse(
            status_code=status_code,
            content=_response_payload(exc.message, exc.error_type, status_code),
        )

    # Query and path parameters that fail their declared bounds are local
    # validation failures too, answered like ValidationError
    @app.exception_handler(RequestValidationError)
    async def request_validation_exception_handler(request: Request, exc: RequestValidationError):
        status_code = STATUS_CODES[ValidationError]
        detail = _describe_request_errors(exc)
        logger.warning(f"{request.url.path} rejected with validation_error ({status_code}): {detail}")
        return JSONResponse(
            status_code=status_code,
            content=_response_payload(detail, ValidationError.error_type, status_code),
        )
