from typing import Any

import structlog
from fastapi import Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse, Response

from tasktrack.core.contracts import issues_from_errors
from tasktrack.errors import AuthenticationError, ConflictError, FieldIssue, NotFoundError, ValidationError

logger = structlog.get_logger(__name__)


def create_json_error_response(
    status_code: int, message: str, error_type: str | None = None, issues: list[FieldIssue] | None = None
) -> JSONResponse:
    """Create JSON error response with optional type for machine parsing."""
    content: dict[str, Any] = {"message": message}
    if error_type:
        content["type"] = error_type
    if issues is not None:
        content["issues"] = [{"path": issue.path, "message": issue.message} for issue in issues]
    headers = {"WWW-Authenticate": "Bearer"} if status_code == 401 else None
    return JSONResponse(status_code=status_code, content=content, headers=headers)


async def user_error_handler(_: Request, exc: Exception) -> Response:
    """Handle all UserError subclasses with appropriate status codes."""
    if isinstance(exc, AuthenticationError):
        return create_json_error_response(401, str(exc), "authentication_error")
    if isinstance(exc, NotFoundError):
        return create_json_error_response(404, str(exc), "not_found")
    if isinstance(exc, ConflictError):
        return create_json_error_response(409, str(exc), "conflict")
    if isinstance(exc, ValidationError):
        return create_json_error_response(400, str(exc), "validation_error", issues=exc.issues)
    # Default for any other UserError subclass
    return create_json_error_response(400, str(exc), "bad_request")


async def request_validation_error_handler(_: Request, exc: Exception) -> Response:
    """Render FastAPI body/query validation failures like contract failures."""
    errors = exc.errors() if isinstance(exc, RequestValidationError) else []
    issues = issues_from_errors(errors, skip_prefix=("body", "query", "path"))
    return create_json_error_response(400, "Validation failed", "validation_error", issues=issues)


async def storage_error_handler(request: Request, exc: Exception) -> Response:
    """Session store or database unreachable (503)."""
    logger.error("storage_unavailable", path=request.url.path, error=repr(exc))
    return create_json_error_response(503, "Storage backend unavailable.", "storage_unavailable")


async def general_exception_handler(_: Request, exc: Exception) -> Response:
    """Handle unexpected errors (500)."""
    logger.exception("unexpected_error", error=repr(exc))
    return create_json_error_response(
        status_code=500, message="An unexpected error occurred.", error_type="internal_server_error"
    )
