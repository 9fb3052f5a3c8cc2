import structlog
from fastapi import Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse, Response

from expensetracker.errors import (
    AccessDeniedError,
    AuthenticationError,
    DuplicateUsernameError,
    InvalidCredentialsError,
    InvalidIdError,
    InvalidTokenError,
    MissingTokenError,
    NotFoundError,
    TokenExpiredError,
    ValidationError,
)

logger = structlog.get_logger(__name__)

# Checked in order, so subclasses come before their bases
_USER_ERROR_STATUS: list[tuple[type[Exception], int, str]] = [
    (TokenExpiredError, 403, "token_expired"),
    (MissingTokenError, 401, "missing_token"),
    (InvalidTokenError, 401, "invalid_token"),
    (InvalidCredentialsError, 401, "invalid_credentials"),
    (AuthenticationError, 401, "authentication_error"),
    (AccessDeniedError, 403, "access_denied"),
    (NotFoundError, 404, "not_found"),
    (DuplicateUsernameError, 400, "duplicate_username"),
    (InvalidIdError, 400, "invalid_id"),
    (ValidationError, 400, "validation_error"),
]


def create_json_error_response(
    status_code: int, message: str, error_type: str | None = None, detail: str | None = None
) -> JSONResponse:
    """Create JSON error response with optional type for machine parsing."""
    content = {"message": message}
    if error_type:
        content["type"] = error_type
    if detail:
        content["detail"] = detail
    return JSONResponse(status_code=status_code, content=content)


async def user_error_handler(_: Request, exc: Exception) -> Response:
    """Handle all UserError subclasses with appropriate status codes."""
    for error_class, status_code, error_type in _USER_ERROR_STATUS:
        if isinstance(exc, error_class):
            break
    else:
        status_code, error_type = 400, "bad_request"

    return create_json_error_response(status_code=status_code, message=str(exc), error_type=error_type)


async def request_validation_handler(_: Request, exc: Exception) -> Response:
    """Report request schema violations as 400 validation errors."""
    errors = exc.errors() if isinstance(exc, RequestValidationError) else []
    if errors:
        first = errors[0]
        field = ".".join(str(part) for part in first.get("loc", ()) if part != "body")
        message = f"{field}: {first.get('msg')}" if field else str(first.get("msg"))
    else:
        message = "Invalid request"
    return create_json_error_response(status_code=400, message=message, error_type="validation_error")


async def general_exception_handler(request: Request, exc: Exception) -> Response:
    """Handle unexpected errors (500). Details are only exposed in debug mode."""
    logger.exception("unexpected_error", path=request.url.path)
    detail = f"{type(exc).__name__}: {exc}" if request.app.state.app.debug else None
    return create_json_error_response(
        status_code=500, message="An unexpected error occurred.", error_type="internal_server_error", detail=detail
    )
