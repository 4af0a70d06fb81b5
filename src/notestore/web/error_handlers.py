import logging

from fastapi import Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse, Response
from starlette.exceptions import HTTPException as StarletteHTTPException

from notestore.errors import (
    DuplicateTitleError,
    IndexSetupError,
    MalformedDocumentError,
    NotFoundError,
    QueryFailureError,
    QueryTimeoutError,
    SerializationError,
    ValidationError,
)

logger = logging.getLogger(__name__)


def create_json_error_response(status_code: int, message: str, error_type: str | None = None) -> JSONResponse:
    """Create JSON error response with optional type for machine parsing."""
    content = {"status": "fail" if status_code < 500 else "error", "message": message}
    if error_type:
        content["type"] = error_type
    return JSONResponse(status_code=status_code, content=content)


async def user_error_handler(_: Request, exc: Exception) -> Response:
    """Handle all UserError subclasses with appropriate status codes."""
    if isinstance(exc, NotFoundError):
        status_code = 404
        error_type = "not_found"
    elif isinstance(exc, DuplicateTitleError):
        status_code = 409
        error_type = "duplicate_key"
    elif isinstance(exc, ValidationError):
        status_code = 400
        error_type = "validation_error"
    else:
        # Default for any other UserError subclass
        status_code = 400
        error_type = "bad_request"

    return create_json_error_response(status_code=status_code, message=str(exc), error_type=error_type)


async def request_validation_handler(_: Request, exc: Exception) -> Response:
    """Handle request bodies and query parameters that FastAPI could not parse."""
    errors = exc.errors() if isinstance(exc, RequestValidationError) else []
    message = "; ".join(f"{'.'.join(str(p) for p in err['loc'])}: {err['msg']}" for err in errors) or "Invalid request"
    return create_json_error_response(status_code=400, message=message, error_type="validation_error")


async def http_exception_handler(_: Request, exc: Exception) -> Response:
    """Wrap routing errors (unknown path, wrong method) in the standard error body."""
    status_code = exc.status_code if isinstance(exc, StarletteHTTPException) else 500
    headers = exc.headers if isinstance(exc, StarletteHTTPException) else None
    if status_code == 404:
        message = "Route does not exist on the server"
        error_type = "not_found"
    elif status_code == 405:
        message = "Method Not Allowed"
        error_type = "method_not_allowed"
    else:
        message = str(getattr(exc, "detail", exc))
        error_type = "http_error"

    response = create_json_error_response(status_code=status_code, message=message, error_type=error_type)
    if headers:
        response.headers.update(headers)
    return response


async def storage_error_handler(_: Request, exc: Exception) -> Response:
    """Handle database failures (500) without exposing driver details."""
    logger.error("Storage error: %r", exc, exc_info=exc)
    if isinstance(exc, QueryTimeoutError):
        error_type = "query_timeout"
    elif isinstance(exc, QueryFailureError):
        error_type = "query_failure"
    elif isinstance(exc, SerializationError):
        error_type = "serialization_error"
    elif isinstance(exc, MalformedDocumentError):
        error_type = "malformed_document"
    elif isinstance(exc, IndexSetupError):
        error_type = "index_setup_error"
    else:
        error_type = "storage_error"

    return create_json_error_response(status_code=500, message="A database error occurred.", error_type=error_type)


async def general_exception_handler(_: Request, exc: Exception) -> Response:
    """Handle unexpected errors (500)."""
    logger.exception("Unexpected error: %s", exc)
    return create_json_error_response(
        status_code=500, message="An unexpected error occurred.", error_type="internal_server_error"
    )
