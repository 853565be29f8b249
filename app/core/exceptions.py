"""Application-level exceptions and FastAPI exception handlers."""


import logging
from collections.abc import Callable

from fastapi import FastAPI, Request
from fastapi.exception_handlers import request_validation_exception_handler
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

logger = logging.getLogger(__name__)

class AppException(Exception):
    """Base application exception."""

    def __init__(self, message: str, status_code: int = 500, code: str = "INTERNAL_ERROR"):
        self.message = message
        self.status_code = status_code
        self.code = code
        super().__init__(message)

class NotFoundError(AppException):
    def __init__(self, entity: str, entity_id: str | None = None):
        msg = f"{entity} not found" if not entity_id else f"{entity} '{entity_id}' not found"
        super().__init__(msg, status_code=404, code="NOT_FOUND")

class ForbiddenError(AppException):
    def __init__(self, message: str = "Access denied"):
        super().__init__(message, status_code=403, code="FORBIDDEN")

class UnauthorizedError(AppException):
    def __init__(self, message: str = "Authentication required"):
        super().__init__(message, status_code=401, code="UNAUTHORIZED")

class ConflictError(AppException):
    def __init__(self, message: str):
        super().__init__(message, status_code=409, code="CONFLICT")

class AlreadyExistsError(ConflictError):
    """Uniqueness collision, from the pre-check or from the store itself."""

    def __init__(self, entity: str, key: str | None = None):
        msg = f"{entity} already exists" if not key else f"{entity} '{key}' already exists"
        super().__init__(msg)
        self.code = "ALREADY_EXISTS"

class InvalidInputError(AppException):
    """A request field failed a validation rule."""

    def __init__(self, field: str, reason: str):
        self.field = field
        self.reason = reason
        super().__init__(f"{field}: {reason}", status_code=400, code="INVALID_INPUT")

class ConstraintViolationError(AppException):
    """The store rejected a write through a check or foreign-key constraint."""

    def __init__(self, message: str):
        super().__init__(message, status_code=422, code="CONSTRAINT_VIOLATION")

class RequestTimeoutError(AppException):
    def __init__(self, message: str = "Request timed out"):
        super().__init__(message, status_code=504, code="TIMEOUT")

class InternalError(AppException):
    """Unexpected store failure, wrapped with context."""

    def __init__(self, message: str):
        super().__init__(message, status_code=500, code="INTERNAL_ERROR")

# ---------------------------------------------------------------------------
# FastAPI exception handlers
# ---------------------------------------------------------------------------

ErrorRenderer = Callable[[Exception], JSONResponse]

def error_body(exc: AppException) -> dict:
    error = {"code": exc.code, "message": exc.message}
    field = getattr(exc, "field", None)
    if field:
        error["field"] = field
    return {"error": error}

def _renderer_for(request: Request) -> ErrorRenderer | None:
    """Surfaces with their own error shape register a renderer by path prefix."""
    renderers: dict[str, ErrorRenderer] = getattr(request.app.state, "error_renderers", {})
    for prefix, renderer in renderers.items():
        if request.url.path.startswith(prefix):
            return renderer
    return None

def render_error(request: Request, exc: AppException) -> JSONResponse:
    renderer = _renderer_for(request)
    if renderer:
        return renderer(exc)
    return JSONResponse(status_code=exc.status_code, content=error_body(exc))

def register_exception_handlers(app: FastAPI) -> None:
    """Attach all custom exception handlers to the FastAPI app."""

    @app.exception_handler(AppException)
    async def app_exception_handler(request: Request, exc: AppException) -> JSONResponse:
        if exc.status_code >= 500:
            logger.error("%s %s failed: %s", request.method, request.url.path, exc.message)
        return render_error(request, exc)

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError):
        renderer = _renderer_for(request)
        if renderer:
            return renderer(exc)
        return await request_validation_exception_handler(request, exc)

    @app.exception_handler(404)
    async def not_found_handler(request: Request, exc: Exception) -> JSONResponse:
        return JSONResponse(
            status_code=404,
            content={"error": {"code": "NOT_FOUND", "message": "Resource not found"}},
        )

    @app.exception_handler(Exception)
    async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
        logger.exception("Unhandled error on %s %s", request.method, request.url.path)
        return render_error(request, InternalError("An unexpected error occurred"))
