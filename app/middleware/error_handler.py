"""Exception handlers that keep every error in the success/error envelope."""

import structlog
from fastapi import Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from app.core.exceptions import AppException
from app.schemas.results import INVALID_INPUT_MESSAGE

logger = structlog.get_logger()


def _error_response(request: Request, status_code: int, message: str) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={"success": False, "error": message, "path": request.url.path},
    )


async def app_exception_handler(request: Request, exc: AppException) -> JSONResponse:
    """Handle application exceptions that escaped a workflow."""
    return _error_response(request, exc.status_code, exc.message)


async def http_exception_handler(
    request: Request,
    exc: StarletteHTTPException,
) -> JSONResponse:
    """Handle HTTP exceptions (unknown routes, wrong methods, ...)."""
    return _error_response(request, exc.status_code, str(exc.detail))


async def validation_exception_handler(
    request: Request,
    exc: RequestValidationError,
) -> JSONResponse:
    """Malformed request bodies get the generic invalid-input message."""
    logger.info("request_validation_failed", path=request.url.path, errors=exc.errors())
    return _error_response(request, status.HTTP_400_BAD_REQUEST, INVALID_INPUT_MESSAGE)


async def general_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Log unexpected exceptions in full and answer with a generic message."""
    logger.error("unhandled_exception", path=request.url.path, exc_info=exc)
    return _error_response(
        request,
        status.HTTP_500_INTERNAL_SERVER_ERROR,
        "An unexpected error occurred",
    )
