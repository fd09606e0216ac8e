"""
Unified Error Handling for FastAPI.

Provides:
- Consistent JSON error responses
- Domain error to status code mapping
- Error logging with request context
- Request ID tracking
"""

import logging
import uuid
from typing import Callable

from fastapi import FastAPI, HTTPException, Request
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.responses import Response

from ..domain.errors import DomainError, ImageExportFailure, IndexOutOfRange, InvalidInput

logger = logging.getLogger(__name__)

DOMAIN_STATUS_CODES = {
    InvalidInput: 422,
    IndexOutOfRange: 404,
    ImageExportFailure: 500,
}


class ErrorHandlerMiddleware(BaseHTTPMiddleware):
    """
    Middleware that catches all unhandled exceptions and returns
    consistent JSON error responses.
    """

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        """Process request and handle any errors."""
        request_id = str(uuid.uuid4())[:8]
        request.state.request_id = request_id

        try:
            return await call_next(request)

        except HTTPException:
            # Let HTTP exceptions pass through to FastAPI's handler
            raise

        except Exception as e:
            logger.error(
                f"Unhandled exception [{request_id}]: {type(e).__name__}: {e}",
                exc_info=True,
                extra={
                    "request_id": request_id,
                    "path": request.url.path,
                    "method": request.method,
                },
            )
            return JSONResponse(
                status_code=500,
                content={
                    "error": {
                        "message": "Internal server error",
                    },
                    "request_id": request_id,
                },
            )


def get_error_response(error: Exception, request_id: str = None) -> dict:
    """
    Build a standard error response dict.

    Args:
        error: The exception that occurred
        request_id: Optional request ID for tracking

    Returns:
        Error response dictionary
    """
    response = {
        "error": {
            "message": str(error),
            "type": type(error).__name__,
        },
    }

    if request_id:
        response["request_id"] = request_id

    return response


def status_code_for(error: DomainError) -> int:
    for error_type, status_code in DOMAIN_STATUS_CODES.items():
        if isinstance(error, error_type):
            return status_code
    return 400


async def domain_error_handler(request: Request, exc: DomainError) -> JSONResponse:
    """Map typed domain errors to JSON responses."""
    status_code = status_code_for(exc)
    request_id = getattr(request.state, "request_id", None)
    if status_code >= 500:
        logger.error(f"Domain failure [{request_id}]: {exc}")
    else:
        logger.info(f"Rejected request [{request_id}]: {type(exc).__name__}: {exc}")
    return JSONResponse(
        status_code=status_code, content=get_error_response(exc, request_id)
    )


def register_error_handlers(app: FastAPI) -> None:
    app.add_middleware(ErrorHandlerMiddleware)
    app.add_exception_handler(DomainError, domain_error_handler)
