"""
Centralized Error Handling and Logging
Every failure is rendered as {"error": <message>} with a matching status code.
"""

import json
import logging
import uuid
from datetime import datetime
from typing import Optional
from contextvars import ContextVar

from fastapi import Request
from fastapi.responses import JSONResponse
from fastapi.exceptions import RequestValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.middleware.base import BaseHTTPMiddleware

# Context variable for request tracing
request_id_var: ContextVar[str] = ContextVar('request_id', default='')

logger = logging.getLogger(__name__)

BODY_VALIDATION_MESSAGE = "name and correo are required"


class ServiceError(Exception):
    """Base class for errors surfaced to API clients"""
    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(ServiceError):
    """Required field missing; raised before any storage access"""
    status_code = 400


class NotFoundError(ServiceError):
    """Operation targeted a nonexistent identifier"""
    status_code = 404


class StorageError(ServiceError):
    """Failure communicating with or executing against the database"""
    status_code = 500


ERROR_TYPES = {
    "VALIDATION_ERROR": ValidationError,
    "RESOURCE_NOT_FOUND": NotFoundError,
    "DATABASE_ERROR": StorageError,
}


def raise_for_result(result) -> None:
    """Raise the API error matching a failed ServiceResult"""
    if result.success:
        return
    error_class = ERROR_TYPES.get(result.error_type, StorageError)
    raise error_class(result.error or "Unknown error")


class StructuredLogger:
    """Structured logging with consistent format and context"""

    @staticmethod
    def log_error(
        error_type: str,
        message: str,
        request: Optional[Request] = None,
        exception: Optional[Exception] = None
    ) -> str:
        """Log structured error with request context; returns the trace ID"""
        trace_id = request_id_var.get('') or str(uuid.uuid4())[:8]

        log_entry = {
            "timestamp": datetime.utcnow().isoformat(),
            "trace_id": trace_id,
            "error_type": error_type,
            "message": message,
            "level": "ERROR"
        }

        if request:
            log_entry["request"] = {
                "method": request.method,
                "path": request.url.path,
                "client_ip": request.client.host if request.client else None,
            }

        if exception:
            log_entry["exception"] = {
                "type": type(exception).__name__,
                "details": str(exception),
            }

        logger.error(json.dumps(log_entry, default=str))
        return trace_id


class RequestContextMiddleware(BaseHTTPMiddleware):
    """Middleware to assign request IDs and echo them in X-Trace-ID"""

    async def dispatch(self, request: Request, call_next):
        trace_id = str(uuid.uuid4())[:8]
        request_id_var.set(trace_id)
        request.state.trace_id = trace_id

        response = await call_next(request)
        response.headers["X-Trace-ID"] = trace_id
        return response


def _error_response(request: Request, status_code: int, message: str, exc: Exception) -> JSONResponse:
    if status_code >= 500:
        StructuredLogger.log_error(
            f"http_{status_code}",
            message,
            request=request,
            exception=exc
        )
    else:
        logger.warning(f"{request.method} {request.url.path} -> {status_code}: {message}")

    return JSONResponse(status_code=status_code, content={"error": message})


# Global Exception Handlers
async def service_exception_handler(request: Request, exc: ServiceError) -> JSONResponse:
    """Handle domain errors raised by routes"""
    return _error_response(request, exc.status_code, exc.message, exc)


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    """Handle HTTP exceptions (unknown routes, wrong methods, health failures)"""
    response = _error_response(request, exc.status_code, str(exc.detail), exc)
    if getattr(exc, "headers", None):
        response.headers.update(exc.headers)
    return response


async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Handle FastAPI request validation errors as HTTP 400"""
    errors = exc.errors()
    if any(tuple(error.get("loc") or ("",))[0] == "body" for error in errors):
        message = BODY_VALIDATION_MESSAGE
    else:
        message = "; ".join(
            f"{' -> '.join(str(loc) for loc in error.get('loc', []))}: {error.get('msg', 'invalid')}"
            for error in errors
        ) or "Invalid request"
    return _error_response(request, 400, message, exc)


async def general_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Handle all other exceptions; the message is passed through"""
    return _error_response(request, 500, str(exc) or type(exc).__name__, exc)


def setup_error_handling(app):
    """Setup error handling for FastAPI app"""

    # Add middleware for request context
    app.add_middleware(RequestContextMiddleware)

    # Add exception handlers (order matters - most specific first)
    app.add_exception_handler(ServiceError, service_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(Exception, general_exception_handler)

    logger.info("Centralized error handling system initialized")
