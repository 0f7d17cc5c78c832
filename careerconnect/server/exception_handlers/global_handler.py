"""
Global Exception Handlers for FastAPI Application.

This module maps domain and integration errors raised below the router layer
to JSON responses, and provides a global handler that catches all unhandled
exceptions and logs detailed information including error ID, request context,
and full traceback for debugging purposes.
"""

import traceback

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

from careerconnect.core.errors import DomainError, IntegrationError
from careerconnect.core.logging_config import get_logger
from careerconnect.core.monitoring import log_error

logger = get_logger(__name__)


async def domain_exception_handler(request: Request, exc: DomainError) -> JSONResponse:
    """
    Translate a business-rule failure into its HTTP status.

    Args:
        request: The HTTP request that caused the exception
        exc: The domain error that was raised

    Returns:
        JSONResponse with the error message as ``detail``
    """
    logger.info(
        f"{request.method} {request.url.path} rejected: {exc.message}",
        extra={"status_code": exc.status_code, "error_type": type(exc).__name__},
    )
    return JSONResponse(status_code=exc.status_code, content={"detail": exc.message})


async def integration_exception_handler(request: Request, exc: IntegrationError) -> JSONResponse:
    """
    Report a failing third-party service as a bad gateway.

    Args:
        request: The HTTP request that caused the exception
        exc: The integration error that was raised

    Returns:
        JSONResponse with status 502
    """
    logger.error(
        f"Integration failure in {request.method} {request.url.path}: {exc}",
        extra={
            "method": request.method,
            "path": request.url.path,
            "error_type": type(exc).__name__,
            "upstream_status": exc.status_code,
        },
    )
    log_error(type(exc).__name__, str(exc), {"path": request.url.path, "upstream_status": exc.status_code})
    return JSONResponse(
        status_code=status.HTTP_502_BAD_GATEWAY,
        content={"detail": str(exc), "error_type": type(exc).__name__},
    )


async def global_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """
    Global exception handler to log detailed error information.

    This handler is called for any unhandled exception in the application.
    It logs the full error context and returns a JSON response with an error ID
    that clients can use to reference the error when reporting issues.

    Args:
        request: The HTTP request that caused the exception
        exc: The exception that was raised

    Returns:
        JSONResponse with error details and error ID
    """
    error_id = id(exc)

    logger.error(
        f"Unhandled exception [{error_id}] in {request.method} {request.url.path}: {str(exc)}",
        exc_info=True,
        extra={
            "error_id": error_id,
            "method": request.method,
            "path": request.url.path,
            "query_params": dict(request.query_params),
            "client": request.client.host if request.client else "unknown",
            "error_type": type(exc).__name__,
            "traceback": traceback.format_exc(),
        },
    )
    log_error(type(exc).__name__, str(exc), {"error_id": error_id, "path": request.url.path})

    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={
            "detail": "Internal server error",
            "error_id": error_id,
            "error_type": type(exc).__name__,
        },
    )


def setup_exception_handlers(app: FastAPI) -> None:
    """
    Register exception handlers with the FastAPI application.

    Args:
        app: The FastAPI application instance
    """
    app.add_exception_handler(DomainError, domain_exception_handler)
    app.add_exception_handler(IntegrationError, integration_exception_handler)
    app.add_exception_handler(Exception, global_exception_handler)
    logger.debug("Exception handlers registered successfully")
