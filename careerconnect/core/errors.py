"""Error types shared by services, repositories and integrations.

Purpose:
- Give services a way to report business-rule failures without importing
  FastAPI. The server registers a handler that maps each error to its HTTP
  status and a ``{"detail": message}`` body.
- Expose HTTP-oriented context (status code, response body) for failures of
  third-party integrations.

Usage:
- Raise ``NotFoundError``/``ForbiddenError``/``ConflictError``/``ServiceUnavailableError``/
  ``ValidationFailedError`` from services.
- Catch ``IntegrationError`` around calls to external clients and inspect
  ``status_code`` or ``details``.
"""

from __future__ import annotations

from typing import Any, Optional


class DomainError(Exception):
    """Base error for business-rule failures.

    Args:
        message: Human-readable error description returned to the client.
        status_code: HTTP status the server responds with.
    """

    status_code: int = 400

    def __init__(self, message: str, *, status_code: Optional[int] = None) -> None:
        super().__init__(message)
        self.message = message
        if status_code is not None:
            self.status_code = status_code


class ValidationFailedError(DomainError):
    """Raised when a request passes schema validation but breaks a business rule."""

    status_code = 400


class AuthenticationError(DomainError):
    status_code = 401


class ForbiddenError(DomainError):
    status_code = 403


class NotFoundError(DomainError):
    status_code = 404


class ConflictError(DomainError):
    status_code = 409


class ServiceUnavailableError(DomainError):
    """Raised when a feature's backing data or configuration is missing."""

    status_code = 503


class IntegrationError(Exception):
    """Base error for third-party integration failures.

    Args:
        message: Human-readable error description.
        status_code: Optional HTTP status code returned by the remote service.
        details: Optional structured payload from the remote service.
    """

    def __init__(self, message: str, *, status_code: Optional[int] = None, details: Optional[Any] = None) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.details = details


class YouTubeApiError(IntegrationError):
    """Raised when the YouTube Data API returns an error or an unexpected payload."""


class SheetsApiError(IntegrationError):
    """Raised when the Google Sheets API cannot return the requested range."""


class OcrApiError(IntegrationError):
    """Raised when the OCR service rejects the image or is unreachable."""


class EmailDeliveryError(IntegrationError):
    """Raised when the email relay does not accept a message."""
