"""
Middleware modules for the CareerConnect server.

This package contains custom middleware for request/response logging
and other cross-cutting concerns.
"""

from .request_timing import RequestTimingMiddleware

__all__ = ["RequestTimingMiddleware"]
