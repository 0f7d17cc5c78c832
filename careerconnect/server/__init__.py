"""
CareerConnect Server Package.

This package contains the web server implementation for the CareerConnect platform.

Subpackages:
    api: FastAPI route definitions and endpoint logic.
    auth: Password hashing, JWT tokens and current-user dependencies.
    core: Configuration and constants.
    exception_handlers: Global exception handling.
    middleware: Request timing and monitoring middleware.
    services: Business logic that spans several repositories.
"""
