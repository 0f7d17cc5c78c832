"""
Unit tests for server exception handlers.

Tests cover domain error translation, integration failures and the global
handler for unexpected exceptions.
"""

import json
from unittest.mock import Mock, patch

import pytest
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from httpx import ASGITransport, AsyncClient

from careerconnect.core.errors import (
    AuthenticationError,
    ConflictError,
    ForbiddenError,
    NotFoundError,
    OcrApiError,
    SheetsApiError,
    ValidationFailedError,
    YouTubeApiError,
)
from careerconnect.server.exception_handlers import setup_exception_handlers
from careerconnect.server.exception_handlers.global_handler import (
    domain_exception_handler,
    global_exception_handler,
    integration_exception_handler,
)


@pytest.fixture
def mock_request():
    """Create a mock request object."""
    request = Mock(spec=Request)
    request.method = "GET"
    request.url.path = "/api/v1/test"
    request.query_params = {}
    request.client = Mock()
    request.client.host = "127.0.0.1"
    return request


def body(response: JSONResponse) -> dict:
    return json.loads(response.body)


class TestDomainExceptionHandler:
    @pytest.mark.parametrize(
        "exc,status_code",
        [
            (ValidationFailedError("bad input"), 400),
            (AuthenticationError("Unauthorized"), 401),
            (ForbiddenError("Forbidden"), 403),
            (NotFoundError("Hewan not found"), 404),
            (ConflictError("Email already registered"), 409),
        ],
    )
    async def test_maps_status_and_detail(self, mock_request, exc, status_code):
        response = await domain_exception_handler(mock_request, exc)
        assert response.status_code == status_code
        assert body(response) == {"detail": exc.message}

    async def test_status_override(self, mock_request):
        response = await domain_exception_handler(mock_request, ValidationFailedError("gone", status_code=410))
        assert response.status_code == 410


class TestIntegrationExceptionHandler:
    @pytest.mark.parametrize("error_cls", [YouTubeApiError, SheetsApiError, OcrApiError])
    async def test_returns_bad_gateway(self, mock_request, error_cls):
        with patch("careerconnect.server.exception_handlers.global_handler.logger") as mock_logger:
            response = await integration_exception_handler(mock_request, error_cls("upstream down", status_code=500))

        assert response.status_code == 502
        assert body(response) == {"detail": "upstream down", "error_type": error_cls.__name__}
        assert mock_logger.error.call_args[1]["extra"]["upstream_status"] == 500


class TestGlobalExceptionHandler:
    async def test_exception_handler_logs_error(self, mock_request):
        with patch("careerconnect.server.exception_handlers.global_handler.logger") as mock_logger:
            await global_exception_handler(mock_request, ValueError("Test error"))

        mock_logger.error.assert_called_once()
        call_args = mock_logger.error.call_args
        assert "Unhandled exception" in call_args[0][0]
        assert call_args[1]["extra"]["error_type"] == "ValueError"
        assert call_args[1]["extra"]["client"] == "127.0.0.1"

    async def test_exception_handler_returns_500(self, mock_request):
        exc = RuntimeError("Test error")
        with patch("careerconnect.server.exception_handlers.global_handler.logger"):
            response = await global_exception_handler(mock_request, exc)

        assert response.status_code == 500
        assert body(response) == {"detail": "Internal server error", "error_id": id(exc), "error_type": "RuntimeError"}

    async def test_request_without_client(self, mock_request):
        mock_request.client = None
        with patch("careerconnect.server.exception_handlers.global_handler.logger") as mock_logger:
            await global_exception_handler(mock_request, KeyError("k"))
        assert mock_logger.error.call_args[1]["extra"]["client"] == "unknown"


class TestSetupExceptionHandlers:
    @pytest.fixture
    def app(self) -> FastAPI:
        app = FastAPI()
        setup_exception_handlers(app)

        @app.get("/missing")
        async def missing():
            raise NotFoundError("Kupon not found")

        @app.get("/upstream")
        async def upstream():
            raise SheetsApiError('Sheet "Data" not found', status_code=404)

        @app.get("/boom")
        async def boom():
            raise RuntimeError("boom")

        return app

    async def test_handlers_are_registered(self, app):
        transport = ASGITransport(app=app, raise_app_exceptions=False)
        async with AsyncClient(transport=transport, base_url="http://localhost") as client:
            missing = await client.get("/missing")
            upstream = await client.get("/upstream")
            boom = await client.get("/boom")

        assert missing.status_code == 404
        assert missing.json() == {"detail": "Kupon not found"}
        assert upstream.status_code == 502
        assert upstream.json()["error_type"] == "SheetsApiError"
        assert boom.status_code == 500
        assert boom.json()["error_type"] == "RuntimeError"
