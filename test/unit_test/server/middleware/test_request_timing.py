"""
Unit tests for the request timing middleware.

This test suite covers:
- Performance metrics reporting
- Header injection
- Slow request detection
- Error propagation
"""

from unittest.mock import AsyncMock, MagicMock, patch

import pytest
from fastapi import Request
from starlette.responses import Response

from careerconnect.server.middleware import RequestTimingMiddleware

MODULE = "careerconnect.server.middleware.request_timing"


@pytest.fixture
def mock_request():
    request = AsyncMock(spec=Request)
    request.method = "GET"
    request.url.path = "/api/v1/hewan"
    request.state = MagicMock()
    return request


class TestRequestTimingMiddleware:
    async def test_successful_request(self, mock_request):
        async def call_next(request):
            return Response(content="ok", status_code=200)

        middleware = RequestTimingMiddleware(app=AsyncMock())
        with patch(f"{MODULE}.log_api_request") as mock_log:
            response = await middleware.dispatch(mock_request, call_next)

        assert response.status_code == 200
        assert "X-Process-Time" in response.headers
        mock_log.assert_called_once()
        assert mock_log.call_args[1]["method"] == "GET"
        assert mock_log.call_args[1]["path"] == "/api/v1/hewan"
        assert mock_log.call_args[1]["status_code"] == 200

    async def test_slow_request_warns(self, mock_request):
        async def call_next(request):
            return Response(status_code=201)

        middleware = RequestTimingMiddleware(app=AsyncMock())
        with patch(f"{MODULE}.log_api_request"), patch(f"{MODULE}.logger") as mock_logger, patch(
            f"{MODULE}.time"
        ) as mock_time:
            mock_time.time.side_effect = [100.0, 102.0]
            await middleware.dispatch(mock_request, call_next)

        mock_logger.warning.assert_called_once()
        assert "Slow API request" in mock_logger.warning.call_args[0][0]
        assert mock_logger.warning.call_args[1]["extra"]["duration_ms"] == pytest.approx(2000.0)

    async def test_failed_request_is_reported_and_reraised(self, mock_request):
        async def call_next(request):
            raise RuntimeError("handler crashed")

        middleware = RequestTimingMiddleware(app=AsyncMock())
        with patch(f"{MODULE}.log_api_request") as mock_log, patch(f"{MODULE}.logger") as mock_logger:
            with pytest.raises(RuntimeError, match="handler crashed"):
                await middleware.dispatch(mock_request, call_next)

        assert mock_log.call_args[1]["status_code"] == 500
        mock_logger.error.assert_called_once()
