"""Tests for middleware functionality."""

from types import SimpleNamespace
from unittest.mock import Mock, patch

import pytest
from fastapi import Request, Response

from presskit.middleware import add_request_id


def make_request(headers: dict[str, str]) -> Mock:
    request = Mock(spec=Request)
    request.headers = Mock()
    request.headers.get = lambda key, default=None: headers.get(key, default)
    request.state = SimpleNamespace()
    request.method = "GET"
    request.url = Mock(path="/new-thing")
    request.client = None
    return request


async def call_next(request):
    response = Mock(spec=Response)
    response.headers = {}
    response.status_code = 200
    return response


class TestRequestIDMiddleware:
    """Test request ID middleware."""

    @pytest.mark.asyncio
    async def test_add_request_id_with_existing_header(self):
        """Test middleware preserves existing X-Request-ID header."""
        request = make_request({"X-Request-ID": "existing-id-123"})

        response = await add_request_id(request, call_next)

        assert request.state.request_id == "existing-id-123"
        assert response.headers["X-Request-ID"] == "existing-id-123"

    @pytest.mark.asyncio
    async def test_add_request_id_generates_new_id(self):
        """Test middleware generates new ID when header missing."""
        request = make_request({})

        with patch("presskit.middleware.uuid.uuid4", return_value="generated-uuid-456"):
            response = await add_request_id(request, call_next)

        assert request.state.request_id == "generated-uuid-456"
        assert response.headers["X-Request-ID"] == "generated-uuid-456"

    @pytest.mark.asyncio
    async def test_response_time_header(self):
        request = make_request({})

        with patch("presskit.middleware.perf_counter", side_effect=[10.0, 10.25]):
            response = await add_request_id(request, call_next)

        assert response.headers["X-Response-Time"] == "250.0"
