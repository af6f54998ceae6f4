"""Tests for the request logging middleware."""

from unittest.mock import patch

import pytest
from httpx import AsyncClient

from catalog.api.deps import get_category_repository
from catalog.main import app


def completed_calls(logger) -> list[dict]:
    return [c.kwargs for c in logger.info.call_args_list if c.args == ("Request completed",)]


class TestRequestLogging:
    """Tests for the log_requests middleware."""

    @pytest.mark.asyncio
    async def test_logs_completed_request(self, client: AsyncClient):
        with patch("catalog.main.logger") as logger:
            response = await client.get("/product-categories")

        assert response.status_code == 200
        [entry] = completed_calls(logger)
        assert entry["status_code"] == 200
        assert entry["duration_ms"] >= 0

    @pytest.mark.asyncio
    async def test_logs_request_that_raised(self, client: AsyncClient):
        def broken_repository():
            raise RuntimeError("connection lost")

        app.dependency_overrides[get_category_repository] = broken_repository

        with patch("catalog.main.logger") as logger:
            response = await client.get("/product-categories")

        assert response.status_code == 500
        [entry] = completed_calls(logger)
        assert entry["status_code"] == 500
