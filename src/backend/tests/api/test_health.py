"""
Tests for health and utility endpoints.
"""

import pytest
from httpx import ASGITransport, AsyncClient


@pytest.mark.unit
class TestHealthEndpoints:
    """Test health check endpoints."""

    async def test_health_check(self, client: AsyncClient) -> None:
        """Test basic health check endpoint returns 200."""
        response = await client.get("/health")
        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "healthy"

    async def test_root_endpoint(self, client: AsyncClient) -> None:
        """Test root endpoint returns API info."""
        response = await client.get("/")
        assert response.status_code == 200
        data = response.json()
        assert data["name"] == "OneVote"

    async def test_service_status_healthy(self, client: AsyncClient) -> None:
        """Test service status reports a reachable store and ledger totals."""
        await client.get("/api/v1/voting/candidates")

        response = await client.get("/health/services")

        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "healthy"
        assert data["services"]["database"] == {"configured": True, "reachable": True}
        assert data["ledger"] == {"candidates": 5, "total_votes": 0}

    async def test_service_status_degraded(self, unavailable_database) -> None:
        """Test service status tells a store failure apart from an empty ballot."""
        from api.deps import get_database_handle
        from main import app

        app.dependency_overrides[get_database_handle] = lambda: unavailable_database
        try:
            async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
                response = await ac.get("/health/services")
        finally:
            app.dependency_overrides.clear()

        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "degraded"
        assert data["services"]["database"]["configured"] is False


@pytest.mark.unit
class TestResponseHeaders:
    """Test middleware-added headers."""

    async def test_security_headers_present(self, client: AsyncClient) -> None:
        response = await client.get("/health")

        assert response.headers["X-Content-Type-Options"] == "nosniff"
        assert response.headers["X-Frame-Options"] == "DENY"
        assert "no-store" in response.headers["Cache-Control"]

    async def test_request_id_generated(self, client: AsyncClient) -> None:
        response = await client.get("/health")

        assert response.headers.get("X-Request-ID")

    async def test_request_id_echoed(self, client: AsyncClient) -> None:
        response = await client.get("/health", headers={"X-Request-ID": "trace-123"})

        assert response.headers["X-Request-ID"] == "trace-123"


@pytest.mark.unit
class TestAPIDocumentation:
    """Test API documentation endpoints."""

    async def test_openapi_schema_available(self, client: AsyncClient) -> None:
        """Test OpenAPI schema is accessible (only in debug mode)."""
        from core.config import settings

        response = await client.get("/openapi.json")
        if settings.DEBUG:
            assert response.status_code == 200
            data = response.json()
            assert "/api/v1/voting/vote" in data["paths"]
        else:
            # Docs disabled in production
            assert response.status_code == 404
