"""Tests for health check endpoint."""

import pytest
from httpx import AsyncClient


class TestHealthCheck:
    """Tests for /health endpoint."""

    @pytest.mark.asyncio
    async def test_health_response_structure(self, client: AsyncClient):
        """Test health response has correct structure."""
        response = await client.get("/health")
        data = response.json()

        assert "status" in data
        assert "timestamp" in data
        assert "uptime_seconds" in data
        assert "version" in data
        assert "database" in data["checks"]

    @pytest.mark.asyncio
    async def test_health_reports_database(self, client: AsyncClient):
        """Test the database check passes against the test database."""
        response = await client.get("/health")

        assert response.status_code == 200
        assert response.json()["checks"]["database"] == {"status": "healthy"}

    @pytest.mark.asyncio
    async def test_security_headers(self, client: AsyncClient):
        """Test security headers are added to responses."""
        response = await client.get("/health")

        assert response.headers["X-Frame-Options"] == "DENY"
        assert response.headers["X-Content-Type-Options"] == "nosniff"
