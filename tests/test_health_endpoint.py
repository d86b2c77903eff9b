"""Test health endpoint connectivity"""

from unittest.mock import patch

from eventdesk.config import config


class TestHealthEndpoint:
    """Test health endpoints are accessible"""

    def test_health_endpoint(self, client):
        """Test that the health endpoint is accessible"""
        response = client.get("/health")

        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "healthy"
        assert data["service"] == "eventdesk"

    def test_detailed_health_reports_checks(self, client):
        """Database is checked; an unreachable Redis is reported but not fatal"""
        response = client.get("/health/detailed")

        assert response.status_code == 200
        checks = response.json()["checks"]
        assert checks["database"] == "healthy"
        assert "redis" in checks

    def test_detailed_health_skips_database_for_local_store(self, client):
        with patch.dict(config, {"storage_backend": "local"}):
            response = client.get("/health/detailed")

        assert response.status_code == 200
        assert response.json()["checks"]["database"].startswith("skipped")
