"""Tests for health check endpoints.

Verifies health check functionality including basic, detailed, readiness, and liveness probes.
"""

from unittest.mock import MagicMock, patch

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.orm import sessionmaker

from funding_advisor.config import Settings
from funding_advisor.database import get_db
from funding_advisor.dependencies import get_prompt_manager, get_settings
from funding_advisor.health import check_agent_prompts, check_database, check_llm_api
from funding_advisor.main import app
from funding_advisor.prompts.manager import PromptManager


@pytest.fixture
def client(db_engine):
    """FastAPI test client bound to the in-memory test database."""
    TestingSessionLocal = sessionmaker(bind=db_engine)

    def override_get_db():
        db = TestingSessionLocal()
        try:
            yield db
        finally:
            db.close()

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_settings] = lambda: Settings(anthropic_api_key="test-key")
    yield TestClient(app)
    app.dependency_overrides.clear()


class TestBasicHealthCheck:
    """Test basic health check endpoint."""

    def test_health_endpoint_returns_correct_structure(self, client):
        response = client.get("/health")

        assert response.status_code == 200
        assert response.json() == {
            "status": "healthy",
            "service": "funding-advisor",
            "version": "1.0.0",
        }


class TestDetailedHealthCheck:
    """Test detailed health check with dependency checks."""

    def test_detailed_health_has_checks(self, client):
        response = client.get("/health/detailed")
        assert response.status_code == 200

        checks = response.json()["checks"]
        assert set(checks) == {"database", "claude_api", "agent_prompts"}
        assert checks["database"]["healthy"] is True
        assert "Database connected" in checks["database"]["message"]

    def test_detailed_health_overall_healthy_with_bundled_prompts(self, client):
        data = client.get("/health/detailed").json()

        assert data["checks"]["agent_prompts"]["healthy"] is True
        assert data["status"] == "healthy"

    def test_missing_prompts_degrade(self, client, tmp_path):
        app.dependency_overrides[get_prompt_manager] = lambda: PromptManager(base_dir=tmp_path)

        data = client.get("/health/detailed").json()

        assert data["status"] == "degraded"
        prompts = data["checks"]["agent_prompts"]
        assert prompts["healthy"] is False
        assert "lookup_agent" in prompts["message"]
        assert "funding_advisor" in prompts["message"]

    @patch("funding_advisor.health.check_llm_api")
    def test_detailed_health_degraded_when_llm_check_fails(self, mock_check, client):
        mock_check.return_value = {"healthy": False, "message": "Anthropic API key not configured"}

        data = client.get("/health/detailed").json()

        assert data["status"] == "degraded"
        assert data["checks"]["claude_api"]["healthy"] is False


class TestProbes:
    """Readiness and liveness probes."""

    def test_readiness_probe_returns_200_when_ready(self, client):
        response = client.get("/health/ready")

        assert response.status_code == 200
        assert response.json()["ready"] is True

    @patch("funding_advisor.health.Session.execute")
    def test_readiness_probe_returns_503_when_db_down(self, mock_execute, client):
        mock_execute.side_effect = Exception("Database connection failed")

        response = client.get("/health/ready")

        assert response.status_code == 503
        assert response.json()["detail"]["ready"] is False

    def test_liveness_probe_returns_alive(self, client):
        response = client.get("/health/live")

        assert response.status_code == 200
        assert response.json()["alive"] is True


class TestHealthCheckFunctions:
    """Test individual health check functions."""

    def test_check_database_failure(self):
        mock_session = MagicMock()
        mock_session.execute.side_effect = Exception("Connection lost")

        result = check_database(mock_session)

        assert result["healthy"] is False
        assert "Database error" in result["message"]

    def test_check_llm_api_configured(self):
        result = check_llm_api(Settings(anthropic_api_key="test-key"))

        assert result["healthy"] is True
        assert "Claude API key configured" in result["message"]

    def test_check_llm_api_not_configured(self):
        result = check_llm_api(Settings(anthropic_api_key=""))

        assert result["healthy"] is False
        assert "Anthropic API key not configured" in result["message"]

    def test_check_agent_prompts_override_counts(self, tmp_path):
        settings = Settings(lookup_agent="Custom lookup", funding_advisor_agent="Custom advisor")

        result = check_agent_prompts(settings, PromptManager(base_dir=tmp_path))

        assert result["healthy"] is True
