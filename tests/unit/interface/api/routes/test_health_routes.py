"""Route tests for /health."""

from fastapi.testclient import TestClient

from shelf.interface.api.app import create_app
from tests.di import build_test_container


def test_health_reports_settings():
    """Health is public and reports mail and retention settings."""
    # Arrange
    client = TestClient(create_app(build_test_container()))

    # Act
    response = client.get("/health")

    # Assert
    assert response.status_code == 200
    body = response.json()
    assert body["status"] == "healthy"
    assert body["invitation_email"] is True
    assert body["retention_days"] == 7
