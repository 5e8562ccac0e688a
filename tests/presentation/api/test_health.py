"""Tests for the health and readiness endpoints."""

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from app.dustsweep.domain.chains import DEFAULT_CHAINS
from app.dustsweep.presentation.api.health import router


@pytest.fixture
def client() -> TestClient:
    app = FastAPI()
    app.include_router(router, prefix="/api")
    return TestClient(app)


def test_health(client: TestClient) -> None:
    response = client.get("/api/health")

    assert response.status_code == 200
    data = response.json()
    assert data["status"] == "healthy"
    assert data["version"] == "0.1.0"
    assert "timestamp" in data


def test_ready_reports_chain_count(client: TestClient) -> None:
    response = client.get("/api/ready")

    assert response.status_code == 200
    assert response.json() == {"status": "ready", "chains": len(DEFAULT_CHAINS)}
