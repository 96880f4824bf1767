"""
Blog Backend — Health Check Tests
==================================
"""

import pytest
from unittest.mock import MagicMock
from sqlalchemy.exc import OperationalError


@pytest.mark.asyncio
async def test_health_reports_connected_database(test_client):
    response = await test_client.get("/health")

    assert response.status_code == 200
    body = response.json()
    assert body["status"] == "healthy"
    assert body["database"] == "connected"
    assert body["version"] == "1.0.0"


@pytest.mark.asyncio
async def test_health_reports_unreachable_database(test_app, test_client):
    broken_engine = MagicMock()
    broken_engine.connect.side_effect = OperationalError(
        "SELECT 1", {}, Exception("unable to open database file")
    )
    real_engine = test_app.state.engine
    test_app.state.engine = broken_engine
    try:
        response = await test_client.get("/health")
    finally:
        test_app.state.engine = real_engine

    assert response.status_code == 200
    assert response.json()["status"] == "unhealthy"
    assert response.json()["database"] == "disconnected"
