"""API tests for health and metrics endpoints."""

from __future__ import annotations

from fastapi.testclient import TestClient


def test_health(client: TestClient, project_version: str) -> None:
    response = client.get("/v1/health")

    assert response.status_code == 200
    assert response.json() == {"status": "healthy", "version": project_version}


def test_metrics_exposition(client: TestClient) -> None:
    client.post(
        "/v1/sessions/missing/votes",
        json={"voter_id": "v", "category": "President", "candidate_ids": ["x"]},
    )

    response = client.get("/metrics")

    assert response.status_code == 200
    assert response.headers["content-type"].startswith("text/plain")
    assert "votes_rejected_total" in response.text
    assert 'reason="session_not_found"' in response.text
