"""API tests for POST /v1/sessions/{session_id}/votes."""

from __future__ import annotations

from fastapi.testclient import TestClient

from campus_ballot.infrastructure.stubs import (
    VoteRecordRepositoryStub,
    VoterDirectoryStub,
)
from tests.helpers.factories import SESSION_ID, point_north_of_campus

INSIDE = point_north_of_campus(100.0)
URL = f"/v1/sessions/{SESSION_ID}/votes"


def _body(**overrides) -> dict:
    body = {
        "voter_id": "cs-200-a",
        "category": "President",
        "candidate_ids": ["pres-1"],
        "location": {"lat": INSIDE.lat, "lng": INSIDE.lng},
    }
    body.update(overrides)
    return body


class TestCastVote:
    def test_accepted(self, client: TestClient) -> None:
        response = client.post(URL, json=_body(request_id="req-1"))

        assert response.status_code == 200
        data = response.json()
        assert data["accepted"] is True
        assert data["reason"] is None
        assert data["replayed"] is False
        assert data["record_id"] is not None
        assert data["committed_at"].endswith("Z")
        assert abs(data["distance_meters"] - 100.0) < 1e-6

    def test_duplicate_is_200_with_reason(self, client: TestClient) -> None:
        client.post(URL, json=_body())

        response = client.post(URL, json=_body())

        assert response.status_code == 200
        assert response.json()["accepted"] is False
        assert response.json()["reason"] == "duplicate_vote"

    def test_replay(self, client: TestClient) -> None:
        first = client.post(URL, json=_body(request_id="req-1")).json()

        retry = client.post(URL, json=_body(request_id="req-1")).json()

        assert retry["accepted"] is True
        assert retry["replayed"] is True
        assert retry["record_id"] == first["record_id"]

    def test_location_required(self, client: TestClient) -> None:
        response = client.post(URL, json=_body(location=None))

        assert response.json()["reason"] == "location_required"

    def test_unknown_session(self, client: TestClient) -> None:
        response = client.post("/v1/sessions/missing/votes", json=_body())

        assert response.status_code == 200
        assert response.json()["reason"] == "session_not_found"

    def test_empty_candidate_list_is_422(self, client: TestClient) -> None:
        response = client.post(URL, json=_body(candidate_ids=[]))

        assert response.status_code == 422

    def test_store_outage_is_503(
        self, client: TestClient, vote_records: VoteRecordRepositoryStub
    ) -> None:
        vote_records.fail_next_commit()

        response = client.post(URL, json=_body())

        assert response.status_code == 503
        assert response.headers["Retry-After"] == "5"
        detail = response.json()["detail"]
        assert detail["type"] == "urn:campus-ballot:vote-store:unavailable"
        assert detail["instance"].endswith(URL)

    def test_identity_outage_is_503(
        self, client: TestClient, voter_directory: VoterDirectoryStub
    ) -> None:
        voter_directory.set_unavailable()

        response = client.post(URL, json=_body())

        assert response.status_code == 503
        assert response.json()["detail"]["title"] == "Identity Service Unavailable"

    def test_correlation_id_is_echoed(self, client: TestClient) -> None:
        response = client.post(
            URL, json=_body(), headers={"X-Correlation-ID": "corr-42"}
        )

        assert response.headers["X-Correlation-ID"] == "corr-42"
