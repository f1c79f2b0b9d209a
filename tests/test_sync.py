"""Tests for the delta sync API endpoints."""

from collections.abc import Callable

import pytest
from fastapi import status
from fastapi.testclient import TestClient
from sqlalchemy.orm import Session

from booksphere import models
from booksphere.infrastructure.identity.services.token_service import create_access_token

# --- Fixtures for common test data ---


@pytest.fixture
def offline_batch() -> list[dict[str, object]]:
    """Three offline events, one of them missing its timestamp."""
    return [
        {
            "id": "evt-1",
            "type": "progress",
            "timestamp": 1000,
            "bookId": 42,
            "presetId": 1,
            "data": {"chapter": 1, "pageFraction": 0.25},
        },
        {"id": "evt-2", "type": "progress", "bookId": 42},
        {
            "id": "evt-3",
            "type": "settings_change",
            "timestamp": 2000,
            "data": {"settingName": "theme", "oldValue": "light", "newValue": "dark"},
        },
    ]


class TestProcessSyncDelta:
    """Test suite for POST /sync/delta endpoint."""

    def test_batch_skips_invalid_entries(
        self,
        client: TestClient,
        auth_headers: dict[str, str],
        offline_batch: list[dict[str, object]],
    ) -> None:
        response = client.post(
            "/api/v1/sync/delta", json={"events": offline_batch}, headers=auth_headers
        )

        assert response.status_code == status.HTTP_200_OK
        data = response.json()
        assert data["processed"] == 2
        assert data["skipped"] == 1
        assert data["errors"] == ["event[1]: Missing required fields: timestamp"]
        assert data["serverTimestamp"] > 0

    def test_recognized_events_are_audited(
        self,
        client: TestClient,
        db_session: Session,
        auth_headers: dict[str, str],
        test_user: models.User,
        offline_batch: list[dict[str, object]],
    ) -> None:
        client.post("/api/v1/sync/delta", json={"events": offline_batch}, headers=auth_headers)

        actions = [
            row.action
            for row in db_session.query(models.AuditLog)
            .filter_by(user_id=test_user.id)
            .order_by(models.AuditLog.id)
        ]
        assert actions == ["READING_PROGRESS", "SETTINGS_CHANGE_SYNC", "SYNC_BATCH"]

    def test_missing_events_field(self, client: TestClient, auth_headers: dict[str, str]) -> None:
        response = client.post("/api/v1/sync/delta", json={}, headers=auth_headers)
        assert response.status_code == status.HTTP_422_UNPROCESSABLE_CONTENT


class TestGetSyncDelta:
    """Test suite for GET /sync/delta endpoint."""

    def test_delta_returns_events_after_watermark(
        self,
        client: TestClient,
        auth_headers: dict[str, str],
        offline_batch: list[dict[str, object]],
    ) -> None:
        client.post("/api/v1/sync/delta", json={"events": offline_batch}, headers=auth_headers)

        response = client.get(
            "/api/v1/sync/delta", params={"lastSyncTimestamp": 1000}, headers=auth_headers
        )

        assert response.status_code == status.HTTP_200_OK
        data = response.json()
        assert [event["id"] for event in data["events"]] == ["evt-3"]
        assert data["events"][0]["data"]["newValue"] == "dark"
        assert data["serverTimestamp"] > 0

    def test_delta_from_zero_keeps_arrival_order(
        self,
        client: TestClient,
        auth_headers: dict[str, str],
        offline_batch: list[dict[str, object]],
    ) -> None:
        client.post("/api/v1/sync/delta", json={"events": offline_batch}, headers=auth_headers)

        response = client.get("/api/v1/sync/delta", headers=auth_headers)

        events = response.json()["events"]
        assert [event["id"] for event in events] == ["evt-1", "evt-3"]
        assert events[0]["bookId"] == 42
        assert events[0]["presetId"] == 1

    def test_events_are_private_to_each_user(
        self,
        client: TestClient,
        auth_headers: dict[str, str],
        offline_batch: list[dict[str, object]],
        user_factory: Callable[..., models.User],
    ) -> None:
        other = user_factory("other")
        client.post("/api/v1/sync/delta", json={"events": offline_batch}, headers=auth_headers)

        response = client.get(
            "/api/v1/sync/delta",
            headers={"Authorization": f"Bearer {create_access_token(other.id)}"},
        )

        assert response.json()["events"] == []

    def test_negative_watermark_is_rejected(
        self, client: TestClient, auth_headers: dict[str, str]
    ) -> None:
        response = client.get(
            "/api/v1/sync/delta", params={"lastSyncTimestamp": -5}, headers=auth_headers
        )
        assert response.status_code == status.HTTP_422_UNPROCESSABLE_CONTENT


class TestSyncStatsAndClear:
    """Test suite for GET /sync/stats and DELETE /sync endpoints."""

    def test_stats(
        self,
        client: TestClient,
        auth_headers: dict[str, str],
        offline_batch: list[dict[str, object]],
    ) -> None:
        client.post("/api/v1/sync/delta", json={"events": offline_batch}, headers=auth_headers)

        response = client.get("/api/v1/sync/stats", headers=auth_headers)

        assert response.status_code == status.HTTP_200_OK
        assert response.json() == {"count": 2, "oldest": 1000, "newest": 2000}

    def test_empty_stats(self, client: TestClient, auth_headers: dict[str, str]) -> None:
        response = client.get("/api/v1/sync/stats", headers=auth_headers)
        assert response.json() == {"count": 0, "oldest": None, "newest": None}

    def test_clear(
        self,
        client: TestClient,
        auth_headers: dict[str, str],
        offline_batch: list[dict[str, object]],
    ) -> None:
        client.post("/api/v1/sync/delta", json={"events": offline_batch}, headers=auth_headers)

        response = client.delete("/api/v1/sync", headers=auth_headers)

        assert response.status_code == status.HTTP_200_OK
        assert response.json()["success"] is True
        stats = client.get("/api/v1/sync/stats", headers=auth_headers).json()
        assert stats["count"] == 0
