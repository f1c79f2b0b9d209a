"""Tests for the preset and mood resolution API endpoints."""

from typing import NamedTuple

import pytest
from fastapi import status
from fastapi.testclient import TestClient
from sqlalchemy.orm import Session

from booksphere import models
from booksphere.infrastructure.files.signed_url_service import SignedUrlService
from tests.conftest import MoodLibrary


class SeededPreset(NamedTuple):
    preset: models.Preset
    calm: models.MoodReference
    tense: models.MoodReference


@pytest.fixture
def p1(moods: MoodLibrary, test_user: models.User) -> SeededPreset:
    """Preset P1 for book 42: calm from (1, 0.0), tense from (2, 0.5)."""
    calm = moods.mood("calm", tempo_electronic=100, tempo_classical=70, tempo_lofi=75)
    tense = moods.mood("tense", tempo_electronic=140, tempo_classical=110, tempo_lofi=95)
    preset = moods.preset(test_user, book_id=42, name="P1", is_default=True)
    background = moods.background(tense, "backgrounds/storm.jpg")
    moods.map_entry(preset, 1, 0.0, calm)
    moods.map_entry(preset, 2, 0.5, tense, background=background, transition_type="crossfade")
    return SeededPreset(preset=preset, calm=calm, tense=tense)


class TestResolvePresetMood:
    """Test suite for GET /presets/{id}/mood endpoint."""

    @pytest.mark.parametrize(
        ("chapter", "page_fraction", "expected"),
        [(2, 0.3, "calm"), (2, 0.7, "tense"), (1, 0.0, "calm"), (9, 0.0, "tense")],
    )
    def test_latest_preceding_breakpoint(
        self,
        client: TestClient,
        auth_headers: dict[str, str],
        p1: SeededPreset,
        chapter: int,
        page_fraction: float,
        expected: str,
    ) -> None:
        response = client.get(
            f"/api/v1/presets/{p1.preset.id}/mood",
            params={"chapter": chapter, "pageFraction": page_fraction},
            headers=auth_headers,
        )

        assert response.status_code == status.HTTP_200_OK
        assert response.json()["trigger"]["moodName"] == expected

    def test_before_first_breakpoint_has_no_trigger(
        self, client: TestClient, auth_headers: dict[str, str], p1: SeededPreset
    ) -> None:
        response = client.get(
            f"/api/v1/presets/{p1.preset.id}/mood",
            params={"chapter": 0, "pageFraction": 0.9},
            headers=auth_headers,
        )

        assert response.status_code == status.HTTP_200_OK
        assert response.json()["trigger"] is None

    def test_tempo_uses_stored_sensitivity(
        self,
        client: TestClient,
        db_session: Session,
        auth_headers: dict[str, str],
        test_user: models.User,
        p1: SeededPreset,
    ) -> None:
        test_user.mood_sensitivity = 1.5
        db_session.commit()

        response = client.get(
            f"/api/v1/presets/{p1.preset.id}/mood",
            params={"chapter": 2, "pageFraction": 0.7, "genre": "electronic"},
            headers=auth_headers,
        )

        data = response.json()
        assert data["sensitivity"] == 1.5
        assert data["trigger"]["baseTempo"] == 140
        assert data["trigger"]["tempo"] == 210
        assert data["trigger"]["transitionType"] == "crossfade"

    def test_genre_selects_base_tempo(
        self, client: TestClient, auth_headers: dict[str, str], p1: SeededPreset
    ) -> None:
        response = client.get(
            f"/api/v1/presets/{p1.preset.id}/mood",
            params={"chapter": 2, "pageFraction": 0.7, "genre": "lo-fi"},
            headers=auth_headers,
        )

        data = response.json()
        assert data["genre"] == "lo-fi"
        assert data["trigger"]["tempo"] == 95

    def test_background_url_is_signed(
        self,
        client: TestClient,
        auth_headers: dict[str, str],
        test_user: models.User,
        p1: SeededPreset,
    ) -> None:
        response = client.get(
            f"/api/v1/presets/{p1.preset.id}/mood",
            params={"chapter": 3, "pageFraction": 0.0},
            headers=auth_headers,
        )

        url = response.json()["trigger"]["backgroundImageUrl"]
        payload = SignedUrlService().verify(url)
        assert payload.filepath == "backgrounds/storm.jpg"
        assert payload.user_id == test_user.id

    def test_entry_without_mood_has_no_trigger(
        self,
        client: TestClient,
        auth_headers: dict[str, str],
        moods: MoodLibrary,
        p1: SeededPreset,
    ) -> None:
        moods.map_entry(p1.preset, 4, 0.0, None)

        response = client.get(
            f"/api/v1/presets/{p1.preset.id}/mood",
            params={"chapter": 4, "pageFraction": 0.5},
            headers=auth_headers,
        )

        assert response.json()["trigger"] is None

    def test_unknown_preset_has_no_trigger(
        self, client: TestClient, auth_headers: dict[str, str]
    ) -> None:
        response = client.get(
            "/api/v1/presets/999/mood",
            params={"chapter": 1, "pageFraction": 0.0},
            headers=auth_headers,
        )

        assert response.status_code == status.HTTP_200_OK
        assert response.json()["trigger"] is None


class TestPresetTriggers:
    """Test suite for trigger rule endpoints."""

    def test_rules_are_ordered_and_filtered(
        self,
        client: TestClient,
        auth_headers: dict[str, str],
        moods: MoodLibrary,
        p1: SeededPreset,
    ) -> None:
        low = moods.trigger(p1.preset, p1.calm, page_range=[1, 100], priority=5)
        high = moods.trigger(p1.preset, p1.tense, page_range=[10, 20], priority=2)
        moods.trigger(p1.preset, p1.tense, priority=1, is_active=False)

        response = client.get(f"/api/v1/presets/{p1.preset.id}/triggers", headers=auth_headers)

        assert response.status_code == status.HTTP_200_OK
        data = response.json()
        assert [rule["id"] for rule in data] == [high.id, low.id]
        assert data[0]["moodName"] == "tense"
        assert data[0]["triggerCondition"] == {"page_range": [10, 20]}
        assert data[0]["transitionDuration"] == 3000

    def test_unknown_preset_has_no_rules(
        self, client: TestClient, auth_headers: dict[str, str]
    ) -> None:
        response = client.get("/api/v1/presets/999/triggers", headers=auth_headers)
        assert response.status_code == status.HTTP_200_OK
        assert response.json() == []

    def test_rule_for_position(
        self,
        client: TestClient,
        auth_headers: dict[str, str],
        moods: MoodLibrary,
        p1: SeededPreset,
    ) -> None:
        moods.trigger(p1.preset, p1.calm, page_range=[1, 100], priority=5)
        high = moods.trigger(p1.preset, p1.tense, page_range=[10, 20], priority=2)

        response = client.get(
            f"/api/v1/presets/{p1.preset.id}/triggers/position/15", headers=auth_headers
        )

        assert response.status_code == status.HTTP_200_OK
        data = response.json()
        assert data["page"] == 15
        assert data["rule"]["id"] == high.id

    def test_rule_for_position_without_page_rules(
        self,
        client: TestClient,
        auth_headers: dict[str, str],
        moods: MoodLibrary,
        p1: SeededPreset,
    ) -> None:
        moods.trigger(p1.preset, p1.calm)

        response = client.get(
            f"/api/v1/presets/{p1.preset.id}/triggers/position/15", headers=auth_headers
        )

        assert response.json()["rule"] is None


class TestDefaultPreset:
    """Test suite for GET /books/{id}/presets/default endpoint."""

    def test_default_preset(
        self, client: TestClient, auth_headers: dict[str, str], p1: SeededPreset
    ) -> None:
        response = client.get("/api/v1/books/42/presets/default", headers=auth_headers)

        assert response.status_code == status.HTTP_200_OK
        data = response.json()
        assert data["id"] == p1.preset.id
        assert data["isDefault"] is True
        assert data["bookId"] == 42

    def test_book_without_default(
        self, client: TestClient, auth_headers: dict[str, str], p1: SeededPreset
    ) -> None:
        response = client.get("/api/v1/books/7/presets/default", headers=auth_headers)

        assert response.status_code == status.HTTP_404_NOT_FOUND
        assert response.json()["detail"] == "No default preset for book 7"
