"""Tests for the JSON API."""

import asyncio
import json

import pytest
from fastapi.testclient import TestClient

from fitloop.db import UserProfileRepository
from fitloop.web import create_app


@pytest.fixture
def client(temp_db_path):
    with TestClient(create_app(temp_db_path)) as client:
        yield client


def _log(client, **overrides):
    body = {
        "user_id": "web-user",
        "exercise_name": "Dumbbell Bench Press",
        "weight": 30,
        "reps": 10,
        "sets": 3,
        "difficulty": "easy",
    }
    body.update(overrides)
    return client.post("/workouts", json=body)


def test_health(client):
    """Test the health endpoint."""
    response = client.get("/health")

    assert response.status_code == 200
    assert response.json()["status"] == "healthy"


class TestPrompts:
    """Tests for prompt routes."""

    def test_generate_with_inline_profile(self, client):
        """Test generation with a profile in the request."""
        response = client.post(
            "/prompts/generate",
            json={
                "user_id": "web-user",
                "language": "en",
                "profile": {"name": "Bo", "goals": "Fitness", "environment": "Gym"},
            },
        )

        assert response.status_code == 200
        data = response.json()
        assert data["session_number"] == 1
        assert "- Name: Bo" in data["prompt"]

    def test_generate_uses_stored_profile(self, client, temp_db_path, sample_user_profile):
        """Test that the latest stored profile is used by default."""
        asyncio.run(UserProfileRepository(temp_db_path).create(sample_user_profile))

        response = client.post("/prompts/generate", json={"user_id": "web-user"})

        assert response.status_code == 200
        assert "- Name: Test User" in response.json()["prompt"]

    def test_generate_without_profile(self, client):
        """Test the missing-profile error."""
        response = client.post("/prompts/generate", json={"user_id": "web-user"})

        assert response.status_code == 404
        assert "error" in response.json()

    def test_generate_invalid_profile(self, client):
        """Test that profile validation errors are reported."""
        response = client.post(
            "/prompts/generate",
            json={"profile": {"name": "", "goals": "g", "environment": "e"}},
        )

        assert response.status_code == 422

    def test_generate_then_extract(self, client):
        """Test the metadata round trip over HTTP."""
        _log(client)
        prompt = client.post(
            "/prompts/generate",
            json={
                "user_id": "web-user",
                "enrich": True,
                "profile": {"name": "Bo", "goals": "Fitness", "environment": "Gym"},
            },
        ).json()["prompt"]

        response = client.post("/prompts/extract", json={"text": prompt})

        assert response.status_code == 200
        data = response.json()
        assert data["sessionNumber"] == 1
        assert data["nextSession"] == 2
        assert data["exercises"][0]["targetWeight"] == 32
        assert data["exercises"][0]["lastPerformance"]["weight"] == 30

    def test_extract_without_metadata(self, client):
        """Test that plain text is rejected."""
        response = client.post("/prompts/extract", json={"text": "hello"})

        assert response.status_code == 404

    def test_extract_with_non_object_exercise(self, client):
        """Test that a mistyped exercise entry is a 404, not a server error."""
        payload = {
            "sessionNumber": 1,
            "sessionName": "Chest & Triceps",
            "date": "2024-06-15",
            "exercises": [None],
            "muscleBalance": {
                "pushUpperBody": "normal",
                "pullUpperBody": "normal",
                "lowerBodyFront": "normal",
                "lowerBodyBack": "normal",
                "core": "normal",
            },
            "recommendations": [],
            "nextSession": 2,
            "cycleProgress": "1/8",
        }
        text = f"<!-- METADATA_START -->\n{json.dumps(payload)}\n<!-- METADATA_END -->"

        response = client.post("/prompts/extract", json={"text": text})

        assert response.status_code == 404


class TestSession:
    """Tests for session routes."""

    def test_get_creates_context(self, client):
        """Test that an unknown user starts at cycle 1, session 1."""
        data = client.get("/session/new-user").json()

        assert data["cycle_number"] == 1
        assert data["session_number"] == 1
        assert data["session_title"] == "Chest & Triceps"
        assert len(data["exercises"]) == 3

    def test_advance_wraps(self, client):
        """Test that the eighth advance starts a new cycle."""
        for _ in range(7):
            client.post("/session/web-user/advance")

        data = client.post("/session/web-user/advance").json()

        assert data["cycle_number"] == 2
        assert data["session_number"] == 1
        assert data["new_cycle"] is True


class TestProgress:
    """Tests for workout and progress routes."""

    def test_add_workout(self, client):
        """Test appending a workout."""
        response = _log(client)

        assert response.status_code == 201
        assert response.json()["id"] is not None

    def test_add_workout_rejects_zero_sets(self, client):
        """Test request validation."""
        assert _log(client, sets=0).status_code == 422

    def test_exercise_progress(self, client):
        """Test the per-exercise route."""
        _log(client)

        data = client.get("/progress/web-user/exercises/dumbbell bench press").json()

        assert data["personal_record"]["weight"] == 30
        assert data["trend"] == "maintaining"

    def test_exercise_progress_unknown(self, client):
        """Test the empty per-exercise route."""
        response = client.get("/progress/web-user/exercises/Dumbbell Curl")

        assert response.status_code == 404

    def test_recommendation(self, client):
        """Test the recommendation route."""
        _log(client)

        data = client.get("/progress/web-user/recommendation/Dumbbell Bench Press").json()

        assert data["recommended_weight"] == 32
        assert data["alternatives"] == {"conservative": 29, "aggressive": 35}

    def test_insights(self, client):
        """Test the insights route."""
        _log(client)

        data = client.get("/progress/web-user/insights").json()

        assert data["consistency"]["streak"] == 1
        assert data["areas_for_improvement"] == ["Training frequency", "Muscle balance"]

    def test_insights_no_data(self, client):
        """Test insights for a user with no workouts."""
        data = client.get("/progress/nobody/insights").json()

        assert data["overall_progress"] == "needs_attention"
