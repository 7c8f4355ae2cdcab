"""Pytest configuration and fixtures."""

import asyncio
import tempfile
from datetime import date, datetime, timedelta
from pathlib import Path

import pytest

from fitloop.db import init_db
from fitloop.models.session import create_initial_context
from fitloop.models.user_profile import ExperienceLevel, UserProfile
from fitloop.models.workout import Difficulty, WorkoutRecord

FIXED_NOW = datetime(2024, 6, 15, 9, 0)
FIXED_TODAY = date(2024, 6, 15)


@pytest.fixture
def temp_db_path():
    """Create a temporary database path."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir) / "test.db"


@pytest.fixture
def initialized_db(temp_db_path):
    """A temporary database with the schema applied."""
    asyncio.run(init_db(temp_db_path))
    return temp_db_path


@pytest.fixture
def sample_user_profile():
    """Create a sample user profile for testing."""
    return UserProfile(
        name="Test User",
        goals="Lose fat and look athletic",
        environment="Home gym with adjustable dumbbells",
        experience_level=ExperienceLevel.INTERMEDIATE,
        age=32,
        body_weight=78.5,
    )


@pytest.fixture
def sample_context():
    """A fresh session context for the test user."""
    return create_initial_context("user-1")


@pytest.fixture
def make_record():
    """Factory for workout records, dated relative to FIXED_NOW."""

    def _make(
        exercise_name="Dumbbell Bench Press",
        weight=30,
        reps=10,
        sets=3,
        difficulty=Difficulty.MODERATE,
        days_ago=0,
        user_id="user-1",
    ):
        return WorkoutRecord(
            exercise_name=exercise_name,
            weight=weight,
            reps=reps,
            sets=sets,
            difficulty=difficulty,
            timestamp=FIXED_NOW - timedelta(days=days_ago),
            user_id=user_id,
        )

    return _make


@pytest.fixture
def fixed_now():
    """Reference clock used by the analyzer and record factory."""
    return FIXED_NOW


@pytest.fixture
def fixed_today():
    """Reference date used by the prompt composer."""
    return FIXED_TODAY
